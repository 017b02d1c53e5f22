"""Registration of the extensions kinds into a Scheme."""

import logging

from apischeme.core.scheme import Scheme
from apischeme.extensions import types as internal
from apischeme.extensions.v1beta1 import kind
from apischeme.extensions.v1beta1 import types as v1beta1
from apischeme.extensions.v1beta1.conversion import build_conversion_table, converter_for
from apischeme.extensions.v1beta1.defaults import (
    set_defaults_daemon_set,
    set_defaults_deployment,
    set_defaults_horizontal_pod_autoscaler,
    set_defaults_job,
    set_defaults_replica_set,
)

logger = logging.getLogger(__name__)

POD_TEMPLATE_PATH = "spec.template"


def add_to_scheme(scheme: Scheme) -> None:
    """Register every extensions/v1beta1 kind.

    Must run during the scheme's write phase, before ``scheme.seal()``.

    Args:
        scheme: Scheme to populate

    Raises:
        DuplicateKindError: If any of the kinds is already registered
        ConversionError: If the conversion rules are incomplete
    """
    table = build_conversion_table()

    workloads = [
        ("DaemonSet", v1beta1.DaemonSet, internal.DaemonSet, set_defaults_daemon_set),
        ("Deployment", v1beta1.Deployment, internal.Deployment, set_defaults_deployment),
        ("Job", v1beta1.Job, internal.Job, set_defaults_job),
        ("ReplicaSet", v1beta1.ReplicaSet, internal.ReplicaSet, set_defaults_replica_set),
    ]
    for name, versioned_type, internal_type, default_fn in workloads:
        scheme.register(
            kind(name),
            versioned_type,
            internal_type,
            default_fn,
            converter_for(table, versioned_type),
            embedded_templates=(POD_TEMPLATE_PATH,),
        )

    scheme.register(
        kind("HorizontalPodAutoscaler"),
        v1beta1.HorizontalPodAutoscaler,
        internal.HorizontalPodAutoscaler,
        set_defaults_horizontal_pod_autoscaler,
        converter_for(table, v1beta1.HorizontalPodAutoscaler),
    )
    logger.debug(f"Installed extensions/v1beta1 into scheme {scheme.name!r}")
