"""Conversion rules between extensions/v1beta1 and the internal types.

Most fields share a name and shape on both sides and need no rule. The
rules below cover fields that are optional in v1beta1 but resolved
internally (None becomes the zero value) and the autoscaler CPU target,
which is a nested struct in v1beta1 and a plain percentage internally.
"""

from typing import Any, Optional

from apischeme.core.conversion import ConversionTable, FieldRule, TableConverter
from apischeme.core.errors import ConversionError
from apischeme.core.schema.intstr import IntOrString
from apischeme.core.schema.meta import ObjectMeta
from apischeme.extensions import types as internal
from apischeme.extensions.v1beta1 import types as v1beta1
from apischeme.pod.types import PodTemplateSpec


def _int_or_zero(value: Optional[int]) -> int:
    return 0 if value is None else value


def _str_or_empty(value: Optional[str]) -> str:
    return "" if value is None else value


def _cpu_utilization_to_percentage(value: Optional[v1beta1.CPUTargetUtilization]) -> int:
    return 0 if value is None else value.target_percentage


def _percentage_to_cpu_utilization(value: int) -> v1beta1.CPUTargetUtilization:
    return v1beta1.CPUTargetUtilization(target_percentage=value)


RESOLVED_INT = FieldRule(to_internal=_int_or_zero)
RESOLVED_STR = FieldRule(to_internal=_str_or_empty)


def build_conversion_table() -> ConversionTable:
    """Declare every v1beta1/internal struct pair of the group."""
    table = ConversionTable()
    table.add_shared(ObjectMeta, PodTemplateSpec, IntOrString)

    table.add_pair(v1beta1.LabelSelectorRequirement, internal.LabelSelectorRequirement)
    table.add_pair(v1beta1.LabelSelector, internal.LabelSelector)

    table.add_pair(v1beta1.RollingUpdateDaemonSet, internal.RollingUpdateDaemonSet)
    table.add_pair(v1beta1.DaemonSetUpdateStrategy, internal.DaemonSetUpdateStrategy, {
        "type": RESOLVED_STR,
    })
    table.add_pair(v1beta1.DaemonSetSpec, internal.DaemonSetSpec, {
        "unique_label_key": RESOLVED_STR,
    })
    table.add_pair(v1beta1.DaemonSet, internal.DaemonSet)

    table.add_pair(v1beta1.RollingUpdateDeployment, internal.RollingUpdateDeployment)
    table.add_pair(v1beta1.DeploymentStrategy, internal.DeploymentStrategy, {
        "type": RESOLVED_STR,
    })
    table.add_pair(v1beta1.DeploymentSpec, internal.DeploymentSpec, {
        "replicas": RESOLVED_INT,
        "unique_label_key": RESOLVED_STR,
    })
    table.add_pair(v1beta1.Deployment, internal.Deployment)

    table.add_pair(v1beta1.JobSpec, internal.JobSpec, {
        "parallelism": RESOLVED_INT,
        "completions": RESOLVED_INT,
    })
    table.add_pair(v1beta1.Job, internal.Job)

    table.add_pair(v1beta1.ReplicaSetSpec, internal.ReplicaSetSpec, {
        "replicas": RESOLVED_INT,
    })
    table.add_pair(v1beta1.ReplicaSet, internal.ReplicaSet)

    table.add_pair(v1beta1.SubresourceReference, internal.SubresourceReference)
    table.add_pair(v1beta1.HorizontalPodAutoscalerSpec, internal.HorizontalPodAutoscalerSpec, {
        "min_replicas": RESOLVED_INT,
        "target_cpu_utilization_percentage": FieldRule(
            external="cpu_utilization",
            to_internal=_cpu_utilization_to_percentage,
            to_external=_percentage_to_cpu_utilization,
        ),
    })
    table.add_pair(v1beta1.HorizontalPodAutoscaler, internal.HorizontalPodAutoscaler)
    return table


def converter_for(table: ConversionTable, external: Any) -> TableConverter:
    """Kind converter for a top-level v1beta1 type.

    Raises:
        ConversionError: If the type has no internal counterpart in the table
    """
    internal_type = table.internal_type_for(external)
    if internal_type is None:
        raise ConversionError(
            f"{external.__name__} has no internal counterpart", missing=[external.__name__]
        )
    return TableConverter(table, external, internal_type)
