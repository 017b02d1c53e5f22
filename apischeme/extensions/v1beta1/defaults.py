"""Defaulting functions for the extensions/v1beta1 kinds.

Each function mutates a versioned object in place and is idempotent: running
it on its own output changes nothing. A field the user wrote, including a
zero or an empty struct, is never overwritten.

Selector and metadata-label defaulting are two separate checks. Each one
looks only at its own field, so a user-written selector never influences
the object's labels and vice versa. Both are copies of the template labels,
never the same dict object.
"""

from apischeme.core.schema.intstr import IntOrString
from apischeme.extensions.constants import (
    DEFAULT_CPU_UTILIZATION_PERCENTAGE,
    DEFAULT_DAEMON_SET_UNIQUE_LABEL_KEY,
    DEFAULT_DEPLOYMENT_UNIQUE_LABEL_KEY,
    ROLLING_UPDATE_DAEMON_SET_STRATEGY,
    ROLLING_UPDATE_DEPLOYMENT_STRATEGY,
)
from apischeme.extensions.utils import get_template_labels
from apischeme.extensions.v1beta1.types import (
    CPUTargetUtilization,
    DaemonSet,
    Deployment,
    HorizontalPodAutoscaler,
    Job,
    LabelSelector,
    ReplicaSet,
    RollingUpdateDaemonSet,
    RollingUpdateDeployment,
)


def _default_labels_and_selector(obj) -> None:
    """Derive selector and metadata labels from the pod template labels.

    Nothing is derived when the template has no labels.
    """
    labels = get_template_labels(obj.spec.template)
    if labels is None:
        return
    if obj.spec.selector is None:
        obj.spec.selector = LabelSelector(match_labels=dict(labels))
    if not obj.metadata.labels:
        obj.metadata.labels = dict(labels)


def set_defaults_daemon_set(obj: DaemonSet) -> None:
    """Default a DaemonSet.

    - selector and metadata labels from the template labels
    - update strategy type RollingUpdate, maxUnavailable 1
    - the daemon set unique label key
    """
    _default_labels_and_selector(obj)

    strategy = obj.spec.update_strategy
    if not strategy.type:
        strategy.type = ROLLING_UPDATE_DAEMON_SET_STRATEGY
    if strategy.type == ROLLING_UPDATE_DAEMON_SET_STRATEGY:
        if strategy.rolling_update is None:
            strategy.rolling_update = RollingUpdateDaemonSet()
        if strategy.rolling_update.max_unavailable is None:
            strategy.rolling_update.max_unavailable = IntOrString.from_int(1)

    if obj.spec.unique_label_key is None:
        obj.spec.unique_label_key = DEFAULT_DAEMON_SET_UNIQUE_LABEL_KEY


def set_defaults_deployment(obj: Deployment) -> None:
    """Default a Deployment.

    The rolling update parameters are only touched when the strategy is
    (or has just been defaulted to) RollingUpdate; a Recreate deployment
    never gets a rollingUpdate block.
    """
    _default_labels_and_selector(obj)

    spec = obj.spec
    if spec.replicas is None:
        spec.replicas = 1

    strategy = spec.strategy
    if not strategy.type:
        strategy.type = ROLLING_UPDATE_DEPLOYMENT_STRATEGY
    if strategy.type == ROLLING_UPDATE_DEPLOYMENT_STRATEGY:
        if strategy.rolling_update is None:
            strategy.rolling_update = RollingUpdateDeployment()
        if strategy.rolling_update.max_unavailable is None:
            strategy.rolling_update.max_unavailable = IntOrString.from_int(1)
        if strategy.rolling_update.max_surge is None:
            strategy.rolling_update.max_surge = IntOrString.from_int(1)

    if spec.unique_label_key is None:
        spec.unique_label_key = DEFAULT_DEPLOYMENT_UNIQUE_LABEL_KEY


def set_defaults_job(obj: Job) -> None:
    """Default a Job.

    completions and parallelism default to 1 independently of each other.
    """
    _default_labels_and_selector(obj)

    if obj.spec.completions is None:
        obj.spec.completions = 1
    if obj.spec.parallelism is None:
        obj.spec.parallelism = 1


def set_defaults_replica_set(obj: ReplicaSet) -> None:
    """Default a ReplicaSet.

    Container resource requests are left alone: a request is never
    populated from the matching limit.
    """
    _default_labels_and_selector(obj)

    if obj.spec.replicas is None:
        obj.spec.replicas = 1


def set_defaults_horizontal_pod_autoscaler(obj: HorizontalPodAutoscaler) -> None:
    if obj.spec.min_replicas is None:
        obj.spec.min_replicas = 1
    if obj.spec.cpu_utilization is None:
        obj.spec.cpu_utilization = CPUTargetUtilization(
            target_percentage=DEFAULT_CPU_UTILIZATION_PERCENTAGE
        )
