"""Versioned (user-facing) schema of the extensions/v1beta1 kinds.

Every field a user may omit is Optional, with None meaning "not written".
Defaults are applied by ``apischeme.extensions.v1beta1.defaults``; the
codec never fills anything in.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from apischeme.core.schema.intstr import IntOrString
from apischeme.core.schema.meta import ObjectMeta
from apischeme.pod.types import PodTemplateSpec


@dataclass
class LabelSelectorRequirement:
    """Set-based selector requirement.

    Attributes:
        key: Label key the requirement applies to
        operator: One of In, NotIn, Exists, DoesNotExist
        values: Values for In/NotIn
    """
    key: str = ""
    operator: str = ""
    values: Optional[List[str]] = None


@dataclass
class LabelSelector:
    """Selects the objects a controller manages.

    Attributes:
        match_labels: Label equality constraints, all of which must hold
        match_expressions: Set-based requirements, all of which must hold
    """
    match_labels: Optional[Dict[str, str]] = None
    match_expressions: Optional[List[LabelSelectorRequirement]] = None


@dataclass
class RollingUpdateDaemonSet:
    max_unavailable: Optional[IntOrString] = None


@dataclass
class DaemonSetUpdateStrategy:
    type: Optional[str] = None
    rolling_update: Optional[RollingUpdateDaemonSet] = None


@dataclass
class DaemonSetSpec:
    selector: Optional[LabelSelector] = None
    template: Optional[PodTemplateSpec] = None
    update_strategy: DaemonSetUpdateStrategy = field(default_factory=DaemonSetUpdateStrategy)
    unique_label_key: Optional[str] = None


@dataclass
class DaemonSet:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: DaemonSetSpec = field(default_factory=DaemonSetSpec)


@dataclass
class RollingUpdateDeployment:
    """Parameters of a rolling update.

    Attributes:
        max_unavailable: Pods that may be unavailable during the update
        max_surge: Pods that may be created above the desired count
    """
    max_unavailable: Optional[IntOrString] = None
    max_surge: Optional[IntOrString] = None


@dataclass
class DeploymentStrategy:
    type: Optional[str] = None
    rolling_update: Optional[RollingUpdateDeployment] = None


@dataclass
class DeploymentSpec:
    replicas: Optional[int] = None
    selector: Optional[LabelSelector] = None
    template: PodTemplateSpec = field(default_factory=PodTemplateSpec)
    strategy: DeploymentStrategy = field(default_factory=DeploymentStrategy)
    min_ready_seconds: Optional[int] = None
    unique_label_key: Optional[str] = None


@dataclass
class Deployment:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: DeploymentSpec = field(default_factory=DeploymentSpec)


@dataclass
class JobSpec:
    parallelism: Optional[int] = None
    completions: Optional[int] = None
    active_deadline_seconds: Optional[int] = None
    selector: Optional[LabelSelector] = None
    template: PodTemplateSpec = field(default_factory=PodTemplateSpec)


@dataclass
class Job:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: JobSpec = field(default_factory=JobSpec)


@dataclass
class ReplicaSetSpec:
    replicas: Optional[int] = None
    selector: Optional[LabelSelector] = None
    template: Optional[PodTemplateSpec] = None


@dataclass
class ReplicaSet:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: ReplicaSetSpec = field(default_factory=ReplicaSetSpec)


@dataclass
class SubresourceReference:
    kind: str = ""
    name: str = ""
    api_version: str = ""
    subresource: str = ""


@dataclass
class CPUTargetUtilization:
    target_percentage: int = 0


@dataclass
class HorizontalPodAutoscalerSpec:
    scale_ref: SubresourceReference = field(default_factory=SubresourceReference)
    min_replicas: Optional[int] = None
    max_replicas: int = 0
    cpu_utilization: Optional[CPUTargetUtilization] = None


@dataclass
class HorizontalPodAutoscaler:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: HorizontalPodAutoscalerSpec = field(default_factory=HorizontalPodAutoscalerSpec)
