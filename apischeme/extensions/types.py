"""Internal representations of the extensions kinds.

These are the resolved forms controllers consume: scalars that every
defaulted object carries hold a concrete value. Maps, lists, selectors,
templates and the rolling update parameters keep their optionality because
"absent" carries meaning there.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from apischeme.core.schema.intstr import IntOrString
from apischeme.core.schema.meta import ObjectMeta
from apischeme.pod.types import PodTemplateSpec


@dataclass
class LabelSelectorRequirement:
    key: str = ""
    operator: str = ""
    values: Optional[List[str]] = None


@dataclass
class LabelSelector:
    """Conjunction of label equality constraints and set-based requirements."""
    match_labels: Optional[Dict[str, str]] = None
    match_expressions: Optional[List[LabelSelectorRequirement]] = None


@dataclass
class RollingUpdateDaemonSet:
    max_unavailable: Optional[IntOrString] = None


@dataclass
class DaemonSetUpdateStrategy:
    type: str = ""
    rolling_update: Optional[RollingUpdateDaemonSet] = None


@dataclass
class DaemonSetSpec:
    selector: Optional[LabelSelector] = None
    template: Optional[PodTemplateSpec] = None
    update_strategy: DaemonSetUpdateStrategy = field(default_factory=DaemonSetUpdateStrategy)
    unique_label_key: str = ""


@dataclass
class DaemonSet:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: DaemonSetSpec = field(default_factory=DaemonSetSpec)


@dataclass
class RollingUpdateDeployment:
    """Rolling update parameters.

    Only filled in when the strategy is RollingUpdate, so a rollingUpdate
    block carried by another strategy keeps its unset fields unset.
    """
    max_unavailable: Optional[IntOrString] = None
    max_surge: Optional[IntOrString] = None


@dataclass
class DeploymentStrategy:
    type: str = ""
    rolling_update: Optional[RollingUpdateDeployment] = None


@dataclass
class DeploymentSpec:
    replicas: int = 0
    selector: Optional[LabelSelector] = None
    template: PodTemplateSpec = field(default_factory=PodTemplateSpec)
    strategy: DeploymentStrategy = field(default_factory=DeploymentStrategy)
    min_ready_seconds: Optional[int] = None
    unique_label_key: str = ""


@dataclass
class Deployment:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: DeploymentSpec = field(default_factory=DeploymentSpec)


@dataclass
class JobSpec:
    parallelism: int = 0
    completions: int = 0
    active_deadline_seconds: Optional[int] = None
    selector: Optional[LabelSelector] = None
    template: PodTemplateSpec = field(default_factory=PodTemplateSpec)


@dataclass
class Job:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: JobSpec = field(default_factory=JobSpec)


@dataclass
class ReplicaSetSpec:
    replicas: int = 0
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
class HorizontalPodAutoscalerSpec:
    """Autoscaler target and bounds.

    Attributes:
        scale_ref: The scale subresource the autoscaler drives
        min_replicas: Lower replica bound
        max_replicas: Upper replica bound
        target_cpu_utilization_percentage: Average CPU utilization to aim
            for, as a percentage of requested CPU
    """
    scale_ref: SubresourceReference = field(default_factory=SubresourceReference)
    min_replicas: int = 0
    max_replicas: int = 0
    target_cpu_utilization_percentage: int = 0


@dataclass
class HorizontalPodAutoscaler:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: HorizontalPodAutoscalerSpec = field(default_factory=HorizontalPodAutoscalerSpec)
