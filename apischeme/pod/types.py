"""Pod template dataclasses."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from apischeme.core.schema.meta import ObjectMeta
from apischeme.core.schema.quantity import Quantity, ResourceList


@dataclass
class ResourceRequirements:
    """Compute resources of a container.

    Requests are never derived from limits. Querying a resource with no
    request entry reports the zero quantity.

    Attributes:
        limits: Maximum amount of each resource
        requests: Minimum amount of each resource
    """
    limits: Optional[ResourceList] = None
    requests: Optional[ResourceList] = None

    def request(self, name: str) -> Quantity:
        return (self.requests or {}).get(name, Quantity.zero())

    def limit(self, name: str) -> Quantity:
        return (self.limits or {}).get(name, Quantity.zero())


@dataclass
class Container:
    name: Optional[str] = None
    image: Optional[str] = None
    command: Optional[List[str]] = None
    args: Optional[List[str]] = None
    image_pull_policy: Optional[str] = None
    termination_message_path: Optional[str] = None
    resources: ResourceRequirements = field(default_factory=ResourceRequirements)


@dataclass
class PodSecurityContext:
    run_as_user: Optional[int] = None
    run_as_non_root: Optional[bool] = None
    fs_group: Optional[int] = None


@dataclass
class PodSpec:
    containers: List[Container] = field(default_factory=list)
    restart_policy: Optional[str] = None
    dns_policy: Optional[str] = None
    node_selector: Optional[Dict[str, str]] = None
    security_context: Optional[PodSecurityContext] = None
    termination_grace_period_seconds: Optional[int] = None


@dataclass
class PodTemplateSpec:
    """Template from which a controller creates pods.

    Attributes:
        metadata: Metadata given to every pod (its labels drive selectors)
        spec: Pod specification
    """
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: PodSpec = field(default_factory=PodSpec)

    @property
    def labels(self) -> Optional[Dict[str, str]]:
        return self.metadata.labels
