"""Pod template types and the pod-template defaulter.

Pod templates are embedded in workload kinds and owned by the core API
group. apischeme treats them as opaque: the same classes serve both
representations and are deep-copied on conversion.
"""

from apischeme.pod.defaults import default_pod_template
from apischeme.pod.types import (
    Container,
    PodSecurityContext,
    PodSpec,
    PodTemplateSpec,
    ResourceRequirements,
)

__all__ = [
    "default_pod_template",
    "Container",
    "PodSecurityContext",
    "PodSpec",
    "PodTemplateSpec",
    "ResourceRequirements",
]
