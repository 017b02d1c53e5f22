"""Defaults for embedded pod templates.

This is the pod-level defaulter the workload kinds delegate to. It fills in
scheduling-neutral fields only; container resources are left exactly as
written, in particular requests are never copied from limits.
"""

import copy

from apischeme.pod.types import Container, PodSecurityContext, PodTemplateSpec

DNS_CLUSTER_FIRST = "ClusterFirst"
RESTART_POLICY_ALWAYS = "Always"
DEFAULT_TERMINATION_GRACE_PERIOD_SECONDS = 30
DEFAULT_TERMINATION_MESSAGE_PATH = "/dev/termination-log"

PULL_ALWAYS = "Always"
PULL_IF_NOT_PRESENT = "IfNotPresent"


def default_pod_template(template: PodTemplateSpec) -> PodTemplateSpec:
    """Return a defaulted copy of a pod template.

    Args:
        template: Pod template as written by the user

    Returns:
        New PodTemplateSpec with DNS policy, restart policy, security
        context, grace period and per-container defaults filled in
    """
    result = copy.deepcopy(template)
    spec = result.spec

    if not spec.dns_policy:
        spec.dns_policy = DNS_CLUSTER_FIRST
    if not spec.restart_policy:
        spec.restart_policy = RESTART_POLICY_ALWAYS
    if spec.security_context is None:
        spec.security_context = PodSecurityContext()
    if spec.termination_grace_period_seconds is None:
        spec.termination_grace_period_seconds = DEFAULT_TERMINATION_GRACE_PERIOD_SECONDS

    for container in spec.containers:
        _default_container(container)
    return result


def _default_container(container: Container) -> None:
    if not container.termination_message_path:
        container.termination_message_path = DEFAULT_TERMINATION_MESSAGE_PATH
    if not container.image_pull_policy:
        container.image_pull_policy = _pull_policy_for(container.image or "")


def _pull_policy_for(image: str) -> str:
    # Digest references are immutable.
    if "@" in image:
        return PULL_IF_NOT_PRESENT
    name = image.rsplit("/", 1)[-1]
    if ":" not in name or name.endswith(":latest"):
        return PULL_ALWAYS
    return PULL_IF_NOT_PRESENT
