"""Version v1beta1 of the extensions API group."""

from apischeme.core.schema.kind import GroupVersionKind
from apischeme.extensions.constants import GROUP_NAME

VERSION = "v1beta1"


def kind(name: str) -> GroupVersionKind:
    """GroupVersionKind of a v1beta1 kind, e.g. ``kind("Deployment")``."""
    return GroupVersionKind(group=GROUP_NAME, version=VERSION, kind=name)
