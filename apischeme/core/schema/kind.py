"""Kind identifiers."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GroupVersionKind:
    """Identifies a resource kind within a versioned API group.

    Example:
        GroupVersionKind("extensions", "v1beta1", "Deployment") is written on
        the wire as ``apiVersion: extensions/v1beta1`` and ``kind: Deployment``.

    Attributes:
        group: API group name, empty for the core group
        version: Version within the group (e.g., "v1beta1")
        kind: Resource kind name (e.g., "Deployment")
    """
    group: str
    version: str
    kind: str

    @property
    def api_version(self) -> str:
        """``group/version``, or just ``version`` for the core group."""
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"

    @classmethod
    def from_api_version(cls, api_version: str, kind: str) -> "GroupVersionKind":
        """Build a GroupVersionKind from wire ``apiVersion`` and ``kind`` values.

        Raises:
            ValueError: If apiVersion has more than one ``/`` or an empty part
        """
        parts = api_version.split("/")
        if len(parts) == 1:
            group, version = "", parts[0]
        elif len(parts) == 2:
            group, version = parts
        else:
            raise ValueError(f"unexpected apiVersion {api_version!r}")
        if not version or (len(parts) == 2 and not group):
            raise ValueError(f"unexpected apiVersion {api_version!r}")
        if not kind:
            raise ValueError("kind must not be empty")
        return cls(group=group, version=version, kind=kind)

    def __str__(self) -> str:
        return f"{self.api_version}, Kind={self.kind}"
