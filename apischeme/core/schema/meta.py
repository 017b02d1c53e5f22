"""Object metadata common to every kind."""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass
class ObjectMeta:
    """Identity envelope carried by every resource.

    Only ``labels`` takes part in defaulting; the other fields are passed
    through untouched. ``None`` means "not set", which is distinct from an
    empty mapping on the wire.

    Attributes:
        name: Object name
        namespace: Namespace the object lives in
        labels: Label key to value mapping
        annotations: Annotation key to value mapping
    """
    name: Optional[str] = None
    namespace: Optional[str] = None
    labels: Optional[Dict[str, str]] = None
    annotations: Optional[Dict[str, str]] = None
