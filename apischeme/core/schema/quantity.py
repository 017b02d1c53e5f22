"""Resource quantities."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Quantity:
    """A resource amount in its canonical string form ("100m", "1Gi").

    The value is carried verbatim; no arithmetic or validation is done.

    Attributes:
        value: Quantity string
    """
    value: str = "0"

    @classmethod
    def zero(cls) -> "Quantity":
        return cls()

    @classmethod
    def from_wire(cls, raw: Any) -> "Quantity":
        """Build from a decoded wire scalar; bare numbers are accepted.

        Raises:
            ValueError: If raw is not a string or a number
        """
        if isinstance(raw, bool) or not isinstance(raw, (str, int, float)):
            raise ValueError(f"expected quantity string, got {raw!r}")
        return cls(value=str(raw))

    def to_wire(self) -> str:
        return self.value

    def is_zero(self) -> bool:
        return self.value.strip() in ("0", "0m", "")

    def __str__(self) -> str:
        return self.value


ResourceList = Dict[str, Quantity]
"""Mapping from resource name ("cpu", "memory") to quantity."""
