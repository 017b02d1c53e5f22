"""Integer-or-percentage values."""

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class IntOrString:
    """A value that is either an absolute count or a string such as "25%".

    Instances are immutable, so they can be shared between object graphs.

    Attributes:
        int_val: The integer value (meaningful when is_string is False)
        str_val: The string value (meaningful when is_string is True)
        is_string: Which of the two values is set
    """
    int_val: int = 0
    str_val: str = ""
    is_string: bool = False

    @classmethod
    def from_int(cls, value: int) -> "IntOrString":
        return cls(int_val=value)

    @classmethod
    def from_string(cls, value: str) -> "IntOrString":
        return cls(str_val=value, is_string=True)

    @classmethod
    def from_wire(cls, raw: Any) -> "IntOrString":
        """Build from a decoded wire scalar.

        Raises:
            ValueError: If raw is neither an int nor a string
        """
        if isinstance(raw, bool):
            raise ValueError(f"expected integer or string, got {raw!r}")
        if isinstance(raw, int):
            return cls.from_int(int(raw))
        if isinstance(raw, str):
            return cls.from_string(str(raw))
        raise ValueError(f"expected integer or string, got {type(raw).__name__}")

    def to_wire(self) -> Union[int, str]:
        return self.str_val if self.is_string else self.int_val

    def __str__(self) -> str:
        return str(self.to_wire())
