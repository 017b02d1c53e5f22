"""Exceptions raised by the scheme, codec, defaulting and conversion engines."""

from typing import Any, List, Optional


class SchemeError(Exception):
    """Base class for every error raised by apischeme."""


class UnknownKindError(SchemeError):
    """Raised when a kind (or a Python type) has no registration.

    Attributes:
        kind: The GroupVersionKind or type that could not be resolved
    """

    def __init__(self, message: str, kind: Optional[Any] = None) -> None:
        """Initialize UnknownKindError exception.

        Args:
            message: Error message describing the failure
            kind: The kind or type that was looked up (optional)
        """
        super().__init__(message)
        self.kind = kind


class DuplicateKindError(SchemeError):
    """Raised when a kind or a versioned type is registered twice.

    Attributes:
        kind: The GroupVersionKind that was already bound
    """

    def __init__(self, message: str, kind: Optional[Any] = None) -> None:
        super().__init__(message)
        self.kind = kind


class RegistrationClosedError(SchemeError):
    """Raised when registering into a scheme that has been sealed."""


class DecodeError(SchemeError):
    """Raised when bytes cannot be turned into a registered object.

    This covers invalid UTF-8, invalid YAML, documents that are not a
    mapping, a missing or malformed ``apiVersion``/``kind``, and values
    whose type does not match the declared field type.

    Attributes:
        message: Description of the failure
        path: Dotted wire path of the offending field (optional)
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        """Initialize DecodeError exception.

        Args:
            message: Error message describing the failure
            path: Wire path such as ``spec.strategy.type`` (optional)
        """
        if path:
            message = f"{path}: {message}"
        super().__init__(message)
        self.path = path


class EncodeError(SchemeError):
    """Raised when an object cannot be serialized.

    Attributes:
        obj: The object that failed to encode (optional)
    """

    def __init__(self, message: str, obj: Optional[Any] = None) -> None:
        super().__init__(message)
        self.obj = obj


class ConversionError(SchemeError):
    """Raised when a conversion rule is missing between two struct types.

    This is a schema-authoring defect: a field was added to one side of a
    versioned/internal pair without a mapping rule. It is detected when the
    kind is registered, so it normally surfaces at process start.

    Attributes:
        message: Description of the failure
        missing: Qualified names of the fields or types lacking a rule
    """

    def __init__(self, message: str, missing: Optional[List[str]] = None) -> None:
        """Initialize ConversionError exception.

        Args:
            message: Error message describing the failure
            missing: Fields or types without a mapping rule (optional)
        """
        super().__init__(message)
        self.missing = list(missing or [])


class InvalidArgumentError(SchemeError, ValueError):
    """Raised when an operation receives None or an object of the wrong side.

    For example, defaulting an internal object, or converting an internal
    object "to internal".
    """
