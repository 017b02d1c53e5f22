"""Type registry binding resource kinds to their types and rules.

A Scheme maps a GroupVersionKind to:
- the versioned dataclass users write against
- the internal dataclass controllers consume
- the kind's defaulting function
- the converter between the two representations

Lifecycle: every ``register`` call happens during a single-threaded startup
phase that ends with ``seal()``. After sealing, the lookup tables are
read-only mappings and lookups need no locking. Registering after ``seal()``
raises RegistrationClosedError, so a harness that registers kinds after
reads have started fails loudly instead of racing.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Protocol, Tuple, Type

from apischeme.core.errors import (
    DuplicateKindError,
    RegistrationClosedError,
    UnknownKindError,
)
from apischeme.core.schema.kind import GroupVersionKind

logger = logging.getLogger(__name__)

DefaultFn = Callable[[Any], None]
"""Defaulting function: mutates a versioned object in place."""


class KindConverter(Protocol):
    """Converter between one versioned type and its internal type."""

    def to_internal(self, obj: Any) -> Any:
        ...

    def to_external(self, obj: Any) -> Any:
        ...

    def validate(self) -> None:
        """Raise ConversionError if any field lacks a mapping rule."""
        ...


@dataclass(frozen=True)
class KindRegistration:
    """Everything the engines need to handle one kind.

    Attributes:
        kind: The GroupVersionKind this entry is bound to
        versioned_type: Dataclass of the external (user-facing) schema
        internal_type: Dataclass of the internal representation
        default_fn: Defaulting function applied to versioned objects
        converter: Converter between versioned_type and internal_type
        embedded_templates: Dotted attribute paths of embedded pod templates
            (e.g. ``("spec.template",)``) handed to the template defaulter
    """
    kind: GroupVersionKind
    versioned_type: Type
    internal_type: Type
    default_fn: DefaultFn
    converter: KindConverter
    embedded_templates: Tuple[str, ...] = ()


class Scheme:
    """Process-wide registry of kinds.

    Example:
        >>> scheme = Scheme()
        >>> scheme.register(kind, Deployment, internal.Deployment,
        ...                 set_defaults_deployment, converter)
        >>> scheme.seal()
        >>> scheme.lookup(kind).versioned_type
        <class 'Deployment'>
    """

    def __init__(self, name: str = "default"):
        """Initialize an empty, unsealed scheme.

        Args:
            name: Name used in log messages
        """
        self.name = name
        self._sealed = False
        self._by_kind: Dict[GroupVersionKind, KindRegistration] = {}
        self._by_versioned: Dict[Type, KindRegistration] = {}
        self._by_internal: Dict[Type, KindRegistration] = {}

    @property
    def sealed(self) -> bool:
        return self._sealed

    def register(
        self,
        kind: GroupVersionKind,
        versioned_type: Type,
        internal_type: Type,
        default_fn: DefaultFn,
        converter: KindConverter,
        embedded_templates: Tuple[str, ...] = (),
    ) -> KindRegistration:
        """Bind a kind to its types, defaulting function and converter.

        The converter is validated before anything is recorded, so a
        ConversionError leaves the scheme unchanged.

        Args:
            kind: Kind identifier
            versioned_type: External dataclass
            internal_type: Internal dataclass
            default_fn: Function defaulting a versioned object in place
            converter: Converter between the two types
            embedded_templates: Attribute paths of embedded pod templates

        Returns:
            The new KindRegistration

        Raises:
            RegistrationClosedError: If the scheme has been sealed
            DuplicateKindError: If the kind or versioned type is already bound
            ConversionError: If the converter has fields without a rule
        """
        if self._sealed:
            raise RegistrationClosedError(
                f"scheme {self.name!r} is sealed; cannot register {kind}"
            )
        if kind in self._by_kind:
            raise DuplicateKindError(f"kind {kind} is already registered", kind=kind)
        if versioned_type in self._by_versioned:
            bound = self._by_versioned[versioned_type].kind
            raise DuplicateKindError(
                f"type {versioned_type.__name__} is already bound to {bound}", kind=kind
            )

        converter.validate()

        registration = KindRegistration(
            kind=kind,
            versioned_type=versioned_type,
            internal_type=internal_type,
            default_fn=default_fn,
            converter=converter,
            embedded_templates=tuple(embedded_templates),
        )
        self._by_kind[kind] = registration
        self._by_versioned[versioned_type] = registration
        # The first version registered for an internal type is the one
        # internal objects are encoded as.
        self._by_internal.setdefault(internal_type, registration)

        logger.debug(f"Registered {kind} -> {versioned_type.__name__}/{internal_type.__name__}")
        return registration

    def seal(self) -> None:
        """End the write phase; the tables become read-only."""
        if self._sealed:
            return
        self._by_kind = MappingProxyType(dict(self._by_kind))  # type: ignore[assignment]
        self._by_versioned = MappingProxyType(dict(self._by_versioned))  # type: ignore[assignment]
        self._by_internal = MappingProxyType(dict(self._by_internal))  # type: ignore[assignment]
        self._sealed = True
        logger.info(f"Sealed scheme {self.name!r} with {len(self._by_kind)} kinds")

    def lookup(self, kind: GroupVersionKind) -> KindRegistration:
        """Return the registration for a kind.

        Raises:
            UnknownKindError: If the kind is not registered
        """
        registration = self._by_kind.get(kind)
        if registration is None:
            raise UnknownKindError(f"no kind {kind} is registered in scheme {self.name!r}", kind=kind)
        return registration

    def registration_for(self, obj: Any) -> KindRegistration:
        """Return the registration for a versioned or internal object.

        Raises:
            UnknownKindError: If the object's type is not registered
        """
        obj_type = type(obj)
        registration = self._by_versioned.get(obj_type) or self._by_internal.get(obj_type)
        if registration is None:
            raise UnknownKindError(
                f"type {obj_type.__name__} is not registered in scheme {self.name!r}",
                kind=obj_type,
            )
        return registration

    def kind_for(self, obj: Any) -> GroupVersionKind:
        """Return the kind a versioned or internal object is encoded as."""
        return self.registration_for(obj).kind

    def is_versioned(self, obj: Any) -> bool:
        return type(obj) in self._by_versioned

    def is_internal(self, obj: Any) -> bool:
        return type(obj) in self._by_internal

    def kinds(self) -> List[GroupVersionKind]:
        """Registered kinds in registration order."""
        return list(self._by_kind)

    def __contains__(self, kind: GroupVersionKind) -> bool:
        return kind in self._by_kind

    def __len__(self) -> int:
        return len(self._by_kind)
