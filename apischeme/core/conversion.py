"""Field-by-field conversion between versioned and internal structs.

A ConversionTable declares which versioned dataclass corresponds to which
internal dataclass (a "pair") and, for fields that are not copied by name,
how each internal field is produced from the versioned object and back::

    table = ConversionTable()
    table.add_shared(ObjectMeta, PodTemplateSpec, IntOrString)
    table.add_pair(v1beta1.DeploymentSpec, DeploymentSpec, {
        "replicas": FieldRule(to_internal=int_or_zero),
    })

Converting never shares mutable state between the two graphs: every dict
and list is rebuilt, paired structs are rebuilt through their rules, and
shared struct types are deep-copied. ``validate()`` checks every pair for
fields without a counterpart and for struct types that are neither paired
nor shared; schemes call it when a kind is registered.
"""

import copy
import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, Tuple, Type, get_args, get_type_hints

from apischeme.core.errors import ConversionError, InvalidArgumentError
from apischeme.core.scheme import Scheme

logger = logging.getLogger(__name__)

ValueFn = Callable[[Any], Any]


@dataclass(frozen=True)
class FieldRule:
    """Mapping rule for one internal field.

    Attributes:
        external: Name of the versioned field (defaults to the internal name)
        to_internal: Function producing the internal value from the
            versioned value; the value is converted structurally if None
        to_external: Function producing the versioned value from the
            internal value; the value is converted structurally if None
    """
    external: Optional[str] = None
    to_internal: Optional[ValueFn] = None
    to_external: Optional[ValueFn] = None


# (target field, source field, transform)
_Plan = List[Tuple[str, str, Optional[ValueFn]]]


class ConversionTable:
    """Registry of versioned/internal struct pairs and their field rules."""

    def __init__(self):
        self._to_internal_types: Dict[Type, Type] = {}
        self._to_external_types: Dict[Type, Type] = {}
        self._rules: Dict[Type, Dict[str, FieldRule]] = {}
        self._shared: Set[Type] = set()
        self._plans: Dict[Tuple[Type, bool], _Plan] = {}

    def add_pair(
        self,
        external: Type,
        internal: Type,
        rules: Optional[Dict[str, FieldRule]] = None,
    ) -> None:
        """Declare that ``external`` converts to ``internal`` and back.

        Args:
            external: Versioned dataclass
            internal: Internal dataclass
            rules: FieldRules keyed by internal field name
        """
        if external in self._to_internal_types or internal in self._to_external_types:
            raise ConversionError(
                f"conversion pair {external.__name__} <-> {internal.__name__} overlaps an existing pair"
            )
        self._to_internal_types[external] = internal
        self._to_external_types[internal] = external
        self._rules[external] = dict(rules or {})
        self._plans.pop((external, True), None)
        self._plans.pop((internal, False), None)

    def add_shared(self, *types: Type) -> None:
        """Declare struct types used unchanged by both representations."""
        self._shared.update(types)

    def internal_type_for(self, external: Type) -> Optional[Type]:
        return self._to_internal_types.get(external)

    def external_type_for(self, internal: Type) -> Optional[Type]:
        return self._to_external_types.get(internal)

    def validate(self) -> None:
        """Check every pair for missing field rules and unmapped struct types.

        Raises:
            ConversionError: Listing every field or type lacking a rule
        """
        missing: List[str] = []
        for external, internal in self._to_internal_types.items():
            for source, to_internal in ((external, True), (internal, False)):
                try:
                    self._plan(source, to_internal)
                except ConversionError as e:
                    missing.extend(e.missing)
            rules = self._rules[external]
            transformed = {
                external: {rule.external or name for name, rule in rules.items() if rule.to_internal},
                internal: {name for name, rule in rules.items() if rule.to_external},
            }
            for cls in (external, internal):
                for struct in _referenced_structs(cls, skip=transformed[cls]):
                    if struct in self._shared:
                        continue
                    if struct in self._to_internal_types or struct in self._to_external_types:
                        continue
                    missing.append(f"{cls.__name__} references unmapped type {struct.__name__}")
        if missing:
            missing = sorted(set(missing))
            raise ConversionError(
                "conversion rules are incomplete: " + "; ".join(missing), missing=missing
            )

    def convert(self, value: Any, to_internal: bool) -> Any:
        """Convert a value graph in one direction, building fresh containers.

        Raises:
            ConversionError: If a struct type has no pair and is not shared
        """
        if value is None:
            return None
        if isinstance(value, dict):
            return {key: self.convert(item, to_internal) for key, item in value.items()}
        if isinstance(value, list):
            return [self.convert(item, to_internal) for item in value]

        value_type = type(value)
        targets = self._to_internal_types if to_internal else self._to_external_types
        target = targets.get(value_type)
        if target is not None:
            return self._convert_struct(value, target, to_internal)

        if dataclasses.is_dataclass(value) and value_type not in self._shared:
            direction = "internal" if to_internal else "external"
            raise ConversionError(
                f"no {direction} conversion registered for {value_type.__name__}",
                missing=[value_type.__name__],
            )
        return copy.deepcopy(value)

    def _convert_struct(self, value: Any, target: Type, to_internal: bool) -> Any:
        kwargs = {}
        for target_field, source_field, fn in self._plan(type(value), to_internal):
            raw = getattr(value, source_field)
            kwargs[target_field] = fn(raw) if fn is not None else self.convert(raw, to_internal)
        return target(**kwargs)

    def _plan(self, source: Type, to_internal: bool) -> _Plan:
        key = (source, to_internal)
        plan = self._plans.get(key)
        if plan is not None:
            return plan

        if to_internal:
            external, internal = source, self._to_internal_types[source]
        else:
            external, internal = self._to_external_types[source], source
        rules = self._rules[external]
        external_names = {f.name for f in dataclasses.fields(external)}
        internal_names = {f.name for f in dataclasses.fields(internal)}

        missing = []
        plan = []
        covered_external = set()
        for name in sorted(rules):
            if name not in internal_names:
                missing.append(f"{internal.__name__}.{name} (rule for unknown field)")
        for field in dataclasses.fields(internal):
            rule = rules.get(field.name, FieldRule())
            external_name = rule.external or field.name
            if external_name not in external_names:
                missing.append(f"{internal.__name__}.{field.name}")
                continue
            covered_external.add(external_name)
            if to_internal:
                plan.append((field.name, external_name, rule.to_internal))
            else:
                plan.append((external_name, field.name, rule.to_external))
        for name in sorted(external_names - covered_external):
            missing.append(f"{external.__name__}.{name}")

        if missing:
            raise ConversionError(
                f"no mapping rule between {external.__name__} and {internal.__name__} for: "
                + ", ".join(missing),
                missing=missing,
            )
        self._plans[key] = plan
        return plan


def _referenced_structs(cls: Type, skip: Set[str]) -> Set[Type]:
    """Dataclass types named by the field annotations of ``cls``.

    Fields in ``skip`` are converted by a transform function, so the types
    they reference need no pair of their own.
    """
    found: Set[Type] = set()
    for name, hint in get_type_hints(cls).items():
        if name in skip:
            continue
        found.update(_structs_in_hint(hint))
    return found


def _structs_in_hint(hint: Any) -> Iterable[Type]:
    args = get_args(hint)
    if args:
        for arg in args:
            yield from _structs_in_hint(arg)
    elif isinstance(hint, type) and dataclasses.is_dataclass(hint):
        yield hint


class TableConverter:
    """Converter for one kind, backed by a ConversionTable.

    Implements the KindConverter protocol expected by Scheme.register.
    """

    def __init__(self, table: ConversionTable, external: Type, internal: Type):
        self.table = table
        self.external = external
        self.internal = internal

    def to_internal(self, obj: Any) -> Any:
        if not isinstance(obj, self.external):
            raise InvalidArgumentError(
                f"expected {self.external.__name__}, got {type(obj).__name__}"
            )
        return self.table.convert(obj, to_internal=True)

    def to_external(self, obj: Any) -> Any:
        if not isinstance(obj, self.internal):
            raise InvalidArgumentError(
                f"expected {self.internal.__name__}, got {type(obj).__name__}"
            )
        return self.table.convert(obj, to_internal=False)

    def validate(self) -> None:
        if self.table.internal_type_for(self.external) is not self.internal:
            raise ConversionError(
                f"no conversion pair {self.external.__name__} <-> {self.internal.__name__}",
                missing=[self.external.__name__],
            )
        self.table.validate()


class ConversionEngine:
    """Converts registered objects between their two representations."""

    def __init__(self, scheme: Scheme):
        self.scheme = scheme

    def to_internal(self, obj: Any) -> Any:
        """Convert a versioned object into a fresh internal object.

        Defaults are not applied; pass the object through the defaulting
        engine first when the internal form must be fully resolved.

        Raises:
            InvalidArgumentError: If obj is None or already internal
            UnknownKindError: If obj's type is not registered
            ConversionError: If a field lacks a mapping rule
        """
        if obj is None:
            raise InvalidArgumentError("cannot convert None")
        registration = self.scheme.registration_for(obj)
        if type(obj) is not registration.versioned_type:
            raise InvalidArgumentError(f"{type(obj).__name__} is already an internal object")
        logger.debug(f"Converting {registration.kind} to internal")
        return registration.converter.to_internal(obj)

    def to_external(self, obj: Any) -> Any:
        """Convert an internal object into a fresh versioned object.

        Raises:
            InvalidArgumentError: If obj is None or already versioned
            UnknownKindError: If obj's type is not registered
            ConversionError: If a field lacks a mapping rule
        """
        if obj is None:
            raise InvalidArgumentError("cannot convert None")
        registration = self.scheme.registration_for(obj)
        if type(obj) is registration.versioned_type:
            raise InvalidArgumentError(f"{type(obj).__name__} is already a versioned object")
        logger.debug(f"Converting internal object to {registration.kind}")
        return registration.converter.to_external(obj)
