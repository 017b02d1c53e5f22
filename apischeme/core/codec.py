"""YAML wire codec for registered objects.

Every document carries ``apiVersion`` and ``kind`` next to the object's
fields, so it can be decoded without any external type hint::

    apiVersion: extensions/v1beta1
    kind: Deployment
    metadata:
      name: web
    spec:
      replicas: 3

Encoding is deterministic: struct fields are written in declaration order,
map keys are sorted, fields holding None are omitted, and empty structs or
maps are kept (``rollingUpdate: {}`` survives a round trip). Decoding never
applies defaults; callers run the defaulting engine as a separate step.
"""

import dataclasses
import logging
from io import StringIO
from typing import Any, Dict, Optional, Type, Union, get_args, get_origin, get_type_hints

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError

from apischeme.core.config import CodecOptions
from apischeme.core.errors import DecodeError, EncodeError, UnknownKindError
from apischeme.core.scheme import Scheme
from apischeme.core.schema.fields import wire_name
from apischeme.core.schema.kind import GroupVersionKind

logger = logging.getLogger(__name__)

API_VERSION_KEY = "apiVersion"
KIND_KEY = "kind"


def _create_yaml_instance(options: CodecOptions) -> YAML:
    """Create configured ruamel.yaml instance for manifest encoding.

    Returns:
        YAML instance configured to:
        - Not wrap long strings
        - Use block style (not flow style)
        - Indent according to the codec options
    """
    yaml = YAML()
    yaml.width = options.width
    yaml.default_flow_style = False
    yaml.allow_unicode = True
    yaml.indent(
        mapping=options.indent,
        sequence=options.sequence_indent,
        offset=options.sequence_offset,
    )
    return yaml


def struct_to_wire(obj: Any) -> CommentedMap:
    """Convert a dataclass instance into an ordered wire mapping.

    Raises:
        EncodeError: If a field holds a value that has no wire form
    """
    result = CommentedMap()
    for field in dataclasses.fields(obj):
        value = getattr(obj, field.name)
        if value is None:
            continue
        result[wire_name(field)] = _value_to_wire(value, field.name)
    return result


def _value_to_wire(value: Any, path: str) -> Any:
    if hasattr(value, "to_wire"):
        return value.to_wire()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return struct_to_wire(value)
    if isinstance(value, dict):
        mapping = CommentedMap()
        for key in sorted(value):
            if not isinstance(key, str):
                raise EncodeError(f"{path}: map key {key!r} is not a string")
            item = value[key]
            mapping[key] = None if item is None else _value_to_wire(item, f"{path}.{key}")
        return mapping
    if isinstance(value, (list, tuple)):
        return [_value_to_wire(item, f"{path}[{i}]") for i, item in enumerate(value)]
    if isinstance(value, (str, bool, int, float)):
        return value
    raise EncodeError(f"{path}: cannot encode value of type {type(value).__name__}", obj=value)


def struct_from_wire(cls: Type, data: Any, path: str = "") -> Any:
    """Build a dataclass instance of ``cls`` from a decoded wire mapping.

    Unknown keys are ignored. Keys whose value is null leave the field at
    its dataclass default.

    Raises:
        DecodeError: If data is not a mapping or a value has the wrong type
    """
    if not isinstance(data, dict):
        raise DecodeError(f"expected mapping for {cls.__name__}, got {_describe(data)}", path=path or None)

    hints = get_type_hints(cls)
    known = set()
    kwargs: Dict[str, Any] = {}
    for field in dataclasses.fields(cls):
        name = wire_name(field)
        known.add(name)
        if name not in data or data[name] is None:
            continue
        field_path = f"{path}.{name}" if path else name
        kwargs[field.name] = _value_from_wire(hints[field.name], data[name], field_path)

    unknown = [key for key in data if key not in known]
    if unknown:
        logger.debug(f"Ignoring unknown fields {unknown} for {cls.__name__} at {path or '<root>'}")
    return cls(**kwargs)


def _value_from_wire(hint: Any, raw: Any, path: str) -> Any:
    origin = get_origin(hint)
    args = get_args(hint)

    if origin is Union:
        if raw is None:
            return None
        inner = [arg for arg in args if arg is not type(None)]
        if len(inner) != 1:
            raise DecodeError(f"unsupported field type {hint}", path=path)
        return _value_from_wire(inner[0], raw, path)

    if origin is dict:
        if not isinstance(raw, dict):
            raise DecodeError(f"expected mapping, got {_describe(raw)}", path=path)
        return {
            str(key): None if value is None else _value_from_wire(args[1], value, f"{path}.{key}")
            for key, value in raw.items()
        }

    if origin is list:
        if not isinstance(raw, list):
            raise DecodeError(f"expected sequence, got {_describe(raw)}", path=path)
        return [_value_from_wire(args[0], item, f"{path}[{i}]") for i, item in enumerate(raw)]

    if hasattr(hint, "from_wire"):
        try:
            return hint.from_wire(raw)
        except ValueError as e:
            raise DecodeError(str(e), path=path) from e

    if dataclasses.is_dataclass(hint):
        return struct_from_wire(hint, raw, path)

    if hint is bool:
        if not isinstance(raw, bool):
            raise DecodeError(f"expected boolean, got {_describe(raw)}", path=path)
        return bool(raw)
    if hint is int:
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise DecodeError(f"expected integer, got {_describe(raw)}", path=path)
        return int(raw)
    if hint is float:
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise DecodeError(f"expected number, got {_describe(raw)}", path=path)
        return float(raw)
    if hint is str:
        if not isinstance(raw, str):
            raise DecodeError(f"expected string, got {_describe(raw)}", path=path)
        return str(raw)

    raise DecodeError(f"unsupported field type {hint}", path=path)


def _describe(raw: Any) -> str:
    if raw is None:
        return "null"
    if isinstance(raw, dict):
        return "mapping"
    if isinstance(raw, list):
        return "sequence"
    return f"{type(raw).__name__} {raw!r}"


class YAMLCodec:
    """Encodes and decodes registered objects as self-describing YAML.

    Example:
        >>> codec = YAMLCodec(scheme)
        >>> data = codec.encode(deployment)
        >>> codec.decode(data) == deployment
        True
    """

    def __init__(self, scheme: Scheme, options: Optional[CodecOptions] = None):
        """Initialize codec.

        Args:
            scheme: Scheme used to resolve kinds in both directions
            options: YAML layout options (CodecOptions() if None)
        """
        self.scheme = scheme
        self.options = options if options is not None else CodecOptions()

    def encode(self, obj: Any) -> bytes:
        """Serialize a versioned or internal object.

        Internal objects are first converted to the version their kind was
        registered with, so the wire only ever carries versioned schemas.

        Args:
            obj: Registered versioned or internal object

        Returns:
            UTF-8 encoded YAML document

        Raises:
            EncodeError: If the object's type is not registered or a value
                cannot be represented
        """
        try:
            registration = self.scheme.registration_for(obj)
        except UnknownKindError as e:
            raise EncodeError(f"cannot encode unregistered type {type(obj).__name__}", obj=obj) from e

        if type(obj) is not registration.versioned_type:
            obj = registration.converter.to_external(obj)

        document = CommentedMap()
        document[API_VERSION_KEY] = registration.kind.api_version
        document[KIND_KEY] = registration.kind.kind
        document.update(struct_to_wire(obj))

        stream = StringIO()
        try:
            _create_yaml_instance(self.options).dump(document, stream)
        except YAMLError as e:
            raise EncodeError(f"failed to emit {registration.kind}: {e}", obj=obj) from e
        return stream.getvalue().encode("utf-8")

    def decode(self, data: Union[bytes, str]) -> Any:
        """Deserialize a document into its registered versioned type.

        Args:
            data: YAML document as bytes (UTF-8) or text

        Returns:
            Versioned object, exactly as transmitted (no defaults applied)

        Raises:
            DecodeError: If the bytes are malformed
            UnknownKindError: If the embedded kind is not registered
        """
        document = self._load(data)
        kind = self._kind_of(document)
        registration = self.scheme.lookup(kind)

        fields = {k: v for k, v in document.items() if k not in (API_VERSION_KEY, KIND_KEY)}
        obj = struct_from_wire(registration.versioned_type, fields)
        logger.debug(f"Decoded {kind}")
        return obj

    def _load(self, data: Union[bytes, str]) -> Dict[str, Any]:
        if isinstance(data, (bytes, bytearray)):
            try:
                text = bytes(data).decode("utf-8")
            except UnicodeDecodeError as e:
                raise DecodeError(f"document is not valid UTF-8: {e}") from e
        elif isinstance(data, str):
            text = data
        else:
            raise DecodeError(f"expected bytes or str, got {type(data).__name__}")

        try:
            document = _create_yaml_instance(self.options).load(text)
        except YAMLError as e:
            raise DecodeError(f"invalid YAML: {e}") from e

        if not isinstance(document, dict):
            raise DecodeError(f"expected a mapping document, got {_describe(document)}")
        return document

    @staticmethod
    def _kind_of(document: Dict[str, Any]) -> GroupVersionKind:
        api_version = document.get(API_VERSION_KEY)
        kind = document.get(KIND_KEY)
        if not isinstance(api_version, str) or not api_version:
            raise DecodeError("missing or invalid apiVersion", path=API_VERSION_KEY)
        if not isinstance(kind, str) or not kind:
            raise DecodeError("missing or invalid kind", path=KIND_KEY)
        try:
            return GroupVersionKind.from_api_version(str(api_version), str(kind))
        except ValueError as e:
            raise DecodeError(str(e), path=API_VERSION_KEY) from e

