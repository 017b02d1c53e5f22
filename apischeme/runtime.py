"""Process-wide scheme and the public encode/decode/default/convert API.

Importing this module builds the default scheme, installs every API group
into it and seals it. From then on the scheme is read-only and the functions
below may be called from any number of threads; each call works only on the
object graph it is given.

Example:
    >>> from apischeme import runtime
    >>> obj = runtime.decode(data)
    >>> internal = runtime.to_internal(runtime.apply_defaults(obj))
"""

from typing import Any, Union

from apischeme.core.codec import YAMLCodec
from apischeme.core.conversion import ConversionEngine
from apischeme.core.defaulting import Defaulter
from apischeme.core.scheme import Scheme
from apischeme.extensions.install import add_to_scheme
from apischeme.pod.defaults import default_pod_template


def new_scheme() -> Scheme:
    """Build and seal a scheme with every API group installed."""
    new = Scheme(name="default")
    add_to_scheme(new)
    new.seal()
    return new


scheme = new_scheme()
codec = YAMLCodec(scheme)
defaulter = Defaulter(scheme, template_defaulter=default_pod_template)
converter = ConversionEngine(scheme)


def encode(obj: Any) -> bytes:
    """Serialize a versioned or internal object; see YAMLCodec.encode."""
    return codec.encode(obj)


def decode(data: Union[bytes, str]) -> Any:
    """Deserialize a document without applying defaults; see YAMLCodec.decode."""
    return codec.decode(data)


def apply_defaults(obj: Any) -> Any:
    """Return a defaulted copy of a versioned object; see Defaulter.apply."""
    return defaulter.apply(obj)


def to_internal(obj: Any) -> Any:
    return converter.to_internal(obj)


def to_external(obj: Any) -> Any:
    return converter.to_external(obj)


def round_trip(obj: Any) -> Any:
    """Send a versioned object through the full storage path.

    encode → decode → defaults → internal → versioned. The result is what a
    client reading the object back would see.

    Args:
        obj: Versioned object as a user would submit it

    Returns:
        A new versioned object of the same type
    """
    decoded = decode(encode(obj))
    internal = to_internal(apply_defaults(decoded))
    return to_external(internal)
