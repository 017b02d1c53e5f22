"""
Core schema definitions shared by every API group.

These kind-agnostic dataclasses (kind identifiers, object metadata and the
scalar value types) are used by both versioned and internal representations.
"""

from apischeme.core.schema.fields import camel_case, wire_name
from apischeme.core.schema.intstr import IntOrString
from apischeme.core.schema.kind import GroupVersionKind
from apischeme.core.schema.meta import ObjectMeta
from apischeme.core.schema.quantity import Quantity, ResourceList

__all__ = [
    "camel_case",
    "wire_name",
    "IntOrString",
    "GroupVersionKind",
    "ObjectMeta",
    "Quantity",
    "ResourceList",
]
