"""
apischeme: versioned-object defaulting and conversion

Decodes resource manifests written against a versioned API schema, fills in
the defaults each resource kind defines, and converts the result into the
internal representation consumed by controllers (and back again).
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
