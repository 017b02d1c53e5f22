"""
Core kind-agnostic machinery for apischeme.

This package contains the type registry (scheme), the wire codec, and the
defaulting and conversion engines. API groups plug into it by registering
their kinds; nothing in here knows about a specific resource.
"""

__all__ = []
