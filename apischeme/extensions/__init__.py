"""The extensions API group.

This package provides the workload kinds of the group:
- types: Internal representations consumed by controllers
- v1beta1: The versioned schema, its defaults and conversion rules
- install: Registration of every kind into a Scheme
"""
