"""Wire naming for dataclass fields.

Fields are written on the wire under the camelCase form of their Python
name: ``match_labels`` becomes ``matchLabels`` and ``api_version`` becomes
``apiVersion``.
"""

import dataclasses


def camel_case(name: str) -> str:
    """Convert a snake_case identifier to lowerCamelCase."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def wire_name(field: dataclasses.Field) -> str:
    return camel_case(field.name)
