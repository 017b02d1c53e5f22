"""Layout options for the YAML codec.

Options are passed explicitly to ``YAMLCodec``; nothing is read from files
or the environment, so the same object always encodes to the same bytes
for a given set of options. Layouts the emitter cannot read back are
rejected when the options are built.
"""

from dataclasses import dataclass

from apischeme.core.errors import InvalidArgumentError

MIN_INDENT = 2


@dataclass(frozen=True)
class CodecOptions:
    """Layout options for the YAML emitter.

    Attributes:
        width: Maximum line width before the emitter folds scalars
        indent: Mapping indentation
        sequence_indent: Indentation of sequence items
        sequence_offset: Offset of the ``-`` marker inside the indentation

    Raises:
        InvalidArgumentError: If the layout would not decode back, i.e. an
            indent below 2, a negative offset, or an offset that leaves
            less than 2 columns between the ``-`` marker and the item
    """
    width: int = 4096
    indent: int = 2
    sequence_indent: int = 2
    sequence_offset: int = 0

    def __post_init__(self):
        if self.width < 1:
            raise InvalidArgumentError(f"width must be positive, got {self.width}")
        if self.indent < MIN_INDENT:
            raise InvalidArgumentError(f"indent must be at least {MIN_INDENT}, got {self.indent}")
        if self.sequence_offset < 0:
            raise InvalidArgumentError(
                f"sequence_offset must not be negative, got {self.sequence_offset}"
            )
        if self.sequence_indent - self.sequence_offset < MIN_INDENT:
            raise InvalidArgumentError(
                f"sequence_indent ({self.sequence_indent}) must exceed "
                f"sequence_offset ({self.sequence_offset}) by at least {MIN_INDENT}"
            )
