"""
Fixed-column field decoders for MOL V2000 lines.

Every decoder takes a line and a half-open, 0-based column range, trims
the slice and parses it. Short lines give short (possibly empty) slices,
so a malformed line always ends in a FieldDecodeError, never an IndexError.

Column layout (0-based, half-open):

    counts line   num_atoms 0-3, num_bonds 3-6, version 34-39
    atom line     x 0-10, y 10-20, z 20-30, symbol 31-34
    bond line     atom1 0-3, atom2 3-6, order 6-9
    property line tag 3-6; CHG entry count 6-9, then 8-column groups
                  " aaa vvv" starting at column 9
"""

import math
import re

from packages.molfile.elements import atomic_number
from packages.molfile.exceptions import DomainError, FloatFieldError, IntegerFieldError

# =============================================================================
# Column Constants
# =============================================================================

Columns = tuple[int, int]

COUNTS_NUM_ATOMS: Columns = (0, 3)
COUNTS_NUM_BONDS: Columns = (3, 6)
COUNTS_VERSION: Columns = (34, 39)

ATOM_X: Columns = (0, 10)
ATOM_Y: Columns = (10, 20)
ATOM_Z: Columns = (20, 30)
ATOM_SYMBOL: Columns = (31, 34)

BOND_ATOM1: Columns = (0, 3)
BOND_ATOM2: Columns = (3, 6)
BOND_ORDER: Columns = (6, 9)

PROPERTY_TAG: Columns = (3, 6)
PROPERTY_COUNT: Columns = (6, 9)
PROPERTY_ENTRY_START = 9
PROPERTY_ENTRY_WIDTH = 8

# Integer widths of the stored values
MAX_U8 = 0xFF
MAX_U16 = 0xFFFF
MAX_U32 = 0xFFFFFFFF
MIN_I8, MAX_I8 = -0x80, 0x7F

_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


def field_text(line: str, columns: Columns) -> str:
    """Slice and trim a fixed-column field."""
    start, stop = columns
    return line[start:stop].strip()


def decode_unsigned(line: str, columns: Columns, max_value: int = MAX_U32) -> int:
    """
    Decode an unsigned integer field.

    Raises:
        IntegerFieldError: If the field is empty, not a plain decimal
            number, or larger than max_value.
    """
    text = field_text(line, columns)
    if not _UNSIGNED_RE.fullmatch(text):
        raise IntegerFieldError(text, line)
    value = int(text)
    if value > max_value:
        raise IntegerFieldError(text, line)
    return value


def decode_signed(
    line: str,
    columns: Columns,
    min_value: int = MIN_I8,
    max_value: int = MAX_I8,
) -> int:
    """Decode a signed integer field, bounded to [min_value, max_value]."""
    text = field_text(line, columns)
    if not _SIGNED_RE.fullmatch(text):
        raise IntegerFieldError(text, line)
    value = int(text)
    if not min_value <= value <= max_value:
        raise IntegerFieldError(text, line)
    return value


def decode_float(line: str, columns: Columns) -> float:
    """
    Decode a coordinate field.

    Only plain decimal and exponent notation is accepted; "nan", "inf" and
    digit separators are rejected even though float() would take them.
    """
    text = field_text(line, columns)
    if not _FLOAT_RE.fullmatch(text):
        raise FloatFieldError(text, line)
    value = float(text)
    if not math.isfinite(value):
        raise FloatFieldError(text, line)
    return value


def decode_symbol(line: str, columns: Columns = ATOM_SYMBOL) -> int:
    """Decode an element symbol field to its atomic number."""
    text = field_text(line, columns)
    try:
        return atomic_number(text)
    except DomainError as e:
        raise DomainError(
            message=e.message,
            code=e.code,
            details={**e.details, "line": line},
            text=text,
            line=line,
        ) from None
