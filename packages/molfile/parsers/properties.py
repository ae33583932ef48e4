"""
Property block reader.

Consumes the "M  <TAG>" lines that follow the bond block of a V2000 record
and extracts the formal charge overlay from "M  CHG" lines. Other tags are
skipped.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from packages.molfile.exceptions import DomainError, MolfileErrorCode
from packages.molfile.fields import (
    MAX_U32,
    PROPERTY_COUNT,
    PROPERTY_ENTRY_START,
    PROPERTY_ENTRY_WIDTH,
    PROPERTY_TAG,
    decode_signed,
    decode_unsigned,
    field_text,
)
from packages.molfile.parsers.lines import LineSource

logger = logging.getLogger(__name__)

END_SENTINEL = "M  END"
RECORD_DELIMITER = "$$$$"
CHARGE_TAG = "CHG"


class BlockEnd(str, Enum):
    """How a property block was terminated."""

    END = "end"  # "M  END"
    DELIMITER = "delimiter"  # "$$$$" before "M  END"
    EOF = "eof"


@dataclass
class PropertyBlock:
    """Result of reading one property block."""

    atom_charges: list[int] | None
    end: BlockEnd


def is_end_sentinel(line: str) -> bool:
    return line.rstrip() == END_SENTINEL


def is_record_delimiter(line: str) -> bool:
    return line.rstrip() == RECORD_DELIMITER


def parse_charge_line(line: str, charges: list[int]) -> None:
    """
    Apply one "M  CHG" line to a charge list in place.

    The line holds an entry count followed by that many (atom index, charge)
    pairs, each in an 8-column group " aaa vvv".

    Raises:
        IntegerFieldError: If a count, index or charge is malformed.
        DomainError: If an atom index is outside the atom block.
    """
    num_entries = decode_unsigned(line, PROPERTY_COUNT)
    for entry in range(num_entries):
        start = PROPERTY_ENTRY_START + entry * PROPERTY_ENTRY_WIDTH
        index_columns = (start + 1, start + 4)
        atom_index = decode_unsigned(line, index_columns, MAX_U32)
        charge = decode_signed(line, (start + 5, start + 8))
        if not 1 <= atom_index <= len(charges):
            raise DomainError(
                message=(
                    f"Charge atom index {atom_index} outside atom block "
                    f"of {len(charges)} atoms"
                ),
                code=MolfileErrorCode.CHARGE_INDEX_OUT_OF_RANGE,
                details={"atom_index": atom_index, "line": line},
                text=field_text(line, index_columns),
                line=line,
            )
        charges[atom_index - 1] = charge


def read_property_block(source: LineSource, num_atoms: int) -> PropertyBlock:
    """
    Read property lines up to "M  END", the record delimiter or end of source.

    Args:
        source: Line source positioned after the bond block.
        num_atoms: Atom count from the counts line.

    Returns:
        PropertyBlock with the charge overlay (None if no CHG line was seen)
        and the way the block ended.
    """
    charges: list[int] | None = None

    while True:
        line = source.read()
        if line is None:
            return PropertyBlock(atom_charges=charges, end=BlockEnd.EOF)
        if is_end_sentinel(line):
            return PropertyBlock(atom_charges=charges, end=BlockEnd.END)
        if is_record_delimiter(line):
            return PropertyBlock(atom_charges=charges, end=BlockEnd.DELIMITER)

        if line.startswith("M  ") and field_text(line, PROPERTY_TAG) == CHARGE_TAG:
            if charges is None:
                charges = [0] * num_atoms
            parse_charge_line(line, charges)
        else:
            logger.debug(f"Skipping property line {source.line_number}: {line!r}")
