"""
MOL V2000 record parsers.

Supports streaming MOL and SD sources with per-record error recovery.
"""

from packages.molfile.parsers.lines import LineSource
from packages.molfile.parsers.properties import PropertyBlock, read_property_block
from packages.molfile.parsers.v2000 import (
    ReaderState,
    RecordParser,
    V2000Reader,
    resynchronize,
)

__all__ = [
    # Line source
    "LineSource",
    # Property block
    "PropertyBlock",
    "read_property_block",
    # Records
    "ReaderState",
    "RecordParser",
    "V2000Reader",
    "resynchronize",
]
