"""
Streaming reader for MOL V2000 and SD files.

This package provides:
- A lazy record iterator over MOL V2000 / SD sources
- Fixed-column field decoding and element symbol resolution
- Formal charge extraction from "M  CHG" property lines
- Per-record error isolation with resynchronization on "$$$$"

Quick Start:
    >>> from packages.molfile import read_v2000_mol_file, Record
    >>> with read_v2000_mol_file("library.sdf") as reader:
    ...     for item in reader:
    ...         if isinstance(item, Record):
    ...             print(item.title, item.molecule.atomic_numbers)

Batch Processing:
    >>> from packages.molfile import parse_sdf_file
    >>> result = parse_sdf_file("library.sdf")
    >>> print(result.success_count, result.error_count)
"""

# Configuration
from packages.molfile.config import ReaderSettings, get_settings

# Elements
from packages.molfile.elements import ATOMIC_NUMBERS, atomic_number, element_symbol

# Exceptions
from packages.molfile.exceptions import (
    DomainError,
    FieldDecodeError,
    FloatFieldError,
    IntegerFieldError,
    MolfileError,
    MolfileErrorCode,
    MolfileIOError,
    ParseError,
    TruncatedRecordError,
)

# Parsers
from packages.molfile.parsers import LineSource, ReaderState, V2000Reader

# Schemas
from packages.molfile.schemas import AromaticBonds, Bonds, Molecule, Property, Record

# Entry points
from packages.molfile.sdf_parser import (
    SDFParser,
    SDFParseResult,
    iter_sdf_file,
    parse_mol_block,
    parse_sdf_bytes,
    parse_sdf_file,
    parse_sdf_string,
    read_v2000_mol_file,
    read_v2000_mol_lines,
)

__all__ = [
    # Configuration
    "ReaderSettings",
    "get_settings",
    # Elements
    "ATOMIC_NUMBERS",
    "atomic_number",
    "element_symbol",
    # Exceptions
    "DomainError",
    "FieldDecodeError",
    "FloatFieldError",
    "IntegerFieldError",
    "MolfileError",
    "MolfileErrorCode",
    "MolfileIOError",
    "ParseError",
    "TruncatedRecordError",
    # Parsers
    "LineSource",
    "ReaderState",
    "V2000Reader",
    # Schemas
    "AromaticBonds",
    "Bonds",
    "Molecule",
    "Property",
    "Record",
    # Entry points
    "SDFParser",
    "SDFParseResult",
    "iter_sdf_file",
    "parse_mol_block",
    "parse_sdf_bytes",
    "parse_sdf_file",
    "parse_sdf_string",
    "read_v2000_mol_file",
    "read_v2000_mol_lines",
]

__version__ = "0.1.0"
