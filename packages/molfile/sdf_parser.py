"""
SDF/MOL V2000 file reading.

This module provides the entry points of the streaming reader:
- Open a MOL or SD file as a lazy iterator of records
- Parse whole files, strings or bytes while collecting errors separately
- Continue on bad records, resuming at the next "$$$$" delimiter

SDF Format Overview:
--------------------
SDF files contain one or more molecule records, each consisting of:
1. MOL block (header lines, counts line, atom block, bond block)
2. Property block ("M  CHG ...", ...) terminated by "M  END"
3. Data items (key-value pairs like <COMPOUND_NAME>), not captured here
4. Record terminator ($$$$)

Usage:
    >>> from packages.molfile.sdf_parser import read_v2000_mol_file, parse_sdf_file

    # Stream records from a file
    >>> with read_v2000_mol_file("compounds.sdf") as reader:
    ...     for item in reader:
    ...         print(item)

    # Parse a whole file
    >>> result = parse_sdf_file("compounds.sdf")
    >>> print(f"Parsed {result.success_count} records, {result.error_count} errors")

    # Access errors
    >>> for err in result.errors:
    ...     print(f"Record {err.record_index}: {err.error_message}")
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from io import StringIO
from pathlib import Path

from packages.molfile.config import ReaderSettings, get_settings
from packages.molfile.exceptions import (
    MolfileError,
    MolfileErrorCode,
    MolfileIOError,
    ParseError,
)
from packages.molfile.parsers import LineSource, V2000Reader
from packages.molfile.schemas import Record

logger = logging.getLogger(__name__)


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class SDFParseResult:
    """Result of SDF file parsing."""

    # Successfully parsed records
    records: list[Record] = field(default_factory=list)

    # Failed records
    errors: list[ParseError] = field(default_factory=list)

    # Statistics
    total_records: int = 0
    success_count: int = 0
    error_count: int = 0

    # Source info
    source_path: str | None = None
    source_type: str = "unknown"  # "file", "string", "bytes"

    @property
    def success_rate(self) -> float:
        """Calculate success rate as percentage."""
        if self.total_records == 0:
            return 0.0
        return (self.success_count / self.total_records) * 100.0

    @property
    def has_errors(self) -> bool:
        """Check if any errors occurred."""
        return self.error_count > 0


# =============================================================================
# Readers
# =============================================================================


def _resolve_settings(
    settings: ReaderSettings | None = None,
    **overrides,
) -> ReaderSettings:
    """Apply per-call overrides (None means "keep") on top of settings."""
    settings = settings or get_settings()
    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return settings
    return settings.model_copy(update=updates)


def read_v2000_mol_file(
    filepath: str | Path,
    settings: ReaderSettings | None = None,
) -> V2000Reader:
    """
    Open a MOL or SD file for streaming.

    Args:
        filepath: Path to the file.
        settings: Reader settings. Defaults to get_settings().

    Returns:
        V2000Reader yielding Record or ParseError items. The reader owns the
        file handle; use it as a context manager or exhaust it to close it.

    Raises:
        MolfileIOError: If the file cannot be opened for reading.
    """
    settings = settings or get_settings()
    source = LineSource.open(
        filepath,
        encoding=settings.encoding,
        errors=settings.encoding_errors,
    )
    logger.info(f"Reading V2000 records from {filepath}")
    return V2000Reader(source, settings)


def read_v2000_mol_lines(
    lines: Iterable[str],
    settings: ReaderSettings | None = None,
    name: str = "<lines>",
) -> V2000Reader:
    """
    Stream records from an iterable of text lines.

    The caller keeps ownership of whatever produces the lines.
    """
    return V2000Reader(LineSource(lines, name=name), settings)


# =============================================================================
# Parser Class
# =============================================================================


class SDFParser:
    """
    Parser for MOL V2000 and SD files with error tolerance.

    Collects records and errors, continuing on bad records.
    """

    def __init__(
        self,
        strict_parsing: bool = False,
        validate_bond_indices: bool | None = None,
        report_truncated_records: bool | None = None,
        settings: ReaderSettings | None = None,
    ):
        """
        Initialize SDF parser.

        Args:
            strict_parsing: If True, raise on first error instead of collecting.
            validate_bond_indices: Override for the bond index check.
            report_truncated_records: Override for truncation reporting.
            settings: Base settings. Defaults to get_settings().
        """
        self.strict_parsing = strict_parsing
        self.settings = _resolve_settings(
            settings,
            strict=strict_parsing,
            validate_bond_indices=validate_bond_indices,
            report_truncated_records=report_truncated_records,
        )

    def parse_file(self, filepath: str | Path) -> SDFParseResult:
        """
        Parse records from a MOL or SD file.

        Args:
            filepath: Path to the file.

        Returns:
            SDFParseResult with records and errors.

        Raises:
            MolfileIOError: If the file cannot be opened (only in strict mode).
        """
        try:
            reader = read_v2000_mol_file(filepath, self.settings)
        except MolfileIOError as e:
            if self.strict_parsing:
                raise
            return SDFParseResult(
                errors=[ParseError.from_exception(-1, e)],
                total_records=0,
                error_count=1,
                source_path=str(filepath),
                source_type="file",
            )

        result = self._process_reader(
            reader,
            source_path=str(filepath),
            source_type="file",
        )
        logger.info(
            f"Parsed {result.success_count} records from {filepath} "
            f"({result.error_count} errors)"
        )
        return result

    def parse_string(self, sdf_content: str) -> SDFParseResult:
        """
        Parse records from an SDF string.

        Args:
            sdf_content: SDF format string.

        Returns:
            SDFParseResult with records and errors.
        """
        if not sdf_content or not sdf_content.strip():
            return SDFParseResult(
                errors=[
                    ParseError(
                        record_index=-1,
                        error_code=MolfileErrorCode.EMPTY_INPUT,
                        error_message="Empty SDF content",
                    )
                ],
                error_count=1,
                source_type="string",
            )

        reader = read_v2000_mol_lines(
            StringIO(sdf_content), self.settings, name="<string>"
        )
        return self._process_reader(reader, source_type="string")

    def parse_bytes(self, sdf_bytes: bytes) -> SDFParseResult:
        """
        Parse records from SDF bytes.

        Args:
            sdf_bytes: SDF content as bytes.

        Returns:
            SDFParseResult with records and errors.
        """
        try:
            sdf_content = sdf_bytes.decode("utf-8")
        except UnicodeDecodeError:
            # Try latin-1 as fallback
            sdf_content = sdf_bytes.decode("latin-1")

        result = self.parse_string(sdf_content)
        result.source_type = "bytes"
        return result

    def parse_mol_block(self, mol_block: str) -> Record:
        """
        Parse the first record of a MOL block.

        Args:
            mol_block: MDL MOL V2000 string.

        Returns:
            Record.

        Raises:
            MolfileError: If parsing fails or the block holds no record.
        """
        if not mol_block or not mol_block.strip():
            raise MolfileError(
                message="Empty MOL block",
                code=MolfileErrorCode.EMPTY_INPUT,
            )

        settings = self.settings.model_copy(update={"strict": True})
        with read_v2000_mol_lines(StringIO(mol_block), settings) as reader:
            record = next(reader, None)

        if record is None:
            raise MolfileError(
                message="MOL block does not contain a complete record",
                code=MolfileErrorCode.EMPTY_INPUT,
            )
        return record

    def _process_reader(
        self,
        reader: V2000Reader,
        source_path: str | None = None,
        source_type: str = "unknown",
    ) -> SDFParseResult:
        """Drain a reader and collect results."""
        records = []
        errors = []

        with reader:
            for item in reader:
                if isinstance(item, ParseError):
                    errors.append(item)
                else:
                    records.append(item)

        return SDFParseResult(
            records=records,
            errors=errors,
            total_records=len(records) + len(errors),
            success_count=len(records),
            error_count=len(errors),
            source_path=source_path,
            source_type=source_type,
        )


# =============================================================================
# Convenience Functions
# =============================================================================


def parse_sdf_file(filepath: str | Path, strict: bool = False) -> SDFParseResult:
    """
    Parse records from a MOL or SD file.

    Args:
        filepath: Path to the file.
        strict: If True, raise on first error.

    Returns:
        SDFParseResult with records and errors.

    Example:
        >>> result = parse_sdf_file("compounds.sdf")
        >>> print(f"Parsed {result.success_count} records")
        >>> for record in result.records:
        ...     print(record.title, record.molecule.atomic_numbers)
    """
    parser = SDFParser(strict_parsing=strict)
    return parser.parse_file(filepath)


def parse_sdf_string(sdf_content: str, strict: bool = False) -> SDFParseResult:
    """
    Parse records from an SDF string.

    Args:
        sdf_content: SDF format string.
        strict: If True, raise on first error.

    Returns:
        SDFParseResult with records and errors.
    """
    parser = SDFParser(strict_parsing=strict)
    return parser.parse_string(sdf_content)


def parse_sdf_bytes(sdf_bytes: bytes, strict: bool = False) -> SDFParseResult:
    """
    Parse records from SDF bytes (UTF-8, falling back to latin-1).

    Args:
        sdf_bytes: SDF content as bytes.
        strict: If True, raise on first error.

    Returns:
        SDFParseResult with records and errors.
    """
    parser = SDFParser(strict_parsing=strict)
    return parser.parse_bytes(sdf_bytes)


def parse_mol_block(mol_block: str) -> Record:
    """
    Parse a single MOL block.

    Args:
        mol_block: MDL MOL V2000 string.

    Returns:
        Record.

    Raises:
        MolfileError: If parsing fails.

    Example:
        >>> mol_block = '''
        ...      RDKit          2D
        ...
        ...   3  2  0  0  0  0  0  0  0  0999 V2000
        ...     0.0000    0.0000    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0
        ...     1.2990    0.7500    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0
        ...     2.5981    0.0000    0.0000 O   0  0  0  0  0  0  0  0  0  0  0  0
        ...   1  2  1  0
        ...   2  3  1  0
        ... M  END
        ... '''
        >>> parse_mol_block(mol_block).molecule.atomic_numbers
        [6, 6, 8]
    """
    parser = SDFParser()
    return parser.parse_mol_block(mol_block)


def iter_sdf_file(
    filepath: str | Path,
    strict: bool = False,
) -> Iterator[Record | ParseError]:
    """
    Iterate over records in an SD file (memory efficient).

    Yields records one at a time without loading the entire file.

    Args:
        filepath: Path to the file.
        strict: If True, raise on first error.

    Yields:
        Record for successful parses, ParseError for failures.

    Example:
        >>> for item in iter_sdf_file("large_library.sdf"):
        ...     if isinstance(item, Record):
        ...         process(item)
        ...     else:
        ...         log_error(item)
    """
    settings = _resolve_settings(strict=strict)
    try:
        reader = read_v2000_mol_file(filepath, settings)
    except MolfileIOError as e:
        if strict:
            raise
        yield ParseError.from_exception(-1, e)
        return

    with reader:
        yield from reader
