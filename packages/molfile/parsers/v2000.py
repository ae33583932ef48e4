"""
Streaming MOL V2000 record reader.

Turns a sequence of text lines into Record values, one per iteration step.
A record is read in fixed stages:

    1. header line (discarded)
    2. title line (kept verbatim)
    3. header line (discarded)
    4. counts line
    5. atom block (num_atoms lines)
    6. bond block (num_bonds lines)
    7. property block, up to "M  END"
    8. SD data items, up to the "$$$$" delimiter

A failure in stages 4-7 does not stop the iteration: the step yields a
ParseError and the reader switches to RESYNCHRONIZING, discarding lines
until the next "$$$$" before it attempts the following record.

Usage:
    >>> with V2000Reader(LineSource.open("library.sdf")) as reader:
    ...     for item in reader:
    ...         if isinstance(item, Record):
    ...             process(item.molecule)
    ...         else:
    ...             log_error(item.record_index, item.error_message)
"""

import logging
from enum import Enum

from packages.molfile.config import ReaderSettings, get_settings
from packages.molfile.exceptions import (
    DomainError,
    MolfileError,
    MolfileErrorCode,
    MolfileIOError,
    ParseError,
    TruncatedRecordError,
)
from packages.molfile.fields import (
    ATOM_X,
    ATOM_Y,
    ATOM_Z,
    BOND_ATOM1,
    BOND_ATOM2,
    BOND_ORDER,
    COUNTS_NUM_ATOMS,
    COUNTS_NUM_BONDS,
    COUNTS_VERSION,
    MAX_U8,
    MAX_U16,
    decode_float,
    decode_symbol,
    decode_unsigned,
    field_text,
)
from packages.molfile.parsers.lines import LineSource
from packages.molfile.parsers.properties import (
    BlockEnd,
    is_record_delimiter,
    read_property_block,
)
from packages.molfile.schemas import Bonds, Molecule, Record

logger = logging.getLogger(__name__)

SUPPORTED_VERSION = "V2000"


class ReaderState(str, Enum):
    """Iteration state of a V2000Reader."""

    PARSING = "parsing"
    RESYNCHRONIZING = "resynchronizing"
    FINISHED = "finished"


class SourceExhausted(Exception):
    """The source ended inside a record that is dropped without an error."""

    pass


def skip_to_delimiter(source: LineSource) -> bool:
    """
    Discard lines up to and including the next record delimiter.

    Returns:
        True if a delimiter was found, False if the source ended first.
    """
    while True:
        line = source.read()
        if line is None:
            return False
        if is_record_delimiter(line):
            return True


def resynchronize(source: LineSource) -> bool:
    """Skip the rest of a failed record; see skip_to_delimiter()."""
    start = source.line_number
    logger.debug(f"{source.name}: resynchronizing from line {start}")
    if skip_to_delimiter(source):
        logger.debug(
            f"{source.name}: resynchronized at line {source.line_number} "
            f"(skipped {source.line_number - start} lines)"
        )
        return True
    logger.debug(f"{source.name}: no record delimiter after line {start}")
    return False


class RecordParser:
    """Parser for a single V2000 record."""

    def __init__(
        self,
        validate_bond_indices: bool = False,
        report_truncated_records: bool = False,
    ):
        """
        Args:
            validate_bond_indices: Reject bonds whose atom indices fall
                outside [1, num_atoms].
            report_truncated_records: Raise TruncatedRecordError when the
                source ends inside a record instead of dropping it.
        """
        self.validate_bond_indices = validate_bond_indices
        self.report_truncated_records = report_truncated_records
        self._has_content = False  # Non-blank line seen in the current record

    def parse(self, source: LineSource, record_index: int) -> Record | None:
        """
        Parse the next record from the source.

        Returns:
            The parsed Record, or None if the source ended before a title.

        Raises:
            MolfileError: If a field fails to decode; the source is left
                somewhere inside the failed record.
            TruncatedRecordError: If the source ended mid-record and
                truncation reporting is enabled.
            SourceExhausted: If the source ended mid-record otherwise.
        """
        line_number = source.line_number + 1
        header = source.read()
        if header is None:
            return None
        title = source.read()
        if title is None:
            return None
        self._has_content = bool(header.strip() or title.strip())

        self._next_line(source, record_index, "header")
        counts = self._next_line(source, record_index, "counts line")
        num_atoms, num_bonds = self._parse_counts(counts)

        atomic_numbers: list[int] = []
        coordinates: list[tuple[float, float, float]] = []
        for _ in range(num_atoms):
            line = self._next_line(source, record_index, "atom block")
            coordinates.append(
                (
                    decode_float(line, ATOM_X),
                    decode_float(line, ATOM_Y),
                    decode_float(line, ATOM_Z),
                )
            )
            atomic_numbers.append(decode_symbol(line))

        bonds = Bonds()
        for _ in range(num_bonds):
            line = self._next_line(source, record_index, "bond block")
            atom1 = decode_unsigned(line, BOND_ATOM1)
            atom2 = decode_unsigned(line, BOND_ATOM2)
            order = decode_unsigned(line, BOND_ORDER, MAX_U8)
            if self.validate_bond_indices:
                self._check_bond(atom1, atom2, num_atoms, line)
            bonds.atoms1.append(atom1)
            bonds.atoms2.append(atom2)
            bonds.orders.append(order)

        block = read_property_block(source, num_atoms)
        if block.end is BlockEnd.END:
            # SD data items are not captured
            skip_to_delimiter(source)

        return Record(
            title=title,
            molecule=Molecule(
                atomic_numbers=atomic_numbers,
                atom_charges=block.atom_charges,
                atom_coordinates=coordinates,
                integer_bonds=bonds,
            ),
            record_index=record_index,
            line_number=line_number,
        )

    def _next_line(self, source: LineSource, record_index: int, stage: str) -> str:
        line = source.read()
        if line is None:
            if self.report_truncated_records and self._has_content:
                raise TruncatedRecordError(record_index, stage)
            raise SourceExhausted(stage)
        if line.strip():
            self._has_content = True
        return line

    @staticmethod
    def _parse_counts(line: str) -> tuple[int, int]:
        version = field_text(line, COUNTS_VERSION)
        if version and version != SUPPORTED_VERSION:
            raise DomainError(
                message=f"Unsupported molfile version {version!r}",
                code=MolfileErrorCode.UNSUPPORTED_VERSION,
                details={"version": version, "line": line},
                text=version,
                line=line,
            )
        num_atoms = decode_unsigned(line, COUNTS_NUM_ATOMS, MAX_U16)
        num_bonds = decode_unsigned(line, COUNTS_NUM_BONDS, MAX_U16)
        return num_atoms, num_bonds

    @staticmethod
    def _check_bond(atom1: int, atom2: int, num_atoms: int, line: str) -> None:
        for atom, columns in ((atom1, BOND_ATOM1), (atom2, BOND_ATOM2)):
            if not 1 <= atom <= num_atoms:
                raise DomainError(
                    message=(
                        f"Bond atom index {atom} outside atom block "
                        f"of {num_atoms} atoms"
                    ),
                    code=MolfileErrorCode.BOND_INDEX_OUT_OF_RANGE,
                    details={"atom_index": atom, "line": line},
                    text=field_text(line, columns),
                    line=line,
                )


class V2000Reader:
    """
    Iterator over the records of a MOL V2000 / SD source.

    Yields Record for every well-formed record and ParseError for every
    record that failed; after a failure the next step resumes at the record
    following the next "$$$$" delimiter. Closing the reader (explicitly,
    by leaving a with block, or by exhausting it) releases the source.
    """

    def __init__(self, source: LineSource, settings: ReaderSettings | None = None):
        """
        Initialize the reader.

        Args:
            source: Line source; the reader takes ownership of it.
            settings: Reader settings. Defaults to get_settings().
        """
        self.settings = settings or get_settings()
        self.state = ReaderState.PARSING
        self.records_read = 0
        self.errors_read = 0
        self._source = source
        self._parser = RecordParser(
            validate_bond_indices=self.settings.validate_bond_indices,
            report_truncated_records=self.settings.report_truncated_records,
        )
        self._record_index = 0

    @property
    def source_name(self) -> str:
        return self._source.name

    @property
    def closed(self) -> bool:
        return self._source.closed

    def __iter__(self) -> "V2000Reader":
        return self

    def __next__(self) -> Record | ParseError:
        if self.state is ReaderState.FINISHED:
            raise StopIteration

        if self.state is ReaderState.RESYNCHRONIZING:
            try:
                found = resynchronize(self._source)
            except MolfileIOError as e:
                # No retry after a read failure while skipping
                self.close()
                return self._failed(e)
            if not found:
                self.close()
                raise StopIteration
            self.state = ReaderState.PARSING

        try:
            record = self._parser.parse(self._source, self._record_index)
        except SourceExhausted as e:
            logger.debug(f"{self.source_name}: dropped partial record in {e}")
            self.close()
            raise StopIteration from None
        except TruncatedRecordError as e:
            self.close()
            return self._failed(e)
        except MolfileError as e:
            failed_line = getattr(e, "line", None)
            # A delimiter read as a field already ends the failed record
            if failed_line is None or not is_record_delimiter(failed_line):
                self.state = ReaderState.RESYNCHRONIZING
            return self._failed(e)

        if record is None:
            self.close()
            raise StopIteration

        self._record_index += 1
        self.records_read += 1
        return record

    def _failed(self, exc: MolfileError) -> ParseError:
        """Account for a failed record; raise in strict mode."""
        if exc.line_number is None:
            exc.line_number = self._source.line_number
        record_index = self._record_index
        self._record_index += 1
        self.errors_read += 1

        if self.settings.log_recovered_errors:
            logger.warning(
                f"{self.source_name}: record {record_index} failed at line "
                f"{exc.line_number}: {exc.message}"
            )
        if self.settings.strict:
            raise exc
        return ParseError.from_exception(record_index, exc)

    def close(self) -> None:
        """Stop iterating and release the underlying source."""
        self.state = ReaderState.FINISHED
        self._source.close()

    def __enter__(self) -> "V2000Reader":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
