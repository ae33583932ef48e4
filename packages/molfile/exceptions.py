"""
MOL/SD reader exceptions.

Provides structured error handling with record-level context for streaming
ingestion. Exceptions are raised by the field decoders and the record
parser; the iterator turns them into ParseError values so that one bad
record never stops the rest of the file.
"""

from dataclasses import dataclass, field
from enum import Enum


class MolfileErrorCode(str, Enum):
    """Error codes for MOL V2000 / SD parsing."""

    # I/O errors
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    IO_FAILURE = "IO_FAILURE"
    EMPTY_INPUT = "EMPTY_INPUT"

    # Field errors
    INTEGER_FIELD = "INTEGER_FIELD"
    FLOAT_FIELD = "FLOAT_FIELD"

    # Domain errors
    UNKNOWN_ELEMENT = "UNKNOWN_ELEMENT"
    UNSUPPORTED_VERSION = "UNSUPPORTED_VERSION"
    BOND_INDEX_OUT_OF_RANGE = "BOND_INDEX_OUT_OF_RANGE"
    CHARGE_INDEX_OUT_OF_RANGE = "CHARGE_INDEX_OUT_OF_RANGE"

    # Structure errors
    TRUNCATED_RECORD = "TRUNCATED_RECORD"


class MolfileError(Exception):
    """Base exception for MOL/SD parsing."""

    def __init__(
        self,
        message: str,
        code: MolfileErrorCode,
        details: dict | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.line_number: int | None = None


class MolfileIOError(MolfileError):
    """Raised when the underlying file cannot be opened or read."""

    def __init__(
        self,
        message: str,
        code: MolfileErrorCode = MolfileErrorCode.IO_FAILURE,
        details: dict | None = None,
    ):
        super().__init__(message, code=code, details=details)


class FieldDecodeError(MolfileError):
    """
    Raised when a fixed-column field cannot be decoded.

    Keeps the offending (trimmed) substring and the full source line as
    separate attributes so callers can inspect them without parsing the
    message.
    """

    def __init__(self, message: str, code: MolfileErrorCode, text: str, line: str):
        super().__init__(message, code=code, details={"text": text, "line": line})
        self.text = text
        self.line = line


class IntegerFieldError(FieldDecodeError):
    """Raised when an integer field is malformed or out of range."""

    def __init__(self, text: str, line: str):
        super().__init__(
            f"Invalid integer field {text!r}",
            code=MolfileErrorCode.INTEGER_FIELD,
            text=text,
            line=line,
        )


class FloatFieldError(FieldDecodeError):
    """Raised when a coordinate field is not a finite decimal number."""

    def __init__(self, text: str, line: str):
        super().__init__(
            f"Invalid float field {text!r}",
            code=MolfileErrorCode.FLOAT_FIELD,
            text=text,
            line=line,
        )


class DomainError(MolfileError):
    """
    Raised when a field decodes but makes no sense (unknown element, ...).

    Raised from a source line, it carries the same text/line context as
    FieldDecodeError.
    """

    def __init__(
        self,
        message: str,
        code: MolfileErrorCode,
        details: dict | None = None,
        text: str | None = None,
        line: str | None = None,
    ):
        super().__init__(message, code=code, details=details)
        self.text = text
        self.line = line


class TruncatedRecordError(MolfileError):
    """Raised when the source ends in the middle of a record."""

    def __init__(self, record_index: int, stage: str):
        super().__init__(
            f"Source ended inside record {record_index} ({stage})",
            code=MolfileErrorCode.TRUNCATED_RECORD,
            details={"stage": stage},
        )


@dataclass
class ParseError:
    """Error record for a failed molecule record."""

    record_index: int
    error_code: MolfileErrorCode
    error_message: str
    text: str | None = None  # Offending substring for field and domain errors
    line: str | None = None  # Full source line for field and domain errors
    line_number: int | None = None  # 1-based line in the source
    details: dict = field(default_factory=dict)

    @classmethod
    def from_exception(cls, record_index: int, exc: MolfileError) -> "ParseError":
        """Build an error record from a raised MolfileError."""
        return cls(
            record_index=record_index,
            error_code=exc.code,
            error_message=exc.message,
            text=getattr(exc, "text", None),
            line=getattr(exc, "line", None),
            line_number=exc.line_number,
            details=dict(exc.details),
        )
