"""
Line source for the V2000 reader.

Wraps any iterable of text lines, strips line terminators, counts lines
for diagnostics and turns low-level read failures into MolfileIOError.
When built with LineSource.open() it owns the file handle and closes it
on close().
"""

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TextIO

from packages.molfile.exceptions import MolfileErrorCode, MolfileIOError

logger = logging.getLogger(__name__)


class LineSource:
    """Forward-only reader of text lines."""

    def __init__(
        self,
        lines: Iterable[str],
        name: str = "<lines>",
        handle: TextIO | None = None,
    ):
        """
        Args:
            lines: Iterable of text lines, with or without terminators.
            name: Label used in log messages (usually the file path).
            handle: File object owned by this source, closed on close().
        """
        self.name = name
        self.line_number = 0  # Number of lines read so far
        self._lines: Iterator[str] = iter(lines)
        self._handle = handle
        self._exhausted = False
        self._closed = False

    @classmethod
    def open(
        cls,
        path: str | Path,
        encoding: str = "utf-8",
        errors: str = "strict",
    ) -> "LineSource":
        """
        Open a file for line-by-line reading.

        Raises:
            MolfileIOError: If the file cannot be opened.
        """
        path = Path(path)
        try:
            handle = open(path, encoding=encoding, errors=errors)
        except FileNotFoundError as e:
            raise MolfileIOError(
                message=f"File not found: {path}",
                code=MolfileErrorCode.FILE_NOT_FOUND,
                details={"path": str(path)},
            ) from e
        except OSError as e:
            raise MolfileIOError(
                message=f"Failed to open {path}: {e}",
                details={"path": str(path)},
            ) from e

        logger.debug(f"Opened {path} (encoding={encoding}, errors={errors})")
        return cls(handle, name=str(path), handle=handle)

    @property
    def closed(self) -> bool:
        return self._closed

    def read(self) -> str | None:
        """
        Read the next line without its terminator.

        Returns:
            The line, or None once the source is exhausted.

        Raises:
            MolfileIOError: If the underlying read fails.
        """
        if self._exhausted:
            return None
        try:
            line = next(self._lines)
        except StopIteration:
            self._exhausted = True
            return None
        except (OSError, UnicodeDecodeError, ValueError) as e:
            # ValueError covers reads from a handle closed underneath us
            self.line_number += 1
            raise MolfileIOError(
                message=f"Failed to read line {self.line_number} of {self.name}: {e}",
                details={"source": self.name},
            ) from e

        self.line_number += 1
        return line.rstrip("\r\n")

    def close(self) -> None:
        """Release the owned file handle, if any."""
        self._exhausted = True
        self._closed = True
        if self._handle is not None and not self._handle.closed:
            self._handle.close()
            logger.debug(f"Closed {self.name} after {self.line_number} lines")
