"""
Settings for the MOL/SD reader.

Environment variables:
- MOLFILE_ENCODING: Text encoding used to open files
- MOLFILE_ENCODING_ERRORS: "strict", "replace" or "ignore"
- MOLFILE_STRICT: Raise on the first bad record instead of yielding errors
- MOLFILE_REPORT_TRUNCATED_RECORDS: Yield an error for a record cut off by
  the end of the file instead of dropping it silently
- MOLFILE_VALIDATE_BOND_INDICES: Reject bonds pointing outside the atom block
- MOLFILE_LOG_RECOVERED_ERRORS: Log a warning for every skipped record
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReaderSettings(BaseSettings):
    """Settings for the streaming V2000 reader."""

    model_config = SettingsConfigDict(
        env_prefix="MOLFILE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Input
    # ==========================================================================

    encoding: str = Field(
        default="utf-8",
        description="Text encoding used to open MOL/SD files",
    )
    encoding_errors: Literal["strict", "replace", "ignore"] = Field(
        default="strict",
        description="How undecodable bytes are handled",
    )

    # ==========================================================================
    # Strictness
    # ==========================================================================

    strict: bool = Field(
        default=False,
        description="Raise on the first bad record instead of yielding an error",
    )
    report_truncated_records: bool = Field(
        default=False,
        description="Yield TRUNCATED_RECORD when the source ends mid-record",
    )
    validate_bond_indices: bool = Field(
        default=False,
        description="Reject bond atom indices outside [1, num_atoms]",
    )

    # ==========================================================================
    # Logging
    # ==========================================================================

    log_recovered_errors: bool = Field(
        default=True,
        description="Log a warning for each record skipped after an error",
    )


@lru_cache
def get_settings() -> ReaderSettings:
    """Get cached settings instance."""
    return ReaderSettings()
