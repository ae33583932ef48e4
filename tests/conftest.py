"""
Pytest configuration and fixtures.

Provides reusable fixtures for reader testing:
- override_env: Isolate MOLFILE_* environment variables and the settings cache
- mol_files_dir: Directory of the bundled V2000 fixture files
- write_sdf: Write SD content to a temporary file and return its path
"""

import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from packages.molfile.config import get_settings

DATA_DIR = Path(__file__).parent / "data"


# =============================================================================
# Environment Fixture
# =============================================================================


@pytest.fixture(autouse=True)
def override_env() -> Generator[None, None, None]:
    """
    Remove MOLFILE_* variables and reset cached settings around each test.

    Scope: function
    Autouse: True (automatically used by all tests)
    """
    original_env = os.environ.copy()
    for key in list(os.environ):
        if key.startswith("MOLFILE_"):
            del os.environ[key]
    get_settings.cache_clear()

    yield

    os.environ.clear()
    os.environ.update(original_env)
    get_settings.cache_clear()


# =============================================================================
# File Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def mol_files_dir() -> Path:
    """Directory holding 1.mol and 2.mol."""
    return DATA_DIR / "v2000_mol_files"


@pytest.fixture
def write_sdf(tmp_path: Path) -> Callable[..., Path]:
    """
    Return a helper writing SD content to a temporary file.

    Usage:
        path = write_sdf(make_sdf(ETHANOL_MOL), name="one.sdf")
    """

    def _write(content: str, name: str = "records.sdf") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
