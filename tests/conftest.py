"""Test configuration and fixtures for Europass CV tests."""

import json
import sys
from pathlib import Path

import pytest

# Add src to path for development testing
_src_dir = Path(__file__).parent.parent / "src"
if _src_dir.exists():
    sys.path.insert(0, str(_src_dir))


# ==============================================================================
# Fixture paths
# ==============================================================================

FIXTURES_DIR = Path(__file__).parent / "fixtures"
FIXTURES_VALID_DIR = FIXTURES_DIR / "valid"
FIXTURES_INVALID_DIR = FIXTURES_DIR / "invalid"

# Smallest byte strings the MIME lookup cares about; content is never decoded
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 16


# ==============================================================================
# JSON fixture helpers
# ==============================================================================

def load_json_fixture(fixture_path: Path) -> dict:
    """Load a JSON fixture file."""
    with open(fixture_path, "r", encoding="utf-8") as f:
        return json.load(f)


# ==============================================================================
# Shared pytest fixtures
# ==============================================================================

@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def minimal_cv_data() -> dict:
    """Return the minimal CV fixture (name, email, two skills)."""
    return load_json_fixture(FIXTURES_VALID_DIR / "minimal.json")


@pytest.fixture
def complete_cv_data() -> dict:
    """Return a CV with every section populated, keys in scrambled order."""
    return load_json_fixture(FIXTURES_VALID_DIR / "complete.json")


@pytest.fixture
def minimal_cv_file() -> Path:
    return FIXTURES_VALID_DIR / "minimal.json"


@pytest.fixture
def complete_cv_file() -> Path:
    return FIXTURES_VALID_DIR / "complete.json"


@pytest.fixture
def blank_name_cv_file() -> Path:
    return FIXTURES_INVALID_DIR / "blank_name.json"


@pytest.fixture
def broken_cv_file() -> Path:
    return FIXTURES_INVALID_DIR / "broken.json"


@pytest.fixture
def png_file(tmp_path) -> Path:
    """A small .png file inside tmp_path."""
    path = tmp_path / "logo.png"
    path.write_bytes(PNG_BYTES)
    return path


@pytest.fixture
def jpeg_file(tmp_path) -> Path:
    """A small .jpg file inside tmp_path."""
    path = tmp_path / "photo.jpg"
    path.write_bytes(JPEG_BYTES)
    return path
