"""Test configuration and fixtures for chunkcursor."""

import pytest

# Twenty bytes whose chunk boundaries are easy to reason about
SAMPLE_CONTENT = b"12345678901234567890"


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture
def sample_file(tmp_path):
    """Create a 20-byte file containing the digits 1-0 twice."""
    path = tmp_path / "sample.txt"
    path.write_bytes(SAMPLE_CONTENT)
    return path


@pytest.fixture
def empty_file(tmp_path):
    """Create an empty file."""
    path = tmp_path / "empty.bin"
    path.write_bytes(b"")
    return path
