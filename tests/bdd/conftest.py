"""Shared fixtures for BDD tests."""

from pathlib import Path

import pytest


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Create a scratch directory for downloads.

    Returns:
        Path to an existing temporary directory.
    """
    scratch = tmp_path / "tmp"
    scratch.mkdir()
    return scratch


@pytest.fixture
def install_path(tmp_path: Path) -> Path:
    """Return the directory binaries would be installed into.

    Returns:
        Path that is not created (resolution never writes there).
    """
    return tmp_path / "bin"
