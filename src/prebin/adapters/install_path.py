"""Default install directory lookup."""

from __future__ import annotations

import os
from pathlib import Path


def default_install_path() -> Path:
    """Get the directory binaries are installed into.

    Searches in priority order:
    1. PREBIN_INSTALL_PATH environment variable
    2. $CARGO_HOME/bin
    3. ~/.cargo/bin

    Returns:
        Path to the install directory (not created).
    """
    env_path = os.environ.get("PREBIN_INSTALL_PATH")
    if env_path:
        return Path(env_path).expanduser()

    cargo_home = os.environ.get("CARGO_HOME")
    if cargo_home:
        return Path(cargo_home).expanduser() / "bin"

    home = Path(os.environ.get("HOME", "~")).expanduser()
    return home / ".cargo" / "bin"
