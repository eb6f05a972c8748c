"""Log a human-readable summary of a resolution."""

from __future__ import annotations

import logging

from prebin.domain.resolution import Fetch, InstallFromSource, Resolution

logger = logging.getLogger(__name__)


def log_resolution(resolution: Resolution, no_symlinks: bool = False) -> None:
    """Describe what will be installed and from where."""
    if isinstance(resolution, Fetch):
        fetcher = resolution.fetcher
        logger.debug(
            f"Found a binary install source: {fetcher.source_name()} ({fetcher.target()})"
        )

        if fetcher.is_third_party():
            logger.warning(
                f"The package will be downloaded from third-party source {fetcher.source_name()}"
            )
        else:
            logger.info(f"The package will be downloaded from {fetcher.source_name()}")

        logger.info("This will install the following binaries:")
        for bin_file in resolution.bin_files:
            logger.info(f"  - {bin_file.preview_bin()}")

        if not no_symlinks:
            logger.info("And create (or update) the following symlinks:")
            for bin_file in resolution.bin_files:
                logger.info(f"  - {bin_file.preview_link()}")

    elif isinstance(resolution, InstallFromSource):
        logger.warning("The package will be installed from source (with cargo)")
