"""Fetch-extract-verify pipeline for a committed backend."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from prebin.adapters.ports import FetcherPort
from prebin.domain.bin_file import BinData, BinFile, infer_bin_dir_template
from prebin.domain.exceptions import DuplicateSourceFilePath
from prebin.domain.metadata import PkgMeta
from prebin.domain.package import BinaryProduct, ResolvedPackage

logger = logging.getLogger(__name__)


def temp_bin_path(temp_dir: Path, name: str, fetcher: FetcherPort) -> Path:
    """Unique unpack location for one backend attempt."""
    return temp_dir / f"bin-{name}-{fetcher.target()}-{fetcher.fetcher_name()}"


async def download_extract_and_verify(
    fetcher: FetcherPort,
    bin_path: Path,
    package: ResolvedPackage,
    install_path: Path,
    binaries: Sequence[BinaryProduct],
) -> tuple[BinFile, ...]:
    """Download and unpack an artifact, then check every binary is present.

    Args:
        fetcher: Backend whose find() returned True.
        bin_path: Where to unpack the artifact; owned by this attempt.
        package: The resolved package.
        install_path: Directory binaries will be installed into.
        binaries: Declared binaries; must not be empty.

    Returns:
        Verified binary-file records in declaration order.

    Raises:
        FetchError, ExtractError: If download or unpacking fails.
        DuplicateSourceFilePath: If two binaries map to the same source file.
        ExpectedFileMissing: If a binary is absent from the unpacked artifact.
    """
    meta = fetcher.target_meta()

    await fetcher.fetch_and_extract(bin_path)

    if meta.pub_key is not None:
        # Signature verification is not implemented; the key is only reported.
        logger.debug(
            f"Found public key for {package.name}, but signatures are not verified"
        )

    return await asyncio.to_thread(
        _collect_and_check,
        fetcher,
        package,
        meta,
        binaries,
        bin_path,
        install_path,
    )


def _collect_and_check(
    fetcher: FetcherPort,
    package: ResolvedPackage,
    meta: PkgMeta,
    binaries: Sequence[BinaryProduct],
    bin_path: Path,
    install_path: Path,
) -> tuple[BinFile, ...]:
    bin_files = collect_bin_files(
        fetcher, package, meta, binaries, bin_path, install_path
    )
    for bin_file in bin_files:
        bin_file.check_source_exists()
    return bin_files


def collect_bin_files(
    fetcher: FetcherPort,
    package: ResolvedPackage,
    meta: PkgMeta,
    binaries: Sequence[BinaryProduct],
    bin_path: Path,
    install_path: Path,
) -> tuple[BinFile, ...]:
    """Compute the binary-file records for an unpacked artifact.

    Uses the metadata's bin-dir template, or infers one from the unpacked
    layout, and renders source/destination paths for every binary.

    Raises:
        DuplicateSourceFilePath: If two binaries render to the same source.
        TemplateRenderError: If the bin-dir template uses an unset variable.
    """
    bin_data = BinData(
        name=package.name,
        target=fetcher.target(),
        version=package.version,
        repo=package.repository,
        meta=meta,
        bin_path=bin_path,
        install_path=install_path,
    )

    bin_dir = meta.bin_dir if meta.bin_dir is not None else infer_bin_dir_template(bin_data)
    logger.debug(f"Using bin-dir template: {bin_dir}")

    bin_files = tuple(BinFile.from_product(bin_data, p, bin_dir) for p in binaries)

    sources: set[Path] = set()
    for bin_file in bin_files:
        if bin_file.source in sources:
            raise DuplicateSourceFilePath(bin_file.source)
        sources.add(bin_file.source)

    return bin_files
