"""Cargo manifest reader.

Reads a package manifest from disk and maps it onto domain objects:
the [package] section, the declared [[bin]] list (completed from the
source tree the way the build tool discovers binaries), and the
[package.metadata.binstall] packaging metadata table.
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from prebin.domain.exceptions import (
    InvalidManifestPath,
    ManifestParseError,
    PrebinConfigError,
)
from prebin.domain.metadata import PkgMeta
from prebin.domain.package import BinaryProduct, Manifest, ResolvedPackage

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "Cargo.toml"


def load_manifest_path(manifest_path: Path) -> Manifest:
    """Load a manifest from a file or from a package directory.

    Args:
        manifest_path: A manifest file, or a directory containing one.

    Returns:
        The parsed Manifest.

    Raises:
        InvalidManifestPath: If the path is neither a file nor a directory.
        ManifestParseError: If the manifest cannot be read or parsed.
    """
    if manifest_path.is_dir():
        path = manifest_path / MANIFEST_FILENAME
    elif manifest_path.is_file():
        path = manifest_path
    else:
        raise InvalidManifestPath(manifest_path)

    logger.debug(f"Reading manifest at local path: {path}")

    try:
        with path.open("rb") as f:
            document = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ManifestParseError(path, str(e), e) from e
    except OSError as e:
        raise ManifestParseError(path, f"cannot read file: {e}", e) from e

    return parse_manifest(document, path)


def parse_manifest(document: Mapping[str, Any], path: Path) -> Manifest:
    """Map a decoded manifest document onto a Manifest.

    Args:
        document: Decoded TOML document.
        path: Manifest file the document came from. Its directory is
            searched for binaries that are not declared explicitly.

    Raises:
        ManifestParseError: If a field has the wrong type.
    """
    package_table = document.get("package")
    package = _parse_package(package_table, path) if package_table is not None else None

    binaries = _parse_binaries(document.get("bin", []), path)
    if package is not None and package_table.get("autobins", True) is not False:
        declared = {b.name for b in binaries}
        for product in _discover_binaries(package.name, path.parent):
            if product.name not in declared:
                binaries.append(product)

    return Manifest(package=package, binaries=tuple(binaries))


def _parse_package(table: Any, path: Path) -> ResolvedPackage:
    if not isinstance(table, Mapping):
        raise ManifestParseError(path, "[package] must be a table")

    name = table.get("name")
    if not isinstance(name, str) or not name:
        raise ManifestParseError(path, "package.name must be a non-empty string")

    version = table.get("version", "0.0.0")
    if not isinstance(version, str):
        raise ManifestParseError(
            path, f"package.version must be a string, got: {version!r}"
        )

    repository = table.get("repository")
    if not isinstance(repository, str):
        # Workspace-inherited or absent
        repository = None

    metadata = table.get("metadata", {})
    binstall = metadata.get("binstall", {}) if isinstance(metadata, Mapping) else {}
    if not isinstance(binstall, Mapping):
        raise ManifestParseError(path, "package.metadata.binstall must be a table")
    try:
        meta = PkgMeta.from_mapping(binstall)
    except PrebinConfigError as e:
        raise ManifestParseError(path, str(e), e) from e

    return ResolvedPackage(
        name=name,
        version=version,
        repository=repository,
        metadata=meta,
    )


def _parse_binaries(entries: Any, path: Path) -> list[BinaryProduct]:
    if not isinstance(entries, list):
        raise ManifestParseError(path, "[[bin]] must be an array of tables")

    binaries: list[BinaryProduct] = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            raise ManifestParseError(path, "[[bin]] entries must be tables")
        name = entry.get("name")
        bin_path = entry.get("path")
        binaries.append(
            BinaryProduct(
                name=name if isinstance(name, str) and name else None,
                path=bin_path if isinstance(bin_path, str) else None,
            )
        )
    return binaries


def _discover_binaries(package_name: str, root: Path) -> list[BinaryProduct]:
    """Find binaries by source layout: src/main.rs and src/bin/*."""
    found: list[BinaryProduct] = []

    if (root / "src" / "main.rs").is_file():
        found.append(BinaryProduct(name=package_name, path="src/main.rs"))

    bin_dir = root / "src" / "bin"
    if bin_dir.is_dir():
        for entry in sorted(bin_dir.iterdir()):
            if entry.is_file() and entry.suffix == ".rs":
                found.append(
                    BinaryProduct(name=entry.stem, path=f"src/bin/{entry.name}")
                )
            elif entry.is_dir() and (entry / "main.rs").is_file():
                found.append(
                    BinaryProduct(name=entry.name, path=f"src/bin/{entry.name}/main.rs")
                )

    return found
