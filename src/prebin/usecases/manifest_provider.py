"""Manifest provider use case: local manifest or registry lookup."""

from __future__ import annotations

import asyncio
from pathlib import Path

from prebin.adapters.cargo_manifest import load_manifest_path
from prebin.adapters.ports import RegistryPort
from prebin.domain.package import Manifest


class ManifestProvider:
    """Use case for obtaining a package manifest.

    Reads the manifest from a local path when one is given; otherwise asks
    the registry for the highest version matching the requirement.
    """

    def __init__(self, registry: RegistryPort) -> None:
        """Initialize the manifest provider.

        Args:
            registry: Port used for remote lookups.
        """
        self._registry = registry

    async def load(
        self,
        name: str,
        version_req: str,
        manifest_path: Path | None = None,
    ) -> Manifest:
        """Load the manifest for a package.

        Args:
            name: Package name.
            version_req: Version requirement (ignored for local manifests).
            manifest_path: Local manifest file or package directory.

        Raises:
            InvalidManifestPath: If manifest_path is neither file nor directory.
            ManifestParseError: If the local manifest cannot be parsed.
            NoViableVersion: If no published version matches.
            RegistryError: If the registry cannot be reached.
        """
        if manifest_path is not None:
            return await asyncio.to_thread(load_manifest_path, manifest_path)
        return await self._registry.fetch_manifest(name, version_req)
