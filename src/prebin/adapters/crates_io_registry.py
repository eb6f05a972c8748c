"""HTTPX-based implementation of the RegistryPort.

Resolves a version requirement against the crates.io API and reads the
manifest out of the published source archive.
"""

from __future__ import annotations

import asyncio
import logging
import tarfile
import tempfile
from pathlib import Path

import httpx
import semantic_version

from prebin.adapters.cargo_manifest import MANIFEST_FILENAME, load_manifest_path
from prebin.adapters.httpx_download import download_to_file
from prebin.domain.exceptions import FetchError, NoViableVersion, RegistryError
from prebin.domain.package import Manifest
from prebin.domain.settings import DEFAULT_REGISTRY_URL
from prebin.domain.version import parse_version_req

logger = logging.getLogger(__name__)


class HttpxCratesIoRegistry:
    """HTTPX-based adapter for the crates.io registry.

    Implements RegistryPort:
    1. List published versions of the package
    2. Pick the highest non-yanked version matching the requirement
    3. Download the source archive and parse its manifest

    Attributes:
        api_url: Base URL of the registry API.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        temp_dir: Path | None = None,
        api_url: str = DEFAULT_REGISTRY_URL,
    ) -> None:
        """Initialize the registry adapter.

        Args:
            client: Shared async HTTP client. crates.io rejects requests
                without a User-Agent, so the client should set one.
            temp_dir: Directory for downloaded source archives. A fresh
                temporary directory is used per lookup when not given.
            api_url: Base URL of the registry API.
        """
        self._client = client
        self._temp_dir = temp_dir
        self.api_url = api_url.rstrip("/")

    async def fetch_manifest(self, name: str, version_req: str) -> Manifest:
        version = await self.resolve_version(name, version_req)
        logger.info(f"Resolved {name} {version_req} to version {version}")

        if self._temp_dir is not None:
            return await self._download_manifest(name, str(version), self._temp_dir)
        with tempfile.TemporaryDirectory(prefix="prebin-") as tmp:
            return await self._download_manifest(name, str(version), Path(tmp))

    async def resolve_version(
        self, name: str, version_req: str
    ) -> semantic_version.Version:
        """Return the highest published, non-yanked version matching version_req.

        Raises:
            NoViableVersion: If nothing matches.
            RegistryError: If the registry cannot be queried.
            VersionParseError: If version_req is malformed.
        """
        spec = parse_version_req(version_req)
        url = f"{self.api_url}/crates/{name}"
        logger.debug(f"Fetching version list from {url}")

        try:
            response = await self._client.get(url, follow_redirects=True)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            raise RegistryError(
                f"Failed to query registry for {name}: {e}", url=url, original_error=e
            ) from e
        except ValueError as e:
            raise RegistryError(
                f"Registry returned invalid JSON for {name}", url=url, original_error=e
            ) from e

        versions = payload.get("versions", []) if isinstance(payload, dict) else None
        if not isinstance(versions, list):
            raise RegistryError(
                f"Registry returned an unexpected version list for {name}", url=url
            )

        # Pre-releases only match requirements that name one
        allow_prerelease = "-" in version_req
        candidates: list[semantic_version.Version] = []
        for entry in versions:
            if not isinstance(entry, dict):
                logger.debug(f"Skipping malformed registry entry for {name}: {entry!r}")
                continue
            if entry.get("yanked"):
                continue
            try:
                version = semantic_version.Version(entry["num"])
            except (KeyError, TypeError, ValueError):
                logger.debug(f"Skipping unparsable registry entry for {name}: {entry!r}")
                continue
            if version.prerelease and not allow_prerelease:
                continue
            candidates.append(version)

        best = spec.select(candidates)
        if best is None:
            raise NoViableVersion(name, version_req)
        return best

    async def _download_manifest(
        self, name: str, version: str, work_dir: Path
    ) -> Manifest:
        url = f"{self.api_url}/crates/{name}/{version}/download"
        archive = work_dir / f"{name}-{version}.crate"
        unpack_root = work_dir / f"{name}-{version}-src"

        try:
            await download_to_file(self._client, url, archive)
        except FetchError as e:
            raise RegistryError(
                f"Failed to download {name} {version} source",
                url=url,
                original_error=e.original_error,
            ) from e

        return await asyncio.to_thread(
            self._read_manifest, archive, unpack_root, f"{name}-{version}"
        )

    def _read_manifest(self, archive: Path, unpack_root: Path, top_dir: str) -> Manifest:
        try:
            with tarfile.open(archive, mode="r:gz") as tar:
                tar.extractall(unpack_root, filter="data")
        except (tarfile.TarError, OSError) as e:
            raise RegistryError(
                f"Failed to unpack source archive {archive.name}", original_error=e
            ) from e
        return load_manifest_path(unpack_root / top_dir / MANIFEST_FILENAME)
