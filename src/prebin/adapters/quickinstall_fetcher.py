"""Community-mirror backend.

Serves artifacts built and hosted by a third party for packages that do
not publish their own. Archives always contain the binaries at the root.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from pathlib import Path

import httpx

from prebin.adapters.archive_extractor import ArchiveExtractor
from prebin.adapters.httpx_download import download_to_file, remote_exists
from prebin.adapters.ports import ArchiveExtractorPort, FetcherData
from prebin.domain.metadata import PkgFmt, PkgMeta

QUICKINSTALL_URL = (
    "https://github.com/cargo-bins/cargo-quickinstall/releases/download/"
    "{name}-{version}-{target}/{name}-{version}-{target}.tar.gz"
)


class QuickInstallFetcher:
    """Third-party backend for the QuickInstall mirror.

    Implements FetcherPort.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        data: FetcherData,
        extractor: ArchiveExtractorPort | None = None,
    ) -> None:
        self._client = client
        self._data = data
        self._extractor = extractor or ArchiveExtractor()

    @property
    def url(self) -> str:
        """Artifact URL for this package/target."""
        return QUICKINSTALL_URL.format(
            name=self._data.name,
            version=self._data.version,
            target=self._data.target,
        )

    async def find(self) -> bool:
        return await remote_exists(self._client, self.url)

    async def fetch_and_extract(self, dst: Path) -> None:
        archive = dst.with_name(f"{dst.name}.download")
        try:
            await download_to_file(self._client, self.url, archive)
            await asyncio.to_thread(self._extractor.extract, archive, PkgFmt.TGZ, dst)
        finally:
            archive.unlink(missing_ok=True)

    def target(self) -> str:
        return self._data.target

    def fetcher_name(self) -> str:
        return "quickinstall"

    def source_name(self) -> str:
        return "QuickInstall"

    def is_third_party(self) -> bool:
        return True

    def target_meta(self) -> PkgMeta:
        # Mirror archives have a fixed layout regardless of package metadata.
        return replace(
            self._data.meta,
            pkg_fmt=PkgFmt.TGZ,
            bin_dir="{ bin }{ binary-ext }",
        )
