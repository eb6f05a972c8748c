"""Release-asset backend.

Looks for artifacts attached to the package's own releases, either at the
URL declared in its packaging metadata or at a few conventional locations
under its repository.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from urllib.parse import urlparse

import httpx

from prebin.adapters.archive_extractor import ArchiveExtractor
from prebin.adapters.httpx_download import download_to_file, remote_exists
from prebin.adapters.ports import ArchiveExtractorPort, FetcherData
from prebin.domain.exceptions import FetchError
from prebin.domain.metadata import PkgMeta
from prebin.domain.templates import render_template

logger = logging.getLogger(__name__)

DEFAULT_PKG_URLS = (
    "{ repo }/releases/download/v{ version }/{ name }-{ target }-v{ version }{ archive-format }",
    "{ repo }/releases/download/v{ version }/{ name }-v{ version }-{ target }{ archive-format }",
    "{ repo }/releases/download/{ version }/{ name }-{ target }-v{ version }{ archive-format }",
    "{ repo }/releases/download/v{ version }/{ name }-{ version }-{ target }{ archive-format }",
)


class GhReleaseFetcher:
    """First-party backend for artifacts published with the package's releases.

    Implements FetcherPort. Candidate URLs are probed in order and the
    first one that exists is remembered for fetch_and_extract().
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        data: FetcherData,
        extractor: ArchiveExtractorPort | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            client: Shared async HTTP client.
            data: Package/target inputs, including the effective metadata.
            extractor: Archive extractor; defaults to ArchiveExtractor.
        """
        self._client = client
        self._data = data
        self._extractor = extractor or ArchiveExtractor()
        self._url: str | None = None

    def candidate_urls(self) -> list[str]:
        """Render every candidate artifact URL, most specific first.

        Returns an empty list when neither an explicit pkg-url nor a
        repository is known.

        Raises:
            TemplateRenderError: If the declared pkg-url uses an unset variable.
        """
        data = self._data
        repo = _normalize_repo(data.repo)
        if data.meta.pkg_url is not None:
            templates: tuple[str, ...] = (data.meta.pkg_url,)
        elif repo is not None:
            templates = DEFAULT_PKG_URLS
        else:
            return []

        urls: list[str] = []
        for template in templates:
            for ext in data.meta.effective_pkg_fmt.extensions:
                url = render_template(
                    template,
                    {
                        "name": data.name,
                        "version": data.version,
                        "target": data.target,
                        "repo": repo,
                        "archive-format": ext,
                        "format": ext.lstrip("."),
                        "binary-ext": ".exe" if "windows" in data.target else "",
                    },
                )
                if url not in urls:
                    urls.append(url)
        return urls

    async def find(self) -> bool:
        for url in self.candidate_urls():
            if await remote_exists(self._client, url):
                self._url = url
                return True
        return False

    async def fetch_and_extract(self, dst: Path) -> None:
        if self._url is None:
            raise FetchError("find() must succeed before fetch_and_extract()")

        fmt = self._data.meta.effective_pkg_fmt
        archive = dst.with_name(f"{dst.name}.download")
        try:
            await download_to_file(self._client, self._url, archive)
            await asyncio.to_thread(self._extractor.extract, archive, fmt, dst)
        finally:
            archive.unlink(missing_ok=True)

    def target(self) -> str:
        return self._data.target

    def fetcher_name(self) -> str:
        return "gh-release"

    def source_name(self) -> str:
        """Host of the found artifact, else of the repository.

        Never renders templates, so it is safe to call after find() failed.
        """
        url = self._url or _normalize_repo(self._data.repo)
        if url is None:
            return "release assets"
        return urlparse(url).netloc or url

    def is_third_party(self) -> bool:
        return False

    def target_meta(self) -> PkgMeta:
        return self._data.meta


def _normalize_repo(repo: str | None) -> str | None:
    if repo is None:
        return None
    return repo.rstrip("/").removesuffix(".git")
