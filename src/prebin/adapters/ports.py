"""Port interfaces for the prebin core package.

Ports define the contracts that adapters must implement.
These are Protocol classes (structural subtyping) for flexible testing.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    import httpx

    from prebin.domain.metadata import PkgFmt, PkgMeta
    from prebin.domain.package import Manifest


@dataclass(frozen=True)
class FetcherData:
    """Per-target inputs handed to every backend.

    Shared read-only between all probes for the same target.

    Attributes:
        name: Package name.
        target: Target triple.
        version: Package version.
        repo: Repository URL, if declared.
        meta: Effective packaging metadata for this target.
    """

    name: str
    target: str
    version: str
    repo: str | None
    meta: PkgMeta


@runtime_checkable
class FetcherPort(Protocol):
    """Port interface for a source of precompiled artifacts.

    Each implementation is bound to one package/target pair at construction.

    Contract:
        - find() answers whether an artifact exists, without downloading it
        - fetch_and_extract(dst) may only be called after find() returned True
        - fetch_and_extract(dst) leaves the unpacked artifact at dst
        - Network failures surface as PrebinError subclasses
    """

    async def find(self) -> bool:
        """Check whether an artifact exists for this target and version.

        Returns:
            True if an artifact is available.

        Raises:
            FetchError: If the existence check itself fails.
        """
        ...

    async def fetch_and_extract(self, dst: Path) -> None:
        """Download the artifact and unpack it to dst.

        Raises:
            FetchError: If the download fails.
            ExtractError: If unpacking fails.
        """
        ...

    def target(self) -> str:
        """Return the target triple this fetcher serves."""
        ...

    def fetcher_name(self) -> str:
        """Return a short identifier for the backend kind."""
        ...

    def source_name(self) -> str:
        """Return a human-readable name for the artifact source."""
        ...

    def is_third_party(self) -> bool:
        """Return True if artifacts are not published by the package authors."""
        ...

    def target_meta(self) -> PkgMeta:
        """Return the packaging metadata this backend uses for the target."""
        ...


FetcherFactory = Callable[["httpx.AsyncClient", FetcherData], FetcherPort]


@runtime_checkable
class RegistryPort(Protocol):
    """Port interface for looking up packages in a remote registry.

    Contract:
        - fetch_manifest() resolves the highest version satisfying version_req
        - The returned Manifest describes exactly that version
    """

    async def fetch_manifest(self, name: str, version_req: str) -> Manifest:
        """Fetch the manifest of the best matching published version.

        Raises:
            NoViableVersion: If no published version matches.
            RegistryError: If the registry cannot be reached.
        """
        ...


@runtime_checkable
class TargetDetectorPort(Protocol):
    """Port interface for detecting the target triples the host can run.

    Contract:
        - detect() returns a non-empty list, most preferred target first
        - May raise PrebinError if the host platform is not supported
    """

    def detect(self) -> list[str]:
        """Detect target triples for the current host."""
        ...


@runtime_checkable
class ArchiveExtractorPort(Protocol):
    """Port interface for unpacking downloaded artifacts.

    Contract:
        - extract() leaves a directory at dst for archive formats,
          or a single file at dst for the bin format
        - Entries must not escape dst
    """

    def extract(self, archive: Path, fmt: PkgFmt, dst: Path) -> None:
        """Unpack archive into dst.

        Raises:
            ExtractError: If the archive is corrupt or unsafe.
        """
        ...
