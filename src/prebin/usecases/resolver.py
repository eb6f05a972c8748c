"""Resolver use case: decide how a package will be installed."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import httpx
import semantic_version

from prebin.adapters.gh_release_fetcher import GhReleaseFetcher
from prebin.adapters.ports import FetcherFactory, FetcherPort, RegistryPort
from prebin.adapters.quickinstall_fetcher import QuickInstallFetcher
from prebin.domain.bin_file import BinFile
from prebin.domain.exceptions import (
    MissingPackageSection,
    NoBinariesSpecified,
    PackageContextError,
    PrebinError,
)
from prebin.domain.metadata import PkgOverride
from prebin.domain.package import PackageReference
from prebin.domain.resolution import (
    AlreadyUpToDate,
    Fetch,
    InstallFromSource,
    Resolution,
)
from prebin.domain.version import parse_version, select_version_req
from prebin.usecases.desired_targets import DesiredTargets
from prebin.usecases.discovery import DiscoveryRace
from prebin.usecases.fetch_verify import download_extract_and_verify, temp_bin_path
from prebin.usecases.manifest_provider import ManifestProvider
from prebin.usecases.resolution_summary import log_resolution
from prebin.usecases.target_matrix import build_fetcher_data, build_fetchers

logger = logging.getLogger(__name__)

# Backend priority: first-party release assets before the third-party mirror
DEFAULT_FETCHERS: tuple[FetcherFactory, ...] = (GhReleaseFetcher, QuickInstallFetcher)


@dataclass(frozen=True)
class ResolveOptions:
    """Caller options shared by every package in a batch.

    Attributes:
        desired_targets: Target triples to try, computed once per process.
        version_req: Version requirement given as a separate option.
        manifest_path: Local manifest to use instead of the registry.
        cli_overrides: Packaging overrides that win over manifest metadata.
        no_symlinks: Install versioned binaries only, without symlinks.
    """

    desired_targets: DesiredTargets
    version_req: str | None = None
    manifest_path: Path | None = None
    cli_overrides: PkgOverride = field(default_factory=PkgOverride)
    no_symlinks: bool = False


class Resolver:
    """Use case for resolving a package to prebuilt binaries or a source build.

    Pipeline:
    1. Select the version requirement
    2. Load the manifest (local path or registry)
    3. Stop early if the installed version is already the resolved one
    4. Build the (target x backend) candidate matrix
    5. Race the candidates and verify the first viable artifact
    """

    def __init__(
        self,
        options: ResolveOptions,
        registry: RegistryPort,
        client: httpx.AsyncClient,
        fetcher_factories: Sequence[FetcherFactory] = DEFAULT_FETCHERS,
    ) -> None:
        """Initialize the resolver.

        Args:
            options: Caller options.
            registry: Port for registry lookups.
            client: Shared async HTTP client handed to every backend.
            fetcher_factories: Backends in priority order.
        """
        self._options = options
        self._manifests = ManifestProvider(registry)
        self._client = client
        self._factories = tuple(fetcher_factories)

    async def resolve(
        self,
        reference: PackageReference,
        current_version: semantic_version.Version | None,
        temp_dir: Path,
        install_path: Path,
    ) -> Resolution:
        """Resolve one package and log a summary of the outcome.

        Args:
            reference: Package (and optional inline version) to resolve.
            current_version: Installed version, if any.
            temp_dir: Scratch directory for downloads.
            install_path: Directory binaries will be installed into.

        Returns:
            Fetch, InstallFromSource or AlreadyUpToDate.

        Raises:
            PackageContextError: Wrapping any hard failure, with the package name.
        """
        try:
            resolution = await self._resolve_inner(
                reference, current_version, temp_dir, install_path
            )
        except PackageContextError:
            raise
        except PrebinError as e:
            raise e.package_context(reference.name) from e

        log_resolution(resolution, no_symlinks=self._options.no_symlinks)
        return resolution

    async def _resolve_inner(
        self,
        reference: PackageReference,
        current_version: semantic_version.Version | None,
        temp_dir: Path,
        install_path: Path,
    ) -> Resolution:
        logger.info(f"Resolving package: '{reference}'")

        version_req = select_version_req(reference.version_req, self._options.version_req)

        manifest = await self._manifests.load(
            reference.name, version_req, self._options.manifest_path
        )

        package = manifest.package
        if package is None:
            raise MissingPackageSection(reference.name)

        if current_version is not None:
            new_version = parse_version(package.version)
            if new_version == current_version:
                logger.info(
                    f"{reference.name} v{current_version} is already installed, "
                    "use --force to override"
                )
                return AlreadyUpToDate()

        binaries = [product for product in manifest.binaries if product.name is not None]
        if not binaries:
            raise NoBinariesSpecified()

        targets = await self._options.desired_targets.get()
        fetcher_data = build_fetcher_data(package, targets, self._options.cli_overrides)
        fetchers = build_fetchers(fetcher_data, self._factories, self._client)

        async def attempt(fetcher: FetcherPort) -> tuple[BinFile, ...]:
            bin_path = temp_bin_path(temp_dir, reference.name, fetcher)
            return await download_extract_and_verify(
                fetcher, bin_path, package, install_path, binaries
            )

        winner = await DiscoveryRace(attempt)(fetchers)
        if winner is None:
            return InstallFromSource(package=package)

        return Fetch(
            fetcher=winner.fetcher,
            package=package,
            name=reference.name,
            version_req=version_req,
            bin_files=winner.result,
        )
