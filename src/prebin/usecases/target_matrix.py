"""Target/backend matrix builder.

Builds the effective packaging metadata for each desired target and
pairs every target with every backend, target-major and backend-minor.
The discovery race evaluates candidates in exactly this order.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx

from prebin.adapters.ports import FetcherData, FetcherFactory, FetcherPort
from prebin.domain.metadata import PkgMeta, PkgOverride
from prebin.domain.package import ResolvedPackage

logger = logging.getLogger(__name__)


def build_target_meta(meta: PkgMeta, target: str, cli_overrides: PkgOverride) -> PkgMeta:
    """Merge base, per-target and command-line metadata for one target.

    Later layers win field by field: base (without overrides), then the
    manifest's override for exactly this target, then cli_overrides.
    """
    target_meta = meta.clone_without_overrides()

    override = meta.overrides.get(target)
    if override is not None:
        target_meta = target_meta.merge(override)

    return target_meta.merge(cli_overrides)


def build_fetcher_data(
    package: ResolvedPackage,
    targets: Sequence[str],
    cli_overrides: PkgOverride,
) -> list[FetcherData]:
    """Build one FetcherData per target, preserving target order."""
    fetcher_data = []
    for target in targets:
        logger.debug(f"Building metadata for target: {target}")
        target_meta = build_target_meta(package.metadata, target, cli_overrides)
        logger.debug(f"Found metadata: {target_meta!r}")
        fetcher_data.append(
            FetcherData(
                name=package.name,
                target=target,
                version=package.version,
                repo=package.repository,
                meta=target_meta,
            )
        )
    return fetcher_data


def build_fetchers(
    fetcher_data: Sequence[FetcherData],
    factories: Sequence[FetcherFactory],
    client: httpx.AsyncClient,
) -> list[FetcherPort]:
    """Cross every target with every backend.

    Returns:
        Fetchers ordered target-major, backend-minor: all backends for the
        first target, then all backends for the second, and so on.
    """
    return [factory(client, data) for data in fetcher_data for factory in factories]
