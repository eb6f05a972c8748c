"""Use cases: Application logic layer."""

from prebin.usecases.config_parser import ConfigParser
from prebin.usecases.desired_targets import DesiredTargets
from prebin.usecases.discovery import AutoAbortTask, DiscoveryRace, RaceWinner
from prebin.usecases.fetch_verify import collect_bin_files, download_extract_and_verify
from prebin.usecases.manifest_provider import ManifestProvider
from prebin.usecases.resolution_summary import log_resolution
from prebin.usecases.resolver import DEFAULT_FETCHERS, ResolveOptions, Resolver
from prebin.usecases.target_matrix import (
    build_fetcher_data,
    build_fetchers,
    build_target_meta,
)

__all__ = [
    "AutoAbortTask",
    "ConfigParser",
    "DEFAULT_FETCHERS",
    "DesiredTargets",
    "DiscoveryRace",
    "ManifestProvider",
    "RaceWinner",
    "ResolveOptions",
    "Resolver",
    "build_fetcher_data",
    "build_fetchers",
    "build_target_meta",
    "collect_bin_files",
    "download_extract_and_verify",
    "log_resolution",
]
