"""Interface adapters: registry, backends, archives and host detection."""

from prebin.adapters.archive_extractor import ArchiveExtractor
from prebin.adapters.crates_io_registry import HttpxCratesIoRegistry
from prebin.adapters.gh_release_fetcher import GhReleaseFetcher
from prebin.adapters.ports import (
    ArchiveExtractorPort,
    FetcherData,
    FetcherFactory,
    FetcherPort,
    RegistryPort,
    TargetDetectorPort,
)
from prebin.adapters.quickinstall_fetcher import QuickInstallFetcher
from prebin.adapters.target_detector import HostTargetDetector

__all__ = [
    "ArchiveExtractor",
    "ArchiveExtractorPort",
    "FetcherData",
    "FetcherFactory",
    "FetcherPort",
    "GhReleaseFetcher",
    "HostTargetDetector",
    "HttpxCratesIoRegistry",
    "QuickInstallFetcher",
    "RegistryPort",
    "TargetDetectorPort",
]
