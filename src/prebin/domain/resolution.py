"""Resolution outcome: the terminal decision of the resolver.

Exactly one of three variants is produced per package:
- Fetch: a precompiled artifact was found, downloaded and verified.
- InstallFromSource: no backend produced a verified artifact set.
- AlreadyUpToDate: the installed version already satisfies the request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from prebin.adapters.ports import FetcherPort
    from prebin.domain.bin_file import BinFile
    from prebin.domain.package import ResolvedPackage


@dataclass(frozen=True)
class Fetch:
    """Install the verified binaries extracted from a backend.

    Attributes:
        fetcher: The backend the artifact came from.
        package: Resolved package metadata.
        name: Package name as requested.
        version_req: Display form of the version requirement used.
        bin_files: Verified binary-file records, in declaration order.
    """

    fetcher: FetcherPort
    package: ResolvedPackage
    name: str
    version_req: str
    bin_files: tuple[BinFile, ...]


@dataclass(frozen=True)
class InstallFromSource:
    """No precompiled artifact is usable; build the package from source."""

    package: ResolvedPackage


@dataclass(frozen=True)
class AlreadyUpToDate:
    """The currently installed version equals the resolved one."""


Resolution = Union[Fetch, InstallFromSource, AlreadyUpToDate]
