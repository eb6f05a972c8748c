"""Domain layer: Entities with zero I/O."""

from prebin.domain.bin_file import BinData, BinFile, infer_bin_dir_template
from prebin.domain.exceptions import PackageContextError, PrebinError
from prebin.domain.metadata import PkgFmt, PkgMeta, PkgOverride
from prebin.domain.package import (
    BinaryProduct,
    Manifest,
    PackageReference,
    ResolvedPackage,
)
from prebin.domain.resolution import (
    AlreadyUpToDate,
    Fetch,
    InstallFromSource,
    Resolution,
)
from prebin.domain.settings import ResolverSettings

__all__ = [
    "AlreadyUpToDate",
    "BinData",
    "BinFile",
    "BinaryProduct",
    "Fetch",
    "InstallFromSource",
    "Manifest",
    "PackageContextError",
    "PackageReference",
    "PkgFmt",
    "PkgMeta",
    "PkgOverride",
    "PrebinError",
    "Resolution",
    "ResolvedPackage",
    "ResolverSettings",
    "infer_bin_dir_template",
]
