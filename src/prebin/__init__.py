"""prebin: resolve precompiled binaries for packages instead of building from source."""

__version__ = "0.1.0"

from prebin.domain.exceptions import PackageContextError, PrebinError
from prebin.domain.package import PackageReference
from prebin.domain.resolution import AlreadyUpToDate, Fetch, InstallFromSource
from prebin.usecases.desired_targets import DesiredTargets
from prebin.usecases.resolver import ResolveOptions, Resolver

__all__ = [
    "AlreadyUpToDate",
    "DesiredTargets",
    "Fetch",
    "InstallFromSource",
    "PackageContextError",
    "PackageReference",
    "PrebinError",
    "ResolveOptions",
    "Resolver",
]
