"""Package-level value objects."""

from __future__ import annotations

from dataclasses import dataclass, field

from prebin.domain.exceptions import PrebinError
from prebin.domain.metadata import PkgMeta


@dataclass(frozen=True)
class PackageReference:
    """What the caller asked to install.

    Attributes:
        name: Package name.
        version_req: Version requirement embedded in the reference, if any.
    """

    name: str
    version_req: str | None = None

    def __post_init__(self) -> None:
        """Validate the package name."""
        if not self.name or not self.name.strip():
            raise PrebinError("package name cannot be empty")

    @classmethod
    def parse(cls, text: str) -> PackageReference:
        """Parse ``name`` or ``name@version_req``.

        Examples:
            >>> PackageReference.parse("ripgrep@^14")
            PackageReference(name='ripgrep', version_req='^14')
        """
        name, sep, version_req = text.partition("@")
        if sep and not version_req.strip():
            raise PrebinError(f"empty version requirement in {text!r}")
        return cls(name=name.strip(), version_req=version_req.strip() or None)

    def __str__(self) -> str:
        if self.version_req is None:
            return self.name
        return f"{self.name}@{self.version_req}"


@dataclass(frozen=True)
class BinaryProduct:
    """An entry in the package's declared binary list.

    Only entries with a name are installable.
    """

    name: str | None
    path: str | None = None


@dataclass(frozen=True)
class ResolvedPackage:
    """Package metadata for one concrete version.

    Attributes:
        name: Package name.
        version: Version string as published (parsed only where compared).
        repository: Source repository URL, if declared.
        metadata: Base packaging metadata from the manifest.
    """

    name: str
    version: str
    repository: str | None = None
    metadata: PkgMeta = field(default_factory=PkgMeta)


@dataclass(frozen=True)
class Manifest:
    """A parsed package manifest.

    Attributes:
        package: The [package] section, or None when absent.
        binaries: Declared binaries, in manifest order.
    """

    package: ResolvedPackage | None
    binaries: tuple[BinaryProduct, ...] = ()
