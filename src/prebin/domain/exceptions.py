"""Domain exceptions.

Exception hierarchy:
- PrebinError: Base domain exception. Everything the resolver raises on
  purpose inherits from this.
  - Specification errors (caller misuse): ConflictingVersionSpecifiers,
    InvalidManifestPath, MissingPackageSection, NoBinariesSpecified,
    PrebinConfigError.
  - Data errors: VersionParseError, DuplicateSourceFilePath,
    ExpectedFileMissing, TemplateRenderError, ManifestParseError.
  - I/O errors: RegistryError, NoViableVersion, FetchError, ExtractError.
  - PackageContextError: any of the above annotated with the package name.
"""

from __future__ import annotations

from pathlib import Path


class PrebinError(Exception):
    """Base exception for all resolver errors.

    Adapters wrap library errors (httpx, tarfile, tomllib) into subclasses
    of this so use cases only ever need to catch one root type.
    """

    def package_context(self, package_name: str) -> PackageContextError:
        """Annotate this error with the package it occurred for.

        Args:
            package_name: Name of the package being resolved.

        Returns:
            PackageContextError wrapping this error.
        """
        return PackageContextError(package_name, self)


class PrebinConfigError(PrebinError):
    """Raised when resolver configuration is invalid."""


class ConflictingVersionSpecifiers(PrebinError):
    """Raised when a version is given both inline (name@version) and as an option."""

    def __init__(self) -> None:
        super().__init__(
            "version specified both in the package reference and with --version; "
            "use only one of them"
        )


class InvalidManifestPath(PrebinError):
    """Raised when the manifest path is neither a file nor a directory."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"manifest path is neither a file nor a directory: {path}")
        self.path = path


class ManifestParseError(PrebinError):
    """Raised when a package manifest cannot be read or parsed.

    Attributes:
        path: Manifest file that failed to parse.
        original_error: The underlying exception, if any.
    """

    def __init__(
        self,
        path: Path,
        message: str,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(f"failed to parse manifest {path}: {message}")
        self.path = path
        self.original_error = original_error


class MissingPackageSection(PrebinError):
    """Raised when a manifest has no [package] section."""

    def __init__(self, name: str) -> None:
        super().__init__(f"manifest for {name!r} has no [package] section")
        self.name = name


class NoBinariesSpecified(PrebinError):
    """Raised when a package declares no named binaries."""

    def __init__(self) -> None:
        super().__init__("package does not declare any binaries")


class VersionParseError(PrebinError):
    """Raised when a version or version requirement cannot be parsed.

    Attributes:
        version: The offending version string.
        error: Diagnostic from the version parser.
    """

    def __init__(self, version: str, error: str) -> None:
        super().__init__(f"failed to parse version {version!r}: {error}")
        self.version = version
        self.error = error


class DuplicateSourceFilePath(PrebinError):
    """Raised when two declared binaries render to the same source file."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"source file path {path} is used by more than one binary")
        self.path = path


class ExpectedFileMissing(PrebinError):
    """Raised when an expected binary is not present in the extracted archive."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"expected file {path} is missing from the extracted archive")
        self.path = path


class TemplateRenderError(PrebinError):
    """Raised when a path or URL template references an unknown variable."""


class RegistryError(PrebinError):
    """Raised when the package registry cannot be queried.

    Attributes:
        message: Human-readable error description.
        url: The URL that failed (optional).
        original_error: The underlying exception that caused the failure (optional).
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.original_error = original_error


class NoViableVersion(PrebinError):
    """Raised when no published version satisfies the requirement."""

    def __init__(self, name: str, version_req: str) -> None:
        super().__init__(f"no published version of {name!r} matches {version_req!r}")
        self.name = name
        self.version_req = version_req


class FetchError(PrebinError):
    """Raised when an artifact download fails.

    Attributes:
        message: Human-readable error description.
        url: The URL that failed to download (optional).
        original_error: The underlying exception that caused the failure (optional).
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.original_error = original_error


class ExtractError(PrebinError):
    """Raised when a downloaded archive cannot be unpacked."""

    def __init__(self, path: Path, original_error: Exception | None = None) -> None:
        detail = f": {original_error}" if original_error is not None else ""
        super().__init__(f"failed to extract {path}{detail}")
        self.path = path
        self.original_error = original_error


class PackageContextError(PrebinError):
    """A resolver error annotated with the package it occurred for.

    Batched resolutions use the package name to attribute failures.

    Attributes:
        package_name: Name of the package being resolved.
        error: The wrapped error.
    """

    def __init__(self, package_name: str, error: PrebinError) -> None:
        super().__init__(f"for package {package_name}: {error}")
        self.package_name = package_name
        self.error = error

    def package_context(self, package_name: str) -> PackageContextError:
        # Already annotated; keep the innermost package name.
        return self
