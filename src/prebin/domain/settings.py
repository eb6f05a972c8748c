"""Resolver settings domain entity."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from prebin.domain.exceptions import PrebinConfigError
from prebin.domain.metadata import PkgOverride

DEFAULT_REGISTRY_URL = "https://crates.io/api/v1"


@dataclass(frozen=True)
class ResolverSettings:
    """Resolver configuration.

    Value object holding everything the resolver needs that does not come
    from the package itself.

    Attributes:
        install_path: Directory binaries are installed into.
        targets: Target triples to try, most preferred first. Empty means
            detect from the host.
        no_symlinks: Install versioned binaries only, without symlinks.
        registry_url: Base URL of the registry API.
        timeout_seconds: Timeout for each HTTP request in seconds.
        cli_overrides: Packaging overrides that win over manifest metadata.
    """

    install_path: Path
    targets: tuple[str, ...] = ()
    no_symlinks: bool = False
    registry_url: str = DEFAULT_REGISTRY_URL
    timeout_seconds: float = 30.0
    cli_overrides: PkgOverride = field(default_factory=PkgOverride)

    def __post_init__(self) -> None:
        """Validate settings."""
        self._validate_targets()
        self._validate_registry_url()
        self._validate_timeout()

    def _validate_targets(self) -> None:
        """Validate each target triple is a non-empty, whitespace-free string."""
        for target in self.targets:
            if not target or target != target.strip() or " " in target:
                raise PrebinConfigError(f"invalid target triple: {target!r}")

    def _validate_registry_url(self) -> None:
        """Validate registry_url is an http(s) URL."""
        if not self.registry_url.startswith(("http://", "https://")):
            raise PrebinConfigError(
                f"registry_url must start with http:// or https://, got: {self.registry_url!r}"
            )

    def _validate_timeout(self) -> None:
        """Validate timeout_seconds is positive."""
        if self.timeout_seconds <= 0:
            raise PrebinConfigError("timeout_seconds must be positive")
