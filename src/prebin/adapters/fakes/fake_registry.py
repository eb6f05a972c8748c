"""Fake registry for testing.

Provides a test double for RegistryPort that returns a preconfigured
manifest without network operations.
"""

from __future__ import annotations

from prebin.domain.package import Manifest


class FakeRegistry:
    """Fake implementation of RegistryPort for testing.

    Returns a preconfigured Manifest, or raises a configured exception,
    and records every lookup.

    Example:
        >>> from prebin.domain.package import ResolvedPackage
        >>> fake = FakeRegistry(Manifest(package=ResolvedPackage("foo", "1.0.0")))
        >>> import asyncio
        >>> asyncio.run(fake.fetch_manifest("foo", "*")).package.version
        '1.0.0'
    """

    def __init__(self, manifest: Manifest | None = None) -> None:
        self._manifest = manifest
        self._exception: BaseException | None = None
        self._calls: list[tuple[str, str]] = []

    @property
    def calls(self) -> list[tuple[str, str]]:
        """Return list of (name, version_req) tuples from fetch_manifest() calls."""
        return self._calls

    def set_response(self, manifest: Manifest) -> None:
        """Configure the manifest to return from fetch_manifest()."""
        self._manifest = manifest

    def set_exception(self, exception: BaseException | None) -> None:
        """Configure an exception to raise from fetch_manifest(), or None to clear."""
        self._exception = exception

    async def fetch_manifest(self, name: str, version_req: str) -> Manifest:
        self._calls.append((name, version_req))
        if self._exception is not None:
            raise self._exception
        if self._manifest is None:
            raise AssertionError("FakeRegistry has no manifest configured")
        return self._manifest
