"""Fake fetcher for testing.

Provides a test double for FetcherPort that answers probes and
"extracts" artifacts without network operations.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from prebin.adapters.ports import FetcherData
from prebin.domain.metadata import PkgMeta

if TYPE_CHECKING:
    import httpx


class FakeFetcher:
    """Fake implementation of FetcherPort for testing.

    Returns a preconfigured probe result, optionally after a delay, and
    writes the configured files under the destination on fetch. Supports
    configuring exceptions for error path testing and records all calls
    for assertion in tests.

    Example:
        >>> fake = FakeFetcher("x86_64-unknown-linux-gnu", exists=True, files=["foo"])
        >>> import asyncio
        >>> asyncio.run(fake.find())
        True
    """

    def __init__(
        self,
        target: str = "x86_64-unknown-linux-gnu",
        name: str = "fake",
        *,
        exists: bool = True,
        files: Iterable[str] = (),
        meta: PkgMeta | None = None,
        third_party: bool = False,
        find_delay: float = 0.0,
    ) -> None:
        """Initialize with preconfigured behaviour.

        Args:
            target: Target triple reported by target().
            name: Backend name reported by fetcher_name() and source_name().
            exists: Value returned from find().
            files: Paths, relative to the destination, created on fetch.
            meta: Metadata returned from target_meta().
            third_party: Value returned from is_third_party().
            find_delay: Seconds find() sleeps before answering.
        """
        self._target = target
        self._name = name
        self._exists = exists
        self._files = tuple(files)
        self._meta = meta or PkgMeta()
        self._third_party = third_party
        self._find_delay = find_delay
        self._find_exception: BaseException | None = None
        self._fetch_exception: BaseException | None = None
        self.find_calls = 0
        self.find_cancelled = False
        self.fetch_calls: list[Path] = []

    def set_find_exception(self, exception: BaseException | None) -> None:
        """Configure an exception to raise from find(), or None to clear."""
        self._find_exception = exception

    def set_fetch_exception(self, exception: BaseException | None) -> None:
        """Configure an exception to raise from fetch_and_extract(), or None to clear."""
        self._fetch_exception = exception

    async def find(self) -> bool:
        self.find_calls += 1
        try:
            if self._find_delay:
                await asyncio.sleep(self._find_delay)
        except asyncio.CancelledError:
            self.find_cancelled = True
            raise
        if self._find_exception is not None:
            raise self._find_exception
        return self._exists

    async def fetch_and_extract(self, dst: Path) -> None:
        self.fetch_calls.append(dst)
        if self._fetch_exception is not None:
            raise self._fetch_exception
        dst.mkdir(parents=True, exist_ok=True)
        for relative in self._files:
            path = dst / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"fake binary")

    def target(self) -> str:
        return self._target

    def fetcher_name(self) -> str:
        return self._name

    def source_name(self) -> str:
        return self._name

    def is_third_party(self) -> bool:
        return self._third_party

    def target_meta(self) -> PkgMeta:
        return self._meta


class FakeFetcherFactory:
    """Builds FakeFetchers from FetcherData and remembers them.

    Stands in for a real backend class in the resolver's factory list.
    Behaviour can be configured per target via ``per_target``.

    Example:
        >>> factory = FakeFetcherFactory("mirror", exists=False)
        >>> resolver = Resolver(options, registry, client, [factory])  # doctest: +SKIP
    """

    def __init__(
        self,
        name: str,
        *,
        per_target: dict[str, dict[str, object]] | None = None,
        **defaults: object,
    ) -> None:
        self._name = name
        self._per_target = per_target or {}
        self._defaults = defaults
        self.created: list[FakeFetcher] = []
        self.data: list[FetcherData] = []

    def __call__(self, client: httpx.AsyncClient, data: FetcherData) -> FakeFetcher:
        options = {**self._defaults, **self._per_target.get(data.target, {})}
        options.setdefault("meta", data.meta)
        fetcher = FakeFetcher(data.target, self._name, **options)  # type: ignore[arg-type]
        self.created.append(fetcher)
        self.data.append(data)
        return fetcher
