"""Discovery race use case.

Probes every (target, backend) candidate concurrently, then walks the
candidates in their fixed priority order and commits to the first one whose
artifact both exists and survives download, extraction and verification.

Evaluation order never depends on probe completion order: a slow probe
for the first candidate still blocks consideration of a finished probe for
a later one. Probes whose results are never consulted are cancelled when
the race ends, however it ends.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Coroutine, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from prebin.adapters.ports import FetcherPort

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AutoAbortTask(Generic[T]):
    """Task handle that is cancelled when its owner stops caring about it.

    Wraps an asyncio.Task. The owner must call abort() for every handle in
    its teardown path; abort() is a no-op on finished tasks.
    """

    def __init__(self, coro: Coroutine[Any, Any, T]) -> None:
        self._task: asyncio.Task[T] = asyncio.create_task(coro)

    @property
    def task(self) -> asyncio.Task[T]:
        """The underlying asyncio task."""
        return self._task

    async def join(self) -> T:
        """Wait for the task; return its result or raise its error."""
        return await self._task

    def abort(self) -> None:
        """Cancel the task if it is still running."""
        if not self._task.done():
            self._task.cancel()


@dataclass(frozen=True)
class RaceWinner(Generic[T]):
    """The committed candidate and what its attempt produced."""

    fetcher: FetcherPort
    result: T


class DiscoveryRace(Generic[T]):
    """Use case for choosing a backend among ordered candidates.

    For each candidate, in order:
    1. Await its probe. A probe error is logged as a warning and skipped;
       a negative probe is skipped silently.
    2. On a positive probe, run the attempt (download, extract, verify).
       Success ends the race; failure is logged and the scan continues.
    """

    def __init__(self, attempt: Callable[[FetcherPort], Awaitable[T]]) -> None:
        """Initialize the race.

        Args:
            attempt: Called for a candidate whose probe reported an
                artifact; returns the verified result or raises.
        """
        self._attempt = attempt

    async def __call__(self, fetchers: Sequence[FetcherPort]) -> RaceWinner[T] | None:
        """Run the race over candidates in priority order.

        Args:
            fetchers: Candidates, target-major and backend-minor.

        Returns:
            The first candidate that verified successfully, or None when
            every candidate was skipped or failed.
        """
        handles = [(fetcher, AutoAbortTask(fetcher.find())) for fetcher in fetchers]
        try:
            for fetcher, handle in handles:
                try:
                    found = await handle.join()
                except Exception as e:
                    logger.warning(
                        f"Error while checking fetcher {fetcher.source_name()}: {e}"
                    )
                    continue

                if not found:
                    continue

                try:
                    result = await self._attempt(fetcher)
                except Exception as e:
                    logger.warning(
                        "Error while downloading and extracting from fetcher "
                        f"{fetcher.source_name()}: {e}"
                    )
                    continue

                return RaceWinner(fetcher=fetcher, result=result)

            return None
        finally:
            for _, handle in handles:
                handle.abort()
            await asyncio.gather(
                *(handle.task for _, handle in handles), return_exceptions=True
            )
