"""Desired-targets use case: the ordered target triples to try."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from prebin.adapters.ports import TargetDetectorPort
from prebin.adapters.target_detector import HostTargetDetector

logger = logging.getLogger(__name__)


class DesiredTargets:
    """Lazily computed, memoized list of target triples.

    Explicitly configured targets win; otherwise the host is probed once
    through the detector port. The first get() computes the value and
    every later call (including concurrent ones) returns the same tuple.
    """

    def __init__(
        self,
        targets: Sequence[str] | None = None,
        detector: TargetDetectorPort | None = None,
    ) -> None:
        """Initialize the desired targets.

        Args:
            targets: Explicit targets, most preferred first. Empty or None
                means detect from the host.
            detector: Port used for host detection; defaults to HostTargetDetector.
        """
        self._explicit = tuple(targets) if targets else None
        self._detector = detector or HostTargetDetector()
        self._targets: tuple[str, ...] | None = None
        self._lock: asyncio.Lock | None = None

    async def get(self) -> tuple[str, ...]:
        """Return the desired targets, computing them on first use."""
        if self._targets is not None:
            return self._targets

        if self._lock is None:
            self._lock = asyncio.Lock()
        async with self._lock:
            if self._targets is None:
                if self._explicit is not None:
                    self._targets = self._explicit
                else:
                    detected = await asyncio.to_thread(self._detector.detect)
                    self._targets = tuple(detected)
                logger.debug(f"Desired targets: {', '.join(self._targets)}")
        return self._targets
