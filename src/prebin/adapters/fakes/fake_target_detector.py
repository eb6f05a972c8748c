"""Fake target detector for testing.

This module provides a fake implementation of TargetDetectorPort
that allows tests to control host detection.
"""

from __future__ import annotations


class FakeTargetDetector:
    """Fake implementation of TargetDetectorPort for testing.

    Example:
        >>> fake = FakeTargetDetector(["x86_64-unknown-linux-musl"])
        >>> fake.detect()
        ['x86_64-unknown-linux-musl']
    """

    def __init__(self, targets: list[str]) -> None:
        self._targets = list(targets)
        self.detect_calls = 0

    def detect(self) -> list[str]:
        """Return the configured targets and count the call."""
        self.detect_calls += 1
        return list(self._targets)
