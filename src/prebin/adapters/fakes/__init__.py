"""Fake adapters for testing.

This module provides test doubles for port interfaces, enabling
deterministic testing without real I/O operations.
"""

from prebin.adapters.fakes.fake_fetcher import FakeFetcher, FakeFetcherFactory
from prebin.adapters.fakes.fake_registry import FakeRegistry
from prebin.adapters.fakes.fake_target_detector import FakeTargetDetector

__all__ = [
    "FakeFetcher",
    "FakeFetcherFactory",
    "FakeRegistry",
    "FakeTargetDetector",
]
