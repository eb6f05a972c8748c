"""Pytest configuration for prebin core unit tests."""

from __future__ import annotations

from typing import Any

import pytest

from prebin.domain.metadata import PkgMeta
from prebin.domain.package import BinaryProduct, Manifest, ResolvedPackage


def pytest_configure(config: Any) -> None:
    """Register custom markers for unit tests."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line(
        "markers", "property: Property-based tests using Hypothesis"
    )


@pytest.fixture
def sample_package() -> ResolvedPackage:
    """Create a resolved package with a repository and no metadata."""
    return ResolvedPackage(
        name="foo",
        version="1.2.3",
        repository="https://github.com/acme/foo",
        metadata=PkgMeta(),
    )


@pytest.fixture
def sample_manifest(sample_package: ResolvedPackage) -> Manifest:
    """Create a manifest declaring one binary named after the package."""
    return Manifest(
        package=sample_package,
        binaries=(BinaryProduct(name="foo"),),
    )
