"""Tests for package value objects."""

import pytest

from prebin.domain.exceptions import PrebinError
from prebin.domain.package import PackageReference


@pytest.mark.unit
@pytest.mark.tier(1)
@pytest.mark.tra("Domain.Invariant.PackageReference")
class TestPackageReference:
    """Tests for parsing package references."""

    def test_parse_bare_name(self) -> None:
        """A bare name has no embedded requirement."""
        ref = PackageReference.parse("ripgrep")
        assert ref.name == "ripgrep"
        assert ref.version_req is None

    def test_parse_name_with_requirement(self) -> None:
        """name@req splits into name and requirement."""
        ref = PackageReference.parse("ripgrep@^14")
        assert ref == PackageReference("ripgrep", "^14")

    def test_parse_rejects_empty_requirement(self) -> None:
        """A trailing @ with no requirement is an error."""
        with pytest.raises(PrebinError, match="empty version requirement"):
            PackageReference.parse("ripgrep@")

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_rejected(self, name: str) -> None:
        """Package names cannot be empty or whitespace."""
        with pytest.raises(PrebinError, match="cannot be empty"):
            PackageReference(name)

    def test_str_round_trips_reference(self) -> None:
        """str() renders the reference in name@req form."""
        assert str(PackageReference("foo", "1.2")) == "foo@1.2"
        assert str(PackageReference("foo")) == "foo"
