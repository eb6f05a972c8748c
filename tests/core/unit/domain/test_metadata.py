"""Tests for packaging metadata value objects."""

import pytest
from hypothesis import given, strategies as st

from prebin.domain.exceptions import PrebinConfigError
from prebin.domain.metadata import PkgFmt, PkgMeta, PkgOverride


@pytest.mark.unit
@pytest.mark.tier(1)
@pytest.mark.tra("Domain.Invariant.PkgFmt")
class TestPkgFmt:
    """Tests for archive format parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("tgz", PkgFmt.TGZ),
            ("TXZ", PkgFmt.TXZ),
            ("zip", PkgFmt.ZIP),
            ("bin", PkgFmt.BIN),
        ],
    )
    def test_parse_known_formats(self, value: str, expected: PkgFmt) -> None:
        """Known format names parse case-insensitively."""
        assert PkgFmt.parse(value) is expected

    def test_parse_unknown_format_raises(self) -> None:
        """Unknown format names are configuration errors."""
        with pytest.raises(PrebinConfigError, match="pkg-fmt"):
            PkgFmt.parse("rar")

    def test_tgz_extensions(self) -> None:
        """Gzip tarballs may use either extension."""
        assert PkgFmt.TGZ.extensions == (".tgz", ".tar.gz")


@pytest.mark.unit
@pytest.mark.tier(1)
@pytest.mark.tra("Domain.Invariant.PkgMeta")
class TestPkgMeta:
    """Tests for PkgMeta parsing and merging."""

    def test_defaults_are_unset(self) -> None:
        """All fields default to None with an empty override map."""
        meta = PkgMeta()
        assert meta.pkg_url is None
        assert meta.pkg_fmt is None
        assert meta.bin_dir is None
        assert meta.pub_key is None
        assert dict(meta.overrides) == {}

    def test_effective_pkg_fmt_defaults_to_tgz(self) -> None:
        """An unset format means gzip tarball."""
        assert PkgMeta().effective_pkg_fmt is PkgFmt.TGZ
        assert PkgMeta(pkg_fmt=PkgFmt.ZIP).effective_pkg_fmt is PkgFmt.ZIP

    def test_from_mapping_reads_kebab_case_keys(self) -> None:
        """Manifest keys are kebab-case."""
        meta = PkgMeta.from_mapping(
            {
                "pkg-url": "{ repo }/x.tgz",
                "pkg-fmt": "tgz",
                "bin-dir": "{ bin }",
                "pub-key": "key",
                "overrides": {"x86_64-pc-windows-msvc": {"pkg-fmt": "zip"}},
            }
        )
        assert meta.pkg_url == "{ repo }/x.tgz"
        assert meta.pkg_fmt is PkgFmt.TGZ
        assert meta.bin_dir == "{ bin }"
        assert meta.pub_key == "key"
        assert meta.overrides["x86_64-pc-windows-msvc"] == PkgOverride(pkg_fmt=PkgFmt.ZIP)

    def test_from_mapping_rejects_non_string_fields(self) -> None:
        """Wrongly typed fields are configuration errors."""
        with pytest.raises(PrebinConfigError, match="pkg-url"):
            PkgMeta.from_mapping({"pkg-url": 42})

    def test_from_mapping_rejects_non_table_override(self) -> None:
        """Each override must itself be a table."""
        with pytest.raises(PrebinConfigError):
            PkgMeta.from_mapping({"overrides": {"x86_64-unknown-linux-gnu": "zip"}})

    def test_clone_without_overrides(self) -> None:
        """The clone keeps base fields and drops the override map."""
        meta = PkgMeta(
            pkg_url="u",
            overrides={"t": PkgOverride(pkg_url="other")},
        )
        clone = meta.clone_without_overrides()
        assert clone.pkg_url == "u"
        assert dict(clone.overrides) == {}

    def test_merge_replaces_only_set_fields(self) -> None:
        """Fields set in the override win; the rest are inherited."""
        meta = PkgMeta(pkg_url="base-url", pkg_fmt=PkgFmt.TGZ, bin_dir="base-dir")
        merged = meta.merge(PkgOverride(pkg_fmt=PkgFmt.ZIP))
        assert merged.pkg_url == "base-url"
        assert merged.pkg_fmt is PkgFmt.ZIP
        assert merged.bin_dir == "base-dir"


optional_text = st.one_of(st.none(), st.text(min_size=1, max_size=20))
optional_fmt = st.one_of(st.none(), st.sampled_from(list(PkgFmt)))


@pytest.mark.unit
@pytest.mark.property
@pytest.mark.tier(1)
@pytest.mark.tra("Domain.Invariant.PkgMeta")
class TestPkgMetaMergePBT:
    """Property-based tests for metadata layering."""

    @given(
        base_url=optional_text,
        base_fmt=optional_fmt,
        base_dir=optional_text,
        url=optional_text,
        fmt=optional_fmt,
        bin_dir=optional_text,
    )
    def test_merge_field_wise(self, base_url, base_fmt, base_dir, url, fmt, bin_dir):
        """PBT: Each merged field is the override value when set, else the base."""
        base = PkgMeta(pkg_url=base_url, pkg_fmt=base_fmt, bin_dir=base_dir)
        merged = base.merge(PkgOverride(pkg_url=url, pkg_fmt=fmt, bin_dir=bin_dir))

        assert merged.pkg_url == (url if url is not None else base_url)
        assert merged.pkg_fmt == (fmt if fmt is not None else base_fmt)
        assert merged.bin_dir == (bin_dir if bin_dir is not None else base_dir)

    @given(url=optional_text, fmt=optional_fmt)
    def test_empty_override_is_identity(self, url, fmt):
        """PBT: Merging an empty override changes nothing."""
        base = PkgMeta(pkg_url=url, pkg_fmt=fmt)
        assert base.merge(PkgOverride()) == base
