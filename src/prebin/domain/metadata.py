"""Packaging metadata value objects.

Packages describe where their prebuilt artifacts live through a metadata
table in their manifest. The effective metadata for one target is built by
layering per-target and command-line overrides over the base table.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any

from prebin.domain.exceptions import PrebinConfigError


class PkgFmt(Enum):
    """Archive format of a prebuilt package.

    Attributes:
        TAR: Plain tarball.
        TBZ2: Bzip2-compressed tarball.
        TGZ: Gzip-compressed tarball.
        TXZ: XZ-compressed tarball.
        ZIP: Zip archive.
        BIN: A single uncompressed executable.
    """

    TAR = "tar"
    TBZ2 = "tbz2"
    TGZ = "tgz"
    TXZ = "txz"
    ZIP = "zip"
    BIN = "bin"

    @property
    def extensions(self) -> tuple[str, ...]:
        """File extensions an artifact of this format may be published with."""
        return _EXTENSIONS[self]

    @classmethod
    def parse(cls, value: str) -> PkgFmt:
        """Parse a format name, raising PrebinConfigError on unknown values."""
        try:
            return cls(value.lower())
        except ValueError:
            valid = ", ".join(f.value for f in cls)
            raise PrebinConfigError(
                f"pkg-fmt must be one of {valid}, got: {value!r}"
            ) from None


_EXTENSIONS: dict[PkgFmt, tuple[str, ...]] = {
    PkgFmt.TAR: (".tar",),
    PkgFmt.TBZ2: (".tbz2", ".tar.bz2"),
    PkgFmt.TGZ: (".tgz", ".tar.gz"),
    PkgFmt.TXZ: (".txz", ".tar.xz"),
    PkgFmt.ZIP: (".zip",),
    PkgFmt.BIN: (".bin", ".exe", ""),
}


@dataclass(frozen=True)
class PkgOverride:
    """Partial packaging metadata; every field is optional.

    Used both for per-target override tables in the manifest and for
    overrides supplied on the command line.
    """

    pkg_url: str | None = None
    pkg_fmt: PkgFmt | None = None
    bin_dir: str | None = None

    @classmethod
    def from_mapping(cls, table: Mapping[str, Any]) -> PkgOverride:
        """Build an override from a kebab-case manifest table."""
        pkg_fmt = table.get("pkg-fmt")
        return cls(
            pkg_url=_optional_str(table, "pkg-url"),
            pkg_fmt=PkgFmt.parse(pkg_fmt) if pkg_fmt is not None else None,
            bin_dir=_optional_str(table, "bin-dir"),
        )


@dataclass(frozen=True)
class PkgMeta:
    """Effective packaging metadata.

    Attributes:
        pkg_url: Template for the artifact download URL.
        pkg_fmt: Archive format of the artifact.
        bin_dir: Template for the binary path inside the unpacked archive.
        pub_key: Public key for signature checks (not verified yet).
        overrides: Per-target-triple overrides.
    """

    pkg_url: str | None = None
    pkg_fmt: PkgFmt | None = None
    bin_dir: str | None = None
    pub_key: str | None = None
    overrides: Mapping[str, PkgOverride] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def effective_pkg_fmt(self) -> PkgFmt:
        """Archive format, defaulting to gzip tarballs."""
        return self.pkg_fmt or PkgFmt.TGZ

    @classmethod
    def from_mapping(cls, table: Mapping[str, Any]) -> PkgMeta:
        """Build metadata from the manifest's binstall metadata table.

        Args:
            table: Mapping with kebab-case keys (pkg-url, pkg-fmt, bin-dir,
                pub-key, overrides).

        Raises:
            PrebinConfigError: If a field has the wrong type or pkg-fmt is unknown.
        """
        raw_overrides = table.get("overrides", {})
        if not isinstance(raw_overrides, Mapping):
            raise PrebinConfigError("overrides must be a table keyed by target")

        overrides: dict[str, PkgOverride] = {}
        for target, override in raw_overrides.items():
            if not isinstance(override, Mapping):
                raise PrebinConfigError(f"override for {target!r} must be a table")
            overrides[target] = PkgOverride.from_mapping(override)

        base = PkgOverride.from_mapping(table)
        return cls(
            pkg_url=base.pkg_url,
            pkg_fmt=base.pkg_fmt,
            bin_dir=base.bin_dir,
            pub_key=_optional_str(table, "pub-key"),
            overrides=MappingProxyType(overrides),
        )

    def clone_without_overrides(self) -> PkgMeta:
        """Return a copy with an empty override map."""
        return replace(self, overrides=MappingProxyType({}))

    def merge(self, override: PkgOverride) -> PkgMeta:
        """Layer an override on top of this metadata.

        Fields set in the override replace the corresponding field here;
        unset fields are inherited.
        """
        return replace(
            self,
            pkg_url=override.pkg_url if override.pkg_url is not None else self.pkg_url,
            pkg_fmt=override.pkg_fmt if override.pkg_fmt is not None else self.pkg_fmt,
            bin_dir=override.bin_dir if override.bin_dir is not None else self.bin_dir,
        )


def _optional_str(table: Mapping[str, Any], key: str) -> str | None:
    value = table.get(key)
    if value is not None and not isinstance(value, str):
        raise PrebinConfigError(f"{key} must be a string, got: {value!r}")
    return value
