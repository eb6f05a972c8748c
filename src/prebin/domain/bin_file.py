"""Binary-file records: where an extracted binary comes from and goes to."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from prebin.domain.exceptions import ExpectedFileMissing, PrebinError
from prebin.domain.metadata import PkgFmt, PkgMeta
from prebin.domain.package import BinaryProduct
from prebin.domain.templates import render_template


@dataclass(frozen=True)
class BinData:
    """Inputs shared by every binary of one package/target.

    Attributes:
        name: Package name.
        target: Target triple the artifact was built for.
        version: Package version.
        repo: Repository URL, if declared.
        meta: Effective packaging metadata for the target.
        bin_path: Directory (or file, for pkg-fmt=bin) the artifact was unpacked to.
        install_path: Directory binaries are installed into.
    """

    name: str
    target: str
    version: str
    repo: str | None
    meta: PkgMeta
    bin_path: Path
    install_path: Path

    @property
    def binary_ext(self) -> str:
        """Executable suffix for the target (".exe" on Windows)."""
        return ".exe" if "windows" in self.target else ""


def infer_bin_dir_template(data: BinData) -> str:
    """Guess the bin-dir template from the layout of the unpacked archive.

    Checks conventional top-level directory names in order and uses the
    first one that exists; falls back to binaries at the archive root.
    """
    name, target, version = data.name, data.target, data.version
    candidates = (
        f"{name}-{target}-v{version}",
        f"{name}-{target}-{version}",
        f"{name}-{version}-{target}",
        f"{name}-v{version}-{target}",
        f"{name}-{target}",
        f"{name}-{version}",
        f"{name}-v{version}",
        name,
    )
    for directory in candidates:
        if (data.bin_path / directory).is_dir():
            return f"{directory}/{{ bin }}{{ binary-ext }}"
    return "{ bin }{ binary-ext }"


@dataclass(frozen=True)
class BinFile:
    """Resolved mapping from an extracted binary to its installed location.

    Attributes:
        base_name: Binary name as declared by the package.
        source: Path of the binary inside the unpacked archive.
        dest: Versioned path in the install directory.
        link: Unversioned symlink pointing at dest.
    """

    base_name: str
    source: Path
    dest: Path
    link: Path

    @classmethod
    def from_product(
        cls, data: BinData, product: BinaryProduct, bin_dir: str
    ) -> BinFile:
        """Render source and destination paths for one declared binary.

        Raises:
            PrebinError: If the product has no name.
            TemplateRenderError: If bin_dir references an unset variable.
        """
        if product.name is None:
            raise PrebinError("binary product has no name")

        base_name = product.name
        binary_ext = data.binary_ext

        if data.meta.pkg_fmt is PkgFmt.BIN:
            source = data.bin_path
        else:
            variables = {
                "name": data.name,
                "repo": data.repo,
                "target": data.target,
                "version": data.version,
                "bin": base_name,
                "format": binary_ext,
                "binary-ext": binary_ext,
            }
            source = data.bin_path / render_template(bin_dir, variables)

        dest = data.install_path / f"{base_name}-v{data.version}{binary_ext}"
        link = data.install_path / f"{base_name}{binary_ext}"
        return cls(base_name=base_name, source=source, dest=dest, link=link)

    def preview_bin(self) -> str:
        """One-line description of the binary install."""
        return f"{self.source.name} ({self.source} -> {self.dest})"

    def preview_link(self) -> str:
        """One-line description of the symlink."""
        return f"{self.link} -> {self.dest}"

    def check_source_exists(self) -> None:
        """Raise ExpectedFileMissing if the source is not on disk."""
        if not self.source.exists():
            raise ExpectedFileMissing(self.source)
