"""Archive extractor adapter.

Implements ArchiveExtractorPort with the standard library tarfile and
zipfile modules.
"""

from __future__ import annotations

import logging
import shutil
import stat
import tarfile
import zipfile
from pathlib import Path

from prebin.domain.exceptions import ExtractError
from prebin.domain.metadata import PkgFmt

logger = logging.getLogger(__name__)

_TAR_FORMATS = frozenset({PkgFmt.TAR, PkgFmt.TBZ2, PkgFmt.TGZ, PkgFmt.TXZ})


class ArchiveExtractor:
    """Adapter that unpacks downloaded artifacts to the filesystem.

    Supported formats:
        - tar, tbz2, tgz, txz: tarfile with the "data" extraction filter
        - zip: zipfile, rejecting members that escape the destination
        - bin: the artifact is the executable; copied to dst as-is
    """

    def extract(self, archive: Path, fmt: PkgFmt, dst: Path) -> None:
        """Unpack archive into dst.

        Anything already at dst is removed first.

        Args:
            archive: Downloaded artifact on disk.
            fmt: Archive format.
            dst: Destination directory (or file path for the bin format).

        Raises:
            ExtractError: If the archive is corrupt, unsafe or unreadable.
        """
        logger.debug(f"Extracting {archive} ({fmt.value}) to {dst}")
        try:
            self._clear(dst)
            if fmt in _TAR_FORMATS:
                self._extract_tar(archive, dst)
            elif fmt is PkgFmt.ZIP:
                self._extract_zip(archive, dst)
            else:
                self._install_bin(archive, dst)
        except ExtractError:
            raise
        except (tarfile.TarError, zipfile.BadZipFile, OSError) as e:
            raise ExtractError(archive, e) from e

    def _clear(self, dst: Path) -> None:
        if dst.is_dir() and not dst.is_symlink():
            logger.debug(f"Removing previous contents of {dst}")
            shutil.rmtree(dst)
        elif dst.exists() or dst.is_symlink():
            dst.unlink()

    def _extract_tar(self, archive: Path, dst: Path) -> None:
        dst.mkdir(parents=True, exist_ok=True)
        with tarfile.open(archive, mode="r:*") as tar:
            tar.extractall(dst, filter="data")

    def _extract_zip(self, archive: Path, dst: Path) -> None:
        dst.mkdir(parents=True, exist_ok=True)
        root = dst.resolve()
        with zipfile.ZipFile(archive) as zf:
            for member in zf.infolist():
                target = (root / member.filename).resolve()
                if not target.is_relative_to(root):
                    raise ExtractError(
                        archive,
                        ValueError(f"member {member.filename!r} escapes destination"),
                    )
            zf.extractall(root)

    def _install_bin(self, archive: Path, dst: Path) -> None:
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(archive, dst)
        mode = dst.stat().st_mode
        dst.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
