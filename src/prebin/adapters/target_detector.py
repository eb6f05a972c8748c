"""Host target detector adapter.

This module provides an adapter that implements TargetDetectorPort
by using Python's standard library platform module.
"""

from __future__ import annotations

import platform

from prebin.domain.exceptions import PrebinError


class HostTargetDetector:
    """Adapter that detects the target triples the host can run.

    Implements TargetDetectorPort by querying platform.system(),
    platform.machine() and platform.libc_ver().

    Targets are returned most preferred first:
        - Linux: <arch>-unknown-linux-gnu (glibc hosts only), then
          <arch>-unknown-linux-musl (statically linked, runs anywhere)
        - macOS: <arch>-apple-darwin; Apple silicon also runs x86_64 builds
        - Windows: <arch>-pc-windows-msvc

    Machine type mappings:
        - x86_64, AMD64 -> x86_64
        - aarch64, arm64 -> aarch64
    """

    _ARCH_MAP: dict[str, str] = {
        "x86_64": "x86_64",
        "amd64": "x86_64",
        "aarch64": "aarch64",
        "arm64": "aarch64",
    }

    def detect(self) -> list[str]:
        """Detect target triples for the current host.

        Raises:
            PrebinError: If the current OS or architecture is not supported.
        """
        arch = self._detect_arch()
        system = platform.system().lower()

        if system == "linux":
            targets = []
            libc, _ = platform.libc_ver()
            if libc == "glibc":
                targets.append(f"{arch}-unknown-linux-gnu")
            targets.append(f"{arch}-unknown-linux-musl")
            return targets

        if system == "darwin":
            targets = [f"{arch}-apple-darwin"]
            if arch == "aarch64":
                targets.append("x86_64-apple-darwin")
            return targets

        if system == "windows":
            return [f"{arch}-pc-windows-msvc"]

        raise PrebinError(
            f"Unsupported operating system: {platform.system()!r}. "
            f"Supported: linux, darwin, windows"
        )

    def _detect_arch(self) -> str:
        machine = platform.machine().lower()
        if machine not in self._ARCH_MAP:
            raise PrebinError(
                f"Unsupported architecture: {platform.machine()!r}. "
                f"Supported: x86_64/amd64, aarch64/arm64"
            )
        return self._ARCH_MAP[machine]
