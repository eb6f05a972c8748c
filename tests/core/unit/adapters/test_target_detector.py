"""Unit tests for HostTargetDetector adapter."""

from unittest.mock import Mock, patch

import pytest

from prebin.adapters.ports import TargetDetectorPort
from prebin.adapters.target_detector import HostTargetDetector
from prebin.domain.exceptions import PrebinError


@pytest.mark.tier(1)
@pytest.mark.unit
@pytest.mark.tra("Adapter.HostTargetDetector")
class TestHostTargetDetector:
    """Test HostTargetDetector implementation."""

    def test_satisfies_protocol(self) -> None:
        """Test that HostTargetDetector satisfies TargetDetectorPort protocol."""
        assert isinstance(HostTargetDetector(), TargetDetectorPort)

    @patch("platform.libc_ver")
    @patch("platform.system")
    @patch("platform.machine")
    def test_linux_glibc_prefers_gnu(
        self, mock_machine: Mock, mock_system: Mock, mock_libc: Mock
    ) -> None:
        """Test glibc Linux hosts try gnu before musl."""
        mock_system.return_value = "Linux"
        mock_machine.return_value = "x86_64"
        mock_libc.return_value = ("glibc", "2.39")

        assert HostTargetDetector().detect() == [
            "x86_64-unknown-linux-gnu",
            "x86_64-unknown-linux-musl",
        ]

    @patch("platform.libc_ver")
    @patch("platform.system")
    @patch("platform.machine")
    def test_linux_musl_only(
        self, mock_machine: Mock, mock_system: Mock, mock_libc: Mock
    ) -> None:
        """Test non-glibc Linux hosts only get musl."""
        mock_system.return_value = "Linux"
        mock_machine.return_value = "aarch64"
        mock_libc.return_value = ("", "")

        assert HostTargetDetector().detect() == ["aarch64-unknown-linux-musl"]

    @patch("platform.system")
    @patch("platform.machine")
    def test_apple_silicon_falls_back_to_x86_64(
        self, mock_machine: Mock, mock_system: Mock
    ) -> None:
        """Test Apple silicon also accepts x86_64 builds."""
        mock_system.return_value = "Darwin"
        mock_machine.return_value = "arm64"

        assert HostTargetDetector().detect() == [
            "aarch64-apple-darwin",
            "x86_64-apple-darwin",
        ]

    @patch("platform.system")
    @patch("platform.machine")
    def test_windows_amd64(self, mock_machine: Mock, mock_system: Mock) -> None:
        """Test Windows reports AMD64 which maps to x86_64."""
        mock_system.return_value = "Windows"
        mock_machine.return_value = "AMD64"

        assert HostTargetDetector().detect() == ["x86_64-pc-windows-msvc"]

    @patch("platform.system")
    @patch("platform.machine")
    def test_unsupported_os(self, mock_machine: Mock, mock_system: Mock) -> None:
        """Test unsupported operating systems raise PrebinError."""
        mock_system.return_value = "SunOS"
        mock_machine.return_value = "x86_64"

        with pytest.raises(PrebinError, match="Unsupported operating system"):
            HostTargetDetector().detect()

    @patch("platform.system")
    @patch("platform.machine")
    def test_unsupported_arch(self, mock_machine: Mock, mock_system: Mock) -> None:
        """Test unsupported architectures raise PrebinError."""
        mock_system.return_value = "Linux"
        mock_machine.return_value = "riscv64"

        with pytest.raises(PrebinError, match="Unsupported architecture"):
            HostTargetDetector().detect()
