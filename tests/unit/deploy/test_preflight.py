"""Unit tests for preflight checks."""

from unittest.mock import MagicMock, patch

import pytest

from avrflash.config import resolve_request
from avrflash.deploy.outcome import ErrorKind, Phase
from avrflash.deploy.preflight import PreflightChecker, is_char_device

# Always present on Linux and a character device
CHAR_DEVICE = "/dev/null"


class TestPreflightChecker:
    """Tests for PreflightChecker."""

    @pytest.fixture
    def image(self, tmp_path):
        """Create a firmware image file."""
        path = tmp_path / "atmega128_firmware.elf"
        path.write_bytes(b"\x7fELF" + b"\x00" * 64)
        return path

    @pytest.fixture
    def tool_found(self):
        with patch("avrflash.deploy.preflight.shutil.which", return_value="/usr/bin/avrdude") as mock_which:
            yield mock_which

    @pytest.fixture
    def no_ports(self):
        with patch("serial.tools.list_ports.comports", return_value=[]) as mock_comports:
            yield mock_comports

    def test_all_checks_pass(self, image, tool_found):
        """Test that a present tool, image and port give success."""
        request = resolve_request(CHAR_DEVICE, target_image_path=image)

        outcome = PreflightChecker().check(request)

        assert outcome.success
        assert outcome.phase == Phase.PREFLIGHT
        tool_found.assert_called_once_with("avrdude")

    def test_tool_not_found(self, image):
        """Test that a missing tool fails with an install hint."""
        request = resolve_request(CHAR_DEVICE, target_image_path=image)

        with patch("avrflash.deploy.preflight.shutil.which", return_value=None):
            outcome = PreflightChecker().check(request)

        assert outcome.kind == ErrorKind.TOOL_NOT_FOUND
        assert "avrdude not found" in outcome.diagnostic
        assert "sudo apt install avrdude" in outcome.diagnostic

    def test_tool_checked_before_artifact(self, tmp_path):
        """Test that only the first failing check is reported."""
        request = resolve_request("/dev/does-not-exist", target_image_path=tmp_path / "missing.elf")

        with patch("avrflash.deploy.preflight.shutil.which", return_value=None):
            outcome = PreflightChecker().check(request)

        assert outcome.kind == ErrorKind.TOOL_NOT_FOUND

    def test_artifact_missing(self, tmp_path, tool_found):
        """Test that a missing image fails with the build command."""
        request = resolve_request(CHAR_DEVICE, target_image_path=tmp_path / "missing.elf")

        outcome = PreflightChecker().check(request)

        assert outcome.kind == ErrorKind.ARTIFACT_MISSING
        assert "missing.elf" in outcome.diagnostic
        assert "cargo build --release --target avr-atmega128.json" in outcome.diagnostic

    def test_artifact_is_directory(self, tmp_path, tool_found):
        """Test that a directory is not accepted as the image."""
        request = resolve_request(CHAR_DEVICE, target_image_path=tmp_path)

        outcome = PreflightChecker().check(request)

        assert outcome.kind == ErrorKind.ARTIFACT_MISSING

    def test_artifact_checked_before_device(self, tmp_path, tool_found):
        request = resolve_request("/dev/does-not-exist", target_image_path=tmp_path / "missing.elf")

        outcome = PreflightChecker().check(request)

        assert outcome.kind == ErrorKind.ARTIFACT_MISSING

    def test_device_not_found(self, image, tool_found, no_ports):
        """Test that a nonexistent port fails and lists matching nodes."""
        request = resolve_request("/dev/ttyUSB-nope", target_image_path=image)

        outcome = PreflightChecker(device_glob="/dev/nul*").check(request)

        assert outcome.kind == ErrorKind.DEVICE_NOT_FOUND
        assert "Port /dev/ttyUSB-nope not found" in outcome.diagnostic
        assert "Available ports:" in outcome.diagnostic
        assert "  /dev/null" in outcome.diagnostic

    def test_device_is_regular_file(self, image, tool_found, no_ports):
        """Test that a regular file is not accepted as the port."""
        request = resolve_request(str(image), target_image_path=image)

        outcome = PreflightChecker(device_glob="/dev/nul*").check(request)

        assert outcome.kind == ErrorKind.DEVICE_NOT_FOUND

    def test_device_not_found_without_candidates(self, image, tool_found, tmp_path):
        """Test the listing when no adapter nodes are present."""
        request = resolve_request("/dev/ttyUSB-nope", target_image_path=image)
        checker = PreflightChecker(device_glob=str(tmp_path / "ttyUSB*"))

        outcome = checker.check(request)

        assert outcome.kind == ErrorKind.DEVICE_NOT_FOUND
        assert "none matching" in outcome.diagnostic

    def test_listing_includes_adapter_description(self, tool_found):
        """Test that pyserial's description annotates listed nodes."""
        port = MagicMock()
        port.device = CHAR_DEVICE
        port.description = "CP2102 USB to UART Bridge"

        with patch("serial.tools.list_ports.comports", return_value=[port]):
            listing = PreflightChecker(device_glob="/dev/nul*").format_available_ports()

        assert "/dev/null (CP2102 USB to UART Bridge)" in listing

    def test_list_device_nodes_skips_regular_files(self, tmp_path):
        (tmp_path / "ttyUSB0").write_text("")

        checker = PreflightChecker(device_glob=str(tmp_path / "ttyUSB*"))

        assert checker.list_device_nodes() == []

    def test_custom_tool_name(self, image):
        request = resolve_request(CHAR_DEVICE, target_image_path=image)

        with patch("avrflash.deploy.preflight.shutil.which", return_value=None) as mock_which:
            outcome = PreflightChecker(tool_name="avrdude7", install_hint="brew install avrdude").check(request)

        mock_which.assert_called_once_with("avrdude7")
        assert "brew install avrdude" in outcome.diagnostic


class TestIsCharDevice:
    """Tests for is_char_device."""

    def test_char_device(self):
        assert is_char_device(CHAR_DEVICE)

    def test_missing(self, tmp_path):
        assert not is_char_device(str(tmp_path / "nothing"))

    def test_directory(self, tmp_path):
        assert not is_char_device(str(tmp_path))
