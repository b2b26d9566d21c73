"""
Tests for the command line interface.
"""

import logging
from unittest.mock import patch, MagicMock
import pytest
from click.testing import CliRunner
from PIL import Image

from devswiss.__main__ import cli
from devswiss.utils.password_generator import AMBIGUOUS_CHARS, NUMBERS


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


class TestPasswordCommand:
    """Test the password command."""

    def test_default_password(self, runner):
        """Test one 16 character password by default."""
        result = runner.invoke(cli, ["password"])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert len(lines) == 1
        assert len(lines[0]) == 16

    def test_length_and_count(self, runner):
        """Test one password per line."""
        result = runner.invoke(cli, ["password", "--length", "24", "-n", "5"])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert len(lines) == 5
        assert all(len(line) == 24 for line in lines)

    def test_numbers_only_without_ambiguous(self, runner):
        """Test set toggles and ambiguous exclusion."""
        result = runner.invoke(cli, [
            "password", "-l", "64", "--no-uppercase", "--no-lowercase",
            "--no-symbols", "--no-ambiguous",
        ])

        assert result.exit_code == 0
        password = result.output.strip()
        assert all(c in NUMBERS for c in password)
        assert not set(password) & AMBIGUOUS_CHARS

    def test_no_character_sets(self, runner):
        """Test error when every set is disabled."""
        result = runner.invoke(cli, [
            "password", "--no-uppercase", "--no-lowercase", "--no-numbers", "--no-symbols",
        ])

        assert result.exit_code == 1
        assert "Error: At least one character set must be enabled" in result.output

    def test_empty_pool(self, runner):
        """Test error when exclusions remove everything, with no partial output."""
        result = runner.invoke(cli, [
            "password", "-n", "3", "--no-uppercase", "--no-lowercase", "--no-symbols",
            "--no-ambiguous", "--exclude", "23456789",
        ])

        assert result.exit_code == 1
        assert result.output.startswith("Error: No characters available after applying exclusions")

    def test_zero_length_rejected(self, runner):
        """Test length must be positive."""
        result = runner.invoke(cli, ["password", "--length", "0"])

        assert result.exit_code != 0

    @patch("devswiss.utils.password_generator.secrets.token_bytes", side_effect=OSError("no entropy"))
    def test_random_source_unavailable(self, mock_token_bytes, runner):
        """Test an unavailable OS random source exits with status 1 and no password."""
        result = runner.invoke(cli, ["password", "-n", "2"])

        assert result.exit_code == 1
        assert result.output.startswith("Error: Secure random source unavailable: no entropy")
        assert len(result.output.splitlines()) == 1
        mock_token_bytes.assert_called_once()

    @patch("devswiss.__main__.threading.Thread")
    @patch("devswiss.__main__.pyperclip.copy")
    def test_copy_to_clipboard(self, mock_copy, mock_thread, runner):
        """Test the last password is copied and a clear thread started."""
        mock_thread.return_value = MagicMock()

        result = runner.invoke(cli, ["password", "-n", "2", "--copy"])

        assert result.exit_code == 0
        passwords = [line for line in result.output.splitlines() if not line.startswith("Password copied")]
        mock_copy.assert_called_once_with(passwords[-1])
        mock_thread.return_value.start.assert_called_once()


class TestQrCodeCommand:
    """Test the qrcode command."""

    def test_terminal_output(self, runner):
        """Test terminal rendering."""
        result = runner.invoke(cli, ["qrcode", "https://example.com"])

        assert result.exit_code == 0
        assert "█" in result.output

    def test_png_requires_output(self, runner):
        """Test png format without an output path."""
        result = runner.invoke(cli, ["qrcode", "test", "--format", "png"])

        assert result.exit_code == 1
        assert "Output path required for png format" in result.output

    def test_png_output(self, runner, tmp_path):
        """Test saving a PNG."""
        path = tmp_path / "qr.png"
        result = runner.invoke(cli, ["qrcode", "test", "-f", "png", "-o", str(path), "-s", "4"])

        assert result.exit_code == 0
        assert f"Saved PNG to {path}" in result.output
        with Image.open(path) as image:
            assert image.format == "PNG"

    def test_svg_output(self, runner, tmp_path):
        """Test saving an SVG with custom colors."""
        path = tmp_path / "qr.svg"
        result = runner.invoke(cli, [
            "qrcode", "test", "-f", "svg", "-o", str(path), "--dark-color", "#112233",
        ])

        assert result.exit_code == 0
        assert "#112233" in path.read_text(encoding="utf-8")

    def test_invalid_color(self, runner, tmp_path):
        """Test an unparseable color."""
        result = runner.invoke(cli, [
            "qrcode", "test", "-f", "png", "-o", str(tmp_path / "qr.png"), "--dark-color", "nope",
        ])

        assert result.exit_code == 1
        assert "Invalid color format" in result.output

    def test_logo_upgrades_error_correction(self, runner, tmp_path):
        """Test a logo forces high error correction."""
        logo = tmp_path / "logo.png"
        Image.new("RGBA", (32, 32), (255, 0, 0, 255)).save(logo)
        path = tmp_path / "qr.png"

        result = runner.invoke(cli, [
            "qrcode", "test", "-f", "png", "-o", str(path), "--logo", str(logo),
        ])

        assert result.exit_code == 0
        assert "Using high error correction for logo overlay" in result.output
        assert path.exists()

    def test_logo_upgrade_is_logged(self, runner, tmp_path, caplog):
        """Test the error correction upgrade is logged at info level."""
        logo = tmp_path / "logo.png"
        Image.new("RGBA", (32, 32), (255, 0, 0, 255)).save(logo)
        caplog.set_level(logging.INFO, logger="devswiss.__main__")

        result = runner.invoke(cli, [
            "qrcode", "test", "-f", "png", "-o", str(tmp_path / "qr.png"),
            "--logo", str(logo), "-e", "low",
        ])

        assert result.exit_code == 0
        messages = [r.getMessage() for r in caplog.records if r.name == "devswiss.__main__"]
        assert "Upgraded error correction from low to high for logo overlay" in messages

    def test_high_correction_not_upgraded(self, runner, tmp_path, caplog):
        """Test no upgrade is logged when high correction was requested."""
        logo = tmp_path / "logo.png"
        Image.new("RGBA", (32, 32), (255, 0, 0, 255)).save(logo)
        caplog.set_level(logging.INFO, logger="devswiss.__main__")

        result = runner.invoke(cli, [
            "qrcode", "test", "-f", "png", "-o", str(tmp_path / "qr.png"),
            "--logo", str(logo), "-e", "high",
        ])

        assert result.exit_code == 0
        assert "Using high error correction" not in result.output
        assert not [r for r in caplog.records if "Upgraded" in r.getMessage()]

    def test_logo_size_out_of_range(self, runner, tmp_path):
        """Test logo size bounds on the command line."""
        logo = tmp_path / "logo.png"
        Image.new("RGBA", (32, 32), (255, 0, 0, 255)).save(logo)

        result = runner.invoke(cli, [
            "qrcode", "test", "-f", "png", "-o", str(tmp_path / "qr.png"),
            "--logo", str(logo), "--logo-size", "40",
        ])

        assert result.exit_code == 1
        assert "Logo size must be between 5% and 30%" in result.output

    def test_background(self, runner, tmp_path):
        """Test rendering onto a background."""
        background = tmp_path / "bg.png"
        Image.new("RGB", (500, 500), (0, 128, 0)).save(background)
        path = tmp_path / "qr.png"

        result = runner.invoke(cli, [
            "qrcode", "test", "-f", "png", "-o", str(path), "--background", str(background),
        ])

        assert result.exit_code == 0
        assert "Saved QR with background" in result.output
        with Image.open(path) as image:
            assert image.size == (500, 500)


class TestConvertCommand:
    """Test the convert command."""

    def test_unsupported_conversion(self, runner, tmp_path):
        """Test the reverse direction is rejected."""
        source = tmp_path / "in.docx"
        source.write_bytes(b"")

        result = runner.invoke(cli, [
            "convert", "--from", "docx", "--to", "pdf", str(source), str(tmp_path / "out.pdf"),
        ])

        assert result.exit_code == 1
        assert "Unsupported conversion: DOCX to PDF" in result.output

    def test_missing_input(self, runner, tmp_path):
        """Test a missing input file."""
        result = runner.invoke(cli, [
            "convert", "-f", "pdf", "-t", "docx",
            str(tmp_path / "missing.pdf"), str(tmp_path / "out.docx"),
        ])

        assert result.exit_code == 1
        assert "Input file not found" in result.output


class TestGroup:
    """Test top level options."""

    def test_version(self, runner):
        """Test --version."""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_help_lists_commands(self, runner):
        """Test every tool is registered."""
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for command in ("password", "qrcode", "convert"):
            assert command in result.output
