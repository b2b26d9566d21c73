"""
CLI interface for dev-swiss developer toolkit.
"""

import sys
import logging
import threading
import time
from pathlib import Path
from typing import Optional

import click
import pyperclip

from .exceptions import (
    ConvertError,
    PasswordError,
    QrError,
    RandomSourceError,
)
from .utils.password_generator import PasswordGenerator, validate
from .utils.validation import parse_color
from .qr import (
    ErrorCorrectionLevel,
    ImageConfig,
    LogoConfig,
    OutputFormat,
    QrConfig,
    generate_qr,
    overlay_logo,
    overlay_on_background,
    render_to_image,
    render_to_svg,
    render_to_terminal,
    save_image,
)
from .convert import ConvertConfig, Format, convert as convert_file

__version__ = "0.1.0"

CLIPBOARD_CLEAR_SECONDS = 60

logger = logging.getLogger(__name__)


def fail(message: str) -> None:
    """Print an error and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def copy_to_clipboard(value: str) -> bool:
    """Copy value to the clipboard and clear it again after a delay."""
    try:
        pyperclip.copy(value)
    except pyperclip.PyperclipException as e:
        click.echo(f"Could not copy to clipboard: {e}", err=True)
        return False

    def clear_clipboard() -> None:
        time.sleep(CLIPBOARD_CLEAR_SECONDS)
        try:
            pyperclip.copy("")
        except pyperclip.PyperclipException:
            logger.debug("Clipboard could not be cleared")

    clear_thread = threading.Thread(target=clear_clipboard, daemon=True)
    clear_thread.start()
    return True


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging on stderr")
@click.version_option(version=__version__, prog_name="devswiss")
def cli(verbose: bool) -> None:
    """dev-swiss - A Swiss Army knife CLI toolkit for developers."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


@cli.command()
@click.option("--length", "-l", default=16, type=click.IntRange(min=1), help="Password length (default: 16)")
@click.option("--count", "-n", default=1, type=click.IntRange(min=1), help="Number of passwords to generate")
@click.option("--no-uppercase", is_flag=True, help="Exclude uppercase letters")
@click.option("--no-lowercase", is_flag=True, help="Exclude lowercase letters")
@click.option("--no-numbers", is_flag=True, help="Exclude numbers")
@click.option("--no-symbols", is_flag=True, help="Exclude symbols")
@click.option("--no-ambiguous", is_flag=True, help="Exclude ambiguous characters (0O1lI)")
@click.option("--exclude", default="", help="Custom characters to exclude")
@click.option("--copy", "-c", is_flag=True, help="Copy the last password to the clipboard")
def password(length: int, count: int, no_uppercase: bool, no_lowercase: bool,
             no_numbers: bool, no_symbols: bool, no_ambiguous: bool,
             exclude: str, copy: bool) -> None:
    """Generate secure random passwords."""
    try:
        request = validate(
            length=length,
            count=count,
            no_uppercase=no_uppercase,
            no_lowercase=no_lowercase,
            no_numbers=no_numbers,
            no_symbols=no_symbols,
            no_ambiguous=no_ambiguous,
            exclude=exclude,
        )
        generator = PasswordGenerator(request)
        logger.debug("Generating %d password(s) from %s", count, generator.get_charset_info())
        passwords = generator.generate_many()
    except (PasswordError, RandomSourceError) as e:
        fail(str(e))

    for value in passwords:
        click.echo(value)

    if copy and copy_to_clipboard(passwords[-1]):
        click.echo(f"Password copied to clipboard (cleared in {CLIPBOARD_CLEAR_SECONDS}s).", err=True)


@cli.command()
@click.argument("content")
@click.option("--format", "-f", "output_format", default="terminal",
              type=click.Choice([f.value for f in OutputFormat]), help="Output format")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Output file path (required for png/svg)")
@click.option("--error-correction", "-e", default="medium",
              type=click.Choice([level.value for level in ErrorCorrectionLevel]), help="Error correction level")
@click.option("--scale", "-s", default=8, type=click.IntRange(min=1), help="Pixels per module for image output")
@click.option("--invert", is_flag=True, help="Invert colors (dark <-> light)")
@click.option("--no-quiet-zone", is_flag=True, help="Hide quiet zone (border around QR code)")
@click.option("--logo", type=click.Path(dir_okay=False), help="Path to logo image to embed in center")
@click.option("--logo-size", default=20, type=int, help="Logo size as percentage of QR code (5-30)")
@click.option("--background", type=click.Path(dir_okay=False), help="Path to background image")
@click.option("--dark-color", default="black", help="Dark module color (hex: #000000 or name: black)")
@click.option("--light-color", default="white", help="Light module color (hex: #FFFFFF or name: white)")
def qrcode(content: str, output_format: str, output: Optional[str], error_correction: str,
           scale: int, invert: bool, no_quiet_zone: bool, logo: Optional[str], logo_size: int,
           background: Optional[str], dark_color: str, light_color: str) -> None:
    """Generate QR codes from URLs or text."""
    level = ErrorCorrectionLevel(error_correction)
    fmt = OutputFormat(output_format)

    # A centered logo hides modules, so it needs the strongest correction
    if logo and level in (ErrorCorrectionLevel.LOW, ErrorCorrectionLevel.MEDIUM):
        click.echo("Note: Using high error correction for logo overlay", err=True)
        logger.info("Upgraded error correction from %s to high for logo overlay", level.value)
        level = ErrorCorrectionLevel.HIGH

    qr_config = QrConfig(
        content=content,
        error_correction=level,
        quiet_zone=not no_quiet_zone,
        invert=invert,
    )

    try:
        qr = generate_qr(qr_config)

        if fmt == OutputFormat.TERMINAL:
            click.echo(render_to_terminal(qr, qr_config))
            return

        if not output:
            fail(f"Output path required for {fmt.value} format. Use -o <path>")

        image_config = ImageConfig(
            scale=scale,
            dark_color=parse_color(dark_color),
            light_color=parse_color(light_color),
        )

        if fmt == OutputFormat.SVG:
            try:
                Path(output).write_text(render_to_svg(qr, image_config), encoding="utf-8")
            except OSError as e:
                fail(f"Failed to write file: {e}")
            click.echo(f"Saved SVG to {output}")
            return

        if background:
            image = overlay_on_background(qr, background, image_config)
            save_image(image, output)
            click.echo(f"Saved QR with background to {output}")
            return

        image = render_to_image(qr, image_config)
        if logo:
            overlay_logo(image, LogoConfig(path=logo, size_percent=logo_size))

        save_image(image, output)
        click.echo(f"Saved PNG to {output}")

    except QrError as e:
        fail(str(e))


@cli.command()
@click.option("--from", "-f", "from_format", required=True,
              type=click.Choice([f.value for f in Format]), help="Source format")
@click.option("--to", "-t", "to_format", required=True,
              type=click.Choice([f.value for f in Format]), help="Target format")
@click.argument("input_path", type=click.Path(path_type=Path))
@click.argument("output_path", type=click.Path(path_type=Path))
@click.option("--force", is_flag=True, help="Overwrite output file if it exists")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed conversion info and warnings")
def convert(from_format: str, to_format: str, input_path: Path, output_path: Path,
            force: bool, verbose: bool) -> None:
    """Convert files between formats."""
    config = ConvertConfig(
        input_path=input_path,
        output_path=output_path,
        from_format=Format(from_format),
        to_format=Format(to_format),
        force=force,
        verbose=verbose,
    )

    try:
        result = convert_file(config)
    except ConvertError as e:
        fail(str(e))

    if verbose:
        click.echo(f"Converted {result.pages_processed} page(s)")
        for warning in result.warnings:
            click.echo(f"Warning: {warning}", err=True)

    click.echo(f"Successfully converted to {output_path}")


def main() -> None:
    """Main entry point for the CLI application."""
    cli()


if __name__ == "__main__":
    main()
