"""
QR code encoding and rendering.

Encoding and image drawing are delegated to the qrcode library; this module
adds the terminal rendering and maps library failures to dev-swiss errors.
"""

import copy
import logging
from enum import Enum
from typing import NamedTuple, Tuple

import qrcode
from qrcode.exceptions import DataOverflowError
from qrcode.image.pil import PilImage
from qrcode.image.svg import SvgPathImage
from PIL import Image

from ..exceptions import (
    ContentTooLargeError,
    EmptyContentError,
    QrEncodingError,
    QrError,
)
from ..utils.validation import format_hex_color

logger = logging.getLogger(__name__)

# Width of the blank margin around the symbol, in modules
QUIET_ZONE = 4

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)

# qrcode 8 reports overflow as a ValueError about the version number
_OVERFLOW_MESSAGE = "Invalid version"


class ErrorCorrectionLevel(Enum):
    """QR error correction levels."""
    LOW = "low"
    MEDIUM = "medium"
    QUARTILE = "quartile"
    HIGH = "high"

    def to_qrcode_level(self) -> int:
        return {
            ErrorCorrectionLevel.LOW: qrcode.constants.ERROR_CORRECT_L,
            ErrorCorrectionLevel.MEDIUM: qrcode.constants.ERROR_CORRECT_M,
            ErrorCorrectionLevel.QUARTILE: qrcode.constants.ERROR_CORRECT_Q,
            ErrorCorrectionLevel.HIGH: qrcode.constants.ERROR_CORRECT_H,
        }[self]


class OutputFormat(Enum):
    """Where a QR code is rendered."""
    TERMINAL = "terminal"
    PNG = "png"
    SVG = "svg"


class QrConfig(NamedTuple):
    """Encoding and terminal rendering options."""
    content: str = ""
    error_correction: ErrorCorrectionLevel = ErrorCorrectionLevel.MEDIUM
    quiet_zone: bool = True
    invert: bool = False


class ImageConfig(NamedTuple):
    """Image rendering options."""
    scale: int = 8
    dark_color: Tuple[int, int, int] = BLACK
    light_color: Tuple[int, int, int] = WHITE


def generate_qr(config: QrConfig) -> qrcode.QRCode:
    """
    Encode content into a QR code.

    Args:
        config: Content and encoding options

    Returns:
        QRCode with its module matrix built

    Raises:
        EmptyContentError: If there is nothing to encode
        ContentTooLargeError: If the content exceeds the largest QR version
        QrEncodingError: If the encoder rejects the content
    """
    if not config.content:
        raise EmptyContentError("Content cannot be empty")

    qr = qrcode.QRCode(
        version=None,
        error_correction=config.error_correction.to_qrcode_level(),
        border=QUIET_ZONE if config.quiet_zone else 0,
    )

    try:
        qr.add_data(config.content)
        qr.make(fit=True)
    except DataOverflowError as e:
        raise ContentTooLargeError("Content is too large for QR code encoding") from e
    except ValueError as e:
        if _OVERFLOW_MESSAGE in str(e):
            raise ContentTooLargeError("Content is too large for QR code encoding") from e
        raise QrEncodingError(f"QR code encoding failed: {e}") from e

    logger.debug(
        "Encoded %d characters as version %s (%s error correction)",
        len(config.content), qr.version, config.error_correction.value,
    )
    return qr


def _sized(qr: qrcode.QRCode, scale: int) -> qrcode.QRCode:
    """Copy of qr that draws scale-pixel modules inside a full quiet zone."""
    if scale < 1:
        raise QrError(f"Scale must be at least 1, got {scale}")

    sized = copy.copy(qr)
    sized.box_size = scale
    sized.border = QUIET_ZONE
    return sized


def render_to_terminal(qr: qrcode.QRCode, config: QrConfig) -> str:
    """
    Render a QR code with unicode half blocks, two module rows per line.

    Light modules are drawn as ink so the code reads on a dark terminal;
    config.invert swaps dark and light.
    """
    matrix = qr.get_matrix()
    width = len(matrix[0]) if matrix else 0
    if len(matrix) % 2:
        matrix = matrix + [[False] * width]

    lines = []
    for top_row, bottom_row in zip(matrix[0::2], matrix[1::2]):
        line = []
        for top, bottom in zip(top_row, bottom_row):
            top_ink = top if config.invert else not top
            bottom_ink = bottom if config.invert else not bottom
            if top_ink and bottom_ink:
                line.append("█")
            elif top_ink:
                line.append("▀")
            elif bottom_ink:
                line.append("▄")
            else:
                line.append(" ")
        lines.append("".join(line))

    return "\n".join(lines)


def render_to_image(qr: qrcode.QRCode, config: ImageConfig) -> Image.Image:
    """
    Render a QR code to an RGB image.

    The image always carries the quiet zone; each module is config.scale
    pixels wide.
    """
    img = _sized(qr, config.scale).make_image(
        image_factory=PilImage,
        fill_color=tuple(config.dark_color),
        back_color=tuple(config.light_color),
    )
    return img.convert("RGB")


def render_to_svg(qr: qrcode.QRCode, config: ImageConfig) -> str:
    """Render a QR code as a standalone SVG document."""
    # The SVG factories take their colors from class attributes
    factory = type("ColoredSvgPathImage", (SvgPathImage,), {
        "background": format_hex_color(config.light_color),
        "QR_PATH_STYLE": dict(SvgPathImage.QR_PATH_STYLE, fill=format_hex_color(config.dark_color)),
    })

    img = _sized(qr, config.scale).make_image(image_factory=factory)
    return img.to_string(encoding="unicode")
