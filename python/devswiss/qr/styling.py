"""
Logo and background styling for rendered QR images.
"""

import logging
from typing import NamedTuple

import qrcode
from PIL import Image, UnidentifiedImageError

from ..exceptions import BackgroundTooSmallError, ImageLoadError, LogoSizeError, QrIOError
from ..utils.validation import get_logo_size_error_message, validate_logo_size
from .generator import QUIET_ZONE, ImageConfig, render_to_image

logger = logging.getLogger(__name__)

# Space kept free around a QR code placed on a background, in pixels
BACKGROUND_MARGIN = 20

# Smallest module size that still scans reliably
MIN_BACKGROUND_SCALE = 2


class LogoConfig(NamedTuple):
    """Logo overlay options."""
    path: str
    size_percent: int = 20


def _open_image(path: str) -> Image.Image:
    try:
        with Image.open(path) as image:
            image.load()
            return image.copy()
    except (OSError, UnidentifiedImageError) as e:
        raise ImageLoadError(f"Failed to load image: {path}: {e}") from e


def overlay_logo(qr_image: Image.Image, logo_config: LogoConfig) -> Image.Image:
    """
    Paste a logo in the center of a rendered QR image.

    Args:
        qr_image: Image returned by render_to_image, modified in place
        logo_config: Logo path and size

    Returns:
        The same image, for chaining

    Raises:
        LogoSizeError: If the size is outside 5-30 percent
        ImageLoadError: If the logo cannot be opened
    """
    if not validate_logo_size(logo_config.size_percent):
        raise LogoSizeError(get_logo_size_error_message(logo_config.size_percent))

    logo = _open_image(logo_config.path).convert("RGBA")

    qr_width, qr_height = qr_image.size
    max_logo_size = max(1, int(qr_width * logo_config.size_percent / 100))

    logo.thumbnail((max_logo_size, max_logo_size), Image.LANCZOS)

    x = (qr_width - logo.width) // 2
    y = (qr_height - logo.height) // 2
    qr_image.paste(logo, (x, y), logo)

    logger.debug("Placed %dx%d logo at (%d, %d)", logo.width, logo.height, x, y)
    return qr_image


def overlay_on_background(qr: qrcode.QRCode,
                          background_path: str,
                          image_config: ImageConfig) -> Image.Image:
    """
    Render a QR code centered on a background image.

    The module scale is chosen so the code fills the background's shorter
    side minus a BACKGROUND_MARGIN on each edge; image_config.scale is
    ignored.

    Raises:
        ImageLoadError: If the background cannot be opened
        BackgroundTooSmallError: If modules would be smaller than 2 pixels
    """
    background = _open_image(background_path).convert("RGB")
    bg_width, bg_height = background.size

    modules = qr.modules_count + QUIET_ZONE * 2
    available = max(0, min(bg_width, bg_height) - BACKGROUND_MARGIN * 2)
    scale = available // modules

    if scale < MIN_BACKGROUND_SCALE:
        raise BackgroundTooSmallError("Background image is too small for QR code")

    qr_image = render_to_image(qr, image_config._replace(scale=scale))
    x = (bg_width - qr_image.width) // 2
    y = (bg_height - qr_image.height) // 2
    background.paste(qr_image, (x, y))

    logger.debug("Placed QR code at scale %d on %dx%d background", scale, bg_width, bg_height)
    return background


def save_image(image: Image.Image, path: str) -> None:
    """Save an image, format chosen from the file extension."""
    try:
        image.save(path)
    except (OSError, ValueError) as e:
        raise QrIOError(f"Failed to save image: {e}") from e
