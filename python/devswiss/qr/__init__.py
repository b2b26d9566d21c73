"""
QR code generation for dev-swiss.

Encodes text with the qrcode library and renders it to the terminal,
PNG or SVG, with optional logo and background styling via Pillow.
"""

from .generator import (
    ErrorCorrectionLevel,
    ImageConfig,
    OutputFormat,
    QrConfig,
    generate_qr,
    render_to_image,
    render_to_svg,
    render_to_terminal,
)
from .styling import LogoConfig, overlay_logo, overlay_on_background, save_image

__all__ = [
    'ErrorCorrectionLevel',
    'ImageConfig',
    'LogoConfig',
    'OutputFormat',
    'QrConfig',
    'generate_qr',
    'overlay_logo',
    'overlay_on_background',
    'render_to_image',
    'render_to_svg',
    'render_to_terminal',
    'save_image',
]
