"""
Custom exceptions for dev-swiss.
"""


class DevSwissError(Exception):
    """Base exception for dev-swiss."""

    pass


class PasswordError(DevSwissError):
    """Password request could not be satisfied."""

    pass


class NoCharacterSetEnabledError(PasswordError):
    """All character sets were disabled."""

    pass


class EmptyCharacterPoolError(PasswordError):
    """Exclusions removed every character from the pool."""

    pass


class InvalidLengthError(PasswordError):
    """Password length is not a positive integer."""

    pass


class InvalidCountError(PasswordError):
    """Password count is not a positive integer."""

    pass


class RandomSourceError(DevSwissError):
    """Secure random source is unavailable."""

    pass


class QrError(DevSwissError):
    """QR code generation failed."""

    pass


class EmptyContentError(QrError):
    """Nothing to encode."""

    pass


class ContentTooLargeError(QrError):
    """Content does not fit in any QR version."""

    pass


class QrEncodingError(QrError):
    """QR encoder rejected the content."""

    pass


class InvalidColorError(QrError):
    """Color string could not be parsed."""

    pass


class LogoSizeError(QrError):
    """Logo size percentage is out of bounds."""

    pass


class ImageLoadError(QrError):
    """Logo or background image could not be opened."""

    pass


class BackgroundTooSmallError(QrError):
    """Background image cannot hold a readable QR code."""

    pass


class QrIOError(QrError):
    """Rendered output could not be written."""

    pass


class ConvertError(DevSwissError):
    """File conversion failed."""

    pass


class UnsupportedConversionError(ConvertError):
    """Requested format pair is not supported."""

    pass


class InputNotFoundError(ConvertError):
    """Input file does not exist."""

    pass


class OutputExistsError(ConvertError):
    """Output file exists and overwriting was not requested."""

    pass


class PdfReadError(ConvertError):
    """PDF could not be read."""

    pass


class DocxWriteError(ConvertError):
    """DOCX could not be written."""

    pass
