"""
QRAC exception hierarchy.

All codec-level exceptions inherit from QRACError for unified handling.
Residual FEC errors are NOT an exception: they are reported through the
``all_corrected`` flag of the decode result.
"""


class QRACError(Exception):
    """Base exception for all QRAC errors."""
    pass


class ConfigurationError(QRACError):
    """Raised when codec configuration is invalid (e.g. fewer than 2 intervals)."""
    pass


class CapacityError(QRACError):
    """Grid too small for the symbol sequence."""

    def __init__(self, required: int, available: int, message: str = ""):
        self.required = required
        self.available = available
        super().__init__(
            message
            or f"Image dimensions too small: need {required} pixels, have {available}"
        )


class ImageLoadError(QRACError):
    """Raised when an image file cannot be decoded into pixels."""
    pass


class ImageSaveError(QRACError):
    """Raised when a pixel buffer cannot be written to disk."""
    pass
