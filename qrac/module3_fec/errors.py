# file: qrac/module3_fec/errors.py

"""
FEC-specific exception hierarchy.

All exceptions inherit from FECError for unified handling. Residual errors
after XOR-parity correction are not exceptions; they are reported through
the all_corrected flag.
"""

from ..exceptions import QRACError, ConfigurationError


class FECError(QRACError):
    """Base exception for all FEC-related errors."""
    pass


class FECEncodingError(FECError):
    """Raised when encoding fails."""
    pass


class FECDecodingError(FECError):
    """Raised when decoding fails."""
    pass


class FECCorrectionError(FECDecodingError):
    """Raised when error correction capability is exceeded."""

    def __init__(self, message: str, num_errors: int = None, max_correctable: int = None):
        super().__init__(message)
        self.num_errors = num_errors
        self.max_correctable = max_correctable


class FECConfigurationError(FECError, ConfigurationError):
    """Raised when FEC configuration is invalid."""
    pass
