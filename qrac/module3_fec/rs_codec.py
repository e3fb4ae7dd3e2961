# file: qrac/module3_fec/rs_codec.py

"""
Reed-Solomon codec backend.

Alternative to the XOR parity codec, selected with fec.type: reed_solomon.
Uses the reedsolo library for Galois Field arithmetic and RS encoding/decoding.
"""

import logging
import struct
from typing import Tuple

from reedsolo import RSCodec, ReedSolomonError

from .errors import FECEncodingError, FECDecodingError, FECCorrectionError, FECConfigurationError

logger = logging.getLogger(__name__)

# Codeword length fixed by GF(256)
CODEWORD_LENGTH = 255

_LENGTH_HEADER = struct.Struct(">I")


class ReedSolomonCodec:
    """
    Reed-Solomon codec wrapper with deterministic padding and error handling.

    Parameters:
        nsym (int): Number of parity symbols per 255-byte codeword

    Invariants:
        - n = 255, k = n - nsym
        - Corrects up to nsym // 2 symbol errors per codeword
    """

    def __init__(self, nsym: int = 32):
        if not 2 <= nsym < CODEWORD_LENGTH:
            raise FECConfigurationError(
                f"nsym={nsym} must be in [2, {CODEWORD_LENGTH})"
            )

        self.n = CODEWORD_LENGTH
        self.nsym = nsym
        self.k = self.n - nsym
        self.max_correctable_errors = nsym // 2
        self.codec = RSCodec(nsym)

    def encode(self, data: bytes) -> bytes:
        """
        Encode data with Reed-Solomon error correction.

        Returns:
            Concatenated n-byte codewords over
            [4 bytes: original_length][data][zero padding]
        """
        if not isinstance(data, (bytes, bytearray)):
            raise FECEncodingError(f"Expected bytes, got {type(data)}")

        try:
            data_with_header = _LENGTH_HEADER.pack(len(data)) + bytes(data)

            chunks = []
            for offset in range(0, len(data_with_header), self.k):
                chunk = data_with_header[offset:offset + self.k]
                if len(chunk) < self.k:
                    chunk = chunk + b'\x00' * (self.k - len(chunk))
                chunks.append(bytes(self.codec.encode(chunk)))

            return b''.join(chunks)

        except Exception as e:
            raise FECEncodingError(f"Reed-Solomon encoding failed: {e}") from e

    def decode(self, data: bytes) -> bytes:
        """
        Decode Reed-Solomon protected data with error correction.

        Raises:
            FECDecodingError: If data format is invalid
            FECCorrectionError: If errors exceed correction capability
        """
        self._check_layout(data)

        decoded_chunks = []
        num_chunks = len(data) // self.n
        for i in range(num_chunks):
            chunk = data[i * self.n:(i + 1) * self.n]
            try:
                decoded = self.codec.decode(chunk)
            except ReedSolomonError as decode_error:
                raise FECCorrectionError(
                    f"Reed-Solomon correction failed on chunk {i}/{num_chunks}: {decode_error}",
                    max_correctable=self.max_correctable_errors
                ) from decode_error
            decoded_chunk = decoded[0] if isinstance(decoded, (tuple, list)) else decoded
            decoded_chunks.append(bytes(decoded_chunk))

        return self._strip_header(b''.join(decoded_chunks))

    def extract_systematic(self, data: bytes) -> bytes:
        """
        Best-effort payload without correction.

        RS codewords are systematic: the first k bytes of each codeword are
        the message. Used when decode() cannot correct the buffer.
        """
        self._check_layout(data)
        message = b''.join(
            data[i:i + self.k] for i in range(0, len(data), self.n)
        )
        return self._strip_header(message, strict=False)

    def _check_layout(self, data: bytes) -> None:
        if not isinstance(data, (bytes, bytearray)):
            raise FECDecodingError(f"Expected bytes, got {type(data)}")
        if len(data) == 0:
            raise FECDecodingError("Cannot decode empty data")
        if len(data) % self.n != 0:
            raise FECDecodingError(
                f"Data length {len(data)} is not a multiple of codeword length {self.n}"
            )

    def _strip_header(self, message: bytes, strict: bool = True) -> bytes:
        if len(message) < _LENGTH_HEADER.size:
            raise FECDecodingError("Decoded data too short to contain length header")

        original_length = _LENGTH_HEADER.unpack(message[:_LENGTH_HEADER.size])[0]
        available = len(message) - _LENGTH_HEADER.size
        if original_length > available:
            if strict:
                raise FECDecodingError(
                    f"Length header {original_length} exceeds available data {available}"
                )
            original_length = available

        return message[_LENGTH_HEADER.size:_LENGTH_HEADER.size + original_length]


def decode_best_effort(codec: ReedSolomonCodec, data: bytes) -> Tuple[bytes, bool]:
    """
    Decode without raising on residual errors.

    Returns:
        (payload, all_corrected); on uncorrectable or malformed input the
        systematic bytes (or the raw buffer) are returned with False.
    """
    try:
        return codec.decode(data), True
    except FECCorrectionError as e:
        logger.warning(str(e))
        try:
            return codec.extract_systematic(data), False
        except FECDecodingError:
            return bytes(data), False
    except FECDecodingError as e:
        logger.warning(f"Reed-Solomon buffer rejected: {e}")
        return bytes(data), False
