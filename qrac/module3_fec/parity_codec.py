# file: qrac/module3_fec/parity_codec.py

"""
XOR parity codec.

Buffer layout: payload ++ redundancy, where
    |redundancy| = floor(|payload| * ratio)
    redundancy[i] = XOR of payload[(j * |redundancy| + i) mod |payload|], j = 0..7

Decoding runs three explicit phases:
    1. syndrome pass: collect mismatching redundancy indices
    2. correction pass: per mismatching index, try single-bit flips of its
       8 contributing bytes and keep the FIRST flip that satisfies the parity
       (bounded to 64 candidates per index)
    3. verification pass: re-check every redundancy byte

This is a best-effort single-byte-per-block corrector, not an erasure code.
The first-fit search may accept a flip that satisfies the parity but is not
the actual corruption. Multi-byte corruption inside one block, or corruption
of the redundancy bytes themselves, is not reliably corrected.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Tuple

logger = logging.getLogger(__name__)

# Payload bytes folded into each redundancy byte
CONTRIBUTORS_PER_BLOCK = 8

# Candidate flips tried per mismatching index: 8 positions x 8 bits
MAX_ATTEMPTS_PER_INDEX = CONTRIBUTORS_PER_BLOCK * 8

# Buffers shorter than this are returned without validation
MIN_VERIFIABLE_SIZE = 5

OMITTED_MARKER = "Additional FEC errors omitted for brevity..."


@dataclass
class FECDecodeReport:
    """
    Outcome of an XOR-parity decode.

    Attributes:
        payload: corrected payload (redundancy stripped)
        all_corrected: True if every redundancy byte verifies after correction
        mismatched_indices: syndrome, redundancy indices that failed initially
        corrected_positions: (redundancy index, payload position, bit) per applied flip
        unresolved_indices: redundancy indices still failing after correction
        warnings: bounded diagnostic messages for unresolved indices
    """
    payload: bytes
    all_corrected: bool
    mismatched_indices: List[int] = field(default_factory=list)
    corrected_positions: List[Tuple[int, int, int]] = field(default_factory=list)
    unresolved_indices: List[int] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class XorParityCodec:
    """
    Appends, verifies and corrects an XOR-parity redundancy suffix.

    Parameters:
        ratio (float): redundancy bytes per payload byte (>= 0)
        max_warnings (int): diagnostics emitted before the omission marker
    """

    def __init__(self, ratio: float, max_warnings: int):
        if ratio < 0:
            raise ValueError(f"ratio must be >= 0, got {ratio}")
        if max_warnings < 0:
            raise ValueError(f"max_warnings must be >= 0, got {max_warnings}")
        self.ratio = ratio
        self.max_warnings = max_warnings

    def fec_size(self, payload_size: int) -> int:
        return int(payload_size * self.ratio)

    @staticmethod
    def contributors(index: int, fec_size: int, payload_size: int) -> List[int]:
        """Payload positions folded into redundancy byte `index`, in j order."""
        return [
            (j * fec_size + index) % payload_size
            for j in range(CONTRIBUTORS_PER_BLOCK)
        ]

    @classmethod
    def parity(cls, payload, index: int, fec_size: int) -> int:
        value = 0
        for position in cls.contributors(index, fec_size, len(payload)):
            value ^= payload[position]
        return value

    def encode(self, payload: bytes) -> bytes:
        """
        Append floor(|payload| * ratio) redundancy bytes.

        No-op for an empty payload or a zero-length redundancy block.
        """
        payload = bytes(payload)
        fec_size = self.fec_size(len(payload))
        if len(payload) == 0 or fec_size == 0:
            return payload

        redundancy = bytes(
            self.parity(payload, i, fec_size) for i in range(fec_size)
        )
        return payload + redundancy

    def split_sizes(self, total_size: int) -> Tuple[int, int]:
        """
        Recover (payload size, redundancy size) from a buffer length.

        Starts from round(total / (1 + ratio)). Because the redundancy length
        is floored at encode time, the rounded estimate can be off by one; a
        neighbouring size n with n + floor(n * ratio) == total wins when the
        estimate itself does not satisfy that identity.
        """
        estimate = int(math.floor(total_size / (1.0 + self.ratio) + 0.5))
        for candidate in (estimate, estimate - 1, estimate + 1):
            if 0 < candidate <= total_size and candidate + self.fec_size(candidate) == total_size:
                return candidate, total_size - candidate
        return estimate, total_size - estimate

    def decode(self, buffer: bytes) -> Tuple[bytes, bool]:
        """
        Verify and correct a buffer produced by encode().

        Returns:
            (payload, all_corrected)
        """
        report = self.decode_with_report(buffer)
        return report.payload, report.all_corrected

    def decode_with_report(self, buffer: bytes) -> FECDecodeReport:
        """
        Verify and correct, returning the full FECDecodeReport.

        Buffers shorter than 5 bytes, or whose derived redundancy length is
        zero, are returned unchanged with all_corrected=True.
        """
        buffer = bytes(buffer)
        if len(buffer) < MIN_VERIFIABLE_SIZE:
            return FECDecodeReport(payload=buffer, all_corrected=True)

        original_size, fec_size = self.split_sizes(len(buffer))
        if fec_size <= 0 or original_size <= 0:
            return FECDecodeReport(payload=buffer, all_corrected=True)

        payload = bytearray(buffer[:original_size])
        stored = buffer[original_size:]

        # Phase 1: syndrome
        mismatched = self._syndrome(payload, stored, fec_size)
        if not mismatched:
            return FECDecodeReport(payload=bytes(payload), all_corrected=True)

        logger.info(f"FEC syndrome: {len(mismatched)} of {fec_size} redundancy bytes mismatch")

        # Phase 2: bounded first-fit correction
        corrected_positions = []
        for index in mismatched:
            flip = self._correct_index(payload, stored[index], index, fec_size)
            if flip is not None:
                position, bit = flip
                corrected_positions.append((index, position, bit))
                logger.info(f"Corrected byte error at position {position} (FEC block {index}, bit {bit})")

        # Phase 3: verification
        unresolved = self._syndrome(payload, stored, fec_size)
        warnings = self._diagnostics(unresolved)
        for message in warnings:
            logger.warning(message)

        return FECDecodeReport(
            payload=bytes(payload),
            all_corrected=not unresolved,
            mismatched_indices=mismatched,
            corrected_positions=corrected_positions,
            unresolved_indices=unresolved,
            warnings=warnings,
        )

    def _syndrome(self, payload: bytearray, stored: bytes, fec_size: int) -> List[int]:
        return [
            i for i in range(fec_size)
            if self.parity(payload, i, fec_size) != stored[i]
        ]

    def _correct_index(self, payload: bytearray, expected: int, index: int, fec_size: int):
        """
        Apply the first single-bit flip among the contributors of `index`
        that makes its parity equal `expected`.

        Returns:
            (position, bit) of the applied flip, or None
        """
        current = self.parity(payload, index, fec_size)
        positions = self.contributors(index, fec_size, len(payload))
        attempts = 0
        for position in positions:
            # A position folded in an even number of times cancels out
            if positions.count(position) % 2 == 0:
                continue
            original_byte = payload[position]
            for bit in range(8):
                attempts += 1
                if attempts > MAX_ATTEMPTS_PER_INDEX:
                    return None
                test_byte = original_byte ^ (1 << bit)
                if current ^ original_byte ^ test_byte == expected:
                    payload[position] = test_byte
                    return position, bit
        return None

    def _diagnostics(self, unresolved: List[int]) -> List[str]:
        messages = []
        for count, index in enumerate(unresolved):
            if count >= self.max_warnings:
                messages.append(OMITTED_MARKER)
                break
            messages.append(f"Unable to correct error in FEC block {index}")
        return messages
