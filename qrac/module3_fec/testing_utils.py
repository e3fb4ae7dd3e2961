# file: qrac/module3_fec/testing_utils.py

"""
Testing utilities for the FEC module.

Error injection for validation and robustness testing. Used only in
test/evaluation contexts.
"""

import random
from typing import Optional


def flip_bit(data: bytes, position: int, bit: int) -> bytes:
    """Return a copy of data with one bit (0 = LSB) of one byte flipped."""
    if not 0 <= position < len(data):
        raise ValueError(f"position {position} out of range for {len(data)} bytes")
    if not 0 <= bit < 8:
        raise ValueError(f"bit must be in [0, 8), got {bit}")
    corrupted = bytearray(data)
    corrupted[position] ^= (1 << bit)
    return bytes(corrupted)


def inject_bit_errors(
    data: bytes,
    error_rate: float,
    seed: Optional[int] = None
) -> bytes:
    """
    Inject random bit errors into data for testing.

    Uses a private Random instance so the global random state is untouched.

    Args:
        data: Original data
        error_rate: Fraction of bits to flip (0.0 to 1.0)
        seed: Random seed for reproducibility (optional)

    Returns:
        Data with injected errors
    """
    if not 0.0 <= error_rate <= 1.0:
        raise ValueError(f"error_rate must be in [0, 1], got {error_rate}")

    rng = random.Random(seed)
    corrupted = bytearray(data)

    total_bits = len(data) * 8
    num_errors = int(total_bits * error_rate)

    for pos in rng.sample(range(total_bits), num_errors):
        corrupted[pos // 8] ^= (1 << (pos % 8))

    return bytes(corrupted)
