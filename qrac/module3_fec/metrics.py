# file: qrac/module3_fec/metrics.py

"""
FEC performance metrics.

Bit error rate, byte error rate and redundancy overhead, used to evaluate
how much corruption survives a decode.
"""


def compute_ber(original: bytes, received: bytes) -> float:
    """
    Compute Bit Error Rate (BER) between two byte sequences.

    BER = (number of bit errors) / (total number of bits)

    Raises:
        ValueError: If inputs have different lengths

    Example:
        >>> compute_ber(b'\\x00\\x00', b'\\x01\\x00')
        0.0625
    """
    if len(original) != len(received):
        raise ValueError(
            f"Length mismatch: original={len(original)}, received={len(received)}"
        )

    if len(original) == 0:
        return 0.0

    bit_errors = sum(bin(b1 ^ b2).count('1') for b1, b2 in zip(original, received))
    return bit_errors / (len(original) * 8)


def compute_byte_error_rate(original: bytes, received: bytes) -> float:
    """
    Fraction of byte positions that differ.

    Raises:
        ValueError: If inputs have different lengths
    """
    if len(original) != len(received):
        raise ValueError(
            f"Length mismatch: original={len(original)}, received={len(received)}"
        )

    if len(original) == 0:
        return 0.0

    return sum(1 for b1, b2 in zip(original, received) if b1 != b2) / len(original)


def compute_redundancy_overhead(original_length: int, encoded_length: int) -> float:
    """
    Compute redundancy overhead as a percentage.

    Overhead = ((encoded_length - original_length) / original_length) * 100

    Example:
        >>> compute_redundancy_overhead(100, 125)
        25.0
    """
    if original_length <= 0:
        raise ValueError(f"original_length must be > 0, got {original_length}")

    if encoded_length < original_length:
        raise ValueError(
            f"encoded_length {encoded_length} < original_length {original_length}"
        )

    return ((encoded_length - original_length) / original_length) * 100.0
