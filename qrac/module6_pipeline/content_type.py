"""
Content type detection.

Advisory tag for a decoded payload, used only to pick an output file
extension: a magic-byte lookup with a text heuristic fallback.
"""

from typing import Dict, Tuple

# Checked in order; first match wins
SIGNATURES: Tuple[Tuple[str, bytes], ...] = (
    ("zip", b"\x50\x4B\x03\x04"),
    ("doc", b"\xD0\xCF\x11\xE0"),
    ("pdf", b"\x25\x50\x44\x46"),
    ("png", b"\x89\x50\x4E\x47"),
    ("jpg", b"\xFF\xD8\xFF\xE0"),
    ("jpg", b"\xFF\xD8\xFF\xE1"),
    ("bmp", b"\x42\x4D"),
    ("gif", b"\x47\x49\x46\x38"),
)

TEXT_SAMPLE_SIZE = 1000
TEXT_DETECTION_THRESHOLD = 0.85
CONTROL_CHAR_THRESHOLD = 0.05


class ContentTypeDetector:
    """
    Guesses a file extension for decoded bytes.

    Attributes:
        text_threshold: minimum printable ratio for 'txt'
        control_threshold: control-character ratio must stay below this
    """

    def __init__(
        self,
        text_threshold: float = TEXT_DETECTION_THRESHOLD,
        control_threshold: float = CONTROL_CHAR_THRESHOLD
    ):
        self.text_threshold = text_threshold
        self.control_threshold = control_threshold

    def detect(self, data: bytes) -> str:
        """
        Returns:
            one of 'zip', 'doc', 'pdf', 'png', 'jpg', 'bmp', 'gif', 'txt', 'bin'
        """
        if len(data) < 4:
            return "bin"

        for name, signature in SIGNATURES:
            if data.startswith(signature):
                return name

        return "txt" if self.is_text(data) else "bin"

    def is_text(self, data: bytes) -> bool:
        """
        Heuristic over the first 1000 bytes.

        Printable ASCII, TAB/LF/CR and bytes >= 127 (possible UTF-8) count as
        printable. More than 5% NUL bytes or 2% other control bytes rejects
        immediately.
        """
        if len(data) == 0:
            return False

        stats = self._classify(data[:TEXT_SAMPLE_SIZE])
        if stats is None:
            return False

        sample_size = min(len(data), TEXT_SAMPLE_SIZE)
        printable_ratio = stats["printable"] / sample_size
        control_ratio = stats["control"] / sample_size
        return printable_ratio > self.text_threshold and control_ratio < self.control_threshold

    @staticmethod
    def _classify(sample: bytes):
        size = len(sample)
        counts: Dict[str, int] = {"printable": 0, "control": 0, "null": 0}
        for c in sample:
            if 32 <= c <= 126 or c in (9, 10, 13):
                counts["printable"] += 1
            elif c == 0:
                counts["null"] += 1
                if counts["null"] > size // 20:
                    return None
            elif c < 32:
                counts["control"] += 1
                if counts["control"] > size // 50:
                    return None
            else:
                counts["printable"] += 1
        return counts


def detect_file_type(data: bytes) -> str:
    """Module-level shortcut for ContentTypeDetector().detect(data)."""
    return ContentTypeDetector().detect(data)
