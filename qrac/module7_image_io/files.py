"""
Raw file collaborators and output naming.
"""

import os

from .interfaces import ByteSource, ByteSink


class FileByteSource(ByteSource):
    """Reads a whole file as bytes."""

    def read(self, location: str) -> bytes:
        if not os.path.isfile(location):
            raise FileNotFoundError(f"File does not exist: {location}")
        with open(location, "rb") as f:
            return f.read()


class FileByteSink(ByteSink):
    """Writes bytes to a file, creating the parent directory if needed."""

    def write(self, location: str, data: bytes) -> None:
        output_dir = os.path.dirname(location)
        if output_dir and not os.path.exists(output_dir):
            os.makedirs(output_dir, exist_ok=True)
        with open(location, "wb") as f:
            f.write(data)


def output_path(input_path: str, suffix: str, extension: str) -> str:
    """
    Output file next to the input: <dir>/<stem><suffix>.<extension>

    Example:
        >>> output_path("/data/report.docx", "_encoded", "png")
        '/data/report_encoded.png'
    """
    directory, filename = os.path.split(input_path)
    stem = os.path.splitext(filename)[0]
    return os.path.join(directory, f"{stem}{suffix}.{extension}")
