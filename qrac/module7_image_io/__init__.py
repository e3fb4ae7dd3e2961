"""
Module 7: Image and File I/O

Collaborators that move grids and payloads between disk and memory.

Public API:
    - PixelSource, PixelSink, ByteSource, ByteSink: collaborator interfaces
    - ImageFileSource, ImageFileSink: PNG/BMP via OpenCV
    - FileByteSource, FileByteSink: raw files
    - MemoryPixelStore, MemoryByteStore: in-memory collaborators
    - output_path: <stem><suffix>.<ext> next to the input
"""

from .interfaces import (
    PixelSource,
    PixelSink,
    ByteSource,
    ByteSink,
    MemoryPixelStore,
    MemoryByteStore,
)
from .image_io import ImageFileSource, ImageFileSink, is_jpeg_file, has_jpeg_extension
from .files import FileByteSource, FileByteSink, output_path

__all__ = [
    'PixelSource',
    'PixelSink',
    'ByteSource',
    'ByteSink',
    'MemoryPixelStore',
    'MemoryByteStore',
    'ImageFileSource',
    'ImageFileSink',
    'is_jpeg_file',
    'has_jpeg_extension',
    'FileByteSource',
    'FileByteSink',
    'output_path',
]

__version__ = '1.0.0'
