"""
Collaborator interfaces.

The codec core works on in-memory buffers only. Image and file access are
injected through these interfaces so the pipeline can be driven from
memory in tests and from disk in the CLI.
"""

from abc import ABC, abstractmethod

import numpy as np


class PixelSource(ABC):
    """Supplies an (H, W, C) uint8 pixel grid."""

    @abstractmethod
    def read(self, location: str) -> np.ndarray:
        pass


class PixelSink(ABC):
    """Stores an (H, W, C) uint8 pixel grid."""

    @abstractmethod
    def write(self, location: str, pixels: np.ndarray) -> None:
        pass


class ByteSource(ABC):
    """Supplies a raw payload."""

    @abstractmethod
    def read(self, location: str) -> bytes:
        pass


class ByteSink(ABC):
    """Stores a raw payload."""

    @abstractmethod
    def write(self, location: str, data: bytes) -> None:
        pass


class MemoryPixelStore(PixelSource, PixelSink):
    """In-memory pixel collaborator keyed by location."""

    def __init__(self):
        self.images = {}

    def read(self, location: str) -> np.ndarray:
        if location not in self.images:
            raise FileNotFoundError(f"No image stored at {location}")
        return self.images[location].copy()

    def write(self, location: str, pixels: np.ndarray) -> None:
        self.images[location] = np.array(pixels, dtype=np.uint8, copy=True)


class MemoryByteStore(ByteSource, ByteSink):
    """In-memory byte collaborator keyed by location."""

    def __init__(self):
        self.files = {}

    def read(self, location: str) -> bytes:
        if location not in self.files:
            raise FileNotFoundError(f"No data stored at {location}")
        return self.files[location]

    def write(self, location: str, data: bytes) -> None:
        self.files[location] = bytes(data)
