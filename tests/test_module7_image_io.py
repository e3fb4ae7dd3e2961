"""
Unit tests for Module 7: Image and File I/O

Test coverage:
    - PNG / BMP write and read back (RGB order preserved)
    - Optional alpha channel
    - Grayscale input
    - JPEG warning
    - Load / save failures
    - Raw byte files
    - Output naming
    - In-memory collaborators
"""

import logging
import os

import cv2
import numpy as np
import pytest

from qrac.exceptions import ImageLoadError
from qrac.module7_image_io import (
    PixelSource,
    ImageFileSource,
    ImageFileSink,
    FileByteSource,
    FileByteSink,
    MemoryPixelStore,
    MemoryByteStore,
    output_path,
    is_jpeg_file,
)


def make_grid(height=6, width=5):
    rng = np.random.default_rng(5)
    return rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)


class TestImageFiles:
    """Lossless image round trips through OpenCV."""

    @pytest.mark.parametrize("extension", ["png", "bmp"])
    def test_round_trip(self, tmp_path, extension):
        grid = make_grid()
        path = str(tmp_path / f"grid.{extension}")

        ImageFileSink().write(path, grid)
        loaded = ImageFileSource().read(path)

        assert loaded.shape == grid.shape
        assert np.array_equal(loaded, grid)

    def test_channel_order_is_rgb(self, tmp_path):
        grid = np.zeros((1, 1, 3), dtype=np.uint8)
        grid[0, 0] = [200, 100, 50]
        path = str(tmp_path / "order.png")

        ImageFileSink().write(path, grid)

        bgr = cv2.imread(path, cv2.IMREAD_UNCHANGED)
        assert bgr[0, 0].tolist() == [50, 100, 200]
        assert ImageFileSource().read(path)[0, 0].tolist() == [200, 100, 50]

    def test_alpha_channel(self, tmp_path):
        grid = make_grid()
        path = str(tmp_path / "alpha.png")

        ImageFileSink(alpha=True).write(path, grid)
        loaded = ImageFileSource().read(path)

        assert loaded.shape == (6, 5, 4)
        assert np.array_equal(loaded[..., :3], grid)
        assert (loaded[..., 3] == 255).all()

    def test_grayscale_file(self, tmp_path):
        path = str(tmp_path / "gray.png")
        cv2.imwrite(path, np.full((3, 4), 77, dtype=np.uint8))
        loaded = ImageFileSource().read(path)
        assert loaded.shape == (3, 4)

    def test_creates_output_directory(self, tmp_path):
        path = str(tmp_path / "nested" / "dir" / "grid.png")
        ImageFileSink().write(path, make_grid())
        assert os.path.isfile(path)

    def test_jpeg_warning(self, tmp_path, caplog):
        path = str(tmp_path / "lossy.jpg")
        cv2.imwrite(path, make_grid())

        with caplog.at_level(logging.WARNING):
            ImageFileSource().read(path)

        assert "JPEG" in caplog.text
        assert is_jpeg_file(path)

    def test_unsupported_output_format(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported output format"):
            ImageFileSink().write(str(tmp_path / "grid.jpg"), make_grid())

    def test_invalid_grid_shape(self, tmp_path):
        with pytest.raises(ValueError, match="Invalid grid shape"):
            ImageFileSink().write(str(tmp_path / "grid.png"), np.zeros((4, 4), dtype=np.uint8))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ImageFileSource().read(str(tmp_path / "missing.png"))

    def test_not_an_image(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"definitely not an image")
        with pytest.raises(ImageLoadError, match="Failed to load"):
            ImageFileSource().read(str(path))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.png"
        path.write_bytes(b"")
        with pytest.raises(ImageLoadError, match="empty"):
            ImageFileSource().read(str(path))


class TestByteFiles:

    def test_round_trip(self, tmp_path):
        path = str(tmp_path / "out" / "payload.bin")
        FileByteSink().write(path, b"\x00\x01payload")
        assert FileByteSource().read(path) == b"\x00\x01payload"

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FileByteSource().read(str(tmp_path / "nope.bin"))


class TestOutputPath:

    def test_encoded_name(self):
        assert output_path("/data/report.docx", "_encoded", "png") == "/data/report_encoded.png"

    def test_decoded_name(self):
        assert output_path("/data/report_encoded.png", "_decoded", "pdf") == \
            "/data/report_encoded_decoded.pdf"

    def test_no_directory(self):
        assert output_path("notes.txt", "_encoded", "bmp") == "notes_encoded.bmp"


class TestMemoryStores:

    def test_pixel_store(self):
        store = MemoryPixelStore()
        grid = make_grid()
        store.write("a", grid)
        grid[0, 0, 0] ^= 0xFF
        assert not np.array_equal(store.read("a"), grid)

    def test_byte_store(self):
        store = MemoryByteStore()
        store.write("a", bytearray(b"xyz"))
        assert store.read("a") == b"xyz"
        with pytest.raises(FileNotFoundError):
            store.read("b")

    def test_interfaces_are_abstract(self):
        with pytest.raises(TypeError):
            PixelSource()
