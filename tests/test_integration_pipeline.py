"""
End-to-end integration tests: bytes -> image -> bytes.

Exercises every module together through in-memory and on-disk
collaborators, including FEC recovery of a damaged channel.
"""

import numpy as np
import pytest

from qrac import CodecConfig, QRACEncoder, QRACDecoder
from qrac.module1_quantization import QuantizationScheme
from qrac.module3_fec import compute_ber
from qrac.module7_image_io import (
    MemoryPixelStore,
    MemoryByteStore,
    ImageFileSink,
    ImageFileSource,
)


# 40 bytes at ratio 0.1 keep every redundancy block free of wraparound
BLOCK_CONFIG = CodecConfig(
    interval_width=5,
    filler_max_value=10,
    fec_redundancy_ratio=0.1,
    max_fec_warnings=15,
    min_dimension=16,
)
BLOCK_PAYLOAD = bytes(range(1, 41))


def run_memory_pipeline(payload, config, mode="adaptive"):
    images = MemoryPixelStore()
    files = MemoryByteStore()
    files.write("input", payload)

    images.write("grid", QRACEncoder(config).encode(files.read("input"), mode=mode))
    result = QRACDecoder(config).decode(images.read("grid"))
    files.write("output", result.payload)
    return files.read("output"), result


class TestMemoryPipeline:

    @pytest.mark.parametrize("interval_width,filler_max_value", [(5, 10), (1, 0), (12, 20), (64, 10)])
    def test_configurations(self, interval_width, filler_max_value):
        config = CodecConfig(
            interval_width=interval_width,
            filler_max_value=filler_max_value,
            fec_redundancy_ratio=0.3,
            max_fec_warnings=10,
            min_dimension=4,
        )
        payload = bytes((i * 73 + 19) % 256 for i in range(333))

        output, result = run_memory_pipeline(payload, config)

        assert output == payload
        assert result.all_corrected

    def test_binary_payload_tagged(self):
        payload = b"PK\x03\x04" + bytes(range(256))
        output, result = run_memory_pipeline(payload, BLOCK_CONFIG, mode="auto")
        assert output == payload
        assert result.content_type == "zip"


class TestDamageRecovery:

    def test_adjacent_interval_shift_is_corrected(self):
        scheme = QuantizationScheme(BLOCK_CONFIG)
        pixels = QRACEncoder(BLOCK_CONFIG).encode(BLOCK_PAYLOAD)

        # Byte 0 is 0x01: first symbol is index 0; index 1 flips bit 3 of byte 0
        assert pixels[0, 0, 0] == scheme.anchor(0)
        damaged = pixels.copy()
        damaged[0, 0, 0] = scheme.anchor(1)

        result = QRACDecoder(BLOCK_CONFIG).decode(damaged)

        assert result.payload == BLOCK_PAYLOAD
        assert result.all_corrected is True
        assert result.fec_report.corrected_positions == [(0, 0, 3)]

    def test_heavy_damage_is_reported(self):
        pixels = QRACEncoder(BLOCK_CONFIG).encode(BLOCK_PAYLOAD)
        damaged = pixels.copy()
        damaged[0, :10, :] = 200

        result = QRACDecoder(BLOCK_CONFIG).decode(damaged)

        assert result.all_corrected is False
        assert len(result.payload) == len(BLOCK_PAYLOAD)
        assert compute_ber(BLOCK_PAYLOAD, result.payload) > 0


class TestFilePipeline:

    @pytest.mark.parametrize("extension", ["png", "bmp"])
    def test_disk_round_trip(self, tmp_path, extension):
        payload = ("Zeilen mit Umlauten: äöü\n" * 40).encode("utf-8")
        config = CodecConfig(5, 10, 0.25, 15, 16)
        path = str(tmp_path / f"payload.{extension}")

        ImageFileSink(alpha=(extension == "png")).write(path, QRACEncoder(config).encode(payload))
        result = QRACDecoder(config).decode(ImageFileSource().read(path))

        assert result.payload == payload
        assert result.content_type == "txt"

    def test_repaired_file_decodes(self, tmp_path):
        config = CodecConfig(5, 10, 0.25, 15, 16)
        payload = bytes(range(200))
        pixels = QRACEncoder(config).encode(payload)
        drifted = np.where(pixels > 0, pixels.astype(int) - 2, 7).astype(np.uint8)
        path = str(tmp_path / "drifted.png")
        ImageFileSink().write(path, drifted)

        decoder = QRACDecoder(config)
        repaired, report = decoder.repair(ImageFileSource().read(path))

        assert report.deviating_values > 0
        assert decoder.decode(repaired).payload == payload
