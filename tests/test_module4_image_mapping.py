"""
Unit tests for Module 4: Symbol Image Mapping

Test coverage:
    - layout / extract round trip
    - Capacity checks
    - Buffer surplus and deficit
    - Extra channels (alpha)
    - Channel normalization
    - Anchor correction
"""

import numpy as np
import pytest

from qrac.config import CodecConfig
from qrac.exceptions import CapacityError
from qrac.module1_quantization import QuantizationScheme, Data, FILLER
from qrac.module4_image_mapping import (
    SymbolImageMapper,
    AnchorCorrector,
    required_pixels,
    ensure_rgb,
    with_alpha,
)


DEFAULT_CONFIG = CodecConfig(
    interval_width=5,
    filler_max_value=10,
    fec_redundancy_ratio=0.25,
    max_fec_warnings=15,
    min_dimension=16,
)


@pytest.fixture
def scheme():
    return QuantizationScheme(DEFAULT_CONFIG)


@pytest.fixture
def mapper(scheme):
    return SymbolImageMapper(scheme)


class TestLayout:
    """Writing symbols onto a grid."""

    def test_anchor_values_row_major(self, mapper):
        symbols = [Data(0), Data(48), FILLER, Data(1)]
        grid = mapper.layout(symbols, 2, 1)

        assert grid.shape == (1, 2, 3)
        assert grid.dtype == np.uint8
        assert grid[0, 0].tolist() == [13, 253, 0]
        assert grid[0, 1].tolist() == [18, 0, 0]

    def test_second_row(self, mapper):
        grid = mapper.layout([Data(2)] * 9, 2, 2)
        assert grid[1, 0].tolist() == [23, 23, 23]
        assert grid[1, 1].tolist() == [0, 0, 0]

    def test_capacity_error(self, mapper):
        with pytest.raises(CapacityError) as exc_info:
            mapper.layout([Data(0)] * 7, 2, 1)
        assert exc_info.value.required == 3
        assert exc_info.value.available == 2
        assert "too small" in str(exc_info.value)

    def test_empty_symbols_fit_any_grid(self, mapper):
        assert mapper.layout([], 0, 0).shape == (0, 0, 3)
        assert not mapper.layout([], 4, 4).any()

    def test_index_out_of_range(self, mapper):
        with pytest.raises(ValueError, match="out of range"):
            mapper.layout([Data(49)], 1, 1)

    def test_not_a_symbol(self, mapper):
        with pytest.raises(TypeError):
            mapper.layout([3], 1, 1)

    def test_required_pixels(self):
        assert required_pixels(0) == 0
        assert required_pixels(3) == 1
        assert required_pixels(4) == 2


class TestExtract:
    """Reading symbols back."""

    def test_round_trip_with_filler_tail(self, mapper):
        symbols = [Data(i % 49) for i in range(10)]
        grid = mapper.layout(symbols, 4, 4)

        extracted = mapper.extract(grid, 4, 4, 3)

        assert len(extracted) == 48
        assert extracted[:10] == symbols
        assert all(s is FILLER for s in extracted[10:])

    def test_near_zero_pixel_is_filler(self, mapper):
        buffer = np.array([[[3, 10, 7], [12, 0, 9]]], dtype=np.uint8)
        extracted = mapper.extract(buffer, 2, 1, 3)
        assert extracted == [FILLER, FILLER, FILLER, Data(0), FILLER, FILLER]

    def test_alpha_channel_ignored(self, mapper):
        rgba = np.array([[[13, 18, 23, 255], [0, 0, 0, 255]]], dtype=np.uint8)
        extracted = mapper.extract(rgba, 2, 1, 4)
        assert extracted == [Data(0), Data(1), Data(2), FILLER, FILLER, FILLER]

    def test_surplus_bytes_ignored(self, mapper):
        buffer = np.array([13, 13, 13, 200, 200, 200, 200], dtype=np.uint8)
        extracted = mapper.extract(buffer, 1, 1, 3)
        assert extracted == [Data(0), Data(0), Data(0)]

    def test_missing_bytes_read_as_filler(self, mapper):
        buffer = np.array([13, 18, 23, 28], dtype=np.uint8)
        extracted = mapper.extract(buffer, 2, 1, 3)
        assert extracted == [Data(0), Data(1), Data(2), Data(3), FILLER, FILLER]

    def test_too_few_channels(self, mapper):
        with pytest.raises(ValueError, match="at least 3 channels"):
            mapper.extract(np.zeros(4, dtype=np.uint8), 2, 1, 2)

    def test_extract_indices(self, mapper):
        grid = mapper.layout([Data(5), Data(6)], 1, 1)
        assert mapper.extract_indices(grid, 1, 1, 3).tolist() == [5, 6, -1]


class TestChannels:
    """Channel normalization helpers."""

    def test_gray_replicated(self):
        gray = np.array([[13, 0], [200, 5]], dtype=np.uint8)
        rgb = ensure_rgb(gray)
        assert rgb.shape == (2, 2, 3)
        assert rgb[1, 0].tolist() == [200, 200, 200]

    def test_gray_alpha_drops_alpha(self):
        ga = np.array([[[50, 255]]], dtype=np.uint8)
        assert ensure_rgb(ga)[0, 0].tolist() == [50, 50, 50]

    def test_rgb_unchanged(self):
        rgb = np.ones((2, 2, 3), dtype=np.uint8)
        assert ensure_rgb(rgb) is rgb

    def test_with_alpha(self):
        rgba = with_alpha(np.zeros((1, 2, 3), dtype=np.uint8))
        assert rgba.shape == (1, 2, 4)
        assert rgba[..., 3].tolist() == [[255, 255]]

    def test_with_alpha_keeps_existing(self):
        rgba = np.full((1, 1, 4), 9, dtype=np.uint8)
        assert with_alpha(rgba)[0, 0, 3] == 9


class TestAnchorCorrector:
    """Snapping drifted grids back onto anchors."""

    def test_snaps_and_reports(self, scheme):
        pixels = np.array([[[14, 252, 0], [18, 18, 18], [3, 5, 10]]], dtype=np.uint8)

        corrected, report = AnchorCorrector(scheme).correct(pixels, 3, 1, 3)

        assert corrected.tolist() == [[[13, 253, 0], [18, 18, 18], [0, 0, 0]]]
        assert report.deviating_values == 2
        assert report.filler_pixels == 1
        assert report.total_pixels == 3
        assert report.deviation_ratio == pytest.approx(2 / 6)
        assert not report.already_pure

    def test_clean_grid_is_pure(self, scheme, mapper):
        grid = mapper.layout([Data(i) for i in range(20)], 4, 4)

        corrected, report = AnchorCorrector(scheme).correct(grid, 4, 4, 3)

        assert np.array_equal(corrected, grid)
        assert report.already_pure

    def test_alpha_preserved(self, scheme):
        pixels = np.array([[[14, 19, 24, 77]]], dtype=np.uint8)
        corrected, _ = AnchorCorrector(scheme).correct(pixels, 1, 1, 4)
        assert corrected[0, 0].tolist() == [13, 18, 23, 77]

    def test_perturbed_grid_decodes_to_original(self, scheme, mapper):
        symbols = [Data((i * 7) % 49) for i in range(30)]
        grid = mapper.layout(symbols, 4, 4)
        rng = np.random.default_rng(3)
        noise = rng.integers(-1, 2, size=grid.shape)
        # Keep data channels inside their interval (anchor +/- 1) and filler below 11
        drifted = np.where(grid > 0, grid.astype(int) + noise, np.abs(noise)).astype(np.uint8)

        corrected, _ = AnchorCorrector(scheme).correct(drifted, 4, 4, 3)

        assert np.array_equal(corrected, grid)
        assert mapper.extract(corrected, 4, 4, 3)[:30] == symbols
