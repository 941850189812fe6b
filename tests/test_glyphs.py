# this_file: tests/test_glyphs.py

"""Tests for glyph bitmap decoding and painting."""

import numpy as np
import pytest

from font_preview_py.base import UnsupportedPixelEncodingError
from font_preview_py.glyphs import (
    BitmapKind,
    GlyphBitmap,
    PixelEncoding,
    blend_coverage,
    decode_bitmap,
)

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


def blank_canvas(width, height, color=WHITE):
    canvas = np.empty((height, width, 3), dtype=np.uint8)
    canvas[...] = color
    return canvas


class TestBlendCoverage:
    """Test the per-channel coverage blend."""

    def test_half_coverage_over_white(self):
        """Coverage 128 of black over white gives 127 (integer division)."""
        result = blend_coverage(np.array([255, 255, 255]), np.array(128), np.array([0, 0, 0]))
        assert result.tolist() == [127, 127, 127]

    def test_endpoints(self):
        bg = np.array([10, 200, 30])
        pen = np.array([250, 5, 128])
        assert blend_coverage(bg, np.array(0), pen).tolist() == [10, 200, 30]
        assert blend_coverage(bg, np.array(255), pen).tolist() == [250, 5, 128]


class TestDecodeBitmap:
    """Test variant selection from the rasterizer pixel encoding."""

    def test_mono(self):
        bitmap = decode_bitmap(PixelEncoding.MONO, b"\xa0\x40", 2, 10, 1)
        assert bitmap.kind is BitmapKind.MONO
        assert (bitmap.width, bitmap.height) == (10, 1)
        assert bitmap.bytes_per_component == 0
        assert bitmap.samples().tolist() == [
            [True, False, True, False, False, False, False, False, False, True]
        ]

    def test_gray(self):
        bitmap = decode_bitmap(PixelEncoding.GRAY, bytes(range(8)), 4, 3, 2)
        assert bitmap.kind is BitmapKind.GRAY
        assert bitmap.samples().tolist() == [[0, 1, 2], [4, 5, 6]]

    def test_lcd_width_is_divided(self):
        """Horizontal LCD bitmaps are three samples wide per pixel."""
        bitmap = decode_bitmap(PixelEncoding.LCD, bytes(12), 6, 6, 2)
        assert bitmap.kind is BitmapKind.SUBPIXEL_H
        assert (bitmap.width, bitmap.height) == (2, 2)
        assert bitmap.bytes_per_component == 3

    def test_lcd_v_height_is_divided(self):
        """Vertical LCD bitmaps are three samples tall per pixel."""
        bitmap = decode_bitmap(PixelEncoding.LCD_V, bytes(12), 2, 2, 6)
        assert bitmap.kind is BitmapKind.SUBPIXEL_V
        assert (bitmap.width, bitmap.height) == (2, 2)

    @pytest.mark.parametrize(
        "encoding, stride, raw_width, raw_height, bpp",
        [
            (PixelEncoding.MONO, 2, 9, 3, 0),
            (PixelEncoding.GRAY, 4, 3, 3, 1),
            (PixelEncoding.LCD, 9, 9, 2, 3),
            (PixelEncoding.LCD_V, 4, 3, 6, 3),
        ],
    )
    def test_buffer_length_invariant(self, encoding, stride, raw_width, raw_height, bpp):
        """Owned buffers hold height * |stride| * max(1, bpp) bytes."""
        raw = bytes(abs(stride) * raw_height)
        bitmap = decode_bitmap(encoding, raw, stride, raw_width, raw_height)
        assert len(bitmap.buffer) == bitmap.height * abs(stride) * max(1, bpp)

    def test_buffer_is_copied(self):
        raw = bytearray(b"\x10\x20\x30")
        bitmap = decode_bitmap(PixelEncoding.GRAY, raw, 3, 3, 1)
        raw[0] = 0xFF
        assert bitmap.samples().tolist() == [[0x10, 0x20, 0x30]]

    def test_negative_stride_keeps_sign(self):
        """The sign is preserved but addressing uses its magnitude."""
        bitmap = decode_bitmap(PixelEncoding.GRAY, bytes(range(8)), -4, 3, 2)
        assert bitmap.row_stride == -4
        assert bitmap.row_length == 4
        assert bitmap.samples().tolist() == [[0, 1, 2], [4, 5, 6]]

    def test_bgra_is_empty(self):
        """Colour bitmaps are a documented limitation and paint nothing."""
        bitmap = decode_bitmap(PixelEncoding.BGRA, bytes(64), 16, 4, 4)
        assert bitmap.is_empty
        assert (bitmap.width, bitmap.height) == (0, 0)

    @pytest.mark.parametrize("encoding", [PixelEncoding.NONE, PixelEncoding.GRAY2, PixelEncoding.GRAY4, 42])
    def test_unsupported_encodings(self, encoding):
        with pytest.raises(UnsupportedPixelEncodingError) as exc_info:
            decode_bitmap(encoding, bytes(4), 2, 2, 2)
        assert exc_info.value.encoding == encoding

    def test_zero_size(self):
        bitmap = decode_bitmap(PixelEncoding.GRAY, b"", 0, 0, 0)
        assert bitmap.is_empty
        canvas = blank_canvas(3, 3)
        bitmap.paint(canvas, 0, 0, BLACK)
        assert (canvas == 255).all()


class TestGlyphBitmapValidation:
    def test_wrong_buffer_length(self):
        with pytest.raises(ValueError):
            GlyphBitmap(BitmapKind.GRAY, 2, 2, 2, bytes(3), 1)

    def test_negative_size(self):
        with pytest.raises(ValueError):
            GlyphBitmap(BitmapKind.GRAY, -1, 2, 2, bytes(4), 1)

    def test_stride_too_short(self):
        with pytest.raises(ValueError):
            GlyphBitmap(BitmapKind.SUBPIXEL_H, 2, 1, 3, bytes(9), 3)


class TestMonoPaint:
    """Monochrome glyphs overwrite covered pixels and leave the rest alone."""

    def test_covered_pixels_take_pen_color(self):
        bitmap = decode_bitmap(PixelEncoding.MONO, b"\x80\x40", 1, 2, 2)
        canvas = blank_canvas(4, 4, (9, 99, 199))
        bitmap.paint(canvas, 1, 1, (1, 2, 3))

        assert canvas[1, 1].tolist() == [1, 2, 3]
        assert canvas[2, 2].tolist() == [1, 2, 3]
        assert canvas[1, 2].tolist() == [9, 99, 199]
        assert canvas[2, 1].tolist() == [9, 99, 199]

    def test_no_intermediate_colors(self):
        bitmap = decode_bitmap(PixelEncoding.MONO, bytes([0b10110100] * 8), 1, 8, 8)
        canvas = blank_canvas(8, 8)
        bitmap.paint(canvas, 0, 0, BLACK)
        assert set(np.unique(canvas).tolist()) <= {0, 255}

    def test_uncovered_pixels_unchanged_over_existing_ink(self):
        """Mono paint does not blend: zeros never lighten earlier glyphs."""
        canvas = blank_canvas(2, 1)
        canvas[0, 1] = (50, 50, 50)
        bitmap = decode_bitmap(PixelEncoding.MONO, b"\x80", 1, 2, 1)
        bitmap.paint(canvas, 0, 0, BLACK)
        assert canvas[0, 0].tolist() == [0, 0, 0]
        assert canvas[0, 1].tolist() == [50, 50, 50]


class TestGrayPaint:
    def test_coverage_zero_and_full(self):
        bitmap = decode_bitmap(PixelEncoding.GRAY, bytes([0, 255]), 2, 2, 1)
        canvas = blank_canvas(2, 1, (40, 80, 120))
        bitmap.paint(canvas, 0, 0, (200, 100, 0))
        assert canvas[0, 0].tolist() == [40, 80, 120]
        assert canvas[0, 1].tolist() == [200, 100, 0]

    def test_half_coverage_scenario(self):
        bitmap = decode_bitmap(PixelEncoding.GRAY, bytes([128]), 1, 1, 1)
        canvas = blank_canvas(1, 1)
        bitmap.paint(canvas, 0, 0, BLACK)
        assert canvas[0, 0].tolist() == [127, 127, 127]

    @pytest.mark.parametrize("background, pen", [(WHITE, BLACK), (BLACK, WHITE)])
    def test_monotonic_in_coverage(self, background, pen):
        bitmap = decode_bitmap(PixelEncoding.GRAY, bytes(range(256)), 256, 256, 1)
        canvas = blank_canvas(256, 1, background)
        bitmap.paint(canvas, 0, 0, pen)
        red = canvas[0, :, 0].astype(int)
        steps = np.diff(red)
        if pen == BLACK:
            assert (steps <= 0).all()
        else:
            assert (steps >= 0).all()

    def test_overlapping_boxes_accumulate(self):
        """The second glyph blends over the first one, not over the background."""
        bitmap = decode_bitmap(PixelEncoding.GRAY, bytes([128]), 1, 1, 1)
        canvas = blank_canvas(1, 1)
        bitmap.paint(canvas, 0, 0, BLACK)
        bitmap.paint(canvas, 0, 0, BLACK)
        assert canvas[0, 0].tolist() == [63, 63, 63]

    def test_stride_padding_ignored(self):
        """Bytes past the logical width are never painted."""
        bitmap = decode_bitmap(PixelEncoding.GRAY, bytes([255, 0, 0, 255]), 4, 1, 1)
        canvas = blank_canvas(4, 1)
        bitmap.paint(canvas, 0, 0, BLACK)
        assert canvas[0, 0].tolist() == [0, 0, 0]
        assert (canvas[0, 1:] == 255).all()


class TestPaintBounds:
    """Paint only writes inside the glyph box and the canvas."""

    @pytest.mark.parametrize(
        "encoding, raw_width, raw_height, stride",
        [
            (PixelEncoding.MONO, 2, 2, 1),
            (PixelEncoding.GRAY, 2, 2, 2),
            (PixelEncoding.LCD, 6, 2, 6),
            (PixelEncoding.LCD_V, 2, 6, 2),
        ],
    )
    def test_writes_stay_in_box(self, encoding, raw_width, raw_height, stride):
        raw = bytes([0xFF]) * (abs(stride) * raw_height)
        bitmap = decode_bitmap(encoding, raw, stride, raw_width, raw_height)
        canvas = blank_canvas(6, 6, (77, 77, 77))
        bitmap.paint(canvas, 2, 3, BLACK)

        touched = np.argwhere((canvas != 77).any(axis=2))
        assert len(touched) == 4
        assert touched[:, 0].min() >= 3 and touched[:, 0].max() < 5
        assert touched[:, 1].min() >= 2 and touched[:, 1].max() < 4

    def test_clipped_at_canvas_edges(self):
        bitmap = decode_bitmap(PixelEncoding.GRAY, bytes([255] * 9), 3, 3, 3)
        canvas = blank_canvas(2, 2)
        bitmap.paint(canvas, -1, -1, BLACK)
        assert canvas.tolist() == [[[0, 0, 0], [0, 0, 0]], [[0, 0, 0], [0, 0, 0]]]

        canvas = blank_canvas(2, 2)
        bitmap.paint(canvas, 1, 1, BLACK)
        assert canvas[1, 1].tolist() == [0, 0, 0]
        assert canvas[0, 0].tolist() == [255, 255, 255]

    def test_fully_outside_is_noop(self):
        bitmap = decode_bitmap(PixelEncoding.GRAY, bytes([255] * 4), 2, 2, 2)
        canvas = blank_canvas(3, 3)
        bitmap.paint(canvas, 5, -7, BLACK)
        assert (canvas == 255).all()


class TestSubpixelPaint:
    """Per-channel blending of LCD bitmaps."""

    def test_horizontal_channel_assignment(self):
        bitmap = decode_bitmap(PixelEncoding.LCD, bytes([10, 20, 30]), 3, 3, 1)
        canvas = blank_canvas(1, 1)
        bitmap.paint(canvas, 0, 0, BLACK)
        assert canvas[0, 0].tolist() == [245, 235, 225]

    def test_horizontal_reversed_swaps_red_and_blue(self):
        bitmap = decode_bitmap(PixelEncoding.LCD, bytes([10, 20, 30]), 3, 3, 1, reversed_subpixel=True)
        canvas = blank_canvas(1, 1)
        bitmap.paint(canvas, 0, 0, BLACK)
        assert canvas[0, 0].tolist() == [225, 235, 245]

    def test_horizontal_addressing(self):
        """Sample (row, col, sub) sits at row * stride + 3 * col + sub."""
        raw = bytes([1, 2, 3, 4, 5, 6, 0, 0, 7, 8, 9, 10, 11, 12, 0, 0])
        bitmap = decode_bitmap(PixelEncoding.LCD, raw, 8, 6, 2)
        assert bitmap.samples().tolist() == [
            [[1, 2, 3], [4, 5, 6]],
            [[7, 8, 9], [10, 11, 12]],
        ]

    def test_vertical_addressing(self):
        """Sample (row, col, sub) sits at (3 * row + sub) * stride + col."""
        raw = bytes([10, 11, 0, 20, 21, 0, 30, 31, 0])
        bitmap = decode_bitmap(PixelEncoding.LCD_V, raw, 3, 2, 3)
        assert (bitmap.width, bitmap.height) == (2, 1)
        assert bitmap.samples().tolist() == [[[10, 20, 30], [11, 21, 31]]]

    def test_vertical_reversed_swaps_red_and_blue(self):
        raw = bytes([10, 20, 30])
        normal = decode_bitmap(PixelEncoding.LCD_V, raw, 1, 1, 3)
        flipped = decode_bitmap(PixelEncoding.LCD_V, raw, 1, 1, 3, reversed_subpixel=True)

        a = blank_canvas(1, 1)
        b = blank_canvas(1, 1)
        normal.paint(a, 0, 0, BLACK)
        flipped.paint(b, 0, 0, BLACK)

        assert a[0, 0, 0] == b[0, 0, 2]
        assert a[0, 0, 2] == b[0, 0, 0]
        assert a[0, 0, 1] == b[0, 0, 1]

    @pytest.mark.parametrize("encoding, raw_width, raw_height", [(PixelEncoding.LCD, 6, 2), (PixelEncoding.LCD_V, 2, 6)])
    @pytest.mark.parametrize("reversed_subpixel", [False, True])
    def test_full_coverage_is_pen_color(self, encoding, raw_width, raw_height, reversed_subpixel):
        raw = bytes([255]) * (raw_width * raw_height)
        bitmap = decode_bitmap(encoding, raw, raw_width, raw_width, raw_height, reversed_subpixel)
        canvas = blank_canvas(2, 2)
        bitmap.paint(canvas, 0, 0, (12, 34, 56))
        assert (canvas == np.array([12, 34, 56], dtype=np.uint8)).all()

    def test_negative_stride_addresses_by_magnitude(self):
        positive = decode_bitmap(PixelEncoding.LCD, bytes(range(12)), 6, 6, 2)
        negative = decode_bitmap(PixelEncoding.LCD, bytes(range(12)), -6, 6, 2)
        assert np.array_equal(positive.samples(), negative.samples())
