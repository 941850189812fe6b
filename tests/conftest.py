# this_file: tests/conftest.py

"""Shared fakes for the shaping, rasterizing and font lookup collaborators."""

from pathlib import Path

import pytest

from font_preview_py.base import (
    FontLoadError,
    FontLocator,
    FontNotFoundError,
    RasterEngine,
    RasterResult,
    ShapedGlyph,
    ShapingEngine,
    ShapingError,
)
from font_preview_py.glyphs import PixelEncoding


class FakeFontFace:
    """Stands in for FontFace without touching FreeType."""

    def __init__(self, path="fake.ttf", point_size=10.0, *, dpi=(96, 96), hinted=True, fail=False):
        self.path = Path(path)
        self.point_size = point_size
        self.dpi = dpi
        self.hinted = hinted
        self.fail = fail
        self.load_calls = 0

    def load(self):
        self.load_calls += 1
        if self.fail:
            raise FontLoadError(f"Failed to load font from {self.path}")


class FakeShapingEngine(ShapingEngine):
    """Maps every character to a glyph id through a table."""

    engine = "fake"

    def __init__(self, glyphs_by_char=None, fail=False):
        self.glyphs_by_char = glyphs_by_char or {}
        self.fail = fail
        self.calls = []

    def shape(self, text, font_face):
        self.calls.append(text)
        if self.fail:
            raise ShapingError(f"Failed to shape {text!r}")
        return [self.glyphs_by_char[char] for char in text]


class FakeRasterEngine(RasterEngine):
    """Returns canned raster results by glyph id."""

    engine = "fake"

    def __init__(self, results=None):
        self.results = results or {}
        self.calls = []

    def load_and_render(self, font_face, glyph_id, load_flags, render_mode):
        self.calls.append((glyph_id, int(load_flags), int(render_mode)))
        return self.results[glyph_id]


class FakeLocator(FontLocator):
    def __init__(self, missing=False):
        self.missing = missing

    def resolve(self, font_specifier):
        if self.missing:
            raise FontNotFoundError(f"No font file matches {font_specifier!r}")
        return Path(f"/fonts/{font_specifier}.ttf")


def shaped(glyph_id, advance_px, x_offset_px=0, y_offset_px=0):
    """ShapedGlyph with pixel values converted to 26.6."""
    return ShapedGlyph(glyph_id, int(x_offset_px * 64), int(y_offset_px * 64), int(advance_px * 64), 0)


def gray_raster(width, height, value=255, bearing_left=0, bearing_top=0, stride=None):
    stride = width if stride is None else stride
    buffer = bytes([value]) * (height * abs(stride))
    return RasterResult(PixelEncoding.GRAY, buffer, stride, width, height, bearing_left, bearing_top)


def mono_raster(rows, bearing_left=0, bearing_top=0):
    """Mono raster from strings of '#' (covered) and '.' (uncovered)."""
    width = len(rows[0])
    stride = (width + 7) // 8
    buffer = bytearray()
    for row in rows:
        bits = "".join("1" if c == "#" else "0" for c in row).ljust(stride * 8, "0")
        buffer.extend(int(bits[i : i + 8], 2) for i in range(0, len(bits), 8))
    return RasterResult(PixelEncoding.MONO, bytes(buffer), stride, width, len(rows), bearing_left, bearing_top)


# Capital A, 7x7, drawn above the baseline
GLYPH_A_ROWS = [
    "...#...",
    "..#.#..",
    "..#.#..",
    ".#...#.",
    ".#####.",
    "#.....#",
    "#.....#",
]


@pytest.fixture
def font_face():
    return FakeFontFace()


@pytest.fixture
def shaper_and_rasterizer():
    """Shaper/rasterizer pair for the text 'Ag' rendered in gray."""
    shaper = FakeShapingEngine({"A": shaped(1, 5), "g": shaped(2, 3)})
    rasterizer = FakeRasterEngine(
        {
            1: gray_raster(3, 4, bearing_left=1, bearing_top=4),
            2: gray_raster(2, 6, bearing_left=0, bearing_top=4),
        }
    )
    return shaper, rasterizer
