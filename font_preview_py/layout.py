# this_file: font_preview_py/layout.py
"""
Shaping, rasterisation and layout metrics for a single line of text.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from loguru import logger

from .base import RasterEngine, ShapedGlyph, ShapingEngine, UnsupportedPixelEncodingError
from .constants import PIXEL_FRACTION_FACTOR
from .directives import RasterDirective, is_reversed_subpixel, translate_options
from .engines import FontFace
from .glyphs import GlyphBitmap, decode_bitmap
from .options import RenderOptions


@dataclass(frozen=True)
class BoundingBox:
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class PositionedGlyph:
    """
    A rasterized glyph with its shaping position, in (fractional) pixels.

    Offsets and advances come from the shaper, bearings from the rasterizer.
    """

    offset: tuple[float, float]
    advance: tuple[float, float]
    bearing: tuple[float, float]
    bitmap: GlyphBitmap

    @property
    def offset_x(self) -> float:
        return self.offset[0]

    @property
    def offset_y(self) -> float:
        return self.offset[1]

    @property
    def advance_x(self) -> float:
        return self.advance[0]

    @property
    def advance_y(self) -> float:
        return self.advance[1]

    @property
    def bearing_left(self) -> float:
        return self.bearing[0]

    @property
    def bearing_top(self) -> float:
        return self.bearing[1]

    @property
    def width(self) -> int:
        return self.bitmap.width

    @property
    def height(self) -> int:
        return self.bitmap.height

    def paint(self, canvas: np.ndarray, x: int, y: int, pen: tuple[int, int, int]) -> None:
        self.bitmap.paint(canvas, x, y, pen)


def _from_fixed(value: int) -> float:
    return value / PIXEL_FRACTION_FACTOR


def _rasterize_glyph(
    raster_engine: RasterEngine,
    font_face: FontFace,
    shaped: ShapedGlyph,
    directive: RasterDirective,
    reversed_subpixel: bool,
) -> PositionedGlyph:
    raster = raster_engine.load_and_render(
        font_face, shaped.glyph_id, directive.load_flags, directive.render_mode
    )
    try:
        bitmap = decode_bitmap(
            raster.encoding,
            raster.buffer,
            raster.stride,
            raster.raw_width,
            raster.raw_height,
            reversed_subpixel,
        )
    except UnsupportedPixelEncodingError as exc:
        logger.warning("Glyph {} rendered as empty: {}", shaped.glyph_id, exc)
        bitmap = GlyphBitmap.empty()

    return PositionedGlyph(
        offset=(_from_fixed(shaped.x_offset), _from_fixed(shaped.y_offset)),
        advance=(_from_fixed(shaped.x_advance), _from_fixed(shaped.y_advance)),
        bearing=(float(raster.bearing_left), float(raster.bearing_top)),
        bitmap=bitmap,
    )


@dataclass(frozen=True)
class GlyphRun:
    """
    Glyphs of one line in shaping order, with the metrics used to size a canvas.

    The bounding box width is the sum of all advances plus the bitmap width of
    the last glyph. This is an estimate, not an ink bound: glyphs whose bitmap
    is wider than their advance (italic overhang) can reach past it.
    """

    glyphs: tuple[PositionedGlyph, ...]
    baseline_offset: float
    bounding_box: BoundingBox

    def __len__(self) -> int:
        return len(self.glyphs)

    def __iter__(self):
        return iter(self.glyphs)

    @classmethod
    def from_glyphs(cls, glyphs: list[PositionedGlyph] | tuple[PositionedGlyph, ...]) -> GlyphRun:
        """Compute baseline and bounding box for glyphs in shaping order."""
        # horizontal writing only
        baseline_offset = 0.0
        bottom_extent = 0.0
        width = 0.0

        for glyph in glyphs:
            bearing_top = glyph.bearing_top
            # glyphs below the pen origin never raise the baseline
            if bearing_top >= 0 and bearing_top > baseline_offset:
                baseline_offset = bearing_top

            extent = glyph.height - abs(bearing_top)
            if extent > bottom_extent:
                bottom_extent = extent

            width += glyph.advance_x

        if glyphs:
            width += glyphs[-1].width

        box = BoundingBox(0.0, 0.0, width, baseline_offset + bottom_extent)
        return cls(tuple(glyphs), baseline_offset, box)


def shape_and_rasterize(
    shaping_engine: ShapingEngine,
    raster_engine: RasterEngine,
    font_face: FontFace,
    text: str,
    options: RenderOptions,
) -> GlyphRun:
    """
    Shape ``text`` and rasterize every resulting glyph.

    Args:
        shaping_engine: Shaper session used for this call only
        raster_engine: Rasterizer session used for this call only
        font_face: Face to render with, opened here if needed
        text: Text to render, shaped in a single pass
        options: Rendering quality profile

    Returns:
        GlyphRun in shaping order

    Raises:
        FontLoadError: If the face cannot be opened
        ShapingError: If the shaper rejects the text
    """
    font_face.load()
    shaped = shaping_engine.shape(text, font_face)

    directive = translate_options(options)
    reversed_subpixel = is_reversed_subpixel(options)
    logger.debug(
        "Rasterizing {} glyphs with load flags {:#x}, render mode {}",
        len(shaped),
        int(directive.load_flags),
        directive.render_mode.name,
    )

    glyphs = [
        _rasterize_glyph(raster_engine, font_face, item, directive, reversed_subpixel)
        for item in shaped
    ]
    return GlyphRun.from_glyphs(glyphs)
