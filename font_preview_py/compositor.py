# this_file: font_preview_py/compositor.py
"""
Top level entry point: text in, RGB canvas out.
"""

from __future__ import annotations

import math
from collections.abc import Callable

import numpy as np
from loguru import logger

from .base import FontLocator, RasterEngine, ShapingEngine
from .constants import DEFAULT_BACKGROUND, DEFAULT_PEN, DEFAULT_POINT_SIZE
from .engines import FontconfigLocator, FontFace, FreeTypeRasterEngine, HarfBuzzShapingEngine
from .layout import GlyphRun, shape_and_rasterize
from .options import RenderOptions

Color = tuple[int, ...] | str


def parse_color(color: Color) -> tuple[int, int, int]:
    """
    Parse a color given as an RGB(A) tuple or an ``RRGGBB``/``RRGGBBAA`` hex string.

    Alpha is accepted and dropped, the canvas has no alpha channel.
    """
    if isinstance(color, str):
        hex_str = color.lstrip("#")
        if len(hex_str) not in (6, 8):
            raise ValueError(f"Invalid color format: {color}. Must be RRGGBB or RRGGBBAA")
        try:
            return (int(hex_str[0:2], 16), int(hex_str[2:4], 16), int(hex_str[4:6], 16))
        except ValueError as exc:
            raise ValueError(f"Invalid color format: {color}") from exc

    if len(color) not in (3, 4):
        raise ValueError(f"Expected an RGB or RGBA tuple, got {color!r}")
    rgb = tuple(int(c) for c in color[:3])
    if any(c < 0 or c > 255 for c in rgb):
        raise ValueError(f"Color components must be within 0-255: {color!r}")
    return rgb  # type: ignore[return-value]


class TextCompositor:
    """
    Renders text offscreen, independent of the session's own font settings.

    Every :meth:`render` call creates its own shaping and raster engine
    sessions from the factories. Only the font locator is shared between calls.
    """

    def __init__(
        self,
        locator: FontLocator | None = None,
        *,
        shaping_engine_factory: Callable[[], ShapingEngine] = HarfBuzzShapingEngine,
        raster_engine_factory: Callable[[], RasterEngine] = FreeTypeRasterEngine,
        font_face_factory: Callable[..., FontFace] = FontFace,
    ):
        self.locator = locator or FontconfigLocator()
        self.shaping_engine_factory = shaping_engine_factory
        self.raster_engine_factory = raster_engine_factory
        self.font_face_factory = font_face_factory

    def render(
        self,
        text: str,
        font_specifier: str,
        point_size: float = DEFAULT_POINT_SIZE,
        options: RenderOptions | None = None,
        background: Color = DEFAULT_BACKGROUND,
        pen: Color = DEFAULT_PEN,
    ) -> np.ndarray:
        """
        Render text with the given rendering profile.

        Args:
            text: String to render
            font_specifier: Font family, fontconfig pattern or font file path
            point_size: Font size in typographic points
            options: Anti-aliasing, hinting and sub-pixel settings
            background: Canvas color
            pen: Text color

        Returns:
            ``(height, width, 3)`` uint8 RGB array sized to the text

        Raises:
            FontNotFoundError: If the font cannot be resolved
            FontLoadError: If the font file cannot be opened
            ShapingError: If the text cannot be shaped
        """
        options = options or RenderOptions()
        background_rgb = parse_color(background)
        pen_rgb = parse_color(pen)

        path = self.locator.resolve(font_specifier)
        font_face = self.font_face_factory(path, point_size, dpi=options.dpi, hinted=options.is_hinted)

        run = shape_and_rasterize(
            self.shaping_engine_factory(),
            self.raster_engine_factory(),
            font_face,
            text,
            options,
        )
        return self.compose(run, background_rgb, pen_rgb)

    @staticmethod
    def compose(
        run: GlyphRun,
        background: tuple[int, int, int],
        pen: tuple[int, int, int],
    ) -> np.ndarray:
        """Allocate a canvas sized to ``run`` and paint its glyphs in shaping order."""
        width = max(0, math.ceil(run.bounding_box.width))
        height = max(0, math.ceil(run.bounding_box.height))

        canvas = np.empty((height, width, 3), dtype=np.uint8)
        canvas[...] = background

        x = 0.0
        for glyph in run:
            # placement snaps to whole pixels, sub-pixel detail lives in the coverage
            top = round(run.baseline_offset - glyph.bearing_top + glyph.offset_y)
            left = round(x + glyph.bearing_left)
            glyph.paint(canvas, left, top, pen)
            x += glyph.advance_x

        logger.debug("Composed {} glyphs on a {}x{} canvas", len(run), width, height)
        return canvas
