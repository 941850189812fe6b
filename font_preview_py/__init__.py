"""
Offscreen text rendering previews for font settings.

Renders a line of text with a given anti-aliasing, hinting and sub-pixel
profile, so the result can be shown before the settings are applied to the
whole session. Shaping is done by HarfBuzz (uharfbuzz), rasterisation by
FreeType (freetype-py), font lookup by fontconfig.

## Quick Start

```python
from font_preview_py import RenderOptions, SubpixelOrder, HintStyle, render_text_preview

options = RenderOptions(hint_style=HintStyle.FULL, subpixel_order=SubpixelOrder.RGB)
canvas = render_text_preview("Hello, World!", "Noto Sans", 12, options)
```
"""

from __future__ import annotations

from pathlib import Path

import numpy as np

from .base import (
    FontLoadError,
    FontLocator,
    FontNotFoundError,
    PreviewError,
    RasterEngine,
    RasterResult,
    ShapedGlyph,
    ShapingEngine,
    ShapingError,
    UnsupportedPixelEncodingError,
)
from .compositor import TextCompositor, parse_color
from .constants import DEFAULT_BACKGROUND, DEFAULT_PEN, DEFAULT_POINT_SIZE
from .directives import LoadFlag, RasterDirective, RenderMode, is_reversed_subpixel, translate_options
from .engines import FontconfigLocator, FontFace, FreeTypeRasterEngine, HarfBuzzShapingEngine
from .export import save_image, to_image
from .glyphs import BitmapKind, GlyphBitmap, PixelEncoding, blend_coverage, decode_bitmap
from .layout import BoundingBox, GlyphRun, PositionedGlyph, shape_and_rasterize
from .options import AntiAliasing, Hinting, HintStyle, RenderOptions, SubpixelOrder
from .preview import (
    EntryMockup,
    MenuMockup,
    MenuPreviewRenderer,
    PreviewParameterError,
    PreviewParameters,
)

__version__ = "0.1.0"


def list_available() -> list[str]:
    """List the collaborator backends usable on this system."""
    available = []
    if FontconfigLocator.is_available():
        available.append("fontconfig")
    if HarfBuzzShapingEngine.is_available():
        available.append("harfbuzz")
    if FreeTypeRasterEngine.is_available():
        available.append("freetype")
    return available


def render_text_preview(
    text: str,
    font: str | Path,
    point_size: float = DEFAULT_POINT_SIZE,
    options: RenderOptions | None = None,
    background=DEFAULT_BACKGROUND,
    pen=DEFAULT_PEN,
) -> np.ndarray:
    """
    Simple API to render one line of text with the default backends.

    Args:
        text: Text to render
        font: Font family, fontconfig pattern or path to a font file
        point_size: Font size in points
        options: Rendering profile, anti-aliased with slight hinting by default
        background: Canvas color
        pen: Text color

    Returns:
        RGB numpy array of shape (height, width, 3)
    """
    return TextCompositor().render(text, str(font), point_size, options, background, pen)


__all__ = [
    "AntiAliasing",
    "BitmapKind",
    "BoundingBox",
    "EntryMockup",
    "FontFace",
    "FontLoadError",
    "FontLocator",
    "FontNotFoundError",
    "FontconfigLocator",
    "FreeTypeRasterEngine",
    "GlyphBitmap",
    "GlyphRun",
    "HarfBuzzShapingEngine",
    "HintStyle",
    "Hinting",
    "LoadFlag",
    "MenuMockup",
    "MenuPreviewRenderer",
    "PixelEncoding",
    "PositionedGlyph",
    "PreviewError",
    "PreviewParameterError",
    "PreviewParameters",
    "RasterDirective",
    "RasterEngine",
    "RasterResult",
    "RenderMode",
    "RenderOptions",
    "ShapedGlyph",
    "ShapingEngine",
    "ShapingError",
    "SubpixelOrder",
    "TextCompositor",
    "UnsupportedPixelEncodingError",
    "blend_coverage",
    "decode_bitmap",
    "is_reversed_subpixel",
    "list_available",
    "parse_color",
    "render_text_preview",
    "save_image",
    "shape_and_rasterize",
    "to_image",
    "translate_options",
    "__version__",
]
