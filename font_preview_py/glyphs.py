# this_file: font_preview_py/glyphs.py
"""
Decoded glyph bitmaps and the blending used to paint them.

FreeType reports a glyph image in one of several pixel encodings depending on
the load flags and render mode. Four of them are supported here:

- 1 bit per pixel monochrome, most significant bit first (no anti-aliasing)
- 8 bit gray coverage
- horizontal LCD: three coverage samples side by side per logical pixel
- vertical LCD: three coverage samples stacked per logical pixel

Sub-pixel bitmaps store one coverage value per colour channel. The panel order
(RGB or BGR) decides which sample feeds red and which one feeds blue.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum

import numpy as np
from loguru import logger

from .base import UnsupportedPixelEncodingError
from .constants import SUBPIXEL_SAMPLES


class PixelEncoding(IntEnum):
    """FreeType ``FT_PIXEL_MODE_*`` values."""

    NONE = 0
    MONO = 1
    GRAY = 2
    GRAY2 = 3
    GRAY4 = 4
    LCD = 5
    LCD_V = 6
    BGRA = 7


class BitmapKind(Enum):
    MONO = "mono"
    GRAY = "gray"
    SUBPIXEL_H = "subpixel-h"
    SUBPIXEL_V = "subpixel-v"


def blend_coverage(background: np.ndarray, coverage: np.ndarray, pen: np.ndarray) -> np.ndarray:
    """
    Blend ``pen`` over ``background`` with 8 bit coverage, per channel.

    ``result = ((255 - coverage) * background + coverage * pen) // 255``
    """
    background = background.astype(np.int32)
    coverage = coverage.astype(np.int32)
    result = ((255 - coverage) * background + coverage * pen) // 255
    return result.astype(np.uint8)


def _owned_copy(buffer: bytes | bytearray | memoryview, size: int) -> bytes:
    # exact-length copy, zero filled when the source is shorter
    data = bytes(buffer[:size])
    if len(data) < size:
        data += bytes(size - len(data))
    return data


@dataclass(frozen=True)
class GlyphBitmap:
    """
    Pixel data of one rasterized glyph.

    ``width`` and ``height`` are logical pixels. For sub-pixel bitmaps they are
    already divided by the three samples per pixel. ``row_stride`` keeps the
    sign reported by the rasterizer (negative for bottom-up bitmaps), but only
    its magnitude is used to address rows.
    """

    kind: BitmapKind
    width: int
    height: int
    row_stride: int
    buffer: bytes = field(repr=False)
    bytes_per_component: int
    reversed: bool = False

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Negative bitmap size: {self.width}x{self.height}")
        expected = self.height * self.row_length * max(1, self.bytes_per_component)
        if len(self.buffer) != expected:
            raise ValueError(
                f"Bitmap buffer holds {len(self.buffer)} bytes, expected {expected}"
            )
        if not self.is_empty and self.row_length < self._min_row_length():
            raise ValueError(
                f"Row stride {self.row_stride} too short for {self.kind.value} width {self.width}"
            )

    @classmethod
    def empty(cls) -> GlyphBitmap:
        """A zero sized bitmap that paints nothing."""
        return cls(BitmapKind.GRAY, 0, 0, 0, b"", 1)

    @property
    def row_length(self) -> int:
        return abs(self.row_stride)

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def _min_row_length(self) -> int:
        match self.kind:
            case BitmapKind.MONO:
                return (self.width + 7) // 8
            case BitmapKind.SUBPIXEL_H:
                return SUBPIXEL_SAMPLES * self.width
            case _:
                return self.width

    def samples(self) -> np.ndarray:
        """
        Coverage samples addressed by logical pixel.

        Returns:
            ``(height, width)`` bool array for mono bitmaps, ``(height, width)``
            uint8 array for gray bitmaps and ``(height, width, 3)`` uint8 array in
            red, green, blue order for sub-pixel bitmaps.
        """
        raw = np.frombuffer(self.buffer, dtype=np.uint8)
        rows = self.row_length
        h, w = self.height, self.width

        match self.kind:
            case BitmapKind.MONO:
                packed = raw.reshape(h, rows)
                return np.unpackbits(packed, axis=1)[:, :w].astype(bool)
            case BitmapKind.GRAY:
                return raw.reshape(h, rows)[:, :w]
            case BitmapKind.SUBPIXEL_H:
                # sample (row, col, sub) sits at row * stride + 3 * col + sub
                plane = raw[: h * rows].reshape(h, rows)
                values = plane[:, : SUBPIXEL_SAMPLES * w].reshape(h, w, SUBPIXEL_SAMPLES)
            case BitmapKind.SUBPIXEL_V:
                # sample (row, col, sub) sits at (3 * row + sub) * stride + col
                plane = raw.reshape(SUBPIXEL_SAMPLES * h, rows)[:, :w]
                values = plane.reshape(h, SUBPIXEL_SAMPLES, w).transpose(0, 2, 1)

        if self.reversed:
            values = values[..., ::-1]
        return values

    def paint(self, canvas: np.ndarray, x: int, y: int, pen: tuple[int, int, int]) -> None:
        """
        Paint the glyph onto ``canvas`` with its top left corner at ``(x, y)``.

        Only pixels inside the glyph box are touched, and only where the box
        overlaps the canvas. Coverage based encodings read the current canvas
        pixel as background, so overlapping glyph boxes accumulate.

        Args:
            canvas: ``(height, width, 3)`` uint8 RGB array, modified in place
            x: leftmost column of the glyph box
            y: topmost row of the glyph box
            pen: RGB text color
        """
        if self.is_empty:
            return

        canvas_h, canvas_w = canvas.shape[:2]
        x1 = max(0, x)
        y1 = max(0, y)
        x2 = min(canvas_w, x + self.width)
        y2 = min(canvas_h, y + self.height)
        if x2 <= x1 or y2 <= y1:
            return

        gx1 = x1 - x
        gy1 = y1 - y
        gx2 = gx1 + (x2 - x1)
        gy2 = gy1 + (y2 - y1)

        region = canvas[y1:y2, x1:x2]
        pen_rgb = np.asarray(pen[:3], dtype=np.int32)
        samples = self.samples()[gy1:gy2, gx1:gx2]

        match self.kind:
            case BitmapKind.MONO:
                region[samples] = pen_rgb.astype(np.uint8)
            case BitmapKind.GRAY:
                region[...] = blend_coverage(region, samples[..., np.newaxis], pen_rgb)
            case BitmapKind.SUBPIXEL_H | BitmapKind.SUBPIXEL_V:
                region[...] = blend_coverage(region, samples, pen_rgb)


def decode_bitmap(
    encoding: int,
    buffer: bytes,
    stride: int,
    raw_width: int,
    raw_height: int,
    reversed_subpixel: bool = False,
) -> GlyphBitmap:
    """
    Build the bitmap variant matching a rasterizer pixel encoding.

    Args:
        encoding: FreeType pixel mode
        buffer: Raw bitmap bytes, copied
        stride: Signed row pitch in bytes
        raw_width: Bitmap width in samples
        raw_height: Bitmap height in samples
        reversed_subpixel: BGR panel order, only used by sub-pixel encodings

    Returns:
        Decoded bitmap. Colour (BGRA) bitmaps decode to an empty bitmap.

    Raises:
        UnsupportedPixelEncodingError: For encodings without a paint rule
    """
    try:
        pixel_encoding = PixelEncoding(encoding)
    except ValueError:
        raise UnsupportedPixelEncodingError(encoding) from None

    row_length = abs(stride)

    match pixel_encoding:
        case PixelEncoding.MONO:
            kind, width, height, bpp = BitmapKind.MONO, raw_width, raw_height, 0
        case PixelEncoding.GRAY:
            kind, width, height, bpp = BitmapKind.GRAY, raw_width, raw_height, 1
        case PixelEncoding.LCD:
            kind, width, height, bpp = (
                BitmapKind.SUBPIXEL_H,
                raw_width // SUBPIXEL_SAMPLES,
                raw_height,
                SUBPIXEL_SAMPLES,
            )
        case PixelEncoding.LCD_V:
            kind, width, height, bpp = (
                BitmapKind.SUBPIXEL_V,
                raw_width,
                raw_height // SUBPIXEL_SAMPLES,
                SUBPIXEL_SAMPLES,
            )
        case PixelEncoding.BGRA:
            # TODO: composite premultiplied BGRA colour glyphs (emoji)
            logger.debug("Colour glyph bitmap rendered as empty")
            return GlyphBitmap.empty()
        case _:
            raise UnsupportedPixelEncodingError(encoding)

    size = height * row_length * max(1, bpp)
    return GlyphBitmap(
        kind,
        width,
        height,
        stride,
        _owned_copy(buffer, size),
        bpp,
        reversed_subpixel,
    )
