# this_file: font_preview_py/engines.py
"""
Collaborator adapters: fontconfig lookup, HarfBuzz shaping, FreeType rasterisation.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

from loguru import logger

from .base import (
    FontLoadError,
    FontLocator,
    FontNotFoundError,
    RasterEngine,
    RasterResult,
    ShapedGlyph,
    ShapingEngine,
    ShapingError,
)
from .constants import DEFAULT_DPI, PIXEL_FRACTION_FACTOR, TYPOGRAPHIC_POINTS_PER_INCH

try:
    import freetype
except ImportError as exc:  # pragma: no cover - dependency error handled via is_available
    FREETYPE_IMPORT_ERROR: ImportError | None = exc
else:
    FREETYPE_IMPORT_ERROR = None

try:
    import uharfbuzz as hb
except ImportError as exc:  # pragma: no cover - dependency error handled via is_available
    HB_IMPORT_ERROR: ImportError | None = exc
else:
    HB_IMPORT_ERROR = None


def convert_point_size(point_size: float) -> int:
    """Point size in FreeType's 26.6 representation."""
    return int(point_size * PIXEL_FRACTION_FACTOR)


class FontFace:
    """
    A font file opened at a given size and resolution.

    The FreeType face is opened lazily by :meth:`load`, which raises
    :class:`FontLoadError` when the file is unreadable or not a font.
    """

    def __init__(
        self,
        path: Path | str,
        point_size: float,
        *,
        dpi: tuple[int, int] = (DEFAULT_DPI, DEFAULT_DPI),
        hinted: bool = True,
        face_index: int = 0,
    ):
        self.path = Path(path)
        self.point_size = float(point_size)
        self.dpi = dpi
        self.hinted = hinted
        self.face_index = face_index
        self._ft_face = None
        self._font_data: bytes | None = None

    def __repr__(self) -> str:
        return f"FontFace({self.path.name!r}, {self.point_size}pt, dpi={self.dpi})"

    @property
    def is_loaded(self) -> bool:
        return self._ft_face is not None

    def load(self) -> None:
        if self._ft_face is not None:
            return
        if FREETYPE_IMPORT_ERROR:
            raise FontLoadError(
                f"FreeType unavailable: {FREETYPE_IMPORT_ERROR}"
            ) from FREETYPE_IMPORT_ERROR

        try:
            with open(self.path, "rb") as f:
                font_data = f.read()
            ft_face = freetype.Face(str(self.path), index=self.face_index)
            h_dpi, v_dpi = self.dpi
            ft_face.set_char_size(0, convert_point_size(self.point_size), h_dpi, v_dpi)
        except (OSError, freetype.FT_Exception) as exc:
            raise FontLoadError(f"Failed to load font from {self.path}: {exc}") from exc

        self._font_data = font_data
        self._ft_face = ft_face
        logger.debug("Loaded {} ({} glyphs)", self, ft_face.num_glyphs)

    @property
    def ft_face(self):
        self.load()
        return self._ft_face

    @property
    def font_data(self) -> bytes:
        self.load()
        return self._font_data

    @property
    def scale(self) -> tuple[int, int]:
        """Pixels per em in 26.6 fixed point, horizontally and vertically."""
        h_dpi, v_dpi = self.dpi
        size = convert_point_size(self.point_size)
        return (
            round(size * h_dpi / TYPOGRAPHIC_POINTS_PER_INCH),
            round(size * v_dpi / TYPOGRAPHIC_POINTS_PER_INCH),
        )

    @property
    def ppem(self) -> tuple[int, int]:
        metrics = self.ft_face.size
        return metrics.x_ppem, metrics.y_ppem


class FontconfigLocator(FontLocator):
    """
    Resolve font names with fontconfig's ``fc-match``.

    A specifier naming an existing file is returned as is.
    """

    command = "fc-match"

    def __init__(self, timeout: float = 5.0):
        self.timeout = timeout

    @classmethod
    def is_available(cls) -> bool:
        return shutil.which(cls.command) is not None

    def resolve(self, font_specifier: str) -> Path:
        candidate = Path(font_specifier).expanduser()
        if font_specifier and candidate.is_file():
            return candidate

        if not self.is_available():
            raise FontNotFoundError(
                f"Cannot resolve {font_specifier!r}: {self.command} is not installed"
            )

        try:
            result = subprocess.run(
                [self.command, "--format=%{file}", font_specifier],
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=True,
            )
        except (subprocess.SubprocessError, OSError) as exc:
            raise FontNotFoundError(f"Font lookup failed for {font_specifier!r}: {exc}") from exc

        path = result.stdout.strip()
        if not path or not Path(path).is_file():
            raise FontNotFoundError(f"No font file matches {font_specifier!r}")

        logger.debug("Resolved {!r} to {}", font_specifier, path)
        return Path(path)


class HarfBuzzShapingEngine(ShapingEngine):
    """Shapes text with HarfBuzz, producing 26.6 pixel positions."""

    engine = "harfbuzz"

    def __init__(self):
        if HB_IMPORT_ERROR:
            raise ShapingError(f"harfbuzz shaping unavailable: {HB_IMPORT_ERROR}") from HB_IMPORT_ERROR

    @classmethod
    def is_available(cls) -> bool:
        """Check if HarfBuzz shaping is available (requires uharfbuzz)."""
        return HB_IMPORT_ERROR is None

    def _create_font(self, font_face: FontFace):
        blob = hb.Blob(font_face.font_data)
        hb_face = hb.Face(blob, font_face.face_index)
        hb_font = hb.Font(hb_face)
        hb.ot_font_set_funcs(hb_font)

        # positions come back in 26.6 pixels
        hb_font.scale = font_face.scale
        hb_font.ppem = font_face.ppem if font_face.hinted else (0, 0)
        return hb_font

    def shape(self, text: str, font_face: FontFace) -> list[ShapedGlyph]:
        """
        Shape text using HarfBuzz.

        Args:
            text: Text string to shape
            font_face: Loaded font face

        Returns:
            Glyph ids with offsets and advances in 26.6 fixed point
        """
        hb_font = self._create_font(font_face)

        buf = hb.Buffer()
        buf.add_str(text)
        buf.guess_segment_properties()

        try:
            hb.shape(hb_font, buf)
        except Exception as exc:
            raise ShapingError(f"Failed to shape {text!r}: {exc}") from exc

        infos = buf.glyph_infos
        positions = buf.glyph_positions

        # HarfBuzz returns None for positions when text is empty
        if not text or positions is None:
            return []

        return [
            ShapedGlyph(
                glyph_id=info.codepoint,
                x_offset=pos.x_offset,
                y_offset=pos.y_offset,
                x_advance=pos.x_advance,
                y_advance=pos.y_advance,
            )
            for info, pos in zip(infos, positions)
        ]


class FreeTypeRasterEngine(RasterEngine):
    """Renders glyphs with FreeType and copies the bitmap out of the glyph slot."""

    engine = "freetype"

    def __init__(self):
        if FREETYPE_IMPORT_ERROR:
            raise FontLoadError(f"FreeType unavailable: {FREETYPE_IMPORT_ERROR}") from FREETYPE_IMPORT_ERROR

    @classmethod
    def is_available(cls) -> bool:
        """Check if FreeType rasterisation is available (requires freetype-py)."""
        return FREETYPE_IMPORT_ERROR is None

    def load_and_render(
        self,
        font_face: FontFace,
        glyph_id: int,
        load_flags: int,
        render_mode: int,
    ) -> RasterResult:
        ft_face = font_face.ft_face
        try:
            ft_face.load_glyph(glyph_id, int(load_flags))
            slot = ft_face.glyph
            slot.render(int(render_mode))
        except freetype.FT_Exception as exc:
            raise FontLoadError(f"Failed to render glyph {glyph_id}: {exc}") from exc

        bitmap = slot.bitmap
        return RasterResult(
            encoding=bitmap.pixel_mode,
            buffer=bytes(bitmap.buffer),
            stride=bitmap.pitch,
            raw_width=bitmap.width,
            raw_height=bitmap.rows,
            bearing_left=slot.bitmap_left,
            bearing_top=slot.bitmap_top,
        )
