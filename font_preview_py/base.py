# this_file: font_preview_py/base.py
"""
Base abstractions for the collaborators of the preview pipeline.

The pipeline only talks to fonts, shapers and rasterizers through the
interfaces below. Concrete adapters live in :mod:`font_preview_py.engines`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .engines import FontFace


class PreviewError(RuntimeError):
    """Base class for errors raised while rendering a preview."""


class FontNotFoundError(PreviewError):
    """Raised when a font specifier cannot be resolved to a file."""


class FontLoadError(PreviewError):
    """Raised when a font file cannot be opened or sized by the rasterizer."""


class ShapingError(PreviewError):
    """Raised when the shaping engine fails on the given text."""


class UnsupportedPixelEncodingError(PreviewError):
    """Raised when a glyph bitmap arrives in an encoding we cannot paint."""

    def __init__(self, encoding: int):
        super().__init__(f"Unsupported pixel encoding: {encoding}")
        self.encoding = encoding


@dataclass(frozen=True)
class ShapedGlyph:
    """One entry of a shaping result. Offsets and advances are 26.6 fixed point."""

    glyph_id: int
    x_offset: int
    y_offset: int
    x_advance: int
    y_advance: int


@dataclass(frozen=True)
class RasterResult:
    """
    Owned copy of a rasterized glyph slot.

    ``raw_width`` and ``raw_height`` are in bitmap samples, i.e. three times the
    logical size along the sub-pixel axis for LCD encodings.
    """

    encoding: int
    buffer: bytes
    stride: int
    raw_width: int
    raw_height: int
    bearing_left: int
    bearing_top: int


class FontLocator(ABC):
    """Resolves a font specifier (family name, pattern or path) to a font file."""

    @classmethod
    def is_available(cls) -> bool:
        """
        Return True if the locator can be used on the current system.
        """
        return True

    @abstractmethod
    def resolve(self, font_specifier: str) -> Path:
        """
        Return the path of the best matching font file.

        Raises:
            FontNotFoundError: If nothing matches.
        """


class ShapingEngine(ABC):
    """Turns a string into an ordered sequence of positioned glyph ids."""

    engine: str = "base"

    @classmethod
    def is_available(cls) -> bool:
        return True

    @abstractmethod
    def shape(self, text: str, font_face: FontFace) -> list[ShapedGlyph]:
        """
        Shape ``text`` in one pass. Script and direction are guessed by the engine.

        Raises:
            ShapingError: If the engine rejects the text.
        """


class RasterEngine(ABC):
    """Loads and renders single glyphs into owned bitmaps."""

    engine: str = "base"

    @classmethod
    def is_available(cls) -> bool:
        return True

    @abstractmethod
    def load_and_render(
        self,
        font_face: FontFace,
        glyph_id: int,
        load_flags: int,
        render_mode: int,
    ) -> RasterResult:
        """
        Rasterize one glyph with the given FreeType load flags and render mode.
        """
