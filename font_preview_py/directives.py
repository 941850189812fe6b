# this_file: font_preview_py/directives.py
"""
Translation of rendering options into FreeType load flags and render modes.

The numeric values mirror FreeType's ``FT_LOAD_*`` and ``FT_RENDER_MODE_*``
constants so a directive can be handed to the rasterizer unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag

from .options import AntiAliasing, Hinting, HintStyle, RenderOptions, SubpixelOrder


def _load_target(mode: int) -> int:
    # FT_LOAD_TARGET_(x) == (x & 15) << 16
    return (mode & 15) << 16


class RenderMode(IntEnum):
    GRAY = 0  # FT_RENDER_MODE_NORMAL
    MONO = 2
    LCD_H = 3
    LCD_V = 4


class LoadFlag(IntFlag):
    DEFAULT = 0x0
    NO_HINTING = 0x2
    NO_BITMAP = 0x8
    MONOCHROME = 0x1000
    TARGET_NORMAL = _load_target(0)
    TARGET_LIGHT = _load_target(1)
    TARGET_MONO = _load_target(RenderMode.MONO)
    TARGET_LCD = _load_target(RenderMode.LCD_H)
    TARGET_LCD_V = _load_target(RenderMode.LCD_V)


@dataclass(frozen=True)
class RasterDirective:
    load_flags: LoadFlag
    render_mode: RenderMode


_HORIZONTAL_ORDERS = (SubpixelOrder.RGB, SubpixelOrder.BGR)
_VERTICAL_ORDERS = (SubpixelOrder.VRGB, SubpixelOrder.VBGR)


def translate_options(options: RenderOptions) -> RasterDirective:
    """
    Derive the rasterizer directive for a rendering profile.

    Args:
        options: Rendering quality configuration

    Returns:
        Load flags and render mode for every glyph of one render call
    """
    load_flags = LoadFlag.DEFAULT
    render_mode = RenderMode.GRAY

    if options.antialiasing == AntiAliasing.DISABLED:
        render_mode = RenderMode.MONO
        load_flags |= LoadFlag.MONOCHROME
        if options.hinting == Hinting.DISABLED or options.hint_style == HintStyle.NONE:
            load_flags |= LoadFlag.NO_HINTING
        else:
            load_flags |= LoadFlag.TARGET_MONO
        return RasterDirective(load_flags, render_mode)

    # embedded bitmap strikes are not used together with anti-aliasing
    load_flags |= LoadFlag.NO_BITMAP

    if options.hint_style in (HintStyle.NOT_SET, HintStyle.NONE):
        load_flags |= LoadFlag.NO_HINTING
    elif options.hint_style in (HintStyle.SLIGHT, HintStyle.MEDIUM):
        load_flags |= LoadFlag.TARGET_LIGHT
    elif options.subpixel_order in _HORIZONTAL_ORDERS:
        load_flags |= LoadFlag.TARGET_LCD
    elif options.subpixel_order in _VERTICAL_ORDERS:
        load_flags |= LoadFlag.TARGET_LCD_V
    else:
        load_flags |= LoadFlag.TARGET_NORMAL

    if options.subpixel_order in _HORIZONTAL_ORDERS:
        render_mode = RenderMode.LCD_H
    elif options.subpixel_order in _VERTICAL_ORDERS:
        render_mode = RenderMode.LCD_V

    return RasterDirective(load_flags, render_mode)


def is_reversed_subpixel(options: RenderOptions) -> bool:
    """True for BGR ordered panels, where red and blue samples swap places."""
    return options.subpixel_order in (SubpixelOrder.BGR, SubpixelOrder.VBGR)
