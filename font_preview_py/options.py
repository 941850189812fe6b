# this_file: font_preview_py/options.py
"""
Text rendering quality profile, in the vocabulary of fontconfig/Xft settings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from .constants import DEFAULT_DPI


class AntiAliasing(IntEnum):
    NOT_SET = 0
    DISABLED = 1
    ENABLED = 2


class Hinting(IntEnum):
    DISABLED = 0
    ENABLED = 1


class HintStyle(IntEnum):
    NOT_SET = 0
    NONE = 1
    SLIGHT = 2
    MEDIUM = 3
    FULL = 4


class SubpixelOrder(IntEnum):
    NOT_SET = 0
    NONE = 1
    RGB = 2
    BGR = 3
    VRGB = 4
    VBGR = 5


def _normalize_dpi(dpi: int | tuple[int, int]) -> tuple[int, int]:
    if isinstance(dpi, tuple):
        horizontal, vertical = dpi
        return int(horizontal), int(vertical)
    return int(dpi), int(dpi)


@dataclass(frozen=True)
class RenderOptions:
    """
    Immutable rendering quality configuration.

    ``dpi`` may be given as a single value or as a ``(horizontal, vertical)``
    pair; it is always stored as a pair.
    """

    antialiasing: AntiAliasing = AntiAliasing.ENABLED
    hinting: Hinting = Hinting.ENABLED
    hint_style: HintStyle = HintStyle.SLIGHT
    subpixel_order: SubpixelOrder = SubpixelOrder.NONE
    dpi: tuple[int, int] = field(default=(DEFAULT_DPI, DEFAULT_DPI))

    def __post_init__(self) -> None:
        object.__setattr__(self, "antialiasing", AntiAliasing(self.antialiasing))
        object.__setattr__(self, "hinting", Hinting(self.hinting))
        object.__setattr__(self, "hint_style", HintStyle(self.hint_style))
        object.__setattr__(self, "subpixel_order", SubpixelOrder(self.subpixel_order))
        object.__setattr__(self, "dpi", _normalize_dpi(self.dpi))

    @property
    def is_hinted(self) -> bool:
        return self.hint_style != HintStyle.NONE

    def aa_state(self) -> str:
        if self.antialiasing == AntiAliasing.ENABLED:
            return "enabled"
        return "disabled"

    def hinting_state(self) -> str:
        if self.hinting == Hinting.ENABLED:
            return "enabled"
        return "disabled"

    def hint_style_name(self) -> str:
        if self.hint_style in (HintStyle.SLIGHT, HintStyle.MEDIUM, HintStyle.FULL):
            return self.hint_style.name.lower()
        return "none"

    def unified_hinting_state(self) -> str:
        """Hint style when hinting is on, otherwise ``"disabled"``."""
        if self.hinting == Hinting.ENABLED:
            return self.hint_style_name()
        return self.hinting_state()

    def subpixel_name(self) -> str:
        if self.subpixel_order in (
            SubpixelOrder.RGB,
            SubpixelOrder.BGR,
            SubpixelOrder.VRGB,
            SubpixelOrder.VBGR,
        ):
            return self.subpixel_order.name.lower()
        return "none"
