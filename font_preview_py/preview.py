# this_file: font_preview_py/preview.py
"""
Preview identifiers and the application menu mockup shown in settings dialogs.

A preview is requested by an identifier of the form
``family/point_size/antialiasing/hint_style/subpixel_order`` where the last
three fragments are the integer values of the option enums, e.g.
``Noto Sans/10/2/4/2`` for anti-aliased, fully hinted RGB rendering.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .compositor import Color, TextCompositor, parse_color
from .constants import (
    DEFAULT_BACKGROUND,
    DEFAULT_DPI,
    DEFAULT_PEN,
    DEFAULT_POINT_SIZE,
    MENU_ICON_SIZE,
    MENU_PADDING,
)
from .options import AntiAliasing, Hinting, HintStyle, RenderOptions, SubpixelOrder


class PreviewParameterError(ValueError):
    """Raised for preview identifiers that cannot be parsed."""


@dataclass(frozen=True)
class PreviewParameters:
    font_family: str = ""
    point_size: float = DEFAULT_POINT_SIZE
    options: RenderOptions = field(
        default_factory=lambda: RenderOptions(
            AntiAliasing.DISABLED, Hinting.DISABLED, HintStyle.NONE, SubpixelOrder.NONE
        )
    )

    @classmethod
    def from_string(
        cls, preview_id: str, dpi_h: int = DEFAULT_DPI, dpi_v: int = DEFAULT_DPI
    ) -> PreviewParameters:
        """
        Parse a preview identifier.

        Identifiers with more than five fragments fall back to the defaults
        (no family, 10pt, aliased, unhinted).

        Raises:
            PreviewParameterError: If fragments are missing or not valid numbers
        """
        fragments = preview_id.split("/")
        font_family = ""
        point_size = DEFAULT_POINT_SIZE
        antialiasing = AntiAliasing.DISABLED
        hinting = Hinting.ENABLED
        hint_style = HintStyle.NONE
        subpixel_order = SubpixelOrder.NONE

        if len(fragments) < 5:
            raise PreviewParameterError(
                f"Preview id {preview_id!r} needs 5 fragments, got {len(fragments)}"
            )
        if len(fragments) == 5:
            font_family = fragments[0]
            try:
                point_size = float(fragments[1])
                antialiasing = AntiAliasing(int(fragments[2]))
                hint_style = HintStyle(int(fragments[3]))
                subpixel_order = SubpixelOrder(int(fragments[4]))
            except ValueError as exc:
                raise PreviewParameterError(f"Invalid preview id {preview_id!r}: {exc}") from exc

        if hint_style == HintStyle.NONE:
            hinting = Hinting.DISABLED

        options = RenderOptions(antialiasing, hinting, hint_style, subpixel_order, (dpi_h, dpi_v))
        return cls(font_family, point_size, options)

    def to_string(self) -> str:
        return "/".join(
            [
                self.font_family,
                f"{self.point_size:g}",
                str(int(self.options.antialiasing)),
                str(int(self.options.hint_style)),
                str(int(self.options.subpixel_order)),
            ]
        )

    def to_formatted_string(self) -> str:
        typeface = f"{self.font_family} {self.point_size:g}"
        return (
            f"Typeface:\t{typeface}\n"
            f"Anti-Aliasing:\t{self.options.aa_state()}\n"
            f"Hinting Style:\t{self.options.hint_style_name()}\n"
            f"Sub-Pixel Order:\t{self.options.subpixel_name()}"
        )


@dataclass(frozen=True)
class EntryMockup:
    label: str
    icon_name: str


@dataclass
class MenuMockup:
    entries: list[EntryMockup] = field(default_factory=list)

    def add(self, entry: EntryMockup) -> None:
        self.entries.append(entry)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    @classmethod
    def basic_example(cls) -> MenuMockup:
        menu = cls()
        menu.add(EntryMockup("Office", "applications-office"))
        menu.add(EntryMockup("Internet", "applications-internet"))
        menu.add(EntryMockup("Multimedia", "applications-multimedia"))
        menu.add(EntryMockup("Graphics", "applications-graphics"))
        menu.add(EntryMockup("Accessories", "applications-accessories"))
        menu.add(EntryMockup("Development", "applications-development"))
        menu.add(EntryMockup("Settings", "preferences-system"))
        menu.add(EntryMockup("System", "applications-system"))
        menu.add(EntryMockup("Utilities", "applications-utilities"))
        return menu


class MenuPreviewRenderer:
    """
    Renders a mockup application menu with the requested font settings.

    Each entry is a row with an icon slot on the left and the label on the
    right. Icons come from the desktop theme and are not drawn here; their slot
    is kept so the layout matches the real menu.
    """

    def __init__(
        self,
        background: Color = DEFAULT_BACKGROUND,
        icon_size: int = MENU_ICON_SIZE,
        padding: int = MENU_PADDING,
        compositor: TextCompositor | None = None,
    ):
        self.background = parse_color(background)
        self.icon_size = icon_size
        self.padding = padding
        self.compositor = compositor or TextCompositor()

    def get_image(
        self, parameters: PreviewParameters, menu: MenuMockup | None = None
    ) -> np.ndarray:
        menu = menu or MenuMockup.basic_example()
        padding = self.padding
        icon_size = self.icon_size

        labels = []
        width, height = 0, 2 * padding
        for entry in menu:
            image = self.compositor.render(
                entry.label,
                parameters.font_family,
                parameters.point_size,
                parameters.options,
                self.background,
                DEFAULT_PEN,
            )
            label_h, label_w = image.shape[:2]
            height += max(label_h, icon_size) + 2 * padding
            width = max(width, label_w)
            labels.append(image)
        width += icon_size + 4 * padding

        result = np.empty((height, width, 3), dtype=np.uint8)
        result[...] = self.background

        y = padding
        label_x = icon_size + 3 * padding
        for image in labels:
            label_h, label_w = image.shape[:2]
            # truncates toward zero, not floor
            height_offset = int((icon_size - label_h) / 2)
            icon_is_smaller = height_offset < 0
            top = y if icon_is_smaller else y + height_offset
            result[top : top + label_h, label_x : label_x + label_w] = image
            y += max(label_h, icon_size) + 2 * padding

        return result
