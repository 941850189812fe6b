#!/usr/bin/env python3
# this_file: toy.py
"""A simple CLI to render a sample line with every common rendering profile.

Usage:
    python toy.py render                         # One PNG per profile
    python toy.py compare                        # All profiles stacked in one PNG
    python toy.py render --font="DejaVu Serif" --size=14
"""

from pathlib import Path

import fire
import numpy as np

from font_preview_py import (
    AntiAliasing,
    Hinting,
    HintStyle,
    PreviewError,
    RenderOptions,
    SubpixelOrder,
    TextCompositor,
    save_image,
)

SAMPLE_TEXT = "The quick brown fox jumps over the lazy dog."


def standard_profiles(dpi=96):
    """Rendering profiles offered by desktop font settings dialogs, by name."""
    profiles = {
        "mono-unhinted": RenderOptions(
            AntiAliasing.DISABLED, Hinting.DISABLED, HintStyle.NONE, SubpixelOrder.NONE, dpi
        ),
        "mono-hinted": RenderOptions(
            AntiAliasing.DISABLED, Hinting.ENABLED, HintStyle.FULL, SubpixelOrder.NONE, dpi
        ),
        "gray-none": RenderOptions(
            AntiAliasing.ENABLED, Hinting.DISABLED, HintStyle.NONE, SubpixelOrder.NONE, dpi
        ),
        "gray-slight": RenderOptions(
            AntiAliasing.ENABLED, Hinting.ENABLED, HintStyle.SLIGHT, SubpixelOrder.NONE, dpi
        ),
        "gray-full": RenderOptions(
            AntiAliasing.ENABLED, Hinting.ENABLED, HintStyle.FULL, SubpixelOrder.NONE, dpi
        ),
    }
    for order in (SubpixelOrder.RGB, SubpixelOrder.BGR, SubpixelOrder.VRGB, SubpixelOrder.VBGR):
        profiles[f"{order.name.lower()}-full"] = RenderOptions(
            AntiAliasing.ENABLED, Hinting.ENABLED, HintStyle.FULL, order, dpi
        )
    return profiles


def stack_canvases(canvases, spacing=4, background=(255, 255, 255)):
    """Stack canvases vertically, left aligned, with `spacing` pixels between them."""
    if not canvases:
        return np.zeros((0, 0, 3), dtype=np.uint8)

    width = max(c.shape[1] for c in canvases)
    height = sum(c.shape[0] for c in canvases) + spacing * (len(canvases) - 1)
    sheet = np.empty((height, width, 3), dtype=np.uint8)
    sheet[...] = background

    y = 0
    for canvas in canvases:
        h, w = canvas.shape[:2]
        sheet[y : y + h, :w] = canvas
        y += h + spacing
    return sheet


class Toy:
    """A simple CLI to render previews for every rendering profile."""

    def render(self, text=SAMPLE_TEXT, font="sans-serif", size=12.0, output="output"):
        """Render the sample text once per profile into `output`/preview-<profile>.png."""
        output_dir = Path(output)
        compositor = TextCompositor()

        print(f"Rendering {text!r} with {font} {size}pt\n")
        for name, options in standard_profiles().items():
            print(f"  {name:15s} ", end="", flush=True)
            try:
                canvas = compositor.render(text, font, size, options)
                path = save_image(canvas, output_dir / f"preview-{name}.png")
                print(f"✓ {path} ({canvas.shape[1]}x{canvas.shape[0]})")
            except PreviewError as e:
                print(f"✗ {e}")
        return 0

    def compare(self, text=SAMPLE_TEXT, font="sans-serif", size=12.0, output="compare-profiles.png"):
        """Render every profile and stack the results into one image."""
        compositor = TextCompositor()
        try:
            canvases = [
                compositor.render(text, font, size, options)
                for options in standard_profiles().values()
            ]
        except PreviewError as e:
            print(f"Error: {e}")
            return 1

        path = save_image(stack_canvases(canvases), output)
        print(f"✓ Saved {path}")
        print("  Rows: " + ", ".join(standard_profiles()))
        return 0


if __name__ == "__main__":
    fire.Fire(Toy)
