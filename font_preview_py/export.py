# this_file: font_preview_py/export.py
"""
Conversion of rendered canvases to Pillow images and files.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image

from .base import PreviewError


def to_image(canvas: np.ndarray) -> Image.Image:
    """Wrap an RGB canvas in a Pillow image (copying the pixels)."""
    if canvas.ndim != 3 or canvas.shape[2] != 3:
        raise ValueError(f"Expected an (height, width, 3) canvas, got shape {canvas.shape}")
    return Image.fromarray(np.ascontiguousarray(canvas, dtype=np.uint8))


def save_image(canvas: np.ndarray, output_path: Path | str) -> Path:
    """
    Save a rendered canvas to disk. The format follows the file extension.
    """
    output_path = Path(output_path)
    if canvas.shape[0] == 0 or canvas.shape[1] == 0:
        raise PreviewError(f"Nothing to save to {output_path}: canvas is empty")

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        to_image(canvas).save(output_path)
    except (OSError, ValueError) as exc:
        raise PreviewError(f"Failed to save image to {output_path}: {exc}") from exc
    return output_path
