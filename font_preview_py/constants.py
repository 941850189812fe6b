# this_file: font_preview_py/constants.py
"""
Rendering constants shared across the preview pipeline.
"""

# FreeType divides a pixel into 64 parts (26.6 fixed point)
PIXEL_FRACTION_FACTOR = 64

# FreeType uses typographic points defined as 1/72 inch
TYPOGRAPHIC_POINTS_PER_INCH = 72.0

# Resolution used when the options do not carry one
DEFAULT_DPI = 96

# Default font size (points)
DEFAULT_POINT_SIZE = 10.0

# Default colors (RGB)
DEFAULT_BACKGROUND = (255, 255, 255)
DEFAULT_PEN = (0, 0, 0)

# Menu mockup geometry (pixels)
MENU_ICON_SIZE = 16
MENU_PADDING = 4

# Bytes per logical pixel for the sub-pixel encodings
SUBPIXEL_SAMPLES = 3
