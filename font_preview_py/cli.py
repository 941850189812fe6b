# this_file: font_preview_py/cli.py
"""
font-preview command line interface - preview font settings from your terminal
"""

import sys
from typing import Optional

import click
from loguru import logger

from . import __version__, list_available
from .base import PreviewError
from .compositor import TextCompositor, parse_color
from .directives import translate_options
from .export import save_image, to_image
from .options import AntiAliasing, Hinting, HintStyle, RenderOptions, SubpixelOrder
from .preview import MenuPreviewRenderer, PreviewParameters

HINT_STYLES = {
    "none": HintStyle.NONE,
    "slight": HintStyle.SLIGHT,
    "medium": HintStyle.MEDIUM,
    "full": HintStyle.FULL,
}

SUBPIXEL_ORDERS = {
    "none": SubpixelOrder.NONE,
    "rgb": SubpixelOrder.RGB,
    "bgr": SubpixelOrder.BGR,
    "vrgb": SubpixelOrder.VRGB,
    "vbgr": SubpixelOrder.VBGR,
}


def configure_logging(quiet: bool, verbose: bool) -> None:
    """Route loguru output to stderr at the requested level"""
    logger.remove()
    if quiet:
        level = "ERROR"
    elif verbose:
        level = "DEBUG"
    else:
        level = "WARNING"
    logger.add(sys.stderr, level=level)


def build_options(
    antialias: bool,
    hinting: bool,
    hint_style: str,
    subpixel: str,
    dpi: int,
) -> RenderOptions:
    """Assemble a rendering profile from command line flags"""
    return RenderOptions(
        antialiasing=AntiAliasing.ENABLED if antialias else AntiAliasing.DISABLED,
        hinting=Hinting.ENABLED if hinting else Hinting.DISABLED,
        hint_style=HINT_STYLES[hint_style],
        subpixel_order=SUBPIXEL_ORDERS[subpixel],
        dpi=dpi,
    )


def write_output(canvas, output_file: Optional[str], quiet: bool) -> None:
    """Write a canvas to a file, or PNG to stdout"""
    if output_file:
        path = save_image(canvas, output_file)
        if not quiet:
            click.echo(f"✓ Successfully rendered to {path}", err=True)
            click.echo(f"  Size: {canvas.shape[1]}x{canvas.shape[0]} pixels", err=True)
    else:
        to_image(canvas).save(sys.stdout.buffer, format="PNG")


@click.group()
@click.version_option(version=__version__, prog_name="font-preview")
def cli():
    """Preview text rendering settings from the command line"""
    pass


@cli.command(name="info")
@click.option("--hint-style", type=click.Choice(list(HINT_STYLES)), default="slight")
@click.option("--subpixel", type=click.Choice(list(SUBPIXEL_ORDERS)), default="none")
@click.option("--antialias/--no-antialias", default=True)
@click.option("--hinting/--no-hinting", default=True)
def info(hint_style: str, subpixel: str, antialias: bool, hinting: bool):
    """Show available backends and the directive for a rendering profile"""
    click.echo(f"font-preview v{__version__}")
    click.echo()

    click.echo("Backends:")
    available = list_available()
    for name in ("fontconfig", "harfbuzz", "freetype"):
        status = "available" if name in available else "missing"
        click.echo(f"  {name:12s} - {status}")
    click.echo()

    options = build_options(antialias, hinting, hint_style, subpixel, 96)
    directive = translate_options(options)
    click.echo("Rendering profile:")
    click.echo(f"  Anti-Aliasing:   {options.aa_state()}")
    click.echo(f"  Hinting:         {options.unified_hinting_state()}")
    click.echo(f"  Sub-Pixel Order: {options.subpixel_name()}")
    click.echo(f"  Load flags:      {int(directive.load_flags):#x}")
    click.echo(f"  Render mode:     {directive.render_mode.name}")


@cli.command(name="render")
@click.argument("text", required=False)
@click.option("-t", "--text-arg", "text_opt", help="Input text (alternative to positional argument)")
@click.option("-T", "--text-file", type=click.Path(exists=True), help="Read input text from file")
@click.option("-f", "--font", default="sans-serif", show_default=True, help="Font family, fontconfig pattern or font file")
@click.option("-s", "--point-size", type=float, default=10.0, show_default=True, help="Font size in points")
@click.option("--antialias/--no-antialias", default=True, help="Anti-aliased (gray or sub-pixel) or monochrome rendering")
@click.option("--hinting/--no-hinting", default=True, help="Enable glyph hinting")
@click.option("--hint-style", type=click.Choice(list(HINT_STYLES)), default="slight", show_default=True)
@click.option("--subpixel", type=click.Choice(list(SUBPIXEL_ORDERS)), default="none", show_default=True)
@click.option("--dpi", type=int, default=96, show_default=True, help="Target resolution")
@click.option("-c", "--foreground", default="000000", help="Text color (RRGGBB)")
@click.option("-b", "--background", default="FFFFFF", help="Background color (RRGGBB)")
@click.option("-o", "--output-file", type=click.Path(), help="Output file path (PNG to stdout if omitted)")
@click.option("-q", "--quiet", is_flag=True, help="Silent mode (no progress info)")
@click.option("--verbose", is_flag=True, help="Verbose output")
def render(
    text: Optional[str],
    text_opt: Optional[str],
    text_file: Optional[str],
    font: str,
    point_size: float,
    antialias: bool,
    hinting: bool,
    hint_style: str,
    subpixel: str,
    dpi: int,
    foreground: str,
    background: str,
    output_file: Optional[str],
    quiet: bool,
    verbose: bool,
):
    """Render text with a rendering profile to an image file"""
    configure_logging(quiet, verbose)

    try:
        input_text = get_input_text(text, text_opt, text_file)
        options = build_options(antialias, hinting, hint_style, subpixel, dpi)

        if verbose:
            click.echo(f"Profile: aa={options.aa_state()} hinting={options.unified_hinting_state()} "
                       f"subpixel={options.subpixel_name()} dpi={dpi}", err=True)

        canvas = TextCompositor().render(
            input_text,
            font,
            point_size,
            options,
            parse_color(background),
            parse_color(foreground),
        )
        write_output(canvas, output_file, quiet)

    except (PreviewError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command(name="menu")
@click.argument("preview_id")
@click.option("--dpi", type=int, default=96, show_default=True, help="Target resolution")
@click.option("-b", "--background", default="FFFFFF", help="Background color (RRGGBB)")
@click.option("-o", "--output-file", type=click.Path(), help="Output file path (PNG to stdout if omitted)")
@click.option("-q", "--quiet", is_flag=True, help="Silent mode (no progress info)")
@click.option("--verbose", is_flag=True, help="Verbose output")
def menu(preview_id: str, dpi: int, background: str, output_file: Optional[str], quiet: bool, verbose: bool):
    """Render the application menu mockup for a preview id (family/size/aa/hintstyle/subpixel)"""
    configure_logging(quiet, verbose)

    try:
        parameters = PreviewParameters.from_string(preview_id, dpi, dpi)
        if not quiet:
            click.echo(parameters.to_formatted_string(), err=True)

        canvas = MenuPreviewRenderer(background=parse_color(background)).get_image(parameters)
        write_output(canvas, output_file, quiet)

    except (PreviewError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def get_input_text(text: Optional[str], text_opt: Optional[str], text_file: Optional[str]) -> str:
    """Get input text from various sources"""

    # Priority: text positional > --text > --text-file > stdin
    if text:
        return text

    if text_opt:
        return text_opt

    if text_file:
        with open(text_file, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
        # a preview is a single line
        return lines[0] if lines else ""

    return sys.stdin.readline().rstrip("\n")


def main():
    """Main CLI entry point"""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nInterrupted", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
