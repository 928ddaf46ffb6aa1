"""
Image to ASCII Art Converter - Command Line Interface
=====================================================
Argument parsing, logging setup, image loading and output writing around
the conversion pipeline.
"""

import argparse
import logging
import shutil
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from PIL import Image, UnidentifiedImageError

from asciigrid.color import resolve_color_mode
from asciigrid.config import ConversionConfig
from asciigrid.constants import (
    CharacterSet,
    ColorMode,
    OutputFormat,
    DEFAULT_RATIO,
    DEFAULT_TERMINAL_SIZE,
    DEFAULT_THREADS,
)
from asciigrid.converter import AsciiArtGenerator
from asciigrid.errors import AsciiArtError
from asciigrid.image import SourceImage

logger = logging.getLogger("asciigrid")

# sysexits.h
EX_DATAERR = 65
EX_NOINPUT = 66
EX_CANTCREAT = 73

VERBOSITY_LEVELS = {
    'error': logging.ERROR,
    'warning': logging.WARNING,
    'info': logging.INFO,
    'debug': logging.DEBUG,
}


def _setup_logging(verbosity: str = 'warning'):
    logging.basicConfig(
        level=VERBOSITY_LEVELS[verbosity],
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def fatal_error(message: str, code: int):
    """Log *message* and exit with *code*."""
    logger.error(message)
    raise SystemExit(code)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog='asciigrid',
        description='Convert images to ASCII art',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s image.png                          # Fit to the terminal width
  %(prog)s image.png -s 120                   # 120 columns
  %(prog)s image.png --outline --hysteresis   # Edge outline
  %(prog)s image.png -o output.html           # Colored HTML output
  %(prog)s image.png -c long --border         # Long ramp with a frame
        """
    )

    # Input/Output
    parser.add_argument('input', nargs='+', help='Input image file(s)')
    parser.add_argument('-o', '--output',
                        help='Output file; .html/.htm and .ansi/.ans keep colors, '
                             'anything else is plain text')

    # Characters
    parser.add_argument('-c', '--characters', default='1',
                        help='Ramp preset (0/short, 1/flat, 2/long) or custom characters, '
                             'densest first')

    # Size options
    size_group = parser.add_mutually_exclusive_group()
    size_group.add_argument('-s', '--size', type=int,
                            help='Output width in characters (clamped to 20-230)')
    size_group.add_argument('-w', '--width', action='store_true',
                            help='Fit the output to the terminal width')
    size_group.add_argument('--height', action='store_true',
                            help='Fit the output to the terminal height')
    parser.add_argument('-r', '--ratio', type=float, default=DEFAULT_RATIO,
                        help='Character aspect ratio correction (clamped to 0-2)')

    # Transforms
    parser.add_argument('--flipX', action='store_true', help='Flip the output horizontally')
    parser.add_argument('--flipY', action='store_true', help='Flip the output vertically')
    parser.add_argument('--centerX', action='store_true', help='Center the output horizontally')
    parser.add_argument('--centerY', action='store_true', help='Center the output vertically')
    parser.add_argument('-i', '--invert', action='store_true', help='Invert the density mapping')
    parser.add_argument('--border', action='store_true', help='Draw a border around the output')

    # Color options
    parser.add_argument('--background', action='store_true',
                        help='Color the background instead of the characters')
    parser.add_argument('--no-color', action='store_true', help='Do not use color')

    # Outline options
    parser.add_argument('--outline', action='store_true',
                        help='Only draw the outline of the image')
    parser.add_argument('--hysteresis', action='store_true',
                        help='Link weak edges to strong ones (requires --outline)')

    # Other options
    parser.add_argument('--thread', type=int, default=DEFAULT_THREADS,
                        help='Number of worker threads')
    parser.add_argument('--verbosity', choices=list(VERBOSITY_LEVELS), default='warning',
                        help='Logging verbosity')

    return parser


def build_config(args: argparse.Namespace,
                 terminal_size=None,
                 environ=None) -> ConversionConfig:
    """Resolve parsed arguments and the environment into a ConversionConfig."""
    if terminal_size is None:
        terminal_size = tuple(shutil.get_terminal_size(DEFAULT_TERMINAL_SIZE))

    characters = CharacterSet.get_preset(args.characters)
    logger.debug("Characters used: '%s'", characters)

    color_mode = resolve_color_mode(args.no_color, environ)
    if args.outline and color_mode != ColorMode.NONE:
        logger.warning("Using outline, result will only be in grayscale")

    output_format = OutputFormat.from_path(args.output)
    if output_format == OutputFormat.HTML and color_mode != ColorMode.NONE:
        # Terminal capability does not limit an HTML file
        color_mode = ColorMode.TRUECOLOR
    if args.output and output_format == OutputFormat.ANSI and color_mode == ColorMode.NONE:
        logger.warning("Color is disabled, which conflicts with the target file type. "
                       "Falling back to plain text without colors.")
        output_format = OutputFormat.PLAIN
    logger.debug("Target: %s", output_format.name)

    hysteresis = args.hysteresis
    if hysteresis and not args.outline:
        logger.info("Ignoring --hysteresis, it only applies to --outline")
        hysteresis = False

    return ConversionConfig(
        characters=characters,
        size=args.size,
        fit_width=args.width,
        fit_height=args.height,
        terminal_size=terminal_size,
        ratio=args.ratio,
        color_mode=color_mode,
        output_format=output_format,
        background=args.background,
        invert=args.invert,
        flip_x=args.flipX,
        flip_y=args.flipY,
        border=args.border,
        center_x=args.centerX,
        center_y=args.centerY,
        outline=args.outline,
        hysteresis=hysteresis,
        threads=args.thread,
    )


def load_image(path: str) -> SourceImage:
    """Decode an image file into a SourceImage."""
    file_path = Path(path)
    if not file_path.exists():
        fatal_error(f"File {path} does not exist", EX_NOINPUT)
    if not file_path.is_file():
        fatal_error(f"{path} is not a file", EX_NOINPUT)

    try:
        with Image.open(file_path) as image:
            logger.debug("Loaded %s: size %s, mode %s", path, image.size, image.mode)
            return SourceImage.from_pil(image)
    except (UnidentifiedImageError, OSError) as e:
        fatal_error(f"Failed to open image {path}: {e}", EX_DATAERR)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for command line usage."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbosity)

    try:
        config = build_config(args)
        generator = AsciiArtGenerator(config)
        outputs: List[str] = [generator.generate(load_image(path)).text for path in args.input]
    except AsciiArtError as e:
        fatal_error(str(e), EX_DATAERR)

    output = '\n'.join(outputs)
    if output.endswith('\n'):
        output = output[:-1]

    if args.output:
        logger.info("Writing output to %s", args.output)
        try:
            Path(args.output).write_text(output, encoding='utf-8')
        except OSError as e:
            fatal_error(f"Could not create output file: {e}", EX_CANTCREAT)
    else:
        sys.stdout.write(output + '\n')

    return 0


if __name__ == '__main__':
    raise SystemExit(main())
