"""
SDF Forge CLI - Generate a signed distance field texture from an image

Usage:
    sdf-forge <input_image> [spread] [options]

Examples:
    sdf-forge glyph.png                  # spread 16, writes sdf.png
    sdf-forge glyph.png 8                # smaller search radius
    sdf-forge glyph.png 8 -o a_sdf.png   # custom output path
    sdf-forge glyph.png --workers 4      # search rows on 4 threads
"""

import argparse
import logging
import re
import sys

from .core import (
    ImageParser, SdfExporter, extract_bitmap, generate_sdf,
    load_config, validate_spread,
)
from .errors import SdfError, MissingInputPath, InvalidSpreadArgument

logger = logging.getLogger(__name__)

_U8_PATTERN = re.compile(r'\+?[0-9]+')


def parse_spread(text: str) -> int:
    """Parse a spread argument as an unsigned 8-bit integer"""
    if not _U8_PATTERN.fullmatch(text):
        raise InvalidSpreadArgument(text)
    value = int(text)
    if value > 255:
        raise InvalidSpreadArgument(text)
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='sdf-forge',
        description="Generate a signed distance field from a thresholded image",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Pixels with luma above the threshold (default 250) are inside the shape.
Output is an 8-bit grayscale PNG: 127.5 is the edge, brighter is inside.

Settings can also come from ~/.sdf-forge/config.yaml (spread, threshold,
output, workers). Command line values win.
        """
    )

    parser.add_argument(
        'input',
        type=str,
        nargs='?',
        default=None,
        help='Input image (PNG, JPEG, GIF, BMP, ...)'
    )

    parser.add_argument(
        'spread',
        type=str,
        nargs='?',
        default=None,
        help='Search radius in pixels, 0-255 (default: 16)'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Output path (default: sdf.png)'
    )

    parser.add_argument(
        '-t', '--threshold',
        type=int,
        default=None,
        help='Luma cutoff 0-255, brighter pixels are inside (default: 250)'
    )

    parser.add_argument(
        '-w', '--workers',
        type=int,
        default=None,
        help='Threads used for the distance search (default: 1)'
    )

    parser.add_argument(
        '-c', '--config',
        type=str,
        default=None,
        metavar='PATH',
        help='YAML settings file'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show debug logging and tracebacks'
    )

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        if not args.input:
            raise MissingInputPath()

        config = load_config(args.config)
        config = config.merged(
            spread=parse_spread(args.spread) if args.spread is not None else None,
            threshold=args.threshold,
            output=args.output,
            workers=args.workers,
        )
        spread = validate_spread(config.spread)

        image = ImageParser.parse(args.input)
        print(f"Loaded {args.input} ({image.width}x{image.height})")

        bitmap = extract_bitmap(image, threshold=config.threshold)
        logger.info("%d of %d pixels inside", bitmap.count_on(), len(bitmap))

        sdf = generate_sdf(bitmap, spread=spread, workers=config.workers)
        output = SdfExporter.to_png(sdf, config.output)

        print(f"Output: {output}")
        print("SDF created")

    except (SdfError, ValueError) as e:
        print(f"Error: {e}")
        if isinstance(e, MissingInputPath):
            print("Usage: sdf-forge <input_image> [spread]")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
