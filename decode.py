#!/usr/bin/env python3
"""
XYZ Image Decoder CLI

Usage:
    python decode.py --input <path> --output <path> [--palette-output <path>]

Example:
    python decode.py --input image.xyz --output indices.npy --palette-output palette.npy
"""

import argparse
import logging
import sys
import os
import time

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from xyzimage import decode_file, get_error_message
from xyzimage.io import write_index_map, write_palette, get_image_info
from xyzimage.metrics import count_used_colors


def main():
    parser = argparse.ArgumentParser(
        description='XYZ Image Decoder - Extract index map and palette',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Decode to NumPy format
  python decode.py --input image.xyz --output indices.npy

  # Decode index map and palette with verbose output
  python decode.py --input image.xyz --output indices.npy \\
      --palette-output palette.npy --verbose

  # Decode to raw format
  python decode.py --input image.xyz --output indices.raw --format raw
        """
    )

    # Required arguments
    parser.add_argument('--input', '-i', required=True,
                        help='Input XYZ file path (.xyz)')
    parser.add_argument('--output', '-o', required=True,
                        help='Output index map path (.npy or .raw)')

    # Optional arguments
    parser.add_argument('--palette-output', '-p',
                        help='Output palette path (.npy or .raw)')
    parser.add_argument('--format', '-f', choices=['npy', 'raw'], default='npy',
                        help='Output format (default: npy)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose output')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging of the codec')

    args = parser.parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    # Check input file exists
    if not os.path.exists(args.input):
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.verbose:
            info = get_image_info(args.input)
            print(f"Reading XYZ file: {args.input}")
            print(f"  Dimensions: {info['width']}x{info['height']}")
            print(f"  Compressed payload: {info['payload_size']:,} bytes")

        start_time = time.time()

        with open(args.input, 'rb') as f:
            image, err = decode_file(f)

        if image is None:
            print(f"Error: Invalid XYZ file - {get_error_message(err)}",
                  file=sys.stderr)
            sys.exit(1)

        elapsed = time.time() - start_time
        indices = image.pixel_rows

        if args.verbose:
            print(f"\nDecoded image:")
            print(f"  Shape: {indices.shape}")
            print(f"  Colors used: {count_used_colors(indices)}")

        output = write_index_map(indices, args.output, format=args.format)
        if args.palette_output:
            palette_output = write_palette(image.palette, args.palette_output)
            if args.verbose:
                print(f"  Palette written to: {palette_output}")

        if args.verbose:
            print(f"  Decoding time: {elapsed:.2f}s")
            print(f"\nOutput written to: {output}")
        else:
            print(f"Decoded: {args.input} -> {output} "
                  f"({image.width}x{image.height})")

        image.release()

    except ValueError as e:
        print(f"Error: Invalid XYZ file - {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
