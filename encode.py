#!/usr/bin/env python3
"""
XYZ Image Encoder CLI

Usage:
    python encode.py --input <path> --output <path> [--palette <path>]

Example:
    python encode.py --input data/indices.npy --palette data/palette.npy --output image.xyz
"""

import argparse
import logging
import sys
import os
import time

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from xyzimage import PixelFormat, alloc, encode_file, get_error_message
from xyzimage.io import read_index_map, read_palette, grayscale_palette
from xyzimage.metrics import calculate_bpp, calculate_compression_ratio, count_used_colors


def main():
    parser = argparse.ArgumentParser(
        description='XYZ Image Encoder - Store an indexed image as XYZ',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Encode an index map with a grayscale palette
  python encode.py --input data/indices.npy --output image.xyz

  # Encode with an explicit palette and verbose output
  python encode.py --input data/indices.npy --palette data/palette.npy \\
      --output image.xyz --verbose

  # Encode raw file (requires dimensions)
  python encode.py --input data/indices.raw --output image.xyz \\
      --width 320 --height 240
        """
    )

    # Required arguments
    parser.add_argument('--input', '-i', required=True,
                        help='Input index map path (.npy or .raw)')
    parser.add_argument('--output', '-o', required=True,
                        help='Output XYZ file path (.xyz)')

    # Optional arguments
    parser.add_argument('--palette', '-p',
                        help='Palette path (.npy shaped 256x3 or 768 byte .raw), '
                             'grayscale if omitted')
    parser.add_argument('--width', '-W', type=int,
                        help='Image width (required for raw files)')
    parser.add_argument('--height', '-H', type=int,
                        help='Image height (required for raw files)')
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

    # Check raw file requirements
    input_ext = os.path.splitext(args.input)[1].lower()
    if input_ext == '.raw':
        if args.width is None or args.height is None:
            print("Error: --width and --height are required for raw files",
                  file=sys.stderr)
            sys.exit(1)

    try:
        if args.verbose:
            print(f"Reading input: {args.input}")

        start_time = time.time()

        indices = read_index_map(args.input, width=args.width, height=args.height)
        palette = read_palette(args.palette) if args.palette else grayscale_palette()

        if args.verbose:
            print(f"  Shape: {indices.shape}")
            print(f"  Colors used: {count_used_colors(indices)}")

        height, width = indices.shape
        image, err = alloc(width, height, PixelFormat.INDEXED8)
        if err:
            print(f"Error: {get_error_message(err)}", file=sys.stderr)
            sys.exit(1)

        image.set_palette(palette)
        image.set_pixels(indices)

        with open(args.output, 'wb') as f:
            ok, err = encode_file(image, f)

        if not ok:
            print(f"Error: {get_error_message(err)}", file=sys.stderr)
            sys.exit(1)

        elapsed = time.time() - start_time

        # Calculate metrics
        original_size = image.get_filesize()
        compressed_size = image.get_compressed_filesize()
        bpp = calculate_bpp(compressed_size, indices.shape)
        cr = calculate_compression_ratio(original_size, compressed_size)

        if args.verbose:
            print(f"\nResults:")
            print(f"  Uncompressed size: {original_size:,} bytes")
            print(f"  Compressed size:   {compressed_size:,} bytes")
            print(f"  Compression ratio: {cr:.2f}x")
            print(f"  Bits per pixel: {bpp:.3f}")
            print(f"  Encoding time: {elapsed:.2f}s")
            print(f"\nOutput written to: {args.output}")
        else:
            print(f"Encoded: {args.input} -> {args.output} "
                  f"({cr:.1f}x compression, {bpp:.3f} bpp)")

        image.release()

    except ValueError as e:
        print(f"Error: Invalid input - {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
