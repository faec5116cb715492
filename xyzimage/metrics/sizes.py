"""Size statistics for XYZ images."""

import numpy as np


def calculate_bpp(compressed_size: int, image_shape: tuple) -> float:
    """
    Calculate Bits Per Pixel (BPP).

    Args:
        compressed_size: Size of compressed data in bytes
        image_shape: Tuple of (height, width)

    Returns:
        BPP value, 0.0 for images without pixels
    """
    num_pixels = image_shape[0] * image_shape[1]
    if num_pixels == 0:
        return 0.0
    return (compressed_size * 8) / num_pixels


def calculate_compression_ratio(original_size: int, compressed_size: int) -> float:
    """
    Calculate compression ratio.

    Args:
        original_size: Size of original data in bytes
        compressed_size: Size of compressed data in bytes

    Returns:
        Compression ratio (original / compressed)
    """
    if compressed_size == 0:
        return float('inf')
    return original_size / compressed_size


def count_used_colors(pixels: np.ndarray) -> int:
    """Number of distinct palette indices referenced by the pixel data."""
    return int(np.unique(pixels).size)
