"""Compression capabilities for the XYZ image codec."""

from .deflate import deflate_compress, deflate_decompress

__all__ = [
    'deflate_compress',
    'deflate_decompress',
]
