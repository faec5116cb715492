"""XYZ image codec: indexed-color raster images compressed with DEFLATE."""

from .constants import MAGIC, PALETTE_ENTRIES, PALETTE_SIZE, HEADER_SIZE
from .errors import XYZError, get_error_message
from .formats import PixelFormat, bytes_per_pixel
from .image import (
    XYZImage,
    alloc,
    release,
    is_valid,
    get_width,
    get_height,
    get_format,
    get_palette,
    get_buffer,
    get_filesize,
    get_compressed_filesize,
    set_compress_func,
)
from .compression import deflate_compress, deflate_decompress
from .io.channels import FileSource, FileSink, MemorySource, MemorySink
from .codec import XYZEncoder, XYZDecoder
from .api import decode, decode_file, decode_bytes, encode, encode_file, encode_bytes

__version__ = '1.0.0'

__all__ = [
    'MAGIC',
    'PALETTE_ENTRIES',
    'PALETTE_SIZE',
    'HEADER_SIZE',
    'XYZError',
    'get_error_message',
    'PixelFormat',
    'bytes_per_pixel',
    'XYZImage',
    'alloc',
    'release',
    'is_valid',
    'get_width',
    'get_height',
    'get_format',
    'get_palette',
    'get_buffer',
    'get_filesize',
    'get_compressed_filesize',
    'set_compress_func',
    'deflate_compress',
    'deflate_decompress',
    'FileSource',
    'FileSink',
    'MemorySource',
    'MemorySink',
    'XYZEncoder',
    'XYZDecoder',
    'decode',
    'decode_file',
    'decode_bytes',
    'encode',
    'encode_file',
    'encode_bytes',
]
