"""
Packing and unpacking of the 8-byte XYZ header.

The codec engines stream the header field by field and use
pack_dimension / unpack_dimension for width and height.
pack_header / unpack_header handle the whole header at once: they
serve header inspection without decoding (image_reader.get_image_info)
and building XYZ streams by hand.
"""

import struct
from typing import Tuple

from ..constants import MAGIC, HEADER_FORMAT, HEADER_SIZE, DIMENSION_FORMAT


def pack_dimension(value: int) -> bytes:
    """Encode a width or height as little-endian uint16."""
    return struct.pack(DIMENSION_FORMAT, value)


def unpack_dimension(data: bytes) -> int:
    """Decode a little-endian uint16 width or height."""
    return struct.unpack(DIMENSION_FORMAT, data)[0]


def pack_header(width: int, height: int) -> bytes:
    """
    Pack magic, width and height into the 8-byte header.

    Args:
        width: Image width
        height: Image height

    Returns:
        8-byte header as bytes
    """
    return struct.pack(HEADER_FORMAT, MAGIC, width, height)


def unpack_header(header_bytes: bytes) -> Tuple[int, int]:
    """
    Unpack the 8-byte header.

    Args:
        header_bytes: 8-byte header data

    Returns:
        (width, height)

    Raises:
        ValueError: If the header is invalid
    """
    if len(header_bytes) != HEADER_SIZE:
        raise ValueError(f"Header size mismatch. Expected {HEADER_SIZE}, got {len(header_bytes)}")

    magic, width, height = struct.unpack(HEADER_FORMAT, header_bytes)

    if magic != MAGIC:
        raise ValueError(f"Invalid file signature: {magic}. Expected {MAGIC}")

    return width, height
