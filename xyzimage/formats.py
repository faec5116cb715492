"""Pixel formats of the image buffer."""

from collections import namedtuple
from enum import IntEnum


class PixelFormat(IntEnum):
    """Pixel format tag of an XYZImage buffer."""

    NONE = 0
    # 1 byte per pixel referencing one of the 256 palette colors
    INDEXED8 = 1


FormatInfo = namedtuple('FormatInfo', ['bytes_per_pixel', 'indexed', 'writable'])

# Single source of truth for per-format sizing; formats missing here are
# unsupported everywhere.
FORMAT_TABLE = {
    PixelFormat.INDEXED8: FormatInfo(bytes_per_pixel=1, indexed=True, writable=True),
}


def get_format_info(fmt):
    """Return the FormatInfo of fmt, or None if the format is not supported."""
    try:
        return FORMAT_TABLE.get(PixelFormat(fmt))
    except (ValueError, TypeError):
        return None


def bytes_per_pixel(fmt) -> int:
    """Bytes per pixel of fmt, 0 for unsupported formats."""
    info = get_format_info(fmt)
    return info.bytes_per_pixel if info is not None else 0
