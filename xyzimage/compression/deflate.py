"""Default DEFLATE (zlib) compression capability."""

import logging
import zlib
from typing import Tuple

from ..constants import DEFAULT_COMPRESSION_LEVEL
from ..errors import XYZError

logger = logging.getLogger(__name__)


def deflate_compress(data: bytes, capacity: int) -> Tuple[bytes, XYZError]:
    """
    Compress data with zlib at best compression.

    The capacity is advisory: when the compressed stream does not fit,
    nothing is returned and BUFFER_TOO_SMALL tells the caller to retry
    with a larger capacity.

    Args:
        data: Uncompressed input
        capacity: Number of bytes the caller is prepared to accept

    Returns:
        (compressed bytes, XYZError.OK) or (b'', error)
    """
    try:
        compressed = zlib.compress(bytes(data), DEFAULT_COMPRESSION_LEVEL)
    except MemoryError:
        return b'', XYZError.OUT_OF_MEMORY
    except zlib.error as e:
        logger.debug("zlib compression failed: %s", e)
        return b'', XYZError.COMPRESSION_FAILED

    if len(compressed) > capacity:
        logger.debug("Compressed size %d exceeds capacity %d",
                     len(compressed), capacity)
        return b'', XYZError.BUFFER_TOO_SMALL

    return compressed, XYZError.OK


def deflate_decompress(data: bytes, expected_len: int) -> Tuple[bytes, XYZError]:
    """
    Inflate a zlib stream into at most expected_len bytes.

    A complete stream producing fewer bytes is returned with OK; the
    caller decides whether the size is acceptable.

    Returns:
        (decompressed bytes, XYZError.OK) or (b'', COMPRESSION_BACKEND_ERROR)
    """
    decompressor = zlib.decompressobj()
    try:
        out = decompressor.decompress(bytes(data), expected_len + 1)
    except MemoryError:
        return b'', XYZError.OUT_OF_MEMORY
    except zlib.error as e:
        logger.debug("zlib decompression failed: %s", e)
        return b'', XYZError.COMPRESSION_BACKEND_ERROR

    if len(out) > expected_len:
        # One byte of slack detects streams larger than expected
        return b'', XYZError.COMPRESSION_BACKEND_ERROR
    if not decompressor.eof:
        # Stream ended before the final block
        return b'', XYZError.COMPRESSION_BACKEND_ERROR

    return out, XYZError.OK
