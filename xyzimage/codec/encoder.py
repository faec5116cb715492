"""XYZ Image Encoder - Writes an XYZ image to a byte sink."""

import logging
from typing import Tuple

from ..constants import MAGIC
from ..errors import XYZError, XYZImageError
from ..formats import get_format_info
from ..image import XYZImage, is_valid
from ..io.header import pack_dimension

logger = logging.getLogger(__name__)


class XYZEncoder:
    """
    Encoder for XYZ images.

    Pipeline:
    1. Validate image and sink
    2. Serialize palette + pixels
    3. Compress (one retry with doubled capacity)
    4. Write magic, width, height and the compressed payload
    """

    def encode(self, image: XYZImage, sink,
               compress_func=None) -> Tuple[bool, XYZError]:
        """
        Encode an image.

        Args:
            image: Valid XYZImage
            sink: Byte sink with write(data) -> (int, XYZError)
            compress_func: Compression function for this call only,
                the image's compress_func when None

        Returns:
            (True, XYZError.OK) or (False, error)
        """
        if not is_valid(image):
            return False, XYZError.INVALID_HANDLE

        if sink is None:
            return False, XYZError.BAD_HANDLE

        info = get_format_info(image.format)
        if info is None or not info.writable:
            return False, XYZError.FORMAT_NOT_SUPPORTED

        try:
            plain = self._serialize(image)
            compressed = self._compress(plain, compress_func or image.compress_func)
        except XYZImageError as e:
            logger.debug("Encoding failed: %s", e.code.name)
            return False, e.code
        except MemoryError:
            return False, XYZError.OUT_OF_MEMORY

        # Kept for statistical purposes
        image._compressed_size_hint = len(compressed)

        for chunk in (MAGIC, pack_dimension(image.width),
                      pack_dimension(image.height), compressed):
            written, err = sink.write(chunk)
            if err or written != len(chunk):
                logger.debug("Short write: %d of %d bytes", written, len(chunk))
                return False, err or XYZError.WRITE_FAILED

        return True, XYZError.OK

    def _serialize(self, image: XYZImage) -> bytes:
        """Palette triples in index order followed by the raw pixel bytes."""
        return image.palette.tobytes() + image.pixels.tobytes()

    def _compress(self, plain: bytes, compress_func) -> bytes:
        capacity = len(plain)
        compressed, err = compress_func(plain, capacity)

        if err == XYZError.BUFFER_TOO_SMALL:
            # Compression ratio is worse than 1, double the capacity and try again
            capacity *= 2
            logger.debug("Compressed data exceeds %d bytes, retrying with %d",
                         len(plain), capacity)
            compressed, err = compress_func(plain, capacity)
            if err:
                raise XYZImageError(XYZError.COMPRESSION_FAILED)
        elif err:
            raise XYZImageError(err)

        if not compressed or len(compressed) > capacity:
            raise XYZImageError(XYZError.COMPRESSION_FAILED)

        return bytes(compressed)
