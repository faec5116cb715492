"""XYZ Image Decoder - Reads an XYZ image from a byte source."""

import logging
import numpy as np
from typing import Optional, Tuple

from ..constants import MAGIC, PALETTE_ENTRIES, PALETTE_SIZE, DIMENSION_SIZE
from ..errors import XYZError, XYZImageError
from ..formats import PixelFormat
from ..image import XYZImage, construct
from ..io.header import unpack_dimension
from ..compression import deflate_decompress

logger = logging.getLogger(__name__)


class XYZDecoder:
    """
    Decoder for XYZ images.

    Pipeline:
    1. Read and check the 4-byte magic
    2. Read width and height (little-endian)
    3. Allocate the target image
    4. Discover the compressed payload size (one doubling at most)
    5. Decompress
    6. Split into palette and pixels
    """

    def __init__(self, decompress_func=None):
        """
        Args:
            decompress_func: Function (data, expected_len) -> (bytes, XYZError),
                zlib when None
        """
        self.decompress_func = decompress_func or deflate_decompress

    def decode(self, source) -> Tuple[Optional[XYZImage], XYZError]:
        """
        Decode an XYZ image.

        Args:
            source: Byte source with read(amount) -> (bytes, XYZError)

        Returns:
            (image, XYZError.OK) or (None, error); no partially decoded
            image is ever returned
        """
        if source is None:
            return None, XYZError.BAD_HANDLE

        image = None
        try:
            width, height = self._read_header(source)
            image = construct(width, height, PixelFormat.INDEXED8)
            self._read_payload(source, image)
        except XYZImageError as e:
            logger.debug("Decoding failed: %s", e.code.name)
            if image is not None:
                image.release()
            return None, e.code
        except MemoryError:
            if image is not None:
                image.release()
            return None, XYZError.OUT_OF_MEMORY

        return image, XYZError.OK

    def _read_exact(self, source, amount: int) -> bytes:
        data, err = source.read(amount)
        if err:
            raise XYZImageError(err)
        if len(data) != amount:
            # Short read without an error violates the source contract
            raise XYZImageError(XYZError.READ_FAILED)
        return data

    def _read_header(self, source) -> Tuple[int, int]:
        magic = self._read_exact(source, len(MAGIC))
        if magic != MAGIC:
            raise XYZImageError(XYZError.BAD_HEADER)

        width = unpack_dimension(self._read_exact(source, DIMENSION_SIZE))
        height = unpack_dimension(self._read_exact(source, DIMENSION_SIZE))
        return width, height

    def _discover_payload(self, source, xyz_size: int) -> bytes:
        """
        Read the compressed payload whose length is unknown.

        The uncompressed size is the first guess. If the source is not
        exhausted after it, one more chunk of the same size is read; a
        source that still has data after that is rejected.
        """
        chunk, err = source.read(xyz_size)
        compressed = bytearray(chunk)

        if err == XYZError.OK:
            # Compression ratio is worse than 1, read a second chunk
            logger.debug("Payload exceeds %d bytes, doubling read buffer", xyz_size)
            chunk, err = source.read(xyz_size)
            compressed += chunk

            if err == XYZError.OK:
                raise XYZImageError(XYZError.PAYLOAD_TOO_LARGE)

        if err != XYZError.END_OF_STREAM:
            raise XYZImageError(err)

        return bytes(compressed)

    def _read_payload(self, source, image: XYZImage) -> None:
        pixel_count = image._pixels.size
        xyz_size = PALETTE_SIZE + pixel_count

        compressed = self._discover_payload(source, xyz_size)
        image._compressed_size_hint = len(compressed)
        logger.debug("Compressed payload: %d bytes (uncompressed %d)",
                     len(compressed), xyz_size)

        decompressed, err = self.decompress_func(compressed, xyz_size)
        if err:
            if err != XYZError.OUT_OF_MEMORY:
                err = XYZError.COMPRESSION_BACKEND_ERROR
            raise XYZImageError(err)

        if len(decompressed) < xyz_size:
            raise XYZImageError(XYZError.PAYLOAD_TRUNCATED)
        if len(decompressed) > xyz_size:
            raise XYZImageError(XYZError.COMPRESSION_BACKEND_ERROR)

        raw = np.frombuffer(decompressed, dtype=np.uint8)
        image._palette[:] = raw[:PALETTE_SIZE].reshape(PALETTE_ENTRIES, 3)
        image._pixels[:] = raw[PALETTE_SIZE:]
