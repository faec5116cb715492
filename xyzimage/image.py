"""XYZ image buffer: dimensions, palette, pixel data and validity guard."""

import logging
import numbers
import numpy as np
from typing import Optional, Tuple

from .constants import (
    HEADER_SIZE, MAX_DIMENSION, PALETTE_ENTRIES, PALETTE_SIZE,
    STRUCT_MAGIC, STRUCT_VERSION, RELEASED_MAGIC
)
from .errors import XYZError, XYZImageError
from .formats import PixelFormat, get_format_info
from .compression import deflate_compress

logger = logging.getLogger(__name__)


class XYZImage:
    """
    In-memory XYZ image.

    Instances are only valid when built by alloc() or by the decoder.
    An XYZImage() created directly, or one passed to release(), fails
    every validity check and all accessors report INVALID_HANDLE (or
    0 / None for plain getters).

    Attributes exposed as properties:
        width, height: Image size in pixels (read-only)
        format: PixelFormat of the pixel buffer (read-only)
        palette: uint8 array of shape (256, 3), writable in place
        pixels: flat uint8 array of width * height * bpp bytes, writable in place
        compressed_size_hint: Size of the compressed payload of the last I/O
        compress_func: Compression function used by the next encode
    """

    def __init__(self):
        self._magic = None
        self._version = 0
        self._width = 0
        self._height = 0
        self._format = PixelFormat.NONE
        self._palette = None
        self._pixels = None
        self._compressed_size_hint = 0
        self._compress_func = None

    def __repr__(self):
        if not self.is_valid():
            return '<XYZImage (invalid)>'
        return (f'<XYZImage {self._width}x{self._height} '
                f'{self._format.name}>')

    def is_valid(self) -> bool:
        """Check the validity marker of this image."""
        return self._magic == STRUCT_MAGIC and self._version == STRUCT_VERSION

    @property
    def width(self) -> int:
        return self._width if self.is_valid() else 0

    @property
    def height(self) -> int:
        return self._height if self.is_valid() else 0

    @property
    def format(self) -> PixelFormat:
        return self._format if self.is_valid() else PixelFormat.NONE

    @property
    def palette(self) -> Optional[np.ndarray]:
        palette, _ = self.get_palette()
        return palette

    @property
    def pixels(self) -> Optional[np.ndarray]:
        return self._pixels if self.is_valid() else None

    @property
    def pixel_rows(self) -> Optional[np.ndarray]:
        """2D (height, width * bpp) view on the pixel buffer."""
        if not self.is_valid():
            return None
        bpp = get_format_info(self._format).bytes_per_pixel
        return self._pixels.reshape(self._height, self._width * bpp)

    @property
    def compressed_size_hint(self) -> int:
        return self._compressed_size_hint if self.is_valid() else 0

    @property
    def compress_func(self):
        return self._compress_func if self.is_valid() else None

    def get_palette(self) -> Tuple[Optional[np.ndarray], XYZError]:
        """
        Get the palette for read/write access.

        Returns:
            (palette, XYZError.OK) or (None, error) for released images
            and formats without a palette
        """
        if not self.is_valid():
            return None, XYZError.INVALID_HANDLE
        if not get_format_info(self._format).indexed:
            return None, XYZError.IMAGE_NOT_INDEXED
        return self._palette, XYZError.OK

    def set_palette_entry(self, index: int, rgb) -> XYZError:
        """Set palette entry `index` to the (red, green, blue) triple rgb."""
        palette, err = self.get_palette()
        if err:
            return err
        if not (isinstance(index, numbers.Integral) and not isinstance(index, bool)
                and 0 <= index < PALETTE_ENTRIES):
            return XYZError.VALUE_OUT_OF_RANGE
        values = _as_uint8(rgb)
        if values is None or values.size != 3:
            return XYZError.VALUE_OUT_OF_RANGE
        palette[index] = values
        return XYZError.OK

    def set_palette(self, colors) -> XYZError:
        """
        Replace the whole palette.

        Args:
            colors: 768 bytes or anything shaped (256, 3) with values 0-255

        Returns:
            XYZError.OK, or an error with the palette left unchanged
        """
        palette, err = self.get_palette()
        if err:
            return err
        values = _as_uint8(colors)
        if values is None or values.size != PALETTE_SIZE:
            return XYZError.VALUE_OUT_OF_RANGE
        palette[:] = values.reshape(PALETTE_ENTRIES, 3)
        return XYZError.OK

    def set_pixels(self, data) -> XYZError:
        """
        Replace the pixel buffer contents.

        The buffer keeps its size; data must hold exactly len(pixels) values.

        Returns:
            XYZError.OK, BUFFER_TOO_SMALL / PAYLOAD_TOO_LARGE on size
            mismatch, VALUE_OUT_OF_RANGE for values outside 0-255
        """
        if not self.is_valid():
            return XYZError.INVALID_HANDLE
        values = _as_uint8(data)
        if values is None:
            return XYZError.VALUE_OUT_OF_RANGE
        if values.size < self._pixels.size:
            return XYZError.BUFFER_TOO_SMALL
        if values.size > self._pixels.size:
            return XYZError.PAYLOAD_TOO_LARGE
        self._pixels[:] = values.ravel()
        return XYZError.OK

    def set_compress_func(self, compress_func=None) -> None:
        """Use compress_func for the next encode; None restores DEFLATE."""
        if not self.is_valid():
            return
        self._compress_func = compress_func if compress_func is not None else deflate_compress

    def get_filesize(self) -> int:
        """Size of the image when saved uncompressed (header + palette + pixels)."""
        if not self.is_valid():
            return 0
        return self._width * self._height + HEADER_SIZE + PALETTE_SIZE

    def get_compressed_filesize(self) -> int:
        """
        Size of the image file as last read or written.

        Undefined (header size only) for images that did no I/O yet.
        """
        if not self.is_valid():
            return 0
        return self._compressed_size_hint + HEADER_SIZE

    def release(self) -> bool:
        """Invalidate the image and drop its buffers; False if already invalid."""
        if not self.is_valid():
            return False
        self._magic = RELEASED_MAGIC
        self._pixels = None
        self._palette = None
        self._compress_func = None
        return True


def _as_uint8(data) -> Optional[np.ndarray]:
    """Convert bytes or array-likes to a flat uint8 array, None if out of range."""
    if isinstance(data, (bytes, bytearray, memoryview)):
        return np.frombuffer(bytes(data), dtype=np.uint8)
    arr = np.asarray(data)
    if arr.dtype == np.uint8:
        return arr.ravel()
    if arr.dtype.kind not in 'iu':
        return None
    if arr.size and (arr.min() < 0 or arr.max() > 255):
        return None
    return arr.astype(np.uint8).ravel()


def _check_dimension(value) -> bool:
    return (isinstance(value, numbers.Integral) and not isinstance(value, bool)
            and 0 <= value <= MAX_DIMENSION)


def construct(width: int, height: int, fmt=PixelFormat.INDEXED8) -> XYZImage:
    """
    Build a valid, zero-filled image.

    Raises:
        XYZImageError: FORMAT_NOT_SUPPORTED, VALUE_OUT_OF_RANGE or OUT_OF_MEMORY
    """
    info = get_format_info(fmt)
    if info is None:
        raise XYZImageError(XYZError.FORMAT_NOT_SUPPORTED)

    if not (_check_dimension(width) and _check_dimension(height)):
        raise XYZImageError(XYZError.VALUE_OUT_OF_RANGE)

    data_len = int(width) * int(height) * info.bytes_per_pixel
    try:
        pixels = np.zeros(data_len, dtype=np.uint8)
        palette = np.zeros((PALETTE_ENTRIES, 3), dtype=np.uint8)
    except MemoryError:
        raise XYZImageError(XYZError.OUT_OF_MEMORY)

    image = XYZImage()
    image._width = int(width)
    image._height = int(height)
    image._format = PixelFormat(fmt)
    image._palette = palette
    image._pixels = pixels
    image._compress_func = deflate_compress
    # Marker is set last so a failure above never leaves a valid object
    image._version = STRUCT_VERSION
    image._magic = STRUCT_MAGIC
    return image


def alloc(width: int, height: int,
          fmt=PixelFormat.INDEXED8) -> Tuple[Optional[XYZImage], XYZError]:
    """
    Create a new, empty (black) image.

    Args:
        width: Image width (0-65535)
        height: Image height (0-65535)
        fmt: Pixel format of the buffer, only PixelFormat.INDEXED8 is supported

    Returns:
        (image, XYZError.OK) or (None, error)
    """
    try:
        return construct(width, height, fmt), XYZError.OK
    except XYZImageError as e:
        logger.debug("alloc(%r, %r, %r) failed: %s", width, height, fmt, e.code.name)
        return None, e.code


def is_valid(image) -> bool:
    """True if image is a live XYZImage built by alloc() or the decoder."""
    return isinstance(image, XYZImage) and image.is_valid()


def release(image) -> bool:
    """Release image; further use reports INVALID_HANDLE. False if invalid."""
    if not isinstance(image, XYZImage):
        return False
    return image.release()


def get_width(image) -> int:
    return image.width if is_valid(image) else 0


def get_height(image) -> int:
    return image.height if is_valid(image) else 0


def get_format(image) -> PixelFormat:
    return image.format if is_valid(image) else PixelFormat.NONE


def get_palette(image) -> Tuple[Optional[np.ndarray], XYZError]:
    if not is_valid(image):
        return None, XYZError.INVALID_HANDLE
    return image.get_palette()


def get_buffer(image) -> Tuple[Optional[np.ndarray], int]:
    """Return (pixel buffer, length in bytes), or (None, 0) if invalid."""
    if not is_valid(image):
        return None, 0
    return image.pixels, image.pixels.size


def get_filesize(image) -> int:
    return image.get_filesize() if is_valid(image) else 0


def get_compressed_filesize(image) -> int:
    return image.get_compressed_filesize() if is_valid(image) else 0


def set_compress_func(image, compress_func=None) -> None:
    if is_valid(image):
        image.set_compress_func(compress_func)
