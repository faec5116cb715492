"""Functional entry points of the XYZ image codec."""

from typing import Optional, Tuple

from .errors import XYZError
from .image import XYZImage
from .io.channels import FileSource, FileSink, MemorySource, MemorySink
from .codec import XYZDecoder, XYZEncoder


def decode(source, decompress_func=None) -> Tuple[Optional[XYZImage], XYZError]:
    """Decode an image from a byte source; see XYZDecoder.decode."""
    return XYZDecoder(decompress_func).decode(source)


def decode_file(f) -> Tuple[Optional[XYZImage], XYZError]:
    """Decode an image from a binary file object."""
    if f is None:
        return None, XYZError.BAD_HANDLE
    return decode(FileSource(f))


def decode_bytes(data) -> Tuple[Optional[XYZImage], XYZError]:
    """Decode an image from an in-memory XYZ file."""
    if data is None:
        return None, XYZError.BAD_HANDLE
    return decode(MemorySource(data))


def encode(image, sink, compress_func=None) -> Tuple[bool, XYZError]:
    """Encode image to a byte sink; see XYZEncoder.encode."""
    return XYZEncoder().encode(image, sink, compress_func)


def encode_file(image, f) -> Tuple[bool, XYZError]:
    """Encode image to a binary file object."""
    if f is None:
        return False, XYZError.BAD_HANDLE
    return encode(image, FileSink(f))


def encode_bytes(image, compress_func=None) -> Tuple[Optional[bytes], XYZError]:
    """Encode image and return the complete XYZ file as bytes."""
    sink = MemorySink()
    ok, err = encode(image, sink, compress_func)
    if not ok:
        return None, err
    return sink.getvalue(), XYZError.OK
