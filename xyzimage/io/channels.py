"""Byte source and byte sink adapters for the XYZ codec engines."""

import logging
from typing import Optional, Tuple

from ..errors import XYZError

logger = logging.getLogger(__name__)


class FileSource:
    """
    Byte source reading from a binary file object.

    read(amount) keeps reading until amount bytes arrived, so partial
    reads of pipes and sockets are collected. Fewer bytes are returned
    only together with END_OF_STREAM (an empty read) or READ_FAILED
    (any other fault).
    """

    def __init__(self, f):
        """
        Args:
            f: File object opened in binary read mode, or None
        """
        self.f = f

    def read(self, amount: int) -> Tuple[bytes, XYZError]:
        if self.f is None:
            return b'', XYZError.BAD_HANDLE

        data = bytearray()
        while len(data) < amount:
            try:
                chunk = self.f.read(amount - len(data))
            except (OSError, ValueError) as e:
                logger.debug("Read of %d bytes failed: %s", amount, e)
                return bytes(data), XYZError.READ_FAILED

            if chunk is None:
                # Non-blocking stream without data available
                return bytes(data), XYZError.READ_FAILED

            if not chunk:
                return bytes(data), XYZError.END_OF_STREAM

            data += chunk

        return bytes(data), XYZError.OK


class FileSink:
    """Byte sink writing to a binary file object."""

    def __init__(self, f):
        """
        Args:
            f: File object opened in binary write mode, or None
        """
        self.f = f

    def write(self, data: bytes) -> Tuple[int, XYZError]:
        if self.f is None:
            return 0, XYZError.BAD_HANDLE

        try:
            written = self.f.write(data)
        except (OSError, ValueError) as e:
            logger.debug("Write of %d bytes failed: %s", len(data), e)
            return 0, XYZError.WRITE_FAILED

        if written is None:
            written = 0
        if written != len(data):
            return written, XYZError.WRITE_FAILED

        return written, XYZError.OK


class MemorySource:
    """Byte source over an in-memory bytes-like object."""

    def __init__(self, data):
        self.data = bytes(data) if data is not None else None
        self.pos = 0

    def read(self, amount: int) -> Tuple[bytes, XYZError]:
        if self.data is None:
            return b'', XYZError.BAD_HANDLE

        chunk = self.data[self.pos:self.pos + amount]
        self.pos += len(chunk)

        if len(chunk) != amount:
            return chunk, XYZError.END_OF_STREAM

        return chunk, XYZError.OK

    def bytes_remaining(self) -> int:
        """Return number of bytes not read yet."""
        if self.data is None:
            return 0
        return len(self.data) - self.pos


class MemorySink:
    """
    Byte sink collecting everything written into memory.

    Args:
        limit: Optional capacity in bytes; writes beyond it are cut
            short and reported as WRITE_FAILED
    """

    def __init__(self, limit: Optional[int] = None):
        self.buffer = bytearray()
        self.limit = limit

    def write(self, data: bytes) -> Tuple[int, XYZError]:
        amount = len(data)
        if self.limit is not None:
            amount = max(0, min(amount, self.limit - len(self.buffer)))

        self.buffer += data[:amount]

        if amount != len(data):
            return amount, XYZError.WRITE_FAILED

        return amount, XYZError.OK

    def getvalue(self) -> bytes:
        return bytes(self.buffer)
