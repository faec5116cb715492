"""Error codes of the XYZ image codec."""

from enum import IntEnum


class XYZError(IntEnum):
    """Flat error taxonomy returned next to every fallible result."""

    OK = 0
    READ_FAILED = 1
    BAD_HEADER = 2
    PAYLOAD_TOO_LARGE = 3
    PAYLOAD_TRUNCATED = 4
    END_OF_STREAM = 5
    WRITE_FAILED = 6
    COMPRESSION_FAILED = 7
    INVALID_HANDLE = 8
    BUFFER_TOO_SMALL = 9
    IMAGE_NOT_INDEXED = 10
    BAD_HANDLE = 11
    OUT_OF_MEMORY = 12
    COMPRESSION_BACKEND_ERROR = 13
    FORMAT_NOT_SUPPORTED = 14
    VALUE_OUT_OF_RANGE = 15


_MESSAGES = {
    XYZError.OK: "Success.",
    XYZError.READ_FAILED: "A read error occurred.",
    XYZError.BAD_HEADER: "The file does not have a XYZ1 magic.",
    XYZError.PAYLOAD_TOO_LARGE: (
        "The compressed image exceeds the size of 256 * 3 + width * height "
        "by a factor of 2 or more."),
    XYZError.PAYLOAD_TRUNCATED: (
        "The image is truncated (size < 256 * 3 + width * height after "
        "decompression)."),
    XYZError.END_OF_STREAM: "The end of the input stream was reached.",
    XYZError.WRITE_FAILED: "Saving the picture failed due to a write error.",
    XYZError.COMPRESSION_FAILED: "The compression step during saving failed.",
    XYZError.INVALID_HANDLE: "The passed XYZImage is invalid or was released.",
    XYZError.BUFFER_TOO_SMALL: "The passed buffer is not large enough.",
    XYZError.IMAGE_NOT_INDEXED: (
        "The palette can only be accessed for color formats that are indexed."),
    XYZError.BAD_HANDLE: "A mandatory byte source or sink is missing.",
    XYZError.OUT_OF_MEMORY: "A memory allocation failed.",
    XYZError.COMPRESSION_BACKEND_ERROR: "zlib was unable to decompress the image.",
    XYZError.FORMAT_NOT_SUPPORTED: (
        "The requested pixel format is not supported by this library version."),
    XYZError.VALUE_OUT_OF_RANGE: (
        "A width, height, palette color or pixel value is out of range."),
}


class XYZImageError(ValueError):
    """
    Internal abort signal of the codec engines.

    Carries an XYZError code; the public API catches it and hands the
    code back to the caller instead of raising.
    """

    def __init__(self, code: XYZError):
        super().__init__(get_error_message(code))
        self.code = code


def get_error_message(error) -> str:
    """Return the human readable message for an error code."""
    try:
        return _MESSAGES[XYZError(error)]
    except (ValueError, KeyError):
        return "Unknown error."
