"""Index map and palette reader supporting NumPy and raw formats."""

import numpy as np
from pathlib import Path

from ..constants import HEADER_SIZE, PALETTE_ENTRIES, PALETTE_SIZE
from .header import unpack_header


def read_index_map(path: str, width: int = None, height: int = None) -> np.ndarray:
    """
    Read a 2D map of palette indices.

    Args:
        path: Path to the index map (.npy or .raw)
        width: Image width (required for .raw files)
        height: Image height (required for .raw files)

    Returns:
        2D numpy array with dtype uint8

    Raises:
        ValueError: If format is unsupported, parameters are missing or
            values do not fit a palette index
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == '.npy':
        return _read_numpy(path)
    elif suffix == '.raw':
        if width is None or height is None:
            raise ValueError("Width and height are required for .raw files")
        return _read_raw(path, width, height)
    else:
        raise ValueError(f"Unsupported file format: {suffix}")


def _read_numpy(path: Path) -> np.ndarray:
    """Read a NumPy array file."""
    data = np.load(str(path))

    # Ensure 2D
    if data.ndim != 2:
        raise ValueError(f"Expected 2D array, got {data.ndim}D")

    if data.size and (data.min() < 0 or data.max() >= PALETTE_ENTRIES):
        raise ValueError(f"Index values must be 0-{PALETTE_ENTRIES - 1}, "
                         f"got [{data.min()}, {data.max()}]")

    return data.astype(np.uint8)


def _read_raw(path: Path, width: int, height: int) -> np.ndarray:
    """Read a raw binary file with one byte per pixel."""
    with open(path, 'rb') as f:
        data = np.frombuffer(f.read(), dtype=np.uint8)

    # Reshape to 2D
    expected_size = width * height
    if len(data) != expected_size:
        raise ValueError(f"Data size mismatch. Expected {expected_size}, got {len(data)}")

    return data.reshape((height, width))


def read_palette(path: str) -> np.ndarray:
    """
    Read a palette of 256 RGB colors.

    Args:
        path: .npy file shaped (256, 3) or a 768 byte .raw file

    Returns:
        numpy array of shape (256, 3) with dtype uint8
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == '.npy':
        data = np.load(str(path))
    elif suffix == '.raw':
        with open(path, 'rb') as f:
            data = np.frombuffer(f.read(), dtype=np.uint8)
    else:
        raise ValueError(f"Unsupported palette format: {suffix}")

    if data.size != PALETTE_SIZE:
        raise ValueError(f"Palette size mismatch. Expected {PALETTE_SIZE} values, got {data.size}")

    if data.min() < 0 or data.max() > 255:
        raise ValueError("Palette values must be 0-255")

    return data.reshape(PALETTE_ENTRIES, 3).astype(np.uint8)


def grayscale_palette() -> np.ndarray:
    """Palette mapping index i to the gray level (i, i, i)."""
    ramp = np.arange(PALETTE_ENTRIES, dtype=np.uint8)
    return np.stack([ramp, ramp, ramp], axis=1)


def get_image_info(path: str) -> dict:
    """
    Get information about an XYZ file without decompressing it.

    Returns:
        Dictionary with 'width', 'height', 'file_size', 'payload_size'
    """
    path = Path(path)

    with open(path, 'rb') as f:
        header = f.read(HEADER_SIZE)

    width, height = unpack_header(header)
    file_size = path.stat().st_size

    return {
        'width': width,
        'height': height,
        'file_size': file_size,
        'payload_size': file_size - HEADER_SIZE,
    }
