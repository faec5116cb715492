"""Index map and palette writer supporting NumPy and raw formats."""

import numpy as np
from pathlib import Path


def write_index_map(image: np.ndarray, path: str, format: str = None) -> Path:
    """
    Write a 2D map of palette indices to file.

    Args:
        image: 2D numpy array
        path: Output file path
        format: Output format ('npy' or 'raw'). Auto-detected from extension if None.

    Returns:
        Path actually written

    Raises:
        ValueError: If format is unsupported
    """
    path = Path(path)

    # Auto-detect format from extension
    if format is None:
        suffix = path.suffix.lower()
        if suffix == '.npy':
            format = 'npy'
        elif suffix == '.raw':
            format = 'raw'
        else:
            # Default to npy
            format = 'npy'
            path = path.with_suffix('.npy')

    # Ensure 2D
    if image.ndim != 2:
        raise ValueError(f"Expected 2D array, got {image.ndim}D")

    if format == 'npy':
        _write_numpy(image, path)
    elif format == 'raw':
        _write_raw(image, path)
    else:
        raise ValueError(f"Unsupported format: {format}")

    return path


def write_palette(palette: np.ndarray, path: str) -> Path:
    """Write a (256, 3) palette as .npy, or as 768 raw bytes for .raw paths."""
    path = Path(path)
    if path.suffix.lower() == '.raw':
        _write_raw(palette, path)
    else:
        path = path.with_suffix('.npy')
        _write_numpy(palette, path)
    return path


def _write_numpy(image: np.ndarray, path: Path) -> None:
    """Write array as NumPy file."""
    np.save(str(path), image.astype(np.uint8))


def _write_raw(image: np.ndarray, path: Path) -> None:
    """Write array as raw binary."""
    with open(path, 'wb') as f:
        f.write(image.astype(np.uint8).tobytes())
