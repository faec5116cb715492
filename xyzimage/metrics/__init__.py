"""Size metrics for the XYZ image codec."""

from .sizes import (
    calculate_bpp,
    calculate_compression_ratio,
    count_used_colors,
)

__all__ = [
    'calculate_bpp',
    'calculate_compression_ratio',
    'count_used_colors',
]
