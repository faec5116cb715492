"""Codec modules for the XYZ image format."""

from .encoder import XYZEncoder
from .decoder import XYZDecoder

__all__ = [
    'XYZEncoder',
    'XYZDecoder',
]
