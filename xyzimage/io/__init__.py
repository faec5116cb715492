"""I/O modules for the XYZ image codec."""

from .channels import FileSource, FileSink, MemorySource, MemorySink
from .header import pack_header, unpack_header, pack_dimension, unpack_dimension
from .image_reader import read_index_map, read_palette, grayscale_palette, get_image_info
from .image_writer import write_index_map, write_palette

__all__ = [
    'FileSource',
    'FileSink',
    'MemorySource',
    'MemorySink',
    'pack_header',
    'unpack_header',
    'pack_dimension',
    'unpack_dimension',
    'read_index_map',
    'read_palette',
    'grayscale_palette',
    'get_image_info',
    'write_index_map',
    'write_palette',
]
