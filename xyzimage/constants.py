"""Constants for the XYZ image codec."""

import struct

# Magic number of an XYZ file
MAGIC = b'XYZ1'

# Header format (Little-endian, 8 bytes total)
# 4s: Magic (4B), H: Width (2B), H: Height (2B)
HEADER_FORMAT = '<4sHH'
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)  # 8 bytes

# Width and height are stored individually as little-endian uint16
DIMENSION_FORMAT = '<H'
DIMENSION_SIZE = struct.calcsize(DIMENSION_FORMAT)  # 2 bytes
MAX_DIMENSION = 0xFFFF

# Palette: 256 RGB triples in front of the pixel data
PALETTE_ENTRIES = 256
PALETTE_SIZE = PALETTE_ENTRIES * 3  # 768 bytes

# zlib level used by the default compression function (best compression)
DEFAULT_COMPRESSION_LEVEL = 9

# Validity marker of live XYZImage objects (not part of the file format)
STRUCT_MAGIC = b'LXYZ'
STRUCT_VERSION = 1
# Written over STRUCT_MAGIC on release, never produced by construction
RELEASED_MAGIC = b'!XYZ'
