"""Header helpers, index map / palette files and size metrics."""

import sys
import os
import tempfile

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
from xyzimage import alloc, encode_file
from xyzimage.io import (
    pack_header, unpack_header, pack_dimension, unpack_dimension,
    read_index_map, read_palette, grayscale_palette, get_image_info,
    write_index_map, write_palette
)
from xyzimage.metrics import calculate_bpp, calculate_compression_ratio, count_used_colors


def test_header_packing():
    print("=" * 60)
    print("Test 1: Header Packing")
    print("=" * 60)

    header = pack_header(2, 1)
    assert header == b'XYZ1\x02\x00\x01\x00'
    assert unpack_header(header) == (2, 1)
    assert unpack_header(pack_header(65535, 256)) == (65535, 256)

    assert pack_dimension(0x0102) == b'\x02\x01'
    assert unpack_dimension(b'\x02\x01') == 0x0102

    for bad in (b'XYZ1\x02\x00', b'ABCD\x02\x00\x01\x00'):
        try:
            unpack_header(bad)
            assert False, f"{bad!r} should be rejected"
        except ValueError as e:
            print(f"   Rejected: {e}")
    print("   [PASS] Header packing")


def test_index_map_roundtrip():
    print("\n" + "=" * 60)
    print("Test 2: Index Map Files")
    print("=" * 60)

    indices = (np.arange(12 * 7) % 256).reshape(7, 12).astype(np.uint8)

    with tempfile.TemporaryDirectory() as tmp:
        npy_path = write_index_map(indices, os.path.join(tmp, 'map.npy'))
        assert np.array_equal(read_index_map(npy_path), indices)

        raw_path = write_index_map(indices, os.path.join(tmp, 'map.raw'))
        assert np.array_equal(read_index_map(raw_path, width=12, height=7), indices)

        # Unknown extensions default to .npy
        default_path = write_index_map(indices, os.path.join(tmp, 'map.bin'))
        assert default_path.suffix == '.npy'

        try:
            read_index_map(raw_path)
            assert False, "raw files need dimensions"
        except ValueError:
            pass

        try:
            read_index_map(raw_path, width=5, height=5)
            assert False, "size mismatch must be detected"
        except ValueError:
            pass

        wide = os.path.join(tmp, 'wide.npy')
        np.save(wide, np.array([[0, 256]]))
        try:
            read_index_map(wide)
            assert False, "index 256 must be rejected"
        except ValueError:
            pass

        flat = os.path.join(tmp, 'flat.npy')
        np.save(flat, np.zeros(4))
        try:
            read_index_map(flat)
            assert False, "1D arrays must be rejected"
        except ValueError:
            pass
    print("   [PASS] Index map files")


def test_palette_files():
    palette = grayscale_palette()
    assert palette.shape == (256, 3)
    assert palette[17].tolist() == [17, 17, 17]

    with tempfile.TemporaryDirectory() as tmp:
        npy_path = write_palette(palette, os.path.join(tmp, 'palette.npy'))
        assert np.array_equal(read_palette(npy_path), palette)

        raw_path = write_palette(palette, os.path.join(tmp, 'palette.raw'))
        assert os.path.getsize(raw_path) == 768
        assert np.array_equal(read_palette(raw_path), palette)

        short = os.path.join(tmp, 'short.npy')
        np.save(short, np.zeros((16, 3)))
        try:
            read_palette(short)
            assert False, "16 color palettes must be rejected"
        except ValueError:
            pass


def test_image_info():
    image, _ = alloc(40, 30)

    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, 'image.xyz')
        with open(path, 'wb') as f:
            encode_file(image, f)

        info = get_image_info(path)

    assert info['width'] == 40 and info['height'] == 30
    assert info['file_size'] == image.get_compressed_filesize()
    assert info['payload_size'] == image.compressed_size_hint


def test_metrics():
    assert calculate_bpp(100, (10, 10)) == 8.0
    assert calculate_bpp(100, (0, 10)) == 0.0
    assert calculate_compression_ratio(1000, 250) == 4.0
    assert calculate_compression_ratio(1000, 0) == float('inf')
    assert count_used_colors(np.array([[0, 1], [1, 7]], dtype=np.uint8)) == 3


def main():
    """Run all file and metrics tests."""
    print("\n" + "=" * 60)
    print("FILE I/O AND METRICS VERIFICATION")
    print("=" * 60 + "\n")

    tests = [
        ("Header Packing", test_header_packing),
        ("Index Map Files", test_index_map_roundtrip),
        ("Palette Files", test_palette_files),
        ("Image Info", test_image_info),
        ("Metrics", test_metrics),
    ]

    results = []
    for name, test in tests:
        try:
            test()
            results.append((name, True))
        except (AssertionError, ValueError) as e:
            print(f"   [FAIL] {name}: {e}")
            results.append((name, False))

    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    for name, passed in results:
        print(f"   {name}: {'PASS' if passed else 'FAIL'}")

    return 0 if all(passed for _, passed in results) else 1


if __name__ == "__main__":
    sys.exit(main())
