"""Encoder: wire layout, compression capacity retry and write failures."""

import sys
import os
import io
import zlib

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
from xyzimage import (
    XYZImage, XYZError, XYZEncoder, PixelFormat, alloc, release,
    encode, encode_bytes, encode_file, deflate_compress
)
from xyzimage.io import MemorySink


class CapacityRecorder:
    """Compression function failing with BUFFER_TOO_SMALL for the first `failures` calls."""

    def __init__(self, failures):
        self.failures = failures
        self.capacities = []

    def __call__(self, data, capacity):
        self.capacities.append(capacity)
        if len(self.capacities) <= self.failures:
            return b'', XYZError.BUFFER_TOO_SMALL
        return zlib.compress(data), XYZError.OK


def test_concrete_scenario():
    print("=" * 60)
    print("Test 1: 2x1 Image Layout")
    print("=" * 60)

    image, _ = alloc(2, 1, PixelFormat.INDEXED8)
    image.set_palette_entry(0, (255, 0, 0))
    image.set_pixels([0, 0])

    data, err = encode_bytes(image)

    assert err == XYZError.OK
    assert data[:4] == b'XYZ1'
    assert data[4:8] == bytes([0x02, 0x00, 0x01, 0x00])

    plain = zlib.decompress(data[8:])
    assert len(plain) == 768 + 2
    assert plain[:3] == b'\xff\x00\x00'
    assert plain[3:768] == bytes(765)
    assert plain[768:] == b'\x00\x00'
    assert image.compressed_size_hint == len(data) - 8
    print(f"   Header: {data[:8].hex(' ')}")
    print("   [PASS] Wire layout")


def test_little_endian_dimensions():
    image, _ = alloc(0x1234, 0)
    data, err = encode_bytes(image)

    assert err == XYZError.OK
    assert data[4:8] == bytes([0x34, 0x12, 0x00, 0x00])


def test_capacity_retry_succeeds():
    print("\n" + "=" * 60)
    print("Test 2: Capacity Retry")
    print("=" * 60)

    image, _ = alloc(4, 4)
    recorder = CapacityRecorder(failures=1)

    ok, err = encode(image, MemorySink(), compress_func=recorder)

    assert (ok, err) == (True, XYZError.OK)
    assert recorder.capacities == [784, 2 * 784]
    print("   [PASS] Second attempt with doubled capacity")


def test_capacity_retry_fails_after_one_retry():
    image, _ = alloc(4, 4)
    recorder = CapacityRecorder(failures=5)
    sink = MemorySink()

    ok, err = encode(image, sink, compress_func=recorder)

    assert (ok, err) == (False, XYZError.COMPRESSION_FAILED)
    assert recorder.capacities == [784, 2 * 784]
    assert sink.getvalue() == b'', "Nothing may be written when compression fails"


def test_first_compression_error_is_passed_through():
    calls = []

    def out_of_memory(data, capacity):
        calls.append(capacity)
        return b'', XYZError.OUT_OF_MEMORY

    image, _ = alloc(4, 4)
    assert encode_bytes(image, out_of_memory) == (None, XYZError.OUT_OF_MEMORY)
    assert calls == [784]


def test_compression_contract_violations():
    image, _ = alloc(4, 4)

    def empty(data, capacity):
        return b'', XYZError.OK

    def oversized(data, capacity):
        return b'\x00' * (capacity + 1), XYZError.OK

    assert encode_bytes(image, empty) == (None, XYZError.COMPRESSION_FAILED)
    assert encode_bytes(image, oversized) == (None, XYZError.COMPRESSION_FAILED)


def test_incompressible_image_uses_retry():
    """Random data expands; the default compressor succeeds on the retry."""
    print("\n" + "=" * 60)
    print("Test 3: Incompressible Image")
    print("=" * 60)

    np.random.seed(7)
    image, _ = alloc(16, 16)
    image.set_palette(np.random.randint(0, 256, (256, 3)))
    image.set_pixels(np.random.randint(0, 256, 256))

    calls = []

    def counting(data, capacity):
        calls.append(capacity)
        return deflate_compress(data, capacity)

    data, err = encode_bytes(image, counting)

    assert err == XYZError.OK
    assert calls == [1024, 2048]
    assert image.compressed_size_hint > 1024
    assert zlib.decompress(data[8:]) == image.palette.tobytes() + image.pixels.tobytes()
    print(f"   1024 -> {image.compressed_size_hint} bytes")
    print("   [PASS] Incompressible image encoded")


def test_compress_func_selection():
    image, _ = alloc(2, 2)
    image_recorder = CapacityRecorder(failures=0)
    call_recorder = CapacityRecorder(failures=0)

    image.set_compress_func(image_recorder)
    encode_bytes(image)
    assert len(image_recorder.capacities) == 1

    # A per-call function wins over the image's function
    encode_bytes(image, call_recorder)
    assert len(call_recorder.capacities) == 1
    assert len(image_recorder.capacities) == 1

    image.set_compress_func(None)
    assert image.compress_func is deflate_compress


def test_short_writes():
    print("\n" + "=" * 60)
    print("Test 4: Short Writes")
    print("=" * 60)

    image, _ = alloc(8, 8)

    # limit cuts into: magic, width, height, payload
    for limit in (0, 3, 5, 7, 9):
        sink = MemorySink(limit=limit)
        ok, err = encode(image, sink)
        assert (ok, err) == (False, XYZError.WRITE_FAILED), f"limit={limit}"
        assert len(sink.getvalue()) == limit

    class SilentShortSink:
        """Sink that drops bytes without reporting an error."""

        def write(self, data):
            return max(0, len(data) - 1), XYZError.OK

    assert encode(image, SilentShortSink()) == (False, XYZError.WRITE_FAILED)
    print("   [PASS] Short writes abort the encode")


def test_invalid_arguments():
    image, _ = alloc(2, 2)

    assert encode(image, None) == (False, XYZError.BAD_HANDLE)
    assert encode_file(image, None) == (False, XYZError.BAD_HANDLE)
    assert encode(None, MemorySink()) == (False, XYZError.INVALID_HANDLE)
    assert encode(XYZImage(), MemorySink()) == (False, XYZError.INVALID_HANDLE)

    released, _ = alloc(2, 2)
    release(released)
    assert encode(released, MemorySink()) == (False, XYZError.INVALID_HANDLE)
    assert encode_bytes(released) == (None, XYZError.INVALID_HANDLE)


def test_unwritable_format_rejected():
    image, _ = alloc(2, 2)
    # Simulates a buffer format that may be allocated but not written
    image._format = PixelFormat.NONE

    assert XYZEncoder().encode(image, MemorySink()) == (False, XYZError.FORMAT_NOT_SUPPORTED)


def test_encode_file():
    image, _ = alloc(3, 3)
    image.set_pixels(range(9))
    buffer = io.BytesIO()

    ok, err = encode_file(image, buffer)

    assert (ok, err) == (True, XYZError.OK)
    assert buffer.getvalue() == encode_bytes(image)[0]
    assert image.get_compressed_filesize() == len(buffer.getvalue())


def main():
    """Run all encoder tests."""
    print("\n" + "=" * 60)
    print("ENCODER VERIFICATION")
    print("=" * 60 + "\n")

    tests = [
        ("2x1 Layout", test_concrete_scenario),
        ("Little Endian", test_little_endian_dimensions),
        ("Capacity Retry", test_capacity_retry_succeeds),
        ("Retry Exhausted", test_capacity_retry_fails_after_one_retry),
        ("First Error", test_first_compression_error_is_passed_through),
        ("Contract Violations", test_compression_contract_violations),
        ("Incompressible Image", test_incompressible_image_uses_retry),
        ("Compress Function", test_compress_func_selection),
        ("Short Writes", test_short_writes),
        ("Invalid Arguments", test_invalid_arguments),
        ("Unwritable Format", test_unwritable_format_rejected),
        ("File Output", test_encode_file),
    ]

    results = []
    for name, test in tests:
        try:
            test()
            results.append((name, True))
        except AssertionError as e:
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
