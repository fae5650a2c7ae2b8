"""Tests for compression, metadata framing and Base64 helpers."""

from __future__ import annotations

import unittest

from multibase64.common.types import EncodingMetadata
from multibase64.core import b64
from multibase64.core.compression import compress_data, decompress_data
from multibase64.core.metadata import (
    deserialize_metadata,
    extract_metadata,
    frame_metadata,
    looks_framed,
    serialize_metadata,
)
from multibase64.utils import CompressionError, FormatError


class TestCompression(unittest.TestCase):
    def test_compress_and_decompress(self) -> None:
        original = b"abc" * 1000
        compressed = compress_data(original)
        self.assertLess(len(compressed), len(original))
        self.assertEqual(decompress_data(compressed), original)

    def test_decompress_garbage_fails(self) -> None:
        with self.assertRaises(CompressionError):
            decompress_data(b"plain text")


class TestMetadata(unittest.TestCase):
    def test_serialize_layout(self) -> None:
        metadata = EncodingMetadata(encoding="utf-8", compressed=True, version=1)
        self.assertEqual(serialize_metadata(metadata), b"\x01\x01utf-8")

    def test_deserialize(self) -> None:
        metadata = deserialize_metadata(b"\x01\x00latin-1")
        self.assertEqual(metadata, EncodingMetadata("latin-1", False, 1))

    def test_deserialize_too_short(self) -> None:
        with self.assertRaises(FormatError):
            deserialize_metadata(b"\x01\x00")

    def test_deserialize_bad_name(self) -> None:
        with self.assertRaises(FormatError):
            deserialize_metadata(b"\x01\x00\xff\xfe")

    def test_frame_and_extract(self) -> None:
        metadata = EncodingMetadata("utf-8", False)
        framed = frame_metadata(b"payload", metadata)
        self.assertEqual(framed[0], 7)
        found, payload = extract_metadata(framed)
        self.assertEqual(found, metadata)
        self.assertEqual(payload, b"payload")

    def test_frame_empty_payload(self) -> None:
        found, payload = extract_metadata(frame_metadata(b"", EncodingMetadata("utf-8")))
        self.assertIsNotNone(found)
        self.assertEqual(payload, b"")

    def test_unframed_data_is_untouched(self) -> None:
        self.assertFalse(looks_framed(b"hello"))
        self.assertFalse(looks_framed(b"\x05a"))
        self.assertEqual(extract_metadata(b"hello"), (None, b"hello"))

    def test_truncated_header_fails(self) -> None:
        with self.assertRaises(FormatError):
            extract_metadata(b"\x1d\x01\x00utf-8")

    def test_unknown_version_is_rejected(self) -> None:
        with self.assertRaises(FormatError):
            deserialize_metadata(b"\x02\x00utf-8")
        with self.assertRaises(FormatError):
            extract_metadata(b"\x05abcdefgh")

    def test_bad_compressed_flag_is_rejected(self) -> None:
        with self.assertRaises(FormatError):
            deserialize_metadata(b"\x01\x07utf-8")


class TestBase64Helpers(unittest.TestCase):
    def test_url_safe_conversion(self) -> None:
        self.assertEqual(b64.to_url_safe("+/8="), "-_8=")
        self.assertEqual(b64.to_url_safe("+/8=", strip_padding=True), "-_8")
        self.assertEqual(b64.to_standard("-_8"), "+/8=")
        self.assertEqual(b64.to_standard("aGk="), "aGk=")

    def test_decode_variants(self) -> None:
        self.assertEqual(b64.decode_text("+/8="), b"\xfb\xff")
        self.assertEqual(b64.decode_text("-_8"), b"\xfb\xff")
        self.assertEqual(b64.encode_bytes(b"\xfb\xff"), "+/8=")

    def test_invalid_base64(self) -> None:
        with self.assertRaises(FormatError):
            b64.decode_text("not-valid-base64!!")


if __name__ == "__main__":
    unittest.main()
