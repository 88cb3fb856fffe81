"""
Tests for 8.3 short name reconstruction.
"""
from __future__ import annotations

import unittest

from pyfat16.names import decode_short_name


class TestDecodeShortName(unittest.TestCase):
    def test_base_only(self):
        self.assertEqual(decode_short_name(b"FOO        "), "FOO")

    def test_base_and_extension(self):
        self.assertEqual(decode_short_name(b"BAR     TXT"), "BAR.TXT")

    def test_full_width(self):
        self.assertEqual(decode_short_name(b"FILENAMETXT"), "FILENAME.TXT")

    def test_short_extension(self):
        self.assertEqual(decode_short_name(b"README  MD "), "README.MD")

    def test_free_slot_is_empty(self):
        self.assertEqual(decode_short_name(b"\x00" + b"OO     TXT"), "")

    def test_kanji_lead_byte(self):
        name = decode_short_name(b"\x05YZ     TXT")
        self.assertEqual(ord(name[0]), 0xE5)
        self.assertEqual(name[1:], "YZ.TXT")

    def test_first_space_ends_segment(self):
        self.assertEqual(decode_short_name(b"AB CD   E F"), "AB.E")

    def test_no_case_folding(self):
        self.assertEqual(decode_short_name(b"MiXeD   tXt"), "MiXeD.tXt")

    def test_encoding(self):
        self.assertEqual(decode_short_name(b"\x82TE        ", encoding="cp437"), "éTE")

    def test_wrong_length(self):
        with self.assertRaises(ValueError):
            decode_short_name(b"SHORT")


if __name__ == "__main__":
    unittest.main()
