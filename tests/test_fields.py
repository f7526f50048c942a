#!/usr/bin/env python3

import unittest
from enum import Enum

from BitPacking import BitField, IndexOutOfRangeError, apply_toggles, intTypes, render


class playerFlags(Enum):
    GROUNDED = 0
    CROUCHING = 1
    VISIBLE = 2


class TestBitField(unittest.TestCase):

    def test_labels_from_enum(self):
        """Enum member names label bits in declaration order"""
        flags = BitField.from_enum("flags", playerFlags, int_type=intTypes.BYTE, value=5)
        self.assertEqual(flags.labels, ["GROUNDED", "CROUCHING", "VISIBLE"])
        self.assertEqual(flags.label(0), "0: GROUNDED")
        self.assertEqual(flags.label(3), "3: (unused)")

    def test_empty_label_is_unused(self):
        flags = BitField.from_names("flags", ["a", "", "c"], int_type=intTypes.BYTE)
        self.assertEqual(flags.label(1), "1: (unused)")
        self.assertIsNone(flags.label_for(1))
        self.assertIn("[ ] 1: (unused)", render(flags).splitlines())
        self.assertEqual(flags.label(2), "2: c")

    def test_too_many_labels(self):
        with self.assertRaises(ValueError):
            BitField.from_names("flags", [str(i) for i in range(9)], int_type=intTypes.BYTE)

    def test_value_out_of_range(self):
        with self.assertRaises(ValueError):
            BitField("flags", intTypes.SBYTE, 200)

    def test_edit_in_place(self):
        flags = BitField("flags", intTypes.BYTE, 255)
        flags.set_bit(0, False)
        self.assertEqual(flags.value, 254)
        flags.toggle_bit(7)
        self.assertEqual(flags.value, 126)
        self.assertFalse(flags.get_bit(7))
        with self.assertRaises(IndexOutOfRangeError):
            flags.toggle_bit(8)

    def test_header(self):
        flags = BitField("flags", intTypes.BYTE, 5)
        self.assertEqual(flags.header(), "BitField: flags (BYTE) - Value: 5\n00000101")

    def test_bytes(self):
        """Big-endian, declared width, declared signedness"""
        field = BitField("current", intTypes.SHORT, -1500)
        encoded = field.to_bytes()
        self.assertEqual(encoded, bytearray([0xFA, 0x24]))
        decoded = BitField.from_bytes(bytearray([0x00]) + encoded, name="current",
                                      int_type=intTypes.SHORT, offset=1)
        self.assertEqual(decoded.value, -1500)

    def test_negative_offset(self):
        """Negative offsets would otherwise slice from the end of the payload"""
        with self.assertRaises(ValueError):
            BitField.from_bytes(bytearray([0x11, 0x22, 0x33]), int_type=intTypes.BYTE, offset=-2)

    def test_bytes_too_short(self):
        with self.assertRaises(ValueError):
            BitField.from_bytes(bytearray([0x01, 0x02]), int_type=intTypes.UINT)

    def test_csv_by_label_and_index(self):
        flags = BitField.from_enum("flags", playerFlags, int_type=intTypes.BYTE, value=5)
        self.assertEqual(flags.csv_header(["VISIBLE", 1]), ["2: VISIBLE", "1: CROUCHING"])
        self.assertEqual(flags.to_csv(["VISIBLE", 1]), ["1", "0"])
        self.assertEqual(len(flags.to_csv()), 8)
        with self.assertRaises(KeyError):
            flags.to_csv(["JUMPING"])

    def test_copy_is_independent(self):
        flags = BitField.from_names("flags", ["a"], int_type=intTypes.BYTE)
        other = flags.copy(value=3)
        other.labels.append("b")
        self.assertEqual(flags.value, 0)
        self.assertEqual(flags.labels, ["a"])


class TestInspector(unittest.TestCase):

    def test_render_byte(self):
        flags = BitField.from_enum("flags", playerFlags, int_type=intTypes.BYTE, value=5)
        lines = render(flags).splitlines()
        self.assertEqual(lines[0], "BitField: flags (BYTE) - Value: 5")
        self.assertEqual(lines[1], "00000101")
        self.assertEqual(lines[2], "[x] 0: GROUNDED")
        self.assertEqual(lines[3], "[ ] 1: CROUCHING")
        self.assertEqual(lines[4], "[x] 2: VISIBLE")
        self.assertEqual(len(lines), 2 + 8)

    def test_render_groups_rows_of_sixteen(self):
        field = BitField("mask", intTypes.INT, -1)
        lines = render(field).splitlines()
        # header (2) + 32 bits + 1 blank between the two blocks
        self.assertEqual(len(lines), 35)
        self.assertEqual(lines[18], "")
        self.assertEqual(lines[19], "[x] 16: (unused)")

    def test_apply_toggles(self):
        field = BitField("flags", intTypes.BYTE, 0)
        apply_toggles(field, [0, 7, 0])
        self.assertEqual(field.value, 128)


if __name__ == "__main__":
    unittest.main()
