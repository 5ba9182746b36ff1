#!/usr/bin/env python3
"""
Tests for the indent text segmenter.
"""

import unittest
from decimal import Decimal

from procure_compare.segmenter import extract_quantity, is_header_or_noise, segment


class TestSegment(unittest.TestCase):
    """Test cases for segment()."""

    def test_empty_input(self):
        self.assertEqual(segment(""), [])
        self.assertEqual(segment("\n\n   \n"), [])

    def test_headers_and_noise_dropped(self):
        text = """
        Item   Description   Qty
        S.No  Item  Qty  Unit
        abc
        SKF 6205-2RS Bearing 10 nos
        """
        lines = segment(text)
        self.assertEqual(len(lines), 1)
        self.assertEqual(lines[0].text, "SKF 6205-2RS Bearing 10 nos")

    def test_numbering_is_dense(self):
        text = "\n".join([
            "SKF 6205-2RS Bearing 10 nos",
            "Item Qty",
            "Gate valve 2 inch 4 nos",
            "",
            "Cotton waste 25 kg",
        ])
        lines = segment(text)
        self.assertEqual([line.line_number for line in lines], [1, 2, 3])

    def test_quantity_text_is_kept(self):
        lines = segment("   Grease EP2 2.5 kg   ")
        self.assertEqual(lines[0].text, "Grease EP2 2.5 kg")
        self.assertEqual(lines[0].quantity, Decimal("2.5"))
        self.assertEqual(lines[0].unit, "KG")


class TestExtractQuantity(unittest.TestCase):
    """Test cases for quantity/unit inference."""

    def test_quantity_patterns(self):
        test_cases = [
            ("SKF 6205-2RS Bearing 10 nos", (Decimal("10"), "NOS")),
            ("V-belt B42 6 Pcs", (Decimal("6"), "PCS")),
            ("Hydraulic oil 68 grade 20 ltr", (Decimal("20"), "LTR")),
            ("Safety gloves 12 pair", (Decimal("12"), "PAIR")),
            ("Copper wire 100mtr", (Decimal("100"), "MTR")),
            ("Spanner set 3", (Decimal("3"), "NOS")),
            ("Gate valve 50mm flanged", (Decimal("1"), "NOS")),
            ("Welding rods", (Decimal("1"), "NOS")),
        ]
        for text, expected in test_cases:
            with self.subTest(text=text):
                self.assertEqual(extract_quantity(text), expected)

    def test_plural_units(self):
        test_cases = [
            ("Allen key 20 sets", (Decimal("20"), "SET")),
            ("Leather gloves 5 pairs", (Decimal("5"), "PAIR")),
            ("PVC hose 100 mtrs", (Decimal("100"), "MTR")),
            ("Grease 4 kgs", (Decimal("4"), "KG")),
            ("Coolant 10 Ltrs", (Decimal("10"), "LTR")),
        ]
        for text, expected in test_cases:
            with self.subTest(text=text):
                self.assertEqual(extract_quantity(text), expected)

    def test_last_bare_number_is_the_quantity(self):
        self.assertEqual(extract_quantity("Gate valve 2 inch 4"), (Decimal("4"), "NOS"))

    def test_unit_must_end_at_word_boundary(self):
        self.assertEqual(extract_quantity("5 settings knob"), (Decimal("5"), "NOS"))

    def test_part_codes_are_not_quantities(self):
        self.assertEqual(extract_quantity("SKF 6205-2RS"), (Decimal("1"), "NOS"))


class TestHeaderHeuristic(unittest.TestCase):

    def test_is_header_or_noise(self):
        self.assertTrue(is_header_or_noise("Sr"))
        self.assertTrue(is_header_or_noise("Material DESCRIPTION"))
        self.assertTrue(is_header_or_noise("Item name / Qty required"))
        self.assertFalse(is_header_or_noise("Item: grease 2 kg"))


if __name__ == "__main__":
    unittest.main()
