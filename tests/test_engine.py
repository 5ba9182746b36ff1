#!/usr/bin/env python3
"""
End-to-end tests through the extraction engine interface.
"""

import unittest
from decimal import Decimal

from procure_compare.comparison import build_comparison
from procure_compare.config import EngineConfig
from procure_compare.engine import ExtractionEngine, HeuristicEngine
from procure_compare.models import Category, VendorQuote
from procure_compare.taxonomy import default_taxonomy

INDENT_TEXT = """
Item   Description   Qty
SKF 6205-2RS Bearing 10 nos
Gate valve 2 inch cast iron 4 nos
Cotton waste 25 kg
"""

VENDOR_A_TEXT = """
Description   Qty   Rate
SKF 6205-2RS Bearing 10 nos Rs. 850
Gate valve 2 inch cast iron 4 nos Rs. 2,400
Prices valid for 30 days
"""

VENDOR_B_TEXT = """
6205-2RS Bearing SKF make 10 nos Rs. 800
Cotton waste 25 kg Rs. 60
Welding electrodes 2.5mm Rs. 450
"""


class TestHeuristicEngine(unittest.TestCase):
    """Segment, normalize, parse, match and compare."""

    def setUp(self):
        self.engine = HeuristicEngine()

    def test_build_indent_lines(self):
        lines = self.engine.build_indent_lines(INDENT_TEXT)
        self.assertEqual([line.id for line in lines], ["L1", "L2", "L3"])
        self.assertEqual(lines[0].quantity, Decimal("10"))
        self.assertEqual(lines[2].unit, "KG")
        self.assertEqual(lines[0].normalized_item.category, Category.BEARINGS)
        self.assertEqual(lines[0].normalized_item.clean_description, "SKF 6205 2RS")
        self.assertEqual(lines[1].normalized_item.category, Category.VALVES)
        self.assertEqual(lines[2].normalized_item.confidence, 0.40)

    def test_build_indent_lines_without_normalizing(self):
        lines = self.engine.build_indent_lines(INDENT_TEXT, normalize=False,
                                               id_factory=lambda raw: f"IND-7/{raw.line_number}")
        self.assertEqual(lines[1].id, "IND-7/2")
        self.assertIsNone(lines[1].normalized_item)

    def test_renormalizing_recomputes_from_raw_description(self):
        line = self.engine.build_indent_lines(INDENT_TEXT)[0]
        first = line.normalized_item
        self.engine.normalize_line(line)
        self.assertEqual(line.normalized_item, first)
        self.assertEqual(line.normalized_item.clean_description, "SKF 6205 2RS")

    def test_end_to_end_comparison(self):
        indent_lines = self.engine.build_indent_lines(INDENT_TEXT)
        vendor_quotes = {}
        for vendor_id, name, text in [("A", "Acme", VENDOR_A_TEXT), ("B", "Bharat", VENDOR_B_TEXT)]:
            quote_lines = self.engine.parse_quote_text(text)
            vendor_quotes[vendor_id] = VendorQuote(
                vendor_id, name, self.engine.match_quote_lines(quote_lines, indent_lines))

        b_lines = vendor_quotes["B"].quote_lines
        self.assertEqual(len(b_lines), 3)
        self.assertIsNone(b_lines[2].matched_indent_line_id)
        self.assertEqual(b_lines[2].match_score, 0.0)

        rows = build_comparison(indent_lines, vendor_quotes)
        self.assertEqual(len(rows), 3)

        bearing, valve, waste = rows
        self.assertEqual(bearing.vendors["A"].landed_cost, Decimal("10030"))
        self.assertEqual(bearing.vendors["B"].landed_cost, Decimal("9440"))
        self.assertEqual(bearing.lowest_cost_vendor, "B")
        self.assertIsNone(bearing.lowest_lead_time_vendor)

        self.assertEqual(list(valve.vendors), ["A"])
        self.assertEqual(valve.vendors["A"].landed_cost, Decimal("11328"))

        self.assertEqual(list(waste.vendors), ["B"])
        self.assertEqual(waste.vendors["B"].landed_cost, Decimal("1770"))

    def test_min_score_from_config(self):
        engine = HeuristicEngine(EngineConfig(match_min_score=0.9))
        indent_lines = engine.build_indent_lines(INDENT_TEXT)
        matched = engine.match_quote_lines(engine.parse_quote_text(VENDOR_B_TEXT), indent_lines)
        # 4 of 5 bearing tokens shared: 0.8 < 0.9
        self.assertIsNone(matched[0].matched_indent_line_id)
        self.assertEqual(matched[1].matched_indent_line_id, "L3")

    def test_default_gst_from_config(self):
        engine = HeuristicEngine(EngineConfig(default_gst_percent=Decimal("5")))
        line = engine.parse_quote_text("Cotton waste 25 kg Rs. 60")[0]
        self.assertEqual(line.gst_percent, Decimal("5"))

    def test_custom_taxonomy(self):
        taxonomy = default_taxonomy()
        taxonomy.register("FASTENERS", ["bolt", "nut", "washer"], before=Category.BEARINGS)
        engine = HeuristicEngine(taxonomy=taxonomy)
        self.assertEqual(engine.normalize("Hex bolt M12 x 50").category, "FASTENERS")


class KeywordEngine(HeuristicEngine):
    """Replacement scorer behind the same interface."""

    def match_score(self, quote_line, indent_line):
        return 1.0 if indent_line.line_number == 3 else 0.0


class TestEngineInterface(unittest.TestCase):

    def test_interface_is_abstract(self):
        with self.assertRaises(TypeError):
            ExtractionEngine()

    def test_template_methods_use_overridden_operations(self):
        engine = KeywordEngine()
        indent_lines = engine.build_indent_lines(INDENT_TEXT)
        matched = engine.match_quote_lines(engine.parse_quote_text(VENDOR_A_TEXT), indent_lines)
        self.assertEqual(matched[0].matched_indent_line_id, "L3")


if __name__ == "__main__":
    unittest.main()
