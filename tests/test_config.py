#!/usr/bin/env python3
"""
Tests for engine configuration.
"""

import os
import unittest
from decimal import Decimal
from unittest.mock import patch

from procure_compare.config import EngineConfig


class TestEngineConfig(unittest.TestCase):

    def test_defaults(self):
        config = EngineConfig()
        self.assertEqual(config.match_min_score, 0.0)
        self.assertEqual(config.default_gst_percent, Decimal("18"))
        self.assertEqual(config.currency, "INR")

    def test_validation(self):
        with self.assertRaises(ValueError):
            EngineConfig(match_min_score=1.5)
        with self.assertRaises(ValueError):
            EngineConfig(default_gst_percent=Decimal("-1"))

    @patch.dict(os.environ, {
        "PROCURE_MATCH_MIN_SCORE": "0.35",
        "PROCURE_DEFAULT_GST": "12",
        "PROCURE_CURRENCY": "USD",
        "PROCURE_LOG_LEVEL": "debug",
    })
    def test_from_env(self):
        config = EngineConfig.from_env()
        self.assertEqual(config.match_min_score, 0.35)
        self.assertEqual(config.default_gst_percent, Decimal("12"))
        self.assertEqual(config.currency, "USD")
        self.assertEqual(config.log_level, "DEBUG")

    @patch.dict(os.environ, {
        "PROCURE_MATCH_MIN_SCORE": "high",
        "PROCURE_DEFAULT_GST": "-5",
    })
    def test_from_env_invalid_values_fall_back(self):
        with self.assertLogs("procure_compare.config", level="WARNING"):
            config = EngineConfig.from_env()
        self.assertEqual(config.match_min_score, 0.0)
        self.assertEqual(config.default_gst_percent, Decimal("18"))

    @patch.dict(os.environ, {
        "PROCURE_MATCH_MIN_SCORE": "nan",
        "PROCURE_DEFAULT_GST": "NaN",
    })
    def test_from_env_non_finite_values_fall_back(self):
        with self.assertLogs("procure_compare.config", level="WARNING"):
            config = EngineConfig.from_env()
        self.assertEqual(config.match_min_score, 0.0)
        self.assertEqual(config.default_gst_percent, Decimal("18"))

    @patch.dict(os.environ, {"PROCURE_DEFAULT_GST": "Infinity"})
    def test_from_env_infinite_gst_falls_back(self):
        with self.assertLogs("procure_compare.config", level="WARNING"):
            config = EngineConfig.from_env()
        self.assertEqual(config.default_gst_percent, Decimal("18"))

    @patch.dict(os.environ, {"PROCURE_LOG_LEVEL": "loud"})
    def test_from_env_unknown_log_level_falls_back(self):
        with self.assertLogs("procure_compare.config", level="WARNING"):
            config = EngineConfig.from_env()
        self.assertEqual(config.log_level, "INFO")

    def test_non_finite_gst_rejected(self):
        with self.assertRaises(ValueError):
            EngineConfig(default_gst_percent=Decimal("NaN"))

    @patch.dict(os.environ, {"PROCURE_MATCH_MIN_SCORE": "7"})
    def test_from_env_out_of_range(self):
        with self.assertLogs("procure_compare.config", level="WARNING"):
            config = EngineConfig.from_env()
        self.assertEqual(config.match_min_score, 0.0)


if __name__ == "__main__":
    unittest.main()
