"""
Tests for settings loaded from the environment.

Contract:
- unset or blank variables give the defaults
- a malformed number or log level logs a warning and falls back to the default
"""

import os
import unittest
from unittest.mock import patch

from enrollhub.core.config import load_settings

CLEAN = {"WHATSAPP_TIMEOUT": "", "GROUPS_CACHE_SECONDS": "", "LOG_LEVEL": ""}


class TestLoadSettings(unittest.TestCase):
    @patch.dict(os.environ, {"WHATSAPP_TIMEOUT": "12.5", "GROUPS_CACHE_SECONDS": "5", "LOG_LEVEL": "debug"})
    def test_reads_valid_values(self) -> None:
        settings = load_settings()
        self.assertEqual(settings.whatsapp_timeout, 12.5)
        self.assertEqual(settings.groups_cache_seconds, 5)
        self.assertEqual(settings.log_level, "DEBUG")

    @patch.dict(os.environ, CLEAN)
    def test_blank_values_use_defaults(self) -> None:
        settings = load_settings()
        self.assertEqual(settings.whatsapp_timeout, 30.0)
        self.assertEqual(settings.groups_cache_seconds, 60)
        self.assertEqual(settings.log_level, "INFO")

    @patch.dict(os.environ, {"WHATSAPP_TIMEOUT": "soon", "GROUPS_CACHE_SECONDS": "1.5", "LOG_LEVEL": "LOUD"})
    def test_malformed_values_fall_back_with_warning(self) -> None:
        with self.assertLogs("enrollhub.core.config", "WARNING") as logs:
            settings = load_settings()

        self.assertEqual(settings.whatsapp_timeout, 30.0)
        self.assertEqual(settings.groups_cache_seconds, 60)
        self.assertEqual(settings.log_level, "INFO")
        output = "\n".join(logs.output)
        for name in ("WHATSAPP_TIMEOUT", "GROUPS_CACHE_SECONDS", "LOG_LEVEL"):
            self.assertIn(name, output)


if __name__ == "__main__":
    unittest.main()
