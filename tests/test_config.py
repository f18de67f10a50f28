"""
Unit tests for environment-driven settings.
"""

import os
import unittest
from unittest.mock import patch

from mileage_heatmap.config import DEFAULT_UPSTREAM_URL, load_settings


class TestLoadSettings(unittest.TestCase):
    def setUp(self):
        patcher = patch("mileage_heatmap.config.load_dotenv")
        patcher.start()
        self.addCleanup(patcher.stop)

    def _load(self, **env):
        with patch.dict(os.environ, env, clear=True):
            return load_settings()

    def test_defaults(self):
        s = self._load()
        self.assertEqual(s.env, "dev")
        self.assertTrue(s.listens)
        self.assertEqual(s.port, 3000)
        self.assertEqual(s.source, "webapp")
        self.assertEqual(s.upstream_url, DEFAULT_UPSTREAM_URL)
        self.assertEqual(s.yearly_goal, 1000.0)
        self.assertEqual(s.api_url, "http://localhost:3000/api/data")

    def test_production_does_not_listen(self):
        for key in ("HEATMAP_ENV", "APP_ENV", "NODE_ENV"):
            with self.subTest(key=key):
                s = self._load(**{key: "production"})
                self.assertEqual(s.env, "prod")
                self.assertFalse(s.listens)

    def test_port_feeds_dashboard_url(self):
        s = self._load(PORT="8080")
        self.assertEqual(s.port, 8080)
        self.assertEqual(s.api_url, "http://localhost:8080/api/data")

    def test_overrides(self):
        s = self._load(
            HEATMAP_SOURCE="sheet",
            HEATMAP_YEARLY_GOAL="1500",
            HEATMAP_FETCH_TIMEOUT="2.5",
            GOOGLE_SHEET_URL="https://docs.google.com/spreadsheets/d/abc",
            GOOGLE_WORKSHEET_NAME="Runs",
        )
        self.assertEqual(s.source, "sheet")
        self.assertEqual(s.yearly_goal, 1500.0)
        self.assertEqual(s.fetch_timeout, 2.5)
        self.assertEqual(s.worksheet_name, "Runs")

    def test_invalid_values(self):
        bad = [
            {"HEATMAP_SOURCE": "csv"},
            {"HEATMAP_YEARLY_GOAL": "0"},
            {"HEATMAP_FETCH_TIMEOUT": "-1"},
            {"PORT": "eighty"},
        ]
        for env in bad:
            with self.subTest(env=env):
                with self.assertRaises(ValueError):
                    self._load(**env)


if __name__ == "__main__":
    unittest.main()
