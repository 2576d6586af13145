"""Tests for config loading and input sanitization.

Ensures malformed config data is safely normalized on load.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from rfd import config


class ConfigBehaviorTests(unittest.TestCase):
    def _with_config(self, payload: str | None):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        config_path = Path(tmp.name) / "config.json"
        if payload is not None:
            config_path.write_text(payload, encoding="utf-8")
        patcher = mock.patch("rfd.config.CONFIG_PATH", config_path)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_missing_file_yields_defaults(self) -> None:
        self._with_config(None)
        self.assertEqual(config.load_config(), {})
        self.assertIsNone(config.load_theme_name())
        self.assertIsNone(config.load_style_name())
        self.assertIsNone(config.load_trash_dir())

    def test_valid_values_are_loaded(self) -> None:
        self._with_config(json.dumps({"theme": " Ocean ", "style": "default", "trash_dir": "~/trash"}))
        self.assertEqual(config.load_theme_name(), "Ocean")
        self.assertEqual(config.load_style_name(), "default")
        self.assertEqual(config.load_trash_dir(), Path("~/trash"))

    def test_malformed_json_is_ignored(self) -> None:
        self._with_config("{not json")
        self.assertEqual(config.load_config(), {})

    def test_non_object_json_is_ignored(self) -> None:
        self._with_config("[1, 2, 3]")
        self.assertEqual(config.load_config(), {})

    def test_wrongly_typed_values_are_ignored(self) -> None:
        self._with_config(json.dumps({"theme": 3, "style": "", "trash_dir": ["x"]}))
        self.assertIsNone(config.load_theme_name())
        self.assertIsNone(config.load_style_name())
        self.assertIsNone(config.load_trash_dir())


if __name__ == "__main__":
    unittest.main()
