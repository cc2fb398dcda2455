"""Tests for config override behavior with defaults."""

import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from MibigSearch.config import DEFAULT_CONFIG_PATH, load_config_with_defaults, merge_config_dicts

_BASE_YAML = """
log:
  level: INFO
  to_file: false
  dir: log

storage:
  db_path: database/mibig.db
  db_path_env: MIBIG_DB_PATH

search:
  parallel: false
  max_workers: 4
  timeout: 30

output:
  base_dir: output
  formats: [console]
"""


class TestConfigOverride(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self._defaults = Path(self._tmp.name) / "default.yml"
        self._defaults.write_text(_BASE_YAML, encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _override(self, text: str) -> Path:
        path = Path(self._tmp.name) / "override.yml"
        path.write_text(text, encoding="utf-8")
        return path

    def test_override_merges_with_defaults(self) -> None:
        override_path = self._override(
            """
log:
  level: DEBUG

search:
  parallel: true
"""
        )
        with patch.dict(os.environ, {}, clear=True):
            cfg = load_config_with_defaults(override_path, default_path=self._defaults)

        self.assertEqual(cfg.runtime.level, "DEBUG")
        self.assertFalse(cfg.runtime.to_file)
        self.assertTrue(cfg.search.parallel)
        self.assertEqual(cfg.search.max_workers, 4)
        self.assertEqual(cfg.storage.db_path, "database/mibig.db")
        self.assertEqual(cfg.output.formats, ("console",))

    def test_empty_override_uses_defaults(self) -> None:
        override_path = self._override("{}")
        with patch.dict(os.environ, {}, clear=True):
            cfg = load_config_with_defaults(override_path, default_path=self._defaults)

        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.search.timeout, 30.0)

    def test_lists_are_replaced_not_merged(self) -> None:
        override_path = self._override("output:\n  formats: [json]\n")
        cfg = load_config_with_defaults(override_path, default_path=self._defaults)
        self.assertEqual(cfg.output.formats, ("json",))

    def test_non_mapping_root_rejected(self) -> None:
        override_path = self._override("- just\n- a list\n")
        with self.assertRaisesRegex(ValueError, "mapping"):
            load_config_with_defaults(override_path, default_path=self._defaults)

    def test_merge_config_dicts_is_deep(self) -> None:
        merged = merge_config_dicts({"a": {"b": 1, "c": 2}, "d": 3}, {"a": {"c": 4}})
        self.assertEqual(merged, {"a": {"b": 1, "c": 4}, "d": 3})

    def test_shipped_default_config_parses(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            cfg = load_config_with_defaults(
                REPO_ROOT / DEFAULT_CONFIG_PATH, default_path=REPO_ROOT / DEFAULT_CONFIG_PATH
            )
        self.assertEqual(cfg.storage.db_path_env, "MIBIG_DB_PATH")
        self.assertEqual(cfg.output.formats, ("console",))


if __name__ == "__main__":
    unittest.main()
