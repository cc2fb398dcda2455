"""Tests for layered config parsing and validation."""

import os
import sys
import unittest
from copy import deepcopy
from pathlib import Path
from unittest.mock import patch

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from MibigSearch.config import parse_config_dict


def _base_raw_config() -> dict:
    return {
        "log": {"level": "INFO", "to_file": False, "dir": "log"},
        "storage": {"db_path": "database/mibig.db", "db_path_env": "MIBIG_DB_PATH"},
        "search": {"parallel": False, "max_workers": 4, "timeout": 30},
        "output": {"base_dir": "output", "formats": ["console"]},
    }


class TestConfigLayering(unittest.TestCase):
    def test_parse_success_nested_access(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.storage.db_path, "database/mibig.db")
        self.assertEqual(cfg.search.max_workers, 4)
        self.assertEqual(cfg.search.timeout, 30.0)
        self.assertEqual(cfg.output.formats, ("console",))

    def test_log_level_is_upper_cased(self) -> None:
        raw = _base_raw_config()
        raw["log"]["level"] = "debug"
        self.assertEqual(parse_config_dict(raw).runtime.level, "DEBUG")

    def test_log_level_unknown_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["log"]["level"] = "chatty"
        with self.assertRaisesRegex(ValueError, "log\\.level"):
            parse_config_dict(raw)

    def test_trace_sql_defaults_off(self) -> None:
        self.assertFalse(parse_config_dict(_base_raw_config()).runtime.trace_sql)

    def test_trace_sql_type_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["log"]["trace_sql"] = "on"
        with self.assertRaisesRegex(TypeError, "log\\.trace_sql"):
            parse_config_dict(raw)

    def test_trace_sql_needs_visible_debug_output(self) -> None:
        raw = _base_raw_config()
        raw["log"]["trace_sql"] = True
        with self.assertRaisesRegex(ValueError, "log\\.trace_sql"):
            parse_config_dict(raw)
        raw["log"]["level"] = "DEBUG"
        self.assertTrue(parse_config_dict(raw).runtime.trace_sql)

    def test_missing_storage_section(self) -> None:
        raw = _base_raw_config()
        del raw["storage"]
        with self.assertRaisesRegex(ValueError, "storage"):
            parse_config_dict(raw)

    def test_db_path_env_overrides_file_value(self) -> None:
        with patch.dict(os.environ, {"MIBIG_DB_PATH": "/data/other.db"}, clear=False):
            cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.storage.db_path, "/data/other.db")
        self.assertEqual(cfg.storage.db_path_env, "MIBIG_DB_PATH")

    def test_search_section_optional(self) -> None:
        raw = _base_raw_config()
        del raw["search"]
        cfg = parse_config_dict(raw)
        self.assertFalse(cfg.search.parallel)
        self.assertEqual(cfg.search.max_workers, 4)
        self.assertIsNone(cfg.search.timeout)

    def test_search_timeout_null_means_no_deadline(self) -> None:
        raw = _base_raw_config()
        raw["search"]["timeout"] = None
        self.assertIsNone(parse_config_dict(raw).search.timeout)

    def test_search_max_workers_type_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["search"]["max_workers"] = "4"
        with self.assertRaisesRegex(TypeError, "search\\.max_workers"):
            parse_config_dict(raw)

    def test_search_max_workers_must_be_positive(self) -> None:
        raw = _base_raw_config()
        raw["search"]["max_workers"] = 0
        with self.assertRaisesRegex(ValueError, "search\\.max_workers"):
            parse_config_dict(raw)

    def test_search_timeout_must_be_positive(self) -> None:
        raw = _base_raw_config()
        raw["search"]["timeout"] = 0
        with self.assertRaisesRegex(ValueError, "search\\.timeout"):
            parse_config_dict(raw)

    def test_search_parallel_rejects_strings(self) -> None:
        raw = _base_raw_config()
        raw["search"]["parallel"] = "yes"
        with self.assertRaisesRegex(TypeError, "search\\.parallel"):
            parse_config_dict(raw)

    def test_output_unknown_format_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["output"]["formats"] = ["console", "unknown"]
        with self.assertRaisesRegex(ValueError, "output\\.formats"):
            parse_config_dict(raw)

    def test_output_formats_normalization(self) -> None:
        raw = deepcopy(_base_raw_config())
        raw["output"]["formats"] = ["JSON", " console ", "json"]
        cfg = parse_config_dict(raw)
        self.assertEqual(cfg.output.formats, ("json", "console"))

    def test_output_formats_empty_after_normalization(self) -> None:
        raw = deepcopy(_base_raw_config())
        raw["output"]["formats"] = ["  "]
        with self.assertRaisesRegex(ValueError, "output\\.formats"):
            parse_config_dict(raw)

    def test_output_base_dir_required_for_json(self) -> None:
        raw = deepcopy(_base_raw_config())
        raw["output"]["formats"] = ["json"]
        raw["output"]["base_dir"] = "  "
        with self.assertRaisesRegex(ValueError, "output\\.base_dir"):
            parse_config_dict(raw)


if __name__ == "__main__":
    unittest.main()
