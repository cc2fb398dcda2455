"""Tests for the click command line surface."""

import json
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from seed_catalogue import new_database, seed_reference_catalogue

from MibigSearch.cli import cli


class TestCliCommands(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        tmp_path = Path(self._tmp.name)

        db = new_database()
        self._db_path = db.db_path
        seed_reference_catalogue(db.get_connection())
        db.close()

        self._config_path = tmp_path / "config.yml"
        self._config_path.write_text(
            "log:\n"
            "  level: WARNING\n"
            "  to_file: false\n"
            f"storage:\n  db_path: {json.dumps(str(self._db_path))}\n"
            "output:\n"
            f"  base_dir: {json.dumps(str(tmp_path / 'output'))}\n"
            "  formats: [json]\n",
            encoding="utf-8",
        )
        self._output_dir = tmp_path / "output" / "json"

        self._cwd = os.getcwd()
        os.chdir(REPO_ROOT)
        self._env = patch.dict(os.environ, {}, clear=False)
        self._env.start()
        os.environ.pop("MIBIG_DB_PATH", None)

    def tearDown(self) -> None:
        self._env.stop()
        os.chdir(self._cwd)
        self._tmp.cleanup()

    def _invoke(self, *args: str):
        return CliRunner().invoke(cli, ["--config", str(self._config_path), *args])

    def test_convert_resolves_unknown_categories(self) -> None:
        query = {"term_type": "expr", "term": "kirromycin"}
        result = self._invoke("convert", "--query", json.dumps(query))
        self.assertEqual(result.exit_code, 0, result.output)
        payload = json.loads(result.stdout)
        self.assertEqual(payload, {"terms": {"term_type": "expr", "category": "compound", "term": "kirromycin"}})

    def test_available_minimal(self) -> None:
        result = self._invoke("available", "minimal")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.stdout), [{"val": "true", "desc": "Minimal MIBiG entry"}])

    def test_available_unknown_category_is_usage_error(self) -> None:
        result = self._invoke("available", "colour", "r")
        self.assertEqual(result.exit_code, 2)

    def test_search_writes_json_result(self) -> None:
        query = {
            "term_type": "op",
            "operation": "EXCEPT",
            "left": {"term_type": "expr", "category": "genus", "term": "Streptomyces"},
            "right": {"term_type": "expr", "category": "species", "term": "coelicolor"},
        }
        result = self._invoke("search", "--query", json.dumps(query))
        self.assertEqual(result.exit_code, 0, result.output)

        files = list(self._output_dir.glob("search_*.json"))
        self.assertEqual(len(files), 1)
        saved = json.loads(files[0].read_text(encoding="utf-8"))
        self.assertEqual([entry["accession"] for entry in saved[0]["clusters"]], ["BGC0000002"])

    def test_search_unresolvable_term_is_usage_error(self) -> None:
        result = self._invoke("search", "--query", json.dumps({"term_type": "expr", "term": "zzzznotfound"}))
        self.assertEqual(result.exit_code, 2)

    def test_query_source_required(self) -> None:
        result = self._invoke("search")
        self.assertEqual(result.exit_code, 2)
        self.assertIn("--query", result.output)

    def test_malformed_query(self) -> None:
        result = self._invoke("convert", "--query", json.dumps({"term_type": "nope"}))
        self.assertEqual(result.exit_code, 2)
        self.assertIn("Invalid query", result.output)


if __name__ == "__main__":
    unittest.main()
