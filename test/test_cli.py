"""End-to-end tests for the CmsSearch CLI."""

from __future__ import annotations

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

from CmsSearch.cli import cli
from CmsSearch.config.storage import DB_PATH_ENV
from CmsSearch.utils.log import log

_CONFIG_TEMPLATE = """
log:
  level: ERROR
  to_file: false
  dir: log

storage:
  db_path: {db_path}

search:
  entity_types: [page, template, media, section]
  default_limit: 20
  suggestions: true
"""

_IMPORT_DATA = {
    "page": [
        {
            "id": "p1",
            "page_key": "hero",
            "page_title": "Hero Landing",
            "slug": "/hero",
            "status": "published",
            "published_at": "2024-01-01T00:00:00Z",
            "updated_at": "2024-01-02T00:00:00Z",
        },
        {
            "id": "p2",
            "page_key": "hero-draft",
            "page_title": "Hero Draft",
            "slug": "/hero-draft",
            "status": "draft",
            "updated_at": "2024-02-01T00:00:00Z",
        },
    ],
    "template": [
        {"id": "t1", "name": "Hero", "description": "Big hero block", "category": "marketing"},
    ],
}


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        tmp = Path(self._tmpdir.name)
        self.config_path = tmp / "config.yml"
        self.config_path.write_text(_CONFIG_TEMPLATE.format(db_path=tmp / "cms.db"), encoding="utf-8")
        self.data_path = tmp / "content.json"
        self.data_path.write_text(json.dumps(_IMPORT_DATA), encoding="utf-8")

        self._env = patch.dict(os.environ)
        self._env.start()
        os.environ.pop(DB_PATH_ENV, None)
        self.runner = CliRunner()

    def tearDown(self) -> None:
        self._env.stop()
        log.handlers.clear()
        self._tmpdir.cleanup()

    def _invoke(self, *args: str):
        return self.runner.invoke(cli, ["--config", str(self.config_path), *args])

    def _import(self) -> None:
        result = self._invoke("import", str(self.data_path))
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.output), {"page": 2, "template": 1})

    def test_import_then_search(self) -> None:
        self._import()
        result = self._invoke("search", "hero")

        self.assertEqual(result.exit_code, 0, result.output)
        payload = json.loads(result.output)
        self.assertEqual([item["id"] for item in payload["results"]], ["t1", "p2", "p1"])
        self.assertEqual(payload["total"], 3)
        self.assertEqual(payload["results"][2]["metadata"]["publishedAt"], "2024-01-01T00:00:00+00:00")
        self.assertNotIn("suggestions", payload)

    def test_search_with_type_and_filter(self) -> None:
        self._import()
        result = self._invoke("search", "hero", "--type", "page", "-f", "status=published", "--format", "text")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("1 result(s), showing 1", result.output)
        self.assertIn("[page] Hero Landing", result.output)
        self.assertNotIn("Hero Draft", result.output)

    def test_search_limit_and_offset(self) -> None:
        self._import()
        result = self._invoke("search", "hero", "--limit", "1", "--offset", "1")

        self.assertEqual(result.exit_code, 0, result.output)
        payload = json.loads(result.output)
        self.assertEqual(len(payload["results"]), 1)
        self.assertEqual(payload["total"], 2)

    def test_suggest(self) -> None:
        self._import()
        result = self._invoke("suggest", "her")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.output), ["Hero Landing", "Hero Draft", "Hero"])

    def test_filters_describes_compiled_query(self) -> None:
        result = self._invoke("filters", "-f", "status=draft,published", "-f", "limit=5", "--kind", "page")

        self.assertEqual(result.exit_code, 0, result.output)
        payload = json.loads(result.output)
        self.assertEqual(payload["summary"], ["Status: draft, published"])
        self.assertEqual(payload["filters"], {"status": ["draft", "published"], "limit": 5})
        self.assertEqual((payload["take"], payload["skip"]), (5, 0))
        self.assertEqual(payload["columns"], ["deleted_at", "status"])
        self.assertIn('"deleted_at" IS NULL', payload["sql"])
        self.assertEqual(payload["params"], ["draft", "published", 5, 0])

    def test_filters_unknown_sort_column_is_usage_error(self) -> None:
        result = self._invoke("filters", "-f", "sortBy=popularity")
        self.assertEqual(result.exit_code, 2)
        self.assertIn("popularity", result.output)

    def test_malformed_filter_option(self) -> None:
        result = self._invoke("search", "hero", "-f", "status")
        self.assertEqual(result.exit_code, 2)
        self.assertIn("key=value", result.output)

    def test_import_failure_aborts(self) -> None:
        self.data_path.write_text(json.dumps({"page": [{"id": "x", "bogus": 1}]}), encoding="utf-8")
        result = self._invoke("import", str(self.data_path))
        self.assertEqual(result.exit_code, 1)


if __name__ == "__main__":
    unittest.main()
