"""Tests for config override behavior with defaults."""

import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from CmsSearch.config import load_config, load_config_with_defaults, merge_config_dicts
from CmsSearch.core.models import ALL_KINDS, EntityKind


_BASE_YAML = """
log:
  level: INFO
  to_file: false
  dir: log

storage:
  db_path: database/cms.db

search:
  entity_types: [page, template, media, section]
  default_limit: 20
  suggestions: true
"""


class TestConfigOverride(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self._env = patch.dict(os.environ, {}, clear=True)
        self._env.start()
        self.default_path = Path(self._tmpdir.name) / "default.yml"
        self.default_path.write_text(_BASE_YAML, encoding="utf-8")

    def tearDown(self) -> None:
        self._env.stop()
        self._tmpdir.cleanup()

    def _override(self, text: str) -> Path:
        path = Path(self._tmpdir.name) / "override.yml"
        path.write_text(text, encoding="utf-8")
        return path

    def test_override_merges_with_defaults(self) -> None:
        override_path = self._override(
            """
log:
  level: DEBUG

search:
  entity_types: [media]
  default_limit: 50
"""
        )
        cfg = load_config_with_defaults(override_path, default_path=self.default_path)

        self.assertEqual(cfg.runtime.level, "DEBUG")
        self.assertFalse(cfg.runtime.to_file)
        self.assertEqual(cfg.search.entity_types, (EntityKind.MEDIA,))
        self.assertEqual(cfg.search.default_limit, 50)
        self.assertTrue(cfg.search.suggestions)
        self.assertEqual(cfg.storage.db_path, "database/cms.db")

    def test_empty_override_uses_defaults(self) -> None:
        cfg = load_config_with_defaults(self._override("{}"), default_path=self.default_path)

        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.search.entity_types, ALL_KINDS)
        self.assertEqual(cfg.search.default_limit, 20)

    def test_load_config_without_merge(self) -> None:
        cfg = load_config(self.default_path)
        self.assertEqual(cfg.storage.db_path, "database/cms.db")

    def test_non_mapping_root_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "mapping"):
            load_config_with_defaults(self._override("- a\n- b\n"), default_path=self.default_path)

    def test_invalid_yaml_names_file(self) -> None:
        bad = self._override("search: [unclosed\n")
        with self.assertRaisesRegex(ValueError, "Invalid YAML in .*override\\.yml"):
            load_config_with_defaults(bad, default_path=self.default_path)

    def test_repository_default_config_parses(self) -> None:
        cfg = load_config(REPO_ROOT / "config" / "default.yml")
        self.assertEqual(cfg.search.default_limit, 20)
        self.assertEqual(cfg.search.entity_types, ALL_KINDS)

    def test_merge_replaces_lists(self) -> None:
        merged = merge_config_dicts(
            {"search": {"entity_types": ["page", "media"], "default_limit": 20}},
            {"search": {"entity_types": ["section"]}},
        )
        self.assertEqual(merged, {"search": {"entity_types": ["section"], "default_limit": 20}})


if __name__ == "__main__":
    unittest.main()
