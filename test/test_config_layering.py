"""Tests for layered config parsing and validation."""

import os
import sys
import unittest
from copy import deepcopy
from pathlib import Path
from unittest.mock import patch

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from CmsSearch.config import parse_config_dict
from CmsSearch.config.storage import DB_PATH_ENV
from CmsSearch.core.models import ALL_KINDS, EntityKind


def _base_raw_config() -> dict:
    return {
        "log": {"level": "INFO", "to_file": False, "dir": "log"},
        "storage": {"db_path": "database/cms.db"},
        "search": {
            "entity_types": ["page", "template", "media", "section"],
            "default_limit": 20,
            "suggestions": True,
        },
    }


class TestConfigLayering(unittest.TestCase):
    def test_parse_success_nested_access(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.storage.db_path, "database/cms.db")
        self.assertEqual(cfg.search.entity_types, ALL_KINDS)
        self.assertEqual(cfg.search.default_limit, 20)
        self.assertTrue(cfg.search.suggestions)

    def test_log_level_is_normalized(self) -> None:
        raw = _base_raw_config()
        raw["log"]["level"] = "debug"
        self.assertEqual(parse_config_dict(raw).runtime.level, "DEBUG")

    def test_unknown_log_level_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["log"]["level"] = "LOUD"
        with self.assertRaisesRegex(ValueError, "log\\.level"):
            parse_config_dict(raw)

    def test_missing_section_error(self) -> None:
        raw = _base_raw_config()
        del raw["storage"]
        with self.assertRaisesRegex(ValueError, "storage"):
            parse_config_dict(raw)

    def test_section_type_error(self) -> None:
        raw = _base_raw_config()
        raw["search"] = ["page"]
        with self.assertRaisesRegex(TypeError, "search"):
            parse_config_dict(raw)

    def test_default_limit_type_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["search"]["default_limit"] = "20"
        with self.assertRaisesRegex(TypeError, "search\\.default_limit"):
            parse_config_dict(raw)

    def test_default_limit_range_error(self) -> None:
        raw = _base_raw_config()
        raw["search"]["default_limit"] = 101
        with self.assertRaisesRegex(ValueError, "search\\.default_limit"):
            parse_config_dict(raw)

    def test_suggestions_must_be_boolean(self) -> None:
        raw = _base_raw_config()
        raw["search"]["suggestions"] = "yes"
        with self.assertRaisesRegex(TypeError, "search\\.suggestions"):
            parse_config_dict(raw)

    def test_entity_types_normalization(self) -> None:
        raw = deepcopy(_base_raw_config())
        raw["search"]["entity_types"] = ["Media", "page", "media", " "]
        cfg = parse_config_dict(raw)
        self.assertEqual(cfg.search.entity_types, (EntityKind.PAGE, EntityKind.MEDIA))

    def test_entity_types_default_to_all_kinds(self) -> None:
        raw = deepcopy(_base_raw_config())
        del raw["search"]["entity_types"]
        self.assertEqual(parse_config_dict(raw).search.entity_types, ALL_KINDS)

    def test_entity_types_unknown_value(self) -> None:
        raw = deepcopy(_base_raw_config())
        raw["search"]["entity_types"] = ["page", "blog"]
        with self.assertRaisesRegex(ValueError, "search\\.entity_types\\[1\\]"):
            parse_config_dict(raw)

    def test_entity_types_empty_after_normalization(self) -> None:
        raw = deepcopy(_base_raw_config())
        raw["search"]["entity_types"] = ["  "]
        with self.assertRaisesRegex(ValueError, "search\\.entity_types"):
            parse_config_dict(raw)

    def test_db_path_env_override(self) -> None:
        with patch.dict(os.environ, {DB_PATH_ENV: "/tmp/other.db"}, clear=False):
            cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.storage.db_path, "/tmp/other.db")

    def test_empty_db_path_rejected(self) -> None:
        raw = _base_raw_config()
        raw["storage"]["db_path"] = "  "
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaisesRegex(ValueError, "storage\\.db_path"):
                parse_config_dict(raw)


if __name__ == "__main__":
    unittest.main()
