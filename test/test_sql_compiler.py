"""Tests for compiling predicate trees into SQLite SQL."""

from __future__ import annotations

import sys
import unittest
from datetime import datetime, timezone
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from CmsSearch.core.filters import FilterSpec
from CmsSearch.core.models import EntityKind
from CmsSearch.core.predicate import (
    AllOf,
    AnyOf,
    Contains,
    Equals,
    HasSome,
    IsNull,
    Never,
    OneOf,
    OrderBy,
    Range,
)
from CmsSearch.query.builder import build_page_filters, build_template_filters
from CmsSearch.storage.sql import (
    compile_order_by,
    compile_plan,
    compile_predicate,
    escape_like,
    fold,
    from_db_timestamp,
    to_db_value,
)


class TestCompilePredicate(unittest.TestCase):
    def test_leaf_predicates(self) -> None:
        page = EntityKind.PAGE
        self.assertEqual(compile_predicate(page, Equals("status", "draft")), ('"status" = ?', ["draft"]))
        self.assertEqual(compile_predicate(page, Equals("is_public", True)), ('"is_public" = ?', [1]))
        self.assertEqual(compile_predicate(page, Equals("author_id", None)), ('"author_id" IS NULL', []))
        self.assertEqual(
            compile_predicate(page, OneOf("status", ("draft", "published"))),
            ('"status" IN (?, ?)', ["draft", "published"]),
        )
        self.assertEqual(compile_predicate(page, IsNull("deleted_at")), ('"deleted_at" IS NULL', []))
        self.assertEqual(compile_predicate(page, Never("published_at")), ("0 = 1", []))

    def test_contains_is_case_insensitive_and_escaped(self) -> None:
        sql, params = compile_predicate(EntityKind.PAGE, Contains("slug", "100%_Off"))
        self.assertEqual(sql, "fold(\"slug\") LIKE ? ESCAPE '\\'")
        self.assertEqual(params, ["%100\\%\\_off%"])

    def test_range_bounds(self) -> None:
        when = datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.assertEqual(
            compile_predicate(EntityKind.PAGE, Range("created_at", gte=when)),
            ('("created_at" >= ?)', [1704067200000]),
        )
        self.assertEqual(
            compile_predicate(EntityKind.PAGE, Range("seo_score", gte=0, lte=100)),
            ('("seo_score" >= ? AND "seo_score" <= ?)', [0, 100]),
        )
        self.assertEqual(compile_predicate(EntityKind.PAGE, Range("seo_score")), ("1 = 1", []))

    def test_has_some_uses_json_each(self) -> None:
        sql, params = compile_predicate(EntityKind.MEDIA, HasSome("tags", ("hero", "banner")))
        self.assertIn('json_each("tags")', sql)
        self.assertEqual(params, ["hero", "banner"])

    def test_empty_combinators(self) -> None:
        self.assertEqual(compile_predicate(EntityKind.SECTION, AnyOf(())), ("0 = 1", []))
        self.assertEqual(compile_predicate(EntityKind.SECTION, AllOf(())), ("1 = 1", []))
        self.assertEqual(compile_predicate(EntityKind.PAGE, OneOf("status", ())), ("0 = 1", []))

    def test_nested_combinators_keep_parameter_order(self) -> None:
        tree = AllOf((IsNull("deleted_at"), AnyOf((Equals("status", "a"), Equals("status", "b")))))
        sql, params = compile_predicate(EntityKind.PAGE, tree)
        self.assertEqual(sql, '("deleted_at" IS NULL AND ("status" = ? OR "status" = ?))')
        self.assertEqual(params, ["a", "b"])

    def test_unknown_column_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "cms_templates"):
            compile_predicate(EntityKind.TEMPLATE, Equals("page_title", "x"))
        with self.assertRaisesRegex(ValueError, "section_type"):
            compile_order_by(EntityKind.TEMPLATE, (OrderBy("section_type", "desc"),))


class TestCompilePlan(unittest.TestCase):
    def test_order_and_pagination(self) -> None:
        plan = build_page_filters(FilterSpec(status="draft", page=3, limit=5))
        sql, params = compile_plan(plan)

        self.assertTrue(sql.startswith('SELECT "id", "page_key"'))
        self.assertIn("FROM cms_pages WHERE", sql)
        self.assertIn('ORDER BY "updated_at" DESC, "created_at" DESC, rowid ASC', sql)
        self.assertTrue(sql.endswith("LIMIT ? OFFSET ?"))
        self.assertEqual(params, ["draft", 5, 10])

    def test_template_plan_with_sort(self) -> None:
        plan = build_template_filters(FilterSpec(sort_by="title", sort_order="asc"))
        sql, params = compile_plan(plan)

        self.assertIn("WHERE 1 = 1", sql)
        self.assertIn('ORDER BY "name" ASC, rowid ASC', sql)
        self.assertEqual(params, [20, 0])


class TestHelpers(unittest.TestCase):
    def test_escape_like(self) -> None:
        self.assertEqual(escape_like("a\\b%c_d"), "a\\\\b\\%c\\_d")

    def test_to_db_value(self) -> None:
        self.assertEqual(to_db_value(False), 0)
        self.assertEqual(to_db_value(datetime(1970, 1, 2)), 86_400_000)
        self.assertEqual(to_db_value(datetime(1970, 1, 1, 0, 0, 0, 500_000, tzinfo=timezone.utc)), 500)
        self.assertEqual(to_db_value(datetime(1969, 12, 31, 23, 59, 59, tzinfo=timezone.utc)), -1000)

    def test_timestamp_round_trip_keeps_milliseconds(self) -> None:
        when = datetime(2024, 1, 1, 0, 0, 0, 250_000, tzinfo=timezone.utc)
        self.assertEqual(from_db_timestamp(to_db_value(when)), when)

    def test_fold_lowers_non_ascii_and_passes_null(self) -> None:
        self.assertEqual(fold("Über Café"), "über café")
        self.assertIsNone(fold(None))
        self.assertEqual(to_db_value("x"), "x")


if __name__ == "__main__":
    unittest.main()
