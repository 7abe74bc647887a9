"""Migration v001: CMS content tables (pages, templates, media assets, sections)."""

from __future__ import annotations

VERSION = 1

DESCRIPTION = "Initial schema: cms_pages, cms_templates, cms_media_assets, cms_page_sections"

# Epoch milliseconds, matching `CmsSearch.storage.sql.to_db_value`.
_NOW = "(CAST((julianday('now') - 2440587.5) * 86400000 AS INTEGER))"

STATEMENTS: tuple[str, ...] = (
    f"""
    CREATE TABLE IF NOT EXISTS cms_pages (
      id TEXT PRIMARY KEY,
      page_key TEXT NOT NULL,
      page_title TEXT NOT NULL,
      slug TEXT NOT NULL,
      page_type TEXT,
      meta_description TEXT,
      meta_keywords TEXT,
      og_image TEXT,
      status TEXT NOT NULL DEFAULT 'draft',
      author_id TEXT,
      template_id TEXT,
      is_public INTEGER NOT NULL DEFAULT 1,
      requires_auth INTEGER NOT NULL DEFAULT 0,
      seo_score INTEGER,
      published_at INTEGER,
      created_at INTEGER NOT NULL DEFAULT {_NOW},
      updated_at INTEGER NOT NULL DEFAULT {_NOW},
      deleted_at INTEGER
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_pages_status ON cms_pages(status)",
    "CREATE INDEX IF NOT EXISTS idx_pages_updated ON cms_pages(updated_at)",
    f"""
    CREATE TABLE IF NOT EXISTS cms_templates (
      id TEXT PRIMARY KEY,
      name TEXT NOT NULL,
      description TEXT,
      category TEXT,
      thumbnail_url TEXT,
      is_active INTEGER NOT NULL DEFAULT 1,
      is_system INTEGER NOT NULL DEFAULT 0,
      sort_order INTEGER NOT NULL DEFAULT 0,
      created_at INTEGER NOT NULL DEFAULT {_NOW},
      updated_at INTEGER NOT NULL DEFAULT {_NOW}
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_templates_category ON cms_templates(category)",
    f"""
    CREATE TABLE IF NOT EXISTS cms_media_assets (
      id TEXT PRIMARY KEY,
      filename TEXT NOT NULL,
      original_name TEXT NOT NULL,
      alt_text TEXT,
      caption TEXT,
      description TEXT,
      asset_type TEXT,
      mime_type TEXT,
      file_size INTEGER,
      file_url TEXT,
      thumbnail_url TEXT,
      folder_id TEXT,
      uploaded_by TEXT,
      tags TEXT NOT NULL DEFAULT '[]',
      usage_count INTEGER NOT NULL DEFAULT 0,
      last_used_at INTEGER,
      created_at INTEGER NOT NULL DEFAULT {_NOW},
      updated_at INTEGER NOT NULL DEFAULT {_NOW},
      deleted_at INTEGER
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_media_asset_type ON cms_media_assets(asset_type)",
    "CREATE INDEX IF NOT EXISTS idx_media_folder ON cms_media_assets(folder_id)",
    f"""
    CREATE TABLE IF NOT EXISTS cms_page_sections (
      id TEXT PRIMARY KEY,
      page_id TEXT,
      section_key TEXT NOT NULL,
      section_type TEXT,
      title TEXT,
      subtitle TEXT,
      is_visible INTEGER NOT NULL DEFAULT 1,
      sort_order INTEGER NOT NULL DEFAULT 0,
      created_at INTEGER NOT NULL DEFAULT {_NOW},
      updated_at INTEGER NOT NULL DEFAULT {_NOW}
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_sections_page ON cms_page_sections(page_id)",
)
