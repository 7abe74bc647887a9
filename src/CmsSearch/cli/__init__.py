"""CLI package for CmsSearch command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from CmsSearch.cli.runner import CommandRunner
from CmsSearch.cli.ui import cli


def main() -> None:
    """Run CmsSearch CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
