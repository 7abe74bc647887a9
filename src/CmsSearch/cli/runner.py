"""Command runner for coordinating CLI execution.

Manages component lifecycle, resource cleanup, logging configuration,
and error handling for command execution.
"""

from __future__ import annotations

from typing import Callable

import click

from CmsSearch.config import AppConfig
from CmsSearch.services import create_search_service
from CmsSearch.services.search import ContentSearchService
from CmsSearch.storage import create_storage
from CmsSearch.storage.repository import SqliteContentRepository
from CmsSearch.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with proper resource management."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def run(
        self,
        action: str,
        command: Callable[[ContentSearchService, SqliteContentRepository], str],
    ) -> str:
        """Execute a command with logging, storage and cleanup in place.

        Args:
            action: The CLI command name (e.g., 'search').
            command: Callable receiving the search service and repository and
                returning the text to print.

        Returns:
            Command output.

        Raises:
            click.Abort: When the command fails.
        """
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        try:
            db_manager, repository = create_storage(self.config)
            with db_manager:
                search_service = create_search_service(self.config, repository)
                return command(search_service, repository)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("%s failed: %s", action.capitalize(), e)
            raise click.Abort from e
