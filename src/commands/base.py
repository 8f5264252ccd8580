#!/usr/bin/env python3
"""
Base command class for the modular command architecture.

Provides common functionality and interface that all commands inherit.
Uses dependency injection for better testability and maintainability.
"""

import logging
from abc import ABC, abstractmethod
from typing import List
from argparse import Namespace

from core.container import get_container
from core.exceptions import ConfigurationError, NewsAnalysisError

logger = logging.getLogger(__name__)

# Exit codes
EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_CONFIG = 78
EXIT_INTERRUPTED = 130


class BaseCommand(ABC):
    """
    Base class for all command endpoints.

    Services are resolved lazily from the dependency injection container so
    commands that do not need a service never build it.
    """

    def __init__(self, container=None):
        """
        Args:
            container: Optional container instance. If None, uses global container.
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self._container = container or get_container()

    @property
    def config(self):
        """Get configuration from container."""
        return self._container.get('config')

    @property
    def source_registry(self):
        return self._container.get('source_registry')

    @property
    def intelligence(self):
        return self._container.get('intelligence_service')

    @property
    def persistence(self):
        return self._container.get('persistence')

    def orchestrator(self, dry_run: bool = False):
        """Orchestrator for a run; a dry run keeps everything in memory."""
        if dry_run:
            return self._container.get('dry_run_orchestrator')
        return self._container.get('orchestrator')

    @abstractmethod
    def execute(self, subcommand: str, args: Namespace) -> int:
        """
        Execute the command with given subcommand and arguments.

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        pass

    def get_available_subcommands(self) -> List[str]:
        """Subcommand names this command answers to."""
        return list(getattr(self, 'SUBCOMMANDS', ()))

    def handle_error(self, error: BaseException, context: str = "") -> int:
        """
        Standard error handling for commands.

        Returns:
            Appropriate exit code
        """
        error_msg = f"{context}: {error}" if context else str(error)

        if isinstance(error, KeyboardInterrupt):
            self.logger.info("Command interrupted by user")
            return EXIT_INTERRUPTED
        if isinstance(error, ConfigurationError):
            self.logger.error(f"{context}: refusing to run with invalid configuration")
            for problem in error.problems:
                self.logger.error(f"  {problem}")
            return EXIT_CONFIG
        if isinstance(error, KeyError):
            self.logger.error(error_msg)
            return EXIT_USAGE
        if isinstance(error, NewsAnalysisError):
            self.logger.error(f"{context}: {error.message} {error.context}")
            return EXIT_ERROR

        self.logger.error(error_msg, exc_info=True)
        return EXIT_ERROR
