#!/usr/bin/env python3
"""
CLI Router for the cross-source news analyzer.

Modular command architecture: each top-level command maps to a command class.
"""

import argparse
import logging
import sys
from typing import Optional, List

from commands import get_command, COMMANDS
from core.models.article import Bias
from core.sources.base import SourceCategory

logger = logging.getLogger(__name__)


class CLIRouter:
    """
    CLI router for news analysis commands.

    Command structure:
    - python run.py analysis run --sources "CBC News" "The Globe and Mail" --dry-run
    - python run.py analysis schedule --interval-hours 2
    - python run.py sources list --bias left
    - python run.py health check
    """

    def __init__(self, container=None):
        """
        Args:
            container: Optional DI container handed to every command
        """
        self.container = container
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the main argument parser."""
        parser = argparse.ArgumentParser(
            description="Canadian News Cross-Source Analyzer",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._get_examples_text()
        )

        subparsers = parser.add_subparsers(
            dest='command',
            help='Available commands',
            metavar='{command}'
        )

        self._add_analysis_parser(subparsers)
        self._add_sources_parser(subparsers)
        self._add_health_parser(subparsers)

        return parser

    def _add_analysis_parser(self, subparsers):
        """Add analysis command parser."""
        analysis_parser = subparsers.add_parser(
            'analysis',
            help='Fetch, analyze, compare and store news'
        )

        analysis_subparsers = analysis_parser.add_subparsers(
            dest='subcommand',
            help='Analysis operations',
            metavar='{run,schedule}'
        )

        run_parser = analysis_subparsers.add_parser('run', help='Run one analysis cycle')
        run_parser.add_argument('--sources', nargs='+', default=None, help='Source names to include (default: all)')
        run_parser.add_argument('--dry-run', action='store_true', help='Keep results in memory, store nothing')
        run_parser.add_argument('--json', action='store_true', help='Print the run report as JSON')

        schedule_parser = analysis_subparsers.add_parser('schedule', help='Run now, then on a fixed interval')
        schedule_parser.add_argument('--interval-hours', type=float, default=None,
                                     help='Hours between cycles (default: CYCLE_INTERVAL_HOURS or 2)')
        schedule_parser.add_argument('--sources', nargs='+', default=None, help='Source names to include (default: all)')
        schedule_parser.add_argument('--dry-run', action='store_true', help='Keep results in memory, store nothing')

    def _add_sources_parser(self, subparsers):
        """Add sources command parser."""
        sources_parser = subparsers.add_parser(
            'sources',
            help='News source catalog'
        )

        sources_subparsers = sources_parser.add_subparsers(
            dest='subcommand',
            help='Source operations',
            metavar='{list,check}'
        )

        list_parser = sources_subparsers.add_parser('list', help='List catalog sources')
        list_parser.add_argument('--bias', choices=[b.value for b in Bias], help='Only sources with this leaning')
        list_parser.add_argument('--category', choices=[c.value for c in SourceCategory],
                                 help='Only sources of this kind')

        check_parser = sources_subparsers.add_parser('check', help='Check feed availability')
        check_parser.add_argument('--sources', nargs='+', default=None, help='Source names to check (default: all)')
        check_parser.add_argument('--timeout', type=int, default=10, help='Seconds per feed (default: 10)')

    def _add_health_parser(self, subparsers):
        """Add health command parser."""
        health_parser = subparsers.add_parser(
            'health',
            help='System health monitoring and diagnostics'
        )

        health_subparsers = health_parser.add_subparsers(
            dest='subcommand',
            help='Health operations',
            metavar='{check}'
        )

        health_subparsers.add_parser('check', help='Check configuration, intelligence service and store')

    def _get_examples_text(self) -> str:
        """Get examples text for help."""
        return """
Examples:
  # One cycle over every source
  python run.py analysis run

  # Try two sources without touching the database
  python run.py analysis run --sources "CBC News" "National Post" --dry-run

  # Recurring schedule
  python run.py analysis schedule --interval-hours 2

  # Other commands
  python run.py sources list --bias right
  python run.py sources check --sources "CBC News"
  python run.py health check

"""

    def route_command(self, args: Optional[List[str]] = None) -> int:
        """
        Route command to appropriate handler.

        Returns:
            Exit code
        """
        try:
            if args is None:
                args = sys.argv[1:]

            parsed_args = self.parser.parse_args(args)

            if not parsed_args.command:
                self.parser.print_help()
                return 1

            return self._handle_command(parsed_args)

        except SystemExit as e:
            # argparse calls sys.exit() on error or help
            return e.code if e.code is not None else 0

    def _handle_command(self, args: argparse.Namespace) -> int:
        logger.debug(f"Handling command: {args.command}")

        if args.command not in COMMANDS:
            available = ', '.join(COMMANDS.keys())
            logger.error(f"Unknown command '{args.command}'. Available: {available}")
            return 1

        subcommand = getattr(args, 'subcommand', None)
        if not subcommand:
            logger.error(f"No subcommand specified for '{args.command}'")
            self.parser.parse_args([args.command, '--help'])
            return 1

        command = get_command(args.command, self.container)
        return command.execute(subcommand, args)


def main(args: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code
    """
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    router = CLIRouter()
    return router.route_command(args)


if __name__ == '__main__':
    sys.exit(main())
