#!/usr/bin/env python3
"""
Sources command: inspect the news source catalog.
"""

import logging
from argparse import Namespace

from .base import BaseCommand, EXIT_OK, EXIT_ERROR
from core.models.article import Bias
from core.sources.base import SourceCategory

logger = logging.getLogger(__name__)


class SourcesCommand(BaseCommand):
    """List and check the configured news sources."""

    SUBCOMMANDS = ('list', 'check')

    def execute(self, subcommand: str, args: Namespace) -> int:
        try:
            if subcommand == "list":
                return self.list(args)
            elif subcommand == "check":
                return self.check(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return EXIT_ERROR
        except (Exception, KeyboardInterrupt) as e:
            return self.handle_error(e, f"sources {subcommand}")

    def list(self, args: Namespace) -> int:
        """Print the catalog, optionally filtered by leaning and category."""
        bias = Bias(args.bias) if getattr(args, 'bias', None) else None
        category = SourceCategory(args.category) if getattr(args, 'category', None) else None
        profiles = self.source_registry.filter(bias=bias, category=category)

        print(f"📚 {len(profiles)} sources")
        print("=" * 70)
        for profile in profiles:
            print(f"{profile.name:<40} {profile.bias.value:<7} {profile.credibility:>3}  {profile.category.value}")

        breakdown = self.source_registry.bias_breakdown()
        print("\nCatalog leaning: " + ", ".join(f"{name} {count}" for name, count in breakdown.items()))
        return EXIT_OK

    def check(self, args: Namespace) -> int:
        """HEAD-request each selected feed and report availability."""
        profiles = self.source_registry.select(getattr(args, 'sources', None))
        timeout = getattr(args, 'timeout', None) or 10

        unavailable = 0
        for profile in profiles:
            status = profile.health_check(timeout=timeout)
            if status['available']:
                print(f"  ✅ {profile.name}: HTTP {status['status_code']} "
                      f"({status['response_time_ms']:.0f} ms)")
            else:
                unavailable += 1
                detail = status.get('error') or f"HTTP {status.get('status_code')}"
                print(f"  ❌ {profile.name}: {detail}")

        print(f"\n{len(profiles) - unavailable}/{len(profiles)} feeds reachable")
        return EXIT_OK if unavailable == 0 else EXIT_ERROR
