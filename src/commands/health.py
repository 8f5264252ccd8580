#!/usr/bin/env python3
"""
Health check command for monitoring system status.

Checks configuration, the intelligence backend and the store.
"""

import logging
from argparse import Namespace

from .base import BaseCommand, EXIT_OK, EXIT_ERROR
from core.exceptions import ConfigurationError, NewsAnalysisError

logger = logging.getLogger(__name__)


class HealthCommand(BaseCommand):
    """Handle system health monitoring and diagnostics."""

    SUBCOMMANDS = ('check',)

    def execute(self, subcommand: str, args: Namespace) -> int:
        try:
            if subcommand == "check":
                return self.check(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return EXIT_ERROR
        except (Exception, KeyboardInterrupt) as e:
            return self.handle_error(e, f"health {subcommand}")

    def check(self, args: Namespace) -> int:
        """Run comprehensive health check."""
        print("🏥 System Health Check")
        print("=" * 50)

        print("\n⚙️  Configuration:")
        try:
            config = self.config
        except ConfigurationError as e:
            print("  ❌ Configuration invalid:")
            for problem in e.problems:
                print(f"     - {problem}")
            return EXIT_ERROR
        print(f"  ✅ Intelligence backend: {config.intelligence.backend}")
        print(f"  ✅ Storage backend: {config.storage.backend}")
        print(f"  ℹ️  Sources in catalog: {len(self.source_registry)}")

        overall_healthy = True

        print("\n🧠 Intelligence Service:")
        try:
            status = self.intelligence.health_check()
            if status.get('available'):
                print(f"  ✅ {status['backend']}: OK")
            else:
                print(f"  ❌ {status['backend']}: unavailable")
                overall_healthy = False
        except NewsAnalysisError as e:
            print(f"  ❌ Intelligence check failed: {e.message}")
            overall_healthy = False

        print("\n📊 Store:")
        try:
            status = self.persistence.health_check()
            if status.get('status') == 'healthy':
                print(f"  ✅ {status['backend']}: OK")
            else:
                print(f"  ❌ {status['backend']}: {status.get('error', 'Unknown error')}")
                overall_healthy = False
        except NewsAnalysisError as e:
            print(f"  ❌ Store check failed: {e.message}")
            overall_healthy = False

        print("\n" + ("✅ All systems healthy" if overall_healthy else "⚠️  Some checks failed"))
        return EXIT_OK if overall_healthy else EXIT_ERROR
