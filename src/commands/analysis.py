#!/usr/bin/env python3
"""
Analysis command: run one cycle now or keep running on a schedule.
"""

import json
import logging
from argparse import Namespace

from .base import BaseCommand, EXIT_OK, EXIT_ERROR

logger = logging.getLogger(__name__)


class AnalysisCommand(BaseCommand):
    """Run cross-source news analysis cycles."""

    SUBCOMMANDS = ('run', 'schedule')

    def execute(self, subcommand: str, args: Namespace) -> int:
        try:
            if subcommand == "run":
                return self.run(args)
            elif subcommand == "schedule":
                return self.schedule(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return EXIT_ERROR
        except (Exception, KeyboardInterrupt) as e:
            return self.handle_error(e, f"analysis {subcommand}")

    def run(self, args: Namespace) -> int:
        """Run a single analysis cycle and print its report."""
        dry_run = getattr(args, 'dry_run', False)
        orchestrator = self.orchestrator(dry_run=dry_run)
        try:
            report = orchestrator.run_cycle(getattr(args, 'sources', None))
        finally:
            orchestrator.close()

        if getattr(args, 'json', False):
            print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
        else:
            self._print_report(report, dry_run)

        # A cycle that produced nothing at all is a failure worth signalling
        if report.sources_attempted and len(report.sources_failed) == report.sources_attempted:
            return EXIT_ERROR
        return EXIT_OK

    def schedule(self, args: Namespace) -> int:
        """Run now, then every interval until interrupted."""
        interval = getattr(args, 'interval_hours', None) or self.config.app.cycle_interval_hours
        orchestrator = self.orchestrator(dry_run=getattr(args, 'dry_run', False))
        print(f"⏰ Running analysis every {interval} hours (Ctrl+C to stop)")
        try:
            orchestrator.run_forever(interval_hours=interval, source_names=getattr(args, 'sources', None))
        finally:
            orchestrator.close()
        return EXIT_OK

    def _print_report(self, report, dry_run: bool) -> None:
        title = "🧪 Dry Run Report" if dry_run else "📰 Analysis Run Report"
        print(f"\n{title} ({report.run_id})")
        print("=" * 50)
        print(f"⏱️  Processing time: {report.processing_time:.1f}s")
        print(f"📡 Sources: {report.sources_attempted} attempted, {len(report.sources_failed)} failed")
        if report.sources_failed:
            print(f"   Failed: {', '.join(report.sources_failed)}")
        print(f"📄 Articles: {report.articles_collected} collected, {report.articles_degraded} with fallback analysis")
        print(f"🗂️  Clusters: {report.clusters_formed}")
        print(f"⚖️  Comparisons: {len(report.topics_compared)} "
              f"({len(report.topics_skipped)} single-source, {len(report.topics_abandoned)} abandoned)")
        for topic in report.topics_compared:
            print(f"   • {topic}")
        print(f"💾 Stored: {report.articles_persisted} articles, {report.comparisons_persisted} comparisons")
        if report.persistence_failures:
            print(f"   ⚠️  {len(report.persistence_failures)} storage failures")
