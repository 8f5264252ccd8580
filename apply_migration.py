#!/usr/bin/env python3
"""
Print the news analysis schema for manual application.
"""

import os
import sys

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
MIGRATION_PATH = os.path.join(PROJECT_ROOT, "database", "migrations", "001_news_analysis.sql")


def apply_migration(migration_path: str = MIGRATION_PATH) -> bool:
    """Print the migration SQL with instructions."""
    if not os.path.exists(migration_path):
        print(f"Migration file not found: {migration_path}")
        return False

    with open(migration_path, 'r', encoding='utf-8') as f:
        migration_sql = f.read()

    print("Database Migration: news_articles and news_comparisons tables")
    print("=" * 60)
    print(migration_sql)
    print("=" * 60)

    print("\n⚠️  MANUAL ACTION REQUIRED:")
    print("Please copy the above SQL and run it in your Supabase SQL Editor:")
    print("1. Go to https://supabase.com/dashboard/project/[your-project]/sql")
    print("2. Paste the SQL above")
    print("3. Click 'Run'")
    print("\nAfter running the migration, check connectivity with:")
    print("python run.py health check")

    return True


if __name__ == "__main__":
    success = apply_migration()
    sys.exit(0 if success else 1)
