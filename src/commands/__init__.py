#!/usr/bin/env python3
"""
Command endpoints for the news analysis CLI.

Each top-level command is handled by a dedicated command class.
"""

from typing import Dict, Type
from .base import BaseCommand
from .analysis import AnalysisCommand
from .sources import SourcesCommand
from .health import HealthCommand

# Command registry for easy extension
COMMANDS: Dict[str, Type[BaseCommand]] = {
    'analysis': AnalysisCommand,
    'sources': SourcesCommand,
    'health': HealthCommand,
}


def get_command(command_name: str, container=None) -> BaseCommand:
    """Get a command instance by name."""
    if command_name not in COMMANDS:
        available = ', '.join(COMMANDS.keys())
        raise ValueError(f"Unknown command '{command_name}'. Available: {available}")

    return COMMANDS[command_name](container)
