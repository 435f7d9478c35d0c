"""CLI command handlers."""

from .build import build_project
from .watch import watch_project

__all__ = ['build_project', 'watch_project']
