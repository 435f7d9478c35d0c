"""File-change watching module."""

from .poller import ChangeEvent, ChangeWatcher, WatchConfig

__all__ = ['ChangeEvent', 'ChangeWatcher', 'WatchConfig']
