"""Watch command implementation."""

import logging
from argparse import Namespace
from typing import List

from pagesmith.builder import Builder
from pagesmith.exceptions import ConfigValidationError
from pagesmith.watch import ChangeEvent, ChangeWatcher, WatchConfig

from .build import configure_logging, load_config


logger = logging.getLogger(__name__)


def make_rebuild_handler(builder: Builder):
    """
    Wrap Builder.handle_changes for the watch loop.

    A rebuild that fails for any reason is reported and the watcher keeps
    running, so the author can fix the problem and save again.
    """
    def rebuild(events: List[ChangeEvent]) -> None:
        try:
            builder.handle_changes(events)
        except ConfigValidationError as e:
            for error in e.errors:
                logger.error(f"Validation error: {error.message}")
        except Exception as e:
            logger.error(f"Rebuild failed: {e}", exc_info=True)

    return rebuild


def watch_project(args: Namespace) -> int:
    """
    Run an initial full build, then rebuild whenever watched files change.

    Rebuilds run one at a time; each is a fresh pipeline. Ctrl-C exits 0.
    """
    configure_logging(args)

    try:
        config = load_config(args)
        builder = Builder(config)
        builder.build_all()

        watcher = ChangeWatcher(WatchConfig(paths=config.watch_paths(), poll_ms=config.poll_ms))
        logger.info("watching for changes...")
        watcher.run(make_rebuild_handler(builder))
        return 0

    except KeyboardInterrupt:
        logger.info("Stopped watching")
        return 0
    except ConfigValidationError as e:
        for error in e.errors:
            logger.error(f"Validation error: {error.message}")
        return e.exit_code
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return 1
