"""Build command implementation."""

import logging
from argparse import Namespace
from pathlib import Path

from pagesmith.builder import Builder
from pagesmith.exceptions import ConfigValidationError
from pagesmith.loader import BuildConfig, ConfigLoader


logger = logging.getLogger(__name__)

LOG_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'error': logging.ERROR,
}


def configure_logging(args: Namespace) -> None:
    """Set up logging from --log-level, --debug and --quiet."""
    log_level = LOG_LEVELS[args.log_level]
    if args.debug:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.ERROR

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def load_config(args: Namespace) -> BuildConfig:
    """Load project config with CLI overrides applied."""
    root = Path(args.root)
    if not root.is_dir():
        raise FileNotFoundError(f"Project root not found: {root}")

    overrides = {
        'include_policy': args.include_policy,
        'poll_ms': getattr(args, 'poll_ms', None),
    }
    config_path = Path(args.config) if args.config else None
    return ConfigLoader(root).load(config_path, overrides)


def build_project(args: Namespace) -> int:
    """
    Run one full build.

    Exit codes: 0 success, 2 config validation error, 1 anything else.
    """
    configure_logging(args)

    try:
        config = load_config(args)
        builder = Builder(config)
        report = builder.build_all()

        if report.diagnostics:
            logger.info(f"Build finished with {len(report.diagnostics)} diagnostic(s)")
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
