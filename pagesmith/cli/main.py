"""Main CLI entry point for pagesmith."""

import argparse
import sys
from typing import Optional

from .commands import build_project, watch_project


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--root',
        type=str,
        default='.',
        help='Project root directory (default: current directory)'
    )
    parser.add_argument(
        '--config',
        type=str,
        help='Path to project config (default: <root>/pagesmith.yaml)'
    )
    parser.add_argument(
        '--include-policy',
        choices=['raw', 'reindent'],
        help='How included files are spliced at the include line'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress non-error output'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default='info',
        help='Set log level'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the pagesmith CLI."""
    parser = argparse.ArgumentParser(
        prog='pagesmith',
        description='Static template builder for preview and CMS carrier pages'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    build_parser = subparsers.add_parser('build', help='Run one full build')
    _add_common_arguments(build_parser)

    watch_parser = subparsers.add_parser('watch', help='Build, then rebuild on changes')
    _add_common_arguments(watch_parser)
    watch_parser.add_argument(
        '--poll-ms',
        type=int,
        help='Polling interval in milliseconds'
    )

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'build':
        return build_project(parsed_args)
    elif parsed_args.command == 'watch':
        return watch_project(parsed_args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
