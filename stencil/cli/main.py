"""Main CLI entry point for stencil."""

import argparse
import sys
from typing import Optional

from stencil import __version__
from .commands import generate_project


EPILOG = """\
template syntax:
  Variables can be written as {{name}}, <<name>>, __name__ or %name% and are
  replaced in file contents, file names and directory names.

config auto-detection (first match in the current directory):
  stencil.json, .stencil.json, stencil.config.json, stencil.yaml, stencil.yml
  Command-line flags override config file values.

examples:
  stencil -t ./template -o ./output -v "project_name=MyApp,author=John"
  stencil -t ./template -o ./output -i
  stencil -c config.json --dry-run
"""


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the stencil CLI."""
    parser = argparse.ArgumentParser(
        prog='stencil',
        description='Project scaffolding generator',
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '-t', '--template',
        type=str,
        metavar='DIR',
        help='Template directory path (default: ./template)'
    )
    parser.add_argument(
        '-o', '--output',
        type=str,
        metavar='DIR',
        help='Output directory path (default: ./output)'
    )
    parser.add_argument(
        '-c', '--config',
        type=str,
        metavar='FILE',
        help='Configuration file path (JSON or YAML)'
    )
    parser.add_argument(
        '-v', '--vars',
        type=str,
        metavar='KEY=VALUE,...',
        help="Variables in format 'key1=value1,key2=value2'"
    )
    parser.add_argument(
        '-i', '--interactive',
        action='store_true',
        help='Prompt for variable values'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Show what would be generated without creating files'
    )
    parser.add_argument(
        '-y', '--yes',
        action='store_true',
        help='Skip confirmation in interactive mode'
    )
    parser.add_argument(
        '--no-braces',
        action='store_true',
        help='Disable {{name}} placeholders'
    )
    parser.add_argument(
        '--no-angle',
        action='store_true',
        help='Disable <<name>> placeholders'
    )
    parser.add_argument(
        '--no-underscores',
        action='store_true',
        help='Disable __name__ placeholders'
    )
    parser.add_argument(
        '--no-percent',
        action='store_true',
        help='Disable %%name%% placeholders'
    )
    parser.add_argument(
        '--save-config',
        type=str,
        metavar='FILE',
        help='Write the effective configuration to FILE and exit'
    )
    parser.add_argument(
        '--version',
        action='store_true',
        help='Show version information'
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
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default='info',
        help='Set log level'
    )

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if parsed_args.version:
        print(f"Stencil {__version__}")
        print("A project scaffolding generator")
        return 0

    return generate_project(parsed_args)


if __name__ == '__main__':
    sys.exit(main())
