"""
Main entry point for the dynamic-ports CLI
"""

import argparse
import logging
import sys
from typing import List, Optional

from .cli.cli_manager import PortsCLIManager
from .cli.command_registry import CommandRegistry


def build_parser(registry: CommandRegistry) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dynamic-ports",
        description="Assign application and admin ports for a service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Resolve ports for config/service.yml
  dynamic-ports assign service

  # Same, but scan for two adjacent ports and print JSON
  dynamic-ports assign config/service.yml --finder adjacent --json

  # Check whether ports are free
  dynamic-ports probe 8080 8081
        """
    )

    parser.add_argument(
        '--log-level', '-l',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='WARNING',
        help='Logging level (default: WARNING)'
    )

    registry.setup_parser(parser)
    return parser


def main(argv: Optional[List[str]] = None, manager: Optional[PortsCLIManager] = None) -> int:
    """Main CLI entry point"""
    registry = CommandRegistry()
    parser = build_parser(registry)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if not args.command:
        parser.print_help()
        return 1

    return registry.execute_command(args, manager or PortsCLIManager())


if __name__ == '__main__':
    sys.exit(main())
