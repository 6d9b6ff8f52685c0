"""
Base Command Class

Every dynamic-ports subcommand works against a PortsCLIManager and may
offer machine-readable output through a shared ``--json`` flag.
"""
import json
from abc import ABC, abstractmethod
from argparse import ArgumentParser, Namespace
from typing import Any, Optional

from .cli_manager import PortsCLIManager


class BaseCommand(ABC):
    """Abstract base class for dynamic-ports CLI commands"""

    # Commands that set this get a --json flag added by configure_parser
    supports_json = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Subcommand name"""
        pass

    @property
    @abstractmethod
    def help(self) -> str:
        pass

    @abstractmethod
    def add_arguments(self, parser: ArgumentParser) -> None:
        """Add the command's own arguments to its subparser."""
        pass

    def configure_parser(self, parser: ArgumentParser) -> None:
        """Add the command's arguments plus the flags shared by all commands."""
        self.add_arguments(parser)
        if self.supports_json:
            parser.add_argument(
                "--json",
                action="store_true",
                help="Output as JSON"
            )

    @abstractmethod
    def execute(self, args: Namespace, manager: PortsCLIManager) -> int:
        """
        Run the command.

        Args:
            args: Parsed command line arguments
            manager: Access to configuration loading, probing and assignment

        Returns:
            Process exit code, 0 on success
        """
        pass

    def validate_args(self, args: Namespace) -> Optional[str]:
        """Return an error message for unusable arguments, or None."""
        return None

    def print_json(self, data: Any) -> None:
        print(json.dumps(data, indent=2))
