"""
Command Registry

Central registry for all CLI commands.
"""
from argparse import ArgumentParser
from typing import Dict, Optional

from .assign_command import AssignCommand
from .base_command import BaseCommand
from .probe_command import ProbeCommand


class CommandRegistry:
    """Registry for all available commands"""

    def __init__(self):
        self.commands: Dict[str, BaseCommand] = {}
        self._register_commands()

    def _register_commands(self) -> None:
        """Register all available commands"""
        command_classes = [
            AssignCommand,
            ProbeCommand,
        ]

        for cmd_class in command_classes:
            cmd = cmd_class()
            self.commands[cmd.name] = cmd

    def setup_parser(self, parser: ArgumentParser) -> None:
        """Set up argument parser with all commands"""
        subparsers = parser.add_subparsers(
            dest="command",
            help="Available commands"
        )

        for cmd in self.commands.values():
            subparser = subparsers.add_parser(
                cmd.name,
                help=cmd.help
            )
            cmd.configure_parser(subparser)

    def execute_command(self, args, manager) -> int:
        """Execute the specified command"""
        cmd = self.commands.get(args.command)
        if cmd is None:
            return 1

        error = cmd.validate_args(args)
        if error:
            print(f"Error: {error}")
            return 1

        return cmd.execute(args, manager)

    def get_command(self, name: str) -> Optional[BaseCommand]:
        """Get a command by name"""
        return self.commands.get(name)
