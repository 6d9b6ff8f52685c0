"""
Assign Command

Resolves the application and admin ports for a service configuration file.
"""
from argparse import ArgumentParser, Namespace
from typing import Optional

from ..errors import PortAllocationError
from ..services.free_port_finders import FreePortFinderRegistry
from .base_command import BaseCommand
from .cli_manager import PortsCLIManager


class AssignCommand(BaseCommand):
    """Command to assign ports from a configuration file"""

    supports_json = True

    @property
    def name(self) -> str:
        return "assign"

    @property
    def help(self) -> str:
        return "Assign application and admin ports for a service configuration"

    def add_arguments(self, parser: ArgumentParser) -> None:
        parser.add_argument(
            "config",
            help="Path or name of the service configuration file"
        )
        parser.add_argument(
            "--finder",
            choices=FreePortFinderRegistry().names(),
            help="Override the configured free port finder"
        )
        parser.add_argument(
            "--static",
            action="store_true",
            help="Keep the configured ports instead of assigning dynamic ones"
        )

    def validate_args(self, args: Namespace) -> Optional[str]:
        if args.static and args.finder:
            return "--finder has no effect together with --static"
        return None

    def execute(self, args: Namespace, manager: PortsCLIManager) -> int:
        try:
            service_config = manager.load_config(args.config)
        except (FileNotFoundError, PortAllocationError) as e:
            print(f"Error: {e}")
            return 1

        dynamic_ports = service_config.dynamic_ports
        if args.static:
            dynamic_ports.use_dynamic_ports = False
        if args.finder:
            dynamic_ports.free_port_finder = args.finder

        errors = manager.validate_config(service_config)
        if errors:
            for error in errors:
                print(f"Error: {error}")
            return 1

        try:
            ports = manager.assign_ports(service_config)
        except PortAllocationError as e:
            print(f"Error: {e}")
            return 1

        if args.json:
            self.print_json({
                "application_port": ports.application_port,
                "admin_port": ports.admin_port,
                "dynamic": dynamic_ports.use_dynamic_ports,
                "secure": dynamic_ports.use_dynamic_ports and dynamic_ports.use_secure_dynamic_ports,
            })
        else:
            print(f"Application port: {ports.application_port}")
            print(f"Admin port: {ports.admin_port}")

        return 0
