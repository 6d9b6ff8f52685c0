"""
Probe Command

Reports whether ports can currently be bound on this host.
"""
from argparse import ArgumentParser, Namespace
from typing import Optional

from .base_command import BaseCommand
from .cli_manager import PortsCLIManager


class ProbeCommand(BaseCommand):
    """Command to check port availability"""

    supports_json = True

    @property
    def name(self) -> str:
        return "probe"

    @property
    def help(self) -> str:
        return "Check whether ports are available"

    def add_arguments(self, parser: ArgumentParser) -> None:
        parser.add_argument(
            "ports",
            nargs="+",
            type=int,
            help="Port numbers to check"
        )
        parser.add_argument(
            "--host",
            default="",
            help="Host address to bind to (default: all interfaces)"
        )

    def validate_args(self, args: Namespace) -> Optional[str]:
        invalid = [port for port in args.ports if not 1 <= port <= 65535]
        if invalid:
            return f"Invalid port(s): {', '.join(str(p) for p in invalid)}"
        return None

    def execute(self, args: Namespace, manager: PortsCLIManager) -> int:
        results = manager.probe_ports(args.ports, host=args.host)

        if args.json:
            self.print_json({str(port): available for port, available in results.items()})
        else:
            for port, available in results.items():
                status_icon = "🟢" if available else "🔴"
                status = "available" if available else "in use"
                print(f"  {status_icon} {port}: {status}")

        return 0 if all(results.values()) else 1
