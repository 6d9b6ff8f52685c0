"""
Port Assigner - Resolve application/admin ports and rewrite listener connectors

A few opinionated decisions:

- TLS material is required when secure dynamic ports are wanted, and it is
  checked before any port is probed.
- Without a port range both ports become 0, leaving the choice to the OS.
- Secure assignment replaces the connector lists with one new HTTPS connector
  per role; non-secure assignment only changes the port of the first
  existing connector of each role.
- Both ports are found before any connector is touched, so a failed search
  leaves the server configuration as it was.
"""
import logging
import random
from typing import Optional, Set

from ..connectors import ServerConfig, TlsMaterial, new_https_connector
from ..errors import ConfigurationError
from ..port_range import AssignmentMode, PortRange, SecurityMode, ServicePorts
from .free_port_finders import FreePortFinder, find_random_free_port
from .port_probe_service import LocalPortProbe, PortProbe


class PortAssigner:
    """Assigns dynamic ports to the application and admin connectors of a server"""

    def __init__(
        self,
        server_config: ServerConfig,
        assignment_mode: AssignmentMode = AssignmentMode.DYNAMIC,
        security_mode: SecurityMode = SecurityMode.SECURE,
        port_range: Optional[PortRange] = None,
        tls: Optional[TlsMaterial] = None,
        probe: Optional[PortProbe] = None,
        free_port_finder: Optional[FreePortFinder] = None,
        rng: Optional[random.Random] = None,
    ):
        if server_config is None:
            raise ConfigurationError("server_config is required")

        self.logger = logging.getLogger(__name__)
        self.server_config = server_config
        self.assignment_mode = assignment_mode
        self.security_mode = security_mode
        self.port_range = port_range
        self.tls = tls
        self.probe = probe or LocalPortProbe()
        self.free_port_finder = free_port_finder
        self.rng = rng or random.Random()

    def assign_dynamic_ports(self) -> ServicePorts:
        """
        Set up the application and admin connectors with dynamic ports.

        With static assignment nothing is changed and no port is probed.

        Returns:
            The application and admin ports the server is configured with
            afterwards

        Raises:
            ConfigurationError: If TLS material or connectors are missing
            NoAvailablePortException: If the port search is exhausted
        """
        if self.assignment_mode == AssignmentMode.STATIC:
            self.logger.info(
                "Static port assignment is being used, relying on configured connectors"
            )
            return self._configured_ports()

        if self.security_mode == SecurityMode.SECURE:
            return self._assign_secure_ports_to_new_connectors()
        return self._assign_ports_to_existing_connectors()

    def _assign_secure_ports_to_new_connectors(self) -> ServicePorts:
        self._require_tls()

        self.logger.debug("Replacing app/admin connectors with HTTPS ones using dynamic ports")
        ports = self._find_service_ports()

        self.server_config.application_connectors = [
            new_https_connector(ports.application_port, self.tls)
        ]
        self.server_config.admin_connectors = [new_https_connector(ports.admin_port, self.tls)]

        self.logger.info(
            f"Assigned secure application port {ports.application_port} "
            f"and admin port {ports.admin_port} to new HTTPS connectors"
        )
        return ports

    def _assign_ports_to_existing_connectors(self) -> ServicePorts:
        if not self.server_config.application_connectors:
            raise ConfigurationError("No application connector is configured to assign a port to")
        if not self.server_config.admin_connectors:
            raise ConfigurationError("No admin connector is configured to assign a port to")

        self.logger.debug("Modifying existing app/admin connectors using dynamic ports")
        ports = self._find_service_ports()

        self.server_config.application_connectors[0].port = ports.application_port
        self.server_config.admin_connectors[0].port = ports.admin_port

        self.logger.info(
            f"Assigned application port {ports.application_port} "
            f"and admin port {ports.admin_port} to existing connectors"
        )
        return ports

    def _require_tls(self) -> None:
        if self.tls is None:
            raise ConfigurationError(
                "TLS configuration is required when assigning secure dynamic ports"
            )

        errors = self.tls.validate()
        if errors:
            raise ConfigurationError(f"TLS configuration is incomplete: {'; '.join(errors)}")

    def _find_service_ports(self) -> ServicePorts:
        if self.port_range is None:
            return ServicePorts(0, 0)

        if self.free_port_finder is not None:
            return self.free_port_finder.find(self.port_range)

        used_ports: Set[int] = set()
        application_port = self.find_free_port(used_ports)
        admin_port = self.find_free_port(used_ports)
        return ServicePorts(application_port, admin_port)

    def find_free_port(self, used_ports: Set[int]) -> int:
        """
        Find one available port in the range that is not in ``used_ports``.

        Mutates ``used_ports`` by adding the port that is returned.

        Args:
            used_ports: Ports already claimed during this assignment

        Returns:
            The port, or 0 when no range is configured

        Raises:
            NoAvailablePortException: If nothing was found within the range's
                attempt budget
        """
        if self.port_range is None:
            return 0

        return find_random_free_port(self.port_range, self.probe, used_ports, self.rng)

    def _configured_ports(self) -> ServicePorts:
        application = self.server_config.application_connectors
        admin = self.server_config.admin_connectors
        return ServicePorts(
            application[0].port if application else 0,
            admin[0].port if admin else 0,
        )
