"""
Dynamic Ports Service

Runs port assignment for a loaded service configuration during startup,
before anything binds the listener sockets. Run it before any other step
that needs the final ports (e.g. service registration).
"""
import logging
from typing import Optional

from ..config_loader import ServiceConfig
from ..connectors import get_admin_ports, get_application_ports
from ..port_range import ServicePorts
from .port_assigner import PortAssigner
from .port_probe_service import LocalPortProbe, PortProbe


class DynamicPortsService:
    """Assigns the ports described by a service configuration"""

    def __init__(self, probe: Optional[PortProbe] = None):
        self.logger = logging.getLogger(__name__)
        self.probe = probe or LocalPortProbe()

    def create_port_assigner(self, service_config: ServiceConfig) -> PortAssigner:
        """
        Build a PortAssigner from the dynamic_ports settings.

        Range and finder are only resolved when dynamic ports are enabled, so a
        static configuration never fails on them.

        Args:
            service_config: Loaded service configuration

        Returns:
            A PortAssigner bound to ``service_config.server``
        """
        dynamic_ports = service_config.dynamic_ports
        assignment_mode = dynamic_ports.assignment_mode()

        port_range = None
        free_port_finder = None
        if dynamic_ports.use_dynamic_ports:
            port_range = dynamic_ports.port_range()
            free_port_finder = dynamic_ports.create_free_port_finder(probe=self.probe)

        return PortAssigner(
            server_config=service_config.server,
            assignment_mode=assignment_mode,
            security_mode=dynamic_ports.security_mode(),
            port_range=port_range,
            tls=dynamic_ports.tls,
            probe=self.probe,
            free_port_finder=free_port_finder,
        )

    def run(self, service_config: ServiceConfig) -> ServicePorts:
        """
        Assign ports and rewrite the server connectors in place.

        Returns:
            The resolved application and admin ports

        Raises:
            ConfigurationError: If the configuration can't be used
            NoAvailablePortException: If no ports could be found
        """
        self.logger.debug("Running dynamic port assignment")

        ports = self.create_port_assigner(service_config).assign_dynamic_ports()

        server = service_config.server
        application_ports = ", ".join(str(p) for p in get_application_ports(server))
        admin_ports = ", ".join(str(p) for p in get_admin_ports(server))
        self.logger.info(
            f"Dynamic ports? {service_config.dynamic_ports.use_dynamic_ports} ; "
            f"application port(s): [{application_ports}] / admin port(s): [{admin_ports}]"
        )

        return ports
