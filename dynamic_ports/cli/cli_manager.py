"""
CLI Manager

Glue between the CLI commands and the configuration loader, probe and
dynamic ports service.
"""
import logging
from typing import Dict, List, Optional

from ..config_loader import ServiceConfig, ServiceConfigLoader
from ..port_range import ServicePorts
from ..services.dynamic_ports_service import DynamicPortsService
from ..services.port_probe_service import LocalPortProbe, PortProbe


class PortsCLIManager:
    """Performs the work behind each CLI command"""

    def __init__(
        self,
        config_loader: Optional[ServiceConfigLoader] = None,
        probe: Optional[PortProbe] = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.config_loader = config_loader or ServiceConfigLoader()
        self.probe = probe

    def load_config(self, config_name: str) -> ServiceConfig:
        return self.config_loader.load_config(config_name)

    def validate_config(self, service_config: ServiceConfig) -> List[str]:
        return self.config_loader.validate_config(service_config)

    def assign_ports(self, service_config: ServiceConfig) -> ServicePorts:
        service = DynamicPortsService(probe=self.probe or LocalPortProbe())
        return service.run(service_config)

    def probe_ports(self, ports: List[int], host: str = "") -> Dict[int, bool]:
        """Check each port, keeping the order given"""
        probe = self.probe or LocalPortProbe(host=host)
        return {port: probe.is_available(port) for port in ports}
