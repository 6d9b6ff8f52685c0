"""Dynamic application/admin port assignment for service bootstrap"""

from .connectors import HttpConnector, HttpsConnector, ServerConfig, TlsMaterial
from .errors import ConfigurationError, NoAvailablePortException, PortAllocationError
from .port_range import AssignmentMode, PortRange, SecurityMode, ServicePorts

__all__ = [
    "AssignmentMode",
    "ConfigurationError",
    "HttpConnector",
    "HttpsConnector",
    "NoAvailablePortException",
    "PortAllocationError",
    "PortRange",
    "SecurityMode",
    "ServerConfig",
    "ServicePorts",
    "TlsMaterial",
]
