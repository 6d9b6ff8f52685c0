"""
Listener Connectors

Plaintext and TLS listener descriptors, the per-role server configuration
that holds them, and helpers for reading the configured ports back out.
"""
import logging
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Dict, List, Optional

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_APPLICATION_PORT = 8080
DEFAULT_ADMIN_PORT = 8081
DEFAULT_STORE_TYPE = "JKS"


def _is_blank(value: Optional[str]) -> bool:
    return not isinstance(value, str) or not value.strip()


def _copy_list(values: Optional[List[str]]) -> Optional[List[str]]:
    # A lone string is one entry, not a sequence of characters
    if not values:
        return None
    if isinstance(values, str):
        return [values]
    return list(values)


@dataclass
class TlsMaterial:
    """Key store, trust store and protocol settings for TLS listeners"""

    key_store_path: Optional[str] = None
    key_store_password: Optional[str] = None
    trust_store_path: Optional[str] = None
    trust_store_password: Optional[str] = None
    supported_protocols: Optional[List[str]] = None
    key_store_type: str = DEFAULT_STORE_TYPE
    key_store_provider: Optional[str] = None
    trust_store_type: str = DEFAULT_STORE_TYPE
    trust_store_provider: Optional[str] = None
    jce_provider: Optional[str] = None
    cert_alias: Optional[str] = None
    supported_ciphers: Optional[List[str]] = None
    disable_sni_host_check: bool = False

    def validate(self) -> List[str]:
        """Check that the material is complete enough to start a TLS listener.

        Returns:
            List of validation errors (empty if complete)
        """
        errors = []

        if _is_blank(self.key_store_path):
            errors.append("key_store_path is required")
        if not isinstance(self.key_store_password, str):
            errors.append("key_store_password is required")
        if _is_blank(self.trust_store_path):
            errors.append("trust_store_path is required")
        if not isinstance(self.trust_store_password, str):
            errors.append("trust_store_password is required")

        return errors


@dataclass
class HttpConnector:
    """A plaintext listener descriptor"""

    port: int = DEFAULT_APPLICATION_PORT
    bind_host: Optional[str] = None
    idle_timeout: float = 30.0

    @property
    def scheme(self) -> str:
        return "http"


@dataclass
class HttpsConnector(HttpConnector):
    """A TLS-terminated listener descriptor"""

    key_store_path: Optional[str] = None
    key_store_password: Optional[str] = None
    key_store_type: str = DEFAULT_STORE_TYPE
    key_store_provider: Optional[str] = None
    trust_store_path: Optional[str] = None
    trust_store_password: Optional[str] = None
    trust_store_type: str = DEFAULT_STORE_TYPE
    trust_store_provider: Optional[str] = None
    jce_provider: Optional[str] = None
    cert_alias: Optional[str] = None
    supported_protocols: Optional[List[str]] = None
    supported_cipher_suites: Optional[List[str]] = None
    disable_sni_host_check: bool = False

    @property
    def scheme(self) -> str:
        return "https"


CONNECTOR_TYPES = {
    "http": HttpConnector,
    "https": HttpsConnector,
}


def _default_application_connectors() -> List[HttpConnector]:
    return [HttpConnector(port=DEFAULT_APPLICATION_PORT)]


def _default_admin_connectors() -> List[HttpConnector]:
    return [HttpConnector(port=DEFAULT_ADMIN_PORT)]


@dataclass
class ServerConfig:
    """Listener configuration for the application and admin roles.

    Connector lists may be replaced wholesale (secure dynamic ports) or the
    ``port`` of an existing connector patched in place (plaintext dynamic
    ports).
    """

    application_connectors: List[HttpConnector] = field(
        default_factory=_default_application_connectors
    )
    admin_connectors: List[HttpConnector] = field(default_factory=_default_admin_connectors)


class PortType(Enum):
    APPLICATION = "application"
    ADMIN = "admin"


class PortSecurity(Enum):
    SECURE = "secure"
    NOT_SECURE = "not_secure"

    @classmethod
    def from_scheme(cls, scheme: str) -> "PortSecurity":
        return cls.SECURE if scheme.lower() == "https" else cls.NOT_SECURE


@dataclass(frozen=True)
class Port:
    """A configured port, tagged with its role and security"""

    number: int
    port_type: PortType
    security: PortSecurity

    def __str__(self) -> str:
        return f"{self.number} ({self.security.value})"


def new_https_connector(port: int, tls: TlsMaterial) -> HttpsConnector:
    """Create an HTTPS connector on ``port`` carrying all of ``tls``."""
    return HttpsConnector(
        port=port,
        key_store_path=tls.key_store_path,
        key_store_password=tls.key_store_password,
        key_store_type=tls.key_store_type,
        key_store_provider=tls.key_store_provider,
        trust_store_path=tls.trust_store_path,
        trust_store_password=tls.trust_store_password,
        trust_store_type=tls.trust_store_type,
        trust_store_provider=tls.trust_store_provider,
        jce_provider=tls.jce_provider,
        cert_alias=tls.cert_alias,
        supported_protocols=_copy_list(tls.supported_protocols),
        supported_cipher_suites=_copy_list(tls.supported_ciphers),
        disable_sni_host_check=tls.disable_sni_host_check,
    )


def connector_from_dict(data: Dict) -> HttpConnector:
    """Build a connector from a ``{type: http|https, ...}`` mapping.

    Raises:
        ConfigurationError: If the type or any property is unknown
    """
    if not isinstance(data, dict):
        raise ConfigurationError(f"Invalid connector configuration: {data!r}")

    properties = dict(data)
    connector_type = str(properties.pop("type", "http")).lower()
    connector_class = CONNECTOR_TYPES.get(connector_type)
    if connector_class is None:
        raise ConfigurationError(
            f"Unknown connector type '{connector_type}'. "
            f"Must be one of: {', '.join(sorted(CONNECTOR_TYPES))}"
        )

    known = {f.name for f in fields(connector_class)}
    unknown = sorted(set(properties) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown {connector_type} connector properties: {', '.join(unknown)}"
        )

    return connector_class(**properties)


def _connectors_by_scheme(connectors: List[HttpConnector]) -> Dict[str, HttpConnector]:
    # Only one connector per scheme is expected; the last one wins.
    by_scheme: Dict[str, HttpConnector] = {}
    for connector in connectors:
        if connector.scheme in by_scheme:
            discarded = by_scheme[connector.scheme]
            logger.warning(
                f"More than one {connector.scheme} connector is configured. "
                f"Using the one with port {connector.port}, "
                f"discarding the one with port {discarded.port}"
            )
        by_scheme[connector.scheme] = connector
    return by_scheme


def _ports_for(connectors: List[HttpConnector], port_type: PortType) -> List[Port]:
    ports = []
    by_scheme = _connectors_by_scheme(connectors)
    for scheme in ("http", "https"):
        connector = by_scheme.get(scheme)
        if connector is not None:
            ports.append(Port(connector.port, port_type, PortSecurity.from_scheme(scheme)))
    return ports


def get_application_ports(server: ServerConfig) -> List[Port]:
    return _ports_for(server.application_connectors, PortType.APPLICATION)


def get_admin_ports(server: ServerConfig) -> List[Port]:
    return _ports_for(server.admin_connectors, PortType.ADMIN)


def get_ports(server: ServerConfig) -> List[Port]:
    """All application ports followed by all admin ports"""
    return get_application_ports(server) + get_admin_ports(server)


def _only_port(ports: List[Port], role: str) -> Port:
    if len(ports) != 1:
        raise ConfigurationError(f"expected only one {role} port but found {len(ports)}")
    return ports[0]


def get_only_application_port(server: ServerConfig) -> Port:
    """Get the single application port.

    Raises:
        ConfigurationError: If there is not exactly one application port
    """
    return _only_port(get_application_ports(server), "application")


def get_only_admin_port(server: ServerConfig) -> Port:
    """Get the single admin port.

    Raises:
        ConfigurationError: If there is not exactly one admin port
    """
    return _only_port(get_admin_ports(server), "admin")
