#!/usr/bin/env python3
"""Service Configuration Loader Module

This module loads the listener and dynamic port configuration of a service
from YAML or JSON files.

Configuration files are looked up by explicit path first, then by name in
the following directories:
1. config/ directory
2. the current directory

Example configuration structure:
{
  "server": {
    "application_connectors": [{"type": "http", "port": 8080}],
    "admin_connectors": [{"type": "http", "port": 8081}]
  },
  "dynamic_ports": {
    "use_dynamic_ports": true,
    "use_secure_dynamic_ports": false,
    "min_dynamic_port": 9000,
    "max_dynamic_port": 9100,
    "free_port_finder": "random",
    "tls": {
      "key_store_path": "/etc/service/keystore.jks",
      "key_store_password": "changeit",
      "trust_store_path": "/etc/service/truststore.jks",
      "trust_store_password": "changeit"
    }
  }
}
"""

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .connectors import HttpConnector, ServerConfig, TlsMaterial, connector_from_dict
from .errors import ConfigurationError
from .port_range import AssignmentMode, PortRange, SecurityMode
from .services.free_port_finders import FreePortFinder, FreePortFinderRegistry
from .services.port_probe_service import PortProbe

DEFAULT_MIN_DYNAMIC_PORT = 1024
DEFAULT_MAX_DYNAMIC_PORT = 65535

CONFIG_EXTENSIONS = [".yaml", ".yml", ".json"]

DYNAMIC_PORTS_FLAGS = ("use_dynamic_ports", "use_secure_dynamic_ports")

TLS_STRING_FIELDS = (
    "key_store_path",
    "key_store_password",
    "key_store_type",
    "key_store_provider",
    "trust_store_path",
    "trust_store_password",
    "trust_store_type",
    "trust_store_provider",
    "jce_provider",
    "cert_alias",
)
TLS_LIST_FIELDS = ("supported_protocols", "supported_ciphers")


@dataclass
class DynamicPortsConfig:
    """Settings controlling whether and how ports are assigned dynamically."""

    use_dynamic_ports: bool = True
    use_secure_dynamic_ports: bool = True
    min_dynamic_port: int = DEFAULT_MIN_DYNAMIC_PORT
    max_dynamic_port: int = DEFAULT_MAX_DYNAMIC_PORT
    free_port_finder: str = FreePortFinderRegistry.DEFAULT_FINDER
    tls: Optional[TlsMaterial] = None

    def assignment_mode(self) -> AssignmentMode:
        return AssignmentMode.from_bool(self.use_dynamic_ports)

    def security_mode(self) -> SecurityMode:
        return SecurityMode.from_bool(self.use_secure_dynamic_ports)

    def port_range(self) -> PortRange:
        return PortRange(self.min_dynamic_port, self.max_dynamic_port)

    def create_free_port_finder(
        self,
        probe: Optional[PortProbe] = None,
        registry: Optional[FreePortFinderRegistry] = None,
    ) -> FreePortFinder:
        registry = registry or FreePortFinderRegistry()
        return registry.create(self.free_port_finder, probe=probe)


@dataclass
class ServiceConfig:
    """Represents a complete service configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    dynamic_ports: DynamicPortsConfig = field(default_factory=DynamicPortsConfig)
    config_path: Optional[Path] = None


class ServiceConfigLoader:
    """Loads and parses service configuration files."""

    def __init__(self, search_paths: Optional[List[Path]] = None):
        """Initialize the config loader with search paths.

        Args:
            search_paths: List of paths to search for config files.
                         Defaults to ['config/', '.']
        """
        self.logger = logging.getLogger(__name__)

        if search_paths is None:
            self.search_paths = [Path("config"), Path(".")]
        else:
            self.search_paths = search_paths

        self.finder_registry = FreePortFinderRegistry()

    def find_config_file(self, config_name: Union[str, Path]) -> Optional[Path]:
        """Find a configuration file by path or by name in the search paths.

        Args:
            config_name: Path to the file, or its name with or without extension

        Returns:
            Path to the config file if found, None otherwise
        """
        explicit = Path(config_name)
        if explicit.is_file():
            return explicit

        base_name = str(config_name)
        for ext in CONFIG_EXTENSIONS:
            if base_name.endswith(ext):
                base_name = base_name[: -len(ext)]
                break

        for search_path in self.search_paths:
            for ext in CONFIG_EXTENSIONS:
                config_path = search_path / f"{base_name}{ext}"
                if config_path.is_file():
                    self.logger.debug(f"Found config file: {config_path}")
                    return config_path

        return None

    def parse_config_data(self, config_data: str, file_path: Path) -> Dict[str, Any]:
        """Parse configuration data based on file extension.

        Args:
            config_data: Configuration string
            file_path: Path to the config file (for extension detection)

        Returns:
            Parsed configuration data

        Raises:
            ConfigurationError: If configuration format is invalid
        """
        ext = file_path.suffix.lower()

        if ext == ".json":
            try:
                data = json.loads(config_data)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid JSON format: {e}") from e
        elif ext in (".yaml", ".yml"):
            try:
                data = yaml.safe_load(config_data)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML format: {e}") from e
        else:
            raise ConfigurationError(f"Unsupported file format: {ext}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration must be a mapping at the top level")
        return data

    def load_config(self, config_name: Union[str, Path]) -> ServiceConfig:
        """Load a service configuration by path or name.

        Args:
            config_name: Path or name of the configuration file

        Returns:
            ServiceConfig object with loaded configuration

        Raises:
            FileNotFoundError: If config file not found
            ConfigurationError: If config file is invalid
        """
        config_path = self.find_config_file(config_name)
        if not config_path:
            searched_paths = ", ".join(str(p) for p in self.search_paths)
            raise FileNotFoundError(
                f"Configuration file '{config_name}' not found in: {searched_paths}"
            )

        config_data = self.parse_config_data(config_path.read_text(), config_path)
        service_config = self.build_config(config_data)
        service_config.config_path = config_path

        dynamic_ports = service_config.dynamic_ports
        self.logger.info(
            f"Loaded service configuration from {config_path} "
            f"(dynamic ports: {dynamic_ports.use_dynamic_ports}, "
            f"secure: {dynamic_ports.use_secure_dynamic_ports})"
        )

        return service_config

    def build_config(self, config_data: Dict[str, Any]) -> ServiceConfig:
        """Build a ServiceConfig from already parsed data.

        Raises:
            ConfigurationError: If a section has the wrong shape
        """
        server_data = self._section(config_data, "server")
        dynamic_data = self._section(config_data, "dynamic_ports")

        return ServiceConfig(
            server=self._build_server_config(server_data),
            dynamic_ports=self._build_dynamic_ports_config(dynamic_data),
        )

    def _section(self, config_data: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = config_data.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ConfigurationError(f"'{name}' section must be a mapping")
        return section

    def _build_server_config(self, server_data: Dict[str, Any]) -> ServerConfig:
        server = ServerConfig()

        if "application_connectors" in server_data:
            server.application_connectors = self._build_connectors(
                server_data["application_connectors"], "application_connectors"
            )
        if "admin_connectors" in server_data:
            server.admin_connectors = self._build_connectors(
                server_data["admin_connectors"], "admin_connectors"
            )

        return server

    def _build_connectors(self, connectors_data: Any, key: str) -> List[HttpConnector]:
        if not isinstance(connectors_data, list):
            raise ConfigurationError(f"'{key}' must be a list of connectors")
        return [connector_from_dict(item) for item in connectors_data]

    def _build_dynamic_ports_config(self, data: Dict[str, Any]) -> DynamicPortsConfig:
        known = {f.name for f in fields(DynamicPortsConfig)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown dynamic_ports properties: {', '.join(unknown)}")

        # Unset or null values fall back to the defaults
        values = {key: value for key, value in data.items() if value is not None}

        for flag in DYNAMIC_PORTS_FLAGS:
            if flag in values:
                self._require_bool(values[flag], f"dynamic_ports.{flag}")

        finder = values.get("free_port_finder")
        if isinstance(finder, dict):
            finder = finder.get("type")
        if finder is not None:
            if not isinstance(finder, str):
                raise ConfigurationError(f"Invalid free_port_finder: {finder!r}")
            # Resolve now so an unknown name fails while loading
            self.finder_registry.create(finder)
            values["free_port_finder"] = finder.lower()

        if "tls" in values:
            values["tls"] = self._build_tls(values["tls"])

        return DynamicPortsConfig(**values)

    def _build_tls(self, tls_data: Any) -> TlsMaterial:
        if not isinstance(tls_data, dict):
            raise ConfigurationError("'tls' must be a mapping")

        known = {f.name for f in fields(TlsMaterial)}
        unknown = sorted(set(tls_data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown tls properties: {', '.join(unknown)}")

        values = {key: value for key, value in tls_data.items() if value is not None}

        for key in TLS_STRING_FIELDS:
            if key in values and not isinstance(values[key], str):
                raise ConfigurationError(
                    f"tls.{key} must be a string (was: {values[key]!r})"
                )

        for key in TLS_LIST_FIELDS:
            if key in values:
                values[key] = self._string_list(values[key], f"tls.{key}")

        if "disable_sni_host_check" in values:
            self._require_bool(values["disable_sni_host_check"], "tls.disable_sni_host_check")

        return TlsMaterial(**values)

    def _require_bool(self, value: Any, name: str) -> None:
        # Quoted YAML values such as "false" are strings, not booleans
        if not isinstance(value, bool):
            raise ConfigurationError(f"{name} must be true or false (was: {value!r})")

    def _string_list(self, value: Any, name: str) -> List[str]:
        if isinstance(value, str):
            return [value]
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ConfigurationError(f"{name} must be a string or a list of strings (was: {value!r})")
        return list(value)

    def validate_config(self, config: ServiceConfig) -> List[str]:
        """Validate a service configuration.

        Args:
            config: ServiceConfig to validate

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        dynamic_ports = config.dynamic_ports

        if not dynamic_ports.use_dynamic_ports:
            if not config.server.application_connectors:
                errors.append("At least one application connector is required for static ports")
            if not config.server.admin_connectors:
                errors.append("At least one admin connector is required for static ports")
            return errors

        try:
            dynamic_ports.port_range()
        except ConfigurationError as e:
            errors.append(str(e))

        if dynamic_ports.use_secure_dynamic_ports:
            if dynamic_ports.tls is None:
                errors.append("TLS configuration is required when assigning secure dynamic ports")
            else:
                errors.extend(f"tls: {error}" for error in dynamic_ports.tls.validate())
        else:
            if not config.server.application_connectors:
                errors.append("At least one application connector is required")
            if not config.server.admin_connectors:
                errors.append("At least one admin connector is required")

        return errors
