"""
Test fixtures for service configurations
"""
import copy
from pathlib import Path
from typing import Any, Dict

import yaml


class ServiceConfigFixtures:
    """Provides test fixtures for service configurations"""

    TLS = {
        "key_store_path": "/etc/service/keystore.jks",
        "key_store_password": "key-secret",
        "trust_store_path": "/etc/service/truststore.jks",
        "trust_store_password": "trust-secret",
        "supported_protocols": ["TLSv1.2", "TLSv1.3"],
    }

    @staticmethod
    def static_config() -> Dict[str, Any]:
        """Static ports, nothing is assigned"""
        return {
            "server": {
                "application_connectors": [{"type": "http", "port": 8080}],
                "admin_connectors": [{"type": "http", "port": 8081}],
            },
            "dynamic_ports": {
                "use_dynamic_ports": False,
                "use_secure_dynamic_ports": False,
            },
        }

    @staticmethod
    def plain_dynamic_config() -> Dict[str, Any]:
        """Plaintext dynamic ports in a small range"""
        return {
            "server": {
                "application_connectors": [
                    {"type": "http", "port": 8080, "bind_host": "127.0.0.1", "idle_timeout": 45.0}
                ],
                "admin_connectors": [{"type": "http", "port": 8081}],
            },
            "dynamic_ports": {
                "use_dynamic_ports": True,
                "use_secure_dynamic_ports": False,
                "min_dynamic_port": 9000,
                "max_dynamic_port": 9010,
            },
        }

    @staticmethod
    def secure_dynamic_config() -> Dict[str, Any]:
        """Secure dynamic ports with complete TLS material"""
        return {
            "dynamic_ports": {
                "use_dynamic_ports": True,
                "use_secure_dynamic_ports": True,
                "min_dynamic_port": 9000,
                "max_dynamic_port": 9100,
                "free_port_finder": {"type": "adjacent"},
                "tls": copy.deepcopy(ServiceConfigFixtures.TLS),
            },
        }

    @staticmethod
    def secure_without_tls_config() -> Dict[str, Any]:
        return {
            "dynamic_ports": {
                "use_dynamic_ports": True,
                "use_secure_dynamic_ports": True,
                "min_dynamic_port": 9000,
                "max_dynamic_port": 9100,
            },
        }

    @staticmethod
    def write_yaml(directory: Path, name: str, config: Dict[str, Any]) -> Path:
        path = directory / f"{name}.yml"
        path.write_text(yaml.safe_dump(config))
        return path
