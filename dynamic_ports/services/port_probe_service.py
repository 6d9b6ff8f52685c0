"""
Port Probe Service - Check whether candidate ports can be bound
"""
import socket
import logging
from abc import ABC, abstractmethod

MIN_TCP_PORT = 1
MAX_TCP_PORT = 65535


class PortProbe(ABC):
    """Answers whether a port is currently bindable on this host"""

    @abstractmethod
    def is_available(self, port: int) -> bool:
        """
        Check if a port is available for binding.

        Args:
            port: Port number to check

        Returns:
            True if port is available, False otherwise
        """
        pass


class LocalPortProbe(PortProbe):
    """Probes ports by binding a TCP socket and releasing it straight away"""

    def __init__(self, host: str = ""):
        self.logger = logging.getLogger(__name__)
        self.host = host

    def is_available(self, port: int) -> bool:
        if not MIN_TCP_PORT <= port <= MAX_TCP_PORT:
            self.logger.debug(f"Port {port} is outside the TCP port range")
            return False

        try:
            # No SO_REUSEADDR: the bind must fail if anything holds the port
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
                sock.bind((self.host, port))
                return True
        except (OSError, OverflowError) as e:
            self.logger.debug(f"Port {port} is not available: {e}")
            return False
