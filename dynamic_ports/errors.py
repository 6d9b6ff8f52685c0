"""
Port Allocation Errors

Terminal failures raised while resolving listener ports. None of these are
retried; callers are expected to abort startup.
"""
from typing import Optional


class PortAllocationError(Exception):
    """Base class for every port allocation failure"""


class ConfigurationError(PortAllocationError, ValueError):
    """Raised when the port range, TLS material or listener setup is invalid"""


class NoAvailablePortException(PortAllocationError, RuntimeError):
    """Raised when a bounded port search is exhausted"""

    def __init__(
        self,
        message: str,
        min_port: Optional[int] = None,
        max_port: Optional[int] = None,
        attempts: Optional[int] = None,
    ):
        super().__init__(message)
        self.min_port = min_port
        self.max_port = max_port
        self.attempts = attempts
