"""
Port Range

Value objects describing where dynamic ports may be taken from and what
was finally chosen.
"""
from dataclasses import dataclass, field
from enum import Enum

from .errors import ConfigurationError

RANGE_MULTIPLIER = 3

MIN_PORT_LOWER_BOUND = 1
MIN_PORT_UPPER_BOUND = 65534
MAX_PORT_LOWER_BOUND = 2
MAX_PORT_UPPER_BOUND = 65535


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class PortRange:
    """Inclusive range of ports eligible for dynamic assignment.

    ``port_count`` and ``max_attempts`` are derived once here; a random search
    may make three attempts per port in the range.
    """

    min_port: int
    max_port: int
    port_count: int = field(init=False)
    max_attempts: int = field(init=False)

    def __post_init__(self):
        if not _is_int(self.min_port) or not _is_int(self.max_port):
            raise ConfigurationError(
                f"min_port and max_port must be integers "
                f"(was: {self.min_port!r} -> {self.max_port!r})"
            )

        if self.min_port >= self.max_port:
            raise ConfigurationError(
                f"min_port must be less than max_port (was: {self.min_port} -> {self.max_port})"
            )

        if not MIN_PORT_LOWER_BOUND <= self.min_port <= MIN_PORT_UPPER_BOUND:
            raise ConfigurationError(
                f"min_port must be between {MIN_PORT_LOWER_BOUND} and "
                f"{MIN_PORT_UPPER_BOUND} (was: {self.min_port})"
            )

        if not MAX_PORT_LOWER_BOUND <= self.max_port <= MAX_PORT_UPPER_BOUND:
            raise ConfigurationError(
                f"max_port must be between {MAX_PORT_LOWER_BOUND} and "
                f"{MAX_PORT_UPPER_BOUND} (was: {self.max_port})"
            )

        port_count = self.max_port - self.min_port + 1
        # frozen dataclass, so derived fields go through object.__setattr__
        object.__setattr__(self, "port_count", port_count)
        object.__setattr__(self, "max_attempts", RANGE_MULTIPLIER * port_count)

    def __contains__(self, port: int) -> bool:
        return self.min_port <= port <= self.max_port


@dataclass(frozen=True)
class ServicePorts:
    """Application and admin ports resolved for one service"""

    application_port: int
    admin_port: int


class AssignmentMode(Enum):
    """Whether configured ports are kept or replaced by discovered ones"""

    STATIC = "static"
    DYNAMIC = "dynamic"

    @classmethod
    def from_bool(cls, dynamic: bool) -> "AssignmentMode":
        return cls.DYNAMIC if dynamic else cls.STATIC


class SecurityMode(Enum):
    """Whether discovered ports back TLS or plaintext listeners"""

    SECURE = "secure"
    NON_SECURE = "non_secure"

    @classmethod
    def from_bool(cls, secure: bool) -> "SecurityMode":
        return cls.SECURE if secure else cls.NON_SECURE
