"""
Free Port Finders

Strategies for picking an application port and an admin port from a
PortRange, plus the registry used to select one by name from configuration.
"""
import logging
import random
from abc import ABC, abstractmethod
from typing import ClassVar, Dict, List, Optional, Set, Type

from ..errors import ConfigurationError, NoAvailablePortException
from ..port_range import PortRange, ServicePorts
from .port_probe_service import LocalPortProbe, PortProbe

logger = logging.getLogger(__name__)


def find_random_free_port(
    port_range: PortRange,
    probe: PortProbe,
    used_ports: Set[int],
    rng: Optional[random.Random] = None,
) -> int:
    """
    Draw random ports from the range until one is available and unused.

    Mutates ``used_ports`` by adding the port that is returned.

    Args:
        port_range: Range to draw from
        probe: Probe used to check each candidate
        used_ports: Ports already chosen during this run
        rng: Random source, defaults to the ``random`` module

    Returns:
        The chosen port

    Raises:
        NoAvailablePortException: After ``port_range.max_attempts`` draws
            without finding a port
    """
    rng = rng or random
    for _ in range(port_range.max_attempts):
        port = port_range.min_port + rng.randrange(port_range.port_count)
        logger.debug(f"Checking if port {port} is available")
        if probe.is_available(port) and port not in used_ports:
            used_ports.add(port)
            return port

    raise NoAvailablePortException(
        f"Could not find an available port between {port_range.min_port} and "
        f"{port_range.max_port} after {port_range.max_attempts} attempts. I give up.",
        min_port=port_range.min_port,
        max_port=port_range.max_port,
        attempts=port_range.max_attempts,
    )


class FreePortFinder(ABC):
    """Finds application and admin ports for a service.

    Subclasses set ``name``, the key used to select them in configuration.
    """

    name: ClassVar[str] = ""

    @abstractmethod
    def find(self, port_range: Optional[PortRange]) -> ServicePorts:
        """
        Find application and admin ports.

        Args:
            port_range: The allowable port range

        Returns:
            The application and admin ports

        Raises:
            NoAvailablePortException: If two usable ports were not found
        """
        pass


class RandomFreePortFinder(FreePortFinder):
    """Picks two distinct random ports from the range"""

    name = "random"

    def __init__(self, probe: Optional[PortProbe] = None, rng: Optional[random.Random] = None):
        self.probe = probe or LocalPortProbe()
        self.rng = rng or random.Random()

    def find(self, port_range: Optional[PortRange]) -> ServicePorts:
        # No range means port 0 for both, i.e. let the OS choose
        if port_range is None:
            return ServicePorts(0, 0)

        used_ports: Set[int] = set()
        application_port = find_random_free_port(port_range, self.probe, used_ports, self.rng)
        admin_port = find_random_free_port(port_range, self.probe, used_ports, self.rng)
        return ServicePorts(application_port, admin_port)


class IncrementingFreePortFinder(FreePortFinder):
    """Takes the first two available ports scanning up from the minimum.

    The ports may or may not be adjacent, but the admin port is always higher
    than the application port.
    """

    name = "incrementing"

    def __init__(self, probe: Optional[PortProbe] = None):
        self.probe = probe or LocalPortProbe()

    def find(self, port_range: Optional[PortRange]) -> ServicePorts:
        if port_range is None:
            raise ConfigurationError("port_range must not be None")

        ports: List[int] = []
        for port in range(port_range.min_port, port_range.max_port + 1):
            if self.probe.is_available(port):
                ports.append(port)
                if len(ports) == 2:
                    return ServicePorts(ports[0], ports[1])

        raise NoAvailablePortException(
            f"Could not find two open ports between {port_range.min_port} and {port_range.max_port}",
            min_port=port_range.min_port,
            max_port=port_range.max_port,
        )


class AdjacentFreePortFinder(FreePortFinder):
    """Takes the first pair of available, numerically adjacent ports"""

    name = "adjacent"

    def __init__(self, probe: Optional[PortProbe] = None):
        self.probe = probe or LocalPortProbe()

    def find(self, port_range: Optional[PortRange]) -> ServicePorts:
        if port_range is None:
            raise ConfigurationError("port_range must not be None")

        application_port = port_range.min_port
        while application_port < port_range.max_port:
            if not self.probe.is_available(application_port):
                application_port += 1
                continue

            admin_port = application_port + 1
            if self.probe.is_available(admin_port):
                return ServicePorts(application_port, admin_port)

            # admin_port is busy, so it can't be an application port either
            logger.debug(
                f"Port {application_port} is open but {admin_port} is not, "
                f"resuming at {admin_port + 1}"
            )
            application_port = admin_port + 1

        raise NoAvailablePortException(
            f"Could not find two adjacent open ports between "
            f"{port_range.min_port} and {port_range.max_port}",
            min_port=port_range.min_port,
            max_port=port_range.max_port,
        )


class FreePortFinderRegistry:
    """Registry of finder strategies, keyed by the name used in configuration"""

    DEFAULT_FINDER = "random"

    def __init__(self):
        self.finders: Dict[str, Type[FreePortFinder]] = {}
        self._register_finders()

    def _register_finders(self) -> None:
        """Register all built-in finders"""
        finder_classes = [
            RandomFreePortFinder,
            IncrementingFreePortFinder,
            AdjacentFreePortFinder,
        ]

        for finder_class in finder_classes:
            self.register(finder_class)

    def register(self, finder_class: Type[FreePortFinder]) -> None:
        """Register a finder class under its ``name`` class attribute"""
        if not finder_class.name:
            raise ConfigurationError(f"{finder_class.__name__} does not define a finder name")
        self.finders[finder_class.name.lower()] = finder_class

    def names(self) -> List[str]:
        return sorted(self.finders)

    def create(self, name: Optional[str] = None, probe: Optional[PortProbe] = None) -> FreePortFinder:
        """
        Create the finder registered under ``name``.

        Args:
            name: Finder name (case-insensitive), defaults to "random"
            probe: Probe the finder should use

        Returns:
            A new finder instance

        Raises:
            ConfigurationError: If no finder is registered under ``name``
        """
        key = (name or self.DEFAULT_FINDER).strip().lower()
        finder_class = self.finders.get(key)
        if finder_class is None:
            raise ConfigurationError(
                f"Unknown free port finder '{name}'. Must be one of: {', '.join(self.names())}"
            )
        return finder_class(probe=probe)
