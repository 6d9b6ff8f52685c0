"""
Unit tests for PortRange and the assignment enums
"""
import dataclasses

import pytest

from dynamic_ports.errors import ConfigurationError, PortAllocationError
from dynamic_ports.port_range import AssignmentMode, PortRange, SecurityMode, ServicePorts


class TestPortRange:
    """Test range validation and derived search parameters"""

    @pytest.mark.parametrize("min_port,max_port", [
        (1, 2),
        (9000, 9100),
        (1024, 65535),
        (65534, 65535),
    ])
    def test_derived_values(self, min_port, max_port):
        """Test port count and attempt budget are derived from the bounds"""
        port_range = PortRange(min_port, max_port)

        assert port_range.port_count == max_port - min_port + 1
        assert port_range.max_attempts == 3 * port_range.port_count

    def test_attempt_budget_for_known_range(self):
        """Test a 101-port range allows 303 attempts"""
        port_range = PortRange(9000, 9100)
        assert port_range.port_count == 101
        assert port_range.max_attempts == 303

    def test_min_port_zero_rejected(self):
        """Test that port 0 is not a valid minimum"""
        with pytest.raises(ConfigurationError) as exc_info:
            PortRange(0, 100)

        assert str(exc_info.value) == "min_port must be between 1 and 65534 (was: 0)"

    def test_max_port_too_large_rejected(self):
        """Test that ports above 65535 are rejected"""
        with pytest.raises(ConfigurationError) as exc_info:
            PortRange(9000, 65536)

        assert str(exc_info.value) == "max_port must be between 2 and 65535 (was: 65536)"

    def test_min_port_above_upper_bound_rejected(self):
        """Test that 65535 can't be a minimum"""
        with pytest.raises(ConfigurationError) as exc_info:
            PortRange(65535, 65536)

        assert "(was: 65535)" in str(exc_info.value)

    @pytest.mark.parametrize("min_port,max_port", [(9000, 9000), (9100, 9000)])
    def test_min_not_below_max_rejected(self, min_port, max_port):
        """Test that the minimum must be strictly below the maximum"""
        with pytest.raises(ConfigurationError) as exc_info:
            PortRange(min_port, max_port)

        assert str(exc_info.value) == (
            f"min_port must be less than max_port (was: {min_port} -> {max_port})"
        )

    @pytest.mark.parametrize("min_port,max_port", [("9000", 9100), (9000, 9100.5), (True, 9100)])
    def test_non_integer_bounds_rejected(self, min_port, max_port):
        with pytest.raises(ConfigurationError):
            PortRange(min_port, max_port)

    def test_configuration_error_is_value_error(self):
        """Test the error family so callers can catch broadly"""
        with pytest.raises(ValueError):
            PortRange(0, 10)
        with pytest.raises(PortAllocationError):
            PortRange(0, 10)

    def test_immutable(self):
        port_range = PortRange(9000, 9100)
        with pytest.raises(dataclasses.FrozenInstanceError):
            port_range.min_port = 1

    def test_contains(self):
        port_range = PortRange(9000, 9010)
        assert 9000 in port_range
        assert 9010 in port_range
        assert 8999 not in port_range
        assert 9011 not in port_range


class TestEnums:
    """Test conversions from configuration flags"""

    def test_assignment_mode_from_bool(self):
        assert AssignmentMode.from_bool(True) is AssignmentMode.DYNAMIC
        assert AssignmentMode.from_bool(False) is AssignmentMode.STATIC

    def test_security_mode_from_bool(self):
        assert SecurityMode.from_bool(True) is SecurityMode.SECURE
        assert SecurityMode.from_bool(False) is SecurityMode.NON_SECURE

    def test_service_ports_equality(self):
        assert ServicePorts(9000, 9001) == ServicePorts(9000, 9001)
        assert ServicePorts(9000, 9001) != ServicePorts(9001, 9000)
