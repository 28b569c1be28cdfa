from unittest.mock import MagicMock

import pytest

from obd_communication.communicator.command_channel import CommandChannel
from obd_communication.config import PID_NULL, Units
from obd_communication.errors import InvalidStateError, NotFoundError
from obd_communication.param_types import Formula, PidDefinition
from obd_communication.pids import PID_DEFINITIONS, PidRegistry
from obd_communication.pids.definitions import Mode01Pid

EXPECTED_KEYS = [
    "voltage",
    "engine_load",
    "coolant_temperature",
    "fuel_pressure",
    "engine_rpm",
    "speed",
    "intake_temperature",
    "throttle",
    "uptime",
    "malfunction_distance",
    "fuel_level",
    "ok_distance",
    "air_temperature",
    "malfunction_time",
    "ok_time",
    "ethanol",
    "battery",
    "oil_temperature",
]


@pytest.fixture
def channel():
    mock = MagicMock(spec=CommandChannel)
    mock.header_width = 4
    return mock


class TestPidRegistry:
    def test_keys_in_registration_order(self):
        assert PidRegistry().keys() == EXPECTED_KEYS

    def test_keys_are_unique(self):
        keys = [definition.key for definition in PID_DEFINITIONS]
        assert len(keys) == len(set(keys))

    def test_commands(self):
        registry = PidRegistry()
        assert registry.get("voltage").command == "AT RV"
        assert registry.get("engine_rpm").command == "01 0C"
        assert registry.get("ok_time").command == "01 4E"

    def test_unknown_key(self):
        with pytest.raises(NotFoundError):
            PidRegistry().get("turbo_boost")

    def test_not_found_is_lookup_error(self):
        with pytest.raises(LookupError):
            PidRegistry().get("")

    def test_immutable_after_construction(self):
        registry = PidRegistry()
        definition = PidDefinition(key="extra", command="01 33", formula=Formula.PERCENTAGE)
        with pytest.raises(InvalidStateError):
            registry.register(definition)
        assert "extra" not in registry

    def test_duplicate_keys_rejected(self):
        with pytest.raises(ValueError):
            PidRegistry([Mode01Pid.SPEED, Mode01Pid.SPEED])

    def test_custom_definitions(self):
        registry = PidRegistry([Mode01Pid.ENGINE_RPM, Mode01Pid.SPEED])
        assert list(registry) == ["engine_rpm", "speed"]
        assert len(registry) == 2

    def test_invoke_issues_one_command(self, channel):
        channel.command.return_value = "410C1AE0"
        assert PidRegistry().invoke("engine_rpm", channel) == "1720.00rpm"
        channel.command.assert_called_once_with("01 0C")

    def test_invoke_uses_units(self, channel):
        channel.command.return_value = "410DFF"
        assert PidRegistry().invoke("speed", channel, Units.METRIC) == "255.00km/h"

    def test_invoke_header_width_override(self, channel):
        channel.command.return_value = "7E8410C1AE0"
        assert PidRegistry().invoke("engine_rpm", channel, header_width=7) == "1720.00rpm"

    def test_invoke_without_response(self, channel):
        channel.command.return_value = None
        assert PidRegistry().invoke("oil_temperature", channel) == PID_NULL

    def test_invoke_unknown_key_sends_nothing(self, channel):
        with pytest.raises(NotFoundError):
            PidRegistry().invoke("boost", channel)
        channel.command.assert_not_called()
