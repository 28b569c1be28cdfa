import logging
from unittest.mock import MagicMock, patch

import pytest

from obd_communication.communicator.base_communication import SerialTransport
from obd_communication.config import (
    BAUD_RATES,
    BAUD_DEFAULT,
    ConnectionConfig,
    Units,
    available_ports,
    setup_logging,
)
from obd_communication.errors import ConfigurationError


class TestConnectionConfig:
    def test_defaults(self, device):
        config = ConnectionConfig(device=device)
        assert config.baudrate == BAUD_DEFAULT
        assert config.units is Units.ENGLISH
        assert config.verbose is False
        assert config.header_width is None

    @pytest.mark.parametrize("baudrate", BAUD_RATES)
    def test_accepts_supported_baud_rates(self, device, baudrate):
        assert ConnectionConfig(device=device, baudrate=baudrate).baudrate == baudrate

    @pytest.mark.parametrize("baudrate", [0, 1234, 4800, 230400, "9600", 9600.0, True, None])
    def test_rejects_unsupported_baud_rates(self, device, baudrate):
        with pytest.raises(ConfigurationError):
            ConnectionConfig(device=device, baudrate=baudrate)

    def test_rejects_missing_device(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConnectionConfig(device=str(tmp_path / "no-such-port"))

    def test_rejects_non_string_device(self):
        with pytest.raises(ConfigurationError):
            ConnectionConfig(device=None)

    def test_configuration_error_is_value_error(self, device):
        with pytest.raises(ValueError):
            ConnectionConfig(device=device, baudrate=1)

    @pytest.mark.parametrize("value, expected", [
        (Units.METRIC, Units.METRIC),
        ("metric", Units.METRIC),
        ("METRIC", Units.METRIC),
        ("english", Units.ENGLISH),
    ])
    def test_units_accepts_names(self, device, value, expected):
        assert ConnectionConfig(device=device, units=value).units is expected

    def test_invalid_units_fall_back_to_english(self, device, caplog):
        with caplog.at_level(logging.WARNING):
            config = ConnectionConfig(device=device, units="imperial")
        assert config.units is Units.ENGLISH
        assert "Invalid unit system" in caplog.text

    @pytest.mark.parametrize("header_width", [-1, "4", 2.5])
    def test_rejects_bad_header_width(self, device, header_width):
        with pytest.raises(ConfigurationError):
            ConnectionConfig(device=device, header_width=header_width)

    def test_config_is_immutable(self, device):
        config = ConnectionConfig(device=device)
        with pytest.raises(AttributeError):
            config.baudrate = 38400


class TestUnits:
    def test_coerce_returns_none_for_unknown(self):
        assert Units.coerce("furlongs") is None
        assert Units.coerce(42) is None

    def test_coerce_passes_members_through(self):
        assert Units.coerce(Units.METRIC) is Units.METRIC


class TestSetupLogging:
    def test_handler_attached_once(self):
        logger = setup_logging("obd_communication.tests.setup")
        handler = logger.handlers[0]
        assert setup_logging("obd_communication.tests.setup", logging.INFO) is logger
        assert logger.handlers == [handler]
        assert logger.level == logging.INFO

    def test_parent_level_untouched(self):
        setup_logging("obd_communication.tests.scope.child")
        assert logging.getLogger("obd_communication.tests.scope.child").level == logging.DEBUG
        assert logging.getLogger("obd_communication.tests.scope").level == logging.NOTSET


class TestAvailablePorts:
    def test_listed_port_is_accepted(self):
        with patch("serial.tools.list_ports.comports", return_value=[MagicMock(device="COM7")]):
            assert available_ports() == ["COM7"]
            assert SerialTransport.list_ports() == ["COM7"]
            assert ConnectionConfig(device="COM7").device == "COM7"

    def test_unlisted_port_is_rejected(self):
        with patch("serial.tools.list_ports.comports", return_value=[]):
            with pytest.raises(ConfigurationError):
                ConnectionConfig(device="COM7")
