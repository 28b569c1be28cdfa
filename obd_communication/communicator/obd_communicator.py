"""
obd_communicator.py

Implements the OBDCommunicator class that manages the connection lifecycle of
an ELM327 interface (identify, configure, ready, close), and exposes PID
reads, trouble code retrieval and raw commands on top of the command channel.

Usage Example:
    config = ConnectionConfig("/dev/ttyUSB0", BAUD_FAST, Units.METRIC)
    with OBDCommunicator(config) as obd:
        print(obd.pid("engine_rpm"))
        for code in obd.get_errors():
            print(code.id, code.description)
"""

import logging
from collections import OrderedDict
from typing import Dict, List, Optional

from obd_communication.config import ConnectionConfig, Units, setup_logging
from obd_communication.communicator.base_communication import TransportPort, SerialTransport
from obd_communication.communicator.command_channel import CommandChannel
from obd_communication.dtc.decoder import decode_errors
from obd_communication.dtc.description_store import DescriptionStore, DictDescriptionStore
from obd_communication.errors import InvalidStateError, OBDConnectionError
from obd_communication.models import ConnectionState, DiagnosticCode
from obd_communication.pids.registry import PidRegistry

# Sent after identification: disable echo, line feeds and spaces.
CONFIGURATION_COMMANDS = ("AT E0", "AT L0", "AT S0")


class OBDCommunicator:
    """
    Manages one conversation with an ELM327 OBD-II interface.
    """

    def __init__(self, config: ConnectionConfig, transport: Optional[TransportPort] = None,
                 store: Optional[DescriptionStore] = None, registry: Optional[PidRegistry] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initializes the OBDCommunicator. Nothing is opened until connect().

        Args:
            config: Validated connection settings.
            transport: Optional TransportPort; a SerialTransport is created otherwise.
            store: Optional description store used by get_errors().
            registry: Optional PID registry; the standard table is used otherwise.
            logger: Optional logger for debugging.
        """
        self.config = config
        if logger is None:
            # only the verbose child is set to DEBUG; the module logger level is left alone
            logger = setup_logging(f"{__name__}.verbose") if config.verbose else logging.getLogger(__name__)
        self.logger = logger
        self.transport = transport or SerialTransport(timeout=config.timeout, logger=self.logger)
        self.channel = CommandChannel(self.transport, logger=self.logger)
        self.store = store or DictDescriptionStore()
        self.registry = registry or PidRegistry(logger=self.logger)
        self._units = config.units
        self._state = ConnectionState.DISCONNECTED
        self.device_id: Optional[str] = None

    @property
    def state(self) -> ConnectionState:
        return self._state

    def _set_state(self, state: ConnectionState) -> None:
        if self.config.verbose:
            self.logger.debug(f"State {self._state.name} -> {state.name}")
        self._state = state

    @property
    def units(self) -> Units:
        return self._units

    @units.setter
    def units(self, value) -> None:
        units = Units.coerce(value, self.logger)
        if units is not None:
            self._units = units

    @property
    def header_width(self) -> int:
        """
        Characters of mode/PID echo stripped from data replies.
        """
        if self.config.header_width is not None:
            return self.config.header_width
        return self.channel.header_width

    def connect(self) -> bool:
        """
        Opens the port, identifies the ELM327 and disables echo, line feeds and spaces.

        Returns:
            True once the communicator is READY.

        Raises:
            InvalidStateError: If the communicator is not DISCONNECTED.
            OBDConnectionError: If the port cannot be opened or identification fails.
        """
        if self._state is not ConnectionState.DISCONNECTED:
            raise InvalidStateError(f"Cannot connect while {self._state.name}")
        self.logger.info(f"Opening connection to {self.config.device} @ {self.config.baudrate} baud")
        self.transport.open(self.config.device, self.config.baudrate)
        self._set_state(ConnectionState.IDENTIFYING)
        try:
            device_id = self.channel.command("AT I")
        except OBDConnectionError:
            self._abort_connect()
            raise
        if not device_id:
            self.logger.error("Failed to identify ELM327 OBD-II device")
            self._abort_connect()
            raise OBDConnectionError("identification failed")
        self.device_id = device_id
        self.logger.info(f"Identified device: {device_id}")

        self._set_state(ConnectionState.CONFIGURING)
        try:
            for command in CONFIGURATION_COMMANDS:
                self.channel.command(command)
        except OBDConnectionError:
            self._abort_connect()
            raise
        self._set_state(ConnectionState.READY)
        self.logger.info(f"Connected to ELM327 on {self.config.device}")
        return True

    def _abort_connect(self) -> None:
        self.transport.close()
        self.device_id = None
        self._set_state(ConnectionState.DISCONNECTED)

    def _require_ready(self) -> None:
        if self._state is not ConnectionState.READY:
            raise InvalidStateError(f"Connection is {self._state.name}, not READY")

    def close(self) -> bool:
        """
        Resets the device (best effort), releases the port and moves to CLOSED.
        Safe to call repeatedly or before connect().
        """
        if self._state is ConnectionState.CLOSED:
            return True
        self.logger.info("Closing connection")
        if self.transport.is_open:
            try:
                self.channel.command("AT Z")
            except OBDConnectionError as e:
                self.logger.warning(f"Reset before close failed: {str(e)}")
        self.transport.close()
        self._set_state(ConnectionState.CLOSED)
        return True

    def reset(self) -> Optional[str]:
        """
        Issues a soft reset (AT Z). The communicator stays READY.
        """
        self._require_ready()
        return self.channel.command("AT Z")

    def command(self, command: str) -> Optional[str]:
        """
        Issues a raw command and returns the cleaned response, or None on '?'/no data.
        """
        self._require_ready()
        return self.channel.command(command)

    def identify(self) -> Optional[str]:
        """
        Returns the identification string reported during connect().
        """
        return self.device_id

    def protocol(self) -> Optional[str]:
        """
        Returns the vehicle protocol the interface is using (AT DP).
        """
        return self.command("AT DP")

    def get_pids(self) -> List[str]:
        """
        Returns every readable PID key in registration order.
        """
        return self.registry.keys()

    def pid(self, key: str) -> str:
        """
        Reads and decodes one PID.

        Raises:
            InvalidStateError: If the communicator is not READY.
            NotFoundError: If the key is unknown.
        """
        self._require_ready()
        return self.registry.invoke(key, self.channel, self._units, self.header_width)

    def __getitem__(self, key: str) -> str:
        return self.pid(key)

    def read_all(self) -> Dict[str, str]:
        """
        Reads every PID once, in registration order.
        """
        self._require_ready()
        return OrderedDict((key, self.pid(key)) for key in self.registry.keys())

    def get_errors(self) -> List[DiagnosticCode]:
        """
        Retrieves stored trouble codes (mode 03) with their descriptions.
        """
        self._require_ready()
        errors = decode_errors(self.command("03"), self.store)
        self.logger.info(f"Found {len(errors)} stored trouble codes")
        return errors

    def clear_errors(self) -> Optional[str]:
        """
        Clears stored trouble codes (mode 04).
        """
        self._require_ready()
        self.logger.warning("Clearing stored trouble codes")
        return self.command("04")

    def __enter__(self) -> "OBDCommunicator":
        if self._state is ConnectionState.DISCONNECTED:
            self.connect()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
