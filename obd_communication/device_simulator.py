#!/usr/bin/env python3
"""
device_simulator.py

This module implements the ELM327Simulator class which emulates an ELM327
OBD-II interface for testing without physical hardware. It implements the
TransportPort interface, so it can stand in for a serial port anywhere in the
engine, and it keeps an internal state so that AT settings affect later replies.

Features:
  - Answers AT I, AT Z, AT RV, AT DP and the AT E/L/S on-off settings, and "?" for
    anything else starting with AT.
  - Echo, line feeds and spaces start enabled (power-on defaults) and are
    applied to every reply, so echo and header stripping can be exercised.
  - Mode 01 replies come from a settable map of PID -> data hex digits; unknown
    PIDs answer NO DATA.
  - Mode 03 reports the stored trouble codes, mode 04 clears them.
  - A silent mode returns nothing, imitating a transport read timeout.
  - bus_error makes every vehicle request answer with an interface error line.

Usage Example:
    simulator = ELM327Simulator(pids={"0C": "1AE0", "0D": "FF"})
    config = ConnectionConfig(device="/dev/null")
    with OBDCommunicator(config, transport=simulator) as obd:
        print(obd.pid("engine_rpm"))   # 1720.00rpm
"""

import logging
from typing import Dict, Iterable, List, Optional

from obd_communication.communicator.base_communication import TransportPort
from obd_communication.config import PROMPT
from obd_communication.errors import OBDConnectionError

DEFAULT_PIDS = {
    "04": "7F",      # engine load
    "05": "5A",      # coolant temperature
    "0A": "40",      # fuel pressure
    "0C": "1AE0",    # engine rpm
    "0D": "3C",      # speed
    "0F": "46",      # intake temperature
    "11": "33",      # throttle
    "1F": "0E10",    # uptime
    "2F": "B4",      # fuel level
    "46": "41",      # ambient air temperature
}


class ELM327Simulator(TransportPort):
    """
    In-memory ELM327 interface implementing the TransportPort interface.
    """

    def __init__(self, pids: Optional[Dict[str, str]] = None, dtcs: Optional[Iterable[str]] = None,
                 device_id: str = "ELM327 v1.5", voltage: str = "12.6V",
                 protocol: str = "AUTO, ISO 15765-4 (CAN 11/500)",
                 logger: Optional[logging.Logger] = None):
        """
        Initializes the simulator.

        Args:
            pids: Mode 01 PID (two hex digits) -> data hex digits.
            dtcs: Stored trouble codes as 4 hex digits each (e.g., "0301").
            device_id: Reply to AT I; "" simulates a device that fails identification.
            voltage: Reply to AT RV.
            protocol: Reply to AT DP.
            logger: Optional logger instance.
        """
        self.pids = dict(DEFAULT_PIDS if pids is None else pids)
        self.dtcs: List[str] = list(dtcs or [])
        self.device_id = device_id
        self.voltage = voltage
        self.protocol = protocol
        self.logger = logger or logging.getLogger("ELM327Simulator")
        self.silent = False
        self.fail_open = False
        # Reply to every vehicle request instead of data, e.g. "UNABLE TO CONNECT" with the ignition off.
        self.bus_error: Optional[str] = None
        self.device: Optional[str] = None
        self.baudrate: Optional[int] = None
        self.sent: List[str] = []
        self._connected = False
        self._buffer = b""
        self._power_on()

    def _power_on(self) -> None:
        self.echo = True
        self.linefeeds = True
        self.spaces = True

    def open(self, device: str, baudrate: int) -> None:
        if self.fail_open:
            raise OBDConnectionError(f"Unable to open {device}")
        self.device = device
        self.baudrate = baudrate
        self._connected = True
        self._buffer = b""
        self.logger.info(f"Simulated device connected on {device} @ {baudrate} baud.")

    def close(self) -> None:
        if self._connected:
            self.logger.info("Simulated device disconnected.")
        self._connected = False
        self._buffer = b""

    @property
    def is_open(self) -> bool:
        return self._connected

    def write(self, data: bytes) -> int:
        if not self._connected:
            raise OBDConnectionError("Simulated device not connected.")
        command = data.decode("ascii").rstrip("\r")
        self.sent.append(command)
        self.logger.debug(f"Simulated command received: {command}")
        if self.silent:
            self._buffer = b""
            return len(data)
        echoed = self._line(command) if self.echo else ""
        reply = self._respond(command)
        self._buffer = (echoed + (self._line(reply) if reply else "") + self._eol()).encode("ascii") + PROMPT
        return len(data)

    def read_until(self, delimiter: bytes = PROMPT) -> bytes:
        if not self._connected:
            return b""
        index = self._buffer.find(delimiter)
        if index < 0:
            response, self._buffer = self._buffer, b""
        else:
            response, self._buffer = self._buffer[:index + len(delimiter)], self._buffer[index + len(delimiter):]
        return response

    def _eol(self) -> str:
        return "\r\n" if self.linefeeds else "\r"

    def _line(self, text: str) -> str:
        return text + self._eol()

    def _hex(self, digits: str) -> str:
        if not self.spaces:
            return digits
        return " ".join(digits[i:i + 2] for i in range(0, len(digits), 2))

    def _respond(self, command: str) -> str:
        normalized = command.replace(" ", "").upper()
        if normalized.startswith("AT"):
            return self._respond_at(normalized[2:])
        if self.bus_error:
            return self.bus_error
        if normalized.startswith("01") and len(normalized) == 4:
            data = self.pids.get(normalized[2:])
            if data is None:
                return "NO DATA"
            return self._hex("41" + normalized[2:] + data)
        if normalized == "03":
            if not self.dtcs:
                return "OK"
            return self._hex(f"43{len(self.dtcs):X}" + "".join(self.dtcs) + "0")
        if normalized == "04":
            self.dtcs = []
            return "44"
        return "?"

    def _respond_at(self, setting: str) -> str:
        if setting == "I":
            return self.device_id
        if setting == "Z":
            self._power_on()
            return self.device_id
        if setting == "RV":
            return self.voltage
        if setting == "DP":
            return self.protocol
        toggles = {"E": "echo", "L": "linefeeds", "S": "spaces"}
        if len(setting) == 2 and setting[0] in toggles and setting[1] in "01":
            setattr(self, toggles[setting[0]], setting[1] == "1")
            return "OK"
        return "?"
