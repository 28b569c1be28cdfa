"""
base_communication.py

Defines the TransportPort interface consumed by the command channel and the
SerialTransport class that implements it on top of pyserial.
Handles port setup with fixed 8N1 framing, writing raw bytes, reading until
the prompt delimiter, and closing the port.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, List

import serial

from obd_communication.config import SERIAL_SETTINGS, DEFAULT_TIMEOUT, PROMPT, available_ports
from obd_communication.errors import OBDConnectionError


class TransportPort(ABC):
    """
    Byte-oriented, blocking request/response channel to an ELM327 device.
    """

    @abstractmethod
    def open(self, device: str, baudrate: int) -> None:
        """
        Opens the device at the given baud rate (8 data bits, 1 stop bit, no parity).

        Raises:
            OBDConnectionError: If the device cannot be opened.
        """
        pass

    @abstractmethod
    def write(self, data: bytes) -> int:
        """
        Writes raw bytes and returns the number of bytes written.
        """
        pass

    @abstractmethod
    def read_until(self, delimiter: bytes = PROMPT) -> bytes:
        """
        Blocks until the delimiter arrives or the transport times out.
        Returns whatever was read, possibly b"".
        """
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    @property
    @abstractmethod
    def is_open(self) -> bool:
        pass


class SerialTransport(TransportPort):
    """
    TransportPort backed by a pyserial port.
    """

    def __init__(self, timeout: Optional[float] = DEFAULT_TIMEOUT, logger: Optional[logging.Logger] = None):
        """
        Initializes the transport.

        Args:
            timeout: Read timeout in seconds; None blocks until the delimiter arrives.
            logger: Optional logger instance.
        """
        self.logger = logger or logging.getLogger(__name__)
        self.ser: Optional[serial.Serial] = None
        self.current_settings = dict(SERIAL_SETTINGS, timeout=timeout)

    def open(self, device: str, baudrate: int) -> None:
        try:
            self.ser = serial.Serial(port=device, baudrate=baudrate, **self.current_settings)
            self.logger.info(f"Opened {device} @ {baudrate} baud")
        except (serial.SerialException, OSError, ValueError) as e:
            self.logger.error(f"Connection failed: {str(e)}")
            self.ser = None
            raise OBDConnectionError(f"Unable to open {device}: {e}") from e

    def write(self, data: bytes) -> int:
        if not self.is_open:
            raise OBDConnectionError("Not connected")
        try:
            self.ser.reset_input_buffer()
            written = self.ser.write(data)
            self.ser.flush()
        except (serial.SerialException, OSError) as e:
            self.logger.error(f"Write failed: {str(e)}")
            raise OBDConnectionError(f"Write failed: {e}") from e
        return written or 0

    def read_until(self, delimiter: bytes = PROMPT) -> bytes:
        """
        Reads response bytes up to and including the delimiter.
        A timeout or a port closed underneath the read yields whatever arrived.
        """
        if not self.is_open:
            return b""
        try:
            return self.ser.read_until(expected=delimiter)
        except (serial.SerialException, OSError) as e:
            self.logger.error(f"Read failed: {str(e)}")
            return b""

    def close(self) -> None:
        try:
            if self.ser and self.ser.is_open:
                self.ser.close()
                self.logger.info(f"Closed {self.ser.port}")
        except (serial.SerialException, OSError) as e:
            self.logger.error(f"Error disconnecting: {str(e)}")
        finally:
            self.ser = None

    @property
    def is_open(self) -> bool:
        return bool(self.ser and self.ser.is_open)

    @staticmethod
    def list_ports() -> List[str]:
        """
        Lists available serial ports.

        Returns:
            A list of available port names.
        """
        return available_ports()
