import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import serial
from serial.tools import list_ports

from obd_communication.errors import ConfigurationError

# A global list of accepted baud rates
BAUD_RATES = [9600, 19200, 38400, 57600, 115200]
BAUD_DEFAULT = 9600
BAUD_FAST = 38400

# Fixed framing used by every ELM327 link (8N1).
SERIAL_SETTINGS = {
    "bytesize": serial.EIGHTBITS,
    "parity": serial.PARITY_NONE,
    "stopbits": serial.STOPBITS_ONE,
    "write_timeout": 1.0
}
DEFAULT_TIMEOUT = 5.0

# Wire framing
TERMINATOR = "\r"
PROMPT = b">"

# Message returned when a PID cannot be read from the vehicle
PID_NULL = "not supported"


class Units(Enum):
    """
    Unit system consulted by the metric decoders.
    """
    ENGLISH = "english"
    METRIC = "metric"

    @classmethod
    def coerce(cls, value, logger: Optional[logging.Logger] = None) -> Optional["Units"]:
        """
        Converts a Units member or its name/value string into a Units member.

        Returns None when the value is not a known unit system.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if value.lower() in (member.value, member.name.lower()):
                    return member
        (logger or logging.getLogger(__name__)).warning(f"Invalid unit system: {value!r}")
        return None


def available_ports() -> List[str]:
    """
    Lists the serial port names pyserial can see.
    """
    return [p.device for p in list_ports.comports()]


def device_available(device: str) -> bool:
    """
    True if the device is an existing path or a port reported by pyserial.
    """
    if device and os.path.exists(device):
        return True
    return device in available_ports()


@dataclass(frozen=True)
class ConnectionConfig:
    """
    Settings for one conversation with an ELM327 interface.

    Attributes:
        device: Serial device path or port name (e.g. "/dev/ttyUSB0", "COM3").
        baudrate: One of BAUD_RATES.
        units: Unit system used by decoders. Invalid values fall back to English.
        verbose: Emit DEBUG trace lines from the communicator.
        timeout: Transport read timeout in seconds; None blocks until the prompt arrives.
        header_width: Overrides the number of response characters stripped as the
            mode/PID echo. None derives it from the acknowledged AT settings.
    """
    device: str
    baudrate: int = BAUD_DEFAULT
    units: Units = Units.ENGLISH
    verbose: bool = False
    timeout: Optional[float] = DEFAULT_TIMEOUT
    header_width: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.device, str) or not device_available(self.device):
            raise ConfigurationError(f"Unable to set device for OBD-II connection: {self.device!r}")
        if isinstance(self.baudrate, bool) or not isinstance(self.baudrate, int) \
                or self.baudrate not in BAUD_RATES:
            raise ConfigurationError(f"Unable to set baudrate for OBD-II connection: {self.baudrate!r}")
        if self.header_width is not None and (not isinstance(self.header_width, int) or self.header_width < 0):
            raise ConfigurationError(f"Invalid header width: {self.header_width!r}")
        units = Units.coerce(self.units)
        if units is None:
            logging.getLogger(__name__).warning("Defaulting to English units")
            units = Units.ENGLISH
        # frozen dataclass: bypass __setattr__ to store the normalized value
        object.__setattr__(self, "units", units)


def setup_logging(name: str, level: int = logging.DEBUG) -> logging.Logger:
    """
    Configures a console logger for trace output.
    The level is set on the named logger only; its handler is attached once.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        logger.addHandler(console_handler)

    return logger
