"""
response_handler.py

Defines the ResponseHandler class for turning raw ELM327 reply bytes into the
trimmed response text the rest of the engine works with, plus the helpers that
slice the payload out of a response and parse its hexadecimal fields.
"""

import re
from typing import Optional

from obd_communication.errors import MalformedResponseError

_HEX_RE = re.compile(r"^[0-9A-Fa-f]+$")

# Status lines the interpreter prints before the actual data (e.g. "BUS INIT: ...OK").
_STATUS_PREFIXES = ("SEARCHING", "BUS INIT")
# Replies meaning the vehicle had nothing to say.
_EMPTY_REPLIES = ("NO DATA", "STOPPED")
# Interpreter errors reported instead of vehicle data (ignition off, bus faults).
_ERROR_REPLIES = ("UNABLE TO CONNECT", "BUS BUSY", "BUFFER FULL", "ACT ALERT", "LV RESET", "LP ALERT")


def parse_hex(field: str) -> int:
    """
    Converts a hexadecimal field to an integer.

    Args:
        field: Hex digits without prefix or separators (e.g., "1AE0").

    Returns:
        The integer value.

    Raises:
        MalformedResponseError: If the field is empty or contains non-hex characters.
    """
    if not field or not _HEX_RE.match(field):
        raise MalformedResponseError(f"Malformed hex field: {field!r}")
    return int(field, 16)


def extract_payload(response: str, header_width: int) -> str:
    """
    Drops the mode/PID echo from a response and removes any separators.

    Args:
        response: Cleaned response text (e.g., "410C1AE0" or "41 0C 1A E0").
        header_width: Number of leading characters forming the echo.

    Returns:
        The payload hex digits (e.g., "1AE0").
    """
    return "".join(response[header_width:].split())


class ResponseHandler:
    """
    Cleans and classifies raw responses from the interface.
    """

    def __init__(self, prompt: str = ">"):
        """
        Initializes the ResponseHandler.

        Args:
            prompt: The character the device prints when it is ready for the next command.
        """
        self.prompt = prompt

    def clean(self, raw: bytes, command: str = "", echo: bool = False) -> str:
        """
        Converts raw reply bytes into trimmed response text.

        Removes the prompt and surrounding whitespace, the echoed command when
        echo is still enabled, and interpreter status lines.

        Args:
            raw: Bytes read from the transport, prompt included.
            command: The command that was sent (without terminator).
            echo: True while the device still echoes commands back.

        Returns:
            The response text, possibly "".
        """
        if not raw:
            return ""
        text = raw.decode("ascii", errors="replace")
        text = text.strip(self.prompt + " \t\r\n")
        if echo and command and text.startswith(command):
            text = text[len(command):]
        lines = []
        for line in re.split(r"[\r\n]+", text):
            line = line.strip()
            if line and not line.upper().startswith(_STATUS_PREFIXES):
                lines.append(line)
        return "\n".join(lines)

    @staticmethod
    def is_error(response: Optional[str]) -> bool:
        """True if the response carries the unrecognized-command marker."""
        return bool(response) and "?" in response

    @staticmethod
    def is_empty(response: Optional[str]) -> bool:
        """True if the response holds no data."""
        return not response or response.strip().upper() in _EMPTY_REPLIES

    @staticmethod
    def is_device_error(response: Optional[str]) -> bool:
        """
        True if the interpreter reported a link or bus error (UNABLE TO CONNECT,
        CAN ERROR, BUS ERROR, <RX ERROR, ...) instead of data.
        """
        if not response:
            return False
        for line in response.upper().splitlines():
            line = line.strip()
            if line in _ERROR_REPLIES or line.endswith("ERROR"):
                return True
        return False

    @staticmethod
    def is_ok(response: Optional[str]) -> bool:
        """True if the device acknowledged a setting with OK."""
        return bool(response) and "OK" in response.upper()

    @staticmethod
    def format_response(response: bytes) -> str:
        """
        Formats raw bytes for log output with control characters made visible.
        """
        if not response:
            return "No response"
        return response.decode("ascii", errors="replace").replace("\r", "\\r").replace("\n", "\\n")
