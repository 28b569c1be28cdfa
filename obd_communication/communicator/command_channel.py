"""
command_channel.py

Implements the CommandChannel class that runs one request/response cycle at a
time against an ELM327 interface: terminate the command, write it, read until
the prompt, clean the reply and detect the protocol-level error markers.

The channel also remembers which formatting settings the device acknowledged
(echo, line feeds, spaces), since those decide how many characters of a reply
are echo and header rather than payload.

Usage Example:
    channel = CommandChannel(transport)
    response = channel.command("01 0C")   # "410C1AE0", or None on '?'/no data
"""

import logging
from typing import Optional

from obd_communication.config import TERMINATOR, PROMPT
from obd_communication.communicator.base_communication import TransportPort
from obd_communication.communicator.response_handler import ResponseHandler
from obd_communication.errors import ProtocolError, EmptyResponseError

# Mode/PID echo width in a reply ("410C" vs "41 0C ").
HEADER_WIDTH_COMPACT = 4
HEADER_WIDTH_SPACED = 6


class CommandChannel:
    """
    Half-duplex request/response channel over a TransportPort.
    """

    def __init__(self, transport: TransportPort, response_handler: Optional[ResponseHandler] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initializes the channel.

        Args:
            transport: An opened (or soon to be opened) TransportPort.
            response_handler: Optional ResponseHandler; a default one is created otherwise.
            logger: Optional logger for debugging.
        """
        self.transport = transport
        self.response_handler = response_handler or ResponseHandler(PROMPT.decode("ascii"))
        self.logger = logger or logging.getLogger(__name__)
        self._reset_device_settings()

    def _reset_device_settings(self) -> None:
        # ELM327 power-on defaults
        self.echo = True
        self.linefeeds = True
        self.spaces = True

    @property
    def header_width(self) -> int:
        """
        Width of the mode/PID echo at the start of a data reply, derived from
        whether the device acknowledged AT S0.
        """
        return HEADER_WIDTH_SPACED if self.spaces else HEADER_WIDTH_COMPACT

    def _exchange(self, command: str) -> str:
        """
        Writes one command and reads its reply. Exactly one command is in flight.

        Args:
            command: Command text without terminator (e.g., "AT I", "01 0C").

        Returns:
            The cleaned response text, possibly "".
        """
        self.logger.debug(f"Sending command: {command}")
        self.transport.write((command + TERMINATOR).encode("ascii"))
        raw = self.transport.read_until(PROMPT)
        self.logger.debug(f"Received response: {self.response_handler.format_response(raw)}")
        if raw and not raw.endswith(PROMPT):
            self.logger.warning(f"No prompt after {command!r}; transport timed out")
        response = self.response_handler.clean(raw, command, self.echo)
        self._track_settings(command, response)
        return response

    def _track_settings(self, command: str, response: str) -> None:
        normalized = command.replace(" ", "").upper()
        if normalized == "ATZ":
            self._reset_device_settings()
            return
        if not self.response_handler.is_ok(response):
            return
        if normalized == "ATE0":
            self.echo = False
        elif normalized == "ATL0":
            self.linefeeds = False
        elif normalized == "ATS0":
            self.spaces = False
        elif normalized == "ATE1":
            self.echo = True
        elif normalized == "ATL1":
            self.linefeeds = True
        elif normalized == "ATS1":
            self.spaces = True

    def request(self, command: str) -> str:
        """
        Issues a command and returns its response.

        Raises:
            ProtocolError: The device did not recognize the command ('?').
            EmptyResponseError: No data came back (empty reply, NO DATA, timeout, or an
                interface error such as UNABLE TO CONNECT).
        """
        response = self._exchange(command)
        if self.response_handler.is_error(response):
            raise ProtocolError(f"Unrecognized command: {command!r}")
        if self.response_handler.is_empty(response):
            raise EmptyResponseError(f"No data for command: {command!r}")
        if self.response_handler.is_device_error(response):
            self.logger.warning(f"Interface reported {response!r} for {command!r}")
            raise EmptyResponseError(f"No data for command: {command!r} ({response})")
        return response

    def command(self, command: str) -> Optional[str]:
        """
        Issues a command and returns its response, or None when the device
        answered '?' or nothing at all.
        """
        try:
            return self.request(command)
        except (ProtocolError, EmptyResponseError) as e:
            self.logger.debug(str(e))
            return None
