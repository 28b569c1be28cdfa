import pytest

from obd_communication.communicator.response_handler import ResponseHandler, parse_hex, extract_payload
from obd_communication.errors import MalformedResponseError


@pytest.fixture
def handler():
    return ResponseHandler()


class TestClean:
    def test_strips_prompt_and_whitespace(self, handler):
        assert handler.clean(b"410C1AE0\r\r>") == "410C1AE0"

    def test_empty_input(self, handler):
        assert handler.clean(b"") == ""
        assert handler.clean(b">") == ""

    def test_strips_echo_while_enabled(self, handler):
        raw = b"01 0C\r\n41 0C 1A E0\r\n\r\n>"
        assert handler.clean(raw, "01 0C", echo=True) == "41 0C 1A E0"

    def test_keeps_text_when_echo_disabled(self, handler):
        assert handler.clean(b"AT I\rELM327 v1.5\r>", "AT I", echo=False) == "AT I\nELM327 v1.5"

    def test_drops_status_lines(self, handler):
        raw = b"SEARCHING...\r410D3C\r\r>"
        assert handler.clean(raw, "01 0D") == "410D3C"

    def test_multiline_reply_joined_with_newlines(self, handler):
        raw = b"48 6B 10 41 0C 1A E0\r48 6B 18 41 0C 1A E0\r\r>"
        assert handler.clean(raw) == "48 6B 10 41 0C 1A E0\n48 6B 18 41 0C 1A E0"


class TestClassification:
    @pytest.mark.parametrize("response", ["?", "01 99\r?", "UNKNOWN?"])
    def test_is_error(self, response):
        assert ResponseHandler.is_error(response)

    @pytest.mark.parametrize("response", ["", None, "410C1AE0"])
    def test_is_not_error(self, response):
        assert not ResponseHandler.is_error(response)

    @pytest.mark.parametrize("response", ["", None, "NO DATA", "no data", "STOPPED"])
    def test_is_empty(self, response):
        assert ResponseHandler.is_empty(response)

    def test_data_is_not_empty(self):
        assert not ResponseHandler.is_empty("410D3C")

    def test_is_ok(self):
        assert ResponseHandler.is_ok("OK")
        assert not ResponseHandler.is_ok("?")

    def test_format_response_escapes_control_characters(self):
        assert ResponseHandler.format_response(b"OK\r\n>") == "OK\\r\\n>"
        assert ResponseHandler.format_response(b"") == "No response"


class TestParseHex:
    @pytest.mark.parametrize("field, expected", [("00", 0), ("FF", 255), ("1AE0", 6880), ("ff", 255)])
    def test_valid(self, field, expected):
        assert parse_hex(field) == expected

    @pytest.mark.parametrize("field", ["", "ZZ", "1A E0", "0x1A", "-1"])
    def test_malformed(self, field):
        with pytest.raises(MalformedResponseError):
            parse_hex(field)


class TestExtractPayload:
    def test_compact(self):
        assert extract_payload("410C1AE0", 4) == "1AE0"

    def test_spaced(self):
        assert extract_payload("41 0C 1A E0", 6) == "1AE0"

    def test_short_response(self):
        assert extract_payload("41", 4) == ""


class TestInterfaceStatus:
    """Status and error lines the interpreter prints instead of, or ahead of, data."""

    @pytest.mark.parametrize("raw", [
        b"BUS INIT: ...OK\r410C1AE0\r\r>",
        b"BUS INIT: ...\r410C1AE0\r\r>",
        b"SEARCHING...\r410C1AE0\r\r>",
    ])
    def test_status_lines_dropped(self, handler, raw):
        assert handler.clean(raw, "01 0C") == "410C1AE0"

    def test_failed_bus_init_leaves_error(self, handler):
        assert handler.clean(b"BUS INIT: ...ERROR\rUNABLE TO CONNECT\r\r>") == "UNABLE TO CONNECT"

    @pytest.mark.parametrize("response", [
        "UNABLE TO CONNECT",
        "CAN ERROR",
        "BUS ERROR",
        "ERROR",
        "<RX ERROR",
        "FB ERROR",
        "BUS BUSY",
        "BUFFER FULL",
        "41 0C\nCAN ERROR",
    ])
    def test_is_device_error(self, response):
        assert ResponseHandler.is_device_error(response)

    @pytest.mark.parametrize("response", ["", None, "410C1AE0", "NO DATA", "OK", "ELM327 v1.5", "12.6V"])
    def test_is_not_device_error(self, response):
        assert not ResponseHandler.is_device_error(response)
