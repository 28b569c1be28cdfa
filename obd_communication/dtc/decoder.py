"""
decoder.py

Parses a mode 03 response into normalized diagnostic trouble codes and
attaches descriptions from a DescriptionStore.

Response layout after whitespace removal:
    [3 header nibbles] [4 nibbles per code] ... [1 trailing nibble]
Each code's first nibble selects the system/prefix from DTC_PREFIXES, the other
three nibbles are copied verbatim: "0301" -> "P0301", "C100" -> "U0100".
"""

import logging
import re
from typing import List, Optional

from obd_communication.dtc.description_store import DescriptionStore, DictDescriptionStore
from obd_communication.errors import MalformedResponseError
from obd_communication.models import DiagnosticCode

logger = logging.getLogger(__name__)

UNKNOWN_CODE = "unknown code"
HEADER_NIBBLES = 3
TRAILER_NIBBLES = 1
CODE_NIBBLES = 4

# OBD-II error code prefixes
DTC_PREFIXES = {
    # Powertrain codes
    "0": "P0", "1": "P1", "2": "P2", "3": "P3",
    # Chassis codes
    "4": "C0", "5": "C1", "6": "C2", "7": "C3",
    # Body codes
    "8": "B0", "9": "B1", "A": "B2", "B": "B3",
    # Network codes
    "C": "U0", "D": "U1", "E": "U2", "F": "U3",
}

_HEX_RE = re.compile(r"^[0-9A-F]*$")


def parse_codes(response: Optional[str]) -> List[str]:
    """
    Splits a mode 03 response into normalized code identifiers.

    Args:
        response: Cleaned response text, or None.

    Returns:
        Code identifiers in response order; empty if the response is empty or "OK".

    Raises:
        MalformedResponseError: If the response contains non-hex characters.
    """
    if not response or "OK" in response.upper():
        return []
    nibbles = "".join(response.split()).upper()
    if not _HEX_RE.match(nibbles):
        raise MalformedResponseError(f"Malformed trouble code response: {response!r}")
    body = nibbles[HEADER_NIBBLES:len(nibbles) - TRAILER_NIBBLES]
    codes = []
    for start in range(0, len(body), CODE_NIBBLES):
        chunk = body[start:start + CODE_NIBBLES]
        if len(chunk) < CODE_NIBBLES:
            logger.debug(f"Ignoring partial code chunk: {chunk}")
            continue
        if chunk == "0000":
            # padding
            continue
        codes.append(DTC_PREFIXES[chunk[0]] + chunk[1:])
    return codes


def decode_errors(response: Optional[str], store: Optional[DescriptionStore] = None) -> List[DiagnosticCode]:
    """
    Decodes a mode 03 response into DiagnosticCode objects.

    Args:
        response: Cleaned response text, or None.
        store: Description lookup; defaults to the built-in DictDescriptionStore.

    Returns:
        One DiagnosticCode per code; codes missing from the store get "unknown code".
    """
    store = store or DictDescriptionStore()
    errors = []
    for code in parse_codes(response):
        description = store.lookup(code)
        if description is None:
            logger.info(f"No description for {code}")
            description = UNKNOWN_CODE
        errors.append(DiagnosticCode(id=code, description=description))
    return errors
