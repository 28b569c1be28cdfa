from obd_communication.dtc.decoder import decode_errors, parse_codes, DTC_PREFIXES, UNKNOWN_CODE
from obd_communication.dtc.description_store import (
    DescriptionStore,
    DictDescriptionStore,
    SQLiteDescriptionStore,
    STANDARD_DTCS,
)

__all__ = [
    'decode_errors',
    'parse_codes',
    'DTC_PREFIXES',
    'UNKNOWN_CODE',
    'DescriptionStore',
    'DictDescriptionStore',
    'SQLiteDescriptionStore',
    'STANDARD_DTCS',
]
