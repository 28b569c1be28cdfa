"""
decoders.py

Pure functions translating a raw PID response into a formatted measurement.

Each formula extracts a fixed-width hex field from the payload (the response
with its mode/PID echo removed), converts it, range-checks it (out-of-range
values read as 0) and formats it with two decimals and a unit suffix chosen
by the unit system. An absent or empty response always yields PID_NULL.
"""

import logging
from typing import Callable, Dict, Optional, Union

from obd_communication.config import PID_NULL, Units
from obd_communication.communicator.response_handler import parse_hex, extract_payload
from obd_communication.errors import MalformedResponseError
from obd_communication.param_types import Formula, PidDefinition

logger = logging.getLogger(__name__)

KPA_TO_PSI = 0.145037738
KMH_TO_MPH = 0.621371192
KM_TO_MI = 0.621371

Number = Union[int, float]


def in_range(value: Number, minimum: Optional[Number], maximum: Optional[Number]) -> bool:
    """Validate range on engine metrics."""
    if minimum is not None and value < minimum:
        return False
    if maximum is not None and value > maximum:
        return False
    return True


def _clamp(value: Number, definition: PidDefinition) -> Number:
    if not in_range(value, definition.min_value, definition.max_value):
        logger.debug(f"{definition.key}: {value} out of range, reading as 0")
        return 0
    return value


def _field(payload: str, definition: PidDefinition) -> int:
    return parse_hex(payload[:definition.width * 2])


def _voltage(response: str, definition: PidDefinition, units: Units) -> str:
    text = response.strip().upper().rstrip("V").strip()
    try:
        volts = float(text)
    except ValueError:
        raise MalformedResponseError(f"Malformed voltage: {response!r}")
    return f"{volts:0.2f}V"


def _percentage(payload: str, definition: PidDefinition, units: Units) -> str:
    percent = _clamp(_field(payload, definition) * 100 / 255, definition)
    return f"{percent:0.2f}%"


def _temperature(payload: str, definition: PidDefinition, units: Units) -> str:
    celsius = _clamp(_field(payload, definition) - 40, definition)
    if units is Units.ENGLISH:
        return f"{celsius * 9 / 5 + 32:0.2f}F"
    return f"{celsius:0.2f}C"


def _fuel_pressure(payload: str, definition: PidDefinition, units: Units) -> str:
    kpa = _clamp(_field(payload, definition) * 3, definition)
    if units is Units.ENGLISH:
        return f"{kpa * KPA_TO_PSI:0.2f}psi"
    return f"{kpa:0.2f}kPa"


def _rpm(payload: str, definition: PidDefinition, units: Units) -> str:
    rpm = _clamp(_field(payload, definition) / 4, definition)
    return f"{rpm:0.2f}rpm"


def _speed(payload: str, definition: PidDefinition, units: Units) -> str:
    speed = _clamp(_field(payload, definition), definition)
    if units is Units.ENGLISH:
        return f"{speed * KMH_TO_MPH:0.2f}mph"
    return f"{speed:0.2f}km/h"


def _distance(payload: str, definition: PidDefinition, units: Units) -> str:
    distance = _clamp(_field(payload, definition), definition)
    if units is Units.ENGLISH:
        return f"{distance * KM_TO_MI:0.2f}mi"
    return f"{distance:0.2f}km"


def _time(payload: str, definition: PidDefinition, units: Units) -> str:
    seconds = _clamp(_field(payload, definition), definition)
    return f"{seconds // 3600:02d}:{seconds // 60 % 60:02d}:{seconds % 60:02d}"


def _time_minutes(payload: str, definition: PidDefinition, units: Units) -> str:
    minutes = _clamp(_field(payload, definition), definition)
    return f"{minutes // 60:02d}:{minutes % 60:02d}:00"


# VOLTAGE reads the whole reply; every other formula reads the payload.
FORMULAS: Dict[Formula, Callable[[str, PidDefinition, Units], str]] = {
    Formula.VOLTAGE: _voltage,
    Formula.PERCENTAGE: _percentage,
    Formula.TEMPERATURE: _temperature,
    Formula.FUEL_PRESSURE: _fuel_pressure,
    Formula.RPM: _rpm,
    Formula.SPEED: _speed,
    Formula.DISTANCE: _distance,
    Formula.TIME: _time,
    Formula.TIME_MINUTES: _time_minutes,
}


def decode(definition: PidDefinition, response: Optional[str], units: Units = Units.ENGLISH,
           header_width: int = 4) -> str:
    """
    Decodes one response for the given PID definition.

    Args:
        definition: The PID being decoded.
        response: Cleaned response text, or None if the device gave nothing usable.
        units: Unit system selecting the output formula and suffix.
        header_width: Characters of mode/PID echo to drop before the data field.

    Returns:
        The formatted measurement, or PID_NULL.
    """
    if not response:
        return PID_NULL
    formula = FORMULAS[definition.formula]
    if definition.formula is Formula.VOLTAGE:
        data = response
    else:
        data = extract_payload(response, header_width)
    try:
        return formula(data, definition, units)
    except MalformedResponseError as e:
        logger.warning(f"{definition.key}: {e}")
        return PID_NULL
