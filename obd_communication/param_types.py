"""
param_types.py

Defines the decode formula tags and the data class for PID definitions.
This file standardizes how every mode-01 parameter is described, so the
registry holds plain data and the decoders dispatch on the formula tag.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional, Union


class Formula(Enum):
    """
    Enumeration of the decode formulas applied to PID responses.
    """
    VOLTAGE = "voltage"
    PERCENTAGE = "percentage"
    TEMPERATURE = "temperature"
    FUEL_PRESSURE = "fuel_pressure"
    RPM = "rpm"
    SPEED = "speed"
    DISTANCE = "distance"
    TIME = "time"
    TIME_MINUTES = "time_minutes"


@dataclass(frozen=True)
class PidDefinition:
    """
    Data class representing one readable vehicle parameter.

    Attributes:
        key: Human-readable identifier, unique across the registry (e.g., "engine_rpm").
        command: The raw command sent to the interface (e.g., "01 0C").
        formula: Which decode formula applies to the response.
        width: Width of the data field in bytes (0 means the whole reply).
        min_value: Lowest valid decoded value; anything outside the range reads as 0.
        max_value: Highest valid decoded value.
        description: A human-readable description of the parameter.
    """
    key: str
    command: str
    formula: Formula
    width: int = 1
    min_value: Optional[Union[int, float]] = None
    max_value: Optional[Union[int, float]] = None
    description: str = ""
