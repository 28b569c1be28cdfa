"""
definitions.py

Defines the table of vehicle parameters readable through the ELM327.
Order matters: the registry enumerates keys in the order listed here.
"""

from obd_communication.param_types import Formula, PidDefinition


class Mode01Pid:
    """
    Contains the parameter definitions queried through mode 01 (and AT RV).
    """
    VOLTAGE = PidDefinition(
        key="voltage",
        command="AT RV",
        formula=Formula.VOLTAGE,
        width=0,
        description="Battery voltage at the interface"
    )
    ENGINE_LOAD = PidDefinition(
        key="engine_load",
        command="01 04",
        formula=Formula.PERCENTAGE,
        width=1,
        min_value=0,
        max_value=100,
        description="Calculated engine load"
    )
    COOLANT_TEMPERATURE = PidDefinition(
        key="coolant_temperature",
        command="01 05",
        formula=Formula.TEMPERATURE,
        width=2,
        min_value=-40,
        max_value=215,
        description="Engine coolant temperature"
    )
    FUEL_PRESSURE = PidDefinition(
        key="fuel_pressure",
        command="01 0A",
        formula=Formula.FUEL_PRESSURE,
        width=1,
        min_value=0,
        max_value=765,
        description="Fuel pressure (gauge)"
    )
    ENGINE_RPM = PidDefinition(
        key="engine_rpm",
        command="01 0C",
        formula=Formula.RPM,
        width=2,
        min_value=0,
        max_value=16383.75,
        description="Engine speed"
    )
    SPEED = PidDefinition(
        key="speed",
        command="01 0D",
        formula=Formula.SPEED,
        width=2,
        min_value=0,
        max_value=255,
        description="Vehicle speed"
    )
    INTAKE_TEMPERATURE = PidDefinition(
        key="intake_temperature",
        command="01 0F",
        formula=Formula.TEMPERATURE,
        width=2,
        min_value=-40,
        max_value=215,
        description="Intake air temperature"
    )
    THROTTLE = PidDefinition(
        key="throttle",
        command="01 11",
        formula=Formula.PERCENTAGE,
        width=1,
        min_value=0,
        max_value=100,
        description="Throttle position"
    )
    UPTIME = PidDefinition(
        key="uptime",
        command="01 1F",
        formula=Formula.TIME,
        width=2,
        min_value=0,
        max_value=65535,
        description="Run time since engine start"
    )
    MALFUNCTION_DISTANCE = PidDefinition(
        key="malfunction_distance",
        command="01 21",
        formula=Formula.DISTANCE,
        width=2,
        min_value=0,
        max_value=65535,
        description="Distance traveled with malfunction indicator lamp on"
    )
    FUEL_LEVEL = PidDefinition(
        key="fuel_level",
        command="01 2F",
        formula=Formula.PERCENTAGE,
        width=1,
        min_value=0,
        max_value=100,
        description="Fuel tank level input"
    )
    OK_DISTANCE = PidDefinition(
        key="ok_distance",
        command="01 31",
        formula=Formula.DISTANCE,
        width=2,
        min_value=0,
        max_value=65535,
        description="Distance traveled since codes cleared"
    )
    AIR_TEMPERATURE = PidDefinition(
        key="air_temperature",
        command="01 46",
        formula=Formula.TEMPERATURE,
        width=2,
        min_value=-40,
        max_value=215,
        description="Ambient air temperature"
    )
    MALFUNCTION_TIME = PidDefinition(
        key="malfunction_time",
        command="01 4D",
        formula=Formula.TIME_MINUTES,
        width=2,
        min_value=0,
        max_value=65535,
        description="Time run with malfunction indicator lamp on"
    )
    OK_TIME = PidDefinition(
        key="ok_time",
        command="01 4E",
        formula=Formula.TIME_MINUTES,
        width=2,
        min_value=0,
        max_value=65535,
        description="Time since trouble codes cleared"
    )
    ETHANOL = PidDefinition(
        key="ethanol",
        command="01 52",
        formula=Formula.PERCENTAGE,
        width=1,
        min_value=0,
        max_value=100,
        description="Ethanol fuel percentage"
    )
    BATTERY = PidDefinition(
        key="battery",
        command="01 5B",
        formula=Formula.PERCENTAGE,
        width=1,
        min_value=0,
        max_value=100,
        description="Hybrid battery pack remaining life"
    )
    OIL_TEMPERATURE = PidDefinition(
        key="oil_temperature",
        command="01 5C",
        formula=Formula.TEMPERATURE,
        width=2,
        min_value=-40,
        max_value=215,
        description="Engine oil temperature"
    )


PID_DEFINITIONS = [
    Mode01Pid.VOLTAGE,
    Mode01Pid.ENGINE_LOAD,
    Mode01Pid.COOLANT_TEMPERATURE,
    Mode01Pid.FUEL_PRESSURE,
    Mode01Pid.ENGINE_RPM,
    Mode01Pid.SPEED,
    Mode01Pid.INTAKE_TEMPERATURE,
    Mode01Pid.THROTTLE,
    Mode01Pid.UPTIME,
    Mode01Pid.MALFUNCTION_DISTANCE,
    Mode01Pid.FUEL_LEVEL,
    Mode01Pid.OK_DISTANCE,
    Mode01Pid.AIR_TEMPERATURE,
    Mode01Pid.MALFUNCTION_TIME,
    Mode01Pid.OK_TIME,
    Mode01Pid.ETHANOL,
    Mode01Pid.BATTERY,
    Mode01Pid.OIL_TEMPERATURE,
]
