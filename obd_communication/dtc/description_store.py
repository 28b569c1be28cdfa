"""
description_store.py

Lookup stores mapping normalized trouble code identifiers (e.g., "P0301") to
human-readable descriptions. A store answers None for codes it does not know.

SQLiteDescriptionStore reads the errors(id, desc) table of an OBD-II code
database; DictDescriptionStore serves descriptions from a plain mapping and is
the default, preloaded with STANDARD_DTCS.
"""

import logging
import os
import sqlite3
from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional

# Generic powertrain codes shared by every OBD-II vehicle.
STANDARD_DTCS: Dict[str, str] = {
    "P0100": "Mass or Volume Air Flow Circuit Malfunction",
    "P0101": "Mass or Volume Air Flow Circuit Range/Performance Problem",
    "P0110": "Intake Air Temperature Circuit Malfunction",
    "P0115": "Engine Coolant Temperature Circuit Malfunction",
    "P0120": "Throttle Position Sensor/Switch A Circuit Malfunction",
    "P0128": "Coolant Thermostat (Coolant Temperature Below Thermostat Regulating Temperature)",
    "P0171": "System Too Lean (Bank 1)",
    "P0172": "System Too Rich (Bank 1)",
    "P0174": "System Too Lean (Bank 2)",
    "P0175": "System Too Rich (Bank 2)",
    "P0300": "Random/Multiple Cylinder Misfire Detected",
    "P0301": "Cylinder 1 Misfire Detected",
    "P0302": "Cylinder 2 Misfire Detected",
    "P0303": "Cylinder 3 Misfire Detected",
    "P0304": "Cylinder 4 Misfire Detected",
    "P0305": "Cylinder 5 Misfire Detected",
    "P0306": "Cylinder 6 Misfire Detected",
    "P0335": "Crankshaft Position Sensor A Circuit Malfunction",
    "P0401": "Exhaust Gas Recirculation Flow Insufficient Detected",
    "P0420": "Catalyst System Efficiency Below Threshold (Bank 1)",
    "P0430": "Catalyst System Efficiency Below Threshold (Bank 2)",
    "P0442": "Evaporative Emission Control System Leak Detected (small leak)",
    "P0455": "Evaporative Emission Control System Leak Detected (gross leak)",
    "P0500": "Vehicle Speed Sensor Malfunction",
    "P0505": "Idle Control System Malfunction",
    "U0100": "Lost Communication With ECM/PCM A",
}


class DescriptionStore(ABC):
    """
    Interface for trouble code description lookups.
    """

    @abstractmethod
    def lookup(self, code: str) -> Optional[str]:
        """
        Returns the description for a normalized code, or None if unknown.
        """
        pass


class DictDescriptionStore(DescriptionStore):
    """
    Description store backed by an in-memory mapping.
    """

    def __init__(self, descriptions: Optional[Mapping[str, str]] = None):
        self.descriptions = dict(STANDARD_DTCS if descriptions is None else descriptions)

    def lookup(self, code: str) -> Optional[str]:
        return self.descriptions.get(code.upper())


class SQLiteDescriptionStore(DescriptionStore):
    """
    Description store backed by an SQLite database with an errors(id, desc) table.
    The database is opened read-only for each lookup.
    """

    def __init__(self, path: str, logger: Optional[logging.Logger] = None):
        self.path = path
        self.logger = logger or logging.getLogger(__name__)

    def lookup(self, code: str) -> Optional[str]:
        if not os.path.exists(self.path):
            self.logger.warning(f"DTC database not found: {self.path}")
            return None
        try:
            # mode=ro keeps sqlite from creating an empty database file
            conn = sqlite3.connect(f"file:{self.path}?mode=ro", uri=True)
            try:
                row = conn.execute('SELECT "desc" FROM errors WHERE id=?;', (code.upper(),)).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            self.logger.warning(f"DTC lookup failed for {code}: {str(e)}")
            return None
        return row[0] if row else None
