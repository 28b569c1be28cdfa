"""
models.py

Defines core data models used throughout the OBD-II engine.
Utilizes dataclasses and enums to enforce structure.
"""

from dataclasses import dataclass
from enum import Enum


class ConnectionState(Enum):
    """
    Lifecycle states of an OBDCommunicator.
    """
    DISCONNECTED = "disconnected"
    IDENTIFYING = "identifying"
    CONFIGURING = "configuring"
    READY = "ready"
    CLOSED = "closed"


@dataclass(frozen=True)
class DiagnosticCode:
    """
    A stored diagnostic trouble code.
    """
    id: str                       # Normalized identifier (e.g., "P0301")
    description: str = "unknown code"

    @property
    def system(self) -> str:
        """First letter of the code: P, C, B or U."""
        return self.id[:1]

    def to_dict(self) -> dict:
        return {"id": self.id, "desc": self.description}
