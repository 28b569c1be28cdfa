"""
__init__.py

Initializes the pids package: the PID table, its registry and the metric decoders.
"""

from obd_communication.pids.decoders import decode, FORMULAS
from obd_communication.pids.definitions import Mode01Pid, PID_DEFINITIONS
from obd_communication.pids.registry import PidRegistry

__all__ = [
    'decode',
    'FORMULAS',
    'Mode01Pid',
    'PID_DEFINITIONS',
    'PidRegistry',
]
