"""
obd_communication

Client-side protocol engine for ELM327 OBD-II interfaces: connection
lifecycle, command/response channel, PID decoding and trouble code decoding.
"""

from obd_communication.config import (
    BAUD_DEFAULT,
    BAUD_FAST,
    BAUD_RATES,
    PID_NULL,
    ConnectionConfig,
    Units,
    setup_logging,
)
from obd_communication.errors import (
    OBDError,
    ConfigurationError,
    OBDConnectionError,
    ProtocolError,
    MalformedResponseError,
    EmptyResponseError,
    NotFoundError,
    InvalidStateError,
)
from obd_communication.models import ConnectionState, DiagnosticCode
from obd_communication.communicator.base_communication import TransportPort, SerialTransport
from obd_communication.communicator.command_channel import CommandChannel
from obd_communication.communicator.obd_communicator import OBDCommunicator
from obd_communication.device_simulator import ELM327Simulator

__version__ = "0.1.0"

__all__ = [
    'BAUD_DEFAULT',
    'BAUD_FAST',
    'BAUD_RATES',
    'PID_NULL',
    'ConnectionConfig',
    'Units',
    'setup_logging',
    'OBDError',
    'ConfigurationError',
    'OBDConnectionError',
    'ProtocolError',
    'MalformedResponseError',
    'EmptyResponseError',
    'NotFoundError',
    'InvalidStateError',
    'ConnectionState',
    'DiagnosticCode',
    'TransportPort',
    'SerialTransport',
    'CommandChannel',
    'OBDCommunicator',
    'ELM327Simulator',
]
