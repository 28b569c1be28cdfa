import pytest

from obd_communication.config import ConnectionConfig, Units
from obd_communication.communicator.obd_communicator import OBDCommunicator
from obd_communication.device_simulator import ELM327Simulator


@pytest.fixture
def device(tmp_path):
    """A file standing in for a serial device node."""
    path = tmp_path / "ttyOBD0"
    path.touch()
    return str(path)


@pytest.fixture
def simulator():
    return ELM327Simulator()


@pytest.fixture
def config(device):
    return ConnectionConfig(device=device)


@pytest.fixture
def obd(config, simulator):
    """A READY communicator talking to the simulator."""
    communicator = OBDCommunicator(config, transport=simulator)
    communicator.connect()
    yield communicator
    communicator.close()


@pytest.fixture
def metric_obd(device, simulator):
    communicator = OBDCommunicator(ConnectionConfig(device=device, units=Units.METRIC), transport=simulator)
    communicator.connect()
    yield communicator
    communicator.close()
