import pytest

from radar_can_setup import can_iface
from radar_can_setup.config import CanConfig
from radar_can_setup.shell import CommandResult


class FakeRunner:
    """Records commands; failures/outputs are keyed by command prefix."""

    def __init__(self, failures=None, outputs=None):
        self.calls = []
        self.failures = failures or {}
        self.outputs = outputs or {}

    @staticmethod
    def _match(table, cmd):
        for prefix, value in table.items():
            if tuple(cmd[:len(prefix)]) == prefix:
                return value
        return None

    def run(self, cmd):
        self.calls.append(list(cmd))
        failure = self._match(self.failures, cmd)
        if failure is not None:
            returncode, stderr = failure
            return CommandResult(list(cmd), returncode, "", stderr)
        return CommandResult(list(cmd), 0, self._match(self.outputs, cmd) or "")

    def ran(self, *prefix):
        return any(tuple(c[:len(prefix)]) == prefix for c in self.calls)


class DummyBus:
    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.closed = False

    def shutdown(self):
        self.closed = True


@pytest.fixture(autouse=True)
def no_can_socket(monkeypatch):
    monkeypatch.setattr(can_iface.can, "Bus", DummyBus)


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def serial_device(tmp_path):
    dev = tmp_path / "ttyUSB0"
    dev.touch()
    return str(dev)


@pytest.fixture
def env_profiles(tmp_path):
    ros = tmp_path / "ros_setup.bash"
    ws = tmp_path / "ws_setup.bash"
    ros.write_text("")
    ws.write_text("")
    return str(ros), str(ws)


@pytest.fixture
def socketcan_cfg():
    return CanConfig(adapter="socketcan", settle_sec=0)


@pytest.fixture
def slcan_cfg(serial_device):
    return CanConfig(adapter="slcan", slcan_device=serial_device, settle_sec=0)


@pytest.fixture
def make_runner():
    return FakeRunner
