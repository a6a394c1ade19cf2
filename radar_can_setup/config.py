from dataclasses import dataclass, replace
from enum import Enum

from radar_can_setup.errors import UnsupportedValueError


class AdapterType(str, Enum):
    SOCKETCAN = "socketcan"  # PEAK-CAN, Kvaser, ... (kernel driver)
    SLCAN = "slcan"          # generic USB-to-CAN on /dev/ttyUSBx


# =========================
# bit rate -> adapter speed code
# =========================
# slcand -s<N>: 10k=s0, 20k=s1, 50k=s2, 100k=s3, 125k=s4, 250k=s5, 500k=s6, 800k=s7, 1000k=s8
_SLCAN_RATES = (10000, 20000, 50000, 100000, 125000, 250000, 500000, 800000, 1000000)

SPEED_CODES = {
    AdapterType.SLCAN: {rate: idx for idx, rate in enumerate(_SLCAN_RATES)},
    # ip link ... bitrate <N> takes the rate as is
    AdapterType.SOCKETCAN: {rate: rate for rate in _SLCAN_RATES},
}

VALID_BITRATES = _SLCAN_RATES


def format_bitrate(rate: int) -> str:
    return f"{rate // 1000}k"


def speed_code(adapter, bitrate: int) -> int:
    adapter = AdapterType(adapter)
    try:
        return SPEED_CODES[adapter][bitrate]
    except KeyError:
        raise UnsupportedValueError(
            f"Unsupported bit rate: {bitrate}",
            valid=[format_bitrate(r) for r in VALID_BITRATES],
        ) from None


@dataclass(frozen=True)
class CanConfig:
    interface: str = "can0"
    bitrate: int = 500000               # smartmicro radar default
    adapter: AdapterType = AdapterType.SLCAN
    slcan_device: str = "/dev/ttyUSB0"  # slcan only
    txqueuelen: int = 4096
    serial_baud: int = 3000000          # slcand -S, UART speed of the dongle
    settle_sec: float = 0.5             # wait for slcand to create the interface

    ros_setup: str = "/opt/ros/humble/setup.bash"
    workspace_setup: str = "/ros2_ws/install/setup.bash"
    driver_package: str = "umrr_ros2_driver"
    driver_launch_file: str = "radar_can_muup.launch.py"

    @property
    def env_profiles(self):
        return (self.ros_setup, self.workspace_setup)


DEFAULT_CONFIG = CanConfig()


def resolve_config(base: CanConfig = DEFAULT_CONFIG, **overrides) -> CanConfig:
    """Build the run configuration and validate it once, up front."""
    cfg = replace(base, **overrides)

    try:
        adapter = AdapterType(cfg.adapter)
    except ValueError:
        raise UnsupportedValueError(
            f"Unknown adapter type: {cfg.adapter}",
            valid=[a.value for a in AdapterType],
        ) from None

    try:
        bitrate = int(cfg.bitrate)
    except (TypeError, ValueError):
        raise UnsupportedValueError(
            f"Unsupported bit rate: {cfg.bitrate}",
            valid=[format_bitrate(r) for r in VALID_BITRATES],
        ) from None

    speed_code(adapter, bitrate)
    return replace(cfg, adapter=adapter, bitrate=bitrate)
