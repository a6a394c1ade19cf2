#can interface bring-up (socketcan / slcan)

import logging
import os
import time
from glob import glob

import can

from radar_can_setup.config import AdapterType, speed_code
from radar_can_setup.errors import MissingResourceError
from radar_can_setup.shell import run_step
from radar_can_setup.term import BLUE, GREEN, YELLOW, paint

logger = logging.getLogger(__name__)

SERIAL_DEVICE_GLOB = "/dev/ttyUSB*"


def interface_exists(runner, ifname: str) -> bool:
    # plain query, a failure here is an answer rather than an error
    return runner.run(["ip", "link", "show", ifname]).ok


def list_can_interfaces(runner):
    """Names of CAN-capable interfaces from `ip -o link show` (best effort)."""
    result = runner.run(["ip", "-o", "link", "show"])
    if not result.ok:
        return []

    names = []
    for line in result.stdout.splitlines():
        parts = line.split(": ", 2)
        if len(parts) < 2:
            continue
        name = parts[1].split("@")[0]
        if "link/can" in line or "can" in name:
            names.append(name)
    return names


def list_serial_devices(pattern: str = SERIAL_DEVICE_GLOB):
    return sorted(glob(pattern))


def _raise_up(runner, cfg):
    run_step(runner, "link_up", ["ip", "link", "set", cfg.interface, "up"])
    # larger tx buffer, the radar bursts object lists
    run_step(runner, "txqueuelen", ["ip", "link", "set", cfg.interface, "txqueuelen", str(cfg.txqueuelen)])


def bringup_socketcan(cfg, runner):
    print(paint(f"📡 Configuring SocketCAN ({cfg.interface})...", YELLOW))

    if not interface_exists(runner, cfg.interface):
        raise MissingResourceError(
            f"Interface {cfg.interface} not found",
            alternatives=list_can_interfaces(runner),
            empty_hint="no CAN interface detected",
        )

    run_step(runner, "link_down", ["ip", "link", "set", cfg.interface, "down"])

    bitrate = speed_code(AdapterType.SOCKETCAN, cfg.bitrate)
    run_step(runner, "bitrate", ["ip", "link", "set", cfg.interface, "type", "can", "bitrate", str(bitrate)])
    _raise_up(runner, cfg)

    print(paint(f"✅ SocketCAN configured: {cfg.interface} @ {cfg.bitrate} bps", GREEN))


def bringup_slcan(cfg, runner, sleep=time.sleep):
    print(paint(f"📡 Configuring SLCAN ({cfg.slcan_device} -> {cfg.interface})...", YELLOW))

    if not os.path.exists(cfg.slcan_device):
        raise MissingResourceError(
            f"Device {cfg.slcan_device} not found",
            alternatives=list_serial_devices(),
            empty_hint="no USB serial device detected",
        )

    # previous slcand instances would keep the tty busy
    run_step(runner, "kill_slcand", ["killall", "slcand"])
    run_step(runner, "link_down", ["ip", "link", "set", cfg.interface, "down"])

    code = speed_code(AdapterType.SLCAN, cfg.bitrate)

    # -o: open, -s<N>: CAN speed, -t hw: hardware flow control, -S: UART speed
    run_step(runner, "slcand", [
        "slcand", "-o", f"-s{code}", "-t", "hw", "-S", str(cfg.serial_baud),
        cfg.slcan_device, cfg.interface,
    ])
    sleep(cfg.settle_sec)
    _raise_up(runner, cfg)

    print(paint(f"✅ SLCAN configured: {cfg.slcan_device} -> {cfg.interface} @ {cfg.bitrate} bps", GREEN))


BRINGUP = {
    AdapterType.SOCKETCAN: bringup_socketcan,
    AdapterType.SLCAN: bringup_slcan,
}


def bringup_can(cfg, runner):
    BRINGUP[AdapterType(cfg.adapter)](cfg, runner)


def show_status(cfg, runner):
    print("")
    print(paint("📊 Interface status:", BLUE))
    result = run_step(runner, "status", ["ip", "-details", "link", "show", cfg.interface])
    print(result.stdout)


def verify_bus(cfg) -> bool:
    """Open and close a raw CAN socket on the interface."""
    try:
        bus = can.Bus(interface="socketcan", channel=cfg.interface)
    except (can.CanError, OSError) as e:
        logger.warning("could not open a CAN socket on %s: %s", cfg.interface, e)
        return False
    bus.shutdown()
    logger.info("CAN socket on %s opened", cfg.interface)
    return True
