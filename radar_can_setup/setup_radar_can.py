#!/usr/bin/env python3
"""
MUUP - smartmicro radar CAN setup & launch

    setup_radar_can          # configure CAN, then ask to launch the driver
    setup_radar_can setup    # configure CAN only (root)
    setup_radar_can launch   # launch the driver only (CAN already configured)
"""
import argparse
import logging
import os
import sys
from enum import Enum

from radar_can_setup.can_iface import bringup_can, show_status, verify_bus
from radar_can_setup.config import DEFAULT_CONFIG, AdapterType, resolve_config
from radar_can_setup.errors import (
    InputClosedError,
    MissingResourceError,
    PrivilegeError,
    RadarCanError,
    UnsupportedValueError,
)
from radar_can_setup.launcher import launch_driver
from radar_can_setup.shell import ShellRunner
from radar_can_setup.term import BLUE, GREEN, RED, YELLOW, paint

logger = logging.getLogger(__name__)

BAR = "=" * 68

MODES = {
    "setup": "configure the CAN interface only (requires root)",
    "launch": "launch the driver only (assumes CAN is already configured)",
    "all": "configure CAN and launch the driver (default)",
}


class Answer(Enum):
    YES = "yes"
    NO = "no"
    DEFAULT = "default"  # empty input

    @property
    def accepted(self) -> bool:
        return self is not Answer.NO


def ask_yes_no(prompt: str, input_fn=input) -> Answer:
    try:
        reply = input_fn(prompt)
    except EOFError:
        # stdin closed before an answer, abort the run
        raise InputClosedError("No answer at the prompt (end of input)") from None
    reply = reply.strip()
    if not reply:
        return Answer.DEFAULT
    return Answer.YES if reply[0] in "Yy" else Answer.NO


def is_root() -> bool:
    return os.geteuid() == 0


def check_root(is_privileged=is_root):
    if not is_privileged():
        raise PrivilegeError("This command needs root privileges to configure CAN")


def print_header():
    print(paint(BAR, BLUE))
    print(paint("  🎯 MUUP - smartmicro radar CAN setup", BLUE))
    print(paint(BAR, BLUE))


def show_info(cfg):
    print("")
    print(paint(BAR, BLUE))
    print(paint("📋 Configuration:", GREEN))
    print(paint(BAR, BLUE))
    print(f"  CAN interface:    {cfg.interface}")
    print(f"  Bit rate:         {cfg.bitrate} bps")
    print(f"  Adapter type:     {cfg.adapter.value}")
    if cfg.adapter is AdapterType.SLCAN:
        print(f"  USB device:       {cfg.slcan_device}")
    print("")
    print(paint("💡 Useful commands:", YELLOW))
    print(f"  CAN traffic:      candump {cfg.interface}")
    print(f"  Statistics:       ip -s link show {cfg.interface}")
    print(f"  Shut down:        sudo ip link set {cfg.interface} down")
    print(paint(BAR, BLUE))


def setup_can(cfg, runner):
    print_header()
    bringup_can(cfg, runner)
    show_status(cfg, runner)
    verify_bus(cfg)
    print("")
    print(paint("✅ CAN interface ready", GREEN))


class UsageError(Exception):
    pass


class ModeParser(argparse.ArgumentParser):
    # anything that is not a single known mode is a usage error (exit 1, not argparse's 2)
    def error(self, message):
        raise UsageError(message)


def build_parser():
    parser = ModeParser(
        prog="setup_radar_can",
        description="Configure the radar CAN interface and launch the UMRR driver",
        epilog="\n".join(f"  {m:<7}- {h}" for m, h in MODES.items()),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("mode", nargs="?", default="all", metavar="{setup,launch,all}")
    return parser


def report(err: RadarCanError):
    logger.error(paint(f"❌ {err}", RED, sys.stderr))
    if isinstance(err, PrivilegeError):
        print(paint(f"💡 Run: sudo {' '.join(sys.argv)}", YELLOW))
    elif isinstance(err, MissingResourceError):
        if err.alternatives:
            print(paint("💡 Available:", YELLOW))
            for alt in err.alternatives:
                print(f"   {alt}")
        elif err.empty_hint:
            print(f"   {err.empty_hint}")
    elif isinstance(err, UnsupportedValueError):
        print(paint(f"💡 Valid values: {', '.join(err.valid)}", YELLOW))


def main(argv=None, base_config=DEFAULT_CONFIG, runner=None, is_privileged=is_root,
         input_fn=input, execvp=os.execvp):
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        logger.debug("bad arguments: %s", e)
        args = None
    if args is None or args.mode not in MODES:
        parser.print_help()
        return 1

    runner = runner or ShellRunner()

    try:
        if args.mode == "launch":
            # the interface settings are not used here, nothing to validate
            launch_driver(base_config, execvp=execvp)
            return 0

        check_root(is_privileged)
        cfg = resolve_config(base_config)
        setup_can(cfg, runner)
        show_info(cfg)

        if args.mode == "all":
            print("")
            if ask_yes_no("🚀 Launch the radar driver now? [Y/n] ", input_fn).accepted:
                launch_driver(cfg, execvp=execvp)
    except RadarCanError as e:
        report(e)
        return e.exit_code

    return 0


if __name__ == "__main__":
    sys.exit(main())
