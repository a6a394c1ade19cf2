import logging
import os
import shlex
import sys

from radar_can_setup.errors import MissingResourceError
from radar_can_setup.term import YELLOW, paint

logger = logging.getLogger(__name__)

PACKAGE_NAME = "radar_can_setup"
SETUP_EXECUTABLE = "setup_radar_can"


def setup_executable(package_prefix: str) -> str:
    """Installed console script: <prefix>/lib/<pkg>/<exe> (see setup.cfg script_dir)."""
    return os.path.join(package_prefix, "lib", PACKAGE_NAME, SETUP_EXECUTABLE)


def build_launch_command(cfg):
    """bash argv that sources the ROS 2 profiles and execs `ros2 launch`."""
    steps = [f"source {shlex.quote(profile)}" for profile in cfg.env_profiles]
    steps.append(shlex.join(["exec", "ros2", "launch", cfg.driver_package, cfg.driver_launch_file]))
    return ["bash", "-c", " && ".join(steps)]


def launch_driver(cfg, execvp=os.execvp):
    print("")
    print(paint("🚀 Launching radar driver...", YELLOW))
    print("")

    missing = [p for p in cfg.env_profiles if not os.path.isfile(p)]
    if missing:
        raise MissingResourceError(
            f"ROS 2 environment profile not found: {', '.join(missing)}",
        )

    argv = build_launch_command(cfg)
    logger.info("$ %s", " ".join(argv))
    sys.stdout.flush()
    # no return: this process becomes the driver
    execvp(argv[0], argv)
