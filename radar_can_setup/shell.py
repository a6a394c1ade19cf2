import logging
import subprocess
from dataclasses import dataclass
from typing import List

from radar_can_setup.errors import CommandError

logger = logging.getLogger(__name__)


# Steps whose failure is an expected no-op, not a fault.
# TODO: "link_down" also hides a busy/permission failure; narrow it to
# "Cannot find device" / already-down once the stderr texts are pinned down.
BENIGN_FAILURES = {
    "link_down": "interface already down or not created yet",
    "kill_slcand": "no slcand instance running",
}


@dataclass
class CommandResult:
    cmd: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ShellRunner:
    """Runs external commands and returns their status instead of raising."""

    def run(self, cmd: List[str]) -> CommandResult:
        try:
            proc = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True)
        except FileNotFoundError:
            return CommandResult(list(cmd), 127, "", f"{cmd[0]}: command not found")
        except OSError as e:
            # not executable, or the kernel refused to exec it
            return CommandResult(list(cmd), 126, "", f"{cmd[0]}: {e.strerror or e}")
        return CommandResult(list(cmd), proc.returncode, proc.stdout.strip(), proc.stderr.strip())


def run_step(runner, step: str, cmd: List[str]) -> CommandResult:
    """Run one setup step; benign failures pass, anything else raises CommandError."""
    logger.info("$ %s", " ".join(cmd))
    result = runner.run(cmd)
    if result.ok:
        return result

    reason = BENIGN_FAILURES.get(step)
    if reason is not None:
        logger.debug("ignored failure of '%s' (%s): %s", step, reason, result.stderr)
        return result

    raise CommandError(cmd, result.returncode, result.stderr)
