class RadarCanError(RuntimeError):
    exit_code = 1


class PrivilegeError(RadarCanError):
    pass


class InputClosedError(RadarCanError):
    pass


class MissingResourceError(RadarCanError):
    """Interface, device node or environment profile is absent.

    alternatives: what is available instead (best effort, may be empty)
    """

    def __init__(self, message, alternatives=None, empty_hint=""):
        super().__init__(message)
        self.alternatives = list(alternatives or [])
        self.empty_hint = empty_hint


class UnsupportedValueError(RadarCanError):
    def __init__(self, message, valid=()):
        super().__init__(message)
        self.valid = list(valid)


def shell_status(returncode: int) -> int:
    """Exit status a shell would report for a child's return code."""
    if returncode < 0:
        # killed by signal N
        return 128 - returncode
    return returncode if returncode > 0 else 1


class CommandError(RadarCanError):
    def __init__(self, cmd, returncode, stderr=""):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stderr = stderr
        detail = f": {stderr}" if stderr else ""
        super().__init__(f"'{' '.join(self.cmd)}' failed with exit code {returncode}{detail}")
        # set -e semantics: the script exits with the failing command's status
        self.exit_code = shell_status(returncode)
