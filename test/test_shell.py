import pytest

from radar_can_setup.errors import CommandError
from radar_can_setup.shell import BENIGN_FAILURES, ShellRunner, run_step


def test_benign_steps():
    assert set(BENIGN_FAILURES) == {"link_down", "kill_slcand"}


@pytest.mark.parametrize("step", ["link_down", "kill_slcand"])
def test_benign_failure_is_not_raised(make_runner, step):
    runner = make_runner(failures={("x",): (1, "nope")})
    result = run_step(runner, step, ["x"])
    assert not result.ok


def test_other_failure_raises_with_return_code(make_runner):
    runner = make_runner(failures={("ip", "link", "set"): (2, "RTNETLINK answers: Operation not permitted")})
    with pytest.raises(CommandError) as exc:
        run_step(runner, "link_up", ["ip", "link", "set", "can0", "up"])
    assert exc.value.returncode == 2
    assert exc.value.exit_code == 2
    assert "Operation not permitted" in str(exc.value)


def test_missing_binary_is_127():
    result = ShellRunner().run(["definitely-not-a-real-binary-radar-can"])
    assert result.returncode == 127
    assert not result.ok


def test_not_executable_is_126(tmp_path):
    script = tmp_path / "slcand"
    script.write_text("#!/bin/sh\n")
    script.chmod(0o644)
    result = ShellRunner().run([str(script)])
    assert result.returncode == 126
    assert not result.ok


@pytest.mark.parametrize("returncode,status", [(2, 2), (0, 1), (-9, 137), (-15, 143)])
def test_command_error_exit_status(returncode, status):
    assert CommandError(["slcand"], returncode).exit_code == status


def test_killed_command_propagates_signal_status(make_runner):
    runner = make_runner(failures={("slcand",): (-15, "")})
    with pytest.raises(CommandError) as exc:
        run_step(runner, "slcand", ["slcand", "-o"])
    assert exc.value.exit_code == 143
