import os
import signal
import subprocess
import sys
import time

import pytest

from syswrap.waiting import (
    ChildExit,
    describe_status,
    list_children,
    wait_for_children,
    wait_with_timeout,
)


def _exit_with(code):
    return subprocess.Popen([sys.executable, "-c", f"raise SystemExit({code})"])


def _sleeper(seconds=30):
    return subprocess.Popen(["sleep", str(seconds)])


def test_describe_exited_status():
    proc = _exit_with(3)
    _, status = os.waitpid(proc.pid, 0)
    assert describe_status(status) == "exited with status 3"
    child = ChildExit(proc.pid, status)
    assert child.exited and child.exit_code == 3
    assert child.term_signal is None


def test_describe_signaled_status():
    proc = _sleeper()
    os.kill(proc.pid, signal.SIGKILL)
    _, status = os.waitpid(proc.pid, 0)
    assert describe_status(status) == f"was terminated by signal {int(signal.SIGKILL)}"
    child = ChildExit(proc.pid, status)
    assert child.signaled and child.term_signal == signal.SIGKILL
    assert child.exit_code is None


def test_describe_stopped_status():
    proc = _sleeper()
    try:
        os.kill(proc.pid, signal.SIGSTOP)
        _, status = os.waitpid(proc.pid, os.WUNTRACED)
        assert describe_status(status) == f"was stopped by signal {int(signal.SIGSTOP)}"
        assert ChildExit(proc.pid, status).stop_signal == signal.SIGSTOP
    finally:
        os.kill(proc.pid, signal.SIGKILL)
        os.waitpid(proc.pid, 0)


def test_wait_with_timeout_returns_exit():
    proc = _exit_with(3)
    child = wait_with_timeout(proc.pid, timeout=10, poll_interval=0.01)
    assert child.pid == proc.pid
    assert child.exit_code == 3
    assert child.timed_out is False


def test_wait_with_timeout_kills_on_timeout():
    proc = _sleeper()
    start = time.monotonic()
    child = wait_with_timeout(proc.pid, timeout=0.2, poll_interval=0.02)
    assert time.monotonic() - start < 10
    assert child.timed_out is True
    assert child.term_signal == signal.SIGKILL


def test_wait_with_timeout_rejects_group_pids():
    with pytest.raises(ValueError):
        wait_with_timeout(0)


def test_wait_with_timeout_on_non_child():
    with pytest.raises(ChildProcessError):
        wait_with_timeout(os.getpid(), timeout=0.1, poll_interval=0.01)


def test_list_children_includes_spawned_child():
    proc = _sleeper()
    try:
        assert proc.pid in list_children(os.getpid())
    finally:
        proc.kill()
        proc.wait()
    assert proc.pid not in list_children(os.getpid())


def test_list_children_missing_process():
    proc = _exit_with(0)
    proc.wait()
    with pytest.raises(OSError):
        list_children(proc.pid)


def test_wait_for_children_reaps_all():
    first = _exit_with(0)
    second = _exit_with(2)
    results = {child.pid: child.exit_code for child in wait_for_children(os.getpid())}
    assert results[first.pid] == 0
    assert results[second.pid] == 2
    assert first.pid not in list_children(os.getpid())
    assert second.pid not in list_children(os.getpid())