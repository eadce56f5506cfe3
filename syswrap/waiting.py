"""Waiting on child processes: with a timeout, or on every child of a process."""

from __future__ import annotations

import logging
import os
import signal
import time
from dataclasses import dataclass
from pathlib import Path

log = logging.getLogger(__name__)

TIMEOUT_SECONDS = 15.0
POLL_INTERVAL = 0.1
_CHILDREN_PATH = "/proc/{pid}/task/{pid}/children"


def describe_status(status: int) -> str:
    """Describe a raw wait status the way the wait wrappers report it."""
    if os.WIFEXITED(status):
        return f"exited with status {os.WEXITSTATUS(status)}"
    if os.WIFSIGNALED(status):
        return f"was terminated by signal {os.WTERMSIG(status)}"
    if os.WIFSTOPPED(status):
        return f"was stopped by signal {os.WSTOPSIG(status)}"
    return "ended unexpectedly"


@dataclass(frozen=True)
class ChildExit:
    """A child whose state change was collected, with its raw wait status."""

    pid: int
    status: int
    timed_out: bool = False

    @property
    def exited(self) -> bool:
        return os.WIFEXITED(self.status)

    @property
    def exit_code(self) -> int | None:
        return os.WEXITSTATUS(self.status) if self.exited else None

    @property
    def signaled(self) -> bool:
        return os.WIFSIGNALED(self.status)

    @property
    def term_signal(self) -> int | None:
        return os.WTERMSIG(self.status) if self.signaled else None

    @property
    def stopped(self) -> bool:
        return os.WIFSTOPPED(self.status)

    @property
    def stop_signal(self) -> int | None:
        return os.WSTOPSIG(self.status) if self.stopped else None

    def describe(self) -> str:
        return describe_status(self.status)


def wait_with_timeout(
    pid: int,
    timeout: float = TIMEOUT_SECONDS,
    poll_interval: float = POLL_INTERVAL,
) -> ChildExit:
    """Wait for child ``pid``; kill it with SIGKILL if it outlives ``timeout`` seconds."""
    if pid <= 0:
        raise ValueError("pid must name a single child process")
    deadline = time.monotonic() + timeout
    while True:
        ret_pid, status = os.waitpid(pid, os.WNOHANG)
        if ret_pid > 0:
            child = ChildExit(ret_pid, status)
            log.info("Child process %d %s", pid, child.describe())
            return child
        if time.monotonic() >= deadline:
            log.warning("Timeout reached while waiting for process %d", pid)
            os.kill(pid, signal.SIGKILL)
            log.warning("Child process %d killed due to timeout", pid)
            ret_pid, status = os.waitpid(pid, 0)
            return ChildExit(ret_pid, status, timed_out=True)
        time.sleep(poll_interval)


def list_children(pid: int) -> list[int]:
    """Process ids of the children of ``pid``'s main thread."""
    path = Path(_CHILDREN_PATH.format(pid=pid))
    return [int(token) for token in path.read_text().split()]


def wait_for_children(pid: int) -> list[ChildExit]:
    """Wait on every current child of ``pid``; children that cannot be waited on are skipped."""
    results: list[ChildExit] = []
    for child_pid in list_children(pid):
        log.info("Waiting on child PID %d...", child_pid)
        try:
            ret_pid, status = os.waitpid(child_pid, 0)
        except OSError as exc:
            log.error("waitpid failed for child PID %d: %s", child_pid, exc)
            continue
        child = ChildExit(ret_pid, status)
        log.info("Child PID %d %s", child_pid, child.describe())
        results.append(child)
    return results