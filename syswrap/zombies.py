"""Signal sending and waiting that log results and reap leftover zombies."""

from __future__ import annotations

import contextlib
import os
from pathlib import Path

from syswrap.waiting import ChildExit


def _status_message(child: ChildExit) -> str:
    if child.exited:
        return f"Process {child.pid} terminated normally with exit code {child.exit_code}."
    if child.signaled:
        return f"Process {child.pid} terminated by signal {child.term_signal}."
    if child.stopped:
        return f"Process {child.pid} stopped by signal {child.stop_signal}."
    return f"Process {child.pid} changed state (status {child.status})."


def _cleanup_message(child: ChildExit) -> str | None:
    if child.exited:
        return (
            f"Cleaned up zombie process {child.pid}, "
            f"terminated normally with exit code {child.exit_code}."
        )
    if child.signaled:
        return (
            f"Cleaned up zombie process {child.pid}, "
            f"terminated by signal {child.term_signal}."
        )
    return None


class ZombieLogger:
    """Logs signals and waits, and reaps any exited children afterwards.

    Messages go to ``log_path`` when one is given, otherwise to standard output.
    """

    def __init__(self, log_path: str | os.PathLike[str] | None = None) -> None:
        self.log_path = Path(log_path) if log_path is not None else None

    def log(self, message: str) -> None:
        """Write one message line."""
        if self.log_path is None:
            print(message, flush=True)
            return
        with contextlib.suppress(OSError), self.log_path.open("a") as fh:
            fh.write(f"{message}\n")

    def reap(self) -> list[ChildExit]:
        """Collect every child that has already exited, logging each one."""
        reaped: list[ChildExit] = []
        while True:
            try:
                pid, status = os.waitpid(-1, os.WNOHANG)
            except ChildProcessError:
                break
            if pid == 0:
                break
            child = ChildExit(pid, status)
            message = _cleanup_message(child)
            if message is not None:
                self.log(message)
            reaped.append(child)
        return reaped

    def kill(self, pid: int, sig: int) -> list[ChildExit]:
        """Send ``sig`` to ``pid``, log the outcome, then reap; return the reaped children."""
        sig = int(sig)
        try:
            os.kill(pid, sig)
        except OSError as exc:
            self.log(f"Failed to send signal {sig} to process {pid}. Error: {exc.strerror}")
            self.reap()
            raise
        self.log(f"Signal {sig} sent to process {pid} successfully.")
        return self.reap()

    def waitpid(self, pid: int, options: int = 0) -> ChildExit | None:
        """Wait on ``pid`` like os.waitpid, log the outcome, then reap other zombies.

        Returns None when WNOHANG was given and no state change was pending.
        """
        try:
            result, status = os.waitpid(pid, options)
        except OSError as exc:
            self.log(f"waitpid failed for PID {pid}. Error: {exc.strerror}")
            self.reap()
            raise
        child: ChildExit | None
        if result > 0:
            child = ChildExit(result, status)
            self.log(_status_message(child))
        else:
            child = None
            self.log(f"No child process state change detected for PID {pid}.")
        self.reap()
        return child