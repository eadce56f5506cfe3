"""Run a program as a child and report its timing, resource usage and exit."""

from __future__ import annotations

import os
import sys
import time
from dataclasses import dataclass

DEFAULT_PROGRAM = "/bin/ls"
DEFAULT_ARGS = ("ls", "-l", "/tmp")


@dataclass(frozen=True)
class ExecutionReport:
    """What was observed about one monitored run."""

    pid: int
    start: float
    end: float
    status: int
    user_time: float
    system_time: float
    max_rss: int
    voluntary_switches: int
    involuntary_switches: int

    @property
    def elapsed(self) -> float:
        return self.end - self.start

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


def run_monitored(program: str, argv: list[str] | None = None) -> ExecutionReport:
    """Run ``program`` (looked up on PATH) with ``argv`` and wait for it."""
    args = list(argv) if argv else [program]
    start = time.time()
    pid = os.posix_spawnp(program, args, os.environ)
    _, status, usage = os.wait4(pid, 0)
    end = time.time()
    return ExecutionReport(
        pid=pid,
        start=start,
        end=end,
        status=status,
        user_time=usage.ru_utime,
        system_time=usage.ru_stime,
        max_rss=usage.ru_maxrss,
        voluntary_switches=usage.ru_nvcsw,
        involuntary_switches=usage.ru_nivcsw,
    )


def format_report(report: ExecutionReport) -> str:
    """Render a report as the multi-line execution summary."""
    if report.exited:
        outcome = f"Process exited with status {report.exit_code}"
    elif report.signaled:
        outcome = f"Process was killed by signal {report.term_signal}"
    else:
        outcome = "Process exited abnormally."
    return "\n".join(
        [
            "Process Execution Report:",
            "--------------------------",
            f"Start time: {report.start:.6f}",
            f"End time: {report.end:.6f}",
            f"Elapsed time: {report.elapsed:.6f} seconds",
            f"User CPU time: {report.user_time:.6f}s",
            f"System CPU time: {report.system_time:.6f}s",
            f"Maximum resident set size (memory): {report.max_rss} KB",
            f"Voluntary context switches: {report.voluntary_switches}",
            f"Involuntary context switches: {report.involuntary_switches}",
            outcome,
        ]
    )


def main(argv: list[str] | None = None) -> int:
    """Run the given command (or a default listing) and print its report."""
    args = list(sys.argv[1:] if argv is None else argv)
    if args:
        program = args[0]
    else:
        program, args = DEFAULT_PROGRAM, list(DEFAULT_ARGS)
    try:
        report = run_monitored(program, args)
    except OSError as exc:
        print(f"exec failed: {exc}", file=sys.stderr)
        return 1
    print(format_report(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())