"""A fixed pool of worker processes that run named tasks in round-robin order."""

from __future__ import annotations

import contextlib
import multiprocessing
import os
import sys
from dataclasses import dataclass
from multiprocessing.connection import Connection
from multiprocessing.process import BaseProcess

MAX_WORKERS = 5
MAX_TASKS = 100
_NAME_LIMIT = 255


@dataclass(frozen=True)
class Task:
    """A named function and the integer argument to call it with."""

    function_name: str
    arg: int


class TaskQueueFull(Exception):
    """Raised when a pool has already accepted its maximum number of tasks."""

    def __init__(self, limit: int) -> None:
        super().__init__("Task queue full")
        self.limit = limit


def compute_square(n: int) -> str:
    """Print and return the square of ``n`` along with the worker's pid."""
    message = f"Task performed by process {os.getpid()}\n : Square of {n} is {n * n}"
    print(message, flush=True)
    return message


def print_message(n: int) -> str:
    """Print and return the task data along with the worker's pid."""
    message = f"Task performed by process {os.getpid()}\n : Task data is {n}"
    print(message, flush=True)
    return message


_TASKS = {
    "compute_square": compute_square,
    "print_message": print_message,
}


def run_task(task: Task) -> str:
    """Run the function named by ``task``; unknown names raise LookupError."""
    try:
        function = _TASKS[task.function_name]
    except KeyError:
        raise LookupError(f"Unknown task: {task.function_name}") from None
    return function(task.arg)


def _worker_loop(conn: Connection) -> None:
    with conn:
        while True:
            try:
                task = conn.recv()
            except EOFError:
                break
            if task is None:
                break
            try:
                run_task(task)
            except LookupError as exc:
                print(exc, file=sys.stderr, flush=True)


@dataclass
class _Worker:
    process: BaseProcess
    sender: Connection


class ProcessPool:
    """Worker processes that receive tasks one at a time, round-robin."""

    shutdown_timeout = 5.0

    def __init__(self, workers: int = MAX_WORKERS, max_tasks: int = MAX_TASKS) -> None:
        if workers < 1:
            raise ValueError("a pool needs at least one worker")
        if max_tasks < 0:
            raise ValueError("max_tasks must not be negative")
        self.max_tasks = max_tasks
        self._ctx = multiprocessing.get_context()
        self._next = 0
        self._submitted = 0
        self._closed = False
        self._workers = [self._start_worker() for _ in range(workers)]

    def _start_worker(self) -> _Worker:
        receiver, sender = self._ctx.Pipe(duplex=False)
        process = self._ctx.Process(target=_worker_loop, args=(receiver,), daemon=True)
        process.start()
        receiver.close()
        return _Worker(process, sender)

    @property
    def pids(self) -> list[int]:
        """Process ids of the current workers."""
        return [w.process.pid for w in self._workers]

    @property
    def submitted(self) -> int:
        """Number of tasks accepted so far."""
        return self._submitted

    def add_task(self, function_name: str, arg: int) -> Task:
        """Queue a task and hand it to the next worker in turn."""
        if self._closed:
            raise RuntimeError("pool has been shut down")
        if self._submitted >= self.max_tasks:
            raise TaskQueueFull(self.max_tasks)
        task = Task(function_name[:_NAME_LIMIT], int(arg))
        index = self._next
        worker = self._workers[index]
        if not worker.process.is_alive():
            worker.sender.close()
            worker.process.join()
            worker = self._workers[index] = self._start_worker()
        worker.sender.send(task)
        self._submitted += 1
        self._next = (index + 1) % len(self._workers)
        return task

    def shutdown(self) -> None:
        """Let workers finish their tasks, then stop them."""
        if self._closed:
            return
        self._closed = True
        for worker in self._workers:
            with contextlib.suppress(OSError):
                worker.sender.send(None)
            worker.sender.close()
        for worker in self._workers:
            worker.process.join(self.shutdown_timeout)
            if worker.process.is_alive():
                worker.process.terminate()
                worker.process.join()

    def __enter__(self) -> ProcessPool:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()