# syswrap

Small, self-contained wrappers for watching what a program does with its
files, memory and child processes. Each module tracks one kind of resource
and reports misuse by raising an exception.

Requires Python 3.10 or later on a POSIX system. `syswrap.waiting.list_children`
and `wait_for_children` read `/proc` and so work on Linux only.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Resource tracking

### Open files: `syswrap.file_tracker`

`FileTracker` opens files through `os.open` and remembers every descriptor it
hands out. Closing a descriptor it never opened raises
`UntrackedDescriptorError`. `close_all` closes everything still tracked, and
using the tracker as a context manager does the same when the block ends.
`len(tracker)` and `fd in tracker` report what is open.

```python
import os
from syswrap.file_tracker import FileTracker

with FileTracker() as tracker:
    fd1 = tracker.open("file1.txt", os.O_CREAT | os.O_WRONLY, 0o644)
    fd2 = tracker.open("file2.txt", os.O_CREAT | os.O_WRONLY, 0o644)
    tracker.close(fd2)
    print(len(tracker), fd1 in tracker)
```

### Mark-and-sweep blocks: `syswrap.garbage`

`GarbageCollector.alloc(size)` hands out zeroed `bytearray` blocks. Call
`mark` on every block that is still reachable (it returns `False` for a block
it does not track), then `collect` to drop the unmarked ones; it returns how
many were dropped and clears the marks on the survivors. `cleanup` drops
everything.

```python
from syswrap.garbage import GarbageCollector

gc = GarbageCollector()
kept = gc.alloc(32)
lost = gc.alloc(64)
gc.mark(kept)
assert gc.collect() == 1
assert kept in gc and lost not in gc
```

### Leak detection: `syswrap.debug_alloc`

`AllocationTracker.allocate(size)` returns a buffer and records it as an
`Allocation`; `free(block)` forgets it and returns its size. Asking for zero
or a negative number of bytes, freeing `None`, or freeing a block that is not
tracked raises `AllocationError`. `leaks()` lists what is still outstanding,
newest first, and `report_leaks()` returns that list as text.

```python
from syswrap.debug_alloc import AllocationTracker

tracker = AllocationTracker()
block = tracker.allocate(128)
print(tracker.report_leaks())
tracker.free(block)
print(tracker.report_leaks())   # No memory leaks detected.
```

### Fixed-size pool: `syswrap.memory_pool`

`MemoryPool(block_size, capacity)` carves `capacity` blocks of `block_size`
bytes out of one buffer. `alloc` returns a free block as a `memoryview`
(raising `MemoryError` when none is left), `free` gives one back (raising
`ValueError` for a block the pool did not hand out) and `available` says how
many are free.

```python
from syswrap.memory_pool import MemoryPool

pool = MemoryPool(64, 100)
block = pool.alloc()
pool.free(block)
print(pool.available())   # 100
```

### Heap accounting: `syswrap.heap_guard`

`HeapGuard` keeps a running total of heap bytes fed to it through `on_alloc`,
`on_calloc`, `on_free` and `on_realloc`, together with a checksum of that
total. `validate` compares the two; on a mismatch it appends a line to the
guard's log file (`heap_corruption_log.txt` unless another path is given) and
raises `HeapCorruptionError`.

### Memory mappings: `syswrap.mappings`

`MappingTracker.map(length)` creates a private anonymous read/write mapping
and returns a `MappedChunk`. `unmap` releases it, given the chunk or its
address; unmapping a chunk twice, one the tracker does not know, or `None`
raises `MappingError`. `total_in_use` and `log_usage` report the chunks that
are still mapped.

## Processes

### Waiting: `syswrap.waiting`

* `wait_with_timeout(pid, timeout=15.0, poll_interval=0.1)` polls a child and
  kills it with `SIGKILL` if it has not finished in time. It returns a
  `ChildExit` whose `timed_out` flag says which happened.
* `list_children(pid)` reads the child PIDs of a process from `/proc`.
* `wait_for_children(pid)` waits on each of those children in turn and returns
  a `ChildExit` for each; children that cannot be waited on are skipped.
* `describe_status(status)` turns a raw wait status into text such as
  `"exited with status 0"`.

`ChildExit` exposes `exited`, `exit_code`, `signaled`, `term_signal`,
`stopped` and `stop_signal`.

### Zombie reaping: `syswrap.zombies`

`ZombieLogger` sends signals (`kill`) and waits on children (`waitpid`), and
after each call reaps any exited children, writing a line for every event to
its log file, or to standard output when no file is given. `reap` can also be
called on its own. Failures of the underlying calls are logged and then
raised.

### Worker pool: `syswrap.pool`

`ProcessPool(workers=5, max_tasks=100)` starts worker processes, each
receiving `Task` records over a pipe. Tasks name one of the functions
`compute_square` or `print_message` and carry one integer argument; they are
handed to the workers round-robin, and a worker that has died is replaced.
Accepting more than `max_tasks` tasks raises `TaskQueueFull`. A worker given
an unknown name prints an error and carries on. `run_task` runs a task in the
current process. `shutdown`, or leaving the `with` block, lets the workers
finish and stops them.

```python
from syswrap.pool import ProcessPool

with ProcessPool(5, 100) as pool:
    pool.add_task("compute_square", 3)
    pool.add_task("print_message", 42)
```

### Execution reports: `syswrap.monitor`

`run_monitored(program, argv)` runs a program (looked up on `PATH`) as a child
process and returns an `ExecutionReport` with its wall-clock times, CPU times,
peak memory, context switches and exit status. `format_report` renders that
report as text.

From the shell, give the command and its arguments; with none, it reports on
`/bin/ls -l /tmp`:

```
syswrap-monitor ls -l /tmp
```

## What is not included

The package does not change process priorities: there is nothing here to set
a child's nice value or I/O scheduling class, or to fork children at a chosen
priority. Nor does it intercept calls made by other programs; every wrapper
tracks only what is done through it.