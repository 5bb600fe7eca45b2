# hebrasync

Synchronisation primitives with a guaranteed first-in, first-out wake-up
order — counting semaphores and Hoare-style monitors — plus a handful of
small programs that show threads, futures, atomic counters, mutexes and
semaphores at work. No third-party dependencies.

## Installing

```
pip install .
pip install ".[test]"   # to run the test suite
```

## Semaphores

`hebrasync.semaphore.Semaphore(value, name="(name not given)")` is a counting
semaphore. The initial value must be a non-negative `int` (`ValueError` or
`TypeError` otherwise). Threads that block in `wait` are released strictly in
the order they arrived, and a `signal` that finds a waiting thread hands the
semaphore straight to it, so no newcomer can take the value first.

```python
import threading
from hebrasync.semaphore import Semaphore, sem_wait, sem_signal

can_write = Semaphore(1, "can_write")
can_read = Semaphore(0, "can_read")
shared = []

def producer():
    for value in range(1, 11):
        sem_wait(can_write)
        shared.append(value)
        sem_signal(can_read)

def consumer():
    for _ in range(10):
        sem_wait(can_read)
        print("read", shared.pop())
        sem_signal(can_write)

threads = [threading.Thread(target=producer), threading.Thread(target=consumer)]
for t in threads:
    t.start()
for t in threads:
    t.join()
```

* `sem.wait()` / `sem.signal()` are the method forms of `sem_wait(sem)` and
  `sem_signal(sem)`.
* `with sem:` waits on entry and signals on exit.
* The read-only properties `name`, `value` and `waiting` (threads blocked for
  a positive value) are snapshots useful for debugging.
* Semaphores refuse to be copied (`copy.copy` raises `TypeError`).

## Hoare monitors

`hebrasync.monitor.HoareMonitor(name="unknown")` is a base class for monitors
with "urgent wait" signal semantics: a thread that signals a condition
variable hands the monitor over at once to the woken thread and waits in an
urgent queue, which has priority over threads waiting to enter. All queues are
FIFO.

Condition variables come from `new_cond_var()`. A `CondVar` offers `wait()`,
`signal()`, `waiting()` (number of blocked threads) and `empty()`. They must be
used by the thread currently running in the monitor, otherwise `RuntimeError`
is raised. A `CondVar()` created without a monitor is unusable: every
operation on it raises `UninitializedCondVarError`.

Monitors are used through a `MonitorRef`, built with
`create(cls, *args, **kwargs)`. Every method called through the reference
runs with the monitor entered, and the monitor is left when the call returns,
even if it raises. Reading a plain attribute through the reference is done
inside the monitor too. A monitor can also be entered by hand with
`enter()` / `leave()`, or with `with monitor:`.

```python
from hebrasync.monitor import HoareMonitor, create

class Buffer(HoareMonitor):
    def __init__(self):
        super().__init__("buffer")
        self.items = []
        self.not_empty = self.new_cond_var()

    def put(self, item):
        self.items.append(item)
        self.not_empty.signal()

    def take(self):
        if not self.items:
            self.not_empty.wait()
        return self.items.pop(0)

buffer = create(Buffer)
buffer.put(42)
print(buffer.take())
```

## Building block: FIFOQueue

`hebrasync.fifoqueue.FIFOQueue` is what both semaphores and monitors are made
of: a condition-variable-like queue. `wait(lock)` releases the given lock,
blocks until signalled and reacquires it; `signal()` wakes the
longest-waiting thread (or does nothing); `waiting()` and `len()` give the
number of threads still waiting. Both operations must be called while holding
the lock.

## Thread names and helpers

`hebrasync.threadnames`:

* `register_thread_name(name, number=None)` names the calling thread
  (`"name number"` when a number is given) and returns the name; registering
  a second name for the same thread raises `ThreadNameError`.
* `get_thread_name()` returns the registered name, or `"(unknown thread name)"`.
* `log_message(where, msg)` prints `"<thread name> (<where>): <msg>"`,
  serialised across threads, and returns the line.
* `random_int(low, high)` returns a random integer in `[low, high]`;
  `ValueError` if `low > high`.

## Demonstration commands

| Command | What it shows |
| --- | --- |
| `hebrasync-basics [N]` | example `N` from 1 to 8 (default 2): two counting threads not joined (1) and joined (2), factorials through shared storage (3, 4) and futures (5, 7), eight threads printing factorials (6), timing `factorial(20)` in microseconds (8) |
| `hebrasync-integral [-m SAMPLES] [-n WORKERS]` | π as the integral of 4/(1+x²) over [0, 1], computed sequentially and split among worker threads, with timings |
| `hebrasync-counters [10\|11\|12] [-i ITERATIONS]` | two threads incrementing a shared counter: atomic and unprotected (10), plus mutex-protected (11, the default); eight threads printing factorials under a lock (12) |
| `hebrasync-prodcons [-n ITERATIONS]` | a producer and a consumer passing values 1..N through one variable, synchronised by two semaphores |

The functions behind them can also be called directly, for example
`hebrasync.basics.factorial(10)`, `hebrasync.basics.factorials_with_futures([5, 10])`,
`hebrasync.integral.compare(samples, workers)` (returns an `IntegralReport`,
printable with `format_report`), `hebrasync.counters.run_comparison(iterations)`
(returns a list of `CounterRun`, each with a `correct` property) or
`hebrasync.prodcons.run_producer_consumer(iterations, out)` (returns the
values consumed, in order).

## What to expect

The default sizes are large: `hebrasync-integral` uses 1024³ samples and
example 10 of `hebrasync-counters` uses 800,000,000 increments per thread.
In pure Python these take a very long time; pass `-m` or `-i` for a quick run.
The threads run Python code, so splitting the integral among workers is not
expected to make it faster, and whether the unprotected counter actually loses
increments depends on the interpreter's thread scheduling.