# capataz

Building blocks for supervision trees on top of `asyncio`, in the spirit of
Erlang's OTP. The package has no dependencies outside the standard library
and provides:

- `capataz.context`: a `Context` that tells supervised tasks when to stop,
  with cancellation (`with_cancel`) and deadlines (`with_timeout`) that
  propagate from parent to child.
- `capataz.worker_errors` and `capataz.supervisor_errors`: the exceptions
  that describe a worker or a supervisor failing to start, failing at
  runtime or failing to terminate.
- `capataz.node`: the `Strategy` enum (`ONE_FOR_ONE`, `ONE_FOR_ALL`,
  `REST_FOR_ONE`), the base exceptions `NodeStartError` and
  `NodeTerminationError`, and the runtime-name helpers
  `build_runtime_name` and `to_node_name`.
- `capataz.events`: an `Event` record (`kind`, `node`, `error`) for everything
  that may happen in a running tree, an `EventListener` that observes events,
  and an `EventNotifier` that builds events and sends them to a listener.
- `capataz.testing`: an `EventBufferCollector` and `EventAssert` helpers for
  asserting on the sequence of events in tests.

## Installation

```
pip install capataz
```

For the test suite:

```
pip install "capataz[test]"
pytest
```

## Contexts

`Context()` never expires. `with_cancel()` returns a child context and the
`AbortHandle` that cancels it; `with_timeout(seconds)` returns a child context
that times out (it must be called while an event loop is running).
`done()` returns a future that resolves to the reason the context ended: a
`ContextCancelled` or a `ContextTimedOut` instance (the latter keeps the
`duration`). The future resolves to the reason; it does not raise it.

```python
import asyncio
from capataz.context import Context, ContextCancelled

async def worker(ctx: Context) -> None:
    reason = await ctx.done()
    if isinstance(reason, ContextCancelled):
        print("asked to stop:", reason)

async def main() -> None:
    ctx, handle = Context().with_cancel()
    task = asyncio.create_task(worker(ctx))
    await asyncio.sleep(0)
    handle.abort()
    await task

asyncio.run(main())
```

Cancelling or timing out a parent context also ends every child derived
from it, and the child reports the parent's reason. A child's own
cancellation or timeout leaves the parent running. `with_runtime_name(name)`
returns a context that shares the same signal under another `runtime_name`.

## Runtime names

```python
from capataz.node import build_runtime_name, to_node_name

build_runtime_name("/root", "worker")   # "/root/worker"
to_node_name("/root/worker")            # "worker"
```

## Errors

Worker errors derive from `WorkerStartError` (`WorkerStartFailed`,
`WorkerStartTimedOut`) or `WorkerTerminationError` (`WorkerRuntimeFailed`,
`WorkerRuntimePanicked`, `WorkerTerminationFailed`,
`WorkerTerminationTimedOut`, `WorkerTerminationPanicked`). Supervisor errors
derive from `SupervisorStartError` (`SupervisorStartFailed`,
`SupervisorBuildFailed`) or `SupervisorTerminationError`
(`SupervisorTerminationFailed`, `SupervisorRestartFailed`,
`StartErrorAlreadyReported`). All of them carry the `runtime_name` of the
node they concern, and those wrapping another error set it as `__cause__`.

## Observing events

An `EventListener` wraps a callback; if the callback returns an awaitable,
it is awaited. `EventListener.from_queue(queue)` puts every event on an
`asyncio.Queue`, and `EventListener.empty()` ignores them.

```python
import asyncio
from capataz.events import EventListener, EventNotifier

async def main() -> None:
    queue: asyncio.Queue = asyncio.Queue()
    notifier = EventNotifier(EventListener.from_queue(queue))
    await notifier.worker_started("/root/worker")
    event = await queue.get()
    print(event.kind, event.runtime_name)

asyncio.run(main())
```

`EventNotifier.notify_runtime_error(err)` reports a `WorkerRuntimeFailed` as
a worker runtime failure and a supervisor that gave up restarting as
restarted too many times; any other error raises `ValueError`.

## Asserting on events in tests

```python
from capataz.testing import EventAssert, new_testing_listener

async def test_tree() -> None:
    listener, collector = new_testing_listener()
    # ... emit events through EventNotifier(listener) ...
    await collector.wait_till(EventAssert.worker_started("/root/worker"), 1.0)
    collector.assert_exact([EventAssert.worker_started("/root/worker")])
```

`wait_till` raises `TimeoutError` when no new event arrives within the given
number of seconds while the expectation is still unmatched; `assert_exact`
and `EventAssert.check` raise `AssertionError`.

## What this package does not do

It does not run supervision trees. There are no worker or supervisor
specifications, no task spawning, and no restart logic: `Strategy` names the
restart strategies but nothing in the package applies them. The package
supplies the contexts, errors, names and events that such a runtime would
use.