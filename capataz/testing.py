"""Helpers to record the events of a supervision tree and assert on them."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable

from capataz.events import Event, EventKind, EventListener

__all__ = [
    "EventBufferCollector",
    "EventAssert",
    "new_testing_listener",
]


class EventBufferCollector:
    """Keeps every event published by a supervision tree, in order."""

    def __init__(self) -> None:
        self._events: list[Event] = []
        self._waiters: list[asyncio.Future[None]] = []
        self._index = 0

    def collect(self, event: Event) -> None:
        """Store ``event`` and wake up anyone waiting for a new one."""
        self._events.append(event)
        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(None)

    def get_events(self) -> list[Event]:
        """Return a copy of the events collected so far."""
        return list(self._events)

    def assert_exact(self, asserts: Iterable[EventAssert]) -> None:
        """Check that the collected events match ``asserts`` one by one, in order.

        Raises `AssertionError` on a count mismatch or on the first failing assertion.
        """
        expected = list(asserts)
        events = self.get_events()
        if len(expected) != len(events):
            raise AssertionError(
                f"expected {len(expected)} events, got {len(events)}: {events!r}"
            )
        for event, expectation in zip(events, expected):
            expectation.check(event)

    async def wait_till(self, expected: EventAssert, wait_duration: float) -> None:
        """Wait until an event, past or future, satisfies ``expected``.

        Raises `TimeoutError` if no new event arrives within ``wait_duration``
        seconds while the assertion is still unmatched.
        """
        while True:
            events = self.get_events()
            for index, event in enumerate(events[self._index:], self._index):
                self._index = index
                if expected.matches(event):
                    return

            waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()
            self._waiters.append(waiter)
            try:
                await asyncio.wait_for(waiter, wait_duration)
            except asyncio.TimeoutError:
                raise TimeoutError(
                    "wait_till: Expected assertion after timeout, did not happen"
                ) from None


def new_testing_listener() -> tuple[EventListener, EventBufferCollector]:
    """Return a listener that records every event into a new collector."""
    collector = EventBufferCollector()
    return EventListener(collector.collect), collector


_LABELS = {
    EventKind.SUPERVISOR_STARTED: "SupervisorStarted",
    EventKind.SUPERVISOR_BUILD_FAILED: "SupervisorBuildFailed",
    EventKind.SUPERVISOR_START_FAILED: "SupervisorStartFailed",
    EventKind.SUPERVISOR_TERMINATED: "SupervisorTerminated",
    EventKind.SUPERVISOR_TERMINATION_FAILED: "SupervisorTerminationFailed",
    EventKind.SUPERVISOR_RESTARTED_TOO_MANY_TIMES: "SupervisorRestartedToManyTimes",
    EventKind.WORKER_STARTED: "WorkerStarted",
    EventKind.WORKER_START_TIMED_OUT: "WorkerStartTimedOut",
    EventKind.WORKER_START_FAILED: "WorkerStartFailed",
    EventKind.WORKER_TERMINATED: "WorkerTerminated",
    EventKind.WORKER_TERMINATION_TIMED_OUT: "WorkerTerminationTimedOut",
    EventKind.WORKER_TERMINATION_FAILED: "WorkerTerminationFailed",
    EventKind.WORKER_TERMINATION_PANICKED: "WorkerTerminationPanicked",
    EventKind.WORKER_RUNTIME_FAILED: "WorkerRuntimeFailed",
    EventKind.WORKER_RUNTIME_PANICKED: "WorkerRuntimePanicked",
}


class EventAssert:
    """An expectation on a single event: its kind and its node's runtime name."""

    __slots__ = ("_explain",)

    def __init__(self, explain: Callable[[Event], str | None]) -> None:
        self._explain = explain

    def matches(self, event: Event) -> bool:
        """Return whether ``event`` satisfies this expectation."""
        return self._explain(event) is None

    def check(self, event: Event) -> None:
        """Raise `AssertionError` if ``event`` does not satisfy this expectation."""
        message = self._explain(event)
        if message is not None:
            raise AssertionError(f"EventAssert failed: {message}")

    @classmethod
    def _expect(cls, kind: EventKind, name: str) -> EventAssert:
        label = _LABELS[kind]

        def explain(event: Event) -> str | None:
            if event.kind is not kind:
                return f"Expecting {label}; got {event!r} instead"
            if event.runtime_name != name:
                return f"Expecting {label} with name {name}; got {event!r} instead"
            return None

        return cls(explain)

    @classmethod
    def supervisor_started(cls, name: str) -> EventAssert:
        """Expect a supervisor named ``name`` to have started."""
        return cls._expect(EventKind.SUPERVISOR_STARTED, name)

    @classmethod
    def supervisor_terminated(cls, name: str) -> EventAssert:
        """Expect a supervisor named ``name`` to have terminated."""
        return cls._expect(EventKind.SUPERVISOR_TERMINATED, name)

    @classmethod
    def supervisor_termination_failed(cls, name: str) -> EventAssert:
        """Expect a supervisor named ``name`` to have failed to terminate."""
        return cls._expect(EventKind.SUPERVISOR_TERMINATION_FAILED, name)

    @classmethod
    def supervisor_build_failed(cls, name: str) -> EventAssert:
        """Expect a supervisor named ``name`` to have failed to build its children."""
        return cls._expect(EventKind.SUPERVISOR_BUILD_FAILED, name)

    @classmethod
    def supervisor_start_failed(cls, name: str) -> EventAssert:
        """Expect a supervisor named ``name`` to have failed to start."""
        return cls._expect(EventKind.SUPERVISOR_START_FAILED, name)

    @classmethod
    def supervisor_restarted_too_many_times(cls, name: str) -> EventAssert:
        """Expect a supervisor named ``name`` to have given up restarting."""
        return cls._expect(EventKind.SUPERVISOR_RESTARTED_TOO_MANY_TIMES, name)

    @classmethod
    def worker_started(cls, name: str) -> EventAssert:
        """Expect a worker named ``name`` to have started."""
        return cls._expect(EventKind.WORKER_STARTED, name)

    @classmethod
    def worker_start_failed(cls, name: str) -> EventAssert:
        """Expect a worker named ``name`` to have failed to start."""
        return cls._expect(EventKind.WORKER_START_FAILED, name)

    @classmethod
    def worker_start_timed_out(cls, name: str) -> EventAssert:
        """Expect a worker named ``name`` to have timed out on start."""
        return cls._expect(EventKind.WORKER_START_TIMED_OUT, name)

    @classmethod
    def worker_terminated(cls, name: str) -> EventAssert:
        """Expect a worker named ``name`` to have terminated."""
        return cls._expect(EventKind.WORKER_TERMINATED, name)

    @classmethod
    def worker_runtime_failed(cls, name: str) -> EventAssert:
        """Expect a worker named ``name`` to have failed at runtime."""
        return cls._expect(EventKind.WORKER_RUNTIME_FAILED, name)

    @classmethod
    def worker_termination_failed(cls, name: str) -> EventAssert:
        """Expect a worker named ``name`` to have failed to terminate."""
        return cls._expect(EventKind.WORKER_TERMINATION_FAILED, name)

    @classmethod
    def worker_termination_timed_out(cls, name: str) -> EventAssert:
        """Expect a worker named ``name`` to have timed out on termination."""
        return cls._expect(EventKind.WORKER_TERMINATION_TIMED_OUT, name)