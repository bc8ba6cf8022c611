"""Events emitted by a running supervision tree, and the listeners that observe them."""

from __future__ import annotations

import asyncio
import enum
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from capataz.supervisor_errors import (
    StartErrorAlreadyReported,
    SupervisorRestartFailed,
    SupervisorTerminationError,
    SupervisorTerminationFailed,
)
from capataz.worker_errors import WorkerRuntimeFailed

__all__ = [
    "EventKind",
    "NodeData",
    "Event",
    "EventListener",
    "EventNotifier",
]


class EventKind(enum.Enum):
    """Everything that may happen on a running supervision tree."""

    SUPERVISOR_STARTED = enum.auto()
    SUPERVISOR_BUILD_FAILED = enum.auto()
    SUPERVISOR_START_FAILED = enum.auto()
    SUPERVISOR_TERMINATED = enum.auto()
    SUPERVISOR_TERMINATION_FAILED = enum.auto()
    SUPERVISOR_RESTARTED_TOO_MANY_TIMES = enum.auto()
    WORKER_STARTED = enum.auto()
    WORKER_START_TIMED_OUT = enum.auto()
    WORKER_START_FAILED = enum.auto()
    WORKER_TERMINATED = enum.auto()
    WORKER_TERMINATION_TIMED_OUT = enum.auto()
    WORKER_TERMINATION_FAILED = enum.auto()
    WORKER_TERMINATION_PANICKED = enum.auto()
    WORKER_RUNTIME_FAILED = enum.auto()
    WORKER_RUNTIME_PANICKED = enum.auto()


@dataclass(frozen=True)
class NodeData:
    """Details about the node (supervisor or worker) that produced an event."""

    runtime_name: str


@dataclass(frozen=True)
class Event:
    """A single occurrence on the supervision tree, with the error behind it if any."""

    kind: EventKind
    node: NodeData
    error: BaseException | None = None

    @property
    def runtime_name(self) -> str:
        """Runtime name of the node that produced this event."""
        return self.node.runtime_name


NotifyFn = Callable[[Event], "Awaitable[Any] | Any"]


class EventListener:
    """A callback supplied by API consumers to observe a supervision tree.

    The callback receives each `Event`; if it returns an awaitable, the
    awaitable is awaited before the tree carries on.
    """

    __slots__ = ("_notify",)

    def __init__(self, notify: NotifyFn | None = None) -> None:
        self._notify = notify

    @classmethod
    def from_queue(cls, queue: asyncio.Queue[Event]) -> EventListener:
        """Return a listener that puts every event on ``queue``."""

        async def put(event: Event) -> None:
            await queue.put(event)

        return cls(put)

    @classmethod
    def empty(cls) -> EventListener:
        """Return a listener that ignores every event."""
        return cls(None)

    async def __call__(self, event: Event) -> None:
        if self._notify is None:
            return
        result = self._notify(event)
        if inspect.isawaitable(result):
            await result


class EventNotifier:
    """Builds events and hands them to an `EventListener`."""

    __slots__ = ("_listener",)

    def __init__(self, listener: EventListener | None = None) -> None:
        self._listener = listener if listener is not None else EventListener.empty()

    async def _emit(
        self, kind: EventKind, runtime_name: str, err: BaseException | None = None
    ) -> None:
        await self._listener(Event(kind, NodeData(runtime_name), err))

    async def supervisor_started(self, runtime_name: str) -> None:
        await self._emit(EventKind.SUPERVISOR_STARTED, runtime_name)

    async def supervisor_start_failed(self, runtime_name: str, err: BaseException) -> None:
        await self._emit(EventKind.SUPERVISOR_START_FAILED, runtime_name, err)

    async def supervisor_build_failed(self, runtime_name: str, err: BaseException) -> None:
        await self._emit(EventKind.SUPERVISOR_BUILD_FAILED, runtime_name, err)

    async def supervisor_terminated(self, runtime_name: str) -> None:
        await self._emit(EventKind.SUPERVISOR_TERMINATED, runtime_name)

    async def supervisor_termination_failed(
        self, runtime_name: str, err: BaseException
    ) -> None:
        await self._emit(EventKind.SUPERVISOR_TERMINATION_FAILED, runtime_name, err)

    async def supervisor_restarted_too_many_times(
        self, runtime_name: str, err: BaseException
    ) -> None:
        await self._emit(EventKind.SUPERVISOR_RESTARTED_TOO_MANY_TIMES, runtime_name, err)

    async def worker_started(self, runtime_name: str) -> None:
        await self._emit(EventKind.WORKER_STARTED, runtime_name)

    async def worker_start_failed(self, runtime_name: str, err: BaseException) -> None:
        await self._emit(EventKind.WORKER_START_FAILED, runtime_name, err)

    async def worker_start_timed_out(self, runtime_name: str, err: BaseException) -> None:
        await self._emit(EventKind.WORKER_START_TIMED_OUT, runtime_name, err)

    async def worker_terminated(self, runtime_name: str) -> None:
        await self._emit(EventKind.WORKER_TERMINATED, runtime_name)

    async def worker_runtime_failed(self, runtime_name: str, err: BaseException) -> None:
        await self._emit(EventKind.WORKER_RUNTIME_FAILED, runtime_name, err)

    async def worker_termination_failed(self, runtime_name: str, err: BaseException) -> None:
        await self._emit(EventKind.WORKER_TERMINATION_FAILED, runtime_name, err)

    async def worker_termination_panicked(
        self, runtime_name: str, err: BaseException
    ) -> None:
        await self._emit(EventKind.WORKER_TERMINATION_PANICKED, runtime_name, err)

    async def worker_termination_timed_out(
        self, runtime_name: str, err: BaseException
    ) -> None:
        await self._emit(EventKind.WORKER_TERMINATION_TIMED_OUT, runtime_name, err)

    async def notify_runtime_error(self, err: BaseException) -> None:
        """Report a child's runtime failure seen by its supervisor.

        A worker's runtime failure is reported as such; a supervisor that gave
        up restarting its children is reported as restarted too many times.
        Any other error raises `ValueError`.
        """
        if isinstance(err, WorkerRuntimeFailed):
            await self.worker_runtime_failed(err.runtime_name, err)
        elif isinstance(err, SupervisorTerminationError) and not isinstance(
            err,
            (SupervisorTerminationFailed, SupervisorRestartFailed, StartErrorAlreadyReported),
        ):
            await self.supervisor_restarted_too_many_times(err.runtime_name, err)
        else:
            raise ValueError(f"unsupported runtime error: {err!r}")