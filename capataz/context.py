"""Termination signals handed to every supervised task."""

from __future__ import annotations

import asyncio

__all__ = [
    "ContextError",
    "ContextCancelled",
    "ContextTimedOut",
    "AbortHandle",
    "Context",
]


class ContextError(Exception):
    """Reason a `Context` is done."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContextError):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class ContextCancelled(ContextError):
    """The context was cancelled through its `AbortHandle`."""

    def __init__(self) -> None:
        super().__init__()

    def __str__(self) -> str:
        return "context was canceled"


class ContextTimedOut(ContextError):
    """The context reached the duration given to `Context.with_timeout`."""

    def __init__(self, duration: float) -> None:
        super().__init__(duration)
        self.duration = duration

    def __str__(self) -> str:
        return "context timed out"


class _Signal:
    """Shared done-state of a context and of every context derived from it."""

    def __init__(self, parent: _Signal | None = None) -> None:
        self.error: ContextError | None = None
        self._children: list[_Signal] = []
        self._waiters: list[asyncio.Future[ContextError]] = []
        self._timer: asyncio.TimerHandle | None = None
        self._parent = parent
        if parent is not None:
            if parent.error is not None:
                self.error = parent.error
            else:
                parent._children.append(self)

    def fire(self, error: ContextError) -> None:
        if self.error is not None:
            return
        self.error = error
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(error)
        children, self._children = self._children, []
        for child in children:
            child.fire(error)
        if self._parent is not None:
            try:
                self._parent._children.remove(self)
            except ValueError:
                pass
            self._parent = None

    def set_timer(self, handle: asyncio.TimerHandle) -> None:
        if self.error is not None:
            handle.cancel()
        else:
            self._timer = handle

    def waiter(self) -> asyncio.Future[ContextError]:
        future: asyncio.Future[ContextError] = asyncio.get_running_loop().create_future()
        if self.error is not None:
            future.set_result(self.error)
        else:
            self._waiters = [w for w in self._waiters if not w.done()]
            self._waiters.append(future)
        return future


class AbortHandle:
    """Cancels the context it was returned with, and every context derived from it."""

    __slots__ = ("_signal",)

    def __init__(self, signal: _Signal) -> None:
        self._signal = signal

    def abort(self) -> None:
        """Mark the context as cancelled; does nothing if it is already done."""
        self._signal.fire(ContextCancelled())


class Context:
    """Termination signal for a supervised task.

    A fresh context never expires. Derived contexts become done when they are
    cancelled, when their timeout elapses, or when their parent becomes done,
    in which case they report the parent's reason.
    """

    __slots__ = ("_signal", "_runtime_name")

    def __init__(self) -> None:
        self._signal = _Signal()
        self._runtime_name = ""

    @classmethod
    def _derive(cls, signal: _Signal, runtime_name: str) -> Context:
        ctx = cls.__new__(cls)
        ctx._signal = signal
        ctx._runtime_name = runtime_name
        return ctx

    @property
    def runtime_name(self) -> str:
        """Runtime name of the node this context belongs to."""
        return self._runtime_name

    def with_runtime_name(self, runtime_name: str) -> Context:
        """Return a context sharing this one's signal under another runtime name."""
        return self._derive(self._signal, runtime_name)

    def with_cancel(self) -> tuple[Context, AbortHandle]:
        """Return a child context together with the handle that cancels it."""
        signal = _Signal(self._signal)
        return self._derive(signal, self._runtime_name), AbortHandle(signal)

    def with_timeout(self, duration: float) -> Context:
        """Return a child context that times out after ``duration`` seconds.

        Must be called while an event loop is running.
        """
        loop = asyncio.get_running_loop()
        signal = _Signal(self._signal)
        signal.set_timer(loop.call_later(duration, signal.fire, ContextTimedOut(duration)))
        return self._derive(signal, self._runtime_name)

    def done(self) -> asyncio.Future[ContextError]:
        """Return a future resolving to the reason this context is done."""
        return self._signal.waiter()

    def __repr__(self) -> str:
        return f"Context(runtime_name={self._runtime_name!r}, error={self._signal.error!r})"