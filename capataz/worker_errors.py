"""Errors reported by worker (leaf) nodes at start, at runtime and at termination."""

from __future__ import annotations

from capataz.node import NodeStartError, NodeTerminationError

__all__ = [
    "WorkerStartError",
    "WorkerStartFailed",
    "WorkerStartTimedOut",
    "WorkerTerminationError",
    "WorkerRuntimeFailed",
    "WorkerRuntimePanicked",
    "WorkerTerminationFailed",
    "WorkerTerminationTimedOut",
    "WorkerTerminationPanicked",
]


class WorkerStartError(NodeStartError):
    """Any error reported while starting a worker."""


class WorkerStartFailed(WorkerStartError):
    """The worker's own start logic reported an error."""

    def __init__(self, runtime_name: str, start_err: BaseException) -> None:
        super().__init__(runtime_name, f"worker failed to start: {start_err}")
        self.start_err = start_err
        self.__cause__ = start_err


class WorkerStartTimedOut(WorkerStartError):
    """The worker took longer than allowed to signal that it started."""

    def __init__(self, runtime_name: str) -> None:
        super().__init__(runtime_name, "worker timed out on start")


class WorkerTerminationError(NodeTerminationError):
    """Any outcome, other than a clean stop, of a worker's runtime or termination."""


class WorkerRuntimeFailed(WorkerTerminationError):
    """The worker's business logic returned an error; its supervisor may restart it."""

    def __init__(self, runtime_name: str, err: BaseException) -> None:
        super().__init__(runtime_name, f"worker runtime failed: {err}")
        self.err = err
        self.__cause__ = err


class WorkerRuntimePanicked(WorkerTerminationError):
    """The worker's business logic crashed unexpectedly."""

    def __init__(self, runtime_name: str) -> None:
        super().__init__(runtime_name, "worker panicked at runtime")


class WorkerTerminationFailed(WorkerTerminationError):
    """The worker's termination logic returned an error."""

    def __init__(self, runtime_name: str, termination_err: BaseException) -> None:
        super().__init__(runtime_name, f"worker failed to terminate: {termination_err}")
        self.termination_err = termination_err
        self.__cause__ = termination_err


class WorkerTerminationTimedOut(WorkerTerminationError):
    """The worker took longer than allowed to terminate."""

    def __init__(self, runtime_name: str) -> None:
        super().__init__(runtime_name, "worker took too long to terminate")


class WorkerTerminationPanicked(WorkerTerminationError):
    """The worker's termination logic crashed unexpectedly."""

    def __init__(self, runtime_name: str) -> None:
        super().__init__(runtime_name, "worker panicked at termination")