"""Errors reported by supervisor (subtree) nodes at start and at termination."""

from __future__ import annotations

from collections.abc import Iterable

from capataz.node import NodeStartError, NodeTerminationError

__all__ = [
    "SupervisorStartError",
    "SupervisorStartFailed",
    "SupervisorBuildFailed",
    "SupervisorTerminationError",
    "SupervisorTerminationFailed",
    "SupervisorRestartFailed",
    "StartErrorAlreadyReported",
]


class SupervisorStartError(NodeStartError):
    """Any error reported while starting a supervisor."""


class SupervisorStartFailed(SupervisorStartError):
    """A child failed to start.

    ``termination_err`` holds the error raised while rolling back the children
    that had already started, if that rollback failed too.
    """

    def __init__(
        self,
        runtime_name: str,
        start_err: BaseException,
        termination_err: NodeTerminationError | None = None,
    ) -> None:
        super().__init__(runtime_name, f"supervisor failed to start: {start_err}")
        self.start_err = start_err
        self.termination_err = termination_err
        self.__cause__ = start_err


class SupervisorBuildFailed(SupervisorStartError):
    """The function that builds the supervisor's children reported an error."""

    def __init__(self, runtime_name: str, build_err: BaseException) -> None:
        super().__init__(runtime_name, f"supervisor failed to build nodes: {build_err}")
        self.build_err = build_err
        self.__cause__ = build_err


class SupervisorTerminationError(NodeTerminationError):
    """Any outcome, other than a clean stop, of a supervisor's runtime or termination."""


class SupervisorTerminationFailed(SupervisorTerminationError):
    """One or more children, or the cleanup step, failed while terminating.

    Termination carries on past a failing child, so every child error is kept.
    """

    def __init__(
        self,
        runtime_name: str,
        termination_errors: Iterable[NodeTerminationError] = (),
        cleanup_err: BaseException | None = None,
    ) -> None:
        super().__init__(runtime_name, "supervisor failed to terminate")
        self.termination_errors = tuple(termination_errors)
        self.cleanup_err = cleanup_err
        if cleanup_err is not None:
            self.__cause__ = cleanup_err


class SupervisorRestartFailed(SupervisorTerminationError):
    """A child could not be started again during a restart."""

    def __init__(self, start_err: NodeStartError) -> None:
        super().__init__(start_err.runtime_name, str(start_err))
        self.start_err = start_err
        self.__cause__ = start_err


class StartErrorAlreadyReported(SupervisorTerminationError):
    """The supervisor stopped on a start error that was already reported elsewhere."""

    def __init__(self, runtime_name: str = "") -> None:
        super().__init__(runtime_name, "start error already reported")