import pytest

from capataz.node import NodeStartError, NodeTerminationError
from capataz.worker_errors import (
    WorkerRuntimeFailed,
    WorkerRuntimePanicked,
    WorkerStartError,
    WorkerStartFailed,
    WorkerStartTimedOut,
    WorkerTerminationError,
    WorkerTerminationFailed,
    WorkerTerminationPanicked,
    WorkerTerminationTimedOut,
)


def test_start_failed_message_and_cause():
    cause = ValueError("boom")
    err = WorkerStartFailed("/root/worker", cause)
    assert str(err) == "worker failed to start: boom"
    assert err.runtime_name == "/root/worker"
    assert err.start_err is cause
    assert err.__cause__ is cause


def test_start_timed_out_message():
    err = WorkerStartTimedOut("/root/slow")
    assert str(err) == "worker timed out on start"
    assert err.runtime_name == "/root/slow"


@pytest.mark.parametrize(
    "err",
    [WorkerStartFailed("/a", RuntimeError("x")), WorkerStartTimedOut("/a")],
)
def test_start_errors_share_base(err):
    assert err.runtime_name == "/a"
    assert isinstance(err, WorkerStartError)
    assert isinstance(err, NodeStartError)
    assert not isinstance(err, NodeTerminationError)


def test_runtime_failed_message_and_cause():
    cause = RuntimeError("lost connection")
    err = WorkerRuntimeFailed("/sup/db", cause)
    assert str(err) == "worker runtime failed: lost connection"
    assert err.err is cause
    assert err.__cause__ is cause
    assert err.runtime_name == "/sup/db"


def test_termination_failed_message_and_cause():
    cause = OSError("close")
    err = WorkerTerminationFailed("/sup/db", cause)
    assert str(err) == "worker failed to terminate: close"
    assert err.termination_err is cause
    assert err.__cause__ is cause


@pytest.mark.parametrize(
    ("cls", "message"),
    [
        (WorkerRuntimePanicked, "worker panicked at runtime"),
        (WorkerTerminationTimedOut, "worker took too long to terminate"),
        (WorkerTerminationPanicked, "worker panicked at termination"),
    ],
)
def test_fixed_messages(cls, message):
    err = cls("/sup/w")
    assert str(err) == message
    assert err.runtime_name == "/sup/w"


@pytest.mark.parametrize(
    "err",
    [
        WorkerRuntimeFailed("/w", ValueError("v")),
        WorkerRuntimePanicked("/w"),
        WorkerTerminationFailed("/w", ValueError("v")),
        WorkerTerminationTimedOut("/w"),
        WorkerTerminationPanicked("/w"),
    ],
)
def test_termination_errors_share_base(err):
    assert err.runtime_name == "/w"
    assert isinstance(err, WorkerTerminationError)
    assert isinstance(err, NodeTerminationError)
    assert not isinstance(err, NodeStartError)


def test_errors_can_be_caught_by_base():
    err = WorkerTerminationTimedOut("/root/w")
    assert isinstance(err, WorkerTerminationError)
    assert err.runtime_name == "/root/w"
    assert str(err) == "worker took too long to terminate"