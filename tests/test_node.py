import pytest

from capataz.node import (
    NodeStartError,
    NodeTerminationError,
    build_runtime_name,
    to_node_name,
)


def test_build_runtime_name_joins_with_slash():
    assert build_runtime_name("root", "worker") == "root/worker"


def test_build_runtime_name_nested():
    name = build_runtime_name(build_runtime_name("", "root"), "child")
    assert name == "/root/child"


@pytest.mark.parametrize("name", ["worker", "child-1", "a_b"])
def test_to_node_name_round_trip(name):
    assert to_node_name(build_runtime_name("/root/sub", name)) == name


def test_to_node_name_without_slash_is_identity():
    assert to_node_name("standalone") == "standalone"


def test_to_node_name_takes_last_segment():
    assert to_node_name("/root/sub/leaf") == "leaf"


def test_to_node_name_trailing_slash_gives_empty():
    assert to_node_name("/root/") == ""


def test_node_start_error_carries_runtime_name():
    err = NodeStartError("/root/worker", "boom")
    assert err.runtime_name == "/root/worker"
    assert str(err) == "boom"


def test_node_termination_error_carries_runtime_name():
    err = NodeTerminationError("/root/sub")
    assert err.runtime_name == "/root/sub"
    assert "/root/sub" in str(err)


def test_node_errors_are_not_interchangeable():
    err = NodeTerminationError("/root/a", "stop")
    assert err.runtime_name == "/root/a"
    assert not isinstance(err, NodeStartError)
    start_err = NodeStartError("/root/b", "go")
    assert start_err.runtime_name == "/root/b"
    assert not isinstance(start_err, NodeTerminationError)