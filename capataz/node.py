"""Shared node vocabulary of a supervision tree: strategies, errors and names."""

from __future__ import annotations

import enum

__all__ = [
    "Strategy",
    "NodeStartError",
    "NodeTerminationError",
    "to_node_name",
    "build_runtime_name",
]


class Strategy(enum.Enum):
    """Restart strategy a supervisor applies when one of its children fails."""

    ONE_FOR_ONE = enum.auto()
    """Only the child that failed is restarted."""

    ONE_FOR_ALL = enum.auto()
    """All children are restarted when one child fails."""

    REST_FOR_ONE = enum.auto()
    """The failing child and every child started after it are restarted."""


class _NodeError(Exception):
    """Base for errors that are tied to a node of the supervision tree."""

    def __init__(self, runtime_name: str, message: str = "") -> None:
        super().__init__(message or f"node {runtime_name!r} failed")
        self.runtime_name = runtime_name


class NodeStartError(_NodeError):
    """A worker or a subtree could not be started."""


class NodeTerminationError(_NodeError):
    """A worker or a subtree stopped with an error, or failed to stop."""


def to_node_name(runtime_name: str) -> str:
    """Return the last segment of a slash-separated runtime name."""
    return runtime_name.rsplit("/", 1)[-1]


def build_runtime_name(parent_name: str, name: str) -> str:
    """Join a parent's runtime name and a child's name into a runtime name."""
    return f"{parent_name}/{name}"