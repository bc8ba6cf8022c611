"""Supervision tree building blocks for asyncio: contexts, node errors, names and events."""

__version__ = "0.1.0"

__all__ = ["context", "events", "node", "supervisor_errors", "testing", "worker_errors"]