"""Exceptions raised by the cascade engine."""

from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from statecascade.core.trace import TraceEntry


class CascadeError(Exception):
    """Base exception for statecascade."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NodeNotFoundError(CascadeError):
    """Raised when an operation references a node that is not in the store.

    Attributes:
        node_id: The unknown node id.
    """

    def __init__(self, node_id: str):
        super().__init__(f"Node not found: {node_id}", {"node_id": node_id})
        self.node_id = node_id


class CascadeTooLargeError(CascadeError):
    """Raised when a cascade records more events than the configured ceiling.

    This almost always means the link configuration contains a cycle. State
    changes applied before the abort are not reverted.

    Attributes:
        limit: The ceiling that was exceeded.
        trace: Trace entries recorded before the abort.
    """

    def __init__(self, limit: int, trace: Optional[List["TraceEntry"]] = None):
        super().__init__(
            f"Max events limit ({limit}) exceeded - possible infinite loop in link configuration",
            {"limit": limit},
        )
        self.limit = limit
        self.trace = list(trace or [])
