"""State change events emitted by the store."""

from dataclasses import dataclass
from typing import Any, Dict

from statecascade.core.types import NodeId, State


@dataclass(frozen=True)
class StateChanged:
    """Emitted when a node's state changes.

    This is the only unit of information that flows through the propagation
    queue; links are matched against it.

    Attributes:
        node_id: Node whose state changed.
        from_state: State before the change.
        to_state: State after the change.
    """

    node_id: NodeId
    from_state: State
    to_state: State

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary."""
        return {
            "node_id": self.node_id,
            "from_state": self.from_state,
            "to_state": self.to_state,
        }
