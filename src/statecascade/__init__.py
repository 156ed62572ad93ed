"""
statecascade - Declarative state propagation engine.

Named stateful nodes plus links that, when one node changes to a given
state, push state changes onto other nodes. One update cascades
breadth-first through fork and guarded merge patterns in a single call.
"""

__version__ = "0.1.0"

from statecascade.core.config import (
    FlowConfig,
    Guard,
    GuardCondition,
    GuardType,
    Link,
    Node,
    TargetAction,
    Trigger,
)
from statecascade.core.types import NodeId, State
from statecascade.core.errors import CascadeError, CascadeTooLargeError, NodeNotFoundError
from statecascade.core.event import StateChanged
from statecascade.core.trace import TraceEntry, format_trace, format_trace_entry
from statecascade.core.engine import CascadeEngine
from statecascade.evaluation import evaluate_guard, match_link
from statecascade.storage import InMemoryStore

__all__ = [
    # Version
    "__version__",
    # Types
    "NodeId",
    "State",
    # Configuration
    "FlowConfig",
    "Node",
    "Link",
    "Trigger",
    "Guard",
    "GuardCondition",
    "GuardType",
    "TargetAction",
    # Storage
    "InMemoryStore",
    # Engine
    "CascadeEngine",
    "StateChanged",
    # Evaluation
    "match_link",
    "evaluate_guard",
    # Trace
    "TraceEntry",
    "format_trace",
    "format_trace_entry",
    # Errors
    "CascadeError",
    "NodeNotFoundError",
    "CascadeTooLargeError",
]
