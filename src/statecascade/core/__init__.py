"""Core module for the statecascade propagation engine.

This module provides the configuration schema, events, trace and the
cascade engine itself.
"""

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
from statecascade.core.errors import CascadeError, CascadeTooLargeError, NodeNotFoundError
from statecascade.core.event import StateChanged
from statecascade.core.trace import TraceEntry, format_trace, format_trace_entry
from statecascade.core.engine import CascadeEngine

__all__ = [
    "CascadeEngine",
    "FlowConfig",
    "Node",
    "Link",
    "Trigger",
    "Guard",
    "GuardCondition",
    "GuardType",
    "TargetAction",
    "StateChanged",
    "TraceEntry",
    "format_trace",
    "format_trace_entry",
    "CascadeError",
    "NodeNotFoundError",
    "CascadeTooLargeError",
]
