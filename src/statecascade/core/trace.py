"""Cascade trace entries and formatting helpers.

A trace is the ordered list of every state change produced by one
``update_state`` call. It is purely observational; the engine never reads
it back for control flow.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from statecascade.core.event import StateChanged


@dataclass(frozen=True)
class TraceEntry:
    """A single state change recorded during a cascade.

    Attributes:
        event: The state change that occurred.
        triggered_by: Id of the link that caused the change; None for the
            externally initiated first change.
    """

    event: StateChanged
    triggered_by: Optional[str] = None

    @property
    def is_initial(self) -> bool:
        """Whether this entry is the change that started the cascade."""
        return self.triggered_by is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert trace entry to dictionary."""
        result = {"event": self.event.to_dict()}
        if self.triggered_by is not None:
            result["triggered_by"] = self.triggered_by
        return result


def format_trace_entry(entry: TraceEntry) -> str:
    """Format a single trace entry as a readable string.

    Examples:
        >>> format_trace_entry(TraceEntry(StateChanged("order", "PENDING", "PROCESSING")))
        'order: PENDING -> PROCESSING'
    """
    event = entry.event
    line = f"{event.node_id}: {event.from_state} -> {event.to_state}"
    if entry.triggered_by is not None:
        line += f" (via {entry.triggered_by})"
    return line


def format_trace(trace: List[TraceEntry]) -> str:
    """Format a complete trace as numbered lines."""
    if not trace:
        return "(no state changes)"
    return "\n".join(f"{i}. {format_trace_entry(entry)}" for i, entry in enumerate(trace, start=1))
