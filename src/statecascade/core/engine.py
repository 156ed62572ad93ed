"""Cascade propagation engine.

This module provides the breadth-first loop that drives one external state
change through every matching, guard-satisfied link until the flow settles.
"""

import logging
from collections import deque
from typing import TYPE_CHECKING, Deque, Dict, List

from statecascade.core.config import DEFAULT_MAX_EVENTS, FlowConfig, Link
from statecascade.core.errors import CascadeTooLargeError
from statecascade.core.event import StateChanged
from statecascade.core.trace import TraceEntry
from statecascade.core.types import NodeId, State
from statecascade.evaluation import evaluate_guard, match_link

if TYPE_CHECKING:
    from statecascade.storage.memory import InMemoryStore

logger = logging.getLogger(__name__)


class CascadeEngine:
    """Orchestrates state changes and cascades them through links.

    Algorithm:
    1. Apply the initial state change through the store.
    2. Record it in the trace and enqueue the event.
    3. While the queue is not empty:
       a. Abort if the trace has grown past max_events.
       b. Dequeue the next event.
       c. For each link on the event's node, in registration order, skip it
          if the trigger doesn't match or the guard fails; otherwise apply
          its actions in order, recording and enqueueing every real change.
    4. Return the trace.

    Execution is synchronous and single-threaded. Callers sharing a store
    across threads must serialise update_state themselves.

    Uses __slots__ for memory efficiency.

    Attributes:
        store: Store holding the flow's nodes and links.
        max_events: Maximum trace length before a cascade is aborted.
    """

    __slots__ = ("store", "max_events")

    def __init__(self, store: "InMemoryStore", max_events: int = DEFAULT_MAX_EVENTS):
        """Initialize cascade engine.

        Args:
            store: Store to read and mutate.
            max_events: Event ceiling for a single update_state call.

        Raises:
            ValueError: If max_events is less than 1.
        """
        if max_events < 1:
            raise ValueError(f"max_events must be at least 1, got {max_events}")

        self.store = store
        self.max_events = max_events

    @classmethod
    def from_config(cls, config: FlowConfig) -> "CascadeEngine":
        """Create an engine over a fresh store built from configuration.

        Args:
            config: Flow configuration.

        Returns:
            Engine using the config's event ceiling.
        """
        logger.info(f"Initialized CascadeEngine: {config.name} v{config.version}")
        return cls(config.build_store(), max_events=config.max_events)

    def update_state(self, node_id: NodeId, new_state: State) -> List[TraceEntry]:
        """Update a node's state and process all cascading changes.

        Args:
            node_id: Node to update.
            new_state: New state value.

        Returns:
            Every state change that occurred, in order. Empty if the node was
            already in new_state.

        Raises:
            NodeNotFoundError: If node_id, or any action target reached during
                the cascade, is not in the store.
            CascadeTooLargeError: If the cascade exceeds max_events. Changes
                applied before the abort remain in the store.
        """
        initial = self.store.set_node_state(node_id, new_state)
        if initial is None:
            logger.debug(f"{node_id} already in state {new_state!r}, nothing to do")
            return []

        logger.info(f"Starting cascade: {node_id} {initial.from_state!r} -> {initial.to_state!r}")

        trace: List[TraceEntry] = [TraceEntry(event=initial)]
        queue: Deque[StateChanged] = deque([initial])

        while queue:
            if len(trace) > self.max_events:
                logger.error(f"Cascade from {node_id} exceeded {self.max_events} events, aborting")
                raise CascadeTooLargeError(self.max_events, trace)

            event = queue.popleft()

            for link in self.store.get_links_for_source(event.node_id):
                if not match_link(link, event):
                    continue
                if link.guard is not None and not evaluate_guard(link.guard, self.store):
                    logger.debug(f"Guard not satisfied for link {link.id}")
                    continue

                for change in self._fire(link):
                    trace.append(TraceEntry(event=change, triggered_by=link.id))
                    queue.append(change)

        logger.info(f"Cascade complete: {len(trace)} state changes")
        return trace

    def _fire(self, link: Link) -> List[StateChanged]:
        """Apply a link's actions in declared order.

        Args:
            link: Link whose trigger matched and guard passed.

        Returns:
            Events for the actions that actually changed a node.
        """
        logger.debug(f"Link {link.id} fired")
        changes = []
        for action in link.actions:
            change = self.store.set_node_state(action.target_id, action.target_state)
            if change is not None:
                changes.append(change)
        return changes

    def get_all_states(self) -> Dict[NodeId, State]:
        """Get a snapshot of all current node states."""
        return {node.id: node.state for node in self.store.list_nodes()}
