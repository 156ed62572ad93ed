"""In-memory storage for nodes and links.

The store is the single source of truth for node states and the only place
where a node's state may change.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Optional

from statecascade.core.config import Link, Node
from statecascade.core.errors import NodeNotFoundError
from statecascade.core.event import StateChanged
from statecascade.core.types import NodeId, State

logger = logging.getLogger(__name__)


class InMemoryStore:
    """In-memory store for a flow's nodes and links.

    Uses __slots__ and keeps its collections private; callers only ever see
    frozen Node/Link values or copies of the internal lists, so every state
    change goes through set_node_state and is observable as an event.

    Attributes:
        _nodes: Current node values keyed by id, in insertion order.
        _links: All links in registration order.
        _links_by_source: Links indexed by trigger source id.
    """

    __slots__ = ("_nodes", "_links", "_links_by_source")

    def __init__(self):
        self._nodes: Dict[NodeId, Node] = {}
        self._links: List[Link] = []
        self._links_by_source: Dict[NodeId, List[Link]] = {}

    def add_node(self, node: Node) -> None:
        """Add a node, overwriting any node with the same id.

        Args:
            node: Node to register.
        """
        self._nodes[node.id] = node
        logger.debug(f"Registered node {node.id} in state {node.state!r}")

    def get_node(self, node_id: NodeId) -> Optional[Node]:
        """Get a node by id.

        Returns:
            The node, or None if not found.
        """
        return self._nodes.get(node_id)

    def set_node_state(self, node_id: NodeId, new_state: State) -> Optional[StateChanged]:
        """Update a node's state.

        This is the only place where node state is mutated.

        Args:
            node_id: Node to update.
            new_state: New state value.

        Returns:
            StateChanged event if the state changed, None if the node was
            already in new_state.

        Raises:
            NodeNotFoundError: If the node doesn't exist.
        """
        node = self._nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)

        if node.state == new_state:
            return None

        self._nodes[node_id] = replace(node, state=new_state)
        return StateChanged(node_id=node_id, from_state=node.state, to_state=new_state)

    def get_links_for_source(self, source_id: NodeId) -> List[Link]:
        """Get all links triggered by state changes on the given node.

        Args:
            source_id: Node that changed state.

        Returns:
            Links whose trigger source is source_id, in registration order.
        """
        return list(self._links_by_source.get(source_id, ()))

    def add_link(self, link: Link) -> None:
        """Add a link, preserving registration order."""
        self._links.append(link)
        self._links_by_source.setdefault(link.trigger.source_id, []).append(link)
        logger.debug(f"Registered link {link.id} on source {link.trigger.source_id}")

    def list_nodes(self) -> List[Node]:
        """Get all nodes, in insertion order."""
        return list(self._nodes.values())

    def list_links(self) -> List[Link]:
        """Get all links, in registration order."""
        return list(self._links)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __repr__(self) -> str:
        return f"InMemoryStore(nodes={len(self._nodes)}, links={len(self._links)})"
