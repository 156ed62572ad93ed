"""Configuration classes for the cascade engine.

This module defines the declarative schema for state propagation: nodes,
link triggers, guards, actions, and the flow configuration that bundles them
and loads from JSON or YAML.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Union

import yaml

from statecascade.core.types import NodeId, State

if TYPE_CHECKING:
    from statecascade.storage.memory import InMemoryStore

DEFAULT_MAX_EVENTS = 1000


class GuardType(str, Enum):
    """Boolean combinators for guard conditions."""

    # All conditions must hold (merge)
    ALL_OF = "ALL_OF"
    # At least one condition must hold
    ANY_OF = "ANY_OF"


@dataclass(frozen=True)
class Node:
    """A stateful component of a flow.

    Whether a node stands for a workflow or a task is purely a naming
    convention; the engine treats all nodes identically.

    Attributes:
        id: Unique node identifier.
        state: Current state value.
    """

    id: NodeId
    state: State

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary."""
        return {"id": self.id, "state": self.state}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Node":
        """Create node from dictionary."""
        return cls(id=data["id"], state=data["state"])


@dataclass(frozen=True)
class Trigger:
    """Defines when a link activates.

    Attributes:
        source_id: Node that must change state.
        to_state: State the node must change to.
        from_state: If set, state the node must change from.
    """

    source_id: NodeId
    to_state: State
    from_state: Optional[State] = None

    def __post_init__(self):
        """Validate trigger configuration."""
        if not self.source_id:
            raise ValueError("Trigger requires source_id")
        if self.to_state is None:
            raise ValueError("Trigger requires to_state")

    def to_dict(self) -> Dict[str, Any]:
        """Convert trigger to dictionary."""
        result = {"source_id": self.source_id, "to_state": self.to_state}
        if self.from_state is not None:
            result["from_state"] = self.from_state
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Trigger":
        """Create trigger from dictionary."""
        return cls(
            source_id=data["source_id"],
            to_state=data["to_state"],
            from_state=data.get("from_state"),
        )


@dataclass(frozen=True)
class GuardCondition:
    """Checks whether a node is currently in a given state.

    Attributes:
        node_id: Node to inspect.
        state: Expected state.
    """

    node_id: NodeId
    state: State

    def to_dict(self) -> Dict[str, Any]:
        """Convert guard condition to dictionary."""
        return {"node_id": self.node_id, "state": self.state}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GuardCondition":
        """Create guard condition from dictionary."""
        return cls(node_id=data["node_id"], state=data["state"])


@dataclass(frozen=True)
class Guard:
    """Conditions that must hold before a link's actions run.

    Conditions are evaluated against live node states, which is what makes
    the merge pattern work: a link fires once every parallel branch is done,
    whichever branch finishes last.

    Attributes:
        type: How conditions are combined.
        conditions: Node/state pairs to check.
    """

    type: Union[str, GuardType]
    conditions: Sequence[GuardCondition]

    def __post_init__(self):
        """Validate guard configuration."""
        object.__setattr__(self, "type", GuardType(self.type))
        if not self.conditions:
            raise ValueError(f"{self.type.value} guard requires at least one condition")
        object.__setattr__(self, "conditions", tuple(self.conditions))

    def to_dict(self) -> Dict[str, Any]:
        """Convert guard to dictionary."""
        return {
            "type": self.type.value,
            "conditions": [c.to_dict() for c in self.conditions],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Guard":
        """Create guard from dictionary."""
        return cls(
            type=data["type"],
            conditions=[GuardCondition.from_dict(c) for c in data.get("conditions", [])],
        )


@dataclass(frozen=True)
class TargetAction:
    """State assignment performed when a link fires.

    Attributes:
        target_id: Node to update.
        target_state: State to assign.
    """

    target_id: NodeId
    target_state: State

    def to_dict(self) -> Dict[str, Any]:
        """Convert action to dictionary."""
        return {"target_id": self.target_id, "target_state": self.target_state}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TargetAction":
        """Create action from dictionary."""
        return cls(target_id=data["target_id"], target_state=data["target_state"])


@dataclass(frozen=True)
class Link:
    """Declarative propagation rule: when the trigger matches and the guard
    holds, apply the actions in order.

    Attributes:
        id: Unique link identifier.
        trigger: When this link activates.
        actions: State changes applied when the link fires.
        guard: Optional conditions that must hold.
    """

    id: str
    trigger: Trigger
    actions: Sequence[TargetAction]
    guard: Optional[Guard] = None

    def __post_init__(self):
        """Validate link configuration."""
        if not self.id:
            raise ValueError("Link requires an id")
        if not self.actions:
            raise ValueError(f"Link {self.id} requires at least one action")
        object.__setattr__(self, "actions", tuple(self.actions))

    def to_dict(self) -> Dict[str, Any]:
        """Convert link to dictionary."""
        result = {
            "id": self.id,
            "trigger": self.trigger.to_dict(),
            "actions": [a.to_dict() for a in self.actions],
        }
        if self.guard is not None:
            result["guard"] = self.guard.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Link":
        """Create link from dictionary."""
        guard = None
        if data.get("guard") is not None:
            guard = Guard.from_dict(data["guard"])

        return cls(
            id=data["id"],
            trigger=Trigger.from_dict(data["trigger"]),
            actions=[TargetAction.from_dict(a) for a in data.get("actions", [])],
            guard=guard,
        )


@dataclass
class FlowConfig:
    """Complete flow definition.

    Attributes:
        name: Flow name.
        version: Configuration version.
        nodes: Initial state of every node, keyed by node id.
        links: Links in registration order.
        max_events: Event ceiling for a single cascade.
    """

    name: str
    version: str
    nodes: Dict[NodeId, State]
    links: List[Link] = field(default_factory=list)
    max_events: int = DEFAULT_MAX_EVENTS

    def __post_init__(self):
        """Validate flow configuration."""
        if self.max_events < 1:
            raise ValueError(f"max_events must be at least 1, got {self.max_events}")

        seen = set()
        for link in self.links:
            if link.id in seen:
                raise ValueError(f"Duplicate link id: {link.id}")
            seen.add(link.id)

            if link.trigger.source_id not in self.nodes:
                raise ValueError(f"Link {link.id} triggers on unknown node: {link.trigger.source_id}")
            for action in link.actions:
                if action.target_id not in self.nodes:
                    raise ValueError(f"Link {link.id} targets unknown node: {action.target_id}")

    def get_link(self, link_id: str) -> Optional[Link]:
        """Get a link by id."""
        for link in self.links:
            if link.id == link_id:
                return link
        return None

    def build_store(self) -> "InMemoryStore":
        """Create a store populated with this flow's nodes and links.

        Returns:
            New store; nodes and links are registered in declaration order.
        """
        from statecascade.storage.memory import InMemoryStore

        store = InMemoryStore()
        for node_id, state in self.nodes.items():
            store.add_node(Node(id=node_id, state=state))
        for link in self.links:
            store.add_link(link)
        return store

    def to_dict(self) -> Dict[str, Any]:
        """Convert flow config to dictionary."""
        return {
            "name": self.name,
            "version": self.version,
            "nodes": dict(self.nodes),
            "links": [link.to_dict() for link in self.links],
            "max_events": self.max_events,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FlowConfig":
        """Create flow config from dictionary."""
        links = [Link.from_dict(link) for link in data.get("links", [])]

        return cls(
            name=data["name"],
            version=str(data["version"]),
            nodes=dict(data.get("nodes", {})),
            links=links,
            max_events=data.get("max_events", DEFAULT_MAX_EVENTS),
        )

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "FlowConfig":
        """Load flow config from JSON or YAML file.

        Args:
            path: Path to configuration file (.json or .yaml/.yml).

        Returns:
            Loaded flow configuration.

        Raises:
            ValueError: If file format is unsupported.
        """
        path = Path(path)
        suffix = path.suffix.lower()

        with open(path, "r", encoding="utf-8") as f:
            if suffix == ".json":
                data = json.load(f)
            elif suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                raise ValueError(f"Unsupported file format: {suffix}. Use .json, .yaml, or .yml")

        return cls.from_dict(data)

    def to_json(self, indent: int = 2) -> str:
        """Convert flow config to JSON string.

        Args:
            indent: JSON indentation level.

        Returns:
            JSON representation of config.
        """
        return json.dumps(self.to_dict(), indent=indent)

    def to_yaml(self) -> str:
        """Convert flow config to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

