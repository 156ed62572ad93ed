"""Pytest fixtures for statecascade tests.

This module provides reusable fixtures for testing the cascade engine, built
around an order fulfilment flow with a fork and a guarded merge.
"""

import pytest
from typing import Any, Dict

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
from statecascade.core.engine import CascadeEngine
from statecascade.storage.memory import InMemoryStore


def _merge_guard() -> Guard:
    return Guard(
        type=GuardType.ALL_OF,
        conditions=[
            GuardCondition(node_id="packOrder", state="DONE"),
            GuardCondition(node_id="createLabel", state="DONE"),
        ],
    )


@pytest.fixture
def order_links():
    """Links for the order fulfilment flow.

    Links:
        - on-order-processing: order PROCESSING starts payment verification
        - on-payment-verified: payment DONE forks to packing and labelling
        - on-pack-done / on-label-done: merge back to order READY_TO_SHIP
          once both branches are DONE
    """
    return [
        Link(
            id="on-order-processing",
            trigger=Trigger(source_id="order", to_state="PROCESSING"),
            actions=[TargetAction(target_id="verifyPayment", target_state="IN_PROGRESS")],
        ),
        Link(
            id="on-payment-verified",
            trigger=Trigger(source_id="verifyPayment", to_state="DONE"),
            actions=[
                TargetAction(target_id="packOrder", target_state="IN_PROGRESS"),
                TargetAction(target_id="createLabel", target_state="IN_PROGRESS"),
            ],
        ),
        Link(
            id="on-pack-done",
            trigger=Trigger(source_id="packOrder", to_state="DONE"),
            guard=_merge_guard(),
            actions=[TargetAction(target_id="order", target_state="READY_TO_SHIP")],
        ),
        Link(
            id="on-label-done",
            trigger=Trigger(source_id="createLabel", to_state="DONE"),
            guard=_merge_guard(),
            actions=[TargetAction(target_id="order", target_state="READY_TO_SHIP")],
        ),
    ]


@pytest.fixture
def order_store(order_links) -> InMemoryStore:
    """Create a store holding the order fulfilment flow, all nodes PENDING."""
    store = InMemoryStore()
    for node_id in ("order", "verifyPayment", "packOrder", "createLabel"):
        store.add_node(Node(id=node_id, state="PENDING"))
    for link in order_links:
        store.add_link(link)
    return store


@pytest.fixture
def order_engine(order_store) -> CascadeEngine:
    """Create an engine over the order fulfilment store."""
    return CascadeEngine(order_store)


@pytest.fixture
def order_config_data() -> Dict[str, Any]:
    """Order fulfilment flow as a plain dictionary, as loaded from a file."""
    return {
        "name": "order_fulfillment",
        "version": "1.0.0",
        "max_events": 50,
        "nodes": {
            "order": "PENDING",
            "verifyPayment": "PENDING",
            "packOrder": "PENDING",
            "createLabel": "PENDING",
        },
        "links": [
            {
                "id": "on-order-processing",
                "trigger": {"source_id": "order", "to_state": "PROCESSING"},
                "actions": [{"target_id": "verifyPayment", "target_state": "IN_PROGRESS"}],
            },
            {
                "id": "on-payment-verified",
                "trigger": {"source_id": "verifyPayment", "to_state": "DONE"},
                "actions": [
                    {"target_id": "packOrder", "target_state": "IN_PROGRESS"},
                    {"target_id": "createLabel", "target_state": "IN_PROGRESS"},
                ],
            },
            {
                "id": "on-pack-done",
                "trigger": {"source_id": "packOrder", "to_state": "DONE"},
                "guard": {
                    "type": "ALL_OF",
                    "conditions": [
                        {"node_id": "packOrder", "state": "DONE"},
                        {"node_id": "createLabel", "state": "DONE"},
                    ],
                },
                "actions": [{"target_id": "order", "target_state": "READY_TO_SHIP"}],
            },
            {
                "id": "on-label-done",
                "trigger": {"source_id": "createLabel", "to_state": "DONE"},
                "guard": {
                    "type": "ALL_OF",
                    "conditions": [
                        {"node_id": "packOrder", "state": "DONE"},
                        {"node_id": "createLabel", "state": "DONE"},
                    ],
                },
                "actions": [{"target_id": "order", "target_state": "READY_TO_SHIP"}],
            },
        ],
    }


@pytest.fixture
def order_config(order_config_data) -> FlowConfig:
    """Order fulfilment flow as a FlowConfig."""
    return FlowConfig.from_dict(order_config_data)


@pytest.fixture
def make_store():
    """Factory fixture for building small stores.

    Example:
        store = make_store({"a": "OFF", "b": "OFF"}, [link1, link2])
    """
    def _make(nodes: Dict[str, str], links=()) -> InMemoryStore:
        store = InMemoryStore()
        for node_id, state in nodes.items():
            store.add_node(Node(id=node_id, state=state))
        for link in links:
            store.add_link(link)
        return store

    return _make
