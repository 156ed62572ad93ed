"""Guard evaluation against live node states."""

import logging
from typing import TYPE_CHECKING

from statecascade.core.config import Guard, GuardCondition, GuardType

if TYPE_CHECKING:
    from statecascade.storage.memory import InMemoryStore

logger = logging.getLogger(__name__)


def _condition_holds(condition: GuardCondition, store: "InMemoryStore") -> bool:
    node = store.get_node(condition.node_id)
    # Unknown nodes fail the condition instead of raising
    return node is not None and node.state == condition.state


def evaluate_guard(guard: Guard, store: "InMemoryStore") -> bool:
    """Evaluate a guard against the store's current node states.

    States are read at call time, so changes made earlier in the same
    cascade are visible.

    Guard types:
    - ALL_OF: every condition must hold
    - ANY_OF: at least one condition must hold

    Args:
        guard: Guard to evaluate.
        store: Store to read node states from.

    Returns:
        True if the guard is satisfied.
    """
    if guard.type == GuardType.ALL_OF:
        return all(_condition_holds(c, store) for c in guard.conditions)
    elif guard.type == GuardType.ANY_OF:
        return any(_condition_holds(c, store) for c in guard.conditions)

    logger.warning(f"Unknown guard type: {guard.type}")
    return False
