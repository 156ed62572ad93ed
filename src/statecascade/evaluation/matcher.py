"""Link matching: does a link's trigger match a state change event?"""

from statecascade.core.config import Link
from statecascade.core.event import StateChanged


def match_link(link: Link, event: StateChanged) -> bool:
    """Check if a link's trigger matches a state change.

    Matching rules:
    - trigger.source_id must equal event.node_id
    - trigger.to_state must equal event.to_state
    - trigger.from_state, if set, must equal event.from_state

    Only the trigger and the event are consulted; store state never affects
    the result.

    Args:
        link: Link to check.
        event: State change event.

    Returns:
        True if the link's trigger matches the event.
    """
    trigger = link.trigger
    if trigger.source_id != event.node_id:
        return False
    if trigger.to_state != event.to_state:
        return False
    if trigger.from_state is not None and trigger.from_state != event.from_state:
        return False
    return True
