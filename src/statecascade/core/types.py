"""Primitive types shared across the cascade engine."""

from typing import Hashable

# Unique identifier for a node.
NodeId = str

# Opaque state value (e.g. "PENDING", "IN_PROGRESS", "DONE"). Only equality
# is ever used, so any hashable value works.
State = Hashable
