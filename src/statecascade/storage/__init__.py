"""Storage backends for statecascade."""

from statecascade.storage.memory import InMemoryStore

__all__ = ["InMemoryStore"]
