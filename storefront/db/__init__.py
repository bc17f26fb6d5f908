from .memory_store import InMemoryStore
from .store import Store


__all__ = ["InMemoryStore", "Store"]
