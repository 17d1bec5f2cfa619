from .store import InMemoryStore, StoreAdapter

__all__ = ["InMemoryStore", "StoreAdapter"]
