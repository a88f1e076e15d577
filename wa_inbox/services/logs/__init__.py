from .store import InMemoryLogStore, JsonlLogStore, LogStore

__all__ = ["InMemoryLogStore", "JsonlLogStore", "LogStore"]
