"""Dictionary storage."""

from .store import JsonFileStore, MemoryStore

__all__ = ["JsonFileStore", "MemoryStore"]
