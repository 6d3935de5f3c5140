from .override_store import InMemoryOverrideStore, JsonFileOverrideStore, OverrideStore

__all__ = ["InMemoryOverrideStore", "JsonFileOverrideStore", "OverrideStore"]
