from .base import EnvironmentStore, apply_changes
from .memory import MemoryStore
from .profile_store import TomlProfileStore

__all__ = [
    "EnvironmentStore",
    "apply_changes",
    "MemoryStore",
    "TomlProfileStore",
]
