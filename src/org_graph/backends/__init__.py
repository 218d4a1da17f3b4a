"""Storage backend implementations."""

from org_graph.backends.file import FileStorage
from org_graph.backends.memory import MemoryStorage

__all__ = ["FileStorage", "MemoryStorage"]
