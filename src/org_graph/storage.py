"""Storage interface for persisting DOT sources and organization files."""

from abc import ABC, abstractmethod


class Storage(ABC):
    """Abstract base class for key/value storage backends."""

    @abstractmethod
    def save(self, key: str, data: bytes) -> None:
        """Store data under a key, replacing any previous value."""
        pass

    @abstractmethod
    def load(self, key: str) -> bytes:
        """Load the data stored under a key."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete the data stored under a key."""
        pass

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check whether a key has data."""
        pass
