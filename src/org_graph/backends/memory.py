"""In-memory storage backend."""

from org_graph.errors import StorageError
from org_graph.storage import Storage


class MemoryStorage(Storage):
    """Keeps data in a dictionary for the lifetime of the instance."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self._data: dict[str, bytes] = dict(initial or {})

    def save(self, key: str, data: bytes) -> None:
        self._data[key] = bytes(data)

    def load(self, key: str) -> bytes:
        try:
            return self._data[key]
        except KeyError as e:
            raise StorageError(key, "No data stored for key") from e

    def delete(self, key: str) -> None:
        if self._data.pop(key, None) is None:
            raise StorageError(key, "No data stored for key")

    def exists(self, key: str) -> bool:
        return key in self._data
