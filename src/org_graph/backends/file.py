"""Filesystem storage backend."""

from pathlib import Path

import structlog

from org_graph.errors import StorageError
from org_graph.storage import Storage

logger = structlog.get_logger()


class FileStorage(Storage):
    """Stores each key as a file inside a directory.

    Pointing the directory inside a git checkout keeps the stored graphs
    under version control.
    """

    def __init__(self, directory: str | Path) -> None:
        """Initialize file storage.

        Args:
            directory: Directory holding the stored files, created if missing
        """
        self.directory = Path(directory)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Failed to create storage directory", directory=str(self.directory), error=str(e))
            raise StorageError(str(self.directory), f"Failed to create storage directory: {e}") from e
        logger.debug("File storage initialized", directory=str(self.directory))

    def _path(self, key: str) -> Path:
        path = self.directory / key
        # Keys must not escape the storage directory
        if self.directory.resolve() not in path.resolve().parents:
            raise StorageError(key, "Key resolves outside the storage directory")
        return path

    def save(self, key: str, data: bytes) -> None:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            logger.error("Failed to save data", key=key, error=str(e))
            raise StorageError(key, f"Failed to save data: {e}") from e
        logger.debug("Saved data", key=key, size=len(data))

    def load(self, key: str) -> bytes:
        try:
            data = self._path(key).read_bytes()
        except OSError as e:
            logger.error("Failed to load data", key=key, error=str(e))
            raise StorageError(key, f"Failed to load data: {e}") from e
        logger.debug("Loaded data", key=key, size=len(data))
        return data

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except OSError as e:
            logger.error("Failed to delete data", key=key, error=str(e))
            raise StorageError(key, f"Failed to delete data: {e}") from e
        logger.debug("Deleted data", key=key)

    def exists(self, key: str) -> bool:
        try:
            return self._path(key).is_file()
        except StorageError:
            return False
