"""
File access used by the record store.

The record store only needs whole-file reads and writes, so it talks to a
FileStore rather than to the filesystem directly.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from cyber_cms.logging_config import get_cms_logger

logger = get_cms_logger(__name__)


class FileStore(ABC):
    """Abstract whole-file text storage."""

    @abstractmethod
    def write(self, path: str, content: str) -> None:
        """Write content to path, replacing previous content."""
        pass

    @abstractmethod
    def read(self, path: str) -> str:
        """Read content from path. Raises FileNotFoundError if absent."""
        pass


class LocalFileStore(FileStore):
    """FileStore backed by the local filesystem.

    Bytes that are not valid UTF-8 are carried through as surrogate escapes, so
    files written by other tools load and are written back byte for byte.
    """

    encoding = "utf-8"
    errors = "surrogateescape"

    def write(self, path: str, content: str) -> None:
        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "w", encoding=self.encoding, errors=self.errors) as f:
            f.write(content)
        logger.debug(f"Wrote {len(content)} characters to {path}")

    def read(self, path: str) -> str:
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        with open(file_path, "r", encoding=self.encoding, errors=self.errors) as f:
            return f.read()
