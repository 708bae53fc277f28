"""
Record storage for the Cyber Management System

Key Components:
- RecordStore: in-memory user/device collections with load/save
- FileStore: abstract whole-file text storage used by RecordStore
- LocalFileStore: filesystem implementation of FileStore
"""

from .file_store import FileStore, LocalFileStore
from .store import RecordStore

__all__ = [
    "FileStore",
    "LocalFileStore",
    "RecordStore",
]
