"""
Cyber Management System

An interactive console for keeping track of users and devices. Records live in
memory while the shell runs and are persisted to two comma-delimited text
files between sessions.
"""

from cyber_cms.config import CMSConfig
from cyber_cms.database import (
    Device,
    Record,
    RecordFormatError,
    User,
)
from cyber_cms.storage import (
    FileStore,
    LocalFileStore,
    RecordStore,
)

__version__ = "1.0.0"
__description__ = "Console manager for user and device records"

__all__ = [
    "CMSConfig",
    "Device",
    "FileStore",
    "LocalFileStore",
    "Record",
    "RecordFormatError",
    "RecordStore",
    "User",
]
