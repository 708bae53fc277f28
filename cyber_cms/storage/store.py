"""
In-memory record store with text-file persistence.

Users and devices are kept as two independent ordered lists, each with its own
id counter. Both lists are read from their files when the store is opened and
written back, replacing the previous content, when it is closed.
"""

from types import TracebackType
from typing import List, Optional, Type

from cyber_cms.config import CMSConfig
from cyber_cms.database import Device, Record, RecordFormatError, User
from cyber_cms.logging_config import get_cms_logger
from cyber_cms.storage.file_store import FileStore, LocalFileStore

logger = get_cms_logger(__name__)


class RecordStore:
    """
    Owns the user and device collections and their files.

    Use as a context manager so the collections are saved on every exit path:

        with RecordStore.from_config(config) as store:
            store.add_user("alice", "admin")
    """

    def __init__(
        self,
        users_path: str,
        devices_path: str,
        file_store: Optional[FileStore] = None,
    ) -> None:
        self.users_path = str(users_path)
        self.devices_path = str(devices_path)
        self.file_store = file_store or LocalFileStore()

        self._users: List[User] = []
        self._devices: List[Device] = []
        self._next_user_id = 1
        self._next_device_id = 1

    @classmethod
    def from_config(
        cls, config: CMSConfig, file_store: Optional[FileStore] = None
    ) -> "RecordStore":
        return cls(str(config.users_path), str(config.devices_path), file_store)

    @property
    def next_user_id(self) -> int:
        return self._next_user_id

    @property
    def next_device_id(self) -> int:
        return self._next_device_id

    def add_user(self, username: str, role: str) -> User:
        """Append a new user with the next user id."""
        user = User(id=self._next_user_id, username=username, role=role)
        self._next_user_id += 1
        self._users.append(user)
        logger.info(f"Added user {user.id}")
        self._warn_unsafe(user)
        return user

    def list_users(self) -> List[User]:
        return list(self._users)

    def add_device(self, name: str, ip: str, status: str) -> Device:
        """Append a new device with the next device id."""
        device = Device(id=self._next_device_id, name=name, ip=ip, status=status)
        self._next_device_id += 1
        self._devices.append(device)
        logger.info(f"Added device {device.id}")
        self._warn_unsafe(device)
        return device

    def list_devices(self) -> List[Device]:
        return list(self._devices)

    def load(self) -> None:
        """Replace both collections with the contents of their files.

        A missing file leaves its collection empty. Lines that cannot be
        decoded are skipped and logged.
        """
        self._users = self._read_records(self.users_path, User)
        self._devices = self._read_records(self.devices_path, Device)
        self._next_user_id = _next_id(self._users)
        self._next_device_id = _next_id(self._devices)
        logger.info(
            f"Loaded {len(self._users)} users and {len(self._devices)} devices "
            f"(next ids: user={self._next_user_id}, device={self._next_device_id})"
        )

    def save(self) -> None:
        """Write both collections to their files, overwriting them."""
        self._write_records(self.users_path, self._users)
        self._write_records(self.devices_path, self._devices)
        logger.info(f"Saved {len(self._users)} users and {len(self._devices)} devices")

    def __enter__(self) -> "RecordStore":
        self.load()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        if exc_type is not None:
            logger.warning(f"Closing store after {exc_type.__name__}, saving anyway")
        self.save()

    def _read_records(self, path: str, model: Type[Record]) -> List:
        try:
            content = self.file_store.read(path)
        except FileNotFoundError:
            logger.info(f"No data file at {path}, starting empty")
            return []

        lines = content.split("\n")
        if lines and lines[-1] == "":
            lines.pop()

        records = []
        for lineno, line in enumerate(lines, start=1):
            try:
                records.append(model.from_line(line))
            except RecordFormatError as e:
                logger.warning(f"Skipping malformed line {path}:{lineno}: {e}")
        return records

    def _write_records(self, path: str, records: List) -> None:
        content = "".join(f"{record.to_line()}\n" for record in records)
        self.file_store.write(path, content)

    def _warn_unsafe(self, record: Record) -> None:
        fields = record.unsafe_fields()
        if fields:
            logger.warning(
                f"{type(record).__name__} {record.id} has commas in {', '.join(fields)}; "
                "it will not reload as entered"
            )


def _next_id(records: List) -> int:
    return max([0] + [record.id for record in records]) + 1
