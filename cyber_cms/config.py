"""
Runtime configuration for the Cyber Management System.

Values come from the environment (a local ``.env`` file is honoured) so the
data and log locations can be moved without touching the code.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_DATA_DIR = "."
DEFAULT_USERS_FILE = "users.txt"
DEFAULT_DEVICES_FILE = "devices.txt"
DEFAULT_LOG_FILE = "cms.log"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass
class CMSConfig:
    """Configuration for the record store and the shell."""

    data_dir: str = DEFAULT_DATA_DIR
    users_file: str = DEFAULT_USERS_FILE
    devices_file: str = DEFAULT_DEVICES_FILE
    log_file: Optional[str] = DEFAULT_LOG_FILE
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def users_path(self) -> Path:
        return Path(self.data_dir).expanduser() / self.users_file

    @property
    def devices_path(self) -> Path:
        return Path(self.data_dir).expanduser() / self.devices_file

    @classmethod
    def from_env(cls) -> "CMSConfig":
        """Build a config from ``CMS_*`` environment variables.

        An empty ``CMS_LOG_FILE`` disables the log file.
        """
        log_file = os.getenv("CMS_LOG_FILE", DEFAULT_LOG_FILE)
        return cls(
            data_dir=os.getenv("CMS_DATA_DIR", DEFAULT_DATA_DIR),
            users_file=os.getenv("CMS_USERS_FILE", DEFAULT_USERS_FILE),
            devices_file=os.getenv("CMS_DEVICES_FILE", DEFAULT_DEVICES_FILE),
            log_file=log_file or None,
            log_level=os.getenv("CMS_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )
