"""Configuration management for the widerow CLI."""

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from common.constants import (
    DEFAULT_FILE_CHUNK_SIZE,
    DEFAULT_RECORD_BATCH_SIZE,
    DEFAULT_STORE_PORT,
    DEFAULT_TIMEOUT_SECONDS,
)
from common.logging_config import get_logger
from widerow.config import ConnectionConfig

logger = get_logger(__name__)


class Config:
    """Manages CLI configuration stored in JSON file."""

    DEFAULT_CONFIG = {
        "host": os.environ.get("WIDEROW_HOST", "localhost"),
        "port": int(os.environ.get("WIDEROW_PORT", str(DEFAULT_STORE_PORT))),
        "keyspace": os.environ.get("WIDEROW_KEYSPACE", "widerow"),
        "username": None,
        "password": None,
        "file_chunk_size": DEFAULT_FILE_CHUNK_SIZE,
        "record_batch_size": DEFAULT_RECORD_BATCH_SIZE,
        "timeout": DEFAULT_TIMEOUT_SECONDS,
    }

    def __init__(self, config_path: Path):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.widerow/config.json)
        """
        self.config_path = config_path
        self.data = self._load()

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        A file that cannot be parsed is backed up to config.json.bak and the
        defaults are used instead.
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            self.config_path = Path(tempfile.gettempdir()) / '.widerow' / 'config.json'
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
                config = self.DEFAULT_CONFIG.copy()
                config.update(data)
                return config
            except (json.JSONDecodeError, IOError) as e:
                logger.warning(f"Unreadable config file {self.config_path}: {e}")
                backup_path = self.config_path.with_suffix('.json.bak')
                try:
                    shutil.copy(self.config_path, backup_path)
                except OSError as copy_error:
                    logger.warning(f"Could not back up config file: {copy_error}")
                return self.DEFAULT_CONFIG.copy()

        config = self.DEFAULT_CONFIG.copy()
        try:
            with open(self.config_path, 'w') as f:
                json.dump(config, f, indent=2)
        except IOError as e:
            logger.warning(f"Could not write default config file: {e}")
        return config

    def save(self) -> None:
        """Save current configuration to file."""
        try:
            with open(self.config_path, 'w') as f:
                json.dump(self.data, f, indent=2)
        except IOError as e:
            logger.warning(f"Could not save config file: {e}")

    def get_host(self) -> str:
        return self.data.get('host', 'localhost')

    def get_port(self) -> int:
        return int(self.data.get('port', DEFAULT_STORE_PORT))

    def get_keyspace(self) -> str:
        return self.data.get('keyspace', 'widerow')

    def set_keyspace(self, keyspace: str) -> None:
        """
        Set the keyspace the CLI works in and save to file.

        Args:
            keyspace: Keyspace name (word characters only)
        """
        self.data['keyspace'] = keyspace
        self.save()

    def get_credentials(self) -> tuple[Optional[str], Optional[str]]:
        return self.data.get('username'), self.data.get('password')

    def to_connection_config(self) -> ConnectionConfig:
        """
        Build validated connection settings from the stored values.

        Raises:
            pydantic.ValidationError: If a stored value is out of range
        """
        username, password = self.get_credentials()
        return ConnectionConfig(
            keyspace=self.get_keyspace(),
            username=username,
            password=password,
            file_chunk_size=self.data.get('file_chunk_size', DEFAULT_FILE_CHUNK_SIZE),
            record_batch_size=self.data.get('record_batch_size', DEFAULT_RECORD_BATCH_SIZE),
            timeout=self.data.get('timeout', DEFAULT_TIMEOUT_SECONDS),
        )
