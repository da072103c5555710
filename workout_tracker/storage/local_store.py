"""
Key/value storage for the workout tracker.
File-backed store with backup rotation, plus an in-memory store with the same interface.
"""
from pathlib import Path
from datetime import datetime
from typing import Dict, List, Optional
import logging
import os
import re
import shutil
import tempfile

from ..utils.config import get_config

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def _check_key(key: str) -> str:
    if not isinstance(key, str) or not _KEY_PATTERN.match(key):
        raise ValueError(f"Invalid storage key: {key!r} (use letters, digits, '_' or '-')")
    return key


class LocalStorage:
    """
    Stores one JSON blob per key under a data directory.
    """

    def __init__(self, data_dir: Optional[str] = None,
                 backup_enabled: Optional[bool] = None,
                 max_backup_files: Optional[int] = None):
        self.config = get_config()
        self.data_dir = Path(data_dir) if data_dir else Path(self.config.storage.data_dir)
        self.data_dir.mkdir(exist_ok=True, parents=True)

        self.backup_enabled = (
            self.config.storage.backup_enabled if backup_enabled is None else backup_enabled
        )
        self.max_backup_files = (
            self.config.storage.max_backup_files if max_backup_files is None else max_backup_files
        )

        self.backup_dir = self.data_dir / "backups"
        if self.backup_enabled:
            self.backup_dir.mkdir(exist_ok=True)

        logger.info(f"Local storage initialized: {self.data_dir}")

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{_check_key(key)}.json"

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored blob, or None when the key is absent or unreadable."""
        path = self._path(key)
        if not path.exists():
            return None

        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.debug(f"Ignoring {path}, not UTF-8 text: {e}")
            return None
        except OSError as e:
            logger.error(f"Error reading {path}: {e}")
            return None

    def set_item(self, key: str, value: str) -> bool:
        """
        Store a blob under a key, replacing any previous value.

        Args:
            key: Storage key
            value: Serialized blob

        Returns:
            True if successfully stored, False otherwise
        """
        path = self._path(key)
        try:
            if self.backup_enabled and path.exists():
                self._create_backup(path, key)

            # Write beside the target, then swap it in
            fd, tmp_name = tempfile.mkstemp(dir=str(self.data_dir), prefix=f".{key}_", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise

            logger.debug(f"Stored {len(value)} characters under '{key}'")
            return True

        except OSError as e:
            logger.error(f"Error storing '{key}': {e}")
            return False

    def remove_item(self, key: str) -> bool:
        """Remove a key. Returns True if the key is gone afterwards."""
        path = self._path(key)
        if not path.exists():
            return True

        try:
            if self.backup_enabled:
                self._create_backup(path, key)
            path.unlink()
            logger.info(f"Removed '{key}' from {self.data_dir}")
            return True

        except OSError as e:
            logger.error(f"Error removing '{key}': {e}")
            return False

    def keys(self) -> List[str]:
        """List stored keys."""
        return sorted(p.stem for p in self.data_dir.glob("*.json"))

    def list_backups(self, key: str) -> List[Path]:
        """Backups for a key, newest first."""
        if not self.backup_dir.exists():
            return []
        # Only '<key>_<timestamp>.json', not backups of keys sharing the prefix
        pattern = re.compile(rf"^{re.escape(_check_key(key))}_\d{{8}}_\d{{6}}_\d{{6}}\.json$")
        return sorted(
            (p for p in self.backup_dir.glob("*.json") if pattern.match(p.name)),
            key=lambda p: p.name,
            reverse=True
        )

    def _create_backup(self, file_path: Path, key: str):
        """Create a backup of the specified file."""
        try:
            self.backup_dir.mkdir(exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
            backup_path = self.backup_dir / f"{key}_{timestamp}.json"

            shutil.copy2(file_path, backup_path)

            # Clean up old backups
            self._cleanup_old_backups(key)

        except OSError as e:
            logger.warning(f"Could not create backup of {file_path}: {e}")

    def _cleanup_old_backups(self, key: str):
        """Remove old backup files, keeping only the most recent ones."""
        try:
            for old_backup in self.list_backups(key)[self.max_backup_files:]:
                old_backup.unlink()

        except OSError as e:
            logger.warning(f"Could not clean up old backups: {e}")


class MemoryStorage:
    """In-process key/value store, used for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(_check_key(key))

    def set_item(self, key: str, value: str) -> bool:
        self._items[_check_key(key)] = value
        return True

    def remove_item(self, key: str) -> bool:
        self._items.pop(_check_key(key), None)
        return True

    def keys(self) -> List[str]:
        return sorted(self._items)
