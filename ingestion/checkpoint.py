"""
File-backed checkpoint of the last committed place_id
"""

from pathlib import Path
from typing import Optional
from core.exceptions import CheckpointError
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = "_progress.txt"


def checkpoint_path_for(csv_path, suffix: str = DEFAULT_SUFFIX) -> Path:
    """
    Derive the checkpoint location from the input file name.

    `data/places.csv` -> `data/places_progress.txt`
    """
    csv_path = Path(csv_path)
    return csv_path.with_name(f"{csv_path.stem}{suffix}")


class FileCheckpointStore:
    """
    Single-slot checkpoint stored as plain text.

    - read(): the stored key, or None if there is no checkpoint yet
    - write(key): replace the stored key; failures are logged, not raised
    """

    def __init__(self, path):
        self.path = Path(path)

    def read(self) -> Optional[str]:
        """
        Raises:
            CheckpointError: If the file exists but cannot be read
        """
        try:
            value = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise CheckpointError(
                "Failed to read checkpoint",
                context={"checkpoint_path": str(self.path), "operation": "read"},
                original_exception=e
            )
        return value or None

    def write(self, key: str) -> bool:
        """Persist `key`. Returns False if it could not be written."""
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp_path.write_text(key, encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.warning(f"Error updating progress file {self.path}: {e}")
            return False
        return True

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise CheckpointError(
                "Failed to remove checkpoint",
                context={"checkpoint_path": str(self.path), "operation": "clear"},
                original_exception=e
            )
        logger.info(f"Checkpoint cleared: {self.path}")
