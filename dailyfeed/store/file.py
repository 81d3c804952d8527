"""Directory-backed store, one file per key."""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional

from ..errors import StoreError
from .base import LocalStore

KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileStore(LocalStore):
    """Persist each key as a file under a cache directory."""

    def __init__(self, root: Path) -> None:
        """Initialize file store rooted at ``root`` (created on first write)."""
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        if not KEY_PATTERN.match(key) or key in (".", ".."):
            raise ValueError(f"Invalid store key: {key!r}")
        return self.root / f"{key}.dat"

    def get(self, key: str) -> Optional[bytes]:
        path = self._path(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StoreError(f"Failed to read {path}: {e}", key=key) from e

    def set(self, key: str, value: bytes) -> None:
        path = self._path(key)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            # Write to a sibling temp file, then swap it in atomically
            fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StoreError(f"Failed to write {path}: {e}", key=key) from e

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StoreError(f"Failed to delete {path}: {e}", key=key) from e
