from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from ..core.exceptions import StorageError

log = logging.getLogger(__name__)


class KeyValueStore:
    """Machine-local string store: one file per key under `data_dir`.

    Each `set` writes a temp file next to the target and swaps it in with
    `os.replace`, so a key holds either the old or the new value, never a
    partial one. Any OS-level failure surfaces as StorageError.
    """

    def __init__(self, data_dir: str | os.PathLike):
        self._dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid store key: {key!r}")
        return self._dir / key

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Could not read {key!r}: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_name = None
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", dir=self._dir)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise StorageError(f"Could not write {key!r}: {e}") from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    log.warning("Left temp file behind: %s", tmp_name)

    def remove(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageError(f"Could not remove {key!r}: {e}") from e
