"""
JSON file persistence for the inventory store.

The whole document is rewritten on every save: written to a temp file in the
same directory, then swapped over the target with os.replace so a reader never
sees a half-written file.
"""

import json
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Tuple

from core.errors import StorageError

if os.name != "nt":
    import fcntl
else:
    fcntl = None

logger = logging.getLogger("inventory.storage")

Record = Dict[str, Any]


def _encode(items: List[Record], movements: List[Record]) -> str:
    return json.dumps({"items": items, "movements": movements}, indent=4, ensure_ascii=False) + "\n"


class JsonFileStorage:
    def __init__(self, path: os.PathLike):
        self.path = Path(path)
        self.lock_path = self.path.with_name(self.path.name + ".lock")

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        # Advisory only; Windows relies on os.replace alone.
        if fcntl is None:
            yield
            return
        with open(self.lock_path, "a", encoding="utf-8") as fh:
            fcntl.flock(fh.fileno(), fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(fh.fileno(), fcntl.LOCK_UN)

    def ensure_exists(self) -> None:
        if self.path.exists():
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Unable to create storage directory: {self.path.parent}") from exc
        logger.info("Creating empty inventory storage at %s", self.path)
        self._write(_encode([], []))

    def load(self) -> Tuple[List[Record], List[Record]]:
        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError("Unable to read storage file.") from exc

        try:
            data = json.loads(content)
        except ValueError as exc:
            raise StorageError("Storage file is corrupted.") from exc
        if not isinstance(data, dict):
            raise StorageError("Storage file is corrupted.")

        items = data.get("items") or []
        movements = data.get("movements") or []
        if not isinstance(items, list) or not isinstance(movements, list):
            raise StorageError("Storage file is corrupted.")
        return list(items), list(movements)

    def save(self, items: List[Record], movements: List[Record]) -> None:
        try:
            encoded = _encode(items, movements)
        except (TypeError, ValueError) as exc:
            raise StorageError("Unable to encode inventory data.") from exc
        self._write(encoded)

    def _write(self, content: str) -> None:
        tmp_name = None
        try:
            with self._exclusive():
                with tempfile.NamedTemporaryFile(
                    "w", delete=False, encoding="utf-8", dir=str(self.path.parent), suffix=".tmp"
                ) as tf:
                    tmp_name = tf.name
                    tf.write(content)
                    tf.flush()
                    os.fsync(tf.fileno())
                os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError("Unable to persist inventory data.") from exc
