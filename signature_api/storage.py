# signature_api/storage.py
import copy
import json
import os
import tempfile
from typing import Any, Dict, List, Optional


def write_atomic(path: str, data: bytes):
    """Write ``data`` to ``path`` so readers see either the old or the new content."""
    folder = os.path.dirname(path) or "."
    os.makedirs(folder, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=folder, prefix=os.path.basename(path) + ".", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        os.unlink(tmp_path)
        raise


class RecordStorage:
    """Whole-collection record storage: every save rewrites the full snapshot."""

    def exists(self) -> bool:
        raise NotImplementedError

    def load_all(self) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def save_all(self, records: List[Dict[str, Any]]) -> None:
        raise NotImplementedError


class JsonFileStorage(RecordStorage):
    def __init__(self, path: str):
        self.path = path

    def exists(self) -> bool:
        return os.path.isfile(self.path)

    def load_all(self):
        if not self.exists() or os.path.getsize(self.path) == 0:
            return []
        with open(self.path, encoding="utf-8") as f:
            return json.load(f)

    def save_all(self, records):
        write_atomic(self.path, json.dumps(records, indent=2).encode("utf-8"))

    def __repr__(self):
        return f"JsonFileStorage({self.path!r})"


class InMemoryStorage(RecordStorage):
    def __init__(self, records: Optional[List[Dict[str, Any]]] = None):
        self._records = copy.deepcopy(records) if records is not None else None
        self.saves = 0

    def exists(self) -> bool:
        return self._records is not None

    def load_all(self):
        return copy.deepcopy(self._records or [])

    def save_all(self, records):
        self._records = copy.deepcopy(records)
        self.saves += 1
