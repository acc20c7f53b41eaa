from __future__ import annotations

import json
import os
import time
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, List, Optional

from . import config
from .errors import PersistenceError
from .logger import logger
from .schemas import HistoryRecord


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class HistoryLog:
    """File-backed request/reply log.

    The whole list lives in memory and is rewritten to one JSON document on
    every mutation. Mutation and write happen under the same lock, so the file
    always reflects the in-memory order after a successful save.
    """
    def __init__(self, path: str) -> None:
        self.path = path
        self._lock = Lock()
        self._records: List[Dict[str, Any]] = []
        self._last_id = 0

    def load(self) -> None:
        with self._lock:
            self._records = []
            if not os.path.exists(self.path):
                return
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    raw = f.read()
                data = json.loads(raw or "[]")
                if not isinstance(data, list):
                    raise ValueError("history document is not a JSON array")
                if any(not isinstance(r, dict) for r in data):
                    raise ValueError("history document holds non-object records")
            except (OSError, ValueError) as e:
                logger.error("Failed to load history: {}", e)
                return
            self._records = data
            ids = [r.get("id") for r in data if isinstance(r.get("id"), int)]
            self._last_id = max(ids, default=0)
        logger.info("Loaded {} history records from {}", len(self._records), self.path)

    def next_id(self) -> int:
        """Creation time in epoch millis, bumped to stay strictly increasing."""
        with self._lock:
            self._last_id = max(int(time.time() * 1000), self._last_id + 1)
            return self._last_id

    def new_record(self, reply: str, **fields: Optional[str]) -> HistoryRecord:
        return HistoryRecord(id=self.next_id(), reply=reply, timestamp=now_iso(), **fields)

    def append(self, record: HistoryRecord | Dict[str, Any]) -> Dict[str, Any]:
        item = record.to_dict() if isinstance(record, HistoryRecord) else dict(record)
        with self._lock:
            self._records.append(item)
            self._save_quietly()
        return item

    def list(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [dict(r) for r in reversed(self._records)]

    def clear(self) -> None:
        with self._lock:
            self._records = []
            self._save_quietly()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def save(self) -> None:
        with self._lock:
            self._write()

    def _write(self) -> None:
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self._records, f, ensure_ascii=False, indent=2)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"Failed to save history: {e}") from e

    def _save_quietly(self) -> None:
        # the mutation stays in memory even if the disk write fails
        try:
            self._write()
        except PersistenceError as e:
            logger.error("{}", e)


store = HistoryLog(config.history_file())
store.load()
