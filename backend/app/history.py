"""
Per-user history of solved systems, persisted as a local JSON file.

The store is created once and handed to request handlers; nothing touches
the file until the first call.  Preparing the storage location is retried
with exponential backoff.
"""

import json
import logging
import os
import threading
import time
import uuid
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)


class HistoryUnavailable(RuntimeError):
    """The history file could not be prepared after all retries."""


class HistoryStore:
    def __init__(self, data_file: str, limit: int = 50,
                 max_retries: int = 3, retry_delay_ms: int = 1000) -> None:
        self.data_file = data_file
        self.limit = limit
        self.max_retries = max_retries
        self.retry_delay_ms = retry_delay_ms
        self._ready = False
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: dict) -> "HistoryStore":
        return cls(
            settings["data_file"],
            limit=settings["history_limit"],
            max_retries=settings["max_retries"],
            retry_delay_ms=settings["retry_delay_ms"],
        )

    # ── Storage plumbing ────────────────────────────────────────────────

    def _connect(self) -> None:
        """Create the data directory, retrying with exponential backoff."""
        if self._ready:
            return
        attempt = 0
        while True:
            try:
                os.makedirs(os.path.dirname(os.path.abspath(self.data_file)), exist_ok=True)
                self._ready = True
                return
            except OSError as e:
                if attempt >= self.max_retries:
                    logger.error("History store unavailable after %d attempts: %s",
                                 attempt + 1, e)
                    raise HistoryUnavailable(
                        "History storage is unavailable. Please try again later."
                    ) from e
                delay = self.retry_delay_ms * (2 ** attempt) / 1000
                logger.warning("Could not open history store (attempt %d/%d): %s; "
                               "retrying in %.1fs", attempt + 1, self.max_retries + 1,
                               e, delay)
                attempt += 1
                time.sleep(delay)

    def _set_aside(self, reason: str) -> None:
        """Move an unreadable data file out of the way so it is never overwritten."""
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%f")
        backup = f"{self.data_file}.corrupt-{stamp}"
        os.replace(self.data_file, backup)
        logger.warning("Could not read %s (%s); moved it to %s and starting empty",
                       self.data_file, reason, backup)

    def _load_db(self) -> dict:
        self._connect()
        if not os.path.exists(self.data_file):
            return {"records": []}
        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                db = json.load(f)
        except json.JSONDecodeError as e:
            self._set_aside(str(e))
            return {"records": []}
        if not (isinstance(db, dict) and isinstance(db.get("records"), list)):
            self._set_aside("unexpected layout")
            return {"records": []}
        return db

    def _save_db(self, db: dict) -> None:
        self._connect()
        # Write a sibling file first so a failed write never truncates the data.
        tmp_file = f"{self.data_file}.tmp"
        with open(tmp_file, "w", encoding="utf-8") as f:
            json.dump(db, f, indent=2, ensure_ascii=False)
        os.replace(tmp_file, self.data_file)

    # ── Records ─────────────────────────────────────────────────────────

    def add_record(self, user_id: str, equations: list, method: str,
                   solution: dict) -> dict:
        """Store one solved system for *user_id* and return the new record."""
        record = {
            "id": uuid.uuid4().hex,
            "user_id": user_id,
            "equations": list(equations),
            "method": method,
            "solution": dict(solution),
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        with self._lock:
            db = self._load_db()
            db["records"].append(record)
            self._save_db(db)
        return record

    def get_records(self, user_id: str, limit: Optional[int] = None) -> list:
        """Return the user's records, newest first."""
        limit = self.limit if limit is None else limit
        with self._lock:
            db = self._load_db()
        own = [r for r in db["records"] if r.get("user_id") == user_id]
        own.reverse()
        return own[:limit]

    def delete_record(self, user_id: str, record_id: str) -> bool:
        """Remove one record; returns False if the user has no such record."""
        with self._lock:
            db = self._load_db()
            kept = [r for r in db["records"]
                    if not (r.get("id") == record_id and r.get("user_id") == user_id)]
            if len(kept) == len(db["records"]):
                return False
            db["records"] = kept
            self._save_db(db)
        return True

    def clear(self, user_id: str) -> int:
        """Remove all of the user's records and return how many were removed."""
        with self._lock:
            db = self._load_db()
            kept = [r for r in db["records"] if r.get("user_id") != user_id]
            removed = len(db["records"]) - len(kept)
            if removed:
                db["records"] = kept
                self._save_db(db)
        return removed
