"""
history.py — bounded, newest-first history of analysed passwords.

The whole history lives in one key-value entry as a JSON array of
{password, strength, date} objects. Storage backends only need get/set.
"""
import json
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

log = logging.getLogger(__name__)

DEFAULT_KEY   = 'passwordHistory'
DEFAULT_LIMIT = 5


class PersistenceReadFailure(ValueError):
    """Stored history could not be parsed."""


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


@dataclass(frozen=True)
class HistoryRecord:
    password: str
    strength: int
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> dict:
        return {'password': self.password, 'strength': self.strength, 'date': self.timestamp}

    @staticmethod
    def from_dict(data) -> 'HistoryRecord':
        if not isinstance(data, dict):
            raise PersistenceReadFailure(f'History record must be an object, got {type(data).__name__}.')
        password = data.get('password')
        strength = data.get('strength')
        date     = data.get('date')
        if not isinstance(password, str) or not isinstance(date, str):
            raise PersistenceReadFailure('History record is missing password or date.')
        if isinstance(strength, bool) or not isinstance(strength, int):
            raise PersistenceReadFailure('History record strength must be an integer.')
        return HistoryRecord(password=password, strength=strength, timestamp=date)


# ── Storage backends ──────────────────────────────────────────────────────────
class MemoryStorage:
    """Dict-backed storage; contents are lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


# ── Store ─────────────────────────────────────────────────────────────────────
class HistoryStore:
    def __init__(self, storage, key: str = DEFAULT_KEY, limit: int = DEFAULT_LIMIT):
        if limit < 1:
            raise ValueError('History limit must be at least 1.')
        self.storage = storage
        self.key     = key
        self.limit   = limit
        self._lock   = threading.Lock()

    def _decode(self, raw: str) -> List[HistoryRecord]:
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise PersistenceReadFailure(f'History is not valid JSON: {e}') from e
        if not isinstance(data, list):
            raise PersistenceReadFailure('History must be a JSON array.')
        return [HistoryRecord.from_dict(item) for item in data]

    def load_all(self) -> List[HistoryRecord]:
        """Return stored records, newest first. Unreadable data loads as empty."""
        raw = self.storage.get(self.key)
        if raw is None:
            return []
        try:
            records = self._decode(raw)
        except PersistenceReadFailure as e:
            log.warning('Ignoring unreadable password history under %r: %s', self.key, e)
            return []
        return records[:self.limit]

    def append(self, record: HistoryRecord) -> List[HistoryRecord]:
        with self._lock:
            records = [record] + self.load_all()[:self.limit - 1]
            self.storage.set(self.key, json.dumps([r.to_dict() for r in records]))
        return records
