"""
History Manager for FlashCalc
Loads and saves the bounded list of past calculations
"""
import json
import logging
from dataclasses import asdict, dataclass

import config
from database import read_value, write_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    expr: str
    result: str

    def __str__(self):
        return f"{self.expr} = {self.result}"


class HistoryManager:
    def __init__(self, store, key=config.HIST_KEY, limit=config.MAX_HISTORY_ITEMS):
        self.store = store
        self.key = key
        self.limit = limit

    def load(self):
        """Load calculation history, most recent first.

        Absent, unreadable or corrupt records load as an empty history.
        Items without string ``expr`` and ``result`` fields are dropped.
        """
        stored = read_value(self.store, self.key)
        if not stored.ok or not stored.value:
            return []
        try:
            parsed = json.loads(stored.value)
        except ValueError as e:
            logger.warning("Discarding unparseable history: %s", e)
            return []
        if not isinstance(parsed, list):
            logger.warning("Discarding history of type %s", type(parsed).__name__)
            return []

        entries = []
        for item in parsed:
            if (isinstance(item, dict)
                    and isinstance(item.get("expr"), str)
                    and isinstance(item.get("result"), str)):
                entries.append(HistoryEntry(item["expr"], item["result"]))
            else:
                logger.debug("Skipping malformed history item: %r", item)
        return entries

    def save(self, entries):
        """Persist entries; failures are logged and reported, never raised"""
        payload = json.dumps([asdict(e) for e in entries], separators=(",", ":"), ensure_ascii=False)
        return write_value(self.store, self.key, payload)

    def push(self, entries, entry):
        """Return a new history with entry in front, truncated to the limit"""
        return [entry, *entries][:self.limit]

    def format_history(self, entries):
        """Format calculation history for display"""
        return [str(entry) for entry in entries]
