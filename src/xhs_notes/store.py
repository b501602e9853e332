"""Persistent, address-keyed note collection.

The whole collection lives in one slot as a JSON list, in capture order.
Every mutation is a read-modify-write of that list with no locking, so two
writers racing on the same slot can lose an update.
"""

from __future__ import annotations

import json
import logging

from .records import Record
from .state import SlotStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "xhs_scraped_notes"


class NoteStore:
    def __init__(self, slots: SlotStore, *, key: str = STORAGE_KEY) -> None:
        self._slots = slots
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def all(self) -> list[Record]:
        """Return stored records in capture order.

        A missing or unreadable slot is treated as an empty collection.
        """

        try:
            raw = self._slots.get(self._key)
            if raw is None:
                return []
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            # ValueError covers JSONDecodeError and UnicodeDecodeError.
            logger.warning("store: slot %r is not valid JSON (%s); ignoring", self._key, e)
            return []
        if not isinstance(data, list):
            logger.warning(
                "store: slot %r holds %s, expected a list; ignoring",
                self._key,
                type(data).__name__,
            )
            return []

        records: list[Record] = []
        for idx, item in enumerate(data):
            if not isinstance(item, dict):
                logger.warning("store: skipping non-object entry #%d", idx)
                continue
            try:
                records.append(Record.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("store: skipping malformed entry #%d: %s", idx, e)
        return records

    def upsert(self, record: Record) -> None:
        records = self.all()
        for idx, existing in enumerate(records):
            if existing.source_address == record.source_address:
                records[idx] = record
                logger.debug("store: updated %s at position %d", record.source_address, idx)
                break
        else:
            records.append(record)
            logger.debug("store: appended %s", record.source_address)
        self._write(records)

    def reset(self) -> None:
        """Drop every stored record. Irreversible; callers confirm first."""

        self._slots.remove(self._key)
        logger.info("store: cleared slot %r", self._key)

    def count(self) -> int:
        return len(self.all())

    def _write(self, records: list[Record]) -> None:
        payload = json.dumps([r.to_dict() for r in records], ensure_ascii=False)
        self._slots.set(self._key, payload)
