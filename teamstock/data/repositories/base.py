"""
Collection repository

Every mutation is a whole-collection read/modify/write:

1. load the current payload and its version from the blob store
2. hydrate an identity map (id -> record) from the payload
3. apply the change to that private copy
4. save the copy back with the version read in step 1

A write from a stale snapshot fails with ConcurrentModificationError instead
of overwriting another writer's changes. After each successful write the
collection key is published on the ChangeFeed so cached list views refresh.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Iterable

from teamstock.buisness.errors import RecordNotFound
from teamstock.data.store.blob_store import BlobStore
from teamstock.data.store.change_feed import ChangeFeed
from teamstock.logger import get_logger
from teamstock.utils.timestamps import utcnow

logger = get_logger("teamstock.data.repositories")

STAMP_RESOLUTION = timedelta(microseconds=1)


class CollectionRepository:
    """Typed accessor over one collection key"""

    key: str = ''
    record_cls = None

    def __init__(self, store: BlobStore, feed: ChangeFeed, clock: Callable[[], datetime] = utcnow):
        self.store = store
        self.feed = feed
        self.clock = clock
        self._cached_payload = None
        self.feed.subscribe(self.key, self._invalidate)

    # ------------------------------------------------------------------ reads

    def list(self):
        """All records, freshly hydrated"""
        if self._cached_payload is None:
            self._cached_payload, _ = self.store.load(self.key)
        return [self.record_cls.from_dict(data) for data in self._cached_payload]

    def find(self, record_id):
        for record in self.list():
            if record.id == record_id:
                return record
        return None

    def get(self, record_id):
        record = self.find(record_id)
        if record is None:
            raise RecordNotFound(self.key, record_id)
        return record

    def count(self) -> int:
        return len(self.list())

    # -------------------------------------------------------------- mutations

    def add(self, record, actor: str | None = None):
        """Assign identity and creation stamps, then append"""
        return self.add_many([record], actor)[0]

    def add_many(self, records: Iterable, actor: str | None = None) -> list:
        """Append several records in a single collection write"""
        records = list(records)

        def apply(snapshot):
            now = self._next_stamp(None)
            for record in records:
                if record.id is None:
                    record.assign_identity()
                elif record.id in snapshot:
                    raise ValueError(f"{self.key} record {record.id} already exists")
                record.stamp_created(now, actor)
                snapshot[record.id] = record
            return records

        added = self._mutate(apply)
        logger.info(f"Added {len(added)} record(s) to '{self.key}'")
        return added

    def update(self, record, actor: str | None = None):
        """Replace the stored record with the same id and re-stamp it"""
        if record.id is None:
            raise ValueError("Cannot update a record without an id")

        def apply(snapshot):
            previous = snapshot.get(record.id)
            if previous is None:
                raise RecordNotFound(self.key, record.id)
            record.stamp_updated(self._next_stamp(previous.last_stamp), actor)
            snapshot[record.id] = record
            return record

        updated = self._mutate(apply)
        logger.debug(f"Updated {self.key} record {record.id}")
        return updated

    def modify(self, record_id, change: Callable, actor: str | None = None):
        """Apply ``change(record)`` to the stored record and re-stamp it in one write"""

        def apply(snapshot):
            record = snapshot.get(record_id)
            if record is None:
                raise RecordNotFound(self.key, record_id)
            previous_stamp = record.last_stamp
            change(record)
            record.stamp_updated(self._next_stamp(previous_stamp), actor)
            return record

        return self._mutate(apply)

    def delete(self, record_id):
        """Remove a record; returns the removed record"""

        def apply(snapshot):
            record = snapshot.pop(record_id, None)
            if record is None:
                raise RecordNotFound(self.key, record_id)
            return record

        removed = self._mutate(apply)
        logger.info(f"Deleted {self.key} record {record_id}")
        return removed

    def replace_all(self, records: Iterable) -> None:
        """Overwrite the whole collection (seeding and clearing)"""
        records = list(records)

        def apply(snapshot):
            snapshot.clear()
            for record in records:
                if record.id is None:
                    record.assign_identity()
                snapshot[record.id] = record

        self._mutate(apply)
        logger.info(f"Replaced '{self.key}' with {len(records)} record(s)")

    # ---------------------------------------------------------------- helpers

    def _mutate(self, apply: Callable):
        payload, version = self.store.load(self.key)
        snapshot = {}
        for data in payload:
            record = self.record_cls.from_dict(data)
            snapshot[record.id] = record

        result = apply(snapshot)

        self.store.save(self.key, [record.to_dict() for record in snapshot.values()], version)
        self.feed.notify(self.key)
        return result

    def _next_stamp(self, previous: datetime | None) -> datetime:
        now = self.clock()
        if previous is not None and now <= previous:
            now = previous + STAMP_RESOLUTION
        return now

    def _invalidate(self, key: str) -> None:
        self._cached_payload = None
