"""
Collection blob stores

Each collection key maps to a JSON array plus a version stamp. ``save`` is a
compare-and-swap: it only succeeds when the caller's version matches the
stored one, so a writer working from a stale snapshot is rejected instead of
silently overwriting the whole collection.

Two backends:
- MemoryBlobStore: process-local dict, optionally mirrored to a JSON file
  (mock mode)
- SqlBlobStore: one ``stored_collections`` row per key via Flask-SQLAlchemy
"""

from __future__ import annotations

import json
import threading
from abc import ABC, abstractmethod
from pathlib import Path

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from teamstock.buisness.errors import ConcurrentModificationError, TransportFailure
from teamstock.logger import get_logger

logger = get_logger("teamstock.data.blob_store")


COLLECTION_KEYS = (
    'inventory',
    'pending-inventory',
    'purchase-requests',
    'vendors',
    'bom',
    'notifications',
)


class BlobStore(ABC):

    @abstractmethod
    def load(self, key: str) -> tuple[list, int]:
        """Return (payload, version); a never-written key is ([], 0)"""

    @abstractmethod
    def save(self, key: str, payload: list, expected_version: int) -> int:
        """Replace the payload if ``expected_version`` is current; return the new version"""

    @abstractmethod
    def keys(self) -> list[str]:
        """Keys that hold a payload"""

    @abstractmethod
    def clear(self, key: str | None = None) -> None:
        """Drop one collection, or all of them"""


class MemoryBlobStore(BlobStore):
    """Mock-mode store; payloads are kept as JSON text so every read re-hydrates"""

    def __init__(self, path: str | Path | None = None):
        self._path = Path(path) if path else None
        self._blobs: dict[str, dict] = {}
        self._lock = threading.Lock()
        if self._path and self._path.exists():
            with self._path.open(encoding='utf-8') as fh:
                self._blobs = json.load(fh)
            logger.info(f"Loaded {len(self._blobs)} collection(s) from {self._path}")

    def load(self, key):
        with self._lock:
            blob = self._blobs.get(key)
        if blob is None:
            return [], 0
        return json.loads(blob['payload']), blob['version']

    def save(self, key, payload, expected_version):
        text = json.dumps(payload)
        with self._lock:
            current = self._blobs.get(key, {}).get('version', 0)
            if current != expected_version:
                raise ConcurrentModificationError(key, expected_version, current)
            new_version = current + 1
            self._blobs[key] = {'payload': text, 'version': new_version}
            self._flush()
        logger.debug(f"Saved {len(payload)} record(s) to '{key}' (version {new_version})")
        return new_version

    def keys(self):
        with self._lock:
            return sorted(self._blobs)

    def clear(self, key=None):
        with self._lock:
            if key is None:
                self._blobs.clear()
            else:
                self._blobs.pop(key, None)
            self._flush()

    def _flush(self):
        if self._path is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open('w', encoding='utf-8') as fh:
            json.dump(self._blobs, fh)


class SqlBlobStore(BlobStore):
    """
    Relational store. Requires an application context.

    Driver and connection errors surface as TransportFailure so the API can
    report them as retryable.
    """

    def __init__(self, db):
        self._db = db

    def _row(self, key):
        from teamstock.data.store.stored_collection import StoredCollection
        return self._db.session.get(StoredCollection, key, populate_existing=True)

    def load(self, key):
        try:
            row = self._row(key)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load collection '{key}': {e}")
            raise TransportFailure(f"Could not load '{key}' from the database") from e
        if row is None:
            return [], 0
        return json.loads(row.payload), row.version

    def save(self, key, payload, expected_version):
        from teamstock.data.store.stored_collection import StoredCollection

        session = self._db.session
        try:
            row = self._row(key)
            current = row.version if row is not None else 0
            if current != expected_version:
                raise ConcurrentModificationError(key, expected_version, current)

            if row is None:
                row = StoredCollection(key=key, payload=json.dumps(payload))
                session.add(row)
            else:
                row.payload = json.dumps(payload)
            session.commit()
            return row.version
        except (IntegrityError, StaleDataError) as e:
            session.rollback()
            logger.warning(f"Concurrent write detected on '{key}': {e}")
            raise ConcurrentModificationError(key, expected_version, self.load(key)[1]) from e
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Failed to save collection '{key}': {e}")
            raise TransportFailure(f"Could not save '{key}' to the database") from e

    def keys(self):
        from teamstock.data.store.stored_collection import StoredCollection
        try:
            return sorted(row.key for row in StoredCollection.query.all())
        except SQLAlchemyError as e:
            raise TransportFailure("Could not list collections") from e

    def clear(self, key=None):
        from teamstock.data.store.stored_collection import StoredCollection
        try:
            query = StoredCollection.query
            if key is not None:
                query = query.filter_by(key=key)
            query.delete()
            self._db.session.commit()
        except SQLAlchemyError as e:
            self._db.session.rollback()
            raise TransportFailure("Could not clear collections") from e
