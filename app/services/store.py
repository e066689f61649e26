import json
import logging
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.exceptions import StoreError
from app.models import KVEntry

logger = logging.getLogger(__name__)

class KeyValueStore:
    """A single namespace of the key-value store.

    Values are JSON strings. There is no listing or deletion, and writes are
    plain last-write-wins upserts with no existence check.
    """
    def __init__(self, db: Session, namespace: str):
        """Initializes the store.

        Args:
            db: Database session scoped to the current request.
            namespace: Logical namespace, e.g. 'TEMPLATES' or 'CONTENT'.
        """
        self.db = db
        self.namespace = namespace

    def get(self, key: str, as_json: bool = False) -> Optional[Any]:
        """Reads a value.

        Args:
            key: Storage key.
            as_json: Decode the stored string as JSON.

        Returns:
            The raw string or decoded value, or None when the key is absent.

        Raises:
            StoreError: The backend failed.
            ValueError: as_json was set and the stored value is not valid JSON.
        """
        try:
            entry = self.db.get(KVEntry, (self.namespace, key))
        except SQLAlchemyError as e:
            logger.error(f"Store read failed for {self.namespace}/{key}: {e}")
            raise StoreError(self.namespace, key) from e

        if entry is None:
            return None
        if as_json:
            return json.loads(entry.value)
        return entry.value

    def put(self, key: str, value: str) -> None:
        """Writes a value, replacing whatever was stored under the key.

        Raises:
            StoreError: The backend failed. The session is rolled back.
        """
        try:
            self.db.merge(KVEntry(namespace=self.namespace, key=key, value=value))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Store write failed for {self.namespace}/{key}: {e}")
            raise StoreError(self.namespace, key) from e
