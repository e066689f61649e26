import logging
from typing import Optional

from pydantic import ValidationError

from app.schemas.content import Content, ContentCreate
from app.services.store import KeyValueStore
from app.utils.path import content_key

logger = logging.getLogger(__name__)

class ContentService:
    """Reads and writes page content records in the CONTENT namespace."""
    def __init__(self, store: KeyValueStore):
        self.store = store

    def get_content(self, path: str) -> Optional[Content]:
        """
        Returns the content record for a URL path, or None.

        The path may carry its leading slash ("/about") or not ("about").
        Stored values that are not valid content JSON count as missing.
        """
        key = content_key(path)
        try:
            data = self.store.get(key, as_json=True)
            if data is None:
                return None
            return Content.model_validate(data)
        except (ValueError, ValidationError) as e:
            logger.warning(f"Ignoring undecodable content {key!r}: {e}")
            return None

    def save_content(self, payload: ContentCreate) -> str:
        """
        Creates or overwrites a content record. Returns the storage key.
        """
        key = payload.storage_key()
        record = payload.to_record()
        self.store.put(key, record.model_dump_json(by_alias=True))
        logger.info(f"Content {key!r} saved (template {record.template_id})")
        return key
