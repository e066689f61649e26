import logging
from typing import Optional, Union

from pydantic import ValidationError

from app.schemas.template import Template, TemplateCreate
from app.services.store import KeyValueStore

logger = logging.getLogger(__name__)

class TemplateService:
    """Reads and writes page templates in the TEMPLATES namespace."""
    def __init__(self, store: KeyValueStore):
        self.store = store

    def get_template(self, template_id: Union[int, str]) -> Optional[Template]:
        """
        Returns the template stored under str(template_id), or None.
        Stored values that are not valid template JSON count as missing.
        """
        key = str(template_id)
        try:
            data = self.store.get(key, as_json=True)
            if data is None:
                return None
            return Template.model_validate(data)
        except (ValueError, ValidationError) as e:
            logger.warning(f"Ignoring undecodable template {key}: {e}")
            return None

    def save_template(self, payload: TemplateCreate) -> str:
        """
        Creates or overwrites a template. Returns the storage key.
        """
        key = payload.storage_key()
        self.store.put(key, payload.to_record().model_dump_json())
        logger.info(f"Template {key} saved")
        return key
