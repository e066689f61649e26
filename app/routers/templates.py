from fastapi import APIRouter, Depends, status
from typing import Any
from app.core.exceptions import TemplateNotFoundError
from app.dependencies import get_template_payload, get_template_service
from app.schemas.template import TemplateCreate
from app.services import TemplateService

router = APIRouter(tags=["templates"])

@router.post("/template", status_code=status.HTTP_201_CREATED)
def create_template(
    template: TemplateCreate = Depends(get_template_payload),
    service: TemplateService = Depends(get_template_service),
) -> dict[str, str]:
    """Creates or overwrites a template.

    Only the structure is persisted, under str(id). Fields other than id
    and structure are dropped.

    Args:
        template: Validated payload. Resolved only after the admin check passes.
        service: Template service bound to the TEMPLATES namespace.

    Returns:
        JSON confirmation message.
    """
    service.save_template(template)
    return {"message": "Template created successfully"}

@router.get("/template/{template_id}")
def get_template(
    template_id: str,
    service: TemplateService = Depends(get_template_service),
) -> dict[str, Any]:
    """Returns the stored template JSON.

    Args:
        template_id: Template id as it appears in the URL.

    Returns:
        JSON with the template structure.
    """
    template = service.get_template(template_id)
    if template is None:
        raise TemplateNotFoundError(template_id)
    return template.model_dump()
