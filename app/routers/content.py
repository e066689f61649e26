from fastapi import APIRouter, Depends
from typing import Any
from app.core.exceptions import ContentNotFoundError
from app.dependencies import get_content_service
from app.services import ContentService

router = APIRouter(tags=["content"])

@router.get("/content/{path}")
def get_content(
    path: str,
    service: ContentService = Depends(get_content_service),
) -> dict[str, Any]:
    """Returns the stored content record as JSON, style and script included."""
    content = service.get_content(path)
    if content is None:
        raise ContentNotFoundError(path)
    return content.model_dump(by_alias=True)
