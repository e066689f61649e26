from sqlmodel import Session
from app.core.database import engine
from app.core.config import Settings, get_settings
from app.core.security import require_admin
from typing import Any, Generator, Type, TypeVar
from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from app.schemas.content import ContentCreate
from app.schemas.template import TemplateCreate
from app.services import KeyValueStore, TemplateService, ContentService, PageService

ModelT = TypeVar("ModelT", bound=BaseModel)

def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session

def get_template_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> TemplateService:
    return TemplateService(KeyValueStore(db, settings.TEMPLATES_NAMESPACE))

def get_content_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ContentService:
    return ContentService(KeyValueStore(db, settings.CONTENT_NAMESPACE))

def get_page_service(
    content_service: ContentService = Depends(get_content_service),
    template_service: TemplateService = Depends(get_template_service),
    settings: Settings = Depends(get_settings),
) -> PageService:
    return PageService(content_service, template_service, settings)


async def parse_json_body(request: Request, model: Type[ModelT]) -> ModelT:
    """Reads the request body as JSON and validates it against a model.

    Errors are raised as RequestValidationError with "body"-prefixed locations,
    the same shape FastAPI produces for declared body parameters.
    """
    try:
        data: Any = await request.json()
    except ValueError as e:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": {}, "ctx": {"error": str(e)}}]
        )

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(
            [{**error, "loc": ("body", *error["loc"])} for error in e.errors()]
        )

# The write payloads depend on require_admin so the token is checked before
# the body is read: a rejected request never reaches body validation.

async def get_template_payload(
    request: Request,
    _: None = Depends(require_admin),
) -> TemplateCreate:
    return await parse_json_body(request, TemplateCreate)

async def get_content_payload(
    request: Request,
    _: None = Depends(require_admin),
) -> ContentCreate:
    return await parse_json_body(request, ContentCreate)
