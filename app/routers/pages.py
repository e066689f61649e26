from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import HTMLResponse
from app.core.exceptions import BrokenTemplateReferenceError, ContentNotFoundError
from app.dependencies import get_content_payload, get_content_service, get_page_service
from app.schemas.content import ContentCreate
from app.services import ContentService, PageService
from app.templates import templates

router = APIRouter(tags=["pages"])

@router.get("/", response_class=HTMLResponse)
async def root(request: Request) -> Response:
    """Renders the static welcome page."""
    return templates.TemplateResponse(request, "welcome.html")

@router.post("/", status_code=status.HTTP_201_CREATED)
def create_content(
    content: ContentCreate = Depends(get_content_payload),
    service: ContentService = Depends(get_content_service),
) -> dict[str, str]:
    """Creates or overwrites the content record served at content.path.

    Args:
        content: Validated payload, resolved after the admin check. style and script are optional.
        service: Content service bound to the CONTENT namespace.

    Returns:
        JSON confirmation message.
    """
    service.save_content(content)
    return {"message": "Content created successfully"}

@router.get("/{path}", response_class=HTMLResponse)
def render_page(
    request: Request,
    service: PageService = Depends(get_page_service),
) -> Response:
    """Renders the stored content at this path inside its template.

    Must be registered after every other GET route: it matches any single
    path segment, including "template" and "content".

    Args:
        request: Request object. Its raw path is the content key.
        service: Page service.

    Returns:
        The composed HTML page.
    """
    try:
        page = service.render_page(request.url.path)
    except ContentNotFoundError:
        raise HTTPException(status_code=404, detail="Not Found")
    except BrokenTemplateReferenceError as e:
        raise HTTPException(status_code=500, detail=e.message)
    return HTMLResponse(content=page)
