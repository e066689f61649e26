import logging

from app.core.config import Settings
from app.core.exceptions import BrokenTemplateReferenceError, ContentNotFoundError
from app.schemas.content import Content
from app.schemas.template import Template
from app.services.content import ContentService
from app.services.template import TemplateService
from app.templates import templates

logger = logging.getLogger(__name__)

CONTENT_PLACEHOLDER = "{{content}}"

def compose_page(template: Template, content: Content, default_title: str) -> str:
    """Builds the full HTML document for a content record.

    Only the first {{content}} in the structure is replaced; later ones are
    left as literal text. A structure without the placeholder drops the
    content entirely.

    Structure, content, style and script are emitted unescaped. They can only
    be written by holders of the admin token, and anyone holding it can put
    arbitrary markup and JavaScript on every page.

    Args:
        template: Resolved template.
        content: Resolved content record.
        default_title: Used when the record's title is empty.

    Returns:
        The HTML document as a string.
    """
    body = template.structure.replace(CONTENT_PLACEHOLDER, content.content, 1)
    return templates.get_template("page.html").render(
        title=content.title or default_title,
        style=content.style or "",
        body=body,
        script=content.script or "",
    )

class PageService:
    """Resolves a request path to content and template and composes the page."""
    def __init__(self, content_service: ContentService, template_service: TemplateService, settings: Settings):
        self.content_service = content_service
        self.template_service = template_service
        self.settings = settings

    def render_page(self, path: str) -> str:
        """Renders the page stored at a URL path.

        The template is looked up only once the content record exists.

        Raises:
            ContentNotFoundError: No content is stored for the path.
            BrokenTemplateReferenceError: The content names a missing template.
        """
        content = self.content_service.get_content(path)
        if content is None:
            raise ContentNotFoundError(path)

        template = self.template_service.get_template(content.template_id)
        if template is None:
            logger.warning(
                f"Content {path!r} references missing template {content.template_id}"
            )
            raise BrokenTemplateReferenceError(path, str(content.template_id))

        return compose_page(template, content, self.settings.DEFAULT_TITLE)
