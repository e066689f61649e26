from .store import KeyValueStore
from .template import TemplateService
from .content import ContentService
from .page import PageService, compose_page
