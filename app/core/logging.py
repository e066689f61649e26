import logging
import sys
from typing import Optional
from app.core.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Per-request access lines and SQL echo drown out store and admin-guard events.
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine")

def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Routes application logs to stdout, at DEBUG when KODO_DEBUG is set.

    Safe to call more than once: the stdout handler is only attached to a
    root logger that has none yet.
    """
    settings = settings or get_settings()
    log_level = logging.DEBUG if settings.DEBUG else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"{settings.APP_NAME} {settings.VERSION} logging at {logging.getLevelName(log_level)}; "
        f"store namespaces {settings.TEMPLATES_NAMESPACE}/{settings.CONTENT_NAMESPACE}"
    )
