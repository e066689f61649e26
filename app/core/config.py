from pydantic_settings import BaseSettings
from functools import lru_cache
from pathlib import Path

class Settings(BaseSettings):
    APP_NAME: str = "GoGoKodo"
    VERSION: str = "1.0.0"
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    TEMPLATES_DIR: Path = BASE_DIR / "templates"
    DATABASE_URL: str = "sqlite:///./kodo.db"
    DEBUG: bool = False

    # Shared secret for write endpoints. Empty means every write is rejected.
    ADMIN_TOKEN: str = ""

    # Rendering
    DEFAULT_TITLE: str = "Go Go KoDO"

    # Key-value namespaces
    TEMPLATES_NAMESPACE: str = "TEMPLATES"
    CONTENT_NAMESPACE: str = "CONTENT"

    HOST: str = "0.0.0.0"
    PORT: int = 8000

    class Config:
        env_file = ".env"
        env_prefix = "KODO_"

@lru_cache()
def get_settings():
    return Settings()
