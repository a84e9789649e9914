import os

SQLALCHEMY_DATABASE_URL_DEFAULT = "sqlite:///./members.db"
LOG_LEVEL_DEFAULT = "INFO"
DEFAULT_PAGE_SIZE_DEFAULT = "20"
MAX_PAGE_SIZE_DEFAULT = "2000"


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


SQLALCHEMY_DATABASE_URL = os.getenv("SQLALCHEMY_DATABASE_URL", SQLALCHEMY_DATABASE_URL_DEFAULT)
SQLALCHEMY_ECHO = _as_bool(os.getenv("SQLALCHEMY_ECHO", "false"))

AUTO_CREATE_TABLES = _as_bool(os.getenv("AUTO_CREATE_TABLES", "true"))

LOG_LEVEL = os.getenv("LOG_LEVEL", LOG_LEVEL_DEFAULT).upper()

DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE_DEFAULT))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", MAX_PAGE_SIZE_DEFAULT))
