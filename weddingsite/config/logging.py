import logging
import sys

from weddingsite.config.settings import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# chatty at DEBUG and nothing we need day to day
QUIET_LOGGERS = ("httpx", "httpcore", "passlib", "PIL", "multipart")


def setup_logging() -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(logging.DEBUG if settings.debug else logging.INFO)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    # SQL echo is controlled by LOG_DB on the engine
    if not settings.LOG_DB:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
