"""Root logger configuration."""

import logging

from surrogacy_admin.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging() -> None:
    """Configure the root logger once, honouring LOG_LEVEL."""
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    else:
        root.setLevel(level)

    # SQL echo is noisy; keep it at WARNING unless explicitly debugging
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
