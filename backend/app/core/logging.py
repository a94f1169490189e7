import logging
import sys

from app.core.settings import settings

logger = logging.getLogger("agent_assist")

_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"

_configured = False


def setup_logging(level: str | None = None) -> None:
    """Install the stdout handler once; later calls only change the level."""
    global _configured
    level_name = (level or settings.log_level).upper()
    root = logging.getLogger()
    if not _configured:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
        _configured = True
    root.setLevel(level_name)
    logger.setLevel(level_name)
    # The SDK's request logging is noisy at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
