import logging, sys

from treenorm import settings


def setup_logging(level: str | None = None):
    """Attach a stdout handler to the root logger. Meant for host applications and scripts."""
    logger = logging.getLogger()
    if logger.handlers:  # don’t double add
        return
    level = level or settings.LOG_LEVEL
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    h = logging.StreamHandler(sys.stdout)
    fmt = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s :: %(message)s"
    )
    h.setFormatter(fmt)
    logger.addHandler(h)
