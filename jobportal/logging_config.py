import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Per-request chatter from the server and the multipart parser used by uploads.
QUIET_LOGGERS = ("uvicorn.access", "multipart", "python_multipart")


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        try:
            from jobportal.config import settings
            level = settings.log_level
        except Exception:
            return logging.INFO
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def setup_logging(level: int | str | None = None) -> None:
    """Route portal logs to stdout. At DEBUG the SQL issued by the stores is logged too."""
    resolved = _resolve_level(level)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    root.setLevel(resolved)
    if root.handlers:
        root.handlers.clear()
    root.addHandler(handler)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if resolved <= logging.DEBUG else logging.WARNING)
