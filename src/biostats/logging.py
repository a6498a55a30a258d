"""Process-wide logger.

Every record carries a short run id so log lines from one dashboard or CLI
process can be grouped.
"""
import logging
import sys
import uuid

from biostats.config import settings

_RUN_ID = uuid.uuid4().hex[:8]


def get_run_id() -> str:
    """Return the id of the current process run."""
    return _RUN_ID


class _RunIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _RUN_ID
        return True


def _build_logger() -> logging.Logger:
    log = logging.getLogger("biostats")
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.addFilter(_RunIdFilter())
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] [%(run_id)s] %(name)s: %(message)s"
        ))
        log.addHandler(handler)
    log.setLevel(settings.LOG_LEVEL.upper())
    return log


logger = _build_logger()
