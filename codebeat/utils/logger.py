# -----------------------------------------------------------------------------
# codebeat/utils/logger.py — Application logger (stdlib logging, extra= fields)
# -----------------------------------------------------------------------------

import logging

from codebeat.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class _ExtraFormatter(logging.Formatter):
    """Appends fields passed via ``extra=`` as key=value pairs."""

    _reserved = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = {k: v for k, v in vars(record).items() if k not in self._reserved}
        if not extras:
            return base
        fields = " ".join(f"{k}={v}" for k, v in sorted(extras.items()))
        return f"{base} {fields}"


def setup_logger(name: str = "codebeat") -> logging.Logger:
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(_ExtraFormatter(LOG_FORMAT))
        log.addHandler(handler)
        log.setLevel(get_settings().log_level.upper())
    return log


logger = setup_logger()
