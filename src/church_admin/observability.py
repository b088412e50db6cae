import json
import logging
import os
from datetime import datetime, timezone
from typing import Any

LOG_LEVEL_ENV = "CHURCH_ADMIN_LOG_LEVEL"


def get_logger(name: str) -> logging.Logger:
    """Logger writing bare JSON lines; level comes from ``CHURCH_ADMIN_LOG_LEVEL``."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.setLevel((os.getenv(LOG_LEVEL_ENV) or "INFO").upper())
    return logger


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    outcome: str,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    if not logger.isEnabledFor(level):
        return
    payload: dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": logging.getLevelName(level),
        "module": module,
        "action": action,
        "outcome": outcome,
    }
    payload.update({key: value for key, value in fields.items() if value is not None})
    logger.log(level, json.dumps(payload, default=str))
