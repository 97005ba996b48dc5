"""Structured logging with per-request ID tracking.

A ContextVar carries the request_id through the async generation pipeline and
a filter stamps it onto every record, so the prompt, completion, fallback and
guardrail lines of one request can be grepped together.
"""

import logging
import os
import uuid
from collections.abc import Mapping
from contextvars import ContextVar
from typing import Any

LOGGER_NAME = "exemplar_service"

request_id_ctx: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]


def get_request_id() -> str:
    rid = request_id_ctx.get()
    if not rid:
        rid = new_request_id()
        request_id_ctx.set(rid)
    return rid


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get("") or "-"
        return True


def setup_logging(level: str | None = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s")
        )
        handler.addFilter(RequestIdFilter())
        logger.addHandler(handler)
    level_name = (level or os.environ.get("EXEMPLAR_LOG_LEVEL", "INFO")).upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    return logger


logger = setup_logging()


def clip(text: str, limit: int = 200) -> str:
    """Single-line preview of untrusted text for log messages."""
    flat = " ".join(text.split())
    if len(flat) <= limit:
        return flat
    return flat[:limit] + "..."


SENSITIVE_KEYS = ("auth", "token", "key", "secret", "pass")


def _mask_value(key: str, value: Any) -> str:
    if any(fragment in key.lower() for fragment in SENSITIVE_KEYS):
        # An empty credential is worth seeing as such
        return "<unset>" if not value else "*" * max(6, len(str(value)))
    return str(value)


def print_settings(obj: object) -> None:
    """Log every setting of a pydantic model or plain object, secrets masked."""
    if not obj:
        return

    data: Mapping[str, Any] | None = None
    if hasattr(obj, "model_dump"):
        try:
            data = obj.model_dump()  # type: ignore[attr-defined]
        except Exception:
            data = None

    if data is None and hasattr(obj, "__dict__"):
        data = vars(obj)

    if not data:
        return

    logger.info("=== Settings ===")
    for key, value in data.items():
        logger.info("%s: %s", key, _mask_value(key, value))
