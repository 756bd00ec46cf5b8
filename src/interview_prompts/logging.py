import json
import logging
import re
from typing import Any, Dict

from opentelemetry import trace

SENSITIVE_KEYS = {
    "authorization",
    "api_key",
    "apikey",
    "password",
    "secret",
    "token",
    "cookie",
    "set-cookie",
}

_BEARER_RE = re.compile(r"bearer\s+[A-Za-z0-9._\-]+", re.IGNORECASE)
_EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")

_LOGGER_NAME = "interview_prompts"


def configure_logging(name: str = _LOGGER_NAME, level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        logging.basicConfig(level=level, format="%(message)s")
    return logger


def _trace_fields() -> Dict[str, str]:
    """Trace/span ids of the active OpenTelemetry span, if any."""
    fields: Dict[str, str] = {}
    try:
        ctx = trace.get_current_span().get_span_context()
        if ctx and ctx.is_valid:
            fields["trace_id"] = format(ctx.trace_id, "032x")
            fields["span_id"] = format(ctx.span_id, "016x")
    except Exception:
        # Best-effort enrichment; ignore errors
        pass
    return fields


def _scrub_value(value: Any) -> Any:
    if isinstance(value, str):
        if _BEARER_RE.search(value):
            return "[REDACTED]"
        if _EMAIL_RE.search(value):
            return "[REDACTED_EMAIL]"
    return value


def scrub(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {
            k: "[REDACTED]" if str(k).lower() in SENSITIVE_KEYS else scrub(v)
            for k, v in obj.items()
        }
    if isinstance(obj, list):
        return [scrub(item) for item in obj]
    return _scrub_value(obj)


def log_json(level: int, event: str, **fields: Any) -> None:
    """Emit one structured JSON log line on the package logger."""
    for key, value in _trace_fields().items():
        fields.setdefault(key, value)
    payload = scrub({"event": event, **fields})
    logging.getLogger(_LOGGER_NAME).log(level, json.dumps(payload, sort_keys=True, default=str))
