# logging_config.py
from __future__ import annotations

import logging
import sys
import uuid
from contextvars import ContextVar

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(process)d] [rid=%(request_id)s] %(message)s"

_request_id: ContextVar[str] = ContextVar("_request_id", default="-")

def new_request_id() -> str:
    """Start a request scope: mint a short id and bind it to the current context."""
    rid = uuid.uuid4().hex[:12]
    _request_id.set(rid)
    return rid

def get_request_id() -> str:
    return _request_id.get()

class RequestIdFilter(logging.Filter):
    """Stamp the active request id on records that don't carry one in 'extra'."""
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = get_request_id()
        return True

def setup_logging(level: int | str = logging.INFO) -> None:
    root = logging.getLogger()
    root.setLevel(level)

    # Reuse an existing stream handler (uvicorn may have installed one)
    handler = next((h for h in root.handlers if isinstance(h, logging.StreamHandler)), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        root.addHandler(handler)

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
        handler.addFilter(RequestIdFilter())

    for name in ("app", "llm"):
        lg = logging.getLogger(name)
        lg.setLevel(level)
        lg.propagate = True

    # The SDK's transport is chatty at INFO; keep our own lines readable
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
