"""Per-call correlation id shared by the HTTP and gRPC entry points.

The id is stored in a ContextVar and bound into structlog's contextvars
so every log line emitted while serving the call carries it.
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar
from typing import Optional

import structlog

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")


def bind_correlation_id(incoming: Optional[str] = None, **extra: str) -> str:
    """Start a fresh logging context for one call and return its correlation id.

    Uses ``incoming`` when the caller supplied one, else generates a UUID4.
    """
    cid = incoming or str(uuid.uuid4())
    correlation_id_var.set(cid)

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(correlation_id=cid, **extra)
    return cid
