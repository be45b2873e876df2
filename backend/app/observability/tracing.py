"""Tracing utilities wrapping Opik."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from time import perf_counter
from typing import TYPE_CHECKING, Any, Dict, Iterator, Optional

from app.core.context import get_request_id
from app.observability import client as opik_client

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from opik.api_objects.trace.trace_client import Trace
else:  # pragma: no cover - typing helper
    Trace = object  # type: ignore[assignment]

logger = logging.getLogger(__name__)


@contextmanager
def trace(
    name: str,
    metadata: Optional[Dict[str, Any]] = None,
    request_id: Optional[str] = None,
) -> Iterator[Optional["Trace"]]:
    """
    Open an Opik trace around a unit of work.

    The request id defaults to the one bound by the request middleware, and the
    elapsed time is attached as ``duration_ms`` when the block exits. When Opik is
    disabled the context manager yields None and does nothing else.
    """
    client = opik_client.get_opik_client()
    if not client:
        yield None
        return

    trace_metadata = dict(metadata or {})
    resolved_request_id = request_id or get_request_id()
    if resolved_request_id:
        trace_metadata.setdefault("request_id", resolved_request_id)

    try:
        opik_trace = client.trace(name=name, metadata=trace_metadata or None)
    except Exception as exc:  # pragma: no cover - remote backend failure
        logger.debug("Unable to start Opik trace %s: %s", name, exc)
        yield None
        return

    start = perf_counter()
    try:
        yield opik_trace
    except Exception as exc:
        try:
            opik_trace.update(error_info={"message": str(exc), "type": exc.__class__.__name__})
        except Exception:  # pragma: no cover
            logger.debug("Failed to attach error info to Opik trace %s", name, exc_info=True)
        raise
    finally:
        try:
            opik_trace.update(metadata={**trace_metadata, "duration_ms": (perf_counter() - start) * 1000})
            opik_trace.end()
        except Exception:  # pragma: no cover
            logger.debug("Failed to close Opik trace %s cleanly", name, exc_info=True)
