"""Correlation ID management for request tracing."""

import uuid
from contextvars import ContextVar, Token

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

CORRELATION_ID_HEADER = "X-Correlation-ID"


def get_correlation_id() -> str:
    """Get current correlation ID from context ("" outside a request)."""
    return correlation_id_var.get()


def bind_correlation_id(incoming: str | None) -> tuple[str, Token[str]]:
    """Bind the incoming ID (or a fresh UUID4) to the current context.

    Returns the bound ID and the token needed to unbind it.
    """
    cid = incoming or str(uuid.uuid4())
    return cid, correlation_id_var.set(cid)


def unbind_correlation_id(token: Token[str]) -> None:
    """Restore the correlation ID that was active before binding."""
    correlation_id_var.reset(token)
