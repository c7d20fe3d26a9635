"""Request context management using contextvars.

Every data-access call runs inside the request of the API layer that
invoked it. The request identifier and the requesting user are kept in
contextvars so log events emitted deep in a store carry them without
threading extra parameters through each operation.

The stores only read this context (through the logging processors); the
API layer wraps each request in ``RequestContext``.
"""

from contextvars import ContextVar
from typing import Any
from uuid import uuid4


request_id_var: ContextVar[str] = ContextVar("request_id", default="")
user_id_var: ContextVar[str | None] = ContextVar("user_id", default=None)


def generate_request_id() -> str:
    """Generate a new unique request ID."""
    return str(uuid4())


def get_request_id() -> str:
    """Get the current request ID."""
    return request_id_var.get()


def set_request_id(request_id: str | None = None) -> str:
    """Set the request ID for the current context.

    Args:
        request_id: Optional request ID. If not provided, generates a new one.

    Returns:
        The request ID that was set.
    """
    rid = request_id or generate_request_id()
    request_id_var.set(rid)
    return rid


def get_user_id() -> str | None:
    """Get the current user ID."""
    return user_id_var.get()


def set_user_id(user_id: str | None) -> None:
    """Set the user ID (the requester's email) for the current context."""
    user_id_var.set(user_id)


def get_context() -> dict[str, Any]:
    """Get all context variables as a dictionary."""
    context: dict[str, Any] = {}

    request_id = get_request_id()
    if request_id:
        context["request_id"] = request_id

    user_id = get_user_id()
    if user_id:
        context["user_id"] = user_id

    return context


def clear_context() -> None:
    """Clear all context variables."""
    request_id_var.set("")
    user_id_var.set(None)


class RequestContext:
    """Context manager for request scope.

    Usage:
        with RequestContext(user_id="a@x.com"):
            await store.delete_comment(comment_id, "a@x.com")
    """

    def __init__(
        self,
        request_id: str | None = None,
        user_id: str | None = None,
    ) -> None:
        self.request_id = request_id
        self.user_id = user_id
        self._tokens: dict[str, Any] = {}

    def __enter__(self) -> "RequestContext":
        """Enter context and set variables."""
        self._tokens["request_id"] = request_id_var.set(
            self.request_id or generate_request_id()
        )
        if self.user_id is not None:
            self._tokens["user_id"] = user_id_var.set(self.user_id)
        return self

    def __exit__(self, *_: object) -> None:
        """Exit context and restore previous values."""
        if "user_id" in self._tokens:
            user_id_var.reset(self._tokens["user_id"])
        request_id_var.reset(self._tokens["request_id"])
