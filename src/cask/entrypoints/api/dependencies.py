"""
Request-scoped dependencies for the API routes.
"""

from __future__ import annotations

from fastapi import Header, HTTPException, Request, status

from cask.bootstrap import bootstrap
from cask.service_layer.messagebus import MessageBus


def get_current_user_id(
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> int:
    """Acting user's id, as asserted by the upstream authentication layer."""
    raw = (x_user_id or "").strip()
    if not raw:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    try:
        user_id = int(raw)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid X-User-Id header",
        ) from e
    if user_id < 1:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid X-User-Id header",
        )
    return user_id


def get_message_bus(request: Request) -> MessageBus:
    """A message bus over a fresh unit of work, one per request."""
    state = request.app.state
    container = bootstrap(engine=state.engine, mailer=state.mailer, clock=state.clock)
    return container.message_bus
