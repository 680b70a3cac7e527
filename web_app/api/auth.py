"""Admin credential check for the /api routes."""

import secrets
from typing import Optional

from fastapi import Header, Query, Request

from shortlinks.errors import UnauthorizedError


async def require_admin_key(
    request: Request,
    x_api_key: Optional[str] = Header(None, description="Admin key"),
    key: Optional[str] = Query(None, description="Admin key (alternative to the header)"),
) -> None:
    """Reject the request unless it carries the configured admin key.

    Raises:
        UnauthorizedError: If the key is missing or wrong
    """
    supplied = x_api_key or key
    expected = request.app.state.config.admin_key

    if not supplied or not secrets.compare_digest(supplied.encode(), expected.encode()):
        raise UnauthorizedError("Unauthorized")
