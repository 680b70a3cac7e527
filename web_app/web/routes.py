"""Public redirect route."""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from shortlinks.errors import LinkNotFoundError, StorageError

router = APIRouter()

logger = logging.getLogger("shortlinks.web")


@router.get("/{slug}", include_in_schema=False)
async def redirect_to_url(request: Request, slug: str):
    """Count the visit and redirect to the destination URL."""
    service = request.app.state.service

    try:
        url = await service.resolve(slug)
    except LinkNotFoundError:
        return PlainTextResponse("Link not found", status_code=status.HTTP_404_NOT_FOUND)
    except StorageError as e:
        logger.error(f"Redirect for {slug} failed: {e}")
        return PlainTextResponse("Server error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return RedirectResponse(url=url, status_code=status.HTTP_301_MOVED_PERMANENTLY)
