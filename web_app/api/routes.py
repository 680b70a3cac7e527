"""API routes implementation."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from .auth import require_admin_key
from .schemas import (
    CreateRequest,
    CreateResponse,
    BulkRequest,
    BulkResponse,
    ListResponse,
    DeleteByURLRequest,
    OkResponse,
    DeleteByURLResponse,
    HealthResponse,
    ErrorResponse,
)

router = APIRouter()

UNAUTHORIZED = {401: {"model": ErrorResponse, "description": "Missing or wrong admin key"}}

admin = APIRouter(dependencies=[Depends(require_admin_key)], responses=UNAUTHORIZED)


@admin.post(
    "/create",
    response_model=CreateResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing URL or malformed slug"},
        409: {"model": ErrorResponse, "description": "Slug already exists"},
        500: {"model": ErrorResponse, "description": "Storage failure"},
    },
    summary="Create link",
    description="Create one link. Optionally provide the slug as `code`.",
)
async def create_link(request: Request, body: CreateRequest):
    """Create a link."""
    service = request.app.state.service
    return await service.create_link(body.url, slug=body.code)


@admin.post(
    "/bulk",
    response_model=BulkResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing URL or count out of range"},
        500: {"model": ErrorResponse, "description": "Storage failure"},
    },
    summary="Bulk create links",
    description="Generate `count` links for one destination; colliding slugs are skipped.",
)
async def bulk_create(request: Request, body: BulkRequest):
    """Generate many links for one URL."""
    service = request.app.state.service
    return await service.bulk_create(body.url, count=body.count, prefix=body.prefix)


@admin.get(
    "/list",
    response_model=ListResponse,
    summary="List links",
    description="Page through links, most recently created first.",
)
async def list_links(
    request: Request,
    page: Optional[str] = Query(None, description="1-based page number (default 1)"),
    limit: Optional[str] = Query(None, description="Page size (default 100)"),
):
    """List links."""
    service = request.app.state.service
    return await service.list_links(page=page, limit=limit)


@admin.delete(
    "/delete/{slug}",
    response_model=OkResponse,
    responses={404: {"model": ErrorResponse, "description": "Slug not found"}},
    summary="Delete link",
)
async def delete_link(request: Request, slug: str):
    """Delete one link by slug."""
    service = request.app.state.service
    return await service.delete_link(slug)


@admin.delete(
    "/delete-by-url",
    response_model=DeleteByURLResponse,
    responses={400: {"model": ErrorResponse, "description": "Missing URL"}},
    summary="Delete links by destination",
    description="Delete every link whose destination equals `url` exactly.",
)
async def delete_links_by_url(request: Request, body: DeleteByURLRequest):
    """Delete all links pointing at one URL."""
    service = request.app.state.service
    return await service.delete_links_by_url(body.url)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check that the service is up and whether the store is reachable.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service
    return await service.health_check()


router.include_router(admin)
