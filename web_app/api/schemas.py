"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class CreateRequest(BaseModel):
    """Request to create one link."""

    url: Optional[str] = Field(None, description="Destination URL")
    code: Optional[str] = Field(None, description="Optional custom slug")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path"},
                {"url": "https://github.com/user/repo", "code": "myrepo"},
            ]
        }
    }


class CreateResponse(BaseModel):
    """Response after creating a link."""

    short: str = Field(..., description="The complete short link")
    slug: str = Field(..., description="The slug")
    url: str = Field(..., description="The destination URL")


class BulkRequest(BaseModel):
    """Request to generate many links for one destination."""

    url: Optional[str] = Field(None, description="Destination URL")
    count: int = Field(10, description="Number of links to generate (max 5000)")
    prefix: Optional[str] = Field(None, description="Optional slug prefix")


class BulkLink(BaseModel):
    """One generated link."""

    short: str
    slug: str


class BulkResponse(BaseModel):
    """Response after bulk generation."""

    total: int = Field(..., description="Number of links actually created")
    url: str
    links: List[BulkLink]


class LinkEntry(BaseModel):
    """A stored link as shown by the list endpoint."""

    slug: str
    short: str
    url: str
    visits: int
    created: datetime
    lastVisit: Optional[datetime] = None


class ListResponse(BaseModel):
    """One page of links."""

    total: int
    page: int
    pages: int
    links: List[LinkEntry]


class DeleteByURLRequest(BaseModel):
    """Request to delete every link for a destination."""

    url: Optional[str] = Field(None, description="Destination URL to match exactly")


class OkResponse(BaseModel):
    """Plain success acknowledgement."""

    ok: bool = True


class DeleteByURLResponse(BaseModel):
    """Response after deleting by destination."""

    ok: bool = True
    deleted: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    db: str = Field(..., description="Store connectivity: connected or disconnected")
    backend: str = Field(..., description="Store backend in use")
    time: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
