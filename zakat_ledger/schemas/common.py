"""Common Schemas — pagination envelope shared by every list endpoint."""

from pydantic import BaseModel


class PageMeta(BaseModel):
    page: int
    per_page: int
    total: int
    total_pages: int


class StrictInput(BaseModel):
    """Base for request bodies: trims strings, rejects unknown fields."""
    model_config = {"str_strip_whitespace": True, "extra": "forbid"}
