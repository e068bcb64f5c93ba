"""Pagination query parameters shared by list endpoints."""

from dataclasses import dataclass

from fastapi import Query

from app.config import get_settings


@dataclass
class PageParams:
    page: int
    limit: int


def page_params(
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int | None = Query(None, ge=1, description="Items per page (capped at the configured maximum)"),
) -> PageParams:
    settings = get_settings()
    limit = min(limit or settings.default_page_size, settings.max_page_size)
    return PageParams(page=page, limit=limit)
