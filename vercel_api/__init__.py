"""Typed Python client for the Vercel REST API."""

from __future__ import annotations

from vercel_api.client import AsyncVercelClient, VercelClient
from vercel_api.exceptions import (
    APIError,
    AuthenticationError,
    DecodingError,
    InvalidResponseError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    TokenExpiredError,
    UnknownError,
    ValidationError,
    VercelError,
)
from vercel_api.models import RateLimitInfo
from vercel_api.pagination import AsyncPageIterator, PageIterator
from vercel_api.schemas import Page, Pagination

__all__ = [
    "AsyncVercelClient",
    "VercelClient",
    "VercelError",
    "APIError",
    "AuthenticationError",
    "DecodingError",
    "InvalidResponseError",
    "NetworkError",
    "NotFoundError",
    "RateLimitError",
    "TokenExpiredError",
    "UnknownError",
    "ValidationError",
    "RateLimitInfo",
    "Page",
    "Pagination",
    "PageIterator",
    "AsyncPageIterator",
]
