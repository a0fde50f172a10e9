"""Request pipeline: rate-limit pre-wait, send, bookkeeping, classification.

``SyncPipeline`` and ``AsyncPipeline`` differ only in how they perform I/O;
URL/header construction, status classification and body decoding are shared
in :class:`_PipelineBase`.
"""

from __future__ import annotations

import functools
import logging
import time
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable, Mapping

import httpx
import pydantic
from pydantic import TypeAdapter

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
from vercel_api.models import RESET_HEADER, RateLimitInfo, parse_reset
from vercel_api.pagination import AsyncFetchPage, AsyncPageIterator, FetchPage, PageIterator
from vercel_api.schemas import ErrorDetail, ErrorEnvelope, VercelModel
from vercel_api.services.rate_limiter import RateLimitTracker
from vercel_api.services.request_context import request_scope

logger = logging.getLogger(__name__)

TOKEN_EXPIRED_CODE = "token_expired"
DEFAULT_RATE_LIMIT_RESET = timedelta(seconds=60)
TEAM_ID_PARAM = "teamId"


@functools.lru_cache(maxsize=None)
def _adapter(response_model: Any) -> TypeAdapter:
    return TypeAdapter(response_model)


def _parse_error_body(response: httpx.Response) -> ErrorDetail | None:
    """Extract ``{"error": {"code", "message"}}`` from a failure body, if any."""
    try:
        return ErrorEnvelope.model_validate(response.json()).error
    except (ValueError, pydantic.ValidationError):
        return None


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class _PipelineBase:
    def __init__(
        self,
        token: str,
        *,
        base_url: str,
        team_id: str | None = None,
        timeout: float = 30.0,
        user_agent: str | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not token:
            raise ValidationError("An API token is required")
        try:
            url = httpx.URL(base_url)
        except httpx.InvalidURL as exc:
            raise ValidationError(f"Invalid base URL: {base_url!r}") from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise ValidationError(f"Invalid base URL: {base_url!r}")

        self.team_id = team_id or None
        self.clock = clock
        self.rate_limiter = RateLimitTracker(clock=clock)

        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        if user_agent:
            headers["User-Agent"] = user_agent
        self._client_kwargs: dict[str, Any] = {
            "base_url": base_url,
            "headers": headers,
            "timeout": timeout,
        }

    # -- request construction ------------------------------------------------

    def _build_params(self, params: Mapping[str, Any] | None) -> dict[str, str]:
        query = {
            key: _query_value(value)
            for key, value in (params or {}).items()
            if value is not None
        }
        if self.team_id:
            query[TEAM_ID_PARAM] = self.team_id
        return query

    def _request_kwargs(
        self,
        params: Mapping[str, Any] | None,
        body: VercelModel | Mapping[str, Any] | None,
    ) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"params": self._build_params(params)}
        if isinstance(body, VercelModel):
            kwargs["json"] = body.to_wire()
        elif body is not None:
            kwargs["json"] = dict(body)
        return kwargs

    # -- response handling ---------------------------------------------------

    def _wrap_transport_error(
        self, method: str, path: str, exc: httpx.HTTPError
    ) -> VercelError:
        logger.warning("%s %s failed before a response arrived: %s", method, path, exc)
        if isinstance(exc, httpx.DecodingError):
            return InvalidResponseError(f"Invalid response received from API: {exc}")
        if isinstance(exc, httpx.TransportError):
            return NetworkError(exc)
        return UnknownError(exc)

    def _build_exception(self, response: httpx.Response, path: str) -> VercelError:
        """Map a non-2xx response onto the error taxonomy.

        Error bodies are parsed opportunistically; a missing or malformed body
        falls back to a generic message and never fails classification.
        """
        status = response.status_code

        if status == 401:
            detail = _parse_error_body(response)
            return AuthenticationError(detail.message if detail else "Unauthorized", 401)

        if status == 403:
            detail = _parse_error_body(response)
            if detail is not None and detail.code == TOKEN_EXPIRED_CODE:
                return TokenExpiredError(403)
            return AuthenticationError("Forbidden", 403)

        if status == 404:
            return NotFoundError(path)

        if status == 429:
            reset_at = parse_reset(response.headers.get(RESET_HEADER))
            if reset_at is None:
                reset_at = (
                    datetime.fromtimestamp(self.clock(), tz=timezone.utc)
                    + DEFAULT_RATE_LIMIT_RESET
                )
            return RateLimitError(reset_at, RateLimitInfo.from_headers(response.headers))

        detail = _parse_error_body(response)
        if detail is not None:
            return APIError(detail.code, detail.message, status)
        return APIError(f"http_{status}", f"HTTP error {status}", status)

    def _check_response(self, method: str, path: str, response: httpx.Response) -> None:
        self.rate_limiter.update(response.headers)
        logger.debug(
            "%s %s -> %d", method, path, response.status_code,
            extra={"status_code": response.status_code},
        )
        if not response.is_success:
            raise self._build_exception(response, path)

    def _decode(
        self,
        response: httpx.Response,
        response_model: Any,
        unwrap: Callable[[Any], Any] | None,
    ) -> Any:
        try:
            data = response.json() if response.content else None
            if response_model is not None:
                data = _adapter(response_model).validate_python(data)
        except (ValueError, pydantic.ValidationError) as exc:
            raise DecodingError(exc, response.status_code) from exc
        return unwrap(data) if unwrap is not None else data


class SyncPipeline(_PipelineBase):
    """Blocking pipeline backed by ``httpx.Client``."""

    def __init__(
        self,
        token: str,
        *,
        transport: httpx.BaseTransport | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(token, **kwargs)
        if transport is not None:
            self._client_kwargs["transport"] = transport
        self._client = httpx.Client(**self._client_kwargs)

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def close(self) -> None:
        self._client.close()

    def _send(
        self,
        method: str,
        path: str,
        params: Mapping[str, Any] | None,
        body: VercelModel | Mapping[str, Any] | None,
    ) -> httpx.Response:
        if self.is_closed:
            raise ValidationError("Client is closed")
        self.rate_limiter.wait()
        try:
            response = self._client.request(
                method, path, **self._request_kwargs(params, body)
            )
        except httpx.HTTPError as exc:
            raise self._wrap_transport_error(method, path, exc) from exc
        self._check_response(method, path, response)
        return response

    def execute(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        body: VercelModel | Mapping[str, Any] | None = None,
        response_model: Any = None,
        unwrap: Callable[[Any], Any] | None = None,
    ) -> Any:
        """Send one request and return the decoded body.

        Raises a :class:`~vercel_api.exceptions.VercelError` subclass on any
        failure.
        """
        with request_scope():
            response = self._send(method, path, params, body)
            return self._decode(response, response_model, unwrap)

    def execute_empty(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
    ) -> None:
        """Send a request whose success body is ignored (e.g. DELETE)."""
        with request_scope():
            self._send(method, path, params, None)

    def paginate(self, fetch_page: FetchPage) -> PageIterator:
        return PageIterator(fetch_page)


class AsyncPipeline(_PipelineBase):
    """Async pipeline backed by ``httpx.AsyncClient``."""

    def __init__(
        self,
        token: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(token, **kwargs)
        if transport is not None:
            self._client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**self._client_kwargs)

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def close(self) -> None:
        await self._client.aclose()

    async def _send(
        self,
        method: str,
        path: str,
        params: Mapping[str, Any] | None,
        body: VercelModel | Mapping[str, Any] | None,
    ) -> httpx.Response:
        if self.is_closed:
            raise ValidationError("Client is closed")
        await self.rate_limiter.await_availability()
        try:
            response = await self._client.request(
                method, path, **self._request_kwargs(params, body)
            )
        except httpx.HTTPError as exc:
            raise self._wrap_transport_error(method, path, exc) from exc
        self._check_response(method, path, response)
        return response

    async def execute(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        body: VercelModel | Mapping[str, Any] | None = None,
        response_model: Any = None,
        unwrap: Callable[[Any], Any] | None = None,
    ) -> Any:
        with request_scope():
            response = await self._send(method, path, params, body)
            return self._decode(response, response_model, unwrap)

    async def execute_empty(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
    ) -> None:
        with request_scope():
            await self._send(method, path, params, None)

    def paginate(self, fetch_page: AsyncFetchPage) -> AsyncPageIterator:
        return AsyncPageIterator(fetch_page)
