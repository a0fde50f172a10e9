"""Async and sync clients for the Vercel API."""

from __future__ import annotations

import time
from typing import Any, Callable

import httpx

from vercel_api.config import settings
from vercel_api.http import AsyncPipeline, SyncPipeline
from vercel_api.models import RateLimitInfo
from vercel_api.pagination import AsyncFetchPage, AsyncPageIterator, FetchPage, PageIterator
from vercel_api.resources import DeploymentsAPI, DomainsAPI, ProjectsAPI, TeamsAPI


def _pipeline_kwargs(
    base_url: str | None,
    team_id: str | None,
    timeout: float | None,
    clock: Callable[[], float] | None,
) -> dict[str, Any]:
    return {
        "base_url": base_url or settings.api_base_url,
        "team_id": team_id if team_id is not None else settings.team_id,
        "timeout": timeout if timeout is not None else settings.timeout,
        "user_agent": settings.user_agent,
        "clock": clock or time.time,
    }


# ---------------------------------------------------------------------------
# Async client
# ---------------------------------------------------------------------------


class AsyncVercelClient:
    """Async client for the Vercel API (backed by ``httpx.AsyncClient``).

    Example::

        async with AsyncVercelClient(token="...") as client:
            async for project in client.projects.list_all():
                print(project.name)

    ``token``, ``team_id``, ``base_url`` and ``timeout`` default to the
    ``VERCEL_*`` settings.  When a team id is set it is sent as the
    ``teamId`` query parameter on every request.
    """

    def __init__(
        self,
        token: str | None = None,
        team_id: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        *,
        _transport: httpx.AsyncBaseTransport | None = None,
        _clock: Callable[[], float] | None = None,
    ) -> None:
        self._http = AsyncPipeline(
            token or settings.token,
            transport=_transport,
            **_pipeline_kwargs(base_url, team_id, timeout, _clock),
        )
        self.deployments = DeploymentsAPI(self._http)
        self.projects = ProjectsAPI(self._http)
        self.domains = DomainsAPI(self._http)
        self.teams = TeamsAPI(self._http)

    # -- context manager -----------------------------------------------------

    async def __aenter__(self) -> AsyncVercelClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.close()

    @property
    def is_closed(self) -> bool:
        return self._http.is_closed

    # -- core ------------------------------------------------------------------

    @property
    def last_rate_limit(self) -> RateLimitInfo | None:
        """Rate-limit state from the most recent response that carried it."""
        return self._http.rate_limiter.current_state()

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Call an endpoint that has no dedicated method.

        Accepts the pipeline's ``params``, ``body`` and ``response_model``
        keyword arguments.
        """
        return await self._http.execute(method, path, **kwargs)

    def paginate(self, fetch_page: AsyncFetchPage) -> AsyncPageIterator:
        """Turn a cursor-taking page fetch into one lazy item sequence."""
        return self._http.paginate(fetch_page)


# ---------------------------------------------------------------------------
# Sync client
# ---------------------------------------------------------------------------


class VercelClient:
    """Synchronous client for the Vercel API (backed by ``httpx.Client``)."""

    def __init__(
        self,
        token: str | None = None,
        team_id: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        *,
        _transport: httpx.BaseTransport | None = None,
        _clock: Callable[[], float] | None = None,
    ) -> None:
        self._http = SyncPipeline(
            token or settings.token,
            transport=_transport,
            **_pipeline_kwargs(base_url, team_id, timeout, _clock),
        )
        self.deployments = DeploymentsAPI(self._http)
        self.projects = ProjectsAPI(self._http)
        self.domains = DomainsAPI(self._http)
        self.teams = TeamsAPI(self._http)

    # -- context manager -----------------------------------------------------

    def __enter__(self) -> VercelClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    @property
    def is_closed(self) -> bool:
        return self._http.is_closed

    # -- core ------------------------------------------------------------------

    @property
    def last_rate_limit(self) -> RateLimitInfo | None:
        return self._http.rate_limiter.current_state()

    def request(self, method: str, path: str, **kwargs: Any) -> Any:
        return self._http.execute(method, path, **kwargs)

    def paginate(self, fetch_page: FetchPage) -> PageIterator:
        return self._http.paginate(fetch_page)
