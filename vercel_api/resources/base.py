"""Generic resource client shared by every endpoint group.

Resource methods are written once for both clients: they return whatever
the pipeline returns, i.e. a value on :class:`~vercel_api.http.SyncPipeline`
and an awaitable on :class:`~vercel_api.http.AsyncPipeline`.  Methods must
therefore hand the pipeline result straight back instead of inspecting it;
post-processing goes through the pipeline's ``unwrap`` hook.
"""

from __future__ import annotations

from typing import Any, ClassVar
from urllib.parse import quote

from pydantic import BaseModel

from vercel_api.config import settings
from vercel_api.exceptions import ValidationError
from vercel_api.schemas import Page


def items_of(page: Page) -> list:
    """``unwrap`` hook for endpoints that expose a plain list."""
    return page.items


class Resource:
    """One REST entity type, described by its path templates and models.

    ``paths`` maps an operation name (``list``, ``get``, ``create``,
    ``update``, ``delete``) to a template such as ``/v9/projects/{id}``.
    """

    model: ClassVar[type[BaseModel]]
    page_model: ClassVar[type[Page] | None] = None
    paths: ClassVar[dict[str, str]] = {}

    def __init__(self, http: Any) -> None:
        self._http = http

    def _path(self, template: str, **ids: str) -> str:
        for name, value in ids.items():
            if not value:
                raise ValidationError(f"{name} must not be empty")
        return template.format(**{k: quote(str(v), safe="") for k, v in ids.items()})

    def _op_path(self, operation: str, **ids: str) -> str:
        return self._path(self.paths[operation], **ids)

    # -- generic operations ----------------------------------------------------

    def _list(self, *, limit: int | None = None, until: int | None = None, **filters: Any):
        if limit is None:
            limit = settings.page_limit
        params = {"limit": limit, "until": until, **filters}
        return self._http.execute(
            "GET",
            self._op_path("list"),
            params=params,
            response_model=self.page_model,
        )

    def _list_all(self, *, limit: int | None = None, **filters: Any):
        return self._http.paginate(
            lambda cursor: self._list(limit=limit, until=cursor, **filters)
        )

    def _retrieve(self, **ids: str):
        return self._http.execute(
            "GET", self._op_path("get", **ids), response_model=self.model
        )

    def _create(self, body: BaseModel, **ids: str):
        return self._http.execute(
            "POST", self._op_path("create", **ids), body=body, response_model=self.model
        )

    def _update(self, body: BaseModel, **ids: str):
        return self._http.execute(
            "PATCH", self._op_path("update", **ids), body=body, response_model=self.model
        )

    def _destroy(self, **ids: str):
        return self._http.execute_empty("DELETE", self._op_path("delete", **ids))
