"""Deployments."""

from __future__ import annotations

from vercel_api.resources.base import Resource
from vercel_api.schemas import (
    CreateDeploymentRequest,
    Deployment,
    DeploymentEvent,
    DeploymentPage,
    DeploymentState,
)


class DeploymentsAPI(Resource):
    model = Deployment
    page_model = DeploymentPage
    paths = {
        "list": "/v6/deployments",
        "get": "/v13/deployments/{id}",
        "create": "/v13/deployments",
        "cancel": "/v12/deployments/{id}/cancel",
        "delete": "/v13/deployments/{id}",
        "events": "/v3/deployments/{id}/events",
    }

    def list(
        self,
        limit: int | None = None,
        until: int | None = None,
        project_id: str | None = None,
        state: DeploymentState | None = None,
    ):
        """One page of deployments, optionally filtered by project and state."""
        return self._list(limit=limit, until=until, projectId=project_id, state=state)

    def list_all(
        self,
        limit: int | None = None,
        project_id: str | None = None,
        state: DeploymentState | None = None,
    ):
        return self._list_all(limit=limit, projectId=project_id, state=state)

    def get(self, id: str):
        return self._retrieve(id=id)

    def create(self, request: CreateDeploymentRequest):
        return self._create(request)

    def cancel(self, id: str):
        return self._http.execute(
            "PATCH",
            self._op_path("cancel", id=id),
            body={},
            response_model=Deployment,
        )

    def delete(self, id: str):
        return self._destroy(id=id)

    def events(self, id: str):
        """Build log of a deployment, oldest entry first."""
        return self._http.execute(
            "GET",
            self._op_path("events", id=id),
            response_model=list[DeploymentEvent],
        )
