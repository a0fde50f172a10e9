"""Projects and their environment variables."""

from __future__ import annotations

from vercel_api.resources.base import Resource, items_of
from vercel_api.schemas import (
    CreateEnvironmentVariableRequest,
    CreateProjectRequest,
    EnvironmentVariable,
    EnvironmentVariablePage,
    Project,
    ProjectPage,
    UpdateProjectRequest,
)


class ProjectsAPI(Resource):
    model = Project
    page_model = ProjectPage
    paths = {
        "list": "/v9/projects",
        "get": "/v9/projects/{id}",
        "create": "/v9/projects",
        "update": "/v9/projects/{id}",
        "delete": "/v9/projects/{id}",
        "env": "/v9/projects/{id}/env",
        "env_create": "/v10/projects/{id}/env",
        "env_delete": "/v9/projects/{id}/env/{env_id}",
    }

    def list(self, limit: int | None = None, until: int | None = None):
        """One page of projects, newest first; ``until`` is the page cursor."""
        return self._list(limit=limit, until=until)

    def list_all(self, limit: int | None = None):
        """Every project, fetched lazily page by page."""
        return self._list_all(limit=limit)

    def get(self, id_or_name: str):
        return self._retrieve(id=id_or_name)

    def create(self, request: CreateProjectRequest):
        return self._create(request)

    def update(self, id_or_name: str, request: UpdateProjectRequest):
        return self._update(request, id=id_or_name)

    def delete(self, id_or_name: str):
        return self._destroy(id=id_or_name)

    def environment_variables(self, project_id: str):
        return self._http.execute(
            "GET",
            self._op_path("env", id=project_id),
            response_model=EnvironmentVariablePage,
            unwrap=items_of,
        )

    def create_environment_variable(
        self, project_id: str, request: CreateEnvironmentVariableRequest
    ):
        return self._http.execute(
            "POST",
            self._op_path("env_create", id=project_id),
            body=request,
            response_model=EnvironmentVariable,
        )

    def delete_environment_variable(self, project_id: str, env_id: str):
        return self._http.execute_empty(
            "DELETE", self._op_path("env_delete", id=project_id, env_id=env_id)
        )
