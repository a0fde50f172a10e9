"""Tests for the resource endpoints (projects, deployments, domains, teams)."""

from __future__ import annotations

import json

import httpx
import pytest

from vercel_api import (
    AsyncVercelClient,
    AuthenticationError,
    NotFoundError,
    ValidationError,
    VercelClient,
)
from vercel_api.schemas import (
    AddDomainRequest,
    CreateDeploymentRequest,
    CreateDNSRecordRequest,
    CreateEnvironmentVariableRequest,
    Deployment,
    DeploymentEvent,
    DeploymentFile,
    DeploymentState,
    DeploymentTarget,
    DNSRecord,
    Domain,
    DomainVerification,
    EnvironmentTarget,
    EnvironmentVariable,
    InviteTeamMemberRequest,
    Page,
    Project,
    Team,
    TeamInvitation,
    TeamMember,
    TeamRole,
    UpdateProjectRequest,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_PROJECT = {"id": "prj_1", "name": "web", "framework": "nextjs", "accountId": "acc_1"}

_DEPLOYMENT = {
    "uid": "dpl_1",
    "url": "web-abc.vercel.app",
    "name": "web",
    "state": "READY",
    "target": "production",
    "createdAt": 1_700_000_000_000,
    "creator": {"uid": "usr_1", "username": "ada"},
    "meta": {"githubCommitSha": "deadbeef", "githubCommitRef": "main"},
}

_DOMAIN = {"id": "dom_1", "name": "example.com", "verified": True, "createdAt": 1_600_000_000_000}

_TEAMS = {
    "teams": [
        {"id": "team_1", "slug": "acme", "name": "Acme"},
        {"id": "team_2", "slug": "globex", "name": "Globex"},
    ],
    "pagination": {"count": 2, "next": None, "prev": None},
}


class _Router:
    """MockTransport handler that maps ``(method, path)`` to a response."""

    def __init__(self, routes: dict[tuple[str, str], httpx.Response]) -> None:
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(
                404, json={"error": {"code": "not_found", "message": "Not found"}}
            )
        return self.routes[key]


def _client(routes, **kwargs) -> tuple[VercelClient, _Router]:
    router = _Router(routes)
    client = VercelClient(
        "tok", team_id="", _transport=httpx.MockTransport(router), **kwargs
    )
    return client, router


def _ok(body) -> httpx.Response:
    return httpx.Response(200, json=body)


# ---------------------------------------------------------------------------
# Teams
# ---------------------------------------------------------------------------


class TestTeams:
    def test_list_returns_all_teams(self):
        client, _ = _client({("GET", "/v2/teams"): _ok(_TEAMS)})
        with client:
            teams = client.teams.list()
        assert [t.id for t in teams] == ["team_1", "team_2"]
        assert all(isinstance(t, Team) for t in teams)

    def test_members_of_empty_team(self):
        client, _ = _client({
            ("GET", "/v2/teams"): _ok(_TEAMS),
            ("GET", "/v2/teams/team_1/members"): _ok({"members": [], "pagination": None}),
        })
        with client:
            first = client.teams.list()[0]
            members = client.teams.members(first.id)
        assert members == []

    def test_members(self):
        body = {"members": [{"uid": "usr_1", "role": "OWNER", "email": "a@x.io"}]}
        client, _ = _client({("GET", "/v2/teams/team_1/members"): _ok(body)})
        with client:
            members = client.teams.members("team_1")
        assert isinstance(members[0], TeamMember)
        assert members[0].role is TeamRole.OWNER
        assert members[0].id == "usr_1"

    def test_invite_member(self):
        routes = {
            ("POST", "/v1/teams/team_1/members"): _ok(
                {"id": "inv_1", "email": "b@x.io", "role": "DEVELOPER"}
            )
        }
        client, router = _client(routes)
        with client:
            invitation = client.teams.invite_member(
                "team_1", InviteTeamMemberRequest(email="b@x.io", role=TeamRole.DEVELOPER)
            )
        assert isinstance(invitation, TeamInvitation)
        assert json.loads(router.requests[0].content) == {"email": "b@x.io", "role": "DEVELOPER"}

    def test_update_member_role(self):
        routes = {
            ("PATCH", "/v1/teams/team_1/members/usr_1"): _ok({"uid": "usr_1", "role": "VIEWER"})
        }
        client, router = _client(routes)
        with client:
            member = client.teams.update_member_role("team_1", "usr_1", TeamRole.VIEWER)
        assert member.role is TeamRole.VIEWER
        assert json.loads(router.requests[0].content) == {"role": "VIEWER"}

    def test_remove_member(self):
        client, router = _client(
            {("DELETE", "/v1/teams/team_1/members/usr_1"): httpx.Response(204)}
        )
        with client:
            assert client.teams.remove_member("team_1", "usr_1") is None
        assert router.requests[0].method == "DELETE"


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


class TestProjects:
    def test_list_page(self):
        body = {"projects": [_PROJECT], "pagination": {"count": 1, "next": 1_690_000_000_000, "prev": None}}
        client, router = _client({("GET", "/v9/projects"): _ok(body)})
        with client:
            page = client.projects.list(limit=10)
        assert isinstance(page, Page)
        assert page.items[0].name == "web"
        assert page.next_cursor == 1_690_000_000_000
        assert router.requests[0].url.params["limit"] == "10"
        assert "until" not in router.requests[0].url.params

    def test_list_uses_default_limit(self):
        client, router = _client({("GET", "/v9/projects"): _ok({"projects": []})})
        with client:
            client.projects.list()
        assert router.requests[0].url.params["limit"] == "20"

    def test_explicit_zero_limit_is_sent(self):
        client, router = _client({("GET", "/v9/projects"): _ok({"projects": []})})
        with client:
            client.projects.list(limit=0)
        assert router.requests[0].url.params["limit"] == "0"

    def test_list_all_follows_cursors(self):
        seen: list[str | None] = []

        def handler(request: httpx.Request) -> httpx.Response:
            until = request.url.params.get("until")
            seen.append(until)
            if until is None:
                return _ok({"projects": [_PROJECT, {**_PROJECT, "id": "prj_2"}],
                            "pagination": {"count": 2, "next": 200}})
            if until == "200":
                return _ok({"projects": [{**_PROJECT, "id": "prj_3"}],
                            "pagination": {"count": 1, "next": 100}})
            return _ok({"projects": [], "pagination": {"count": 0, "next": None}})

        with VercelClient("tok", _transport=httpx.MockTransport(handler)) as client:
            ids = [p.id for p in client.projects.list_all(limit=2)]

        assert ids == ["prj_1", "prj_2", "prj_3"]
        assert seen == [None, "200", "100"]

    def test_get_unknown_project_is_not_found(self):
        client, _ = _client({})
        with client:
            with pytest.raises(NotFoundError) as exc_info:
                client.projects.get("missing-project")
        assert "missing-project" in exc_info.value.resource

    def test_update(self):
        client, router = _client(
            {("PATCH", "/v9/projects/web"): _ok({**_PROJECT, "buildCommand": "make"})}
        )
        with client:
            project = client.projects.update("web", UpdateProjectRequest(build_command="make"))
        assert project.build_command == "make"
        assert json.loads(router.requests[0].content) == {"build_command": "make"}

    def test_environment_variables(self):
        body = {"envs": [{"id": "env_1", "key": "API_URL", "value": "x",
                          "target": ["production", "preview"], "type": "plain"}]}
        client, _ = _client({("GET", "/v9/projects/prj_1/env"): _ok(body)})
        with client:
            envs = client.projects.environment_variables("prj_1")
        assert envs[0].key == "API_URL"
        assert envs[0].target == [EnvironmentTarget.PRODUCTION, EnvironmentTarget.PREVIEW]

    def test_create_environment_variable_unwraps_created(self):
        body = {"created": {"id": "env_2", "key": "TOKEN", "value": "s", "type": "sensitive"}}
        client, router = _client({("POST", "/v10/projects/prj_1/env"): _ok(body)})
        with client:
            env = client.projects.create_environment_variable(
                "prj_1",
                CreateEnvironmentVariableRequest(
                    key="TOKEN", value="s", target=[EnvironmentTarget.PRODUCTION]
                ),
            )
        assert isinstance(env, EnvironmentVariable)
        assert env.id == "env_2"
        assert json.loads(router.requests[0].content) == {
            "key": "TOKEN", "value": "s", "target": ["production"],
        }

    def test_delete_environment_variable(self):
        client, router = _client(
            {("DELETE", "/v9/projects/prj_1/env/env_1"): httpx.Response(200, json={})}
        )
        with client:
            client.projects.delete_environment_variable("prj_1", "env_1")
        assert len(router.requests) == 1

    def test_empty_identifier_rejected_before_sending(self):
        client, router = _client({})
        with client:
            with pytest.raises(ValidationError):
                client.projects.get("")
        assert router.requests == []

    def test_identifier_is_percent_encoded(self):
        client, router = _client({})
        with client:
            with pytest.raises(NotFoundError):
                client.projects.get("a/b")
        assert router.requests[0].url.raw_path.startswith(b"/v9/projects/a%2Fb")

    def test_invalid_token_listing_projects(self):
        resp = httpx.Response(
            401, json={"error": {"code": "forbidden", "message": "Not authorized"}}
        )
        with VercelClient("bogus", _transport=httpx.MockTransport(lambda r: resp)) as client:
            with pytest.raises(AuthenticationError):
                client.projects.list()


# ---------------------------------------------------------------------------
# Deployments
# ---------------------------------------------------------------------------


class TestDeployments:
    def test_list_with_filters(self):
        body = {"deployments": [_DEPLOYMENT], "pagination": {"count": 1}}
        client, router = _client({("GET", "/v6/deployments"): _ok(body)})
        with client:
            page = client.deployments.list(project_id="prj_1", state=DeploymentState.READY)
        params = router.requests[0].url.params
        assert params["projectId"] == "prj_1"
        assert params["state"] == "READY"
        deployment = page.items[0]
        assert deployment.id == "dpl_1"
        assert deployment.target is DeploymentTarget.PRODUCTION
        assert deployment.meta.github_commit_sha == "deadbeef"
        assert deployment.creator.username == "ada"

    def test_get_nonexistent_deployment(self):
        client, _ = _client({})
        with client:
            with pytest.raises(NotFoundError) as exc_info:
                client.deployments.get("dpl_does_not_exist")
        assert "dpl_does_not_exist" in exc_info.value.resource

    def test_get(self):
        body = {**_DEPLOYMENT, "id": "dpl_1"}
        del body["uid"]
        client, _ = _client({("GET", "/v13/deployments/dpl_1"): _ok(body)})
        with client:
            deployment = client.deployments.get("dpl_1")
        assert isinstance(deployment, Deployment)
        assert deployment.state is DeploymentState.READY

    def test_create(self):
        client, router = _client({("POST", "/v13/deployments"): _ok(_DEPLOYMENT)})
        with client:
            client.deployments.create(
                CreateDeploymentRequest(
                    name="web",
                    files=[DeploymentFile(file="index.html", data="<h1>hi</h1>")],
                    target=DeploymentTarget.PREVIEW,
                )
            )
        assert json.loads(router.requests[0].content) == {
            "name": "web",
            "files": [{"file": "index.html", "data": "<h1>hi</h1>"}],
            "target": "preview",
        }

    def test_cancel(self):
        client, router = _client(
            {("PATCH", "/v12/deployments/dpl_1/cancel"): _ok({**_DEPLOYMENT, "state": "CANCELED"})}
        )
        with client:
            deployment = client.deployments.cancel("dpl_1")
        assert deployment.state is DeploymentState.CANCELED
        assert json.loads(router.requests[0].content) == {}

    def test_events(self):
        events = [
            {"type": "command", "payload": {"text": "npm run build"}, "createdAt": 1_700_000_000_000},
            {"type": "stdout", "payload": {"text": "Compiled", "level": "info"}, "createdAt": 1_700_000_001_000},
        ]
        client, _ = _client({("GET", "/v3/deployments/dpl_1/events"): _ok(events)})
        with client:
            log = client.deployments.events("dpl_1")
        assert [e.type for e in log] == ["command", "stdout"]
        assert all(isinstance(e, DeploymentEvent) for e in log)
        assert log[1].payload.level == "info"

    def test_events_requires_id(self):
        client, router = _client({})
        with client:
            with pytest.raises(ValidationError):
                client.deployments.events("")
        assert router.requests == []


# ---------------------------------------------------------------------------
# Domains
# ---------------------------------------------------------------------------


class TestDomains:
    def test_list(self):
        body = {"domains": [_DOMAIN], "pagination": {"count": 1, "next": None}}
        client, _ = _client({("GET", "/v5/domains"): _ok(body)})
        with client:
            page = client.domains.list()
        assert page.items[0].name == "example.com"
        assert not page.has_next_page

    def test_get_unwraps_envelope(self):
        client, _ = _client({("GET", "/v5/domains/example.com"): _ok({"domain": _DOMAIN})})
        with client:
            domain = client.domains.get("example.com")
        assert isinstance(domain, Domain)
        assert domain.verified is True

    def test_add(self):
        client, router = _client({("POST", "/v5/domains"): _ok({"domain": _DOMAIN})})
        with client:
            domain = client.domains.add(AddDomainRequest(name="example.com"))
        assert domain.id == "dom_1"
        assert json.loads(router.requests[0].content) == {"name": "example.com"}

    def test_verify(self):
        client, _ = _client(
            {("POST", "/v5/domains/example.com/verify"): _ok({"verified": False, "verification": [
                {"type": "TXT", "domain": "_vercel.example.com", "value": "vc-domain-verify=1"}
            ]})}
        )
        with client:
            result = client.domains.verify("example.com")
        assert isinstance(result, DomainVerification)
        assert result.verification[0].type == "TXT"

    def test_dns_records(self):
        body = {"records": [{"id": "rec_1", "type": "MX", "name": "", "value": "mx.example.com",
                             "mxPriority": 10}]}
        client, _ = _client({("GET", "/v4/domains/example.com/records"): _ok(body)})
        with client:
            records = client.domains.dns_records("example.com")
        assert isinstance(records[0], DNSRecord)
        assert records[0].mx_priority == 10

    def test_create_dns_record(self):
        client, router = _client({("POST", "/v2/domains/example.com/records"): _ok(
            {"id": "rec_2", "type": "A", "name": "www", "value": "76.76.21.21"}
        )})
        with client:
            record = client.domains.create_dns_record(
                "example.com", CreateDNSRecordRequest(type="A", name="www", value="76.76.21.21")
            )
        assert record.id == "rec_2"
        assert json.loads(router.requests[0].content) == {
            "type": "A", "name": "www", "value": "76.76.21.21",
        }

    def test_delete_dns_record(self):
        client, router = _client(
            {("DELETE", "/v2/domains/example.com/records/rec_1"): httpx.Response(200, json={})}
        )
        with client:
            client.domains.delete_dns_record("example.com", "rec_1")
        assert router.requests[0].method == "DELETE"


# ---------------------------------------------------------------------------
# Async resources
# ---------------------------------------------------------------------------


class TestAsyncResources:
    async def test_teams_list(self):
        router = _Router({("GET", "/v2/teams"): _ok(_TEAMS)})
        async with AsyncVercelClient("tok", _transport=httpx.MockTransport(router)) as client:
            teams = await client.teams.list()
        assert len(teams) == 2

    async def test_list_all_projects(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.params.get("until") is None:
                return _ok({"projects": [_PROJECT], "pagination": {"count": 1, "next": 5}})
            return _ok({"projects": [], "pagination": {"count": 0}})

        async with AsyncVercelClient("tok", _transport=httpx.MockTransport(handler)) as client:
            projects = [p async for p in client.projects.list_all()]
        assert [p.id for p in projects] == ["prj_1"]
        assert isinstance(projects[0], Project)

    async def test_get_nonexistent_deployment(self):
        router = _Router({})
        async with AsyncVercelClient("tok", _transport=httpx.MockTransport(router)) as client:
            with pytest.raises(NotFoundError) as exc_info:
                await client.deployments.get("dpl_nope")
        assert "dpl_nope" in exc_info.value.resource

    async def test_delete(self):
        router = _Router({("DELETE", "/v13/deployments/dpl_1"): httpx.Response(204)})
        async with AsyncVercelClient("tok", _transport=httpx.MockTransport(router)) as client:
            assert await client.deployments.delete("dpl_1") is None

    async def test_paginate_custom_fetch(self):
        pages = {
            None: {"deployments": [_DEPLOYMENT], "pagination": {"count": 1, "next": 7}},
            "7": {"deployments": [], "pagination": {"count": 0}},
        }

        def handler(request: httpx.Request) -> httpx.Response:
            return _ok(pages[request.url.params.get("until")])

        async with AsyncVercelClient("tok", _transport=httpx.MockTransport(handler)) as client:
            it = client.paginate(lambda cursor: client.deployments.list(until=cursor))
            items = [d async for d in it]
        assert [d.id for d in items] == ["dpl_1"]
