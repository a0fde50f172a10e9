"""Pydantic models for Vercel API resources, request bodies and envelopes.

Attributes are snake_case.  Decoding accepts the server's camelCase keys as
well as snake_case; request bodies are dumped with snake_case keys.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


def ms_to_datetime(value: int | None) -> datetime | None:
    """Convert a millisecond epoch timestamp to an aware UTC datetime."""
    if value is None:
        return None
    return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)


class VercelModel(BaseModel):
    """Base model with camelCase aliases and optional envelope unwrapping."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    # Some endpoints return ``{"<key>": {...resource...}}`` instead of the
    # bare resource.
    envelope_key: ClassVar[str | None] = None

    @model_validator(mode="before")
    @classmethod
    def _unwrap_envelope(cls, data: Any) -> Any:
        key = cls.envelope_key
        if key and isinstance(data, dict) and isinstance(data.get(key), dict):
            return data[key]
        return data

    def to_wire(self) -> dict[str, Any]:
        """Request-body representation: snake_case keys, unset fields omitted."""
        return self.model_dump(mode="json", exclude_none=True)


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------


class ErrorDetail(VercelModel):
    code: str
    message: str


class ErrorEnvelope(VercelModel):
    """Structured error body: ``{"error": {"code": ..., "message": ...}}``."""

    error: ErrorDetail


class Pagination(VercelModel):
    """Cursor block of a list response; cursors are millisecond timestamps."""

    count: int = 0
    next: int | None = None
    prev: int | None = None

    @property
    def has_next_page(self) -> bool:
        return self.next is not None

    @property
    def has_previous_page(self) -> bool:
        return self.prev is not None

    @property
    def next_date(self) -> datetime | None:
        return ms_to_datetime(self.next)

    @property
    def previous_date(self) -> datetime | None:
        return ms_to_datetime(self.prev)


ItemT = TypeVar("ItemT")


class Page(VercelModel, Generic[ItemT]):
    """One page of a list endpoint.

    Subclasses set ``items_key`` to the resource-specific envelope key so
    ``{"projects": [...], "pagination": {...}}`` decodes directly.
    """

    items_key: ClassVar[str] = "items"

    items: list[ItemT] = Field(default_factory=list)
    pagination: Pagination | None = None

    @model_validator(mode="before")
    @classmethod
    def _collect_items(cls, data: Any) -> Any:
        if isinstance(data, dict) and "items" not in data and cls.items_key in data:
            data = dict(data)
            data["items"] = data.pop(cls.items_key)
        return data

    @property
    def next_cursor(self) -> int | None:
        return self.pagination.next if self.pagination else None

    @property
    def prev_cursor(self) -> int | None:
        return self.pagination.prev if self.pagination else None

    @property
    def has_next_page(self) -> bool:
        return self.next_cursor is not None

    @property
    def has_previous_page(self) -> bool:
        return self.prev_cursor is not None


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


class Framework(str, Enum):
    NEXTJS = "nextjs"
    VITE = "vite"
    GATSBY = "gatsby"
    HUGO = "hugo"
    JEKYLL = "jekyll"
    NUXTJS = "nuxtjs"
    SVELTEKIT = "sveltekit"
    ASTRO = "astro"
    REMIX = "remix"
    SOLIDSTART = "solidstart"
    VUE = "vue"
    ANGULAR = "angular"
    REACT = "react"
    SVELTE = "svelte"
    PREACT = "preact"
    DOCUSAURUS = "docusaurus"
    ELEVENTY = "eleventy"
    HEXO = "hexo"
    OTHER = "other"


class ProjectLink(VercelModel):
    """Git repository connected to a project."""

    type: str | None = None
    repo: str | None = None
    repo_id: int | None = None
    git_provider: str | None = None
    production_branch: str | None = None


class Project(VercelModel):
    id: str
    name: str
    account_id: str | None = None
    created_at: int | None = None
    updated_at: int | None = None
    framework: Framework | None = None
    build_command: str | None = None
    dev_command: str | None = None
    install_command: str | None = None
    output_directory: str | None = None
    root_directory: str | None = None
    link: ProjectLink | None = None

    @property
    def created_date(self) -> datetime | None:
        return ms_to_datetime(self.created_at)

    @property
    def updated_date(self) -> datetime | None:
        return ms_to_datetime(self.updated_at)


class ProjectSettings(VercelModel):
    """Build settings that can be overridden per deployment."""

    build_command: str | None = None
    dev_command: str | None = None
    framework: Framework | None = None
    install_command: str | None = None
    output_directory: str | None = None
    root_directory: str | None = None


class GitRepository(VercelModel):
    type: str
    repo: str


class ProjectPage(Page[Project]):
    items_key: ClassVar[str] = "projects"


# ---------------------------------------------------------------------------
# Environment variables
# ---------------------------------------------------------------------------


class EnvironmentTarget(str, Enum):
    PRODUCTION = "production"
    PREVIEW = "preview"
    DEVELOPMENT = "development"


class EnvironmentVariableType(str, Enum):
    PLAIN = "plain"
    SECRET = "secret"
    SYSTEM = "system"
    SENSITIVE = "sensitive"
    ENCRYPTED = "encrypted"


class EnvironmentVariable(VercelModel):
    envelope_key: ClassVar[str | None] = "created"

    id: str | None = None
    key: str
    value: str | None = None
    target: list[EnvironmentTarget] | None = None
    type: EnvironmentVariableType | None = None
    git_branch: str | None = None
    created_at: int | None = None
    updated_at: int | None = None


class EnvironmentVariablePage(Page[EnvironmentVariable]):
    items_key: ClassVar[str] = "envs"


class CreateProjectRequest(VercelModel):
    name: str
    framework: Framework | None = None
    build_command: str | None = None
    dev_command: str | None = None
    install_command: str | None = None
    output_directory: str | None = None
    root_directory: str | None = None
    environment_variables: list[EnvironmentVariable] | None = None
    git_repository: GitRepository | None = None


class UpdateProjectRequest(VercelModel):
    name: str | None = None
    framework: Framework | None = None
    build_command: str | None = None
    dev_command: str | None = None
    install_command: str | None = None
    output_directory: str | None = None
    root_directory: str | None = None


class CreateEnvironmentVariableRequest(VercelModel):
    key: str
    value: str
    target: list[EnvironmentTarget]
    type: EnvironmentVariableType | None = None
    git_branch: str | None = None


# ---------------------------------------------------------------------------
# Deployments
# ---------------------------------------------------------------------------


class DeploymentState(str, Enum):
    BUILDING = "BUILDING"
    ERROR = "ERROR"
    INITIALIZING = "INITIALIZING"
    QUEUED = "QUEUED"
    READY = "READY"
    CANCELED = "CANCELED"


class DeploymentTarget(str, Enum):
    PRODUCTION = "production"
    PREVIEW = "preview"
    STAGING = "staging"


class FileEncoding(str, Enum):
    BASE64 = "base64"
    UTF8 = "utf8"


class DeploymentCreator(VercelModel):
    uid: str
    username: str | None = None
    email: str | None = None


class DeploymentMeta(VercelModel):
    """Git metadata attached to a deployment."""

    github_commit_sha: str | None = None
    github_commit_message: str | None = None
    github_commit_author_name: str | None = None
    github_repo: str | None = None
    github_commit_ref: str | None = None


class Deployment(VercelModel):
    id: str = Field(validation_alias=AliasChoices("id", "uid"))
    url: str
    name: str
    state: DeploymentState
    target: DeploymentTarget | None = None
    creator: DeploymentCreator | None = None
    created_at: int
    building_at: int | None = None
    ready_at: int | None = None
    project_id: str | None = None
    team_id: str | None = None
    meta: DeploymentMeta | None = None

    @property
    def created_date(self) -> datetime:
        return datetime.fromtimestamp(self.created_at / 1000.0, tz=timezone.utc)

    @property
    def building_date(self) -> datetime | None:
        return ms_to_datetime(self.building_at)

    @property
    def ready_date(self) -> datetime | None:
        return ms_to_datetime(self.ready_at)


class DeploymentPage(Page[Deployment]):
    items_key: ClassVar[str] = "deployments"


class DeploymentFile(VercelModel):
    """A file to upload; ``data`` is base64 for binary files, text otherwise."""

    file: str
    data: str
    encoding: FileEncoding | None = None


class CreateDeploymentRequest(VercelModel):
    name: str
    files: list[DeploymentFile]
    target: DeploymentTarget | None = None
    project_settings: ProjectSettings | None = None
    git_metadata: DeploymentMeta | None = None


class DeploymentEventPayload(VercelModel):
    text: str | None = None
    level: str | None = None


class DeploymentEvent(VercelModel):
    """A build log entry."""

    type: str
    payload: DeploymentEventPayload | None = None
    created_at: int

    @property
    def created_date(self) -> datetime:
        return datetime.fromtimestamp(self.created_at / 1000.0, tz=timezone.utc)


# ---------------------------------------------------------------------------
# Domains
# ---------------------------------------------------------------------------


class Domain(VercelModel):
    envelope_key: ClassVar[str | None] = "domain"

    id: str | None = None
    name: str
    verified: bool | None = None
    created_at: int | None = None
    bought_at: int | None = None
    expires_at: int | None = None
    service_type: str | None = None
    custom_domain: bool | None = None

    @property
    def created_date(self) -> datetime | None:
        return ms_to_datetime(self.created_at)


class DomainPage(Page[Domain]):
    items_key: ClassVar[str] = "domains"


class DNSRecord(VercelModel):
    id: str
    type: str
    name: str
    value: str
    ttl: int | None = None
    mx_priority: int | None = None
    created_at: int | None = None
    updated_at: int | None = None


class DNSRecordPage(Page[DNSRecord]):
    items_key: ClassVar[str] = "records"


class VerificationRecord(VercelModel):
    type: str
    domain: str
    value: str
    reason: str | None = None


class DomainVerification(VercelModel):
    verified: bool
    verification: list[VerificationRecord] | None = None


class AddDomainRequest(VercelModel):
    name: str


class CreateDNSRecordRequest(VercelModel):
    type: str
    name: str
    value: str
    ttl: int | None = None
    mx_priority: int | None = None


# ---------------------------------------------------------------------------
# Teams
# ---------------------------------------------------------------------------


class TeamRole(str, Enum):
    OWNER = "OWNER"
    MEMBER = "MEMBER"
    VIEWER = "VIEWER"
    DEVELOPER = "DEVELOPER"
    BILLING = "BILLING"


class Team(VercelModel):
    id: str
    slug: str
    name: str
    avatar: str | None = None
    created_at: int | None = None

    @property
    def created_date(self) -> datetime | None:
        return ms_to_datetime(self.created_at)


class TeamPage(Page[Team]):
    items_key: ClassVar[str] = "teams"


class TeamMember(VercelModel):
    uid: str
    role: TeamRole
    email: str | None = None
    username: str | None = None
    name: str | None = None
    avatar: str | None = None
    created_at: int | None = None
    confirmed_at: int | None = None
    accessed_at: int | None = None

    @property
    def id(self) -> str:
        return self.uid


class TeamMemberPage(Page[TeamMember]):
    items_key: ClassVar[str] = "members"


class TeamInvitation(VercelModel):
    id: str | None = None
    email: str
    role: TeamRole
    created_at: int | None = None

    @property
    def created_date(self) -> datetime | None:
        return ms_to_datetime(self.created_at)


class InviteTeamMemberRequest(VercelModel):
    email: str
    role: TeamRole


class UpdateMemberRoleRequest(VercelModel):
    role: TeamRole
