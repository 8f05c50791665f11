"""Wire-format records for the Jules API.

Field names are snake_case in Python and camelCase on the wire. Required
fields are declared without defaults so that a response missing one fails
validation instead of producing a partially populated object.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Protocol, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T_co = TypeVar("T_co", covariant=True)


class JulesBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        use_enum_values=True,
    )


class AutomationMode(str, Enum):
    AUTOMATION_MODE_UNSPECIFIED = "AUTOMATION_MODE_UNSPECIFIED"
    AUTO_CREATE_PR = "AUTO_CREATE_PR"


class SessionState(str, Enum):
    STATE_UNSPECIFIED = "STATE_UNSPECIFIED"
    QUEUED = "QUEUED"
    PLANNING = "PLANNING"
    AWAITING_PLAN_APPROVAL = "AWAITING_PLAN_APPROVAL"
    AWAITING_USER_FEEDBACK = "AWAITING_USER_FEEDBACK"
    IN_PROGRESS = "IN_PROGRESS"
    PAUSED = "PAUSED"
    FAILED = "FAILED"
    COMPLETED = "COMPLETED"


# --- Sessions -----------------------------------------------------------------


class GitHubRepoContext(JulesBaseModel):
    starting_branch: str


class SourceContext(JulesBaseModel):
    source: str
    github_repo_context: GitHubRepoContext | None = None


class PullRequest(JulesBaseModel):
    url: str
    title: str
    description: str


class SessionOutput(JulesBaseModel):
    pull_request: PullRequest | None = None


class Session(JulesBaseModel):
    """A unit of delegated coding work.

    ``name``, ``id``, timestamps, ``state``, ``url`` and ``outputs`` are
    assigned by the server. Values set on them locally are never sent.
    """

    prompt: str
    source_context: SourceContext
    title: str | None = None
    require_plan_approval: bool | None = None
    automation_mode: AutomationMode | None = None

    name: str | None = None
    id: str | None = None
    create_time: datetime | None = None
    update_time: datetime | None = None
    state: SessionState | None = None
    url: str | None = None
    outputs: list[SessionOutput] | None = None

    OUTPUT_ONLY_FIELDS: ClassVar[frozenset[str]] = frozenset(
        {"name", "id", "create_time", "update_time", "state", "url", "outputs"}
    )

    def to_request_body(self) -> dict[str, Any]:
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            exclude=set(self.OUTPUT_ONLY_FIELDS),
        )


# --- Activities ---------------------------------------------------------------


class AgentMessaged(JulesBaseModel):
    agent_message: str


class UserMessaged(JulesBaseModel):
    user_message: str


class PlanStep(JulesBaseModel):
    id: str
    title: str
    description: str | None = None
    index: int = 0


class Plan(JulesBaseModel):
    id: str
    steps: list[PlanStep] = Field(default_factory=list)
    create_time: datetime | None = None


class PlanGenerated(JulesBaseModel):
    plan: Plan


class PlanApproved(JulesBaseModel):
    plan_id: str


class ProgressUpdated(JulesBaseModel):
    title: str
    description: str | None = None


class SessionFailed(JulesBaseModel):
    reason: str


class GitPatch(JulesBaseModel):
    unidiff_patch: str
    base_commit_id: str
    suggested_commit_message: str | None = None


class ChangeSet(JulesBaseModel):
    source: str
    git_patch: GitPatch | None = None


class Media(JulesBaseModel):
    data: str
    mime_type: str


class BashOutput(JulesBaseModel):
    command: str
    output: str
    exit_code: int


class Artifact(JulesBaseModel):
    change_set: ChangeSet | None = None
    media: Media | None = None
    bash_output: BashOutput | None = None


class Activity(JulesBaseModel):
    name: str
    id: str
    create_time: datetime
    originator: str
    description: str | None = None

    agent_messaged: AgentMessaged | None = None
    user_messaged: UserMessaged | None = None
    plan_generated: PlanGenerated | None = None
    plan_approved: PlanApproved | None = None
    progress_updated: ProgressUpdated | None = None
    session_completed: dict[str, Any] | None = None
    session_failed: SessionFailed | None = None

    artifacts: list[Artifact] | None = None

    EVENT_FIELDS: ClassVar[tuple[str, ...]] = (
        "agent_messaged",
        "user_messaged",
        "plan_generated",
        "plan_approved",
        "progress_updated",
        "session_completed",
        "session_failed",
    )

    @property
    def kind(self) -> str | None:
        """Name of the event payload carried by this activity, if any."""
        for field_name in self.EVENT_FIELDS:
            if getattr(self, field_name) is not None:
                return field_name
        return None


# --- Sources ------------------------------------------------------------------


class GitHubBranch(JulesBaseModel):
    display_name: str


class GitHubRepo(JulesBaseModel):
    owner: str
    repo: str
    is_private: bool = False
    default_branch: GitHubBranch | None = None
    branches: list[GitHubBranch] = Field(default_factory=list)


class Source(JulesBaseModel):
    name: str
    id: str
    github_repo: GitHubRepo | None = None


# --- Pagination ---------------------------------------------------------------


class Page(Protocol[T_co]):
    """One page of a cursor-paginated listing."""

    @property
    def items(self) -> list[T_co]: ...

    @property
    def next_page_token(self) -> str | None: ...

    @property
    def has_next_page(self) -> bool:
        """False when the continuation token is absent or empty."""
        ...


class _ListResponse(JulesBaseModel):
    next_page_token: str | None = None

    @property
    def has_next_page(self) -> bool:
        return bool(self.next_page_token)


class ListSessionsResponse(_ListResponse):
    sessions: list[Session] = Field(default_factory=list)

    @property
    def items(self) -> list[Session]:
        return self.sessions


class ListActivitiesResponse(_ListResponse):
    activities: list[Activity] = Field(default_factory=list)

    @property
    def items(self) -> list[Activity]:
        return self.activities


class ListSourcesResponse(_ListResponse):
    sources: list[Source] = Field(default_factory=list)

    @property
    def items(self) -> list[Source]:
        return self.sources


# --- Request bodies -----------------------------------------------------------


class SendMessageRequest(JulesBaseModel):
    prompt: str


class ApprovePlanRequest(JulesBaseModel):
    pass


__all__ = [
    "Activity",
    "AgentMessaged",
    "ApprovePlanRequest",
    "Artifact",
    "AutomationMode",
    "BashOutput",
    "ChangeSet",
    "GitHubBranch",
    "GitHubRepo",
    "GitHubRepoContext",
    "GitPatch",
    "JulesBaseModel",
    "ListActivitiesResponse",
    "ListSessionsResponse",
    "ListSourcesResponse",
    "Media",
    "Page",
    "Plan",
    "PlanApproved",
    "PlanGenerated",
    "PlanStep",
    "ProgressUpdated",
    "PullRequest",
    "SendMessageRequest",
    "Session",
    "SessionFailed",
    "SessionOutput",
    "SessionState",
    "Source",
    "SourceContext",
    "UserMessaged",
]
