from __future__ import annotations

from datetime import UTC, datetime

from jules_client.models import (
    Activity,
    AutomationMode,
    GitHubRepoContext,
    ListActivitiesResponse,
    Session,
    SessionState,
    Source,
    SourceContext,
)

from conftest import activity_payload, source_payload


def _session(**extra) -> Session:
    return Session(
        prompt="Fix the login bug",
        source_context=SourceContext(
            source="sources/github/acme/web",
            github_repo_context=GitHubRepoContext(starting_branch="main"),
        ),
        **extra,
    )


def test_request_body_uses_camel_case_and_omits_unset() -> None:
    body = _session(title="Fix login", require_plan_approval=True).to_request_body()
    assert body == {
        "prompt": "Fix the login bug",
        "sourceContext": {
            "source": "sources/github/acme/web",
            "githubRepoContext": {"startingBranch": "main"},
        },
        "title": "Fix login",
        "requirePlanApproval": True,
    }


def test_request_body_never_sends_output_only_fields() -> None:
    session = _session(
        name="sessions/mine",
        id="mine",
        state=SessionState.COMPLETED,
        url="https://jules.google.com/session/mine",
        create_time=datetime(2025, 1, 1, tzinfo=UTC),
    )
    body = session.to_request_body()
    for key in ("name", "id", "state", "url", "createTime"):
        assert key not in body


def test_automation_mode_serializes_as_wire_value() -> None:
    body = _session(automation_mode=AutomationMode.AUTO_CREATE_PR).to_request_body()
    assert body["automationMode"] == "AUTO_CREATE_PR"


def test_activity_kind_and_artifacts() -> None:
    payload = activity_payload(
        "s1",
        "a1",
        progressUpdated=None,
        planGenerated={
            "plan": {
                "id": "p1",
                "steps": [{"id": "st1", "title": "Read", "description": "Read code", "index": 0}],
                "createTime": "2025-05-01T10:00:00Z",
            }
        },
        artifacts=[
            {"bashOutput": {"command": "pytest", "output": "1 passed", "exitCode": 0}},
            {
                "changeSet": {
                    "source": "sources/github/acme/web",
                    "gitPatch": {"unidiffPatch": "--- a\n+++ b\n", "baseCommitId": "abc123"},
                }
            },
        ],
    )
    activity = Activity.model_validate(payload)
    assert activity.kind == "plan_generated"
    assert activity.plan_generated is not None
    assert activity.plan_generated.plan.steps[0].title == "Read"
    assert activity.artifacts is not None
    assert activity.artifacts[0].bash_output is not None
    assert activity.artifacts[0].bash_output.exit_code == 0
    assert activity.artifacts[1].change_set.git_patch.base_commit_id == "abc123"


def test_activity_without_event_has_no_kind() -> None:
    activity = Activity.model_validate(activity_payload("s1", "a1", progressUpdated=None))
    assert activity.kind is None


def test_source_decodes_github_repo() -> None:
    source = Source.model_validate(source_payload("github/acme/web"))
    assert source.github_repo is not None
    assert source.github_repo.is_private is True
    assert [branch.display_name for branch in source.github_repo.branches] == ["main", "dev"]


def test_session_state_compares_with_enum() -> None:
    session = Session.model_validate(
        {
            "prompt": "x",
            "sourceContext": {"source": "sources/1"},
            "state": "AWAITING_PLAN_APPROVAL",
        }
    )
    assert session.state == SessionState.AWAITING_PLAN_APPROVAL


def test_list_response_empty_token_means_last_page() -> None:
    page = ListActivitiesResponse.model_validate({"activities": [], "nextPageToken": ""})
    assert not page.has_next_page


def test_unknown_fields_are_ignored() -> None:
    source = Source.model_validate({"name": "sources/1", "id": "1", "somethingNew": {"a": 1}})
    assert source.id == "1"
