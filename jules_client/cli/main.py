"""Jules command-line interface."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import click
from pydantic import BaseModel

from ..client import JulesClient
from ..config import MAX_PAGE_SIZE, AuthScheme, JulesConfig
from ..errors import JulesError
from ..models import AutomationMode, GitHubRepoContext, Session, SourceContext

T = TypeVar("T")


def _build_client(config: JulesConfig) -> JulesClient:
    return JulesClient(config=config)


def _load_config(ctx: click.Context) -> JulesConfig:
    options = ctx.find_root().obj or {}
    base = JulesConfig.from_env()
    return JulesConfig(
        api_key=base.api_key,
        base_url=options.get("base_url") or base.base_url,
        auth_scheme=options.get("auth_scheme") or base.auth_scheme,
        timeout_s=base.timeout_s,
    )


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, list):
        return [_dump(item) for item in value]
    return value


def _echo_json(value: Any) -> None:
    click.echo(json.dumps(_dump(value), indent=2))


def _run(ctx: click.Context, operation: Callable[[JulesClient], Awaitable[T]]) -> T:
    """Run ``operation`` against a fresh client, exiting 1 on any client error."""

    async def _main() -> T:
        async with _build_client(_load_config(ctx)) as client:
            return await operation(client)

    try:
        return asyncio.run(_main())
    except (JulesError, ValueError) as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(package_name="jules-client")
@click.option("--verbose", "-v", is_flag=True, help="Log HTTP activity to stderr.")
@click.option("--base-url", default=None, help="Override the API base URL.")
@click.option(
    "--auth-scheme",
    type=click.Choice([scheme.value for scheme in AuthScheme]),
    default=None,
    help="How to send the credential (defaults to JULES_AUTH_SCHEME or bearer).",
)
@click.pass_context
def app(ctx: click.Context, verbose: bool, base_url: str | None, auth_scheme: str | None) -> None:
    """Jules CLI - manage coding sessions, activities and sources.

    The credential is read from the JULES_API_KEY environment variable.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    ctx.obj = {"base_url": base_url, "auth_scheme": auth_scheme}


# --- sessions -----------------------------------------------------------------


@app.group()
def sessions() -> None:
    """Create, inspect and drive sessions."""


@sessions.command("list")
@click.option("--page-size", type=click.IntRange(1, MAX_PAGE_SIZE), default=None, help="Sessions per page.")
@click.option("--page-token", default=None, help="Continuation token from a previous page.")
@click.option("--all", "fetch_all", is_flag=True, help="Follow continuation tokens until exhausted.")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Stop after this many sessions (with --all).")
@click.pass_context
def sessions_list(
    ctx: click.Context,
    page_size: int | None,
    page_token: str | None,
    fetch_all: bool,
    limit: int | None,
) -> None:
    """List sessions."""
    if fetch_all:
        result = _run(ctx, lambda client: client.sessions.stream(page_size=page_size).collect(limit))
    else:
        result = _run(ctx, lambda client: client.sessions.list(page_size=page_size, page_token=page_token))
    _echo_json(result)


@sessions.command("get")
@click.argument("name")
@click.pass_context
def sessions_get(ctx: click.Context, name: str) -> None:
    """Show one session by resource name (e.g. sessions/123)."""
    _echo_json(_run(ctx, lambda client: client.sessions.get(name)))


@sessions.command("create")
@click.option("--prompt", required=True, help="Task description for the agent.")
@click.option("--source", required=True, help="Source resource name (e.g. sources/github/owner/repo).")
@click.option("--branch", default=None, help="Starting branch for GitHub sources.")
@click.option("--title", default=None, help="Optional session title.")
@click.option("--require-plan-approval", is_flag=True, help="Wait for plan approval before working.")
@click.option("--auto-pr", is_flag=True, help="Open a pull request automatically when done.")
@click.pass_context
def sessions_create(
    ctx: click.Context,
    prompt: str,
    source: str,
    branch: str | None,
    title: str | None,
    require_plan_approval: bool,
    auto_pr: bool,
) -> None:
    """Create a session."""
    session = Session(
        prompt=prompt,
        source_context=SourceContext(
            source=source,
            github_repo_context=GitHubRepoContext(starting_branch=branch) if branch else None,
        ),
        title=title,
        require_plan_approval=True if require_plan_approval else None,
        automation_mode=AutomationMode.AUTO_CREATE_PR if auto_pr else None,
    )
    _echo_json(_run(ctx, lambda client: client.sessions.create(session)))


@sessions.command("delete")
@click.argument("name")
@click.pass_context
def sessions_delete(ctx: click.Context, name: str) -> None:
    """Delete a session."""
    _run(ctx, lambda client: client.sessions.delete(name))
    click.echo(f"✓ Deleted {name}")


@sessions.command("message")
@click.argument("name")
@click.argument("prompt")
@click.pass_context
def sessions_message(ctx: click.Context, name: str, prompt: str) -> None:
    """Send a message to a session."""
    _run(ctx, lambda client: client.sessions.send_message(name, prompt))
    click.echo(f"✓ Message sent to {name}")


@sessions.command("approve")
@click.argument("name")
@click.pass_context
def sessions_approve(ctx: click.Context, name: str) -> None:
    """Approve the pending plan of a session."""
    _run(ctx, lambda client: client.sessions.approve_plan(name))
    click.echo(f"✓ Plan approved for {name}")


# --- activities ---------------------------------------------------------------


@app.group()
def activities() -> None:
    """Inspect session activities."""


@activities.command("list")
@click.argument("session_name")
@click.option("--page-size", type=click.IntRange(1, MAX_PAGE_SIZE), default=None, help="Activities per page.")
@click.option("--page-token", default=None, help="Continuation token from a previous page.")
@click.option("--all", "fetch_all", is_flag=True, help="Follow continuation tokens until exhausted.")
@click.pass_context
def activities_list(
    ctx: click.Context,
    session_name: str,
    page_size: int | None,
    page_token: str | None,
    fetch_all: bool,
) -> None:
    """List the activities of a session."""
    if fetch_all:
        result = _run(ctx, lambda client: client.activities.stream(session_name, page_size=page_size).collect())
    else:
        result = _run(
            ctx,
            lambda client: client.activities.list(session_name, page_size=page_size, page_token=page_token),
        )
    _echo_json(result)


@activities.command("get")
@click.argument("name")
@click.pass_context
def activities_get(ctx: click.Context, name: str) -> None:
    """Show one activity (e.g. sessions/123/activities/456)."""
    _echo_json(_run(ctx, lambda client: client.activities.get(name)))


# --- sources ------------------------------------------------------------------


@app.group()
def sources() -> None:
    """Inspect connected source repositories."""


@sources.command("list")
@click.option("--filter", "filter_expr", default=None, help="Server-side filter expression.")
@click.option("--page-size", type=click.IntRange(1, MAX_PAGE_SIZE), default=None, help="Sources per page.")
@click.option("--page-token", default=None, help="Continuation token from a previous page.")
@click.option("--all", "fetch_all", is_flag=True, help="Follow continuation tokens until exhausted.")
@click.pass_context
def sources_list(
    ctx: click.Context,
    filter_expr: str | None,
    page_size: int | None,
    page_token: str | None,
    fetch_all: bool,
) -> None:
    """List connected sources."""
    if fetch_all:
        result = _run(ctx, lambda client: client.sources.stream(filter=filter_expr, page_size=page_size).collect())
    else:
        result = _run(
            ctx,
            lambda client: client.sources.list(filter=filter_expr, page_size=page_size, page_token=page_token),
        )
    _echo_json(result)


@sources.command("get")
@click.argument("name")
@click.pass_context
def sources_get(ctx: click.Context, name: str) -> None:
    """Show one source by resource name."""
    _echo_json(_run(ctx, lambda client: client.sources.get(name)))


if __name__ == "__main__":  # pragma: no cover
    app()
