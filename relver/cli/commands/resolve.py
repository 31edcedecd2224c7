from __future__ import annotations

import json

import typer

from relver.cli.commands._helpers import exit_on_error
from relver.cli.context import CLIContext, build_context
from relver.release.ci_output import output_values
from relver.release.service import ReleasePlan, plan_release


def resolve(
    fetch: bool = typer.Option(False, "--fetch", help="Fetch remote tags first"),
    as_json: bool = typer.Option(False, "--json", help="Print the resolution as JSON"),
) -> None:
    """Show which version the next release would publish (no side effects)."""
    ctx = build_context()
    plan = exit_on_error(
        plan_release(
            root=ctx.root,
            config=ctx.config,
            repo=ctx.repo,
            fetch=fetch or ctx.config.git.fetch_tags,
        ),
        ctx,
    )

    if as_json:
        typer.echo(json.dumps(output_values(plan.resolution), sort_keys=True))
        return

    print_plan(ctx, plan)


def print_plan(ctx: CLIContext, plan: ReleasePlan) -> None:
    r = plan.resolution
    ctx.console.field("stored", str(r.stored))
    ctx.console.field("tags", str(plan.known_tags))
    if plan.latest is not None:
        ctx.console.field("latest", plan.latest.to_tag())
    ctx.console.field("action", str(r.action))
    ctx.console.field("version", str(r.version))
    ctx.console.field("tag", r.tag)
    if r.bumped:
        ctx.console.warning(f"{r.stored.to_tag()} already exists, patch bumped to {r.version}")
