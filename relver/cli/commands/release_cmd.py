from __future__ import annotations

from pathlib import Path

import typer

from relver.cli.commands._helpers import exit_on_error
from relver.cli.commands.resolve import print_plan
from relver.cli.context import build_context
from relver.output.console import Style
from relver.release.ci_output import github_output_path, write_github_output
from relver.release.service import apply_release, plan_release


def release(
    dry_run: bool = typer.Option(False, "--dry-run", help="Print actions without mutating"),
    push: bool = typer.Option(False, "--push/--no-push", help="Push the commit and tag"),
    no_commit: bool = typer.Option(
        False, "--no-commit", help="Write a bumped version file without committing it"
    ),
    fetch: bool = typer.Option(False, "--fetch", help="Fetch remote tags first"),
    github_output: Path | None = typer.Option(
        None,
        "--github-output",
        help="Step outputs file (default: $GITHUB_OUTPUT)",
    ),
) -> None:
    """Resolve the release version, write it back and tag it."""
    ctx = build_context()
    git = ctx.config.git

    plan = exit_on_error(
        plan_release(
            root=ctx.root,
            config=ctx.config,
            repo=ctx.repo,
            fetch=fetch or git.fetch_tags,
        ),
        ctx,
    )
    print_plan(ctx, plan)

    if dry_run:
        ctx.console.print("dry-run: no files written, no tags created", Style.DIM)
        return

    exit_on_error(
        apply_release(
            plan=plan,
            config=ctx.config,
            repo=ctx.repo,
            console=ctx.console,
            commit=git.commit and not no_commit,
            push=push,
        ),
        ctx,
    )

    out_path = github_output_path(github_output)
    if out_path is not None:
        exit_on_error(write_github_output(out_path, plan.resolution), ctx)
        ctx.console.print(f"step outputs: {out_path}", Style.DIM)
