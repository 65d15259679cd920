"""Quick git CLI: interactive shortcuts for everyday branch and PR work."""

import typer

from taskmaster.git import repo
from taskmaster.lib import config, prompts
from taskmaster.lib.detach import detach
from taskmaster.lib.errors import error_feedback, setup_logging

app = typer.Typer(
    invoke_without_command=True,
    add_completion=False,
    help="Quick git: branch switching with auto-stash, rebases and pull requests.",
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    setup_logging(verbose)
    if ctx.resilient_parsing:
        return

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@app.command("s")
@error_feedback
def switch():
    """Switches branches"""
    branch = repo.select_branch("switch to")
    if not branch:
        typer.echo("Canceled")
        return

    repo.switch(branch)


@app.command("r")
@error_feedback
def rebase():
    """Rebases the current branch"""
    branch = repo.select_branch("rebase on")
    if not branch:
        typer.echo("Canceled")
        return

    use_remote = prompts.confirm("Base on remote of this branch?")
    repo.rebase(branch, use_remote)


@app.command("o")
@error_feedback
def open_repo():
    """Attempts to open the remote repo in a browser"""
    url = repo.origin_url()
    if not url:
        typer.echo("No browsable origin remote")
        return
    detach([config.opener(), url])


@app.command("nb")
@error_feedback
def new_branch():
    """Creates a new branch"""
    base = repo.select_branch("base new branch on", include_current=True)
    if not base:
        return

    pull = prompts.confirm("Run pull first?")
    ticket = None
    if prompts.confirm("Make branch from a ticket?", default=True):
        ticket = prompts.text("Enter the ticket number")
    message = prompts.text("Enter the branch description")
    if not message:
        typer.echo("Canceled")
        return

    name = repo.branch_name(repo.username(), message, ticket)
    repo.new_branch(base, name, pull)


@app.command("db")
@error_feedback
def delete_branch():
    """Deletes a branch"""
    branch = repo.select_branch("delete")
    if not branch:
        return
    repo.check_deletable(branch)

    if not prompts.confirm(f'Are you sure you want to delete branch "{branch}"?', default=False):
        return
    repo.delete_branch(branch)


@app.command("opr")
@error_feedback
def open_pr():
    """Attempts to open the current pull request in a browser"""
    repo.view_pr(repo.get_branches().current)


@app.command("npr")
@error_feedback
def new_pr():
    """Creates a new pull request"""
    settings = config.git_settings()

    use_ticket = prompts.confirm("Make PR from a ticket?")
    pr_type = None
    ticket = None
    if use_ticket:
        pr_type = prompts.select("Choose a PR type", settings["pr_types"], cancel=False)
        ticket = prompts.text("Enter the ticket number")
        if not ticket or not pr_type:
            typer.echo("Canceled")
            return

    message = prompts.text("Enter the PR message")
    if not message:
        typer.echo("Canceled")
        return
    body = prompts.text("Enter body text")
    draft = prompts.confirm("Open PR as draft?", default=False)

    repo.create_pr(
        repo.PullRequest(message=message, body=body, draft=draft, ticket=ticket, pr_type=pr_type)
    )


def main() -> None:
    """Entry point for qg command."""
    app()
