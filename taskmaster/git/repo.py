"""Git and GitHub operations behind the quick git commands."""

import getpass
import logging
import re
from dataclasses import dataclass
from datetime import datetime

import typer

from taskmaster.errors import CurrentBranchError, ProtectedBranchError
from taskmaster.lib import config, proc, prompts

logger = logging.getLogger(__name__)

PROTECTED_BRANCHES = {"main", "master"}
STASH_TAG = "quickstash:"
UNSTAGED_HEADER = "Changes not staged for commit:"
UNTRACKED_HEADER = "Untracked files:"

SSH_REMOTE = re.compile(r"^git@(?P<host>[^:]+):(?P<repo>.+?)(?:\.git)?$")


@dataclass
class Branches:
    current: str
    branches: list[str]


def parse_branches(output: str, include_current: bool = False) -> Branches:
    """Parse `git branch` output. The starred line is the current branch."""
    lines = [line.strip() for line in output.splitlines() if line.strip()]

    current = None
    branches = []
    for line in lines:
        if line.startswith("*"):
            current = line.lstrip("*").strip()
            if include_current:
                branches.append(current)
            continue
        branches.append(line)

    if current is None:
        raise CurrentBranchError()
    return Branches(current=current, branches=branches)


def get_branches(include_current: bool = False) -> Branches:
    return parse_branches(proc.capture(["git", "branch"]), include_current=include_current)


def select_branch(action: str, include_current: bool = False) -> str | None:
    """Prompt for a branch. None when there is nothing to pick or the user cancels."""
    info = get_branches(include_current=include_current)
    if not info.branches:
        typer.echo(f"No branches available to {action}")
        return None

    typer.echo(f'Current branch: "{info.current}"')
    return prompts.select(f"Select a branch to {action}:", info.branches)


def short_name(branch: str) -> str:
    """Last path segment of a branch: user/123/fix-x -> fix-x."""
    return branch.split("/")[-1]


def needs_stash(status: str) -> bool:
    """A quickstash is offered only when both sections appear in `git status`."""
    return UNSTAGED_HEADER in status and UNTRACKED_HEADER in status


def stash_message(branch: str, now: datetime | None = None) -> str:
    now = now or datetime.now()
    return f"{STASH_TAG} {short_name(branch)} {now.strftime('%Y-%m-%d %H:%M:%S')}"


def find_quick_stash(stash_list: str, branch: str) -> str | None:
    """First `git stash list` line tagged as a quickstash for branch."""
    name = short_name(branch)
    for line in stash_list.splitlines():
        _, tag, rest = line.partition(STASH_TAG)
        if tag and rest.split()[:1] == [name]:
            return line
    return None


def stash_ref(stash_line: str) -> str:
    """stash@{0}: On main: quickstash: ... -> stash@{0}"""
    return stash_line.split(":")[0]


def quick_stash() -> bool:
    """Offer to stash local changes before a switch. Returns True if stashed."""
    status = proc.capture(["git", "status"])
    if not needs_stash(status):
        return False

    if not prompts.confirm("Would you like to stash current changes?"):
        return False

    current = get_branches().current
    proc.run_checked(["git", "stash", "push", "-u", "-m", stash_message(current)])
    return True


def apply_quick_stash(branch: str) -> bool:
    """Offer to re-apply the latest quickstash left on branch."""
    line = find_quick_stash(proc.capture(["git", "stash", "list"]), branch)
    if line is None:
        return False

    if not prompts.confirm(f'Would you like to apply the last quickstash "{line}"?'):
        return False

    proc.run_checked(["git", "stash", "apply", stash_ref(line)])
    return True


def switch(branch: str) -> None:
    logger.debug(f"Switching to {branch}")
    quick_stash()
    proc.run_checked(["git", "switch", branch])
    apply_quick_stash(branch)


def rebase(branch: str, use_remote: bool) -> None:
    if use_remote:
        proc.run_checked(["git", "fetch"])
        proc.run_checked(["git", "rebase", f"origin/{branch}"])
        return
    proc.run_checked(["git", "rebase", branch])


def check_deletable(branch: str) -> None:
    if branch in PROTECTED_BRANCHES:
        raise ProtectedBranchError(branch)


def delete_branch(branch: str) -> None:
    check_deletable(branch)
    logger.debug(f"Deleting branch {branch}")
    proc.run_checked(["git", "branch", "-D", branch])


def username() -> str:
    """Branch prefix: configured name, else git user.name, else the OS user."""
    configured = config.git_settings().get("username")
    if configured:
        return configured
    git_name = proc.capture(["git", "config", "user.name"]).strip()
    if git_name:
        return git_name.lower().replace(" ", "-")
    return getpass.getuser()


def branch_name(user: str, message: str, ticket: str | None = None) -> str:
    message = message.strip().replace(" ", "-")
    if ticket:
        return f"{user}/{ticket}/{message}"
    return f"{user}/{message}"


def new_branch(base: str, name: str, pull: bool) -> None:
    quick_stash()
    proc.run_checked(["git", "switch", base])
    if pull:
        proc.run_checked(["git", "pull", "--ff"])
    proc.run_checked(["git", "checkout", "-b", name])
    proc.run_checked(["git", "push", "--set-upstream", "origin", name])


def web_url(remote: str) -> str | None:
    """Browser URL for a remote, or None if it cannot be derived."""
    remote = remote.strip()
    if remote.startswith("http"):
        return remote[:-4] if remote.endswith(".git") else remote
    match = SSH_REMOTE.match(remote)
    if match:
        return f"https://{match['host']}/{match['repo']}"
    return None


def origin_url() -> str | None:
    return web_url(proc.capture(["git", "config", "--get", "remote.origin.url"]))


@dataclass
class PullRequest:
    message: str
    body: str = ""
    draft: bool = False
    ticket: str | None = None
    pr_type: str | None = None

    def title(self, settings: dict) -> str:
        if not self.ticket:
            return self.message
        prefix = settings["ticket_title"].format(type=self.pr_type, ticket=self.ticket)
        return f"{prefix} {self.message}"

    def full_body(self, settings: dict) -> str:
        if not self.ticket:
            return self.body
        url = settings["ticket_url"].format(ticket=self.ticket)
        parts = [url, self.body, settings.get("pr_footer") or ""]
        return "\n\n".join(parts)

    def create_args(self, settings: dict) -> list[str]:
        args = ["gh", "pr", "create"]
        if not self.ticket:
            args.append("-f")
        args += ["--title", self.title(settings), "--body", self.full_body(settings)]
        if self.draft:
            args.append("-d")
        return args


def create_pr(pr: PullRequest) -> None:
    proc.run_checked(pr.create_args(config.git_settings()))
    proc.run_checked(["gh", "pr", "view", "--web"])


def view_pr(branch: str) -> None:
    proc.run_checked(["gh", "pr", "view", "--web", branch])
