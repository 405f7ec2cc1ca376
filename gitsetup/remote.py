"""
remote.py

Responsibility: point `origin` at the hosted repository, then commit and push.

Linking is idempotent: an existing `origin` is re-pointed, never duplicated.
Commit, branch rename and push are best-effort; a failed push produces a
warning with remediation hints but never fails the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from gitsetup.config import COMMIT_MESSAGE, DEFAULT_BRANCH, REMOTE_NAME
from gitsetup.git import Git

log = logging.getLogger(__name__)

HTTPS_PUSH_HINT = "If using HTTPS, Git may prompt for login."
SSH_PUSH_HINT = "If using SSH, ensure the key is added on the git host."


@dataclass
class PublishResult:
    committed: bool = False
    pushed: bool = False
    warnings: list[str] = field(default_factory=list)


def remote_url(*, host: str, owner: str, repo_name: str, use_ssh: bool) -> str:
    if use_ssh:
        return f"git@{host}:{owner}/{repo_name}.git"
    return f"https://{host}/{owner}/{repo_name}.git"


def web_url(*, host: str, owner: str, repo_name: str) -> str:
    return f"https://{host}/{owner}/{repo_name}"


def link_remote(git: Git, url: str, *, name: str = REMOTE_NAME) -> str:
    """
    Add the remote, or update its URL if it already exists.

    Returns "added" or "updated".
    """
    if name in git.remotes():
        git.set_remote_url(name, url)
        log.info("Updated remote %s -> %s", name, url)
        return "updated"
    git.add_remote(name, url)
    log.info("Added remote %s -> %s", name, url)
    return "added"


def publish(
    git: Git,
    *,
    use_ssh: bool,
    remote: str = REMOTE_NAME,
    branch: str = DEFAULT_BRANCH,
    message: str = COMMIT_MESSAGE,
) -> PublishResult:
    result = PublishResult()

    staged = git.add_all()
    if not staged.ok:
        log.debug("git add failed: %s", staged.error)

    # Fails harmlessly when there is nothing to commit.
    commit = git.commit(message)
    result.committed = commit.ok
    if not commit.ok:
        log.debug("git commit skipped: %s", commit.error)

    renamed = git.rename_branch(branch)
    if not renamed.ok:
        log.debug("git branch -M %s failed: %s", branch, renamed.error)

    log.info("Pushing to %s/%s...", remote, branch)
    pushed = git.push(remote, branch)
    result.pushed = pushed.ok
    if not pushed.ok:
        hint = SSH_PUSH_HINT if use_ssh else HTTPS_PUSH_HINT
        result.warnings.append(f"Push failed. {hint}")
        log.warning("Push failed. %s %s", HTTPS_PUSH_HINT, SSH_PUSH_HINT)
        log.warning("%s", pushed.error)
    return result
