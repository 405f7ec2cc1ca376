"""
local.py

Responsibility: make sure the working directory is a git repository and that a
minimal global identity exists.

Identity is external, process-wide state with set-if-absent semantics: each run
reads the current global value from git and writes only when it is empty.
Nothing is cached between runs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from gitsetup.git import Git

log = logging.getLogger(__name__)

IDENTITY_KEYS = ("user.name", "user.email")


@dataclass
class LocalResult:
    initialized: bool = False
    identity_set: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def ensure_repository(git: Git) -> bool:
    """Run `git init` unless `.git` already exists. Returns True if it ran."""
    if git.is_repo():
        log.debug("Git metadata already present in %s", git.cwd)
        return False
    git.init()
    log.info("Initialized git repository in %s", git.cwd)
    return True


def ensure_identity(git: Git, *, name: str, email: str) -> LocalResult:
    result = LocalResult()
    wanted = dict(zip(IDENTITY_KEYS, (name, email)))
    for key, value in wanted.items():
        current = git.get_global(key)
        # A failed lookup counts as "not set".
        if current.ok and current.value:
            log.debug("Keeping existing global %s", key)
            continue
        if not value.strip():
            result.warnings.append(f"Global git {key} is not set and no value was given for it.")
            continue
        written = git.set_global(key, value)
        if not written.ok:
            result.warnings.append(f"Could not set global git {key}: {written.error}")
            continue
        result.identity_set.append(key)
        log.info("Set global git %s", key)
    return result


def prepare_local(git: Git, *, name: str, email: str) -> LocalResult:
    initialized = ensure_repository(git)
    result = ensure_identity(git, name=name, email=email)
    result.initialized = initialized
    return result
