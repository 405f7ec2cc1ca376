"""
git.py

Responsibility: Isolate every invocation of the `git` command-line tool.

`git` is treated as an opaque collaborator: commands go in as argument lists,
status and output come back. Two calling styles are offered:
- `run(...)` raises `GitError` on a non-zero exit.
- `attempt(...)` returns an `Outcome` for steps that are allowed to fail.

Only a missing `git` binary is fatal (`GitNotFoundError`).
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Mapping
from pathlib import Path

from gitsetup.outcome import Outcome

log = logging.getLogger(__name__)


class GitError(RuntimeError):
    pass


class GitNotFoundError(GitError):
    pass


class Git:
    def __init__(self, cwd: str | Path, *, executable: str = "git", env: Mapping[str, str] | None = None) -> None:
        self.cwd = Path(cwd)
        self._executable = executable
        self._env = dict(env) if env is not None else None

    def run(self, *args: str, interactive: bool = False) -> str:
        """
        Run `git <args>` in the working directory and return stripped stdout.

        With `interactive=True` the child shares this process's terminal so
        credential prompts reach the user; nothing is captured.
        """
        cmd = [self._executable, *args]
        log.debug("$ %s", " ".join(cmd))
        try:
            if interactive:
                subprocess.run(cmd, cwd=str(self.cwd), env=self._env, check=True)
                return ""
            proc = subprocess.run(
                cmd,
                cwd=str(self.cwd),
                env=self._env,
                check=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError as e:
            raise GitNotFoundError(f"{self._executable} not found in PATH") from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or e.stdout or "").strip()
            msg = f"Command failed: {' '.join(cmd)} (exit {e.returncode})"
            raise GitError(f"{msg}\n\n{detail}" if detail else msg) from e
        return proc.stdout.strip()

    def attempt(self, *args: str, interactive: bool = False) -> Outcome[str]:
        """
        Like `run`, but a failing command becomes `Outcome.failure`.

        A missing git binary still raises.
        """
        try:
            return Outcome.success(self.run(*args, interactive=interactive))
        except GitNotFoundError:
            raise
        except GitError as e:
            return Outcome.failure(str(e))

    # --- queries -------------------------------------------------------

    def version(self) -> str:
        try:
            return self.run("--version")
        except GitNotFoundError:
            raise
        except GitError as e:
            raise GitNotFoundError(f"{self._executable} is not usable: {e}") from e

    def is_repo(self) -> bool:
        return (self.cwd / ".git").exists()

    def get_global(self, key: str) -> Outcome[str]:
        # `git config --global <key>` exits 1 when the key is unset.
        return self.attempt("config", "--global", key)

    def remotes(self) -> list[str]:
        out = self.attempt("remote")
        if not out.ok or not out.value:
            return []
        return [line.strip() for line in out.value.splitlines() if line.strip()]

    # --- mutations -----------------------------------------------------

    def init(self) -> None:
        self.run("init")

    def set_global(self, key: str, value: str) -> Outcome[str]:
        return self.attempt("config", "--global", key, value)

    def add_remote(self, name: str, url: str) -> None:
        self.run("remote", "add", name, url)

    def set_remote_url(self, name: str, url: str) -> None:
        self.run("remote", "set-url", name, url)

    def add_all(self) -> Outcome[str]:
        return self.attempt("add", "-A")

    def commit(self, message: str) -> Outcome[str]:
        return self.attempt("commit", "-m", message)

    def rename_branch(self, branch: str) -> Outcome[str]:
        return self.attempt("branch", "-M", branch)

    def push(self, remote: str, branch: str) -> Outcome[str]:
        return self.attempt("push", "-u", remote, branch, interactive=True)
