"""Test configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from unittest.mock import Mock

import pytest

from gitsetup.git import Git, GitError
from gitsetup.github_client import GitHubClient, KeyInfo, RepoInfo
from gitsetup.keys import KeyProvisioner, key_paths
from gitsetup.outcome import Outcome


class FakeGit(Git):
    """In-memory stand-in for the git CLI; records every command."""

    def __init__(self, cwd: Path, *, identity: dict[str, str] | None = None, push_ok: bool = True) -> None:
        super().__init__(cwd)
        self.calls: list[tuple[str, ...]] = []
        self.identity: dict[str, str] = dict(identity or {})
        self.remote_urls: dict[str, str] = {}
        self.commits: list[str] = []
        self.push_ok = push_ok
        self.lookup_fails = False

    def run(self, *args: str, interactive: bool = False) -> str:
        self.calls.append(args)
        cmd = args[0]
        if cmd == "--version":
            return "git version 2.43.0"
        if cmd == "init":
            (self.cwd / ".git").mkdir()
            return ""
        if cmd == "config":
            key = args[2]
            if len(args) == 4:
                self.identity[key] = args[3]
                return ""
            if self.lookup_fails or key not in self.identity:
                raise GitError(f"Command failed: git config --global {key} (exit 1)")
            return self.identity[key]
        if cmd == "remote":
            if len(args) == 1:
                return "\n".join(self.remote_urls)
            if args[1] == "add":
                if args[2] in self.remote_urls:
                    raise GitError("error: remote origin already exists.")
                self.remote_urls[args[2]] = args[3]
                return ""
            if args[1] == "set-url":
                self.remote_urls[args[2]] = args[3]
                return ""
        if cmd == "commit":
            self.commits.append(args[2])
            return ""
        if cmd == "push" and not self.push_ok:
            raise GitError("Command failed: git push -u origin main (exit 128)")
        return ""

    def ran(self, *prefix: str) -> bool:
        return any(call[: len(prefix)] == prefix for call in self.calls)


class FakeKeys(KeyProvisioner):
    """Key provisioner that writes dummy key files instead of calling ssh-keygen."""

    def __init__(self, home: Path, *, keygen_ok: bool = True) -> None:
        super().__init__(home)
        self.keygen_ok = keygen_ok
        self.generated: list[Path] = []
        self.agent: list[Path] = []

    def generate(self, key: Path, *, comment: str) -> Outcome[str]:
        self.generated.append(key)
        if not self.keygen_ok:
            return Outcome.failure("ssh-keygen not found in PATH")
        key.parent.mkdir(parents=True, exist_ok=True)
        key.write_text("PRIVATE", encoding="utf-8")
        key.with_name(key.name + ".pub").write_text(f"ssh-ed25519 AAAATEST {comment}\n", encoding="utf-8")
        return Outcome.success("")

    def add_to_agent(self, key: Path) -> Outcome[str]:
        self.agent.append(key)
        return Outcome.failure("Could not open a connection to your authentication agent.")


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    d = tmp_path / "project"
    d.mkdir()
    return d


@pytest.fixture
def home(tmp_path: Path) -> Path:
    d = tmp_path / "home"
    d.mkdir()
    return d


@pytest.fixture
def fake_git(workdir: Path) -> FakeGit:
    return FakeGit(workdir)


@pytest.fixture
def fake_keys(home: Path) -> FakeKeys:
    return FakeKeys(home)


@pytest.fixture
def existing_key(home: Path) -> Path:
    key, pub = key_paths(home)
    key.parent.mkdir(parents=True)
    key.write_text("PRIVATE", encoding="utf-8")
    pub.write_text("ssh-ed25519 AAAAEXISTING me@example.com\n", encoding="utf-8")
    return pub


@pytest.fixture
def mock_github() -> Mock:
    client = Mock(spec=GitHubClient)
    client.create_repo.return_value = RepoInfo(
        full_name="alice/foo",
        html_url="https://github.com/alice/foo",
        clone_url="https://github.com/alice/foo.git",
        ssh_url="git@github.com:alice/foo.git",
    )
    client.add_ssh_key.return_value = KeyInfo(id=1, title="auto-key-test")
    return client


@pytest.fixture
def client_factory(mock_github: Mock) -> Callable[[str, str], Mock]:
    factory = Mock(return_value=mock_github)
    return factory
