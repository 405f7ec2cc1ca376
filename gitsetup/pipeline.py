"""
pipeline.py

Responsibility: run the setup steps in order and collect what happened.

Order (each step depends on the side effects of the ones before it):
1) check git is available (the only fatal failure)
2) ensure `.git` and global identity
3) write scaffold files
4) decide SSH vs HTTPS, generating a key if needed
5) start remote provisioning (only with a token; not awaited)
6) link `origin`, commit, push

Collaborators are injectable so tests can run without git, ssh or network.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from gitsetup.config import REMOTE_NAME, SetupConfig
from gitsetup.git import Git, GitError, GitNotFoundError
from gitsetup.github_client import GitHubClient
from gitsetup.keys import KeyProvisioner, KeyState, https_only
from gitsetup.local import prepare_local
from gitsetup.outcome import Outcome
from gitsetup.provision import RemoteProvisioner
from gitsetup.remote import link_remote, publish, remote_url, web_url
from gitsetup.scaffold import ScaffoldResult, build_context, write_scaffold

log = logging.getLogger(__name__)

ClientFactory = Callable[[str, str], GitHubClient]


@dataclass
class SetupReport:
    initialized: bool = False
    identity_set: list[str] = field(default_factory=list)
    scaffold: ScaffoldResult = field(default_factory=ScaffoldResult)
    use_ssh: bool = False
    key_generated: bool = False
    remote_url: str = ""
    remote_action: str = ""
    committed: bool = False
    pushed: bool = False
    provisioning: dict[str, Outcome[Any]] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)


def _default_client(token: str, api_url: str) -> GitHubClient:
    return GitHubClient(token, api_url)


def run_setup(
    config: SetupConfig,
    *,
    workdir: str | Path | None = None,
    home: str | Path | None = None,
    git: Git | None = None,
    keys: KeyProvisioner | None = None,
    client_factory: ClientFactory = _default_client,
    hostname: str | None = None,
) -> SetupReport:
    """
    Run the whole pipeline against `workdir` (default: the current directory).

    Raises `GitNotFoundError` if git is unavailable and `ConfigError` if the
    owner handle is missing when the remote URL is built. Everything else is
    reported through `SetupReport.warnings`.
    """
    wd = Path(workdir) if workdir is not None else Path.cwd()
    git = git or Git(wd)
    report = SetupReport()

    git.version()

    local = prepare_local(git, name=config.owner, email=config.email)
    report.initialized = local.initialized
    report.identity_set = local.identity_set
    report.warnings.extend(local.warnings)

    context = build_context(repo_name=config.repo_name, owner=config.owner)
    report.scaffold = write_scaffold(destination_dir=wd, context=context, enabled=config.seed_files)

    if config.transport.wants_ssh:
        key_state = (keys or KeyProvisioner(home)).ensure(email=config.email)
    else:
        key_state = https_only(home)
    report.use_ssh = key_state.use_ssh
    report.key_generated = key_state.generated

    provisioner = _start_provisioning(config, key_state, client_factory, hostname=hostname)
    try:
        if provisioner is not None and config.wait_remote:
            provisioner.wait()

        owner = config.require("owner")
        url = remote_url(host=config.host, owner=owner, repo_name=config.repo_name, use_ssh=key_state.use_ssh)
        report.remote_url = url
        try:
            report.remote_action = link_remote(git, url)
        except GitNotFoundError:
            raise
        except GitError as e:
            report.warnings.append(f"Could not configure remote {REMOTE_NAME}: {e}")
            log.warning("Could not configure remote %s: %s", REMOTE_NAME, e)

        published = publish(git, use_ssh=key_state.use_ssh)
        report.committed = published.committed
        report.pushed = published.pushed
        report.warnings.extend(published.warnings)
    finally:
        if provisioner is not None:
            report.provisioning = provisioner.close()
            report.warnings.extend(provisioner.warnings())

    if report.pushed:
        log.info("Done. Repo: %s", web_url(host=config.host, owner=owner, repo_name=config.repo_name))
    return report


def _start_provisioning(
    config: SetupConfig,
    key_state: KeyState,
    client_factory: ClientFactory,
    *,
    hostname: str | None,
) -> RemoteProvisioner | None:
    # A blank token counts as absent.
    if not (config.token or "").strip():
        log.info("No token given; skipping GitHub repository creation")
        return None
    provisioner = RemoteProvisioner(client_factory(config.token, config.api_url))
    provisioner.start(
        repo_name=config.repo_name,
        private=config.private,
        keys=key_state,
        hostname=hostname,
    )
    return provisioner
