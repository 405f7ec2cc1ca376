"""
provision.py

Responsibility: create the remote repository and register the local public
key, without holding up the rest of the run.

Both API calls are submitted to a small thread pool and the pipeline moves on
to linking and pushing immediately. The push can therefore race ahead of
repository creation; callers that need ordering call `wait()` first. A failed
call is logged as a warning and otherwise ignored. `close()` blocks until all
in-flight calls finish so the process never exits under them.
"""

from __future__ import annotations

import logging
import socket
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from gitsetup.github_client import GitHubClient, GitHubError
from gitsetup.keys import KeyState
from gitsetup.outcome import Outcome

log = logging.getLogger(__name__)

CREATE_REPO = "create_repo"
ADD_SSH_KEY = "add_ssh_key"

_WARNING_PREFIX = {
    CREATE_REPO: "Repo API create warning",
    ADD_SSH_KEY: "SSH key API add warning",
}


def key_title(hostname: str | None = None) -> str:
    return f"auto-key-{hostname or socket.gethostname()}"


class RemoteProvisioner:
    def __init__(self, client: GitHubClient, *, executor: ThreadPoolExecutor | None = None) -> None:
        self._client = client
        self._executor = executor or ThreadPoolExecutor(max_workers=2, thread_name_prefix="gitsetup-api")
        self._pending: list[Future[Outcome[Any]]] = []
        self.outcomes: dict[str, Outcome[Any]] = {}

    def __enter__(self) -> RemoteProvisioner:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def start(self, *, repo_name: str, private: bool, keys: KeyState, hostname: str | None = None) -> None:
        """Submit the API calls and return without waiting for them."""
        self._submit(CREATE_REPO, self._client.create_repo, name=repo_name, private=private)
        if not keys.use_ssh:
            return
        try:
            public_key = keys.read_public_key()
        except OSError as e:
            self._record(ADD_SSH_KEY, Outcome.failure(f"Cannot read {keys.public_key}: {e}"))
            return
        self._submit(ADD_SSH_KEY, self._client.add_ssh_key, title=key_title(hostname), key=public_key)

    def _submit(self, label: str, fn: Callable[..., Any], **kwargs: Any) -> None:
        self._pending.append(self._executor.submit(self._call, label, fn, kwargs))

    def _call(self, label: str, fn: Callable[..., Any], kwargs: dict[str, Any]) -> Outcome[Any]:
        try:
            outcome: Outcome[Any] = Outcome.success(fn(**kwargs))
        except GitHubError as e:
            outcome = Outcome.failure(str(e))
        except Exception as e:  # noqa: BLE001 - a background call may only warn
            outcome = Outcome.failure(f"{type(e).__name__}: {e}")
        self._record(label, outcome)
        return outcome

    def _record(self, label: str, outcome: Outcome[Any]) -> None:
        self.outcomes[label] = outcome
        if outcome.ok:
            log.info("GitHub API %s succeeded", label)
        else:
            log.warning("%s: %s", _WARNING_PREFIX[label], outcome.error)

    def wait(self) -> dict[str, Outcome[Any]]:
        for future in self._pending:
            future.result()
        return dict(self.outcomes)

    def close(self) -> dict[str, Outcome[Any]]:
        self._executor.shutdown(wait=True)
        return self.wait()

    def warnings(self) -> list[str]:
        return [
            f"{_WARNING_PREFIX[label]}: {outcome.error}"
            for label, outcome in self.outcomes.items()
            if not outcome.ok
        ]
