"""
github_client.py

Responsibility: Isolate all direct GitHub REST API interaction.

This module must be the only place that:
- Constructs GitHub REST endpoints
- Sends HTTP requests to the API host
- Interprets GitHub API responses / error payloads

Only two endpoints are used, both on the authenticated account:
- POST /user/repos  (create a repository, no auto-init)
- POST /user/keys   (register an SSH public key)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import requests

from gitsetup.config import DEFAULT_API_URL


class GitHubError(RuntimeError):
    pass


@dataclass(frozen=True)
class RepoInfo:
    full_name: str
    html_url: str
    clone_url: str
    ssh_url: str


@dataclass(frozen=True)
class KeyInfo:
    id: int | None
    title: str


class GitHubClient:
    def __init__(self, token: str, api_base: str = DEFAULT_API_URL, *, timeout: float = 30) -> None:
        if not token.strip():
            raise GitHubError("GitHub token is required.")
        self._token = token
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self._token}",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "gitsetup",
        }

    def _request(self, method: str, path: str, *, json_body: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self._api_base}{path}"
        try:
            r = requests.request(method, url, headers=self._headers(), json=json_body, timeout=self._timeout)
        except requests.RequestException as e:
            raise GitHubError(f"GitHub API request failed {method} {path}: {e}") from e
        if not 200 <= r.status_code < 300:
            try:
                payload = r.json()
            except ValueError:
                payload = {"message": r.text}
            message = payload.get("message", payload) if isinstance(payload, dict) else payload
            raise GitHubError(f"GitHub API error {r.status_code} {method} {path}: {message}")
        if r.status_code == 204 or not r.content:
            return {}
        try:
            data = r.json()
        except ValueError as e:
            raise GitHubError(f"GitHub API returned a non-JSON body {r.status_code} {method} {path}") from e
        if not isinstance(data, dict):
            raise GitHubError(f"GitHub API returned an unexpected body {r.status_code} {method} {path}: {data!r}")
        return data

    def create_repo(self, *, name: str, private: bool) -> RepoInfo:
        """
        Create a repository under the authenticated user.

        `auto_init` is always off: the first commit comes from the local push.
        """
        body = {
            "name": name,
            "private": private,
            "auto_init": False,
        }
        data = self._request("POST", "/user/repos", json_body=body)
        return RepoInfo(
            full_name=str(data.get("full_name") or name),
            html_url=str(data.get("html_url") or ""),
            clone_url=str(data.get("clone_url") or ""),
            ssh_url=str(data.get("ssh_url") or ""),
        )

    def add_ssh_key(self, *, title: str, key: str) -> KeyInfo:
        data = self._request("POST", "/user/keys", json_body={"title": title, "key": key})
        return KeyInfo(id=data.get("id"), title=str(data.get("title") or title))
