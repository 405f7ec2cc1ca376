"""
config.py

Responsibility: Resolve command-line flags, environment and an optional YAML
config file into a single immutable `SetupConfig`.

This implementation intentionally stays permissive:
- Flags are `--name value` pairs; unknown flags are ignored.
- A flag given without a value falls back to its default.
- Nothing is validated up front. Stages that need a value call
  `SetupConfig.require(...)`, which is the only place a missing value fails.

Precedence: CLI flag > environment > YAML config file > built-in default.
"""

from __future__ import annotations

import argparse
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

DEFAULT_REPO_NAME = "new-repository"
DEFAULT_HOST = "github.com"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_BRANCH = "main"
REMOTE_NAME = "origin"
COMMIT_MESSAGE = "Initial commit"

CONFIG_ENV_VAR = "GITSETUP_CONFIG"
TOKEN_ENV_VAR = "GITHUB_TOKEN"


class ConfigError(ValueError):
    pass


class Visibility(Enum):
    PUBLIC = "public"
    PRIVATE = "private"

    @classmethod
    def parse(cls, raw: str) -> Visibility:
        # Anything other than an explicit "private" creates a public repo.
        return cls.PRIVATE if raw.strip().lower() == "private" else cls.PUBLIC


class Transport(Enum):
    AUTO = "auto"
    FORCE_SSH = "yes"
    FORCE_HTTPS = "no"

    @classmethod
    def parse(cls, raw: str) -> Transport:
        value = raw.strip().lower()
        if value == "auto":
            return cls.AUTO
        if value == "yes":
            return cls.FORCE_SSH
        return cls.FORCE_HTTPS

    @property
    def wants_ssh(self) -> bool:
        return self is not Transport.FORCE_HTTPS


@dataclass(frozen=True)
class SetupConfig:
    """Everything one run needs; built once by `resolve_config`."""

    repo_name: str = DEFAULT_REPO_NAME
    owner: str = ""
    email: str = ""
    visibility: Visibility = Visibility.PUBLIC
    transport: Transport = Transport.AUTO
    token: str | None = None
    seed_files: bool = True
    host: str = DEFAULT_HOST
    api_url: str = DEFAULT_API_URL
    wait_remote: bool = False
    log_level: str = "INFO"

    @property
    def private(self) -> bool:
        return self.visibility is Visibility.PRIVATE

    def require(self, name: str) -> str:
        """
        Return the named field as a non-empty string, or raise ConfigError.
        """
        known = {f.name for f in fields(self)}
        if name not in known:
            raise ConfigError(f"Unknown configuration field: {name}")
        value = getattr(self, name)
        text = "" if value is None else str(value).strip()
        if not text:
            flag = _FIELD_TO_FLAG.get(name, name)
            raise ConfigError(f"A value for --{flag} is required for this step.")
        return text


# SetupConfig field name -> flag name, where they differ
_FIELD_TO_FLAG: dict[str, str] = {
    "repo_name": "repo",
    "owner": "user",
    "seed_files": "init",
    "api_url": "api-url",
    "wait_remote": "wait",
    "log_level": "log-level",
}


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="gitsetup",
        description="Initialize the current directory as a git repo and publish it to GitHub",
        allow_abbrev=False,
    )
    p.add_argument("--repo", nargs="?", default=None, help=f"Repository name (default: {DEFAULT_REPO_NAME})")
    p.add_argument("--user", nargs="?", default=None, help="Owner handle on the git host")
    p.add_argument("--email", nargs="?", default=None, help="Contact email (git identity and SSH key comment)")
    p.add_argument("--visibility", nargs="?", default=None, help="public|private (default: public)")
    p.add_argument("--transport", nargs="?", default=None, help="auto|yes|no (yes=SSH, no=HTTPS; default: auto)")
    p.add_argument("--init", nargs="?", default=None, help="yes|no: seed README/.gitignore/LICENSE (default: yes)")
    p.add_argument("--token", nargs="?", default=None, help=f"GitHub token (or set env {TOKEN_ENV_VAR})")
    p.add_argument("--host", nargs="?", default=None, help=f"Git host for the remote URL (default: {DEFAULT_HOST})")
    p.add_argument("--api-url", nargs="?", default=None, help=f"Hosted API base URL (default: {DEFAULT_API_URL})")
    p.add_argument("--wait", nargs="?", default=None, help="yes|no: wait for API calls before pushing (default: no)")
    p.add_argument("--config", nargs="?", default=None, help=f"YAML config file (or set env {CONFIG_ENV_VAR})")
    p.add_argument("--log-level", nargs="?", default=None, help="Logging level (default: INFO)")
    return p


def default_config_path(home: Path | None = None) -> Path:
    return (home or Path.home()) / ".config" / "gitsetup" / "config.yaml"


def load_config_file(path: str | Path, *, required: bool) -> dict[str, Any]:
    """
    Load a YAML mapping of flag names to values.

    A missing file is an error only when the user named it explicitly.
    """
    p = Path(path).expanduser()
    if not p.exists():
        if required:
            raise ConfigError(f"Config file does not exist: {p}")
        return {}
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed reading config file: {p}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a mapping/object at the top level: {p}")
    return {str(k).replace("_", "-"): v for k, v in data.items()}


def _file_value(raw: Any) -> str | None:
    # YAML 1.1 turns yes/no into booleans; map them back to the flag spelling.
    if raw is None:
        return None
    if isinstance(raw, bool):
        return "yes" if raw else "no"
    text = str(raw).strip()
    return text or None


def _is_yes(raw: str) -> bool:
    return raw.strip().lower() == "yes"


def resolve_config(
    argv: Sequence[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> SetupConfig:
    """
    Resolve argv (flags), environ and the YAML config file into `SetupConfig`.
    """
    env = os.environ if environ is None else environ
    args, _unknown = _build_parser().parse_known_args(list(argv) if argv is not None else None)

    explicit_path = args.config or env.get(CONFIG_ENV_VAR)
    if explicit_path:
        file_values = load_config_file(explicit_path, required=True)
    else:
        file_values = load_config_file(default_config_path(home), required=False)

    def pick(flag: str, default: str) -> str:
        cli_value = getattr(args, flag.replace("-", "_"))
        if cli_value:
            return cli_value
        return _file_value(file_values.get(flag)) or default

    candidates = (args.token, env.get(TOKEN_ENV_VAR), _file_value(file_values.get("token")))
    token = next((t.strip() for t in candidates if t and t.strip()), None)

    return SetupConfig(
        repo_name=pick("repo", DEFAULT_REPO_NAME),
        owner=pick("user", ""),
        email=pick("email", ""),
        visibility=Visibility.parse(pick("visibility", "public")),
        transport=Transport.parse(pick("transport", "auto")),
        token=token,
        seed_files=pick("init", "yes").strip().lower() != "no",
        host=pick("host", DEFAULT_HOST).rstrip("/"),
        api_url=pick("api-url", DEFAULT_API_URL).rstrip("/"),
        wait_remote=_is_yes(pick("wait", "no")),
        log_level=pick("log-level", "INFO").upper(),
    )
