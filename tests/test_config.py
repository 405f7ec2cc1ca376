"""Unit tests for flag / env / YAML resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from gitsetup.config import (
    DEFAULT_API_URL,
    DEFAULT_HOST,
    DEFAULT_REPO_NAME,
    ConfigError,
    SetupConfig,
    Transport,
    Visibility,
    resolve_config,
)


def test_defaults_when_no_flags(home: Path) -> None:
    config = resolve_config([], environ={}, home=home)

    assert config == SetupConfig()
    assert config.repo_name == DEFAULT_REPO_NAME
    assert config.visibility is Visibility.PUBLIC
    assert config.transport is Transport.AUTO
    assert config.token is None
    assert config.seed_files is True
    assert config.host == DEFAULT_HOST
    assert config.api_url == DEFAULT_API_URL


def test_all_flags(home: Path) -> None:
    config = resolve_config(
        [
            "--repo", "foo",
            "--user", "alice",
            "--email", "a@example.com",
            "--visibility", "private",
            "--transport", "yes",
            "--init", "no",
            "--token", "t0k",
            "--wait", "yes",
        ],
        environ={},
        home=home,
    )

    assert config.repo_name == "foo"
    assert config.owner == "alice"
    assert config.email == "a@example.com"
    assert config.private is True
    assert config.transport is Transport.FORCE_SSH
    assert config.seed_files is False
    assert config.token == "t0k"
    assert config.wait_remote is True


def test_unknown_flags_are_ignored(home: Path) -> None:
    config = resolve_config(["--colour", "blue", "--repo", "foo", "--verbose"], environ={}, home=home)
    assert config.repo_name == "foo"


def test_flag_without_value_falls_back_to_default(home: Path) -> None:
    config = resolve_config(["--repo", "--user", "alice"], environ={}, home=home)
    assert config.repo_name == DEFAULT_REPO_NAME
    assert config.owner == "alice"

    trailing = resolve_config(["--user"], environ={}, home=home)
    assert trailing.owner == ""


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("auto", Transport.AUTO),
        ("yes", Transport.FORCE_SSH),
        ("no", Transport.FORCE_HTTPS),
        ("YES", Transport.FORCE_SSH),
        ("maybe", Transport.FORCE_HTTPS),
    ],
)
def test_transport_values(raw: str, expected: Transport) -> None:
    assert Transport.parse(raw) is expected


def test_visibility_other_than_private_is_public() -> None:
    assert Visibility.parse("secret") is Visibility.PUBLIC
    assert Visibility.parse("PRIVATE") is Visibility.PRIVATE


def test_init_anything_but_no_enables_seeding(home: Path) -> None:
    assert resolve_config(["--init", "maybe"], environ={}, home=home).seed_files is True
    assert resolve_config(["--init", "NO"], environ={}, home=home).seed_files is False


def test_token_from_environment(home: Path) -> None:
    config = resolve_config([], environ={"GITHUB_TOKEN": "from-env"}, home=home)
    assert config.token == "from-env"

    flagged = resolve_config(["--token", "from-flag"], environ={"GITHUB_TOKEN": "from-env"}, home=home)
    assert flagged.token == "from-flag"


def test_default_config_file_is_read(home: Path) -> None:
    cfg = home / ".config" / "gitsetup" / "config.yaml"
    cfg.parent.mkdir(parents=True)
    cfg.write_text(
        "\n".join(
            [
                "user: alice",
                "email: a@example.com",
                "transport: no",
                "init: no",
                "api_url: https://ghe.example.com/api/v3/",
                "",
            ]
        ),
        encoding="utf-8",
    )

    config = resolve_config(["--repo", "foo"], environ={}, home=home)

    assert config.repo_name == "foo"
    assert config.owner == "alice"
    assert config.email == "a@example.com"
    # YAML reads bare yes/no as booleans.
    assert config.transport is Transport.FORCE_HTTPS
    assert config.seed_files is False
    assert config.api_url == "https://ghe.example.com/api/v3"


def test_cli_flag_beats_config_file(tmp_path: Path, home: Path) -> None:
    cfg = tmp_path / "custom.yaml"
    cfg.write_text("user: from-file\ntoken: file-token\n", encoding="utf-8")

    config = resolve_config(["--config", str(cfg), "--user", "from-flag"], environ={}, home=home)

    assert config.owner == "from-flag"
    assert config.token == "file-token"


def test_config_file_from_environment(tmp_path: Path, home: Path) -> None:
    cfg = tmp_path / "env.yaml"
    cfg.write_text("repo: env-repo\n", encoding="utf-8")

    config = resolve_config([], environ={"GITSETUP_CONFIG": str(cfg)}, home=home)
    assert config.repo_name == "env-repo"


def test_explicit_missing_config_file_is_an_error(tmp_path: Path, home: Path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        resolve_config(["--config", str(tmp_path / "nope.yaml")], environ={}, home=home)


def test_config_file_must_be_a_mapping(tmp_path: Path, home: Path) -> None:
    cfg = tmp_path / "list.yaml"
    cfg.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        resolve_config(["--config", str(cfg)], environ={}, home=home)


def test_require_reports_the_flag_name() -> None:
    config = SetupConfig(owner="  ")
    with pytest.raises(ConfigError, match="--user"):
        config.require("owner")
    assert SetupConfig(owner="alice").require("owner") == "alice"


def test_blank_token_counts_as_absent(home: Path) -> None:
    assert resolve_config(["--token", "   "], environ={}, home=home).token is None
    assert resolve_config([], environ={"GITHUB_TOKEN": " \t"}, home=home).token is None

    # A blank flag does not hide a usable token further down the chain.
    fallback = resolve_config(["--token", "  "], environ={"GITHUB_TOKEN": " from-env "}, home=home)
    assert fallback.token == "from-env"
