"""
cli.py

Responsibility: CLI entrypoint for gitsetup.

High-level flow (single command, run from the project directory):
1) Resolve flags / env / config file -> `SetupConfig`
2) Run the pipeline (`pipeline.run_setup`)
3) Map the result to an exit code

Exit codes:
- 0: finished, possibly with warnings (a failed push is only a warning)
- 1: git is missing or unusable
- 2: a required value was empty, or the config file could not be read
"""

from __future__ import annotations

import logging
import sys

from gitsetup.config import ConfigError, resolve_config
from gitsetup.git import GitError, GitNotFoundError
from gitsetup.logging_setup import configure_logging
from gitsetup.pipeline import run_setup

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_GIT_UNAVAILABLE = 1
EXIT_CONFIG = 2


def main(argv: list[str] | None = None) -> int:
    try:
        config = resolve_config(argv)
    except ConfigError as e:
        configure_logging("INFO")
        log.error("%s", e)
        return EXIT_CONFIG

    configure_logging(config.log_level)

    try:
        report = run_setup(config)
    except GitNotFoundError as e:
        log.error("git not found in PATH (%s)", e)
        return EXIT_GIT_UNAVAILABLE
    except GitError as e:
        log.error("%s", e)
        return EXIT_GIT_UNAVAILABLE
    except ConfigError as e:
        log.error("%s", e)
        return EXIT_CONFIG

    if report.warnings:
        log.info("Finished with %d warning(s).", len(report.warnings))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
