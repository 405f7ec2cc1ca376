"""
gitsetup package

This package implements a one-shot "initialize and publish" CLI for a local
project directory.

Key responsibilities are split across modules:
- `config.py`: resolve `--name value` flags, env and YAML file into `SetupConfig`
- `local.py`: ensure `.git` exists and global identity is set (set-if-absent)
- `scaffold.py`: write README / .gitignore / LICENSE when absent
- `keys.py`: ensure an ed25519 keypair exists and decide SSH vs HTTPS
- `github_client.py`: isolated GitHub REST API interactions (repo creation / key upload)
- `provision.py`: fire-and-forget remote provisioning on a background pool
- `remote.py`: bind `origin`, commit, push
- `pipeline.py`: orchestration (init -> scaffold -> key -> provision -> link -> push)
- `cli.py`: CLI entrypoint and exit codes
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
