"""
keys.py

Responsibility: decide whether SSH transport is usable, generating an ed25519
keypair under `~/.ssh` when none exists.

Key generation and agent registration are best-effort. If `ssh-keygen` is
missing or fails, the run simply falls back to HTTPS.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from gitsetup.outcome import Outcome

log = logging.getLogger(__name__)

KEY_NAME = "id_ed25519"


@dataclass(frozen=True)
class KeyState:
    use_ssh: bool
    private_key: Path
    public_key: Path
    generated: bool = False

    def read_public_key(self) -> str:
        return self.public_key.read_text(encoding="utf-8").strip()


def key_paths(home: Path) -> tuple[Path, Path]:
    key = home / ".ssh" / KEY_NAME
    return key, key.with_name(KEY_NAME + ".pub")


def _attempt(cmd: list[str]) -> Outcome[str]:
    try:
        proc = subprocess.run(
            cmd,
            check=True,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
    except FileNotFoundError:
        return Outcome.failure(f"{cmd[0]} not found in PATH")
    except subprocess.CalledProcessError as e:
        return Outcome.failure(f"{cmd[0]} exited with {e.returncode}: {(e.stderr or '').strip()}")
    return Outcome.success(proc.stdout.strip())


class KeyProvisioner:
    def __init__(self, home: str | Path | None = None) -> None:
        self.home = Path(home) if home is not None else Path.home()

    def generate(self, key: Path, *, comment: str) -> Outcome[str]:
        try:
            key.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return Outcome.failure(f"Cannot create {key.parent}: {e}")
        return _attempt(["ssh-keygen", "-t", "ed25519", "-C", comment, "-N", "", "-f", str(key)])

    def add_to_agent(self, key: Path) -> Outcome[str]:
        return _attempt(["ssh-add", str(key)])

    def ensure(self, *, email: str) -> KeyState:
        """
        Make sure `~/.ssh/id_ed25519.pub` exists and register the key with the agent.

        `use_ssh` is True iff the public key exists afterwards.
        """
        key, pub = key_paths(self.home)
        generated = False
        if not pub.exists():
            out = self.generate(key, comment=email)
            if out.ok:
                generated = True
                log.info("Generated SSH key %s", key)
            else:
                log.debug("SSH key generation failed: %s", out.error)

        use_ssh = pub.exists()
        if use_ssh:
            agent = self.add_to_agent(key)
            if not agent.ok:
                log.debug("ssh-add failed: %s", agent.error)
        else:
            log.info("No SSH public key available; using HTTPS")
        return KeyState(use_ssh=use_ssh, private_key=key, public_key=pub, generated=generated)


def https_only(home: str | Path | None = None) -> KeyState:
    """KeyState for runs that never attempt SSH."""
    key, pub = key_paths(Path(home) if home is not None else Path.home())
    return KeyState(use_ssh=False, private_key=key, public_key=pub)
