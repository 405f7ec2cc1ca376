"""
scaffold.py

Responsibility: Seed a working directory with starter files.

Rules:
- Templates are fixed strings rendered with Jinja2 (repo name, owner, year).
- A file that already exists is never touched.
- Output is UTF-8 without a byte-order mark, with `\\n` newlines.

This module intentionally does NOT know about GitHub, git, or CLI parsing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from jinja2 import Environment, StrictUndefined

log = logging.getLogger(__name__)


class RenderError(RuntimeError):
    pass


README_TEMPLATE = "# {{ repo_name }}\n\nCreated by automated setup."

GITIGNORE_TEMPLATE = "\n".join(
    [
        "node_modules/",
        "dist/",
        "build/",
        ".vscode/",
        ".DS_Store",
        "*.log",
    ]
)

LICENSE_TEMPLATE = """MIT License

Copyright (c) {{ year }} {{ owner }}

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in
all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
THE SOFTWARE.
"""

# Written in this order; relative to the destination directory.
SCAFFOLD_FILES: dict[str, str] = {
    "README.md": README_TEMPLATE,
    ".gitignore": GITIGNORE_TEMPLATE,
    "LICENSE": LICENSE_TEMPLATE,
}


@dataclass
class ScaffoldResult:
    written: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def build_context(*, repo_name: str, owner: str, year: int | None = None) -> dict[str, Any]:
    return {
        "repo_name": repo_name,
        "owner": owner,
        "year": year if year is not None else date.today().year,
    }


def render_file(template_text: str, context: dict[str, Any]) -> str:
    env = Environment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    try:
        return env.from_string(template_text).render(**context)
    except Exception as e:  # noqa: BLE001 - surface as RenderError
        raise RenderError("Failed rendering scaffold template") from e


def write_utf8(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8", newline="\n")


def write_scaffold(
    *,
    destination_dir: str | Path,
    context: dict[str, Any],
    enabled: bool = True,
) -> ScaffoldResult:
    """
    Write each scaffold file under destination_dir unless it already exists.

    With `enabled=False` nothing is written and every file counts as skipped.
    """
    dst_dir = Path(destination_dir)
    result = ScaffoldResult()

    for rel, template_text in SCAFFOLD_FILES.items():
        target = dst_dir / rel
        if not enabled or target.exists():
            result.skipped.append(rel)
            continue
        write_utf8(target, render_file(template_text, context))
        result.written.append(rel)
        log.info("Wrote %s", rel)

    if not enabled:
        log.debug("Scaffold files disabled (--init no)")
    return result
