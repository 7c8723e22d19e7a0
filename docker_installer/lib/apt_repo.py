from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def compose_repo_line(
    *,
    arch: str,
    keyring_path: str,
    codename: str,
    base_url: str,
    channel: str = "stable",
) -> str:
    """Build a one-line sources.list entry, e.g.

      deb [arch=amd64 signed-by=/etc/apt/keyrings/docker.asc] https://download.docker.com/linux/ubuntu jammy stable
    """

    return f"deb [arch={arch} signed-by={keyring_path}] {base_url} {codename} {channel}"


def write_repo_list(path: str, line: str, *, dry_run: bool = False) -> None:
    """Write the entry as the whole file content; reruns overwrite, never append."""

    p = Path(path)
    if dry_run:
        logger.info("Would write %s: %s", str(p), line)
        return
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(line + "\n", encoding="utf-8")
    logger.info("Configured apt repo %s: %s", str(p), line)
