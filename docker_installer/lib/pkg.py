from __future__ import annotations

import logging
from typing import Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)

APT_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


class AptPackageManager:
    """apt-get/dpkg backed package operations.

    Queries always execute; mutating calls honour dry_run.
    """

    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def is_installed(self, package: str) -> bool:
        r = run_cmd(["dpkg-query", "-W", "-f=${Status}", package], check=False)
        return r.returncode == 0 and "ok installed" in r.stdout

    def remove(self, packages: Sequence[str]) -> None:
        if not packages:
            return
        run_cmd(["apt-get", "remove", "-y", *packages], env=APT_ENV, dry_run=self.dry_run)

    def autoremove(self, packages: Sequence[str]) -> None:
        if not packages:
            return
        run_cmd(["apt-get", "autoremove", "-y", *packages], env=APT_ENV, dry_run=self.dry_run)

    def update(self) -> None:
        run_cmd(["apt-get", "update"], env=APT_ENV, dry_run=self.dry_run)

    def install(self, packages: Sequence[str]) -> None:
        if not packages:
            return
        run_cmd(["apt-get", "install", "-y", *packages], env=APT_ENV, dry_run=self.dry_run)
