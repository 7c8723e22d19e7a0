from __future__ import annotations

import logging
from typing import List, Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)


class DockerRuntime:
    """Thin wrapper over the docker CLI for the verification workload."""

    def __init__(self, *, executable: str = "docker", dry_run: bool = False) -> None:
        self.executable = executable
        self.dry_run = dry_run

    def run(self, image: str) -> int:
        r = run_cmd([self.executable, "run", image], check=False, dry_run=self.dry_run)
        for line in r.stdout.strip().splitlines():
            logger.info("  %s", line)
        if r.returncode != 0 and r.stderr.strip():
            logger.error("%s", r.stderr.strip())
        return r.returncode

    def containers_from(self, image: str) -> List[str]:
        r = run_cmd(
            [self.executable, "ps", "-aq", "--filter", f"ancestor={image}"],
            dry_run=self.dry_run,
        )
        return [c for c in r.stdout.split() if c]

    def remove_containers(self, container_ids: Sequence[str]) -> int:
        if not container_ids:
            return 0
        r = run_cmd([self.executable, "rm", *container_ids], check=False, dry_run=self.dry_run)
        return r.returncode

    def image_exists(self, image: str) -> bool:
        r = run_cmd([self.executable, "image", "inspect", image], check=False, dry_run=self.dry_run)
        return r.returncode == 0

    def remove_image(self, image: str) -> int:
        r = run_cmd([self.executable, "image", "rm", image], check=False, dry_run=self.dry_run)
        return r.returncode
