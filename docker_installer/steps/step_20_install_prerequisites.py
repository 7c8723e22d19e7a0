from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import InstallCtx

logger = logging.getLogger(__name__)


class InstallRepoPrerequisitesStep:
    step_id = "20_install_repo_prerequisites"

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        packages = ctx.cfg.repo_prerequisites
        if not packages:
            logger.info("No repository prerequisites configured")
            return state

        ctx.packages.update()
        ctx.packages.install(packages)
        logger.info("Repository prerequisites installed: %s", " ".join(packages))
        return state
