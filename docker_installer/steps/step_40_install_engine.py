from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import InstallCtx
from ..errors import PostconditionError

logger = logging.getLogger(__name__)


class InstallEngineStep:
    step_id = "40_install_engine"

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ctx.cfg

        # Refresh against the repository configured in the previous step.
        ctx.packages.update()
        ctx.packages.install(cfg.engine_packages)

        if ctx.dry_run:
            logger.info("Dry run: skipping check for '%s' on PATH", cfg.engine_executable)
            return state

        if not ctx.probe.which(cfg.engine_executable):
            raise PostconditionError(
                f"Packages installed but '{cfg.engine_executable}' is not on PATH"
            )
        logger.info("Docker Engine installed: %s", " ".join(cfg.engine_packages))
        return state
