from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..context import InstallCtx
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class RemoveLegacyPackagesStep:
    step_id = "10_remove_legacy_packages"

    def _installed_subset(self, ctx: InstallCtx) -> List[str]:
        found: List[str] = []
        for pkg in ctx.cfg.legacy_packages:
            if ctx.packages.is_installed(pkg):
                logger.info("Found conflicting package installed: %s", pkg)
                found.append(pkg)
            else:
                logger.info("Package '%s' is not installed, skipping", pkg)
        return found

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        to_remove = self._installed_subset(ctx)
        record_decision(state, "removed_packages", to_remove)

        if not to_remove:
            logger.info("No conflicting legacy packages found")
            return state

        ctx.packages.remove(to_remove)
        ctx.packages.autoremove(to_remove)
        logger.info("Removed legacy packages and unused dependencies: %s", " ".join(to_remove))
        return state
