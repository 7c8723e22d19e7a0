from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import InstallCtx
from ..errors import CommandError
from ..state_store import record_decision, record_warning

logger = logging.getLogger(__name__)


class CleanupVerificationStep:
    """Best-effort removal of the verification containers and image. Never fails the run."""

    step_id = "60_cleanup_verification"

    def _remove_containers(self, ctx: InstallCtx, image: str) -> bool:
        ids = ctx.runtime.containers_from(image)
        if not ids:
            logger.info("No '%s' containers found", image)
            return True

        logger.info("Removing containers: %s", " ".join(ids))
        status = ctx.runtime.remove_containers(ids)
        if status != 0:
            logger.error("Failed to remove '%s' containers (status %s)", image, status)
            return False
        logger.info("Removed verification containers")
        return True

    def _remove_image(self, ctx: InstallCtx, image: str) -> bool:
        if not ctx.runtime.image_exists(image):
            logger.info("'%s' image not present locally; skipping removal", image)
            return True

        status = ctx.runtime.remove_image(image)
        if status != 0:
            logger.error("Failed to remove '%s' image (status %s)", image, status)
            return False
        logger.info("Removed '%s' image", image)
        return True

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        image = ctx.cfg.verification_image
        results: Dict[str, bool] = {}

        for name, action in (("containers", self._remove_containers), ("image", self._remove_image)):
            try:
                results[name] = action(ctx, image)
            except CommandError as e:
                logger.error("Cleanup of %s failed: %s", name, e)
                results[name] = False
            if not results[name]:
                record_warning(state, {"cleanup": name, "image": image})

        record_decision(state, "cleanup", results)
        logger.info("Verification artifact cleanup finished")
        return state
