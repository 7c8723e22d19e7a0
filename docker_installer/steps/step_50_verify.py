from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import InstallCtx
from ..errors import VerificationError
from .step_70_report import log_post_install_notes

logger = logging.getLogger(__name__)


class VerifyInstallationStep:
    step_id = "50_verify_installation"

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        image = ctx.cfg.verification_image
        logger.info("Running '%s' container", image)

        status = ctx.runtime.run(image)
        if status != 0:
            logger.error("Verification failed: '%s' container exited with status %s", image, status)
            log_post_install_notes()
            raise VerificationError(f"'{image}' container did not run successfully (status {status})")

        logger.info("Verified installation by running '%s'", image)
        return state
