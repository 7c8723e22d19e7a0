from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import InstallCtx

logger = logging.getLogger(__name__)

RULE = "-" * 50

POST_INSTALL_NOTES = [
    "Post-installation steps:",
    " To run docker as a non-root user, add the user to the 'docker' group:",
    "   sudo usermod -aG docker $USER",
    " Then log out and back in (or run 'newgrp docker' in the current shell)",
    " for the group change to take effect.",
]


def log_post_install_notes() -> None:
    logger.info(RULE)
    for line in POST_INSTALL_NOTES:
        logger.info(line)
    logger.info(RULE)


class ReportStep:
    step_id = "70_report"

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(RULE)
        logger.info("Docker installation completed successfully!")
        log_post_install_notes()
        return state
