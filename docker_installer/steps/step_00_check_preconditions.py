from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import InstallCtx
from ..errors import PreconditionError

logger = logging.getLogger(__name__)


class CheckPreconditionsStep:
    step_id = "00_check_preconditions"

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        # Privilege first, then tools in list order; stop at the first miss.
        if not ctx.probe.is_privileged():
            raise PreconditionError("This installer must be run as root (or via sudo).")
        logger.info("Running with root privileges")

        for cmd in ctx.cfg.required_commands:
            if not ctx.probe.which(cmd):
                raise PreconditionError(
                    f"Required command '{cmd}' is not installed or not on PATH. Install it first."
                )
        logger.info("All required tools present: %s", " ".join(ctx.cfg.required_commands))
        return state
