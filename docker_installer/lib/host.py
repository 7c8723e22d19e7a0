from __future__ import annotations

import os
import shutil
from typing import Optional


class LocalHostProbe:
    """Privilege and PATH checks against the running host."""

    def is_privileged(self) -> bool:
        return os.geteuid() == 0

    def which(self, name: str) -> Optional[str]:
        return shutil.which(name)
