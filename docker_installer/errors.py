from __future__ import annotations

import shlex
from typing import Sequence


class InstallerError(RuntimeError):
    """Base class for every fatal installer condition."""


class PreconditionError(InstallerError):
    pass


class CommandError(InstallerError):
    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        msg = f"Command failed ({returncode}): {' '.join(shlex.quote(a) for a in self.argv)}"
        if stderr.strip():
            msg += f"\n{stderr.strip()}"
        super().__init__(msg)


class ValidationError(InstallerError):
    pass


class PostconditionError(InstallerError):
    pass


class VerificationError(InstallerError):
    pass


class ConfigError(ValueError):
    pass
