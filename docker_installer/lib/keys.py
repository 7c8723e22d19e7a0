from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

from .command import run_cmd

logger = logging.getLogger(__name__)


class GpgKeyStore:
    """Download, validate and install a repository signing key.

    The temporary download lives in the destination directory so the final
    move is a same-filesystem rename: the keyring path either holds the old
    content or the complete new key, never a partial file.
    """

    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def ensure_dir(self, path: str, mode: int = 0o755) -> None:
        if self.dry_run:
            logger.info("Would create directory %s (mode %o)", path, mode)
            return
        p = Path(path)
        p.mkdir(parents=True, exist_ok=True)
        os.chmod(p, mode)

    def fetch(self, url: str, directory: str) -> str:
        if self.dry_run:
            tmp = str(Path(directory) / ".key-download")
            run_cmd(["curl", "-fsSL", url, "-o", tmp], dry_run=True)
            return tmp

        fd, tmp = tempfile.mkstemp(prefix=".key-", suffix=".tmp", dir=directory)
        os.close(fd)
        logger.info("Downloading signing key %s -> %s", url, tmp)
        try:
            run_cmd(["curl", "-fsSL", url, "-o", tmp])
        except Exception:
            self.discard(tmp)
            raise
        return tmp

    def validate(self, path: str) -> bool:
        """Structural check only: the file must dearmor into a keyring."""
        if self.dry_run:
            return True
        r = run_cmd(["gpg", "--batch", "--yes", "--dearmor", "--output", "/dev/null", path], check=False)
        return r.returncode == 0

    def discard(self, path: str) -> None:
        if self.dry_run:
            return
        Path(path).unlink(missing_ok=True)

    def install(self, tmp_path: str, dest: str) -> None:
        if self.dry_run:
            logger.info("Would install %s -> %s", tmp_path, dest)
            return
        try:
            mode = os.stat(tmp_path).st_mode
            os.chmod(tmp_path, stat.S_IMODE(mode) | 0o444)
            os.replace(tmp_path, dest)
        except Exception:
            self.discard(tmp_path)
            raise
