from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict

from ..errors import ValidationError
from .command import run_cmd

logger = logging.getLogger(__name__)

CODENAME_KEYS = ("UBUNTU_CODENAME", "VERSION_CODENAME")


def parse_os_release(text: str) -> Dict[str, str]:
    data: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, v = line.split("=", 1)
        data[k.strip()] = v.strip().strip('"').strip("'")
    return data


def read_codename(os_release_path: str) -> str:
    """Return the release codename, preferring UBUNTU_CODENAME.

    Derivatives such as Linux Mint carry their own VERSION_CODENAME but point
    UBUNTU_CODENAME at the upstream release the vendor repository serves.
    """

    p = Path(os_release_path)
    if not p.is_file():
        raise ValidationError(f"{os_release_path} not found; cannot determine OS codename")

    info = parse_os_release(p.read_text(encoding="utf-8", errors="ignore"))
    for key in CODENAME_KEYS:
        value = info.get(key)
        if value:
            return value

    raise ValidationError(f"Could not determine OS codename from {os_release_path}")


class DpkgPlatform:
    def architecture(self) -> str:
        r = run_cmd(["dpkg", "--print-architecture"])
        arch = r.stdout.strip()
        if not arch:
            raise ValidationError("Could not determine system architecture using dpkg")
        return arch

    def codename(self, os_release_path: str) -> str:
        return read_codename(os_release_path)
