from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import InstallCtx
from ..errors import ValidationError
from ..lib.apt_repo import compose_repo_line, write_repo_list
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class ProvisionRepositoryStep:
    """Install the vendor signing key, then point apt at the vendor repository."""

    step_id = "30_provision_repository"

    def _install_signing_key(self, ctx: InstallCtx) -> str:
        cfg = ctx.cfg
        keys = ctx.keys

        keys.ensure_dir(cfg.keyring_dir, 0o755)

        tmp = keys.fetch(cfg.key_url, cfg.keyring_dir)
        if not keys.validate(tmp):
            keys.discard(tmp)
            raise ValidationError(f"Downloaded file from {cfg.key_url} is not a valid GPG key")
        logger.info("Signing key validated")

        keys.install(tmp, cfg.keyring_path)
        logger.info("Signing key installed at %s", cfg.keyring_path)
        return cfg.keyring_path

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ctx.cfg

        keyring_path = self._install_signing_key(ctx)
        record_decision(state, "keyring_path", keyring_path)

        arch = ctx.platform.architecture()
        logger.info("Detected architecture: %s", arch)
        record_decision(state, "arch", arch)

        codename = ctx.platform.codename(cfg.os_release_path)
        logger.info("Detected OS codename: %s", codename)
        record_decision(state, "codename", codename)

        line = compose_repo_line(
            arch=arch,
            keyring_path=keyring_path,
            codename=codename,
            base_url=cfg.repo_base_url,
            channel=cfg.repo_channel,
        )
        write_repo_list(cfg.repo_list_path, line, dry_run=ctx.dry_run)
        record_decision(state, "repo_line", line)
        return state
