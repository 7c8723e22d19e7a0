from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, Optional

from .config import InstallerConfig, load_config
from .context import InstallCtx, build_host_ctx
from .errors import ConfigError
from .logging_utils import configure_logging
from .pipeline import PipelineResult, run_pipeline
from .state_store import new_state, save_state
from .steps import (
    CheckPreconditionsStep,
    CleanupVerificationStep,
    InstallEngineStep,
    InstallRepoPrerequisitesStep,
    ProvisionRepositoryStep,
    RemoveLegacyPackagesStep,
    ReportStep,
    VerifyInstallationStep,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        CheckPreconditionsStep(),
        RemoveLegacyPackagesStep(),
        InstallRepoPrerequisitesStep(),
        ProvisionRepositoryStep(),
        InstallEngineStep(),
        VerifyInstallationStep(),
        CleanupVerificationStep(),
        ReportStep(),
    ]


def run(
    cfg: InstallerConfig,
    *,
    ctx: Optional[InstallCtx] = None,
    state_path: Optional[str] = None,
    dry_run: bool = False,
) -> PipelineResult:
    """Run the install pipeline once. The run record is saved even on failure."""

    if ctx is None:
        ctx = build_host_ctx(cfg, dry_run=dry_run)

    state: Dict[str, Any] = new_state(cfg.summary(), dry_run=ctx.dry_run)

    logger.info("=== Docker installation started ===")
    try:
        result = run_pipeline(ctx=ctx, state=state, steps=build_steps())
    finally:
        if state_path:
            save_state(state_path, state)

    if result.ok:
        logger.info("=== Docker installation finished successfully ===")
    else:
        logger.error("=== Docker installation aborted at step %s ===", result.failed_step)
    return result


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="docker-installer", description="Install Docker Engine from the official apt repository.")
    p.add_argument("--config", default=None, help="YAML file overriding package lists, URLs and paths")
    p.add_argument("--log", default=None, help="Also write a detailed log to this file")
    p.add_argument("--state", default=None, help="Write a run record (json|yaml) to this path")
    p.add_argument("--dry-run", action="store_true", help="Log mutating commands without executing them")
    p.add_argument("--verbose", action="store_true", help="Log command output")

    args = p.parse_args(argv)

    configure_logging(log_path=args.log, level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        cfg = load_config(args.config)
    except (ConfigError, FileNotFoundError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    result = run(cfg, state_path=args.state, dry_run=bool(args.dry_run))
    return 0 if result.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
