from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

# Ensure the repository root is on sys.path before importing project modules
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from docker_installer.config import InstallerConfig
from docker_installer.context import InstallCtx

from fakes import FakeKeyStore, FakePackageManager, FakePlatform, FakeProbe, FakeRuntime


@pytest.fixture(autouse=True)
def _reset_logging():
    root = logging.getLogger()
    before = list(root.handlers)
    yield
    for h in list(root.handlers):
        if h not in before:
            root.removeHandler(h)
            h.close()
    for attr in ("_docker_installer_configured", "_docker_installer_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)


@pytest.fixture
def host_paths(tmp_path):
    os_release = tmp_path / "os-release"
    os_release.write_text('NAME="Ubuntu"\nVERSION_CODENAME=jammy\nUBUNTU_CODENAME=jammy\n', encoding="utf-8")
    return {
        "keyring_dir": tmp_path / "etc/apt/keyrings",
        "sources_dir": tmp_path / "etc/apt/sources.list.d",
        "os_release": os_release,
    }


@pytest.fixture
def make_cfg(host_paths):
    def _make(**raw):
        base = {
            "os_release_path": str(host_paths["os_release"]),
            "repository": {
                "keyring_dir": str(host_paths["keyring_dir"]),
                "sources_dir": str(host_paths["sources_dir"]),
            },
        }
        base.update(raw)
        return InstallerConfig(raw=base).validate()

    return _make


@pytest.fixture
def make_ctx(make_cfg):
    def _make(cfg=None, **overrides):
        parts = {
            "probe": FakeProbe(),
            "packages": FakePackageManager(),
            "keys": FakeKeyStore(),
            "platform": FakePlatform(),
            "runtime": FakeRuntime(),
        }
        parts.update(overrides)
        return InstallCtx(cfg=cfg or make_cfg(), **parts)

    return _make
