from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from .config import InstallerConfig
from .lib.container import DockerRuntime
from .lib.host import LocalHostProbe
from .lib.hostinfo import DpkgPlatform
from .lib.keys import GpgKeyStore
from .lib.pkg import AptPackageManager


class HostProbe(Protocol):
    def is_privileged(self) -> bool:
        ...

    def which(self, name: str) -> Optional[str]:
        ...


class PackageManager(Protocol):
    def is_installed(self, package: str) -> bool:
        ...

    def remove(self, packages: Sequence[str]) -> None:
        ...

    def autoremove(self, packages: Sequence[str]) -> None:
        ...

    def update(self) -> None:
        ...

    def install(self, packages: Sequence[str]) -> None:
        ...


class KeyStore(Protocol):
    def ensure_dir(self, path: str, mode: int = 0o755) -> None:
        ...

    def fetch(self, url: str, directory: str) -> str:
        ...

    def validate(self, path: str) -> bool:
        ...

    def discard(self, path: str) -> None:
        ...

    def install(self, tmp_path: str, dest: str) -> None:
        ...


class PlatformInfo(Protocol):
    def architecture(self) -> str:
        ...

    def codename(self, os_release_path: str) -> str:
        ...


class ContainerRuntime(Protocol):
    def run(self, image: str) -> int:
        ...

    def containers_from(self, image: str) -> List[str]:
        ...

    def remove_containers(self, container_ids: Sequence[str]) -> int:
        ...

    def image_exists(self, image: str) -> bool:
        ...

    def remove_image(self, image: str) -> int:
        ...


@dataclass(frozen=True)
class InstallCtx:
    cfg: InstallerConfig
    probe: HostProbe
    packages: PackageManager
    keys: KeyStore
    platform: PlatformInfo
    runtime: ContainerRuntime
    dry_run: bool = False


def build_host_ctx(cfg: InstallerConfig, *, dry_run: bool = False) -> InstallCtx:
    """Wire the real OS-backed capabilities."""

    return InstallCtx(
        cfg=cfg,
        probe=LocalHostProbe(),
        packages=AptPackageManager(dry_run=dry_run),
        keys=GpgKeyStore(dry_run=dry_run),
        platform=DpkgPlatform(),
        runtime=DockerRuntime(executable=cfg.engine_executable, dry_run=dry_run),
        dry_run=dry_run,
    )
