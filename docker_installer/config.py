from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import ConfigError

DEFAULT_REQUIRED_COMMANDS = ["apt-get", "curl", "gpg", "dpkg", "dpkg-query"]

# Previously published packages that conflict with docker-ce.
DEFAULT_LEGACY_PACKAGES = [
    "docker.io",
    "docker-doc",
    "docker-compose",
    "docker-compose-v2",
    "podman-docker",
    "containerd",
    "runc",
]

DEFAULT_REPO_PREREQUISITES = ["ca-certificates", "curl"]

DEFAULT_ENGINE_PACKAGES = [
    "docker-ce",
    "docker-ce-cli",
    "containerd.io",
    "docker-buildx-plugin",
    "docker-compose-plugin",
]

DEFAULT_BASE_URL = "https://download.docker.com/linux/ubuntu"

# Every settings property; validate() resolves each so section/type errors raise ConfigError.
VALIDATED_PROPERTIES = (
    "required_commands",
    "legacy_packages",
    "repo_prerequisites",
    "engine_packages",
    "repo_base_url",
    "repo_channel",
    "key_url",
    "keyring_path",
    "repo_list_path",
    "os_release_path",
    "engine_executable",
    "verification_image",
)


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{name} must be a mapping")
    return value


def _str_list(value: Any, key: str) -> List[str]:
    if not isinstance(value, list):
        raise ConfigError(f"{key} must be a list of strings")
    out: List[str] = []
    for v in value:
        if not isinstance(v, str):
            raise ConfigError(f"{key} entries must be strings, got {type(v).__name__}")
        s = v.strip()
        if not s:
            raise ConfigError(f"{key} contains an empty entry")
        out.append(s)
    return out


@dataclass(frozen=True)
class InstallerConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def required_commands(self) -> List[str]:
        v = self.raw.get("required_commands")
        return _str_list(v, "required_commands") if v is not None else list(DEFAULT_REQUIRED_COMMANDS)

    @property
    def legacy_packages(self) -> List[str]:
        v = _section(self.raw, "packages").get("remove")
        return _str_list(v, "packages.remove") if v is not None else list(DEFAULT_LEGACY_PACKAGES)

    @property
    def repo_prerequisites(self) -> List[str]:
        v = _section(self.raw, "packages").get("repo_prerequisites")
        return _str_list(v, "packages.repo_prerequisites") if v is not None else list(DEFAULT_REPO_PREREQUISITES)

    @property
    def engine_packages(self) -> List[str]:
        v = _section(self.raw, "packages").get("install")
        return _str_list(v, "packages.install") if v is not None else list(DEFAULT_ENGINE_PACKAGES)

    @property
    def repo_base_url(self) -> str:
        return str(_section(self.raw, "repository").get("base_url") or DEFAULT_BASE_URL).rstrip("/")

    @property
    def repo_channel(self) -> str:
        return str(_section(self.raw, "repository").get("channel") or "stable")

    @property
    def key_url(self) -> str:
        return str(_section(self.raw, "repository").get("key_url") or f"{self.repo_base_url}/gpg")

    @property
    def keyring_dir(self) -> str:
        return str(_section(self.raw, "repository").get("keyring_dir") or "/etc/apt/keyrings")

    @property
    def keyring_filename(self) -> str:
        return str(_section(self.raw, "repository").get("keyring_filename") or "docker.asc")

    @property
    def keyring_path(self) -> str:
        return str(Path(self.keyring_dir) / self.keyring_filename)

    @property
    def sources_dir(self) -> str:
        return str(_section(self.raw, "repository").get("sources_dir") or "/etc/apt/sources.list.d")

    @property
    def list_filename(self) -> str:
        return str(_section(self.raw, "repository").get("list_filename") or "docker.list")

    @property
    def repo_list_path(self) -> str:
        return str(Path(self.sources_dir) / self.list_filename)

    @property
    def os_release_path(self) -> str:
        return str(self.raw.get("os_release_path") or "/etc/os-release")

    @property
    def engine_executable(self) -> str:
        return str(_section(self.raw, "verification").get("executable") or "docker")

    @property
    def verification_image(self) -> str:
        return str(_section(self.raw, "verification").get("image") or "hello-world")

    def validate(self) -> "InstallerConfig":
        """Resolve every setting once so malformed values fail here, before any step runs."""

        for prop in VALIDATED_PROPERTIES:
            getattr(self, prop)

        overlap = sorted(set(self.legacy_packages) & set(self.engine_packages))
        if overlap:
            raise ConfigError(
                "packages.remove and packages.install must be disjoint; both contain: " + ", ".join(overlap)
            )
        return self

    def summary(self) -> Dict[str, Any]:
        return {
            "legacy_packages": self.legacy_packages,
            "engine_packages": self.engine_packages,
            "key_url": self.key_url,
            "keyring_path": self.keyring_path,
            "repo_list_path": self.repo_list_path,
            "verification_image": self.verification_image,
        }


def load_config(path: Optional[str]) -> InstallerConfig:
    if not path:
        return InstallerConfig().validate()

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError("installer config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("PyYAML is required to read the installer config") from e

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"{path} is not valid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping/object")

    return InstallerConfig(raw=raw).validate()
