from __future__ import annotations

import json

from docker_installer import main as main_mod
from docker_installer.config import InstallerConfig
from docker_installer.context import build_host_ctx
from docker_installer.lib import container, host, hostinfo, keys, pkg
from docker_installer.lib.apt_repo import compose_repo_line
from docker_installer.lib.command import CmdResult
from docker_installer.main import build_steps, main, run

from fakes import FakePackageManager, FakeProbe, FakeRuntime


def test_step_order():
    assert [s.step_id for s in build_steps()] == [
        "00_check_preconditions",
        "10_remove_legacy_packages",
        "20_install_repo_prerequisites",
        "30_provision_repository",
        "40_install_engine",
        "50_verify_installation",
        "60_cleanup_verification",
        "70_report",
    ]


def test_clean_host_end_to_end(make_ctx, host_paths, tmp_path):
    ctx = make_ctx()
    state_path = tmp_path / "run.json"

    result = run(ctx.cfg, ctx=ctx, state_path=str(state_path))

    assert result.ok
    keyring = host_paths["keyring_dir"] / "docker.asc"
    assert (host_paths["sources_dir"] / "docker.list").read_text(encoding="utf-8") == (
        f"deb [arch=amd64 signed-by={keyring}] https://download.docker.com/linux/ubuntu jammy stable\n"
    )
    # Only the verification run touched the runtime; cleanup left nothing behind.
    assert ctx.runtime.containers == {}
    assert ctx.runtime.images == set()
    # Clean host: no removal calls.
    assert not [c for c in ctx.packages.calls if c[0] in {"remove", "autoremove"}]

    record = json.loads(state_path.read_text(encoding="utf-8"))
    assert record["execution"]["failed_step"] is None
    assert record["execution"]["ran_steps"][-1] == "70_report"
    assert record["execution"]["decisions"]["arch"] == "amd64"


def test_default_paths_end_to_end_line():
    cfg = InstallerConfig()
    assert compose_repo_line(
        arch="amd64",
        keyring_path=cfg.keyring_path,
        codename="jammy",
        base_url=cfg.repo_base_url,
        channel=cfg.repo_channel,
    ) == "deb [arch=amd64 signed-by=/etc/apt/keyrings/docker.asc] https://download.docker.com/linux/ubuntu jammy stable"


def test_verification_failure(make_ctx, tmp_path, caplog):
    runtime = FakeRuntime(run_status=1)
    ctx = make_ctx(runtime=runtime)
    state_path = tmp_path / "run.json"

    with caplog.at_level("INFO"):
        result = run(ctx.cfg, ctx=ctx, state_path=str(state_path))

    assert not result.ok
    assert result.failed_step == "50_verify_installation"
    # Cleanup never ran: the container from the failed run is still there.
    assert [c[0] for c in runtime.calls] == ["run"]
    assert runtime.containers
    assert caplog.text.count("sudo usermod -aG docker $USER") == 1
    assert "completed successfully" not in caplog.text

    record = json.loads(state_path.read_text(encoding="utf-8"))
    assert record["execution"]["failed_step"] == "50_verify_installation"


def test_not_root_stops_before_any_mutation(make_ctx):
    packages = FakePackageManager(installed=["docker.io"])
    ctx = make_ctx(probe=FakeProbe(privileged=False), packages=packages)
    result = run(ctx.cfg, ctx=ctx)
    assert result.failed_step == "00_check_preconditions"
    assert packages.calls == []


def test_main_exit_codes(make_ctx, monkeypatch, tmp_path):
    ctx = make_ctx()
    monkeypatch.setattr(main_mod, "build_host_ctx", lambda cfg, dry_run=False: ctx)
    monkeypatch.setattr(main_mod, "load_config", lambda path: ctx.cfg)
    assert main([]) == 0

    failing = make_ctx(probe=FakeProbe(missing=["gpg"]))
    monkeypatch.setattr(main_mod, "build_host_ctx", lambda cfg, dry_run=False: failing)
    assert main(["--state", str(tmp_path / "run.yaml")]) == 1
    assert (tmp_path / "run.yaml").exists()


def test_main_rejects_bad_config(tmp_path):
    p = tmp_path / "installer.yaml"
    p.write_text("packages:\n  remove: [docker-ce]\n  install: [docker-ce]\n", encoding="utf-8")
    assert main(["--config", str(p)]) == 1
    assert main(["--config", str(tmp_path / "missing.yaml")]) == 1


def test_main_rejects_malformed_sections(tmp_path):
    p = tmp_path / "installer.yaml"
    p.write_text("packages: [docker.io]\n", encoding="utf-8")
    assert main(["--config", str(p)]) == 1
    p.write_text("repository: https://example.invalid\n", encoding="utf-8")
    assert main(["--config", str(p)]) == 1


def test_dry_run_with_host_capabilities(make_cfg, host_paths, monkeypatch):
    mutating = []

    def fake_run(argv, **kwargs):
        argv = list(argv)
        if kwargs.get("dry_run"):
            mutating.append(argv)
            return CmdResult(argv, 0, "", "")
        if argv == ["dpkg", "--print-architecture"]:
            return CmdResult(argv, 0, "amd64\n", "")
        if argv[0] == "dpkg-query":
            return CmdResult(argv, 1, "", "no packages found")
        raise AssertionError(f"unexpected real command {argv}")

    monkeypatch.setattr(host.os, "geteuid", lambda: 0)
    monkeypatch.setattr(host.shutil, "which", lambda name: f"/usr/bin/{name}")
    for mod in (pkg, keys, hostinfo, container):
        monkeypatch.setattr(mod, "run_cmd", fake_run)

    cfg = make_cfg()
    ctx = build_host_ctx(cfg, dry_run=True)
    result = run(cfg, ctx=ctx)

    assert result.ok
    assert result.ran_steps[-1] == "70_report"
    assert not host_paths["keyring_dir"].exists()
    assert not host_paths["sources_dir"].exists()
    assert ["apt-get", "install", "-y", *cfg.engine_packages] in mutating
    assert ["docker", "run", "hello-world"] in mutating
    assert result.state["execution"]["decisions"]["repo_line"].endswith(" jammy stable")


def test_dry_run_still_requires_root(make_cfg, monkeypatch):
    monkeypatch.setattr(host.os, "geteuid", lambda: 1000)
    cfg = make_cfg()
    result = run(cfg, ctx=build_host_ctx(cfg, dry_run=True))
    assert result.failed_step == "00_check_preconditions"
