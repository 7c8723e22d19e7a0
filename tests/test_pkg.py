from __future__ import annotations

from docker_installer.lib import pkg
from docker_installer.lib.command import CmdResult
from docker_installer.lib.pkg import AptPackageManager


def recorder(statuses=None):
    calls = []
    statuses = statuses or {}

    def _run(argv, **kwargs):
        argv = list(argv)
        calls.append((argv, kwargs))
        if argv[0] == "dpkg-query":
            rc, out = statuses.get(argv[-1], (1, ""))
            return CmdResult(argv, rc, out, "")
        return CmdResult(argv, 0, "", "")

    return _run, calls


def test_is_installed_reads_status(monkeypatch):
    run, calls = recorder(
        {
            "docker.io": (0, "install ok installed"),
            "runc": (0, "deinstall ok config-files"),
        }
    )
    monkeypatch.setattr(pkg, "run_cmd", run)
    apt = AptPackageManager()

    assert apt.is_installed("docker.io")
    assert not apt.is_installed("runc")
    assert not apt.is_installed("podman-docker")
    assert calls[0][0] == ["dpkg-query", "-W", "-f=${Status}", "docker.io"]
    assert calls[0][1]["check"] is False


def test_mutating_calls(monkeypatch):
    run, calls = recorder()
    monkeypatch.setattr(pkg, "run_cmd", run)
    apt = AptPackageManager(dry_run=True)

    apt.remove(["docker.io", "runc"])
    apt.autoremove(["docker.io", "runc"])
    apt.update()
    apt.install(["docker-ce"])

    argvs = [c[0] for c in calls]
    assert argvs == [
        ["apt-get", "remove", "-y", "docker.io", "runc"],
        ["apt-get", "autoremove", "-y", "docker.io", "runc"],
        ["apt-get", "update"],
        ["apt-get", "install", "-y", "docker-ce"],
    ]
    for _, kwargs in calls:
        assert kwargs["dry_run"] is True
        assert kwargs["env"]["DEBIAN_FRONTEND"] == "noninteractive"


def test_empty_package_lists_are_noops(monkeypatch):
    run, calls = recorder()
    monkeypatch.setattr(pkg, "run_cmd", run)
    apt = AptPackageManager()
    apt.remove([])
    apt.autoremove([])
    apt.install([])
    assert calls == []
