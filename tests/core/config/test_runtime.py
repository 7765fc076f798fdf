# tests/core/config/test_runtime.py
"""
Testes da derivação de campos de runtime.

Os testes asseguram que:
- `work_path` reflete o diretório de trabalho do processo
- `host` vem do probe injetado
- `log_path` é sempre `log_root + "/" + host + "-" + project_name`
- falhas do probe viram `RuntimeProbeError`
"""

import os
import socket

import pytest

from strata_config.core.config.base import BaseConfig
from strata_config.core.config.errors import RuntimeProbeError
from strata_config.core.config.runtime import (
    compose_log_path,
    derive_runtime_fields,
    probe_outbound_ip,
)


def test_derive_sets_runtime_fields(tmp_path, monkeypatch, host_probe, fixed_host):
    monkeypatch.chdir(tmp_path)
    base = BaseConfig(project_name="back-normal", log_root="/var/log/app")

    derive_runtime_fields(base, host_probe=host_probe)

    assert base.work_path == os.getcwd()
    assert base.host == fixed_host
    assert base.log_path == "/var/log/app/10.0.0.7-back-normal"


@pytest.mark.parametrize(
    "root, host, name",
    [
        ("/logs", "192.168.0.2", "svc"),
        ("./logs", "127.0.0.1", "back-normal"),
        ("relative/dir", "10.1.2.3", "a-b-c"),
    ],
)
def test_log_path_is_deterministic(root, host, name):
    base = BaseConfig(project_name=name, log_root=root)
    derive_runtime_fields(base, host_probe=lambda: host)
    assert base.log_path == root + "/" + host + "-" + name
    assert base.log_path == compose_log_path(root, host, name)


def test_probe_failure_is_fatal():
    def _unreachable():
        raise OSError("Network is unreachable")

    with pytest.raises(RuntimeProbeError) as info:
        derive_runtime_fields(BaseConfig(), host_probe=_unreachable)
    assert info.value.field == "host"


def test_empty_probe_result_is_fatal():
    with pytest.raises(RuntimeProbeError):
        derive_runtime_fields(BaseConfig(), host_probe=lambda: "")


def test_missing_working_directory_is_fatal(monkeypatch):
    def _getcwd():
        raise FileNotFoundError("cwd removed")

    monkeypatch.setattr(os, "getcwd", _getcwd)
    with pytest.raises(RuntimeProbeError) as info:
        derive_runtime_fields(BaseConfig(), host_probe=lambda: "10.0.0.1")
    assert info.value.field == "work_path"


def test_probe_outbound_ip_reads_local_address(monkeypatch):
    class _FakeSocket:
        def __init__(self, *args):
            self.target = None

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def connect(self, target):
            self.target = target

        def getsockname(self):
            return ("172.16.0.9", 54321)

    monkeypatch.setattr(socket, "socket", _FakeSocket)
    assert probe_outbound_ip(("198.51.100.1", 53)) == "172.16.0.9"
