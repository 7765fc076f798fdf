# src/strata_config/core/config/runtime.py
"""Derivação dos campos de runtime após o merge (work_path, host, log_path)."""

from __future__ import annotations

import logging
import os
import socket
from typing import Callable, Tuple

from .base import BaseConfig
from .errors import RuntimeProbeError

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TARGET: Tuple[str, int] = ("114.114.114.114", 53)

HostProbe = Callable[[], str]


def probe_outbound_ip(target: Tuple[str, int] = DEFAULT_PROBE_TARGET) -> str:
    """
    Descobre o IP local usado para tráfego de saída.

    Um socket UDP "conectado" não envia pacotes; o kernel apenas escolhe a
    interface de saída, cujo endereço é lido em `getsockname()`.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.connect(target)
        ip = sock.getsockname()[0]
    logger.info("outbound probe via %s:%d -> %s", target[0], target[1], ip)
    return ip


def compose_log_path(log_root: str, host: str, project_name: str) -> str:
    return log_root + "/" + host + "-" + project_name


def derive_runtime_fields(base: BaseConfig, *, host_probe: HostProbe = probe_outbound_ip) -> BaseConfig:
    """
    Preenche `work_path`, `host` e `log_path` no `BaseConfig`.

    Raises:
        RuntimeProbeError: Se o diretório de trabalho ou o host não puderem
            ser obtidos. Não há recovery.
    """
    try:
        base.work_path = os.getcwd()
    except OSError as e:
        raise RuntimeProbeError("work_path", str(e)) from e

    try:
        host = host_probe()
    except OSError as e:
        raise RuntimeProbeError("host", str(e)) from e
    if not host:
        raise RuntimeProbeError("host", "probe returned an empty address")
    base.host = host

    base.log_path = compose_log_path(base.log_root, base.host, base.project_name)
    return base
