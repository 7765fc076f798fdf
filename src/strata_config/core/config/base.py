# src/strata_config/core/config/base.py
"""
Configuração base e contrato do consumidor.

Este módulo define:
    - `BaseConfig`: os campos sempre presentes em qualquer configuração
      (identidade do projeto, endpoint e caminhos)
    - `ConfigConsumer`: o protocolo que um consumidor implementa para
      estender o registry e exibir a configuração resolvida

Composição (não herança):
    Um consumidor com campos próprios declara o `BaseConfig` como membro
    nomeado e passa esse membro como `base` para `fill_configuration`:

        @dataclass
        class AppConfig:
            base: BaseConfig = field(default_factory=BaseConfig)
            mysql: MysqlConfig = field(default_factory=MysqlConfig)
            max_open: int = 0

            def append_field_map(self, field_map):
                field_map["mysql.db"] = "mysql.db_name"
                field_map["mysql.conns.maxOpen"] = "max_open"

            def print(self):
                self.base.print()

    O próprio `BaseConfig` também é um consumidor válido (registry base
    apenas).

Limites explícitos:
    - Não carrega documentos
    - Não valida faixas de valores
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Protocol, runtime_checkable

from .registry import FieldMap

logger = logging.getLogger(__name__)


@runtime_checkable
class ConfigConsumer(Protocol):
    """
    Contrato de um consumidor do engine de configuração.

    Decisões arquiteturais:
        - A extensão do registry é pura contribuição de dados, chamada uma
          única vez antes do merge
        - `print` é observacional: não retorna valor nem altera o estado
    """

    def append_field_map(self, field_map: FieldMap) -> None:
        ...

    def print(self) -> None:
        ...


@dataclass
class BaseConfig:
    """Campos sempre presentes. Os três últimos são derivados em runtime."""

    project_name: str = ""
    project_version: str = ""
    env: str = ""
    port: str = ""
    gin_release: bool = False
    log_root: str = ""

    # derivados após o merge, não configuráveis
    host: str = ""
    work_path: str = ""
    log_path: str = ""

    def append_field_map(self, field_map: FieldMap) -> None:
        return None

    def describe(self) -> Dict[str, Dict[str, Any]]:
        return {
            "project": {
                "ProjectName": self.project_name,
                "ProjectVersion": self.project_version,
                "GinRelease": self.gin_release,
            },
            "endpoint": {
                "Env": self.env,
                "Host": self.host,
                "Port": self.port,
            },
            "path": {
                "WorkPath": self.work_path,
                "LogPath": self.log_path,
            },
        }

    def print(self) -> None:
        for section, values in self.describe().items():
            logger.info("------------ %s info ------------", section)
            for name, value in values.items():
                logger.info("-- %s=%s", name, value, extra={"config_section": section, name: value})
