# src/strata_config/__init__.py
"""
Strata Config — resolução de configuração em camadas para dataclasses.

Três camadas, em ordem crescente de precedência:
    1. documento default (arquivo `config_default` ou blob embutido)
    2. documento do profile ativo (`config_<env>`)
    3. variáveis de ambiente

Uso mínimo:

    from strata_config import BaseConfig, fill_configuration

    cfg = BaseConfig()
    fill_configuration(cfg, cfg)
"""

from .core.config.base import BaseConfig, ConfigConsumer
from .core.config.errors import ConfigError
from .core.config.loader import (
    LoadOptions,
    LoadResult,
    LoadStatus,
    fill_configuration,
    load_configuration,
)
from .core.config.registry import FieldMap

__all__ = [
    "BaseConfig",
    "ConfigConsumer",
    "ConfigError",
    "FieldMap",
    "LoadOptions",
    "LoadResult",
    "LoadStatus",
    "fill_configuration",
    "load_configuration",
]
