# tests/conftest.py
"""
Fixtures compartilhados para testes do Strata Config.

Este módulo define fixtures reutilizáveis que fornecem:
- documentos YAML de configuração semelhantes ao uso real
- um diretório de busca temporário com `config_default` e `config_product`
- um probe de host determinístico (sem rede)
- uma fábrica de `LoadOptions` isolada do ambiente do processo

Decisões arquiteturais:
    - O ambiente é sempre injetado como dicionário (nunca `os.environ`)
    - Documentos são gravados em `tmp_path`, nunca no repositório
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture acessa a rede
    - Nenhuma fixture altera variáveis de ambiente do processo
    - Todas as fixtures são seguras para execução em paralelo

Limites explícitos:
    - Não substituir testes de integração com o ambiente real
    - Não conter lógica condicional complexa
"""

from pathlib import Path

import pytest


# =====================================================
# Documentos
# =====================================================

@pytest.fixture
def default_yaml() -> str:
    """
    YAML equivalente a um `config_default.yaml` de projeto.

    Representa a camada de menor precedência: todos os valores base e
    os valores do consumidor MySQL.

    Returns:
        str: Conteúdo YAML da camada default.
    """
    return """\
prj:
  name: back-normal
  version: v0.0.1
port: 8080
gin:
  release: false
log:
  root: /var/log/app
mysql:
  user: user
  password: password
  address: localhost:3306
  db: testdb
  conns:
    timeout: 5s
    readTimeout: 3s
    maxOpen: 10
    maxIdle: 2
"""


@pytest.fixture
def product_yaml() -> str:
    """
    YAML equivalente a um `config_product.yaml`.

    Sobrescreve apenas parte das chaves; as demais devem permanecer com
    o valor da camada default.

    Returns:
        str: Conteúdo YAML da camada do profile `product`.
    """
    return """\
gin:
  release: true
mysql:
  conns:
    maxOpen: 40
type:
  int8: -8
  uint16: 65535
  float32: 1.5
  duration: 1h30m
  bool: T
  optional: 7
"""


@pytest.fixture
def config_dir(tmp_path: Path, default_yaml: str, product_yaml: str) -> Path:
    """Diretório de busca com `config_default.yaml` e `config_product.yaml`."""
    d = tmp_path / "cmd"
    d.mkdir()
    (d / "config_default.yaml").write_text(default_yaml, encoding="utf-8")
    (d / "config_product.yaml").write_text(product_yaml, encoding="utf-8")
    return d


# =====================================================
# Runtime
# =====================================================

@pytest.fixture
def fixed_host() -> str:
    return "10.0.0.7"


@pytest.fixture
def host_probe(fixed_host):
    """Probe de host determinístico, sem acesso à rede."""

    def _probe() -> str:
        return fixed_host

    return _probe


@pytest.fixture
def make_options(config_dir: Path, host_probe):
    """
    Fábrica de `LoadOptions` apontando para `config_dir`.

    Args extras são repassados para `LoadOptions`, permitindo sobrescrever
    caminhos de busca, ambiente ou blob embutido por teste.

    Returns:
        Callable[..., LoadOptions]: Fábrica de opções isoladas.
    """
    from strata_config.core.config.loader import LoadOptions

    def _make(environ=None, **overrides):
        params = {
            "search_paths": [str(config_dir)],
            "environ": {} if environ is None else environ,
            "host_probe": host_probe,
        }
        params.update(overrides)
        return LoadOptions(**params)

    return _make
