# src/strata_config/core/config/loader.py
"""
Loader canônico de configuração do Strata Config.

Este módulo é o ponto de entrada do engine: resolve o profile ativo,
monta o registry, aplica as três camadas em ordem de precedência e
deriva os campos de runtime.

A configuração é resolvida a partir de:
    - `config_default.<ext>` nos caminhos de busca, ou o blob embutido
    - `config_<profile>.<ext>` nos caminhos de busca (obrigatório)
    - variáveis de ambiente

Responsabilidades do módulo:
    - Resolver o profile (variável `env`, default `product`) antes do merge
    - Construir stores novos a cada carga (sem estado global)
    - Aplicar o fallback embutido apenas para o documento default
    - Expor duas políticas de erro: exceção (`fill_configuration`) ou
      resultado tipado (`load_configuration`)

Invariantes:
    - A ordem das camadas é sempre default → profile → ambiente
    - Profile nomeado sem documento é erro fatal
    - Nenhuma configuração parcial é reportada como sucesso

Limites explícitos:
    - Não valida semântica de domínio
    - Não observa alterações de arquivos
    - Não encerra o processo (decisão do chamador)
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from enum import Enum
from importlib import resources
from typing import Any, Mapping, Optional, Sequence, Tuple

from strata_config.core.errors import ConfigErrorPayload, error_to_payload

from .base import BaseConfig, ConfigConsumer
from .errors import (
    ConfigError,
    DocumentNotFoundError,
    EmbeddedFallbackError,
    PathNotFoundError,
)
from .merge import Layer, LayerReport, merge_layer
from .registry import base_field_map
from .runtime import HostProbe, derive_runtime_fields, probe_outbound_ip
from .store import DocumentStore

logger = logging.getLogger(__name__)


KEY_ENV = "env"
VAL_PRODUCT = "product"

_FILE_DEFAULT = "default"
_FILE_NAME = "config"
_FILE_TYPE = "yaml"
_NAME_SPLITTER = "_"

# diretório de trabalho + diretório usado pelos testes de integração
DEFAULT_SEARCH_PATHS: Tuple[str, ...] = (".", "../cmd")


def packaged_default() -> bytes:
    """Conteúdo do `config_default.yaml` distribuído com o pacote."""
    return resources.files("strata_config").joinpath("resources/config_default.yaml").read_bytes()


@dataclass
class LoadOptions:
    """
    Parâmetros de uma carga de configuração.

    Attributes:
        search_paths: Diretórios consultados, em ordem, para cada documento.
        environ: Mapa de variáveis de ambiente (default: `os.environ`).
        embedded_default: Blob usado quando `config_default` não é encontrado
            (default: documento distribuído com o pacote).
        document_format: Formato dos documentos (`yaml` ou `json`).
        env_key: Chave que seleciona o profile.
        default_profile: Profile usado quando `env_key` não está definido.
        env_prefix: Prefixo das variáveis de ambiente (`APP` → `APP_PORT`).
        host_probe: Função que descobre o endereço do host.
    """

    search_paths: Sequence[str] = DEFAULT_SEARCH_PATHS
    environ: Optional[Mapping[str, str]] = None
    embedded_default: Optional[bytes] = None
    document_format: str = _FILE_TYPE
    env_key: str = KEY_ENV
    default_profile: str = VAL_PRODUCT
    env_prefix: str = ""
    host_probe: HostProbe = field(default=probe_outbound_ip)


class LoadStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class LoadResult:
    """Resultado imutável de uma carga de configuração."""

    status: LoadStatus
    profile: Optional[str] = None
    layers: Tuple[LayerReport, ...] = ()
    error: Optional[ConfigErrorPayload] = None

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.SUCCESS


# -----------------------------
# Helpers
# -----------------------------

def _env_store(options: LoadOptions) -> DocumentStore:
    store = DocumentStore(environ=options.environ)
    store.bind_environment_automatically(options.env_prefix)
    return store


def resolve_profile(options: LoadOptions) -> str:
    """Profile ativo: variável `env_key` ou `default_profile`."""
    return _env_store(options).get_string(options.env_key) or options.default_profile


def _base_prefix(consumer: Any, base: BaseConfig) -> str:
    if consumer is base:
        return ""
    if dataclasses.is_dataclass(consumer) and not isinstance(consumer, type):
        for f in dataclasses.fields(consumer):
            if getattr(consumer, f.name, None) is base:
                return f.name
    raise PathNotFoundError(type(base).__name__, type(base).__name__, consumer)


def _load_document(profile: str, options: LoadOptions) -> DocumentStore:
    """
    Carrega `config_<profile>` nos caminhos de busca.

    Raises:
        DocumentNotFoundError: Se o profile não é `default` e o documento
            não existe em nenhum caminho.
        EmbeddedFallbackError: Se o blob embutido não pôde ser carregado.
    """
    name = _FILE_NAME + _NAME_SPLITTER + profile

    store = DocumentStore(environ=options.environ)
    store.set_document_name(name)
    store.set_document_format(options.document_format)
    for path in options.search_paths:
        store.add_search_path(path)

    if store.load_active_document():
        logger.info("%s loaded from %s", name, store.origin)
        return store

    if profile != _FILE_DEFAULT:
        raise DocumentNotFoundError(name, store.search_paths)

    blob = options.embedded_default
    if blob is None:
        store.set_document_format(_FILE_TYPE)
        blob = packaged_default()

    try:
        store.load_from_bytes(blob)
    except ConfigError as e:
        raise EmbeddedFallbackError(name, str(e)) from e

    logger.info("%s loaded from embed", name)
    return store


# -----------------------------
# Public API
# -----------------------------

def fill_configuration(
    consumer: ConfigConsumer,
    base: BaseConfig,
    options: Optional[LoadOptions] = None,
) -> LoadResult:
    """
    Preenche `consumer` (e seu `base`) a partir das três camadas.

    Args:
        consumer (ConfigConsumer): Objeto destino; estende o registry via
            `append_field_map`. Pode ser o próprio `base`.
        base (BaseConfig): Membro que recebe os campos sempre presentes.
        options (Optional[LoadOptions]): Parâmetros da carga.

    Returns:
        LoadResult: Resultado com status SUCCESS e o relatório das camadas.

    Raises:
        ConfigError: Qualquer falha de documento, merge ou pós-processamento.
    """
    options = options or LoadOptions()

    field_map = base_field_map(_base_prefix(consumer, base))
    consumer.append_field_map(field_map)

    profile = resolve_profile(options)
    base.env = profile

    reports = []

    default_store = _load_document(_FILE_DEFAULT, options)
    reports.append(
        merge_layer(field_map, consumer, default_store, layer=Layer.EMBEDDED_DEFAULT, origin=default_store.origin or "")
    )

    profile_store = _load_document(profile, options)
    reports.append(
        merge_layer(field_map, consumer, profile_store, layer=Layer.NAMED_DOCUMENT, origin=profile_store.origin or "")
    )

    reports.append(
        merge_layer(field_map, consumer, _env_store(options), layer=Layer.ENVIRONMENT, origin="environment")
    )

    derive_runtime_fields(base, host_probe=options.host_probe)

    return LoadResult(status=LoadStatus.SUCCESS, profile=profile, layers=tuple(reports))


def load_configuration(
    consumer: ConfigConsumer,
    base: BaseConfig,
    options: Optional[LoadOptions] = None,
) -> LoadResult:
    """
    Variante de `fill_configuration` que não levanta exceção.

    Falhas de configuração são convertidas em `ConfigErrorPayload`; o
    chamador decide se encerra o processo ou registra o diagnóstico.
    """
    try:
        return fill_configuration(consumer, base, options)
    except ConfigError as e:
        payload = error_to_payload(e)
        logger.error("configuration load failed: %s", payload.message, extra={"error": payload.to_dict()})
        return LoadResult(status=LoadStatus.FAILED, profile=base.env or None, error=payload)
