# src/strata_config/core/config/merge.py
"""
Merge em camadas da configuração.

Este módulo implementa a política oficial de merge do Strata Config: cada
camada é aplicada sobre o objeto destino, par a par do registry, em ordem
estritamente crescente de precedência.

Política de merge (v1):
    - valor vazio na camada   → par ignorado (valor anterior preservado)
    - valor presente          → resolve FieldPath, converte e atribui
    - camadas posteriores     → sobrescrevem camadas anteriores

Ordem canônica das camadas:
    1. EMBEDDED_DEFAULT  (documento `config_default`)
    2. NAMED_DOCUMENT    (documento `config_<profile>`)
    3. ENVIRONMENT       (variáveis de ambiente)

Invariantes:
    - Para qualquer chave presente em duas camadas, vence a de maior precedência
    - Chaves ausentes em uma camada nunca alteram o destino
    - O formato do objeto destino nunca é alterado

Limites explícitos:
    - Não localiza nem carrega documentos (responsabilidade do loader)
    - Não realiza retry: a primeira falha interrompe o merge
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, Tuple

from .coercion import coerce
from .paths import resolve
from .registry import FieldMap

logger = logging.getLogger(__name__)


class Layer(str, Enum):
    """Camadas de configuração, em ordem crescente de precedência."""

    EMBEDDED_DEFAULT = "embedded_default"
    NAMED_DOCUMENT = "named_document"
    ENVIRONMENT = "environment"


class StringSource(Protocol):
    def get_string(self, key: str) -> str:
        ...


@dataclass(frozen=True)
class LayerReport:
    """Resumo da aplicação de uma camada."""

    layer: Layer
    origin: str
    assigned: Tuple[str, ...]


def merge_layer(
    field_map: FieldMap,
    destination: Any,
    source: StringSource,
    *,
    layer: Layer,
    origin: str = "",
) -> LayerReport:
    """
    Aplica uma camada de configuração sobre o objeto destino.

    Args:
        field_map (FieldMap): Registry de pares chave → FieldPath.
        destination (Any): Dataclass de destino (mutado in-place).
        source (StringSource): Camada consultada via `get_string`.
        layer (Layer): Identificação da camada (diagnóstico).
        origin (str): Arquivo ou descrição da origem (diagnóstico).

    Returns:
        LayerReport: Chaves efetivamente atribuídas pela camada.

    Raises:
        PathNotFoundError: Se um FieldPath não resolve contra o destino.
        UnsupportedFieldTypeError: Se o campo tem tipo sem regra de coerção.
        TypeCoercionError: Se o valor não é válido para o tipo do campo.
    """
    assigned = []
    for key, path in field_map.items():
        raw = source.get_string(key)
        if raw == "":
            continue

        handle = resolve(destination, path)
        value = coerce(handle.declared_type, raw, key=key)
        handle.set(value)
        assigned.append(key)
        logger.debug("%s: %s -> %s", layer.value, key, path)

    logger.info("%s merged from %s (%d keys)", layer.value, origin or layer.value, len(assigned))
    return LayerReport(layer=layer, origin=origin, assigned=tuple(assigned))

