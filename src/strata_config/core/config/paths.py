# src/strata_config/core/config/paths.py
"""
Resolução de FieldPaths sobre objetos de destino.

Um FieldPath é uma string pontuada (ex.: `"mysql.db_name"`) que identifica
um campo aninhado dentro de um dataclass de destino. A resolução consome
um segmento por vez: localiza o campo no objeto corrente e, se restarem
segmentos, repete o processo usando esse campo como nova raiz.

Decisões arquiteturais:
    - Apenas campos declarados do dataclass são endereçáveis
    - O tipo declarado vem das anotações do dataclass (`get_type_hints`)
    - Segmento inexistente é erro tipado (`PathNotFoundError`), nunca
      `AttributeError` propagado

Limites explícitos:
    - Não cria estruturas intermediárias ausentes
    - Não converte valores (responsabilidade do TypeCoercer)
"""

from __future__ import annotations

import dataclasses
import sys
import typing
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict

from .errors import PathNotFoundError


@dataclass(frozen=True)
class FieldHandle:
    """Referência gravável para um campo folha resolvido."""

    owner: Any
    name: str
    declared_type: Any
    path: str

    def get(self) -> Any:
        return getattr(self.owner, self.name)

    def set(self, value: Any) -> None:
        setattr(self.owner, self.name, value)


@lru_cache(maxsize=None)
def _field_types(cls: type) -> Dict[str, Any]:
    try:
        hints = typing.get_type_hints(cls)
    except (NameError, TypeError):
        # uma anotação não resolvível invalida a classe inteira; resolve campo a campo
        hints = {}
    return {
        f.name: hints[f.name] if f.name in hints else _eval_annotation(cls, f.type)
        for f in dataclasses.fields(cls)
    }


def _eval_annotation(cls: type, annotation: Any) -> Any:
    """
    Avalia uma anotação em string no namespace do módulo da classe.

    Retorna a string original quando o nome não existe nesse escopo
    (ex.: classe local referenciada por outra classe local).
    """
    if not isinstance(annotation, str):
        return annotation
    module = sys.modules.get(cls.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    localns = {cls.__name__: cls}
    try:
        return eval(annotation, globalns, localns)  # noqa: S307
    except (NameError, AttributeError, SyntaxError, TypeError):
        return annotation


def _resolve(current: Any, remaining: str, full: str) -> FieldHandle:
    head, _, tail = remaining.partition(".")

    if not dataclasses.is_dataclass(current) or isinstance(current, type):
        raise PathNotFoundError(full, head, current)

    types = _field_types(type(current))
    if head not in types:
        raise PathNotFoundError(full, head, current)

    if not tail:
        return FieldHandle(owner=current, name=head, declared_type=types[head], path=full)

    return _resolve(getattr(current, head), tail, full)


def resolve(root: Any, path: str) -> FieldHandle:
    """
    Localiza o campo endereçado por `path` a partir de `root`.

    Args:
        root (Any): Instância de dataclass de destino.
        path (str): FieldPath pontuado (ex.: `"mysql.conns.max_open"`).

    Returns:
        FieldHandle: Handle mutável para o campo folha.

    Raises:
        PathNotFoundError: Se qualquer segmento não existir, for vazio ou
            atravessar um valor que não é dataclass.
    """
    if not isinstance(path, str) or not path:
        raise PathNotFoundError(str(path), "", root)
    return _resolve(root, path, path)
