# src/strata_config/core/config/registry.py
"""
Registro de mapeamentos ConfigurationKey → FieldPath.

Este módulo define o `FieldMap`, o registro declarativo consultado pelo
merge em camadas para saber **qual chave** de configuração alimenta
**qual campo** do objeto destino.

O registry é o mecanismo que permite ao mesmo engine atender dataclasses
de formatos arbitrários: o engine não conhece o formato do destino, apenas
os pares contribuídos pelo consumidor.

Ciclo de vida:
    - criado vazio a cada carga de configuração
    - semeado com o conjunto base (`BASE_FIELD_MAP`)
    - estendido uma única vez pelo consumidor (`append_field_map`)
    - descartado ao final da carga

Decisões arquiteturais:
    - Registro duplicado da mesma chave segue "última escrita vence"
    - A ordem de inserção é preservada para iteração determinística
    - Chaves são comparadas sem diferenciar maiúsculas de minúsculas

Limites explícitos:
    - Não valida se o FieldPath existe (responsabilidade do resolver)
    - Não lê documentos nem ambiente
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Tuple


# Chaves sempre presentes, relativas ao `BaseConfig`.
BASE_FIELD_MAP: Mapping[str, str] = {
    "prj.name": "project_name",
    "prj.version": "project_version",
    "port": "port",
    "gin.release": "gin_release",
    "log.root": "log_root",
}


@dataclass
class FieldMap:
    """
    Registro canônico de pares ConfigurationKey → FieldPath.

    Invariantes:
        - Cada chave (normalizada em minúsculas) aparece no máximo uma vez
        - `items()` reflete a ordem do primeiro registro de cada chave
    """

    _paths: Dict[str, str] = field(default_factory=dict, init=False, repr=False)
    _keys: Dict[str, str] = field(default_factory=dict, init=False, repr=False)

    def bind(self, key: str, path: str) -> None:
        if not isinstance(key, str) or not key.strip():
            raise ValueError("configuration key must be a non-empty string")
        if not isinstance(path, str) or not path.strip():
            raise ValueError(f"field path for '{key}' must be a non-empty string")

        norm = key.lower()
        # última escrita vence, mantendo a grafia original mais recente
        self._keys[norm] = key
        self._paths[norm] = path

    def update(self, pairs: Mapping[str, str], *, prefix: str = "") -> None:
        for key, path in pairs.items():
            self.bind(key, f"{prefix}.{path}" if prefix else path)

    def __setitem__(self, key: str, path: str) -> None:
        self.bind(key, path)

    def __getitem__(self, key: str) -> str:
        return self._paths[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[str]:
        return iter([self._keys[k] for k in self._paths])

    def items(self) -> List[Tuple[str, str]]:
        return [(self._keys[k], p) for k, p in self._paths.items()]


def base_field_map(prefix: str = "") -> FieldMap:
    """
    Cria um registry semeado com o conjunto base.

    Args:
        prefix (str): Nome do atributo que contém o `BaseConfig` dentro do
            objeto consumidor (vazio quando o consumidor é o próprio base).
    """
    fm = FieldMap()
    fm.update(BASE_FIELD_MAP, prefix=prefix)
    return fm
