# src/strata_config/core/config/store.py
"""
Store de documentos de configuração do Strata Config.

Este módulo implementa o `DocumentStore`, a fonte chave-valor consultada
pelo merge em camadas. Um store mantém:
    - o nome e o formato do documento ativo
    - uma lista ordenada (append-only) de caminhos de busca
    - o conteúdo do documento ativo, com chaves normalizadas em minúsculas
    - opcionalmente, um vínculo automático com variáveis de ambiente

Responsabilidades do módulo:
    - Localizar `<nome>.<ext>` nos caminhos de busca, na ordem declarada
    - Carregar documentos YAML ou JSON a partir de arquivo ou de bytes
    - Responder `get_string(key)` para chaves pontuadas (case-insensitive)
    - Mapear chaves pontuadas para nomes de variáveis de ambiente

Decisões arquiteturais:
    - Um store é construído por carga de configuração (sem singleton global)
    - Chave ausente retorna string vazia, nunca levanta exceção
    - Valores não escalares (mapas, listas) são tratados como ausentes
    - Com o ambiente vinculado, a variável de ambiente tem precedência

Limites explícitos:
    - Não converte tipos (responsabilidade do TypeCoercer)
    - Não observa alterações em disco
    - Não suporta fontes remotas
"""

from __future__ import annotations

import json
import logging
import math
import os
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml  # PyYAML

from .errors import (
    DocumentParseError,
    InvalidDocumentRootError,
    UnsupportedConfigFormatError,
)

logger = logging.getLogger(__name__)


_FORMAT_EXTENSIONS: Dict[str, Tuple[str, ...]] = {
    "yaml": (".yaml", ".yml"),
    "yml": (".yaml", ".yml"),
    "json": (".json",),
}


def env_var_name(key: str, prefix: str = "") -> str:
    """
    Converte uma chave pontuada no nome canônico da variável de ambiente.

    Exemplo:
        >>> env_var_name("mysql.conns.maxOpen")
        'MYSQL_CONNS_MAXOPEN'
        >>> env_var_name("prj.name", prefix="app")
        'APP_PRJ_NAME'
    """
    name = key.replace(".", "_").replace("-", "_").upper()
    if prefix:
        name = f"{prefix.upper()}_{name}"
    return name


def _normalize_keys(data: Any) -> Any:
    # viper-like: chaves de documento são case-insensitive
    if isinstance(data, dict):
        return {str(k).lower(): _normalize_keys(v) for k, v in data.items()}
    return data


def _format_float(value: float) -> str:
    # notação decimal mais curta, sem expoente e sem ".0" final (40.0 -> "40")
    if not math.isfinite(value):
        return str(value)
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _to_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (int, str)):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    # mapas e listas não são itens de configuração
    return ""


def _parse(text: str, fmt: str, origin: str) -> Dict[str, Any]:
    try:
        if fmt == "json":
            data = json.loads(text) if text.strip() else None
        else:
            data = yaml.safe_load(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise DocumentParseError(f"Documento inválido ({fmt}): {origin}: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidDocumentRootError(
            f"Raiz do documento deve ser um mapa, recebido: {type(data).__name__} ({origin})"
        )

    return _normalize_keys(data)


class DocumentStore:
    """
    Fonte chave-valor de uma camada de configuração.

    Invariantes:
        - `search_paths` preserva a ordem de inserção e não contém duplicatas
        - `get_string` nunca retorna None
        - O documento ativo é substituído (não mesclado) a cada carga
    """

    def __init__(self, *, environ: Optional[Mapping[str, str]] = None):
        self._name: Optional[str] = None
        self._format: str = "yaml"
        self._search_paths: List[str] = []
        self._data: Dict[str, Any] = {}
        self._origin: Optional[str] = None

        self._environ: Mapping[str, str] = os.environ if environ is None else environ
        self._env_bound = False
        self._env_prefix = ""

    # -----------------------------
    # Document selection
    # -----------------------------
    def set_document_name(self, name: str) -> None:
        if not isinstance(name, str) or not name.strip():
            raise ValueError("document name must be a non-empty string")
        self._name = name

    def set_document_format(self, fmt: str) -> None:
        fmt = fmt.lower().lstrip(".")
        if fmt not in _FORMAT_EXTENSIONS:
            raise UnsupportedConfigFormatError(f"Formato não suportado: {fmt}")
        self._format = fmt

    def add_search_path(self, path: "str | Path") -> None:
        p = str(path)
        if p not in self._search_paths:
            self._search_paths.append(p)

    @property
    def search_paths(self) -> List[str]:
        return list(self._search_paths)

    @property
    def origin(self) -> Optional[str]:
        """Arquivo (ou `<embedded>`) de onde veio o documento ativo."""
        return self._origin

    def find_document(self) -> Optional[Path]:
        if self._name is None:
            raise ValueError("document name not set")
        for directory in self._search_paths:
            for ext in _FORMAT_EXTENSIONS[self._format]:
                candidate = Path(directory) / f"{self._name}{ext}"
                if candidate.is_file():
                    return candidate
        return None

    # -----------------------------
    # Loading
    # -----------------------------
    def load_active_document(self) -> bool:
        """
        Procura e carrega o documento ativo nos caminhos de busca.

        Returns:
            bool: False quando o documento não existe em nenhum caminho.

        Raises:
            DocumentParseError: Se o arquivo existe mas não pode ser lido como UTF-8
                ou não é parseável.
            InvalidDocumentRootError: Se a raiz do documento não é um mapa.
        """
        path = self.find_document()
        if path is None:
            return False

        try:
            text = path.read_text(encoding="utf-8")
        except (UnicodeDecodeError, OSError) as e:
            raise DocumentParseError(f"Documento ilegível: {path}: {e}") from e
        self._data = _parse(text, self._format, str(path))
        self._origin = str(path)
        return True

    def load_from_bytes(self, blob: bytes) -> None:
        if blob is None:
            raise DocumentParseError("Blob de configuração ausente")
        try:
            text = blob.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DocumentParseError(f"Blob de configuração não é UTF-8: {e}") from e
        self._data = _parse(text, self._format, "<embedded>")
        self._origin = "<embedded>"

    # -----------------------------
    # Environment
    # -----------------------------
    def bind_environment_automatically(self, prefix: str = "") -> None:
        self._env_bound = True
        self._env_prefix = prefix

    def lookup_env(self, key: str) -> str:
        name = env_var_name(key, self._env_prefix)
        value = self._environ.get(name)
        if value is None and not self._env_prefix:
            # aceita também o nome literal (ex.: `env=dev ./app`)
            value = self._environ.get(key)
        return value or ""

    # -----------------------------
    # Queries
    # -----------------------------
    def get_string(self, key: str) -> str:
        if self._env_bound:
            value = self.lookup_env(key)
            if value:
                return value

        node: Any = self._data
        for part in key.lower().split("."):
            if not isinstance(node, dict) or part not in node:
                return ""
            node = node[part]
        return _to_string(node)
