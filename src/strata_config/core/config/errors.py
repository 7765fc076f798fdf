# src/strata_config/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Strata Config.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a busca de documentos, o merge em camadas, a resolução de caminhos de
campo, a coerção de tipos e a derivação de campos de runtime.

As exceções aqui definidas representam **falhas fatais de inicialização**,
e não erros recuperáveis: um processo parcialmente configurado é
considerado inseguro para executar.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Nenhuma exceção é tratada com retry
    - Mensagens identificam a chave de configuração ou o caminho envolvido

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Atributos estruturados (key, path, profile...) são sempre preenchidos

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não decide se o processo deve ser encerrado (responsabilidade do chamador)
"""

from __future__ import annotations

from typing import Any, Optional, Sequence


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à resolução de configuração.

    Todas as exceções levantadas durante carregamento de documentos,
    merge de camadas e pós-processamento devem herdar desta classe,
    permitindo captura genérica no ponto de entrada (`load_configuration`).
    """


class DocumentNotFoundError(ConfigError):
    """
    Documento nomeado ausente em todos os caminhos de busca.

    Decisões arquiteturais:
        - Não fatal apenas para o profile `default` (aciona o fallback embutido)
        - Fatal para qualquer profile explicitamente nomeado
    """

    def __init__(self, name: str, search_paths: Sequence[str]):
        self.name = name
        self.search_paths = list(search_paths)
        super().__init__(
            f"Documento de configuração não encontrado: {name} "
            f"(caminhos de busca: {', '.join(self.search_paths) or '<nenhum>'})"
        )


class EmbeddedFallbackError(ConfigError):
    """O documento default embutido não pôde ser lido. Sempre fatal."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Falha ao carregar {name} a partir do blob embutido: {reason}")


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de documento não suportado pelo store.

    Formatos suportados (v1):
        - YAML (yaml, yml)
        - JSON (json)
    """


class DocumentParseError(ConfigError):
    """Documento encontrado, mas com sintaxe inválida para o formato declarado."""


class InvalidDocumentRootError(ConfigError):
    """
    Conteúdo raiz do documento não é um mapa chave-valor.

    Limites explícitos:
        - Não tenta normalizar listas ou escalares no root
    """


class PathNotFoundError(ConfigError):
    """
    FieldPath registrado não resolve contra o formato do objeto destino.

    Indica incompatibilidade entre o registry e o dataclass de destino;
    é levantada no momento do merge, antes de qualquer atribuição.
    """

    def __init__(self, path: str, segment: str, owner: Any = None):
        self.path = path
        self.segment = segment
        self.owner_type = type(owner).__name__ if owner is not None else None
        where = f" em {self.owner_type}" if self.owner_type else ""
        super().__init__(f"Campo '{segment}' não encontrado{where} (path: '{path}')")


class TypeCoercionError(ConfigError):
    """
    Valor bruto não pôde ser convertido para o tipo declarado do campo.

    A exceção original de parse é encadeada via `__cause__`.
    """

    def __init__(self, key: str, declared_type: Any, raw: str, reason: Optional[str] = None):
        self.key = key
        self.declared_type = declared_type
        self.raw = raw
        self.reason = reason
        type_name = getattr(declared_type, "__name__", repr(declared_type))
        msg = f"config item: {key}, value type error ({type_name}): {raw!r}"
        if reason:
            msg += f". {reason}"
        super().__init__(msg)


class UnsupportedFieldTypeError(ConfigError):
    """
    Tipo declarado do campo destino não possui regra de coerção.

    É um erro de programação (registry aponta para um campo de tipo não
    suportado) e, portanto, falha imediatamente.
    """

    def __init__(self, key: str, declared_type: Any):
        self.key = key
        self.declared_type = declared_type
        type_name = getattr(declared_type, "__name__", repr(declared_type))
        super().__init__(f"config item: {key}, unhandled type: {type_name}")


class RuntimeProbeError(ConfigError):
    """Falha ao descobrir diretório de trabalho ou endereço do host."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Falha ao derivar '{field}': {reason}")
