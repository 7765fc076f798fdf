"""
Strata Config — Canonical Error Structures (v1)

Este módulo define o payload canônico de diagnóstico de falhas de carga
de configuração. Exceções tipadas (`core.config.errors`) são convertidas
em payloads serializáveis para que o chamador decida a política:
abortar o processo, registrar diagnóstico estruturado, etc.

Payloads devem ser:

- explícitos
- serializáveis
- acionáveis
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from strata_config.core.config.errors import (
    ConfigError,
    DocumentNotFoundError,
    DocumentParseError,
    EmbeddedFallbackError,
    InvalidDocumentRootError,
    PathNotFoundError,
    RuntimeProbeError,
    TypeCoercionError,
    UnsupportedConfigFormatError,
    UnsupportedFieldTypeError,
)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConfigErrorPayload:
    """
    Payload canônico de erro de configuração.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Documentos
DOCUMENT_NOT_FOUND = "DOCUMENT_NOT_FOUND"
DOCUMENT_INVALID = "DOCUMENT_INVALID"
EMBEDDED_FALLBACK_FAILURE = "EMBEDDED_FALLBACK_FAILURE"
UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"

# Merge
PATH_NOT_FOUND = "PATH_NOT_FOUND"
TYPE_COERCION_ERROR = "TYPE_COERCION_ERROR"
UNSUPPORTED_FIELD_TYPE = "UNSUPPORTED_FIELD_TYPE"

# Pós-processamento
RUNTIME_PROBE_FAILURE = "RUNTIME_PROBE_FAILURE"

CONFIG_ERROR = "CONFIG_ERROR"


def _type_name(t: Any) -> str:
    return getattr(t, "__name__", repr(t))


def error_to_payload(exc: ConfigError) -> ConfigErrorPayload:
    """Converte uma exceção tipada de configuração em payload canônico."""

    if isinstance(exc, DocumentNotFoundError):
        return ConfigErrorPayload(
            type=DOCUMENT_NOT_FOUND,
            message="Documento de configuração não encontrado",
            details={"name": exc.name, "search_paths": exc.search_paths},
            hint="Crie o arquivo do profile em um dos caminhos de busca ou ajuste a variável `env`.",
        )

    if isinstance(exc, EmbeddedFallbackError):
        return ConfigErrorPayload(
            type=EMBEDDED_FALLBACK_FAILURE,
            message="Documento default embutido inválido",
            details={"name": exc.name, "reason": exc.reason},
            hint="Corrija o conteúdo do config_default embutido na aplicação.",
        )

    if isinstance(exc, (DocumentParseError, InvalidDocumentRootError)):
        return ConfigErrorPayload(
            type=DOCUMENT_INVALID,
            message="Documento de configuração inválido",
            details={"reason": str(exc)},
            hint="Verifique a sintaxe do documento e se a raiz é um mapa chave-valor.",
        )

    if isinstance(exc, UnsupportedConfigFormatError):
        return ConfigErrorPayload(
            type=UNSUPPORTED_FORMAT,
            message="Formato de documento não suportado",
            details={"reason": str(exc)},
            hint="Use yaml ou json.",
        )

    if isinstance(exc, PathNotFoundError):
        return ConfigErrorPayload(
            type=PATH_NOT_FOUND,
            message="FieldPath não existe no objeto de configuração",
            details={"path": exc.path, "segment": exc.segment, "owner": exc.owner_type},
            hint="Ajuste `append_field_map` ou declare o campo no dataclass de destino.",
        )

    if isinstance(exc, TypeCoercionError):
        return ConfigErrorPayload(
            type=TYPE_COERCION_ERROR,
            message="Valor incompatível com o tipo do campo",
            details={
                "key": exc.key,
                "declared_type": _type_name(exc.declared_type),
                "raw": exc.raw,
                "reason": exc.reason,
            },
            hint="Corrija o valor da chave no documento ou na variável de ambiente.",
        )

    if isinstance(exc, UnsupportedFieldTypeError):
        return ConfigErrorPayload(
            type=UNSUPPORTED_FIELD_TYPE,
            message="Tipo de campo sem regra de coerção",
            details={"key": exc.key, "declared_type": _type_name(exc.declared_type)},
            hint="Use str, bool, int, float, numpy int/uint/float ou timedelta.",
        )

    if isinstance(exc, RuntimeProbeError):
        return ConfigErrorPayload(
            type=RUNTIME_PROBE_FAILURE,
            message="Falha ao derivar campos de runtime",
            details={"field": exc.field, "reason": exc.reason},
            hint="Verifique o diretório de trabalho e a conectividade de rede do host.",
        )

    return ConfigErrorPayload(
        type=CONFIG_ERROR,
        message=str(exc) or "Falha de configuração",
        details={"exc_type": exc.__class__.__name__},
    )
