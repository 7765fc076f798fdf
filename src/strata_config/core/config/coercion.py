# src/strata_config/core/config/coercion.py
"""
Coerção de valores brutos (string) para o tipo declarado do campo destino.

Todo valor lido de um documento ou do ambiente chega ao merge como string.
Este módulo converte essa string para o tipo **exato** anotado no campo:

    - `str`                              → passthrough
    - `bool`                             → literais canônicos (1/0, t/f, true/false...)
    - `int`                              → literal inteiro (0x, 0o, 0b, octal legado)
    - `numpy.int8` ... `numpy.int64`     → inteiro com verificação de faixa
    - `numpy.uint8` ... `numpy.uint64`   → inteiro sem sinal com verificação de faixa
    - `float`, `numpy.float64`           → ponto flutuante 64 bits
    - `numpy.float32`                    → ponto flutuante 32 bits
    - `datetime.timedelta`               → duração no formato `"300ms"`, `"2h45m"`

Decisões arquiteturais:
    - Despacho fechado por `FieldKind`: cada tipo suportado tem uma função
      explícita de parse, sem fallthrough silencioso
    - Falha de parse vira `TypeCoercionError`, com a chave de configuração
      e a exceção original encadeada
    - Tipo sem regra vira `UnsupportedFieldTypeError` imediatamente

Limites explícitos:
    - Não valida faixas de negócio
    - Não suporta listas, mapas ou tipos compostos
"""

from __future__ import annotations

import math
import re
import types
import typing
from datetime import timedelta
from enum import Enum
from functools import partial
from typing import Any, Callable, Dict, Optional

import numpy as np

from .errors import TypeCoercionError, UnsupportedFieldTypeError


class FieldKind(str, Enum):
    """Tipos de campo com regra de coerção."""

    STRING = "string"
    BOOL = "bool"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT = "float"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    DURATION = "duration"


_TYPE_KINDS: Dict[Any, FieldKind] = {
    str: FieldKind.STRING,
    bool: FieldKind.BOOL,
    int: FieldKind.INT,
    np.int8: FieldKind.INT8,
    np.int16: FieldKind.INT16,
    np.int32: FieldKind.INT32,
    np.int64: FieldKind.INT64,
    np.uint8: FieldKind.UINT8,
    np.uint16: FieldKind.UINT16,
    np.uint32: FieldKind.UINT32,
    np.uint64: FieldKind.UINT64,
    float: FieldKind.FLOAT,
    np.float32: FieldKind.FLOAT32,
    np.float64: FieldKind.FLOAT64,
    timedelta: FieldKind.DURATION,
}


# -----------------------------
# Parsers
# -----------------------------

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_bool(raw: str) -> bool:
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise ValueError(f"invalid boolean literal: {raw!r}")


_LEGACY_OCTAL = re.compile(r"[+-]?0[0-7]+\Z")


def _check_literal(raw: str) -> None:
    # literal numérico: apenas ASCII, sem espaços nas bordas
    if raw != raw.strip() or not raw.isascii():
        raise ValueError(f"invalid numeric literal: {raw!r}")


def parse_int(raw: str) -> int:
    _check_literal(raw)
    # "0755" é octal, como no literal inteiro com prefixo implícito
    if _LEGACY_OCTAL.match(raw):
        return int(raw, 8)
    return int(raw, 0)


def _parse_sized_int(dtype: Any, raw: str) -> Any:
    info = np.iinfo(dtype)
    if info.min == 0 and raw.startswith(("+", "-")):
        raise ValueError(f"invalid unsigned literal: {raw!r}")
    value = parse_int(raw)
    if not info.min <= value <= info.max:
        raise ValueError(f"value out of range for {info.dtype}: {value}")
    return dtype(value)


def parse_float(raw: str) -> float:
    _check_literal(raw)
    value = float(raw)
    if math.isinf(value) and "inf" not in raw.lower():
        raise ValueError(f"value out of range for float64: {raw!r}")
    return value


def _parse_float32(raw: str) -> np.float32:
    _check_literal(raw)
    value = float(raw)
    if math.isfinite(value) and abs(value) > float(np.finfo(np.float32).max):
        raise ValueError(f"value out of range for float32: {raw!r}")
    return np.float32(value)


def _parse_float64(raw: str) -> np.float64:
    return np.float64(parse_float(raw))


_DURATION_UNITS: Dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5
    "μs": 1_000,  # U+03BC
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_DURATION_PART = re.compile(r"([0-9]*)(?:\.([0-9]*))?(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(raw: str) -> timedelta:
    """
    Converte uma duração textual (`"1h15m30.5s"`, `"-300ms"`) em `timedelta`.

    Unidades aceitas: ns, us (µs, μs), ms, s, m, h. A string `"0"` (com ou
    sem sinal) é aceita sem unidade. Frações abaixo de 1µs são truncadas.
    """
    s = raw
    negative = False
    if s[:1] in ("+", "-"):
        negative = s[0] == "-"
        s = s[1:]

    if s == "0":
        return timedelta(0)
    if not s:
        raise ValueError(f"invalid duration: {raw!r}")

    total_ns = 0
    pos = 0
    while pos < len(s):
        m = _DURATION_PART.match(s, pos)
        if m is None or (not m.group(1) and not m.group(2)):
            raise ValueError(f"invalid duration: {raw!r}")
        whole, frac, unit = m.group(1), m.group(2) or "", m.group(3)
        scale = _DURATION_UNITS[unit]
        total_ns += int(whole or "0") * scale
        if frac:
            total_ns += int(frac) * scale // 10 ** len(frac)
        pos = m.end()

    delta = timedelta(seconds=total_ns // 1_000_000_000, microseconds=(total_ns % 1_000_000_000) // 1_000)
    return -delta if negative else delta


_PARSERS: Dict[FieldKind, Callable[[str], Any]] = {
    FieldKind.STRING: str,
    FieldKind.BOOL: parse_bool,
    FieldKind.INT: parse_int,
    FieldKind.INT8: partial(_parse_sized_int, np.int8),
    FieldKind.INT16: partial(_parse_sized_int, np.int16),
    FieldKind.INT32: partial(_parse_sized_int, np.int32),
    FieldKind.INT64: partial(_parse_sized_int, np.int64),
    FieldKind.UINT8: partial(_parse_sized_int, np.uint8),
    FieldKind.UINT16: partial(_parse_sized_int, np.uint16),
    FieldKind.UINT32: partial(_parse_sized_int, np.uint32),
    FieldKind.UINT64: partial(_parse_sized_int, np.uint64),
    FieldKind.FLOAT: parse_float,
    FieldKind.FLOAT32: _parse_float32,
    FieldKind.FLOAT64: _parse_float64,
    FieldKind.DURATION: parse_duration,
}


# -----------------------------
# Public API
# -----------------------------

_UNION_ORIGINS = tuple(o for o in (typing.Union, getattr(types, "UnionType", None)) if o is not None)


def _unwrap_optional(declared_type: Any) -> Any:
    # Optional[T] e T | None
    if typing.get_origin(declared_type) in _UNION_ORIGINS:
        args = [a for a in typing.get_args(declared_type) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return declared_type


def kind_of(declared_type: Any) -> Optional[FieldKind]:
    """Retorna o `FieldKind` do tipo declarado, ou None se não suportado."""
    try:
        return _TYPE_KINDS.get(_unwrap_optional(declared_type))
    except TypeError:
        # tipo não hashable (ex.: anotação genérica exótica)
        return None


def coerce(declared_type: Any, raw: str, *, key: str) -> Any:
    """
    Converte `raw` para um valor do tipo declarado.

    Args:
        declared_type (Any): Anotação do campo destino.
        raw (str): Valor bruto lido da camada de configuração.
        key (str): Chave de configuração (usada no diagnóstico).

    Returns:
        Any: Valor convertido, do tipo exato declarado.

    Raises:
        UnsupportedFieldTypeError: Se o tipo não possui regra de coerção.
        TypeCoercionError: Se `raw` não é válido para o tipo.
    """
    kind = kind_of(declared_type)
    if kind is None:
        raise UnsupportedFieldTypeError(key, declared_type)

    try:
        return _PARSERS[kind](raw)
    except (ValueError, OverflowError) as e:
        raise TypeCoercionError(key, declared_type, raw, str(e)) from e
