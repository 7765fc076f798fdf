# tests/core/config/test_coercion.py
"""
Testes do TypeCoercer.

Este módulo valida a conversão de strings brutas para o tipo exato
declarado no campo destino.

Os testes asseguram que:
- cada tipo suportado converte literais válidos para o tipo exato
- inteiros de largura fixa respeitam a faixa do dtype
- literais inválidos resultam em `TypeCoercionError` com a chave
- tipos sem regra resultam em `UnsupportedFieldTypeError`
- o despacho cobre todos os `FieldKind`

Limites explícitos:
    - Não valida resolução de FieldPaths
    - Não valida leitura de documentos
"""

import sys
from datetime import timedelta
from typing import List, Optional, Union

import numpy as np
import pytest

from strata_config.core.config.coercion import (
    FieldKind,
    _PARSERS,
    coerce,
    kind_of,
    parse_duration,
)
from strata_config.core.config.errors import TypeCoercionError, UnsupportedFieldTypeError


def test_every_kind_has_a_parser():
    assert set(_PARSERS) == set(FieldKind)


def test_string_is_passthrough():
    assert coerce(str, " any value ", key="k") == " any value "


@pytest.mark.parametrize("raw", ["1", "t", "T", "TRUE", "true", "True"])
def test_bool_true_literals(raw):
    assert coerce(bool, raw, key="gin.release") is True


@pytest.mark.parametrize("raw", ["0", "f", "F", "FALSE", "false", "False"])
def test_bool_false_literals(raw):
    assert coerce(bool, raw, key="gin.release") is False


@pytest.mark.parametrize("raw", ["yes", "on", "tRUE", "2", ""])
def test_bool_rejects_other_spellings(raw):
    with pytest.raises(TypeCoercionError) as info:
        coerce(bool, raw, key="gin.release")
    assert info.value.key == "gin.release"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("40", 40),
        ("-8", -8),
        ("+3", 3),
        ("0x1F", 31),
        ("0o17", 15),
        ("0b101", 5),
        ("017", 15),
        ("1_000", 1000),
        ("0", 0),
    ],
)
def test_int_literals(raw, expected):
    value = coerce(int, raw, key="mysql.conns.maxOpen")
    assert type(value) is int
    assert value == expected


@pytest.mark.parametrize("raw", ["4.0", "forty", "08", "0x"])
def test_int_rejects_invalid(raw):
    with pytest.raises(TypeCoercionError) as info:
        coerce(int, raw, key="mysql.conns.maxOpen")
    assert isinstance(info.value.__cause__, ValueError)


def test_int8_is_width_specific():
    value = coerce(np.int8, "-8", key="type.int8")
    assert isinstance(value, np.int8)
    assert value == -8


@pytest.mark.parametrize(
    "dtype, raw",
    [
        (np.int8, "128"),
        (np.int8, "-129"),
        (np.int16, "32768"),
        (np.int32, "2147483648"),
        (np.int64, "9223372036854775808"),
        (np.uint8, "256"),
        (np.uint8, "-1"),
        (np.uint16, "+1"),
        (np.uint64, "18446744073709551616"),
    ],
)
def test_sized_int_out_of_range(dtype, raw):
    with pytest.raises(TypeCoercionError):
        coerce(dtype, raw, key="type.sized")


@pytest.mark.parametrize(
    "dtype, raw, expected",
    [
        (np.int8, "127", 127),
        (np.int16, "-32768", -32768),
        (np.int32, "0x7fffffff", 2147483647),
        (np.int64, "-9223372036854775808", -9223372036854775808),
        (np.uint8, "255", 255),
        (np.uint16, "65535", 65535),
        (np.uint32, "4294967295", 4294967295),
        (np.uint64, "18446744073709551615", 18446744073709551615),
    ],
)
def test_sized_int_bounds(dtype, raw, expected):
    value = coerce(dtype, raw, key="type.sized")
    assert isinstance(value, dtype)
    assert int(value) == expected


def test_float_literals():
    assert coerce(float, "1.5", key="k") == 1.5
    assert coerce(float, "-2e3", key="k") == -2000.0
    assert coerce(float, "inf", key="k") == float("inf")


def test_float_overflow_is_rejected():
    with pytest.raises(TypeCoercionError):
        coerce(float, "1e400", key="k")


def test_float32_precision_and_range():
    value = coerce(np.float32, "0.1", key="k")
    assert isinstance(value, np.float32)
    assert value == np.float32(0.1)

    with pytest.raises(TypeCoercionError):
        coerce(np.float32, "1e39", key="k")


def test_float64_type():
    value = coerce(np.float64, "3.25", key="k")
    assert isinstance(value, np.float64)
    assert value == 3.25


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("5s", timedelta(seconds=5)),
        ("300ms", timedelta(milliseconds=300)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("2h45m10.5s", timedelta(hours=2, minutes=45, seconds=10.5)),
        ("-1.5h", -timedelta(hours=1.5)),
        ("1500us", timedelta(microseconds=1500)),
        ("1µs", timedelta(microseconds=1)),
        ("2000ns", timedelta(microseconds=2)),
        (".5s", timedelta(milliseconds=500)),
        ("0", timedelta(0)),
    ],
)
def test_duration_literals(raw, expected):
    assert parse_duration(raw) == expected
    assert coerce(timedelta, raw, key="mysql.conns.timeout") == expected


@pytest.mark.parametrize("raw", ["5", "", "s", "1d", "1.s.", "5 s", "-"])
def test_duration_rejects_invalid(raw):
    with pytest.raises(TypeCoercionError) as info:
        coerce(timedelta, raw, key="mysql.conns.timeout")
    assert info.value.raw == raw


def test_optional_is_coerced_as_inner_type():
    assert kind_of(Optional[int]) is FieldKind.INT
    assert coerce(Optional[int], "7", key="k") == 7


@pytest.mark.parametrize("declared", [list, dict, bytes, List[str], object])
def test_unsupported_type_fails_fast(declared):
    with pytest.raises(UnsupportedFieldTypeError) as info:
        coerce(declared, "x", key="hosts")
    assert info.value.key == "hosts"


@pytest.mark.skipif(sys.version_info < (3, 10), reason="sintaxe X | None requer Python 3.10+")
def test_pep604_optional_is_coerced_as_inner_type():
    declared = eval("int | None")
    assert kind_of(declared) is FieldKind.INT
    assert coerce(declared, "40", key="mysql.conns.maxOpen") == 40
    assert coerce(eval("timedelta | None"), "5s", key="k") == timedelta(seconds=5)


def test_multi_member_union_is_unsupported():
    with pytest.raises(UnsupportedFieldTypeError):
        coerce(Union[int, str], "1", key="k")


@pytest.mark.parametrize("declared", [int, float, np.int8, np.float32])
@pytest.mark.parametrize("raw", [" 40", "40 ", "\t40\n", "٤٠", "４０"])
def test_numeric_literals_are_strict_ascii(declared, raw):
    with pytest.raises(TypeCoercionError) as info:
        coerce(declared, raw, key="mysql.conns.maxOpen")
    assert info.value.raw == raw


@pytest.mark.parametrize("raw", [" 5s", "5s ", "٥s"])
def test_duration_rejects_padding_and_non_ascii_digits(raw):
    with pytest.raises(TypeCoercionError):
        coerce(timedelta, raw, key="mysql.conns.timeout")
