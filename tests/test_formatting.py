import pytest

from tx_resolver.analyzer.formatting import (
    format_address,
    format_gwei,
    format_lamports,
    format_units,
    total_gas_cost,
)
from tx_resolver.utils import parse_int


@pytest.mark.parametrize(
    "value,decimals,expected",
    [
        ("1000000000000000000", 18, "1"),
        ("1500000000000000000", 18, "1.5"),
        ("0", 18, "0"),
        ("1", 18, "0.000000000000000001"),
        ("123456789012345678901234567890", 18, "123456789012.34567890123456789"),
        ("5000", 9, "0.000005"),
        ("0xde0b6b3a7640000", 18, "1"),
    ],
)
def test_format_units(value, decimals, expected):
    assert format_units(value, decimals) == expected


def test_total_gas_cost_is_exact():
    # 21000 * 20 Gwei = 4.2e14 wei
    assert total_gas_cost("21000", str(20 * 10**9)) == "0.00042"
    assert total_gas_cost("0x5208", "0x4a817c800") == "0.00042"


def test_total_gas_cost_beyond_float_precision():
    gas_used = 30_000_000
    gas_price = 10**15 + 1
    expected_wei = gas_used * gas_price
    assert total_gas_cost(str(gas_used), str(gas_price)) == format_units(str(expected_wei))
    assert format_units(str(expected_wei)).endswith("03")


def test_format_gwei():
    assert format_gwei(str(20 * 10**9)) == "20 Gwei"
    assert format_gwei("1500000000") == "1 Gwei"


def test_format_lamports():
    assert format_lamports("5000") == "0.000005"
    assert format_lamports("1000000000") == "1"


def test_format_address():
    assert format_address("0x1234567890abcdef1234567890abcdef12345678") == "0x1234...5678"
    assert format_address("short") == "short"
    assert format_address(None) == ""


@pytest.mark.parametrize(
    "value,expected",
    [(None, 0), ("", 0), ("0x", 0), ("0x10", 16), ("0X1f", 31), ("42", 42), (7, 7)],
)
def test_parse_int(value, expected):
    assert parse_int(value) == expected


def test_parse_int_rejects_garbage():
    with pytest.raises(ValueError):
        parse_int("not-a-number")
