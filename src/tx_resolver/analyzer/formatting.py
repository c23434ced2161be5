"""
金额与地址格式化

全部基于整数运算，不经过浮点，链上金额经常超过 2**53。
"""
from __future__ import annotations

from ..utils import parse_int

WEI_PER_GWEI = 10**9
LAMPORTS_DECIMALS = 9


def format_units(value: str | int, decimals: int = 18) -> str:
    """
    把最小单位的整数转成十进制字符串，去掉末尾的 0

    format_units("1500000000000000000") -> "1.5"
    """
    amount = parse_int(value)
    sign = "-" if amount < 0 else ""
    quotient, remainder = divmod(abs(amount), 10**decimals)

    if remainder == 0:
        return f"{sign}{quotient}"

    fraction = str(remainder).rjust(decimals, "0").rstrip("0")
    return f"{sign}{quotient}.{fraction}"


def format_gwei(gas_price: str | int) -> str:
    """gas price（wei）转 Gwei，向下取整"""
    return f"{parse_int(gas_price) // WEI_PER_GWEI} Gwei"


def total_gas_cost(gas_used: str | int, gas_price: str | int, decimals: int = 18) -> str:
    """gasUsed * gasPrice，换算成原生代币"""
    return format_units(parse_int(gas_used) * parse_int(gas_price), decimals)


def format_lamports(fee: str | int) -> str:
    """lamports 转 SOL"""
    return format_units(fee, LAMPORTS_DECIMALS)


def format_address(address: str | None) -> str:
    if not address:
        return ""
    if len(address) <= 10:
        return address
    return f"{address[:6]}...{address[-4:]}"
