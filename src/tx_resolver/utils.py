from __future__ import annotations


def parse_int(value: str | int | None) -> int:
    """解析十六进制或十进制整数，None 和空串视为 0"""
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ValueError(f"Not an integer: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        if value in ("", "0x", "0X"):
            return 0
        if value.startswith("0x") or value.startswith("0X"):
            return int(value, 16)
        return int(value)
    raise ValueError(f"Not an integer: {value!r}")
