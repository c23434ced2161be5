"""
RPC 原始数据归一化

把各链族的 JSON-RPC 返回值转换成统一的 TransactionData。金额和 gas 一律以十进制
整数字符串保存。
"""
from __future__ import annotations

import time
from typing import Any

from pydantic import ValidationError

from .exceptions import NormalizationError
from .registry import ChainConfig
from .schemas import EvmLog, EvmTransaction, SolanaInstruction, SolanaTransaction
from .utils import parse_int


def _now_ms() -> int:
    return int(time.time() * 1000)


def _block_timestamp_ms(block: Any) -> int:
    """区块时间戳（毫秒），区块缺失或字段异常时为 0"""
    if not block:
        return 0
    try:
        return parse_int(block.get("timestamp")) * 1000
    except (AttributeError, TypeError, ValueError):
        return 0


def _block_time_ms(block_time: Any, result: dict[str, Any]) -> int:
    """依次尝试 getBlockTime、result.blockTime，都不可用时取当前时间"""
    for candidate in (block_time, result.get("blockTime")):
        if candidate is None or isinstance(candidate, bool):
            continue
        try:
            return int(candidate) * 1000
        except (TypeError, ValueError):
            continue
    return _now_ms()


def _receipt_succeeded(status: Any) -> bool:
    """收据 status 为 1 表示成功（0x1 或整数 1）"""
    try:
        return parse_int(status) == 1
    except ValueError:
        return False


def normalize_evm(
    chain: ChainConfig,
    tx_hash: str,
    tx: dict[str, Any],
    receipt: dict[str, Any],
    block: dict[str, Any] | None,
) -> EvmTransaction:
    """归一化 EVM 交易；block 缺失时时间戳为 0"""
    try:
        gas_price = tx.get("gasPrice")
        if gas_price is None:
            gas_price = receipt.get("effectiveGasPrice")

        return EvmTransaction(
            hash=tx_hash,
            chain_id=chain.chain_id,
            chain_name=chain.name,
            block_number=parse_int(tx.get("blockNumber") or receipt.get("blockNumber")),
            **{"from": tx.get("from") or ""},
            to=tx.get("to"),
            value=str(parse_int(tx.get("value"))),
            gas_used=str(parse_int(receipt.get("gasUsed"))),
            gas_price=str(parse_int(gas_price)),
            status="success" if _receipt_succeeded(receipt.get("status")) else "failed",
            logs=[EvmLog.model_validate(log) for log in receipt.get("logs") or []],
            timestamp=_block_timestamp_ms(block),
        )
    except (AttributeError, TypeError, ValueError, ValidationError) as e:
        raise NormalizationError(chain.name, f"malformed EVM payload: {e}") from e


def _flatten_account_keys(keys: list[Any]) -> list[str]:
    # jsonParsed 编码下 accountKeys 是 {"pubkey": ...} 对象
    return [key["pubkey"] if isinstance(key, dict) else key for key in keys]


def normalize_solana(
    chain: ChainConfig,
    signature: str,
    result: dict[str, Any],
    block_time: int | None,
) -> SolanaTransaction:
    """
    归一化 Solana 交易

    from 取 accountKeys[0]（手续费支付者总在第一位）；to 取 accountKeys[1]，这只是
    尽力猜测，多指令交易里不一定是真正的对手方。Solana 没有类似 EVM 的单一转账金额
    字段，value 固定为 "0"。
    """
    try:
        transaction = result["transaction"]
        message = transaction["message"]
        meta = result.get("meta") or {}

        account_keys = _flatten_account_keys(message.get("accountKeys") or [])
        slot = parse_int(result.get("slot"))

        return SolanaTransaction(
            hash=signature,
            chain_id=chain.chain_id,
            chain_name=chain.name,
            **{"from": account_keys[0] if account_keys else ""},
            to=account_keys[1] if len(account_keys) > 1 else None,
            value="0",
            status="failed" if meta.get("err") is not None else "success",
            timestamp=_block_time_ms(block_time, result),
            slot=slot,
            fee=str(parse_int(meta.get("fee"))),
            signatures=list(transaction.get("signatures") or []),
            account_keys=account_keys,
            instructions=[SolanaInstruction.model_validate(ix) for ix in message.get("instructions") or []],
        )
    except (KeyError, AttributeError, TypeError, ValueError, ValidationError) as e:
        raise NormalizationError(chain.name, f"malformed Solana payload: {e}") from e
