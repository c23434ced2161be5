"""
交易标识符识别

把用户输入（交易哈希、签名或区块浏览器链接）识别为 EVM 交易哈希或 Solana 签名。
纯函数，不访问网络。
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

EVM_HASH_PATTERN = r"0x[a-fA-F0-9]{64}"
# base58：去掉 0、O、I、l
SOLANA_SIGNATURE_PATTERN = r"[1-9A-HJ-NP-Za-km-z]{87,88}"

_EVM_HASH_RE = re.compile(EVM_HASH_PATTERN)
_SOLANA_SIGNATURE_RE = re.compile(SOLANA_SIGNATURE_PATTERN)

# 区块浏览器链接规则，按顺序匹配，第一个命中的生效
EXPLORER_URL_PATTERNS: tuple[re.Pattern[str], ...] = (
    # EVM
    re.compile(rf"etherscan\.io/tx/({EVM_HASH_PATTERN})"),
    re.compile(rf"basescan\.org/tx/({EVM_HASH_PATTERN})"),
    re.compile(rf"arbiscan\.io/tx/({EVM_HASH_PATTERN})"),
    re.compile(rf"polygonscan\.com/tx/({EVM_HASH_PATTERN})"),
    re.compile(rf"bscscan\.com/tx/({EVM_HASH_PATTERN})"),
    re.compile(rf"optimistic\.etherscan\.io/tx/({EVM_HASH_PATTERN})"),
    # Solana
    re.compile(rf"solscan\.io/tx/({SOLANA_SIGNATURE_PATTERN})"),
    re.compile(rf"explorer\.solana\.com/tx/({SOLANA_SIGNATURE_PATTERN})"),
    re.compile(rf"solana\.fm/tx/({SOLANA_SIGNATURE_PATTERN})"),
)


@dataclass(frozen=True)
class EvmHash:
    value: str
    chain_type: Literal["evm"] = "evm"


@dataclass(frozen=True)
class SolanaSignature:
    value: str
    chain_type: Literal["solana"] = "solana"


@dataclass(frozen=True)
class InvalidIdentifier:
    value: str


TxIdentifier = EvmHash | SolanaSignature


def extract_tx_identifier(raw: str) -> str:
    """从区块浏览器链接中提取交易标识符，未命中时原样返回"""
    for pattern in EXPLORER_URL_PATTERNS:
        match = pattern.search(raw)
        if match:
            return match.group(1)
    return raw


def is_evm_tx_hash(value: str) -> bool:
    return _EVM_HASH_RE.fullmatch(value) is not None


def is_solana_signature(value: str) -> bool:
    return _SOLANA_SIGNATURE_RE.fullmatch(value) is not None


def classify(raw: str) -> EvmHash | SolanaSignature | InvalidIdentifier:
    """识别输入格式"""
    candidate = extract_tx_identifier(raw.strip())
    if is_evm_tx_hash(candidate):
        return EvmHash(candidate)
    if is_solana_signature(candidate):
        return SolanaSignature(candidate)
    return InvalidIdentifier(candidate)
