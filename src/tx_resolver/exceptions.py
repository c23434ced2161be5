from __future__ import annotations


class TxResolverError(Exception):
    """所有解析错误的基类"""


class InvalidFormatError(TxResolverError):
    """输入既不是 EVM 交易哈希也不是 Solana 签名"""

    def __init__(self, raw_input: str):
        super().__init__(
            "Invalid transaction hash format. Please provide a valid EVM hash (0x...) or Solana signature."
        )
        self.raw_input = raw_input


class TransactionNotFoundError(TxResolverError):
    """所有候选链都没有找到该交易"""

    def __init__(self, tx_id: str, probed_chains: list[str] | None = None):
        self.tx_id = tx_id
        self.probed_chains = probed_chains or []
        chains = ", ".join(self.probed_chains) or "none"
        super().__init__(f"Transaction {tx_id} not found on any chain (probed: {chains})")


class ChainProbeError(TxResolverError):
    """单条链探测失败，只在 fetcher 内部使用"""

    def __init__(self, chain_name: str, message: str):
        super().__init__(f"[{chain_name}] {message}")
        self.chain_name = chain_name


class NormalizationError(ChainProbeError):
    """RPC 返回结构无法归一化"""
