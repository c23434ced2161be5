from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Literal

from pydantic import BaseModel, ConfigDict

from .config import Settings

ChainType = Literal["evm", "solana"]


class NativeCurrency(BaseModel):
    """原生代币"""

    model_config = ConfigDict(frozen=True)

    name: str
    symbol: str
    decimals: int


class ChainConfig(BaseModel):
    """链配置"""

    model_config = ConfigDict(frozen=True)

    chain_id: int
    name: str
    rpc_url: str
    explorer_url: str
    type: ChainType
    native_currency: NativeCurrency

    def tx_url(self, tx_hash: str) -> str:
        """区块浏览器中的交易地址"""
        return f"{self.explorer_url.rstrip('/')}/tx/{tx_hash}"


_ETH = NativeCurrency(name="Ether", symbol="ETH", decimals=18)

DEFAULT_CHAINS: tuple[ChainConfig, ...] = (
    ChainConfig(
        chain_id=1,
        name="Ethereum",
        rpc_url="https://eth.llamarpc.com",
        explorer_url="https://etherscan.io",
        type="evm",
        native_currency=_ETH,
    ),
    ChainConfig(
        chain_id=8453,
        name="Base",
        rpc_url="https://mainnet.base.org",
        explorer_url="https://basescan.org",
        type="evm",
        native_currency=_ETH,
    ),
    ChainConfig(
        chain_id=42161,
        name="Arbitrum One",
        rpc_url="https://arb1.arbitrum.io/rpc",
        explorer_url="https://arbiscan.io",
        type="evm",
        native_currency=_ETH,
    ),
    ChainConfig(
        chain_id=137,
        name="Polygon",
        rpc_url="https://polygon-rpc.com",
        explorer_url="https://polygonscan.com",
        type="evm",
        native_currency=NativeCurrency(name="MATIC", symbol="MATIC", decimals=18),
    ),
    ChainConfig(
        chain_id=56,
        name="BNB Smart Chain",
        rpc_url="https://bsc-dataseed1.binance.org",
        explorer_url="https://bscscan.com",
        type="evm",
        native_currency=NativeCurrency(name="BNB", symbol="BNB", decimals=18),
    ),
    ChainConfig(
        chain_id=10,
        name="Optimism",
        rpc_url="https://mainnet.optimism.io",
        explorer_url="https://optimistic.etherscan.io",
        type="evm",
        native_currency=_ETH,
    ),
    # Solana mainnet-beta 没有 EVM chain id，沿用 101
    ChainConfig(
        chain_id=101,
        name="Solana",
        rpc_url="https://api.mainnet-beta.solana.com",
        explorer_url="https://solscan.io",
        type="solana",
        native_currency=NativeCurrency(name="Solana", symbol="SOL", decimals=9),
    ),
)


class ChainRegistry:
    """只读的有序链注册表"""

    def __init__(self, chains: Iterable[ChainConfig]):
        self._chains: tuple[ChainConfig, ...] = tuple(chains)
        self._by_id: dict[int, ChainConfig] = {}
        for chain in self._chains:
            if chain.chain_id in self._by_id:
                raise ValueError(f"Duplicate chain_id in registry: {chain.chain_id}")
            self._by_id[chain.chain_id] = chain

    def __iter__(self) -> Iterator[ChainConfig]:
        return iter(self._chains)

    def __len__(self) -> int:
        return len(self._chains)

    def by_id(self, chain_id: int) -> ChainConfig | None:
        return self._by_id.get(chain_id)

    def by_name(self, name: str) -> ChainConfig | None:
        """按名称查找（忽略大小写）"""
        wanted = name.lower()
        for chain in self._chains:
            if chain.name.lower() == wanted:
                return chain
        return None

    def by_type(self, chain_type: ChainType) -> list[ChainConfig]:
        """按类型筛选，保持注册顺序"""
        return [chain for chain in self._chains if chain.type == chain_type]


def build_registry(settings: Settings | None = None) -> ChainRegistry:
    """构建默认注册表，RPC 地址可由配置覆盖"""
    if settings is None:
        return ChainRegistry(DEFAULT_CHAINS)

    overrides = settings.get_rpc_overrides()
    return ChainRegistry(
        chain.model_copy(update={"rpc_url": overrides[chain.chain_id]})
        if overrides.get(chain.chain_id)
        else chain
        for chain in DEFAULT_CHAINS
    )
