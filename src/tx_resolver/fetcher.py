"""
多链并发探测

对与输入格式匹配的每条候选链并发发起探测，按注册表顺序选出第一条真正包含该交易的链。
单条链的任何失败都只影响该链本身。
"""
from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Literal

import httpx

from .app_logging import get_logger
from .classifier import EvmHash, SolanaSignature, TxIdentifier
from .config import Settings, get_settings
from .exceptions import ChainProbeError
from .integrations import EvmRPCClient, RPCError, SolanaRPCClient
from .normalizer import normalize_evm, normalize_solana
from .registry import ChainConfig, ChainRegistry
from .schemas import EvmTransaction, SolanaTransaction, TransactionData

logger = get_logger(__name__)

ProbeStatus = Literal["found", "not_found", "error", "timeout", "cancelled"]


@dataclass
class ProbeResult:
    """单条链的探测结果"""
    chain: ChainConfig
    status: ProbeStatus
    transaction: TransactionData | None = None
    error: str | None = None
    duration_ms: int | None = None


@dataclass
class FetchOutcome:
    """一次多链探测的汇总"""
    identifier: TxIdentifier
    transaction: TransactionData | None = None
    probes: list[ProbeResult] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.transaction is not None

    @property
    def probed_chains(self) -> list[str]:
        return [probe.chain.name for probe in self.probes]

    def statuses(self) -> dict[str, str]:
        return {probe.chain.name: probe.status for probe in self.probes}


class MultiChainFetcher:
    """多链交易探测器"""

    def __init__(
        self,
        registry: ChainRegistry,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.registry = registry
        self.settings = settings or get_settings()
        self._client = client

    def candidates(self, identifier: TxIdentifier) -> list[ChainConfig]:
        """类型匹配的候选链，保持注册顺序"""
        return self.registry.by_type(identifier.chain_type)

    async def fetch(self, identifier: TxIdentifier) -> FetchOutcome:
        """并发探测所有候选链"""
        candidates = self.candidates(identifier)
        if not candidates:
            logger.info("no_candidate_chains", chain_type=identifier.chain_type)
            return FetchOutcome(identifier=identifier)

        if self._client is not None:
            return await self._fan_out(identifier, candidates, self._client)

        async with httpx.AsyncClient(timeout=self.settings.rpc_timeout_s) as client:
            return await self._fan_out(identifier, candidates, client)

    async def _fan_out(
        self,
        identifier: TxIdentifier,
        candidates: list[ChainConfig],
        client: httpx.AsyncClient,
    ) -> FetchOutcome:
        tasks = [
            asyncio.create_task(self._run_probe(chain, identifier, client), name=f"probe-{chain.name}")
            for chain in candidates
        ]
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.settings.resolve_timeout_s
        deadline_hit = False

        try:
            pending: set[asyncio.Task[ProbeResult]] = set(tasks)
            while pending:
                decided, _ = _pick_winner(tasks)
                if decided:
                    break
                remaining = deadline - loop.time()
                if remaining <= 0:
                    deadline_hit = True
                    break
                _, pending = await asyncio.wait(
                    pending, timeout=remaining, return_when=asyncio.FIRST_COMPLETED
                )
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        if deadline_hit:
            logger.warning(
                "resolve_deadline_exceeded",
                tx_id=identifier.value,
                timeout_s=self.settings.resolve_timeout_s,
            )

        probes: list[ProbeResult] = []
        for chain, task in zip(candidates, tasks):
            if task.cancelled():
                probes.append(ProbeResult(chain=chain, status="timeout" if deadline_hit else "cancelled"))
            else:
                probes.append(task.result())

        winner = next((probe for probe in probes if probe.status == "found"), None)
        return FetchOutcome(
            identifier=identifier,
            transaction=winner.transaction if winner else None,
            probes=probes,
        )

    async def _run_probe(
        self,
        chain: ChainConfig,
        identifier: TxIdentifier,
        client: httpx.AsyncClient,
    ) -> ProbeResult:
        """探测单条链，异常全部在此收敛为无数据"""
        started = time.perf_counter()

        def _elapsed() -> int:
            return int((time.perf_counter() - started) * 1000)

        try:
            tx = await self._probe(chain, identifier, client)
        except ChainProbeError as e:
            logger.warning("chain_probe_failed", chain=chain.name, rpc_url=chain.rpc_url, error=str(e))
            return ProbeResult(chain=chain, status="error", error=str(e), duration_ms=_elapsed())
        except Exception as e:
            logger.error("chain_probe_unexpected_error", chain=chain.name, error=str(e), exc_info=True)
            return ProbeResult(chain=chain, status="error", error=str(e), duration_ms=_elapsed())

        if tx is None:
            logger.debug("chain_probe_not_found", chain=chain.name, duration_ms=_elapsed())
            return ProbeResult(chain=chain, status="not_found", duration_ms=_elapsed())

        logger.info("chain_probe_found", chain=chain.name, duration_ms=_elapsed())
        return ProbeResult(chain=chain, status="found", transaction=tx, duration_ms=_elapsed())

    async def _probe(
        self,
        chain: ChainConfig,
        identifier: TxIdentifier,
        client: httpx.AsyncClient,
    ) -> TransactionData | None:
        try:
            match identifier:
                case EvmHash(value=tx_hash):
                    return await self._probe_evm(chain, tx_hash, client)
                case SolanaSignature(value=signature):
                    return await self._probe_solana(chain, signature, client)
        except (RPCError, httpx.HTTPError) as e:
            raise ChainProbeError(chain.name, f"{type(e).__name__}: {e}") from e
        return None

    async def _probe_evm(self, chain: ChainConfig, tx_hash: str, client: httpx.AsyncClient) -> EvmTransaction | None:
        rpc = EvmRPCClient(
            chain.rpc_url,
            client=client,
            timeout=self.settings.rpc_timeout_s,
            max_attempts=self.settings.rpc_max_attempts,
        )

        # 1. 交易不存在说明不在这条链上
        tx = await rpc.get_transaction_by_hash(tx_hash)
        if not tx:
            return None

        # 2. 收据是必需的（状态与日志）
        receipt = await rpc.get_transaction_receipt(tx_hash)
        if not receipt:
            return None

        # 3. 区块只用来取时间戳，失败不影响结果
        block = None
        block_number = tx.get("blockNumber") if isinstance(tx, dict) else None
        if block_number is not None:
            try:
                block = await rpc.get_block_by_number(block_number, False)
            except (RPCError, httpx.HTTPError) as e:
                logger.info("block_timestamp_unavailable", chain=chain.name, block_number=block_number, error=str(e))

        return normalize_evm(chain, tx_hash, tx, receipt, block)

    async def _probe_solana(
        self, chain: ChainConfig, signature: str, client: httpx.AsyncClient
    ) -> SolanaTransaction | None:
        rpc = SolanaRPCClient(
            chain.rpc_url,
            client=client,
            timeout=self.settings.rpc_timeout_s,
            max_attempts=self.settings.rpc_max_attempts,
        )

        result = await rpc.get_transaction(signature)
        if not result:
            return None

        block_time = None
        slot = result.get("slot") if isinstance(result, dict) else None
        if slot is not None:
            try:
                block_time = await rpc.get_block_time(slot)
            except (RPCError, httpx.HTTPError) as e:
                logger.info("block_time_unavailable", chain=chain.name, slot=slot, error=str(e))

        return normalize_solana(chain, signature, result, block_time)


def _pick_winner(tasks: list[asyncio.Task[ProbeResult]]) -> tuple[bool, int | None]:
    """
    按注册顺序判断胜者是否已经确定

    排在前面的候选只要还有一个没完成，就不能选后面的；前面全部无数据时，第一个找到
    交易的即为胜者。返回 (是否已确定, 胜者下标)。
    """
    for index, task in enumerate(tasks):
        if not task.done():
            return False, None
        if task.result().status == "found":
            return True, index
    return True, None
