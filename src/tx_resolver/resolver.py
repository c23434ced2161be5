from __future__ import annotations

import httpx

from .analyzer import AnalysisEngine, TransactionAnalysis
from .app_logging import Tracer, bound_context, get_logger
from .classifier import InvalidIdentifier, classify
from .config import Settings, get_settings
from .exceptions import InvalidFormatError, TransactionNotFoundError
from .fetcher import MultiChainFetcher
from .registry import ChainRegistry, build_registry
from .schemas import TransactionData

logger = get_logger(__name__)


class TxResolver:
    """
    交易解析入口

    识别输入格式 -> 多链探测 -> 归一化 -> 规则分析。每次调用相互独立，
    除了对外的 RPC 读请求没有副作用。
    """

    def __init__(
        self,
        registry: ChainRegistry | None = None,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
        engine: AnalysisEngine | None = None,
    ):
        self.settings = settings or get_settings()
        self.registry = registry or build_registry(self.settings)
        self.fetcher = MultiChainFetcher(self.registry, settings=self.settings, client=client)
        self.engine = engine or AnalysisEngine(registry=self.registry)

    async def _resolve(self, raw_input: str, tracer: Tracer) -> TransactionData:
        with tracer.step("classify_input") as step:
            identifier = classify(raw_input)
            step.set_output({"format": type(identifier).__name__})

        if isinstance(identifier, InvalidIdentifier):
            logger.info("invalid_tx_format", raw_input=raw_input[:120])
            raise InvalidFormatError(raw_input)

        with bound_context(tx_id=identifier.value, chain_type=identifier.chain_type):
            with tracer.step("fetch_candidates") as step:
                outcome = await self.fetcher.fetch(identifier)
                step.set_output({"probes": outcome.statuses()})

            if outcome.transaction is None:
                logger.info("tx_not_found", probes=outcome.statuses())
                raise TransactionNotFoundError(identifier.value, outcome.probed_chains)

        return outcome.transaction

    async def resolve(self, raw_input: str) -> TransactionData:
        """只解析出归一化后的交易，不做分析"""
        tracer = Tracer(raw_input)
        with bound_context(trace_id=tracer.trace_id):
            return await self._resolve(raw_input, tracer)

    async def resolve_and_analyze(self, raw_input: str) -> TransactionAnalysis:
        """
        解析并分析交易

        Raises:
            InvalidFormatError: 输入格式无法识别，不发起任何网络请求
            TransactionNotFoundError: 所有候选链都没有该交易
        """
        tracer = Tracer(raw_input)
        with bound_context(trace_id=tracer.trace_id):
            tx = await self._resolve(raw_input, tracer)

            with tracer.step("analyze") as step:
                analysis = self.engine.analyze(tx)
                step.set_output({"action": analysis.action, "risk_count": len(analysis.risk_flags)})

            logger.info(
                "resolve_completed",
                tx_id=tx.hash,
                chain=tx.chain_name,
                action=analysis.action,
                status=tx.status,
                timings=tracer.get_timings(),
            )
            return analysis


async def resolve_and_analyze(raw_input: str, settings: Settings | None = None) -> TransactionAnalysis:
    """使用默认注册表解析并分析一笔交易"""
    return await TxResolver(settings=settings).resolve_and_analyze(raw_input)
