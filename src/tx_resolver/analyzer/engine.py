from __future__ import annotations

from datetime import datetime, timezone

from ..app_logging import get_logger
from ..registry import ChainRegistry, NativeCurrency
from ..schemas import EvmTransaction, SolanaTransaction, TransactionData
from .behavior_analyzer import BehaviorAnalyzer
from .formatting import format_address, format_gwei, format_lamports, total_gas_cost
from .risk_detector import RiskDetector
from .schemas import BehaviorResult, GasInfo, RiskFlag, TransactionAnalysis

logger = get_logger(__name__)

_FALLBACK_CURRENCY = {
    "evm": NativeCurrency(name="Ether", symbol="ETH", decimals=18),
    "solana": NativeCurrency(name="Solana", symbol="SOL", decimals=9),
}


def _format_timestamp(timestamp_ms: int) -> str:
    if timestamp_ms <= 0:
        return "Timestamp unavailable"
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


class AnalysisEngine:
    """规则分析引擎：TransactionData -> TransactionAnalysis，无状态"""

    def __init__(
        self,
        registry: ChainRegistry | None = None,
        behavior_analyzer: BehaviorAnalyzer | None = None,
        risk_detector: RiskDetector | None = None,
    ):
        self.registry = registry
        self.behavior_analyzer = behavior_analyzer or BehaviorAnalyzer()
        self.risk_detector = risk_detector or RiskDetector()

    def _currency(self, tx: TransactionData) -> NativeCurrency:
        chain = self.registry.by_id(tx.chain_id) if self.registry else None
        return chain.native_currency if chain else _FALLBACK_CURRENCY[tx.chain_type]

    def _explorer_url(self, tx: TransactionData) -> str:
        chain = self.registry.by_id(tx.chain_id) if self.registry else None
        return chain.tx_url(tx.hash) if chain else ""

    def analyze(self, tx: TransactionData) -> TransactionAnalysis:
        currency = self._currency(tx)

        match tx:
            case EvmTransaction():
                behavior = self.behavior_analyzer.analyze_evm(tx, currency.symbol, currency.decimals)
                risks = self.risk_detector.detect_evm(tx)
                location = f"Block: {tx.block_number:,}"
                counterparty = f"To: {format_address(tx.to_address)}" if tx.to_address else "Contract Creation"
                activity = f"Generated {len(tx.logs)} event logs" if tx.logs else "No events emitted"
                gas_info = GasInfo(
                    used=f"{int(tx.gas_used):,}",
                    price=format_gwei(tx.gas_price),
                    total=f"{total_gas_cost(tx.gas_used, tx.gas_price, currency.decimals)} {currency.symbol}",
                )
            case SolanaTransaction():
                behavior = self.behavior_analyzer.analyze_solana(tx)
                risks = self.risk_detector.detect_solana(tx)
                location = f"Slot: {tx.slot}"
                counterparty = f"To: {format_address(tx.to_address)}" if tx.to_address else "Program Interaction"
                activity = f"Contains {len(tx.instructions)} instructions"
                gas_info = GasInfo(
                    used="N/A",
                    price="N/A",
                    total=f"{format_lamports(tx.fee)} {currency.symbol}",
                )
            case _:
                raise TypeError(f"Unsupported transaction type: {type(tx).__name__}")

        return self._build(tx, behavior, risks, location, counterparty, activity, gas_info)

    def _build(
        self,
        tx: TransactionData,
        behavior: BehaviorResult,
        risks: list[RiskFlag],
        location: str,
        counterparty: str,
        activity: str,
        gas_info: GasInfo,
    ) -> TransactionAnalysis:
        succeeded = tx.status == "success"
        status_text = "successfully executed" if succeeded else "failed to execute"
        risk_flags = behavior.risk_flags + risks

        details = [
            f"Chain: {tx.chain_name}",
            location,
            f"From: {format_address(tx.from_address)}",
            counterparty,
            *behavior.details,
        ]
        notes = [
            f"Transaction executed on {tx.chain_name}",
            activity,
            _format_timestamp(tx.timestamp),
        ]

        logger.debug(
            "analysis_completed",
            chain=tx.chain_name,
            action=behavior.action,
            risk_types=[r.type for r in risk_flags],
        )

        return TransactionAnalysis(
            action=behavior.action,
            result="✅ Transaction completed successfully" if succeeded else "❌ Transaction failed",
            summary=f"{behavior.action} {status_text} on {tx.chain_name}",
            details=details,
            notes=notes,
            risk_flags=risk_flags,
            gas_info=gas_info,
            tx_hash=tx.hash,
            chain_id=tx.chain_id,
            chain_name=tx.chain_name,
            explorer_url=self._explorer_url(tx),
        )
