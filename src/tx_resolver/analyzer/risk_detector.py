from __future__ import annotations

from ..schemas import EvmTransaction, SolanaTransaction
from .formatting import WEI_PER_GWEI
from .schemas import RiskFlag


HIGH_GAS_USED = 500_000
# 100 Gwei
HIGH_GAS_PRICE_WEI = 100 * WEI_PER_GWEI
# 0.00001 SOL，正常 Solana 手续费远低于此
HIGH_FEE_LAMPORTS = 10_000
MANY_INSTRUCTIONS = 5


class RiskDetector:
    """风险检测器，各条规则互相独立、结果累加"""

    def detect_evm(self, tx: EvmTransaction) -> list[RiskFlag]:
        risks: list[RiskFlag] = []

        if tx.status == "failed":
            risks.append(
                RiskFlag(
                    type="failed_transaction",
                    severity="high",
                    description="Transaction failed - check for insufficient funds or contract errors",
                )
            )

        if int(tx.gas_used) > HIGH_GAS_USED:
            risks.append(
                RiskFlag(
                    type="high_gas_usage",
                    severity="low",
                    description="High gas usage - complex transaction or inefficient contract",
                )
            )

        if int(tx.gas_price) > HIGH_GAS_PRICE_WEI:
            risks.append(
                RiskFlag(
                    type="very_high_gas_price",
                    severity="low",
                    description="Very high gas price - paid premium for fast execution",
                )
            )

        return risks

    def detect_solana(self, tx: SolanaTransaction) -> list[RiskFlag]:
        risks: list[RiskFlag] = []

        if tx.status == "failed":
            risks.append(
                RiskFlag(
                    type="failed_transaction",
                    severity="high",
                    description="Transaction failed - check for insufficient funds or program errors",
                )
            )

        if int(tx.fee) > HIGH_FEE_LAMPORTS:
            risks.append(
                RiskFlag(
                    type="high_fee",
                    severity="low",
                    description="Higher than normal transaction fee",
                )
            )

        if len(tx.instructions) > MANY_INSTRUCTIONS:
            risks.append(
                RiskFlag(
                    type="many_instructions",
                    severity="medium",
                    description="Complex transaction with many instructions - verify all actions",
                )
            )

        return risks
