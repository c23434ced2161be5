from __future__ import annotations

from collections.abc import Mapping

from ..schemas import EvmLog
from .schemas import BehaviorResult, RiskFlag


TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
APPROVAL_TOPIC = "0x8c5be1e5ebec7d5bd14f71427d1e84f3dd0314c0f7b2291e5b200ac8c7c3b925"
# Uniswap V2
SWAP_TOPIC = "0xd78ad95fa46c994b6551d0da85fc275fe613ce37657fb8d5e3d130840159d822"

# topic0 -> 事件类型，可以扩展
EVENT_SIGNATURES: dict[str, str] = {
    TRANSFER_TOPIC: "transfer",
    APPROVAL_TOPIC: "approval",
    SWAP_TOPIC: "swap",
}


class EventClassifier:
    """
    事件分类器

    只看每条日志的 topic0（事件签名），不解码事件参数。
    """

    def __init__(self, signatures: Mapping[str, str] | None = None):
        source = EVENT_SIGNATURES if signatures is None else signatures
        self.signatures = {topic.lower(): event_type for topic, event_type in source.items()}

    def event_types(self, logs: list[EvmLog]) -> set[str]:
        """日志中出现过的事件类型"""
        found: set[str] = set()
        for log in logs:
            topic0 = log.topic0
            if topic0 is None:
                continue
            event_type = self.signatures.get(topic0.lower())
            if event_type:
                found.add(event_type)
        return found

    def classify(self, logs: list[EvmLog]) -> BehaviorResult:
        """按优先级分类：swap > approval & transfer > transfer > approval"""
        found = self.event_types(logs)
        has_transfer = "transfer" in found
        has_approval = "approval" in found

        if "swap" in found:
            return BehaviorResult(
                action="Token Swap",
                details=[
                    "Swapped tokens using a DEX",
                    f"Generated {len(logs)} events during the swap",
                ],
            )
        if has_transfer and has_approval:
            return BehaviorResult(
                action="Token Approval & Transfer",
                details=["Approved and transferred tokens"],
            )
        if has_transfer:
            return BehaviorResult(action="Token Transfer", details=["Transferred tokens"])
        if has_approval:
            return BehaviorResult(
                action="Token Approval",
                details=["Approved tokens for spending"],
                risk_flags=[
                    RiskFlag(
                        type="token_approval",
                        severity="medium",
                        description="Token approval granted - monitor for unauthorized usage",
                    )
                ],
            )
        return BehaviorResult(
            action="Complex Contract Interaction",
            details=[f"Executed {len(logs)} contract events"],
        )
