from __future__ import annotations

from collections.abc import Mapping

from ..schemas import EvmTransaction, SolanaTransaction
from .event_classifier import EventClassifier
from .formatting import format_address, format_lamports, format_units
from .program_registry import KNOWN_PROGRAMS, UNKNOWN_PROGRAM_ACTION, ProgramInfo
from .schemas import BehaviorResult


class BehaviorAnalyzer:
    """行为分析器：判断交易意图"""

    def __init__(
        self,
        event_classifier: EventClassifier | None = None,
        programs: Mapping[str, ProgramInfo] | None = None,
    ):
        self.event_classifier = event_classifier or EventClassifier()
        self.programs = KNOWN_PROGRAMS if programs is None else programs

    def analyze_evm(self, tx: EvmTransaction, symbol: str = "ETH", decimals: int = 18) -> BehaviorResult:
        """
        EVM 交易按顺序匹配，先命中先生效：

        1. to 为空 -> 合约部署
        2. 有转账金额且无日志 -> 原生代币转账
        3. 有日志 -> 交给 EventClassifier
        4. 其他 -> 普通合约调用
        """
        details: list[str] = []
        value = int(tx.value)
        amount = format_units(value, decimals)

        if value > 0:
            details.append(f"Value: {amount} {symbol}")

        if tx.to_address is None:
            details.append("Deployed a new smart contract")
            return BehaviorResult(action="Contract Deployment", details=details)

        if value > 0 and not tx.logs:
            details.append(f"Sent {amount} {symbol} to {format_address(tx.to_address)}")
            return BehaviorResult(action=f"Simple {symbol} Transfer", details=details)

        if tx.logs:
            classified = self.event_classifier.classify(tx.logs)
            return BehaviorResult(
                action=classified.action,
                details=details + classified.details,
                risk_flags=classified.risk_flags,
            )

        details.append("Interacted with a smart contract")
        return BehaviorResult(action="Smart Contract Interaction", details=details)

    def analyze_solana(self, tx: SolanaTransaction) -> BehaviorResult:
        details: list[str] = []
        instructions = tx.instructions

        if not instructions:
            action = "Simple SOL Transfer"
            details.append("Transferred SOL between accounts")
        elif len(instructions) == 1:
            program_id = instructions[0].resolve_program_id(tx.account_keys)
            action = self.program_action(program_id)
            details.append(f"Program: {format_address(program_id) or 'unknown'}")
            details.append(f"Affected {len(instructions[0].accounts)} accounts")
        else:
            action = "Complex Transaction"
            details.append(f"Executed {len(instructions)} instructions")
            details.append(f"Interacted with {len(set(tx.program_ids()))} programs")

        if int(tx.fee) > 0:
            details.append(f"Transaction fee: {format_lamports(tx.fee)} SOL")

        return BehaviorResult(action=action, details=details)

    def program_action(self, program_id: str | None) -> str:
        """已知程序返回对应标签，否则是通用的程序调用"""
        info = self.programs.get(program_id) if program_id else None
        return info.action if info else UNKNOWN_PROGRAM_ACTION
