from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class GasInfo(BaseModel):
    """Gas / 手续费信息（展示用字符串）"""
    used: str = ""
    price: str = ""
    total: str = ""


class RiskFlag(BaseModel):
    """风险标签"""
    type: str
    severity: Literal["low", "medium", "high"] = "low"
    description: str = ""


class BehaviorResult(BaseModel):
    """行为分类结果"""
    action: str
    details: list[str] = Field(default_factory=list)
    risk_flags: list[RiskFlag] = Field(default_factory=list)


class TransactionAnalysis(BaseModel):
    """交易分析结果"""
    action: str
    result: str
    summary: str
    details: list[str] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)
    risk_flags: list[RiskFlag] = Field(default_factory=list)
    gas_info: GasInfo = Field(default_factory=GasInfo)

    # 来源信息
    tx_hash: str = ""
    chain_id: int | None = None
    chain_name: str = ""
    explorer_url: str = ""

    def to_dict(self) -> dict[str, Any]:
        """转换为字典（用于 JSON 序列化）"""
        return self.model_dump(exclude_none=True)
