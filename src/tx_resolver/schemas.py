from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class EvmLog(BaseModel):
    """EVM 日志（只保留原始字段，不解码）"""

    model_config = ConfigDict(frozen=True)

    address: str = ""
    topics: list[str] = Field(default_factory=list)
    data: str = "0x"

    @property
    def topic0(self) -> str | None:
        return self.topics[0] if self.topics else None


class SolanaInstruction(BaseModel):
    """Solana 指令，json 编码下只有 programIdIndex"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    program_id: str | None = Field(default=None, alias="programId")
    program_id_index: int | None = Field(default=None, alias="programIdIndex")
    accounts: list[Any] = Field(default_factory=list)
    data: str = ""

    def resolve_program_id(self, account_keys: list[str]) -> str | None:
        if self.program_id:
            return self.program_id
        if self.program_id_index is not None and 0 <= self.program_id_index < len(account_keys):
            return account_keys[self.program_id_index]
        return None


class _TransactionBase(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    hash: str
    chain_id: int
    chain_name: str
    from_address: str = Field(alias="from", default="")
    to_address: str | None = Field(alias="to", default=None)
    # 十进制整数字符串
    value: str = "0"
    status: Literal["success", "failed"] = "success"
    # 毫秒时间戳
    timestamp: int = 0


class EvmTransaction(_TransactionBase):
    """归一化后的 EVM 交易，to_address 为 None 表示合约部署"""

    chain_type: Literal["evm"] = "evm"
    block_number: int = 0
    gas_used: str = "0"
    gas_price: str = "0"
    logs: list[EvmLog] = Field(default_factory=list)


class SolanaTransaction(_TransactionBase):
    """归一化后的 Solana 交易"""

    chain_type: Literal["solana"] = "solana"
    slot: int = 0
    # lamports
    fee: str = "0"
    signatures: list[str] = Field(default_factory=list)
    account_keys: list[str] = Field(default_factory=list)
    instructions: list[SolanaInstruction] = Field(default_factory=list)

    def program_ids(self) -> list[str | None]:
        return [ix.resolve_program_id(self.account_keys) for ix in self.instructions]


TransactionData = Annotated[EvmTransaction | SolanaTransaction, Field(discriminator="chain_type")]
