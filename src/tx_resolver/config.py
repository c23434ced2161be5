from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # 基础配置
    app_env: str = Field(default="local", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")

    # 链 RPC
    eth_rpc_url: str = Field(default="https://eth.llamarpc.com", alias="ETH_RPC_URL")
    base_rpc_url: str = Field(default="https://mainnet.base.org", alias="BASE_RPC_URL")
    arbitrum_rpc_url: str = Field(default="https://arb1.arbitrum.io/rpc", alias="ARBITRUM_RPC_URL")
    polygon_rpc_url: str = Field(default="https://polygon-rpc.com", alias="POLYGON_RPC_URL")
    bsc_rpc_url: str = Field(default="https://bsc-dataseed1.binance.org", alias="BSC_RPC_URL")
    optimism_rpc_url: str = Field(default="https://mainnet.optimism.io", alias="OPTIMISM_RPC_URL")
    solana_rpc_url: str = Field(default="https://api.mainnet-beta.solana.com", alias="SOLANA_RPC_URL")

    # 超时与重试
    rpc_timeout_s: float = Field(default=8.0, alias="RPC_TIMEOUT_S")
    resolve_timeout_s: float = Field(default=20.0, alias="RESOLVE_TIMEOUT_S")
    rpc_max_attempts: int = Field(default=1, ge=1, alias="RPC_MAX_ATTEMPTS")

    def get_rpc_overrides(self) -> dict[int, str]:
        """按 chain_id 返回 RPC 地址"""
        return {
            1: self.eth_rpc_url,
            8453: self.base_rpc_url,
            42161: self.arbitrum_rpc_url,
            137: self.polygon_rpc_url,
            56: self.bsc_rpc_url,
            10: self.optimism_rpc_url,
            101: self.solana_rpc_url,
        }


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
