from __future__ import annotations

from typing import Any

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..app_logging import get_logger

logger = get_logger(__name__)


class RPCError(Exception):
    """RPC 调用错误"""

    def __init__(self, message: str, code: int | None = None):
        super().__init__(message)
        self.code = code


class RPCClient:
    """JSON-RPC 2.0 客户端"""

    def __init__(
        self,
        rpc_url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 8.0,
        max_attempts: int = 1,
    ):
        self.rpc_url = rpc_url
        self.timeout = timeout
        self.max_attempts = max_attempts
        self._client = client
        self._request_id = 0

    def _next_id(self) -> int:
        self._request_id += 1
        return self._request_id

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(self.rpc_url, json=payload, timeout=self.timeout)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.rpc_url, json=payload)

    async def _call(self, method: str, params: list[Any]) -> Any:
        """执行 RPC 调用，只对传输层错误重试"""
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": self._next_id(),
        }

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        ):
            with attempt:
                response = await self._post(payload)
        response.raise_for_status()

        try:
            data = response.json()
        except ValueError as e:
            raise RPCError(f"Malformed JSON-RPC response: {e}") from e

        if not isinstance(data, dict):
            raise RPCError("Malformed JSON-RPC response: expected an object")

        if data.get("error") is not None:
            error = data["error"]
            if isinstance(error, dict):
                raise RPCError(
                    message=error.get("message", "Unknown RPC error"),
                    code=error.get("code"),
                )
            raise RPCError(str(error))

        return data.get("result")


class EvmRPCClient(RPCClient):
    """EVM JSON-RPC 客户端"""

    async def get_transaction_by_hash(self, tx_hash: str) -> dict[str, Any] | None:
        """获取交易详情"""
        logger.debug("rpc_get_transaction", tx_hash=tx_hash)
        return await self._call("eth_getTransactionByHash", [tx_hash])

    async def get_transaction_receipt(self, tx_hash: str) -> dict[str, Any] | None:
        """获取交易收据"""
        logger.debug("rpc_get_receipt", tx_hash=tx_hash)
        return await self._call("eth_getTransactionReceipt", [tx_hash])

    async def get_block_by_number(self, block_number: int | str, full_transactions: bool = False) -> dict[str, Any] | None:
        """获取区块信息"""
        if isinstance(block_number, int):
            block_number = hex(block_number)
        logger.debug("rpc_get_block", block_number=block_number)
        return await self._call("eth_getBlockByNumber", [block_number, full_transactions])


class SolanaRPCClient(RPCClient):
    """Solana JSON-RPC 客户端"""

    async def get_transaction(self, signature: str) -> dict[str, Any] | None:
        """获取交易详情（json 编码，支持 v0 交易）"""
        logger.debug("rpc_get_solana_transaction", signature=signature)
        return await self._call(
            "getTransaction",
            [signature, {"encoding": "json", "maxSupportedTransactionVersion": 0}],
        )

    async def get_block_time(self, slot: int) -> int | None:
        """获取 slot 的出块时间（秒）"""
        logger.debug("rpc_get_block_time", slot=slot)
        return await self._call("getBlockTime", [slot])
