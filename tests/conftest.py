from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx
import pytest
import pytest_asyncio

from tx_resolver.config import Settings
from tx_resolver.registry import ChainConfig, ChainRegistry, NativeCurrency


EVM_HASH = "0x" + "ab" * 32
SOLANA_SIGNATURE = "4" * 44 + "k" * 44

EVM_A_URL = "https://evm-a.test/rpc"
EVM_B_URL = "https://evm-b.test/rpc"
EVM_C_URL = "https://evm-c.test/rpc"
SOLANA_URL = "https://solana.test/rpc"

SENDER = "0x1111111111111111111111111111111111111111"
RECIPIENT = "0x2222222222222222222222222222222222222222"


def evm_chain(chain_id: int, name: str, rpc_url: str, symbol: str = "ETH") -> ChainConfig:
    return ChainConfig(
        chain_id=chain_id,
        name=name,
        rpc_url=rpc_url,
        explorer_url=f"https://{name.lower()}.explorer.test",
        type="evm",
        native_currency=NativeCurrency(name=symbol, symbol=symbol, decimals=18),
    )


SOLANA_CHAIN = ChainConfig(
    chain_id=101,
    name="Solana",
    rpc_url=SOLANA_URL,
    explorer_url="https://solscan.io",
    type="solana",
    native_currency=NativeCurrency(name="Solana", symbol="SOL", decimals=9),
)


def make_evm_tx(**overrides: Any) -> dict[str, Any]:
    tx = {
        "hash": EVM_HASH,
        "blockNumber": "0x10",
        "from": SENDER,
        "to": RECIPIENT,
        "value": "0xde0b6b3a7640000",  # 1 ETH
        "gasPrice": "0x4a817c800",  # 20 Gwei
    }
    tx.update(overrides)
    return tx


def make_receipt(**overrides: Any) -> dict[str, Any]:
    receipt = {
        "transactionHash": EVM_HASH,
        "status": "0x1",
        "gasUsed": "0x5208",  # 21000
        "logs": [],
    }
    receipt.update(overrides)
    return receipt


def make_block(timestamp: int = 1_700_000_000) -> dict[str, Any]:
    return {"number": "0x10", "timestamp": hex(timestamp)}


def make_solana_result(
    instructions: list[dict[str, Any]] | None = None,
    account_keys: list[Any] | None = None,
    fee: int = 5000,
    err: Any = None,
    slot: int = 250_000_000,
) -> dict[str, Any]:
    return {
        "slot": slot,
        "blockTime": None,
        "meta": {"err": err, "fee": fee},
        "transaction": {
            "signatures": [SOLANA_SIGNATURE],
            "message": {
                "accountKeys": account_keys
                if account_keys is not None
                else ["FeePayer1111111111111111111111111111111111", "Recipient111111111111111111111111111111111", "11111111111111111111111111111111"],
                "instructions": instructions if instructions is not None else [],
            },
        },
    }


class FakeRPC:
    """按 (rpc_url, method) 路由的 JSON-RPC 假服务"""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], dict[str, Any]] = {}
        self.calls: list[tuple[str, str, list[Any]]] = []

    def add(
        self,
        url: str,
        method: str,
        result: Any = None,
        *,
        error: dict[str, Any] | None = None,
        exc: Exception | None = None,
        status_code: int = 200,
        delay: float = 0.0,
        raw: str | None = None,
    ) -> None:
        self.routes[(url, method)] = {
            "result": result,
            "error": error,
            "exc": exc,
            "status_code": status_code,
            "delay": delay,
            "raw": raw,
        }

    def add_evm(
        self,
        url: str,
        tx: dict[str, Any] | None = None,
        receipt: dict[str, Any] | None = None,
        block: dict[str, Any] | None = None,
    ) -> None:
        self.add(url, "eth_getTransactionByHash", tx if tx is not None else make_evm_tx())
        self.add(url, "eth_getTransactionReceipt", receipt if receipt is not None else make_receipt())
        self.add(url, "eth_getBlockByNumber", block if block is not None else make_block())

    def methods_called(self, url: str) -> list[str]:
        return [method for call_url, method, _ in self.calls if call_url == url]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        url = str(request.url)
        method = payload["method"]
        self.calls.append((url, method, payload["params"]))

        route = self.routes.get((url, method))
        if route is None:
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "result": None})

        if route["delay"]:
            await asyncio.sleep(route["delay"])
        if route["exc"] is not None:
            raise route["exc"]
        if route["raw"] is not None:
            return httpx.Response(route["status_code"], text=route["raw"])

        body: dict[str, Any] = {"jsonrpc": "2.0", "id": payload["id"]}
        if route["error"] is not None:
            body["error"] = route["error"]
        else:
            body["result"] = route["result"]
        return httpx.Response(route["status_code"], json=body)


@pytest.fixture
def fake_rpc() -> FakeRPC:
    return FakeRPC()


@pytest_asyncio.fixture
async def http_client(fake_rpc: FakeRPC):
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_rpc.handler)) as client:
        yield client


@pytest.fixture
def settings() -> Settings:
    return Settings(RPC_TIMEOUT_S=2.0, RESOLVE_TIMEOUT_S=5.0, RPC_MAX_ATTEMPTS=1)


@pytest.fixture
def registry() -> ChainRegistry:
    return ChainRegistry(
        [
            evm_chain(1, "ChainA", EVM_A_URL),
            evm_chain(2, "ChainB", EVM_B_URL, symbol="BNB"),
            evm_chain(3, "ChainC", EVM_C_URL),
            SOLANA_CHAIN,
        ]
    )
