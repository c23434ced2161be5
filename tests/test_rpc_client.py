import httpx
import pytest

from tx_resolver.integrations import EvmRPCClient, RPCError, SolanaRPCClient

from conftest import EVM_A_URL, EVM_HASH, SOLANA_URL


@pytest.mark.asyncio
async def test_request_envelope(fake_rpc, http_client):
    fake_rpc.add(EVM_A_URL, "eth_getBlockByNumber", {"timestamp": "0x1"})
    rpc = EvmRPCClient(EVM_A_URL, client=http_client)

    block = await rpc.get_block_by_number(16)

    assert block == {"timestamp": "0x1"}
    assert fake_rpc.calls == [(EVM_A_URL, "eth_getBlockByNumber", ["0x10", False])]


@pytest.mark.asyncio
async def test_null_result_passes_through(http_client):
    rpc = EvmRPCClient(EVM_A_URL, client=http_client)
    assert await rpc.get_transaction_by_hash(EVM_HASH) is None


@pytest.mark.asyncio
async def test_error_object_raises(fake_rpc, http_client):
    fake_rpc.add(SOLANA_URL, "getBlockTime", error={"code": -32009, "message": "slot skipped"})
    rpc = SolanaRPCClient(SOLANA_URL, client=http_client)

    with pytest.raises(RPCError) as exc_info:
        await rpc.get_block_time(1)

    assert exc_info.value.code == -32009
    assert "slot skipped" in str(exc_info.value)


@pytest.mark.parametrize("raw", ["not json", "[1, 2]"])
@pytest.mark.asyncio
async def test_malformed_body_raises(fake_rpc, http_client, raw):
    fake_rpc.add(EVM_A_URL, "eth_getTransactionReceipt", raw=raw)
    rpc = EvmRPCClient(EVM_A_URL, client=http_client)

    with pytest.raises(RPCError):
        await rpc.get_transaction_receipt(EVM_HASH)


@pytest.mark.asyncio
async def test_http_error_status_raises(fake_rpc, http_client):
    fake_rpc.add(EVM_A_URL, "eth_getTransactionByHash", status_code=503)
    rpc = EvmRPCClient(EVM_A_URL, client=http_client)

    with pytest.raises(httpx.HTTPStatusError):
        await rpc.get_transaction_by_hash(EVM_HASH)


@pytest.mark.asyncio
async def test_transport_errors_not_retried_by_default():
    attempts = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        rpc = EvmRPCClient(EVM_A_URL, client=client)
        with pytest.raises(httpx.ConnectError):
            await rpc.get_transaction_by_hash(EVM_HASH)

    assert len(attempts) == 1


@pytest.mark.asyncio
async def test_transport_errors_retried_when_configured():
    attempts = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        if len(attempts) < 2:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": {"hash": EVM_HASH}})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        rpc = EvmRPCClient(EVM_A_URL, client=client, max_attempts=3)
        tx = await rpc.get_transaction_by_hash(EVM_HASH)

    assert tx == {"hash": EVM_HASH}
    assert len(attempts) == 2


@pytest.mark.asyncio
async def test_rpc_errors_are_not_retried(fake_rpc, http_client):
    fake_rpc.add(EVM_A_URL, "eth_getTransactionByHash", error={"code": -32000, "message": "boom"})
    rpc = EvmRPCClient(EVM_A_URL, client=http_client, max_attempts=3)

    with pytest.raises(RPCError):
        await rpc.get_transaction_by_hash(EVM_HASH)

    assert len(fake_rpc.calls) == 1
