from .rpc_client import RPCClient, RPCError, EvmRPCClient, SolanaRPCClient

__all__ = [
    "RPCClient",
    "RPCError",
    "EvmRPCClient",
    "SolanaRPCClient",
]
