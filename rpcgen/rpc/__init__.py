"""JSON-RPC request envelopes for generated transactions."""

from rpcgen.rpc.envelope import (
    RpcRequest,
    SendTransactionParams,
    build_requests,
    dump_requests,
    to_hex,
)

__all__ = [
    "RpcRequest",
    "SendTransactionParams",
    "build_requests",
    "dump_requests",
    "to_hex",
]
