"""personal_sendTransaction request models and serialization."""

from typing import Iterable, List, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from rpcgen.config import JSONRPC_VERSION, METHOD_NAME
from rpcgen.errors import ConfigurationError
from rpcgen.models import Transaction


class SendTransactionParams(BaseModel):
    """Transaction object passed as the first positional RPC parameter."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: str = Field(alias="from")
    to: str
    value: str


class RpcRequest(BaseModel):
    """A JSON-RPC 2.0 request envelope."""

    model_config = ConfigDict(frozen=True)

    jsonrpc: str = JSONRPC_VERSION
    method: str = METHOD_NAME
    params: Tuple[SendTransactionParams, str]
    id: int


_REQUEST_LIST = TypeAdapter(List[RpcRequest])


def to_hex(amount: int) -> str:
    """Render an amount as a 0x-prefixed lowercase hex quantity."""
    if amount < 0:
        raise ValueError(f"amount must be non-negative, got {amount}")
    return f"0x{amount:x}"


def build_requests(
    transactions: Iterable[Transaction],
    passwords: Mapping[str, str],
) -> List[RpcRequest]:
    """
    Wrap transactions in request envelopes with ids counting up from 0.

    Args:
        transactions: Transactions in output order.
        passwords: Account id -> password used to unlock the sender.

    Raises:
        ConfigurationError: If a sender has no password.
    """
    requests: List[RpcRequest] = []

    for request_id, tx in enumerate(transactions):
        password = passwords.get(tx.sender)
        if password is None:
            raise ConfigurationError(f"No password configured for account {tx.sender}")

        params = SendTransactionParams(
            from_=tx.sender,
            to=tx.receiver,
            value=to_hex(tx.amount),
        )
        requests.append(RpcRequest(params=(params, password), id=request_id))

    return requests


def dump_requests(requests: List[RpcRequest]) -> str:
    """Serialize requests as a compact JSON array."""
    return _REQUEST_LIST.dump_json(requests, by_alias=True).decode("utf-8")
