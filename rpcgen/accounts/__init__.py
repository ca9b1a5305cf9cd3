"""In-memory account pool."""

from rpcgen.accounts.pool import AccountPool

__all__ = ["AccountPool"]
