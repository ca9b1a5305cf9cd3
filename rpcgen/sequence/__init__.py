"""Composable combinators over transaction sequences."""

from rpcgen.sequence.combinators import FilterFrom, Take

__all__ = ["FilterFrom", "Take"]
