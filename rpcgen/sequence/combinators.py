"""Lazy take/filter wrappers for transaction generators."""

from typing import Iterator

from rpcgen.logging_config import get_logger
from rpcgen.models import Transaction

logger = get_logger("sequence")


class Take:
    """
    Yields at most ``limit`` transactions from the wrapped sequence.

    If the source ends first, ``truncated`` is set and a warning is logged so a
    short result is never mistaken for a complete one.
    """

    def __init__(self, source: Iterator[Transaction], limit: int) -> None:
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")

        self._source = source
        self.limit = limit
        self.produced = 0
        self.truncated = False
        self._done = limit == 0

    def __iter__(self) -> "Take":
        return self

    def __next__(self) -> Transaction:
        if self._done:
            raise StopIteration

        try:
            tx = next(self._source)
        except StopIteration:
            self._done = True
            self.truncated = True
            logger.warning(
                "Sequence exhausted after %d of %d requested transactions",
                self.produced,
                self.limit,
            )
            raise

        self.produced += 1
        if self.produced >= self.limit:
            self._done = True
        return tx


class FilterFrom:
    """
    Yields only the transactions sent by ``account_id``.

    Filtering happens after generation: every transaction pulled from the
    source, matching or not, has already been applied to the pool.
    """

    def __init__(self, source: Iterator[Transaction], account_id: str) -> None:
        self._source = source
        self.account_id = account_id
        self.skipped = 0

    def __iter__(self) -> "FilterFrom":
        return self

    def __next__(self) -> Transaction:
        for tx in self._source:
            if tx.sender == self.account_id:
                return tx
            self.skipped += 1
        raise StopIteration
