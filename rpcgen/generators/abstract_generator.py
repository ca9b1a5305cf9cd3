"""Abstract base class for transaction generation strategies."""

from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np

from rpcgen.accounts.pool import AccountPool
from rpcgen.config import GeneratorConfig
from rpcgen.errors import ConfigurationError
from rpcgen.logging_config import get_logger
from rpcgen.models import Transaction

logger = get_logger("generators")


class AbstractTransactionGenerator(ABC):
    """
    Lazy, non-restartable sequence of transfers over an account pool.

    Each call to ``next()`` selects a sender, a distinct receiver and an amount
    no larger than the sender's balance, applies the transfer to the pool and
    returns it. Subclasses only decide the selection policy.

    The sequence ends when the pool holds no funds at all. Balances are
    conserved, so this is known at construction and no randomness is drawn.
    """

    def __init__(
        self,
        pool: AccountPool,
        rng: np.random.Generator,
        config: GeneratorConfig | None = None,
    ) -> None:
        """
        Initialize the generator.

        Args:
            pool: Account pool; mutated by every generated transaction.
            rng: Seeded random source, owned by this generator.
            config: Strategy tunables. Defaults to GeneratorConfig().

        Raises:
            ConfigurationError: If the pool has fewer than two accounts.
        """
        if len(pool) < 2:
            raise ConfigurationError(
                f"{self.get_name()} generator needs at least 2 accounts, got {len(pool)}"
            )

        self.pool = pool
        self.rng = rng
        self.config = config or GeneratorConfig()
        self._exhausted = pool.total_balance() == 0

        if self._exhausted:
            logger.warning("All balances are zero; no transactions can be generated")

    def __iter__(self) -> "AbstractTransactionGenerator":
        return self

    def __next__(self) -> Transaction:
        if self._exhausted:
            raise StopIteration

        sender_index, receiver_index, amount = self._select_transfer()
        self.pool.transfer(sender_index, receiver_index, amount)

        return Transaction(
            sender=self.pool[sender_index].account_id,
            receiver=self.pool[receiver_index].account_id,
            amount=amount,
        )

    def _draw_amount(self, upper: int) -> int:
        """Draw an amount uniformly from [0, upper]."""
        return int(self.rng.integers(0, upper, endpoint=True, dtype=np.uint64))

    def _draw_index(self, size: int) -> int:
        """Draw an index uniformly from [0, size)."""
        return int(self.rng.integers(size))

    @abstractmethod
    def _select_transfer(self) -> Tuple[int, int, int]:
        """
        Choose the next transfer.

        Returns:
            Tuple of (sender_index, receiver_index, amount) with distinct indices
            and 0 <= amount <= sender balance.
        """

    @abstractmethod
    def get_name(self) -> str:
        """
        Get the strategy's identifying name.

        Returns:
            The name used to select the strategy (e.g. "random").
        """
