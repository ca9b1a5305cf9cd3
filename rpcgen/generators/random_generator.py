"""Uniform random transaction strategy."""

from typing import Tuple

from rpcgen.config import RANDOM_GENERATOR
from rpcgen.generators.abstract_generator import AbstractTransactionGenerator


class UniformRandomGenerator(AbstractTransactionGenerator):
    """
    Picks sender and receiver uniformly from the pool and sends a uniform
    share of the sender's balance.

    No account is privileged, so balances follow a symmetric random walk
    bounded below by zero.
    """

    def _select_transfer(self) -> Tuple[int, int, int]:
        size = len(self.pool)
        sender = self._draw_index(size)

        # Draw from the other size - 1 accounts so the receiver never equals the sender
        receiver = self._draw_index(size - 1)
        if receiver >= sender:
            receiver += 1

        amount = self._draw_amount(self.pool[sender].balance)
        return sender, receiver, amount

    def get_name(self) -> str:
        """Returns the strategy identifier."""
        return RANDOM_GENERATOR
