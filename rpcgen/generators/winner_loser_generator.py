"""Winner-loser transaction strategy with skewed fund flow."""

from typing import Dict, List, Tuple

import numpy as np

from rpcgen.accounts.pool import AccountPool
from rpcgen.config import WINNER_LOSER_GENERATOR, GeneratorConfig
from rpcgen.generators.abstract_generator import AbstractTransactionGenerator

WINNER: str = "winner"
LOSER: str = "loser"


class WinnerLoserGenerator(AbstractTransactionGenerator):
    """
    Concentrates funds in a small set of winner accounts.

    Winners are drawn from a seed-derived permutation of the pool when the
    generator is created. Most steps move up to a loser's full balance to a
    winner. With probability REVERSE_FLOW_PROBABILITY a winner pays a loser
    instead, capped at WINNER_PAYOUT_FRACTION of its balance, so losers keep
    receiving occasionally without undoing the skew.
    """

    def __init__(
        self,
        pool: AccountPool,
        rng: np.random.Generator,
        config: GeneratorConfig | None = None,
    ) -> None:
        super().__init__(pool, rng, config)

        size = len(pool)
        winner_count = max(1, min(size - 1, round(size * self.config.WINNER_FRACTION)))

        order = [int(i) for i in self.rng.permutation(size)]
        self._winners: List[int] = sorted(order[:winner_count])
        self._losers: List[int] = sorted(order[winner_count:])

    @property
    def winner_ids(self) -> List[str]:
        """Ids of the accounts designated as winners, in pool order."""
        return [self.pool[i].account_id for i in self._winners]

    @property
    def loser_ids(self) -> List[str]:
        """Ids of the accounts designated as losers, in pool order."""
        return [self.pool[i].account_id for i in self._losers]

    def roles(self) -> Dict[str, str]:
        """Map every account id to its role."""
        winners = set(self._winners)
        return {
            account.account_id: WINNER if i in winners else LOSER
            for i, account in enumerate(self.pool)
        }

    def _select_transfer(self) -> Tuple[int, int, int]:
        if self.rng.random() < self.config.REVERSE_FLOW_PROBABILITY:
            sender = self._winners[self._draw_index(len(self._winners))]
            receiver = self._losers[self._draw_index(len(self._losers))]
            balance = self.pool[sender].balance
            # Float rounding can push the product past the balance for huge values
            cap = min(balance, int(balance * self.config.WINNER_PAYOUT_FRACTION))
        else:
            sender = self._losers[self._draw_index(len(self._losers))]
            receiver = self._winners[self._draw_index(len(self._winners))]
            cap = self.pool[sender].balance

        return sender, receiver, self._draw_amount(cap)

    def get_name(self) -> str:
        """Returns the strategy identifier."""
        return WINNER_LOSER_GENERATOR
