"""Runs one strategy over a fresh account pool and collects the output."""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List

import numpy as np

from rpcgen.accounts.pool import AccountPool
from rpcgen.config import GeneratorConfig, RunConfig
from rpcgen.errors import ConfigurationError
from rpcgen.generators import create_generator
from rpcgen.logging_config import get_logger
from rpcgen.models import Transaction
from rpcgen.sequence.combinators import FilterFrom, Take

logger = get_logger("session")


@dataclass
class SessionResult:
    """Results from a generation run."""

    generator_name: str
    seed: int
    transactions: List[Transaction]
    initial_balances: Dict[str, int]
    final_balances: Dict[str, int]
    requested: int
    truncated: bool = False
    balance_history: List[Dict[str, int]] = field(default_factory=list)
    # Reported-transaction count at which each balance_history entry was taken
    history_steps: List[int] = field(default_factory=list)

    @property
    def total_transactions(self) -> int:
        """Number of transactions reported (after filtering)."""
        return len(self.transactions)

    @property
    def total_volume(self) -> int:
        """Sum of all reported transfer amounts."""
        return sum(tx.amount for tx in self.transactions)


class GenerationSession:
    """
    Drives a single generator to completion.

    Builds the account pool from the run config, seeds the random source,
    wraps the strategy in FilterFrom and Take as configured and materializes
    the result. The pool is owned by the session for the whole run and its
    final balances are returned with the transactions.
    """

    def __init__(
        self,
        run_config: RunConfig,
        generator_config: GeneratorConfig | None = None,
        record_history: bool = False,
        history_interval: int = 1,
    ) -> None:
        """
        Initialize the session.

        Args:
            run_config: Validated run settings.
            generator_config: Strategy tunables. Defaults to GeneratorConfig().
            record_history: Snapshot all balances while the run progresses.
            history_interval: Take a snapshot every this many reported
                transactions. The final state is always included.
        """
        self.run_config = run_config
        self.generator_config = generator_config or GeneratorConfig()
        if history_interval < 1:
            raise ConfigurationError(
                f"history_interval must be at least 1, got {history_interval}"
            )
        self.record_history = record_history
        self.history_interval = history_interval
        self.seed = run_config.seed if run_config.seed is not None else self._fresh_seed()

    @staticmethod
    def _fresh_seed() -> int:
        """Draw a new seed from OS entropy."""
        return int(np.random.SeedSequence().entropy)

    def run(self) -> SessionResult:
        """
        Execute the run.

        Returns:
            SessionResult with the reported transactions and final balances.

        Raises:
            ConfigurationError: If the strategy cannot be built for this pool.
        """
        pool = AccountPool.from_balances(self.run_config.balances)
        initial_balances = pool.balances()
        rng = np.random.default_rng(self.seed)

        generator = create_generator(
            self.run_config.generator, pool, rng, self.generator_config
        )
        logger.info(
            "Generating %d transactions with the %s generator (seed %d)",
            self.run_config.count,
            generator.get_name(),
            self.seed,
        )

        stream: Iterator[Transaction] = generator
        if self.run_config.filter_from is not None:
            stream = FilterFrom(stream, self.run_config.filter_from)
        take = Take(stream, self.run_config.count)

        transactions: List[Transaction] = []
        history: List[Dict[str, int]] = []
        history_steps: List[int] = []
        for tx in take:
            transactions.append(tx)
            if self.record_history and len(transactions) % self.history_interval == 0:
                history.append(pool.balances())
                history_steps.append(len(transactions))

        if self.record_history and transactions and history_steps[-1:] != [len(transactions)]:
            history.append(pool.balances())
            history_steps.append(len(transactions))

        return SessionResult(
            generator_name=generator.get_name(),
            seed=self.seed,
            transactions=transactions,
            initial_balances=initial_balances,
            final_balances=pool.balances(),
            requested=self.run_config.count,
            truncated=take.truncated,
            balance_history=history,
            history_steps=history_steps,
        )
