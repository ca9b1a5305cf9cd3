"""Transaction generation strategies."""

from typing import Dict, Type

import numpy as np

from rpcgen.accounts.pool import AccountPool
from rpcgen.config import RANDOM_GENERATOR, WINNER_LOSER_GENERATOR, GeneratorConfig
from rpcgen.errors import ConfigurationError
from rpcgen.generators.abstract_generator import AbstractTransactionGenerator
from rpcgen.generators.random_generator import UniformRandomGenerator
from rpcgen.generators.winner_loser_generator import WinnerLoserGenerator

GENERATORS: Dict[str, Type[AbstractTransactionGenerator]] = {
    RANDOM_GENERATOR: UniformRandomGenerator,
    WINNER_LOSER_GENERATOR: WinnerLoserGenerator,
}


def create_generator(
    name: str,
    pool: AccountPool,
    rng: np.random.Generator,
    config: GeneratorConfig | None = None,
) -> AbstractTransactionGenerator:
    """
    Instantiate a strategy by name.

    Raises:
        ConfigurationError: If the name is unknown or the pool is too small.
    """
    generator_cls = GENERATORS.get(name)
    if generator_cls is None:
        raise ConfigurationError(f"Unknown generator type {name!r}")
    return generator_cls(pool, rng, config)


__all__ = [
    "AbstractTransactionGenerator",
    "GENERATORS",
    "UniformRandomGenerator",
    "WinnerLoserGenerator",
    "create_generator",
]
