import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from rpcgen.errors import ConfigurationError


# JSON-RPC envelope constants
JSONRPC_VERSION: str = "2.0"
METHOD_NAME: str = "personal_sendTransaction"

# Strategy names
RANDOM_GENERATOR: str = "random"
WINNER_LOSER_GENERATOR: str = "winner-loser"
GENERATOR_NAMES: Tuple[str, ...] = (RANDOM_GENERATOR, WINNER_LOSER_GENERATOR)

DEFAULT_GENERATOR: str = RANDOM_GENERATOR
DEFAULT_OUTPUT: str = "rpc.json"

# Balances are unsigned 64-bit quantities
MAX_BALANCE: int = 2**64 - 1


@dataclass(frozen=True)
class GeneratorConfig:
    """Tunables for the transaction generation strategies."""

    # Share of the pool designated as winners (winner-loser strategy)
    WINNER_FRACTION: float = 0.2

    # Chance that a step moves funds from a winner back to a loser
    REVERSE_FLOW_PROBABILITY: float = 0.1

    # Upper bound on a winner's payout, as a fraction of its balance
    WINNER_PAYOUT_FRACTION: float = 0.1

    def __post_init__(self) -> None:
        if not 0.0 < self.WINNER_FRACTION < 1.0:
            raise ConfigurationError(
                f"WINNER_FRACTION must be in (0, 1), got {self.WINNER_FRACTION}"
            )
        if not 0.0 < self.REVERSE_FLOW_PROBABILITY < 1.0:
            raise ConfigurationError(
                "REVERSE_FLOW_PROBABILITY must be in (0, 1), "
                f"got {self.REVERSE_FLOW_PROBABILITY}"
            )
        if not 0.0 < self.WINNER_PAYOUT_FRACTION <= 1.0:
            raise ConfigurationError(
                "WINNER_PAYOUT_FRACTION must be in (0, 1], "
                f"got {self.WINNER_PAYOUT_FRACTION}"
            )


class AccountEntry(BaseModel):
    """One account as declared in the config file."""

    model_config = ConfigDict(frozen=True)

    id: str
    balance: int
    password: str

    @field_validator("balance", mode="before")
    @classmethod
    def _parse_balance(cls, value: object) -> int:
        # Balances are written as decimal strings so they can exceed JSON number precision
        if isinstance(value, str):
            text = value.strip()
            if not (text.isascii() and text.isdigit()):
                raise ValueError(f"Unable to parse balance {value!r}")
            value = int(text)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Unable to parse balance {value!r}")
        if value > MAX_BALANCE:
            raise ValueError(f"Balance {value} exceeds {MAX_BALANCE}")
        return value


class ConfigFile(BaseModel):
    """Contents of the JSON config file. Every setting except accounts is optional."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    generator: Optional[str] = None
    count: Optional[int] = Field(default=None, ge=0)
    filter_from: Optional[str] = Field(default=None, alias="filter-from")
    chunk_size: Optional[int] = Field(default=None, alias="chunk-size", ge=1)
    seed: Optional[int] = Field(default=None, ge=0)
    accounts: List[AccountEntry]


def load_config(config_path: str | Path) -> ConfigFile:
    """
    Load and validate a JSON config file.

    Args:
        config_path: Path to the config file.

    Returns:
        The parsed ConfigFile.

    Raises:
        ConfigurationError: If the file is missing, unreadable, not UTF-8 JSON
            or fails validation.
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Unable to parse config file {path}: {exc}") from exc

    try:
        return ConfigFile.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid config file {path}: {exc}") from exc


@dataclass(frozen=True)
class RunConfig:
    """Effective settings for one generation run."""

    accounts: Tuple[AccountEntry, ...]
    generator: str = DEFAULT_GENERATOR
    count: Optional[int] = None
    filter_from: Optional[str] = None
    chunk_size: Optional[int] = None
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.generator not in GENERATOR_NAMES:
            raise ConfigurationError(
                f"Unknown generator type {self.generator!r}, "
                f"expected one of {', '.join(GENERATOR_NAMES)}"
            )
        if len(self.accounts) < 2:
            raise ConfigurationError(
                f"At least 2 accounts are required, got {len(self.accounts)}"
            )

        ids = [account.id for account in self.accounts]
        duplicates = sorted({account_id for account_id in ids if ids.count(account_id) > 1})
        if duplicates:
            raise ConfigurationError(f"Duplicate account ids: {', '.join(duplicates)}")

        total = sum(account.balance for account in self.accounts)
        if total > MAX_BALANCE:
            raise ConfigurationError(
                f"Total balance {total} exceeds {MAX_BALANCE}"
            )

        # Strategies never end on their own while the pool holds funds
        if self.count is None:
            raise ConfigurationError(
                'No transaction count given; set "count" or pass --transactions'
            )
        if self.count < 0:
            raise ConfigurationError(f"count must be non-negative, got {self.count}")
        if self.chunk_size is not None and self.chunk_size < 1:
            raise ConfigurationError(
                f"chunk-size must be at least 1, got {self.chunk_size}"
            )
        if self.seed is not None and self.seed < 0:
            raise ConfigurationError(f"seed must be non-negative, got {self.seed}")
        if self.filter_from is not None and self.filter_from not in ids:
            raise ConfigurationError(
                f"filter-from account {self.filter_from!r} is not in the account pool"
            )

    @property
    def balances(self) -> Dict[str, int]:
        """Initial balances keyed by account id, in config order."""
        return {account.id: account.balance for account in self.accounts}

    @property
    def passwords(self) -> Dict[str, str]:
        """Account passwords keyed by account id."""
        return {account.id: account.password for account in self.accounts}


def merge_overrides(
    config_file: ConfigFile,
    generator: Optional[str] = None,
    count: Optional[int] = None,
    filter_from: Optional[str] = None,
    chunk_size: Optional[int] = None,
    seed: Optional[int] = None,
) -> RunConfig:
    """
    Combine file settings with command-line overrides.

    Command-line values take precedence; anything left unset falls back to the
    file, then to the defaults.

    Raises:
        ConfigurationError: If the merged settings are invalid.
    """
    return RunConfig(
        accounts=tuple(config_file.accounts),
        generator=_first_set(generator, config_file.generator, DEFAULT_GENERATOR),
        count=_first_set(count, config_file.count),
        filter_from=_first_set(filter_from, config_file.filter_from),
        chunk_size=_first_set(chunk_size, config_file.chunk_size),
        seed=_first_set(seed, config_file.seed),
    )


def _first_set(*values):
    """Return the first value that is not None."""
    return next((value for value in values if value is not None), None)
