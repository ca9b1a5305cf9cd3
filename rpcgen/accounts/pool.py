"""Mutable pool of accounts shared between a generator and its caller."""

from typing import Dict, Iterator, List, Mapping

from rpcgen.errors import GenerationError
from rpcgen.models import Account


class AccountPool:
    """
    Ordered collection of accounts whose balances change as transfers are applied.

    Accounts are fixed at construction: none are added or removed afterwards.
    Ids are assumed unique; the config layer checks this before a pool is built.
    """

    def __init__(self, accounts: List[Account]) -> None:
        """
        Initialize the pool.

        Args:
            accounts: Accounts in the order they should be indexed.
        """
        self._accounts = list(accounts)
        self._index: Dict[str, int] = {
            account.account_id: i for i, account in enumerate(self._accounts)
        }

    @classmethod
    def from_balances(cls, balances: Mapping[str, int]) -> "AccountPool":
        """Build a pool from an ordered id -> balance mapping."""
        return cls([Account(account_id, balance) for account_id, balance in balances.items()])

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self) -> Iterator[Account]:
        return iter(self._accounts)

    def __getitem__(self, index: int) -> Account:
        return self._accounts[index]

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._index

    def index_of(self, account_id: str) -> int:
        """Return the position of an account in the pool."""
        return self._index[account_id]

    def total_balance(self) -> int:
        """Sum of all balances. Constant across transfers."""
        return sum(account.balance for account in self._accounts)

    def balances(self) -> Dict[str, int]:
        """Current balances keyed by account id, in pool order."""
        return {account.account_id: account.balance for account in self._accounts}

    def transfer(self, sender_index: int, receiver_index: int, amount: int) -> None:
        """
        Move funds between two accounts.

        Raises:
            GenerationError: If sender and receiver are the same account, or the
                amount is negative or larger than the sender's balance.
        """
        if sender_index == receiver_index:
            raise GenerationError(
                f"Sender and receiver are the same account: "
                f"{self._accounts[sender_index].account_id}"
            )

        sender = self._accounts[sender_index]
        receiver = self._accounts[receiver_index]

        if amount < 0 or amount > sender.balance:
            raise GenerationError(
                f"Transfer of {amount} from {sender.account_id} exceeds "
                f"balance {sender.balance}"
            )

        sender.balance -= amount
        receiver.balance += amount
