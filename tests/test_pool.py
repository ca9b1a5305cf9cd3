"""Tests for the account pool."""

import pytest

from rpcgen.accounts.pool import AccountPool
from rpcgen.errors import GenerationError
from rpcgen.models import Account


@pytest.fixture
def pool() -> AccountPool:
    """Create a pool with three funded accounts."""
    return AccountPool.from_balances({"a": 100, "b": 50, "c": 0})


class TestAccountPoolAccess:
    """Tests for indexed and keyed access."""

    def test_preserves_order(self, pool: AccountPool) -> None:
        """Accounts keep the order they were declared in."""
        assert [account.account_id for account in pool] == ["a", "b", "c"]
        assert pool[1] == Account("b", 50)

    def test_len_and_contains(self, pool: AccountPool) -> None:
        """Pool size and membership reflect construction."""
        assert len(pool) == 3
        assert "a" in pool
        assert "z" not in pool

    def test_index_of(self, pool: AccountPool) -> None:
        """index_of returns the declared position."""
        assert pool.index_of("c") == 2

    def test_total_and_balances(self, pool: AccountPool) -> None:
        """Totals and balance snapshots match the inputs."""
        assert pool.total_balance() == 150
        assert pool.balances() == {"a": 100, "b": 50, "c": 0}


class TestTransfer:
    """Tests for applying transfers."""

    def test_transfer_moves_funds(self, pool: AccountPool) -> None:
        """Sender is debited and receiver credited by the same amount."""
        pool.transfer(0, 2, 40)

        assert pool.balances() == {"a": 60, "b": 50, "c": 40}
        assert pool.total_balance() == 150

    def test_transfer_full_balance(self, pool: AccountPool) -> None:
        """Sending the entire balance leaves the sender at zero."""
        pool.transfer(1, 0, 50)
        assert pool[1].balance == 0
        assert pool[0].balance == 150

    def test_zero_transfer_is_allowed(self, pool: AccountPool) -> None:
        """A zero amount is a legal transfer, even from an empty account."""
        pool.transfer(2, 0, 0)
        assert pool.balances() == {"a": 100, "b": 50, "c": 0}

    def test_overdraft_rejected(self, pool: AccountPool) -> None:
        """Transfers larger than the sender's balance raise and change nothing."""
        with pytest.raises(GenerationError):
            pool.transfer(1, 0, 51)
        assert pool.balances() == {"a": 100, "b": 50, "c": 0}

    def test_negative_amount_rejected(self, pool: AccountPool) -> None:
        """Negative amounts raise."""
        with pytest.raises(GenerationError):
            pool.transfer(0, 1, -1)

    def test_self_transfer_rejected(self, pool: AccountPool) -> None:
        """Sender and receiver must differ."""
        with pytest.raises(GenerationError):
            pool.transfer(0, 0, 10)
