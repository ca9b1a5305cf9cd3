from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict


@dataclass
class Account:
    """A transaction endpoint. Only the balance changes after construction."""

    account_id: str
    balance: int


class Transaction(BaseModel):
    """A single generated transfer between two pool accounts."""

    model_config = ConfigDict(frozen=True)

    sender: str
    receiver: str
    amount: int

    def as_tuple(self) -> tuple[str, str, int]:
        """Return the (sender, receiver, amount) triple."""
        return self.sender, self.receiver, self.amount
