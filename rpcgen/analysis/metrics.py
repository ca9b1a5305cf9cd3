"""Metrics calculations for generated transaction runs."""

from typing import Iterable, List

import numpy as np
import pandas as pd

from rpcgen.models import Transaction
from rpcgen.session.session import SessionResult

TRANSACTION_COLUMNS: List[str] = ["sender", "receiver", "amount"]


def gini_coefficient(balances: Iterable[int]) -> float:
    """
    Calculate the Gini coefficient of a balance distribution.

    0.0 means every account holds the same balance; values approaching 1.0
    mean a single account holds nearly everything. The uniform strategy keeps
    this low, the winner-loser strategy drives it up.

    Args:
        balances: Non-negative account balances.

    Returns:
        Gini coefficient as a float. Returns 0.0 for empty or all-zero input.
    """
    values = np.sort(np.array([float(b) for b in balances], dtype=np.float64))
    if values.size == 0 or values.sum() == 0:
        return 0.0

    # Closed form over sorted values: sum((2i - n - 1) * x_i) / (n * sum(x))
    n = values.size
    ranks = np.arange(1, n + 1)
    return float(np.sum((2 * ranks - n - 1) * values) / (n * values.sum()))


def transactions_to_dataframe(transactions: List[Transaction]) -> pd.DataFrame:
    """Convert a list of Transaction objects to a Pandas DataFrame."""
    if not transactions:
        return pd.DataFrame(columns=TRANSACTION_COLUMNS)
    return pd.DataFrame([tx.model_dump() for tx in transactions], columns=TRANSACTION_COLUMNS)


def balance_summary(result: SessionResult) -> pd.DataFrame:
    """
    Build a per-account summary of a run.

    Counts and flows cover reported transactions only. When a sender filter
    was active, ``net_flow`` can differ from ``final - initial`` because
    filtered-out transfers still moved funds.

    Returns:
        DataFrame indexed by account id with columns initial, final, change,
        sent_count, received_count, sent_volume, received_volume and net_flow.
    """
    df = transactions_to_dataframe(result.transactions)

    summary = pd.DataFrame(
        {
            "initial": pd.Series(result.initial_balances, dtype="object"),
            "final": pd.Series(result.final_balances, dtype="object"),
        }
    )
    summary.index.name = "account"
    summary["change"] = summary["final"] - summary["initial"]

    sent = df.groupby("sender")["amount"]
    received = df.groupby("receiver")["amount"]

    summary["sent_count"] = sent.count().reindex(summary.index, fill_value=0).astype(int)
    summary["received_count"] = received.count().reindex(summary.index, fill_value=0).astype(int)
    summary["sent_volume"] = sent.sum().reindex(summary.index, fill_value=0).astype("object")
    summary["received_volume"] = received.sum().reindex(summary.index, fill_value=0).astype("object")
    summary["net_flow"] = summary["received_volume"] - summary["sent_volume"]

    return summary
