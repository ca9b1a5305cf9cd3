"""Analysis module for balance metrics and visualization."""

from rpcgen.analysis.metrics import balance_summary, gini_coefficient, transactions_to_dataframe
from rpcgen.analysis.plotting import plot_balance_history

__all__ = [
    "balance_summary",
    "gini_coefficient",
    "plot_balance_history",
    "transactions_to_dataframe",
]
