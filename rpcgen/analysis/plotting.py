"""Visualization functions for generation runs."""

from pathlib import Path
from typing import List

import matplotlib.pyplot as plt

from rpcgen.analysis.metrics import gini_coefficient
from rpcgen.logging_config import get_logger
from rpcgen.session.session import SessionResult

logger = get_logger("plotting")

# Lines beyond this count are drawn unlabeled to keep the legend readable
MAX_LEGEND_ACCOUNTS: int = 10
MAX_PLOT_POINTS: int = 1000


def history_interval_for(count: int) -> int:
    """Snapshot interval that keeps a run of ``count`` transactions near MAX_PLOT_POINTS points."""
    return max(1, count // MAX_PLOT_POINTS)


def plot_balance_history(
    result: SessionResult,
    output_dir: str | Path,
    filename_suffix: str = "",
) -> List[Path]:
    """
    Generate balance charts for a run.

    Creates two charts:
    1. Balance Over Time - one line per account, starting from the initial balances
    2. Final Balances - bar chart sorted by balance, titled with the Gini coefficient

    The first chart needs ``balance_history``; it is skipped when the session
    did not record one.

    Args:
        result: SessionResult to visualize.
        output_dir: Directory path to save the generated plots.
        filename_suffix: Optional suffix for output filenames.

    Returns:
        Paths of the saved images.
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    saved: List[Path] = []
    if result.balance_history:
        saved.append(_plot_history(result, output_path, filename_suffix))
    saved.append(_plot_final_balances(result, output_path, filename_suffix))
    return saved


def _plot_history(result: SessionResult, output_path: Path, filename_suffix: str) -> Path:
    """Generate per-account balance over time chart."""
    plt.style.use("seaborn-v0_8-whitegrid")
    fig, ax = plt.subplots(figsize=(12, 6))

    snapshots = [result.initial_balances] + result.balance_history
    steps = [0] + (result.history_steps or list(range(1, len(snapshots))))

    # Downsample for cleaner plotting
    sample_rate = max(1, len(snapshots) // MAX_PLOT_POINTS)
    positions = list(range(0, len(snapshots), sample_rate))
    x_values = [steps[pos] for pos in positions]

    for i, account_id in enumerate(result.initial_balances):
        values = [float(snapshots[pos][account_id]) for pos in positions]
        ax.plot(
            x_values,
            values,
            label=account_id if i < MAX_LEGEND_ACCOUNTS else None,
            linewidth=1.2,
            alpha=0.8,
        )

    ax.set_xlabel("Transaction", fontsize=12)
    ax.set_ylabel("Balance", fontsize=12)
    ax.set_title(
        f"Account Balances Over Time ({result.generator_name} generator)",
        fontsize=14,
        fontweight="bold",
    )
    ax.legend(loc="best", frameon=True)
    ax.set_xlim(left=0)
    ax.set_ylim(bottom=0)

    path = output_path / f"balance_history{filename_suffix}.png"
    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    logger.info("Saved: %s", path)
    return path


def _plot_final_balances(result: SessionResult, output_path: Path, filename_suffix: str) -> Path:
    """Generate final balance distribution bar chart."""
    plt.style.use("seaborn-v0_8-whitegrid")
    fig, ax = plt.subplots(figsize=(12, 6))

    ordered = sorted(result.final_balances.items(), key=lambda item: item[1], reverse=True)
    account_ids = [account_id for account_id, _ in ordered]
    balances = [float(balance) for _, balance in ordered]
    gini = gini_coefficient(result.final_balances.values())

    x_positions = range(len(account_ids))
    ax.bar(x_positions, balances, color="#3B82F6", edgecolor="white", linewidth=1.5)
    ax.set_xlabel("Account", fontsize=12)
    ax.set_ylabel("Final Balance", fontsize=12)
    ax.set_title(
        f"Final Balances after {result.total_transactions} Transactions (Gini {gini:.3f})",
        fontsize=13,
        fontweight="bold",
    )
    ax.set_xticks(x_positions)
    ax.set_xticklabels(account_ids, rotation=45, ha="right")
    ax.set_ylim(bottom=0)

    path = output_path / f"final_balances{filename_suffix}.png"
    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    logger.info("Saved: %s", path)
    return path
