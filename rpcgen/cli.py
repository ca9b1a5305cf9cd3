"""Command-line entry point: generate personal_sendTransaction request files."""

import argparse
import sys
from typing import List, Optional

from rpcgen.analysis.metrics import balance_summary, gini_coefficient
from rpcgen.analysis.plotting import history_interval_for, plot_balance_history
from rpcgen.config import DEFAULT_OUTPUT, GENERATOR_NAMES, load_config, merge_overrides
from rpcgen.errors import ConfigurationError
from rpcgen.logging_config import setup_logging
from rpcgen.output.writer import write_chunks
from rpcgen.rpc.envelope import build_requests
from rpcgen.session.session import GenerationSession, SessionResult

EXIT_OUTPUT_ERROR: int = 1
EXIT_CONFIG_ERROR: int = 2


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="rpcgen",
        description="Generate JSON-RPC personal_sendTransaction bodies between a fixed set of accounts.",
    )
    parser.add_argument("--config", required=True, metavar="FILE.json", help="Account and run configuration")
    parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT, metavar="OUTPUT", help="Base name for output files")
    parser.add_argument("-g", "--generator", metavar="GENERATOR", help=f"One of: {', '.join(GENERATOR_NAMES)}")
    parser.add_argument("--transactions", type=int, metavar="N", help="Number of transactions to write")
    parser.add_argument("--filter-from", metavar="ADDRESS", help="Only write transactions sent by this account")
    parser.add_argument("--chunk-size", type=int, metavar="N", help="Maximum requests per output file")
    parser.add_argument("--seed", type=int, metavar="N", help="Random seed")
    parser.add_argument("--plot", metavar="DIR", help="Save balance charts to this directory")
    parser.add_argument("--summary", action="store_true", help="Print a per-account summary table")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    return parser


def print_final_balances(result: SessionResult) -> None:
    """Print the final balance of every account."""
    print(
        f"Final balances after {result.total_transactions} transactions "
        f"using the {result.generator_name} generator:"
    )
    for account_id, balance in result.final_balances.items():
        print(f"{account_id}:\t{balance}")


def print_run_summary(result: SessionResult) -> None:
    """Print a formatted per-account summary of the run."""
    summary = balance_summary(result)

    print("\n" + "=" * 60)
    print(f"Run Summary - {result.generator_name} generator")
    print("=" * 60)
    print(f"{'Transactions:':<30} {result.total_transactions:>20,}")
    print(f"{'Requested:':<30} {result.requested:>20,}")
    print(f"{'Total Volume:':<30} {result.total_volume:>20,}")
    print(f"{'Initial Gini:':<30} {gini_coefficient(result.initial_balances.values()):>20.3f}")
    print(f"{'Final Gini:':<30} {gini_coefficient(result.final_balances.values()):>20.3f}")
    print("-" * 60)
    print(summary.to_string())
    print("=" * 60 + "\n")


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, generate transactions and write the request files."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        config_file = load_config(args.config)
        run_config = merge_overrides(
            config_file,
            generator=args.generator,
            count=args.transactions,
            filter_from=args.filter_from,
            chunk_size=args.chunk_size,
            seed=args.seed,
        )
        session = GenerationSession(
            run_config,
            record_history=args.plot is not None,
            history_interval=history_interval_for(run_config.count),
        )
        print(f"Used seed {session.seed}")

        result = session.run()
        requests = build_requests(result.transactions, run_config.passwords)
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        written = write_chunks(requests, args.output, run_config.chunk_size)
    except OSError as exc:
        print(f"error: unable to write {args.output}: {exc}", file=sys.stderr)
        return EXIT_OUTPUT_ERROR
    for path in written:
        print(f"RPC body written to {path}")

    if result.truncated:
        print(
            f"warning: only {result.total_transactions} of {result.requested} "
            "requested transactions could be generated",
            file=sys.stderr,
        )

    print_final_balances(result)

    if args.summary:
        print_run_summary(result)

    if args.plot is not None:
        try:
            plots = plot_balance_history(result, args.plot)
        except OSError as exc:
            print(f"error: unable to save plots to {args.plot}: {exc}", file=sys.stderr)
            return EXIT_OUTPUT_ERROR
        for path in plots:
            print(f"Saved: {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
