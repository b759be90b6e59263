#!/usr/bin/env python3
"""Generate a sample estate portfolio and save it as a JSON snapshot.

The snapshot holds one file per entity type and can be reloaded with
``estate_ledger.sinks.load_store``.
"""

import argparse
import sys
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from estate_ledger.config import EstateLedgerConfig
from estate_ledger.exceptions import EstateLedgerError
from estate_ledger.ledger import analytics
from estate_ledger.logging import get_logger, setup_logging
from estate_ledger.notifications import scan_reminders
from estate_ledger.scenarios import EstatePortfolioScenario
from estate_ledger.sinks import JsonFileSink

logger = get_logger("generate_sample_data")


def print_summary(summary: dict, overdue: list, output_dir: Path) -> None:
    """Print a summary of the generated portfolio."""
    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    for name, value in summary.items():
        print(f"{name + ':':28}{value}")

    if overdue:
        print("\nTop overdue tenants:")
        for row in overdue[:5]:
            print(
                f"  {row.tenant.full_name:24} {row.property_name:22} "
                f"{row.detail.total_due:>14,} ({row.detail.days_overdue} days)"
            )
    print(f"\nAll files saved to: {output_dir}")
    print("=" * 60)


def main() -> None:
    """Main entry point."""
    config = EstateLedgerConfig.from_env()

    parser = argparse.ArgumentParser(description="Generate a sample estate portfolio")
    parser.add_argument(
        "--properties",
        type=int,
        default=20,
        help="Number of properties to generate (default: 20)",
    )
    parser.add_argument(
        "--agents",
        type=int,
        default=4,
        help="Number of agents (default: 4)",
    )
    parser.add_argument(
        "--occupancy",
        type=float,
        default=0.75,
        help="Share of occupied properties, 0.0 to 1.0 (default: 0.75)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed if config.seed is not None else 42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        default=date.today(),
        help="Reference date, YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.output.json_output_dir,
        help="Directory for the JSON snapshot (default: output)",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        default=config.output.pretty_json,
        help="Pretty-print JSON files",
    )
    args = parser.parse_args()

    setup_logging(config.log_level, config.log_format)

    scenario = EstatePortfolioScenario(
        num_properties=args.properties,
        occupancy_rate=args.occupancy,
        num_agents=args.agents,
        seed=args.seed,
        reference_date=args.as_of,
    )
    scenario.store.config = config.ledger
    store = scenario.generate()

    raised = scan_reminders(store, args.as_of)
    logger.info("Reminder scan raised %d notifications", len(raised))

    try:
        sink = JsonFileSink(args.output_dir, pretty=args.pretty)
        scenario.export([sink])
        sink.close()
    except EstateLedgerError as exc:
        logger.error("Export failed: %s", exc)
        sys.exit(1)

    overdue = analytics.overdue_tenants(
        store.tenants.values(), store.properties.values(), store.payments, args.as_of
    )
    top_agents = analytics.agent_performance(
        store.agents.values(),
        store.properties.values(),
        store.tenants.values(),
        store.payments,
        config=store.config,
    )
    summary = scenario.get_portfolio_summary()
    summary["top_agents"] = ", ".join(r.agent.name for r in top_agents)
    print_summary(summary, overdue, args.output_dir)


if __name__ == "__main__":
    main()
