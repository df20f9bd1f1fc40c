#!/usr/bin/env python3
"""Add demo customers and loans to a store-credit data store.

Storage and event sink come from the environment (see
``StoreCreditConfig.from_env``); command-line flags override them.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from store_credit.config import StoreCreditConfig, StorageConfig
from store_credit.engine import StoreCreditEngine
from store_credit.logging import setup_logging
from store_credit.scenarios import DemoStoreScenario


def main() -> None:
    """Generate the demo store and print portfolio metrics."""
    parser = argparse.ArgumentParser(description="Seed a store-credit demo store")
    parser.add_argument("--customers", type=int, default=50, help="Number of customers (default: 50)")
    parser.add_argument("--penetration", type=float, default=0.6, help="Share of customers financing (default: 0.6)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--data-dir", type=Path, default=None, help="JSON store directory; existing records are kept")
    parser.add_argument("--simulate", type=float, default=None, help="Also simulate this principal for every tier")
    parser.add_argument("--term", type=int, default=10, help="Term in months for --simulate (default: 10)")
    args = parser.parse_args()

    config = StoreCreditConfig.from_env()
    if args.data_dir is not None:
        config.storage = StorageConfig(backend="json", json_dir=args.data_dir, pretty_json=True)
    setup_logging(level=config.log_level, format_type=config.log_format)

    scenario = DemoStoreScenario(
        num_customers=args.customers,
        loan_penetration=args.penetration,
        seed=args.seed,
        engine=StoreCreditEngine.from_config(config),
    )
    engine = scenario.generate()

    metrics = engine.portfolio_metrics()
    print("=" * 60)
    print(f"  store-credit demo  |  customers={metrics.total_customers}  seed={args.seed}")
    print("=" * 60)
    print(f"  Active loans:      {metrics.active_loans_count}")
    print(f"  Declined:          {scenario.rejected}")
    print(f"  Total loaned:      R$ {metrics.total_loaned:,.2f}")
    print(f"  Projected profit:  R$ {metrics.projected_profit:,.2f}")

    if args.simulate is not None:
        print()
        for tier in ("NORMAL", "CLUBE", "VIP"):
            sim = engine.simulate(args.simulate, args.term, tier)
            print(
                f"  {tier:<7} {sim.rate_percent}% a.m.  "
                f"{args.term}x R$ {sim.monthly_payment:,.2f} = R$ {sim.total_payback:,.2f}"
            )

    engine.close()


if __name__ == "__main__":
    main()
