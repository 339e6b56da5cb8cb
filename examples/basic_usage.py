#!/usr/bin/env python3
"""
Basic Usage Example - Stock Market Simulation

This script demonstrates the basic usage of the simulation engine. It shows how to:
- Create a seeded market from configuration
- Drive it with a simulated clock
- Page through stocks and print their quotes
- Save the market and resume it later

Run: python examples/basic_usage.py
"""

import tempfile
from datetime import datetime, timedelta
from pathlib import Path

from stock_sim.engine import MarketSimulation
from stock_sim.market.clock import SimulationClock


def print_page(simulation: MarketSimulation) -> None:
    """Print the quotes of the current page."""
    pagination = simulation.get_pagination()
    print(f"\nPage {pagination.page_index + 1}/{pagination.page_count}")
    print(f"{'Symbol':<8}{'Price':>10}{'Today':>10}{'Daily':>12}{'Weekly':>12}{'Monthly':>12}")
    for quote in simulation.page_quotes():
        if quote is None:
            print("-")
            continue
        print(
            f"{quote.symbol:<8}{quote.price:>10}{quote.daily_change:>10}"
            f"{quote.daily.format():>12}{quote.weekly.format():>12}{quote.monthly.format():>12}"
        )


def main() -> None:
    simulation = MarketSimulation.create(overrides={
        "market": {"stock_count": 8, "page_size": 5, "seed": 2024},
        "logging": {"level": "WARNING"},
    })

    clock = SimulationClock(datetime(2024, 1, 1, 9, 0))
    simulation.attach(clock)

    # Three days: weekly and monthly changes are still unavailable
    clock.run(3 * 24, delta=timedelta(hours=1))
    print_page(simulation)

    # Five more weeks of hourly ticks
    clock.run(35 * 24, delta=timedelta(hours=1))
    print_page(simulation)
    simulation.pagination.next()
    print_page(simulation)

    with tempfile.TemporaryDirectory() as tmp:
        path = simulation.save(Path(tmp) / "market.json")
        simulation.detach()

        resumed = MarketSimulation.load(path, config=simulation.config)
        resumed.attach(clock)
        clock.run(24, delta=timedelta(hours=1))
        print_page(resumed)


if __name__ == "__main__":
    main()
