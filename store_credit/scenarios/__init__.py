"""Scenarios for populating demo stores."""

from store_credit.scenarios.demo_store import DemoStoreScenario

__all__ = ["DemoStoreScenario"]
