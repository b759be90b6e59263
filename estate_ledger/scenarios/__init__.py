"""Scenarios for generating realistic estate data sets."""

from estate_ledger.scenarios.portfolio import EstatePortfolioScenario

__all__ = ["EstatePortfolioScenario"]
