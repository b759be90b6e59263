"""Configuration management for estate-ledger."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from estate_ledger.exceptions import ConfigurationError


def parse_reminder_days(value: str) -> list[int]:
    """Parse a comma separated list of lease reminder offsets.

    Blank and non-numeric entries are skipped, so ``"90, 60,x,30"`` yields
    ``[90, 60, 30]``.
    """
    days = []
    for part in value.split(","):
        part = part.strip()
        if part.lstrip("-").isdigit():
            days.append(int(part))
    return days


@dataclass
class LedgerConfig:
    """Business rules shared by analytics, reminders and reports."""

    currency: str = "NGN"
    currency_symbol: str = "₦"
    expiring_lease_window_days: int = 30
    rent_reminder_window_days: int = 14
    lease_reminder_days: list[int] = field(default_factory=lambda: [90, 60, 30])
    payment_trend_months: int = 6
    top_agents: int = 5

    def format_amount(self, amount: Any) -> str:
        """Format an amount for notification and audit text."""
        return f"{self.currency_symbol}{amount:,}"


@dataclass
class OutputConfig:
    """Snapshot output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class ScenarioConfig:
    """Configuration for scenario execution."""

    name: str
    num_properties: int = 20
    occupancy_rate: float = 0.75
    num_agents: int = 4


@dataclass
class EstateLedgerConfig:
    """Main configuration for estate-ledger."""

    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    scenario: ScenarioConfig | None = None
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "EstateLedgerConfig":
        """Create config from environment variables."""
        import os

        try:
            ledger = LedgerConfig(
                currency=os.getenv("ESTATE_CURRENCY", "NGN"),
                currency_symbol=os.getenv("ESTATE_CURRENCY_SYMBOL", "₦"),
                expiring_lease_window_days=int(os.getenv("ESTATE_EXPIRING_LEASE_DAYS", "30")),
                rent_reminder_window_days=int(os.getenv("ESTATE_RENT_REMINDER_DAYS", "14")),
                lease_reminder_days=parse_reminder_days(
                    os.getenv("ESTATE_LEASE_REMINDER_DAYS", "90,60,30")
                ),
                payment_trend_months=int(os.getenv("ESTATE_TREND_MONTHS", "6")),
                top_agents=int(os.getenv("ESTATE_TOP_AGENTS", "5")),
            )
            seed = int(os.getenv("SEED")) if os.getenv("SEED") else None
        except ValueError as exc:
            raise ConfigurationError(f"Invalid numeric setting: {exc}") from exc

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        log_format = os.getenv("LOG_FORMAT", "standard")
        if log_format not in ("standard", "json"):
            raise ConfigurationError(f"Unknown log format: {log_format}")

        return cls(
            ledger=ledger,
            output=output,
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=log_format,
        )
