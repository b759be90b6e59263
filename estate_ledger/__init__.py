"""estate-ledger: property management ledger and back-office state."""

__version__ = "0.1.0"
