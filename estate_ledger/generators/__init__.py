"""Faker-backed generators for synthetic estate data."""

from estate_ledger.generators.base import BaseGenerator
from estate_ledger.generators.estate import (
    AgentGenerator,
    DepartmentGenerator,
    PaymentGenerator,
    PropertyGenerator,
    TenantGenerator,
)
from estate_ledger.generators.patterns import PaymentBehavior

__all__ = [
    "AgentGenerator",
    "BaseGenerator",
    "DepartmentGenerator",
    "PaymentBehavior",
    "PaymentGenerator",
    "PropertyGenerator",
    "TenantGenerator",
]
