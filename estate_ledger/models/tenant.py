"""Tenant model."""

from dataclasses import dataclass
from datetime import date

from estate_ledger.models.base import Guarantor


@dataclass
class Tenant:
    """Occupant of exactly one property."""

    tenant_id: str
    full_name: str
    property_id: str
    lease_start_date: date
    lease_end_date: date
    rent_due_date: date  # Next due date, not a schedule
    phone: str = ""
    email: str = ""
    address: str = ""
    nin: str = ""
    guarantor: Guarantor | None = None
    username: str | None = None
    notes: str = ""
