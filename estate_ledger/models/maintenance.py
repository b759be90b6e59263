"""Maintenance task model."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from estate_ledger.models.enums import MaintenanceStatus


@dataclass
class Maintenance:
    """Maintenance request or work order on a property."""

    maintenance_id: str
    property_id: str
    task: str
    cost: Decimal
    date: date
    status: MaintenanceStatus = MaintenanceStatus.PENDING
    tenant_id: str | None = None
    notes: str = ""
    assigned_to_user_id: str | None = None
    images: list[str] = field(default_factory=list)
