"""Property model for rentable units."""

from dataclasses import dataclass, field
from decimal import Decimal

from estate_ledger.models.enums import PropertyStatus


@dataclass
class Property:
    """Rentable unit with its rent (per lease term) and one-time deposit."""

    property_id: str
    name: str
    department_id: str
    rent_amount: Decimal
    deposit_amount: Decimal
    agent_id: str | None = None
    status: PropertyStatus = PropertyStatus.VACANT
    unit_number: str = ""
    location: str = ""
    owner: str = ""
    description: str = ""
    notes: str = ""
    images: list[str] = field(default_factory=list)
