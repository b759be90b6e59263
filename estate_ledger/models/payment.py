"""Payment models for tenant collections and agent payouts."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from estate_ledger.models.enums import PaymentMethod, PaymentStatus, PaymentType


@dataclass
class Payment:
    """Money received from a tenant.

    ``date`` is when the record was created, not necessarily when money
    changed hands. Only ``payment_status`` changes after creation.
    """

    payment_id: str
    tenant_id: str
    property_id: str
    payment_type: PaymentType
    payment_status: PaymentStatus
    amount_paid: Decimal
    date: datetime
    payment_method: PaymentMethod = PaymentMethod.TRANSFER
    notes: str = ""
    agent_id: str | None = None
    receipt_printed: bool = False
    proof_of_payment: str | None = None  # data URL supplied by the tenant portal


@dataclass
class CommissionPayment:
    """Commission paid out to an agent for a collection period."""

    commission_payment_id: str
    agent_id: str
    amount: Decimal
    payment_date: date
    period_start_date: date
    period_end_date: date
    notes: str = ""
