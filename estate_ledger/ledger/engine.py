"""Tenant ledger: balances, status classification and agent commission.

Every function in this module is a pure function of its arguments. Nothing
here reads the clock, touches the store or logs; callers pass the snapshot
slices they want evaluated and an explicit ``as_of`` moment.

Inputs are coerced rather than rejected. Amounts that are missing or not
numeric count as zero, and dates may be ``date``, ``datetime`` or ISO 8601
strings. A date that cannot be parsed is *indeterminate*: it never makes a
tenant overdue and never falls inside a commission period.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable

from estate_ledger.models import (
    Agent,
    ObligationType,
    Payment,
    PaymentStatus,
    PaymentType,
    Property,
    Tenant,
    TenantRentStatus,
)

ZERO = Decimal("0")
ONE_DAY = timedelta(days=1)

# Statuses that count as money actually received
QUALIFYING_STATUSES = (PaymentStatus.PAID, PaymentStatus.DEPOSIT)


@dataclass(frozen=True)
class Balance:
    """Due, paid and signed balance for one obligation type."""

    due: Decimal
    paid: Decimal
    balance: Decimal  # Negative means the tenant is in credit


@dataclass(frozen=True)
class OverdueDetail:
    """Clamped amounts owed by a tenant and how long the lease has run."""

    total_due: Decimal
    rent_due: Decimal
    deposit_due: Decimal
    days_overdue: int


@dataclass(frozen=True)
class CommissionSummary:
    """Rent collected on an agent's properties and the commission on it."""

    total_collected: Decimal
    commission_earned: Decimal


EMPTY_BALANCE = Balance(due=ZERO, paid=ZERO, balance=ZERO)


def to_amount(value: Any) -> Decimal:
    """Coerce a currency amount to ``Decimal``, treating junk as zero.

    Parameters
    ----------
    value : Any
        Decimal, int, float, numeric string or None.

    Returns
    -------
    Decimal
        The amount, or ``Decimal(0)`` for None, NaN, infinities and
        anything that does not parse.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            return ZERO
    else:
        return ZERO
    return result if result.is_finite() else ZERO


def to_datetime(value: Any) -> datetime | None:
    """Coerce a timestamp to a naive UTC ``datetime``.

    Dates become midnight. Aware datetimes are converted to UTC and made
    naive so they compare with naive ones. Returns None when the value is
    indeterminate.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return to_datetime(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def end_of_day(value: Any) -> datetime | None:
    """Return the last instant of the day ``value`` falls on."""
    moment = to_datetime(value)
    if moment is None:
        return None
    return datetime.combine(moment.date(), time.max)


def is_qualifying(payment: Payment) -> bool:
    """Whether a payment's status counts toward satisfying a due amount."""
    return payment.payment_status in QUALIFYING_STATUSES


def qualifying_payments(payments: Iterable[Payment] | None) -> list[Payment]:
    """Filter to Paid and Deposit-status payments."""
    return [p for p in payments or () if is_qualifying(p)]


def compute_balance(
    tenant: Tenant,
    property: Property | None,
    payments: Iterable[Payment] | None,
    obligation_type: ObligationType | str,
    exclude_payment_id: str | None = None,
) -> Balance:
    """Compute due, paid and balance for one of a tenant's obligations.

    Parameters
    ----------
    tenant : Tenant
        Tenant whose payments are summed.
    property : Property | None
        The tenant's property. When missing every figure is zero.
    payments : Iterable[Payment] | None
        Full or pre-filtered payment history.
    obligation_type : ObligationType | str
        ``Rent`` or ``Deposit``.
    exclude_payment_id : str | None
        Payment to leave out, used to show the balance before an edit.

    Returns
    -------
    Balance
        ``balance = due - paid``, signed and unclamped.
    """
    if property is None:
        return EMPTY_BALANCE

    obligation = ObligationType(obligation_type)
    if obligation is ObligationType.RENT:
        due = to_amount(property.rent_amount)
    else:
        due = to_amount(property.deposit_amount)

    payment_type = obligation.payment_type
    paid = ZERO
    for payment in payments or ():
        if payment.tenant_id != tenant.tenant_id or payment.payment_type != payment_type:
            continue
        if not is_qualifying(payment):
            continue
        if exclude_payment_id is not None and payment.payment_id == exclude_payment_id:
            continue
        paid += to_amount(payment.amount_paid)

    return Balance(due=due, paid=paid, balance=due - paid)


def compute_projected_balance(current_balance: Any, hypothetical_amount: Any) -> Decimal:
    """Preview the balance after a payment that has not been saved yet."""
    return to_amount(current_balance) - to_amount(hypothetical_amount)


def compute_total_due(
    tenant: Tenant,
    property: Property | None,
    payments: Iterable[Payment] | None,
) -> tuple[Decimal, Decimal]:
    """Return ``(rent_due, deposit_due)``, each clamped at zero.

    A credit on one obligation never offsets debt on the other.
    """
    payments = list(payments or ())
    rent = compute_balance(tenant, property, payments, ObligationType.RENT)
    deposit = compute_balance(tenant, property, payments, ObligationType.DEPOSIT)
    return max(ZERO, rent.balance), max(ZERO, deposit.balance)


def lease_has_started(tenant: Tenant, as_of: Any) -> bool:
    """Whether the lease started on or before ``as_of``.

    Indeterminate dates count as not started.
    """
    lease_start = to_datetime(tenant.lease_start_date)
    now = to_datetime(as_of)
    if lease_start is None or now is None:
        return False
    return lease_start <= now


def classify_tenant_status(
    tenant: Tenant,
    property: Property | None,
    payments: Iterable[Payment] | None,
    as_of: Any,
) -> TenantRentStatus:
    """Classify a tenant as Upcoming, Paid, Overdue or N/A.

    A lease that has not started is Upcoming whatever the tenant owes.
    """
    if property is None:
        return TenantRentStatus.NOT_APPLICABLE

    rent_due, deposit_due = compute_total_due(tenant, property, payments)

    if not lease_has_started(tenant, as_of):
        return TenantRentStatus.UPCOMING
    if rent_due + deposit_due > ZERO:
        return TenantRentStatus.OVERDUE
    return TenantRentStatus.PAID


def compute_overdue_detail(
    tenant: Tenant,
    property: Property | None,
    payments: Iterable[Payment] | None,
    as_of: Any,
) -> OverdueDetail:
    """Break down what an overdue tenant owes.

    ``days_overdue`` counts whole days since the lease started, not since
    rent fell due.
    """
    rent_due, deposit_due = compute_total_due(tenant, property, payments)

    days_overdue = 0
    lease_start = to_datetime(tenant.lease_start_date)
    now = to_datetime(as_of)
    if lease_start is not None and now is not None:
        days_overdue = max(0, (now - lease_start) // ONE_DAY)

    return OverdueDetail(
        total_due=rent_due + deposit_due,
        rent_due=rent_due,
        deposit_due=deposit_due,
        days_overdue=days_overdue,
    )


def aggregate_commission(
    agent: Agent | None,
    properties: Iterable[Property],
    payments: Iterable[Payment] | None,
    period_start: Any,
    period_end: Any,
) -> CommissionSummary:
    """Sum rent collected on an agent's properties within a period.

    The period is inclusive and runs to the end of ``period_end``'s day.
    Payment status is not filtered: every rent payment dated inside the
    period counts toward collections.
    """
    start = to_datetime(period_start)
    end = end_of_day(period_end)
    if agent is None or start is None or end is None:
        return CommissionSummary(total_collected=ZERO, commission_earned=ZERO)

    property_ids = {p.property_id for p in properties if p.agent_id == agent.agent_id}

    collected = ZERO
    for payment in payments or ():
        if payment.property_id not in property_ids:
            continue
        if payment.payment_type != PaymentType.RENT:
            continue
        paid_at = to_datetime(payment.date)
        if paid_at is None or not start <= paid_at <= end:
            continue
        collected += to_amount(payment.amount_paid)

    rate = to_amount(agent.commission_rate)
    return CommissionSummary(
        total_collected=collected,
        commission_earned=collected * rate / Decimal(100),
    )
