"""Portfolio aggregations for dashboards, tenant lists and reports.

These functions fan the ledger engine out over many tenants. Like the
engine they are pure: pass in the entity slices the viewer may see and an
``as_of`` moment where the result depends on time.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable

from estate_ledger.config import LedgerConfig
from estate_ledger.ledger.engine import (
    ZERO,
    Balance,
    OverdueDetail,
    classify_tenant_status,
    compute_balance,
    compute_overdue_detail,
    compute_total_due,
    end_of_day,
    qualifying_payments,
    to_amount,
    to_datetime,
)
from estate_ledger.models import (
    Agent,
    CommissionPayment,
    Department,
    Maintenance,
    ObligationType,
    Payment,
    PaymentType,
    Property,
    PropertyStatus,
    Tenant,
    TenantRentStatus,
)


@dataclass(frozen=True)
class TenantStatusRow:
    """A tenant with its classification and per-obligation balances."""

    tenant: Tenant
    property: Property | None
    status: TenantRentStatus
    rent: Balance
    deposit: Balance
    total_due: Decimal


@dataclass(frozen=True)
class OverdueRow:
    """An overdue tenant with the property name shown in alert lists."""

    tenant: Tenant
    property_name: str
    detail: OverdueDetail


@dataclass(frozen=True)
class UnpaidBalanceRow:
    tenant_name: str
    property_name: str
    rent_due: Decimal
    deposit_due: Decimal
    total_due: Decimal


@dataclass(frozen=True)
class UnpaidBalancesReport:
    """Unpaid balances report with grand totals."""

    rows: list[UnpaidBalanceRow]
    total_rent_due: Decimal
    total_deposit_due: Decimal
    total_due: Decimal


@dataclass(frozen=True)
class DashboardKpis:
    total_properties: int
    total_payments_received: Decimal
    total_deposits: Decimal
    total_unpaid: Decimal
    total_vacant: int
    total_occupied: int
    total_under_maintenance: int
    total_amount_expected: Decimal
    total_commission_paid: Decimal
    total_maintenance_cost: Decimal
    total_agents: int
    total_tenants: int


@dataclass(frozen=True)
class ExpiringLease:
    tenant: Tenant
    days_left: int


@dataclass(frozen=True)
class AgentPerformance:
    agent: Agent
    tenants_managed: int
    rent_collected: Decimal
    commission: Decimal


@dataclass(frozen=True)
class PropertyCollection:
    property: Property
    rent_amount: Decimal
    total_paid: Decimal


def index_properties(properties: Iterable[Property]) -> dict[str, Property]:
    """Map property id to property."""
    return {p.property_id: p for p in properties}


def tenant_statuses(
    tenants: Iterable[Tenant],
    properties: Iterable[Property],
    payments: Iterable[Payment],
    as_of: Any,
) -> list[TenantStatusRow]:
    """Classify every tenant and attach its rent and deposit balances.

    Parameters
    ----------
    tenants : Iterable[Tenant]
        Tenants to classify, in display order.
    properties : Iterable[Property]
        Properties used to look up each tenant's due amounts.
    payments : Iterable[Payment]
        Payment history.
    as_of : Any
        Moment the classification is made for.

    Returns
    -------
    list[TenantStatusRow]
        One row per tenant, in input order.
    """
    by_id = index_properties(properties)
    payments = list(payments)

    rows = []
    for tenant in tenants:
        prop = by_id.get(tenant.property_id)
        rent = compute_balance(tenant, prop, payments, ObligationType.RENT)
        deposit = compute_balance(tenant, prop, payments, ObligationType.DEPOSIT)
        rows.append(
            TenantStatusRow(
                tenant=tenant,
                property=prop,
                status=classify_tenant_status(tenant, prop, payments, as_of),
                rent=rent,
                deposit=deposit,
                total_due=max(ZERO, rent.balance) + max(ZERO, deposit.balance),
            )
        )
    return rows


def overdue_tenants(
    tenants: Iterable[Tenant],
    properties: Iterable[Property],
    payments: Iterable[Payment],
    as_of: Any,
) -> list[OverdueRow]:
    """List overdue tenants, largest debt first."""
    payments = list(payments)
    rows = [
        OverdueRow(
            tenant=row.tenant,
            property_name=row.property.name,
            detail=compute_overdue_detail(row.tenant, row.property, payments, as_of),
        )
        for row in tenant_statuses(tenants, properties, payments, as_of)
        if row.status is TenantRentStatus.OVERDUE and row.property is not None
    ]
    rows.sort(key=lambda r: r.detail.total_due, reverse=True)
    return rows


def unpaid_balances(
    tenants: Iterable[Tenant],
    properties: Iterable[Property],
    payments: Iterable[Payment],
) -> UnpaidBalancesReport:
    """Build the unpaid balances report.

    Includes every tenant with something outstanding, whether or not the
    lease has started. Orphaned tenants are skipped.
    """
    by_id = index_properties(properties)
    payments = list(payments)

    rows = []
    for tenant in tenants:
        prop = by_id.get(tenant.property_id)
        if prop is None:
            continue
        rent_due, deposit_due = compute_total_due(tenant, prop, payments)
        if rent_due + deposit_due <= ZERO:
            continue
        rows.append(
            UnpaidBalanceRow(
                tenant_name=tenant.full_name,
                property_name=prop.name,
                rent_due=rent_due,
                deposit_due=deposit_due,
                total_due=rent_due + deposit_due,
            )
        )

    return UnpaidBalancesReport(
        rows=rows,
        total_rent_due=sum((r.rent_due for r in rows), ZERO),
        total_deposit_due=sum((r.deposit_due for r in rows), ZERO),
        total_due=sum((r.total_due for r in rows), ZERO),
    )


def unpaid_by_department(
    departments: Iterable[Department],
    tenants: Iterable[Tenant],
    properties: Iterable[Property],
    payments: Iterable[Payment],
) -> dict[str, Decimal]:
    """Total unpaid per department name, omitting departments owing nothing."""
    by_id = index_properties(properties)
    payments = list(payments)

    owed: dict[str, Decimal] = {}
    for tenant in tenants:
        prop = by_id.get(tenant.property_id)
        if prop is None:
            continue
        rent_due, deposit_due = compute_total_due(tenant, prop, payments)
        owed[prop.department_id] = owed.get(prop.department_id, ZERO) + rent_due + deposit_due

    result = {}
    for dept in departments:
        amount = owed.get(dept.department_id, ZERO)
        if amount > ZERO:
            result[dept.name] = amount
    return result


def dashboard_kpis(
    properties: Iterable[Property],
    tenants: Iterable[Tenant],
    payments: Iterable[Payment],
    agents: Iterable[Agent],
    maintenance: Iterable[Maintenance],
    commission_payments: Iterable[CommissionPayment],
) -> DashboardKpis:
    """Headline figures for the staff dashboard.

    Payments received only count confirmed money.
    """
    properties = list(properties)
    tenants = list(tenants)
    approved = qualifying_payments(payments)
    report = unpaid_balances(tenants, properties, approved)

    def count(status: PropertyStatus) -> int:
        return sum(1 for p in properties if p.status == status)

    return DashboardKpis(
        total_properties=len(properties),
        total_payments_received=sum((to_amount(p.amount_paid) for p in approved), ZERO),
        total_deposits=sum(
            (to_amount(p.amount_paid) for p in approved if p.payment_type == PaymentType.DEPOSIT),
            ZERO,
        ),
        total_unpaid=report.total_due,
        total_vacant=count(PropertyStatus.VACANT),
        total_occupied=count(PropertyStatus.OCCUPIED),
        total_under_maintenance=count(PropertyStatus.UNDER_MAINTENANCE),
        total_amount_expected=sum((to_amount(p.rent_amount) for p in properties), ZERO),
        total_commission_paid=sum((to_amount(c.amount) for c in commission_payments), ZERO),
        total_maintenance_cost=sum((to_amount(m.cost) for m in maintenance), ZERO),
        total_agents=len(list(agents)),
        total_tenants=len(tenants),
    )


def days_until(target: Any, as_of: Any) -> int | None:
    """Whole calendar days from ``as_of`` to ``target``, None if unknown."""
    target_at = to_datetime(target)
    now = to_datetime(as_of)
    if target_at is None or now is None:
        return None
    return (target_at.date() - now.date()).days


def expiring_leases(
    tenants: Iterable[Tenant],
    as_of: Any,
    within_days: int | None = None,
    config: LedgerConfig | None = None,
) -> list[ExpiringLease]:
    """Tenants whose lease ends within the next ``within_days`` days.

    ``within_days`` defaults to the configured expiring-lease window.
    """
    if within_days is None:
        within_days = (config or LedgerConfig()).expiring_lease_window_days
    leases = []
    for tenant in tenants:
        days_left = days_until(tenant.lease_end_date, as_of)
        if days_left is not None and 0 <= days_left <= within_days:
            leases.append(ExpiringLease(tenant=tenant, days_left=days_left))
    leases.sort(key=lambda lease: lease.days_left)
    return leases


def payment_trends(
    payments: Iterable[Payment],
    as_of: Any,
    months: int | None = None,
    config: LedgerConfig | None = None,
) -> list[tuple[str, Decimal]]:
    """Confirmed amount received per calendar month, oldest month first.

    Returns ``("YYYY-MM", amount)`` pairs for the ``months`` months ending
    with the month of ``as_of``; months without payments report zero.
    ``months`` defaults to the configured trend length.
    """
    if months is None:
        months = (config or LedgerConfig()).payment_trend_months
    now = to_datetime(as_of)
    if now is None or months <= 0:
        return []

    totals: dict[str, Decimal] = {}
    for payment in qualifying_payments(payments):
        paid_at = to_datetime(payment.date)
        if paid_at is None:
            continue
        key = f"{paid_at.year}-{paid_at.month:02d}"
        totals[key] = totals.get(key, ZERO) + to_amount(payment.amount_paid)

    keys = []
    year, month = now.year, now.month
    for _ in range(months):
        keys.append(f"{year}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    keys.reverse()

    return [(key, totals.get(key, ZERO)) for key in keys]


def agent_performance(
    agents: Iterable[Agent],
    properties: Iterable[Property],
    tenants: Iterable[Tenant],
    payments: Iterable[Payment],
    top: int | None = None,
    config: LedgerConfig | None = None,
) -> list[AgentPerformance]:
    """Rank agents by confirmed money collected on their properties.

    Only the first ``top`` agents are returned, the configured number when
    ``top`` is None. A ``top`` of zero returns every agent.
    """
    if top is None:
        top = (config or LedgerConfig()).top_agents
    properties = list(properties)
    tenants = list(tenants)
    approved = qualifying_payments(payments)

    results = []
    for agent in agents:
        property_ids = {p.property_id for p in properties if p.agent_id == agent.agent_id}
        collected = sum(
            (to_amount(p.amount_paid) for p in approved if p.property_id in property_ids),
            ZERO,
        )
        rate = to_amount(agent.commission_rate)
        results.append(
            AgentPerformance(
                agent=agent,
                tenants_managed=sum(1 for t in tenants if t.property_id in property_ids),
                rent_collected=collected,
                commission=collected * rate / Decimal(100) if rate else ZERO,
            )
        )

    results.sort(key=lambda r: r.rent_collected, reverse=True)
    return results[:top] if top > 0 else results


def property_collections(
    properties: Iterable[Property],
    payments: Iterable[Payment],
) -> list[PropertyCollection]:
    """Rent amount and total paid per property.

    ``payments`` is used as given; narrow it with :func:`filter_payments`
    first to report a period or a status.
    """
    payments = list(payments)
    return [
        PropertyCollection(
            property=prop,
            rent_amount=to_amount(prop.rent_amount),
            total_paid=sum(
                (to_amount(p.amount_paid) for p in payments if p.property_id == prop.property_id),
                ZERO,
            ),
        )
        for prop in properties
    ]


def filter_payments(
    payments: Iterable[Payment],
    start: Any = None,
    end: Any = None,
    property_id: str | None = None,
    tenant_id: str | None = None,
    payment_type: PaymentType | str | None = None,
    payment_status: Any = None,
) -> list[Payment]:
    """Apply report filters. ``None`` means "all" for every criterion.

    ``end`` includes the whole of its day. Payments with an unparseable
    date are dropped once a date bound is given, and a bound that cannot
    be parsed matches nothing.
    """
    start_at = to_datetime(start) if start is not None else None
    end_at = end_of_day(end) if end is not None else None
    if (start is not None and start_at is None) or (end is not None and end_at is None):
        return []

    result = []
    for payment in payments:
        if start_at is not None or end_at is not None:
            paid_at = to_datetime(payment.date)
            if paid_at is None:
                continue
            if start_at is not None and paid_at < start_at:
                continue
            if end_at is not None and paid_at > end_at:
                continue
        if property_id is not None and payment.property_id != property_id:
            continue
        if tenant_id is not None and payment.tenant_id != tenant_id:
            continue
        if payment_type is not None and payment.payment_type != payment_type:
            continue
        if payment_status is not None and payment.payment_status != payment_status:
            continue
        result.append(payment)
    return result
