"""Tenant ledger engine and the portfolio analytics built on it."""

from estate_ledger.ledger.engine import (
    Balance,
    CommissionSummary,
    OverdueDetail,
    aggregate_commission,
    classify_tenant_status,
    compute_balance,
    compute_overdue_detail,
    compute_projected_balance,
    compute_total_due,
    is_qualifying,
    qualifying_payments,
    to_amount,
    to_datetime,
)

__all__ = [
    "Balance",
    "CommissionSummary",
    "OverdueDetail",
    "aggregate_commission",
    "classify_tenant_status",
    "compute_balance",
    "compute_overdue_detail",
    "compute_projected_balance",
    "compute_total_due",
    "is_qualifying",
    "qualifying_payments",
    "to_amount",
    "to_datetime",
]
