"""Domain models for property management."""

from estate_ledger.models.access import Role, User, default_roles
from estate_ledger.models.activity import (
    AuditLogEntry,
    EmailLogEntry,
    Notification,
    SmsLogEntry,
)
from estate_ledger.models.agent import Agent
from estate_ledger.models.base import Department, Guarantor
from estate_ledger.models.enums import (
    MaintenanceStatus,
    NotificationType,
    ObligationType,
    PaymentMethod,
    PaymentStatus,
    PaymentType,
    Permission,
    PropertyStatus,
    TenantRentStatus,
    UserStatus,
)
from estate_ledger.models.maintenance import Maintenance
from estate_ledger.models.payment import CommissionPayment, Payment
from estate_ledger.models.property import Property
from estate_ledger.models.tenant import Tenant

__all__ = [
    "Agent",
    "AuditLogEntry",
    "CommissionPayment",
    "Department",
    "EmailLogEntry",
    "Guarantor",
    "Maintenance",
    "MaintenanceStatus",
    "Notification",
    "NotificationType",
    "ObligationType",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
    "PaymentType",
    "Permission",
    "Property",
    "PropertyStatus",
    "Role",
    "SmsLogEntry",
    "Tenant",
    "TenantRentStatus",
    "User",
    "UserStatus",
    "default_roles",
]
