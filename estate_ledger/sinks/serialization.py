"""Shared serialization utilities for sinks.

Records go out as plain JSON-compatible dicts. Coming back in, the
``*_from_dict`` parsers are the boundary where unknown enum values are
rejected and amounts and dates are coerced.
"""

from dataclasses import asdict, fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, TypeVar

from estate_ledger.exceptions import ValidationError
from estate_ledger.ledger.engine import to_amount, to_datetime
from estate_ledger.models import (
    Agent,
    AuditLogEntry,
    CommissionPayment,
    Department,
    EmailLogEntry,
    Guarantor,
    Maintenance,
    MaintenanceStatus,
    Notification,
    NotificationType,
    Payment,
    PaymentMethod,
    PaymentStatus,
    PaymentType,
    Permission,
    Property,
    PropertyStatus,
    Role,
    SmsLogEntry,
    Tenant,
    User,
    UserStatus,
)

E = TypeVar("E", bound=Enum)
T = TypeVar("T")


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if is_dataclass(obj):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return obj
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert dataclass to dict with proper serialization."""
    result = {}
    for key, value in asdict(obj).items():
        result[key] = serialize_value(value)
    return result


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (set, frozenset)):
        return sorted(serialize_value(v) for v in value)
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def parse_enum(enum_cls: type[E], value: Any, field_name: str) -> E:
    """Look up an enum member by value, raising ValidationError if unknown."""
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise ValidationError(f"Invalid {field_name}: {value!r}") from exc


def parse_date(value: Any) -> date | None:
    """Parse a calendar date, or None when indeterminate."""
    moment = to_datetime(value)
    return moment.date() if moment is not None else None


def _require(data: dict, *keys: str) -> None:
    missing = [k for k in keys if data.get(k) in (None, "")]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def _known(cls: type[T], data: dict) -> dict:
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


def department_from_dict(data: dict) -> Department:
    _require(data, "department_id", "name")
    return Department(**_known(Department, data))


def agent_from_dict(data: dict) -> Agent:
    """Parse an agent. A blank commission rate stays unset."""
    _require(data, "agent_id", "name", "department_id")
    values = _known(Agent, data)
    rate = data.get("commission_rate")
    values["commission_rate"] = None if rate in (None, "") else to_amount(rate)
    return Agent(**values)


def property_from_dict(data: dict) -> Property:
    """Parse a property.

    Non-numeric rent or deposit becomes zero; an unknown status is an error.
    """
    _require(data, "property_id", "name", "department_id")
    values = _known(Property, data)
    values["rent_amount"] = to_amount(data.get("rent_amount"))
    values["deposit_amount"] = to_amount(data.get("deposit_amount"))
    values["status"] = parse_enum(PropertyStatus, data.get("status", "Vacant"), "property status")
    values["images"] = list(data.get("images") or [])
    return Property(**values)


def tenant_from_dict(data: dict) -> Tenant:
    """Parse a tenant.

    Dates that cannot be parsed are kept as None, which the ledger treats
    as indeterminate.
    """
    _require(data, "tenant_id", "full_name", "property_id")
    values = _known(Tenant, data)
    for key in ("lease_start_date", "lease_end_date", "rent_due_date"):
        values[key] = parse_date(data.get(key))
    guarantor = data.get("guarantor")
    values["guarantor"] = Guarantor(**_known(Guarantor, guarantor)) if guarantor else None
    return Tenant(**values)


def payment_from_dict(data: dict) -> Payment:
    """Parse a payment, validating its type, status and method."""
    _require(data, "payment_id", "tenant_id")
    values = _known(Payment, data)
    values["property_id"] = data.get("property_id") or ""
    values["payment_type"] = parse_enum(PaymentType, data.get("payment_type"), "payment type")
    values["payment_status"] = parse_enum(
        PaymentStatus, data.get("payment_status"), "payment status"
    )
    values["payment_method"] = parse_enum(
        PaymentMethod, data.get("payment_method", PaymentMethod.TRANSFER.value), "payment method"
    )
    values["amount_paid"] = to_amount(data.get("amount_paid"))
    values["date"] = to_datetime(data.get("date"))
    return Payment(**values)


def commission_payment_from_dict(data: dict) -> CommissionPayment:
    _require(data, "commission_payment_id", "agent_id")
    values = _known(CommissionPayment, data)
    values["amount"] = to_amount(data.get("amount"))
    for key in ("payment_date", "period_start_date", "period_end_date"):
        values[key] = parse_date(data.get(key))
    return CommissionPayment(**values)


def maintenance_from_dict(data: dict) -> Maintenance:
    _require(data, "maintenance_id", "property_id", "task")
    values = _known(Maintenance, data)
    values["cost"] = to_amount(data.get("cost"))
    values["date"] = parse_date(data.get("date"))
    values["status"] = parse_enum(
        MaintenanceStatus, data.get("status", "Pending"), "maintenance status"
    )
    values["images"] = list(data.get("images") or [])
    return Maintenance(**values)


def role_from_dict(data: dict) -> Role:
    _require(data, "role_id", "name")
    permissions = {parse_enum(Permission, p, "permission") for p in data.get("permissions", [])}
    return Role(role_id=data["role_id"], name=data["name"], permissions=permissions)


def user_from_dict(data: dict) -> User:
    _require(data, "user_id", "username", "role_id")
    values = _known(User, data)
    values.setdefault("name", data["username"])
    values["status"] = parse_enum(UserStatus, data.get("status", "Active"), "user status")
    return User(**values)


def audit_entry_from_dict(data: dict) -> AuditLogEntry:
    values = _known(AuditLogEntry, data)
    values["timestamp"] = to_datetime(data.get("timestamp"))
    return AuditLogEntry(**values)


def notification_from_dict(data: dict) -> Notification:
    values = _known(Notification, data)
    values["date"] = to_datetime(data.get("date"))
    values["notification_type"] = parse_enum(
        NotificationType, data.get("notification_type"), "notification type"
    )
    return Notification(**values)


def sms_entry_from_dict(data: dict) -> SmsLogEntry:
    values = _known(SmsLogEntry, data)
    values["timestamp"] = to_datetime(data.get("timestamp"))
    return SmsLogEntry(**values)


def email_entry_from_dict(data: dict) -> EmailLogEntry:
    values = _known(EmailLogEntry, data)
    values["timestamp"] = to_datetime(data.get("timestamp"))
    return EmailLogEntry(**values)
