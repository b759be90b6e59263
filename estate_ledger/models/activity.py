"""Audit trail and notification log models."""

from dataclasses import dataclass
from datetime import datetime

from estate_ledger.models.enums import NotificationType


@dataclass
class AuditLogEntry:
    """A user action recorded after it happened."""

    entry_id: str
    timestamp: datetime
    user_id: str
    username: str
    action: str  # e.g. APPROVED_PAYMENT
    details: str
    target_id: str | None = None


@dataclass
class Notification:
    """In-app notification for staff or a single tenant."""

    notification_id: str
    message: str
    date: datetime
    notification_type: NotificationType
    target_user_id: str | None = None
    target_tenant_id: str | None = None
    read: bool = False


@dataclass
class SmsLogEntry:
    """Record of a simulated SMS."""

    entry_id: str
    timestamp: datetime
    recipient_phone: str
    recipient_name: str
    message: str


@dataclass
class EmailLogEntry:
    """Record of a simulated email."""

    entry_id: str
    timestamp: datetime
    recipient_email: str
    recipient_name: str
    subject: str
    body: str
