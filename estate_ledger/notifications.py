"""Simulated SMS and email delivery plus scheduled reminder scans.

Nothing here talks to a real gateway. Sends are validated, logged and
appended to the store's SMS or email log, which is what staff review.
"""

import logging
import uuid as _uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable

from estate_ledger.ledger.engine import classify_tenant_status, compute_overdue_detail, to_datetime
from estate_ledger.models import (
    EmailLogEntry,
    Notification,
    NotificationType,
    SmsLogEntry,
    Tenant,
    TenantRentStatus,
)
from estate_ledger.store.estate import EstateDataStore

logger = logging.getLogger(__name__)


@dataclass
class ApiKeys:
    """Gateway credentials configured in settings."""

    twilio_sid: str = ""
    twilio_token: str = ""
    resend_api_key: str = ""


@dataclass(frozen=True)
class DeliveryResult:
    success: bool
    message: str


def send_sms(
    store: EstateDataStore, tenant: Tenant, message: str, api_keys: ApiKeys
) -> DeliveryResult:
    """Simulate an SMS to a tenant.

    Parameters
    ----------
    store : EstateDataStore
        Store whose SMS log receives the entry.
    tenant : Tenant
        Recipient. Must have a phone number.
    message : str
        Text to send.
    api_keys : ApiKeys
        Twilio SID and token must both be set.

    Returns
    -------
    DeliveryResult
        ``success`` is False when credentials or the phone are missing.
    """
    if not api_keys.twilio_sid or not api_keys.twilio_token:
        error = "Twilio credentials are not configured in settings."
        logger.warning(error)
        return DeliveryResult(success=False, message=error)

    if not tenant.phone:
        error = f"Tenant {tenant.full_name} has no phone number."
        logger.warning(error)
        return DeliveryResult(success=False, message=error)

    logger.info(
        "Simulated SMS to %s (%s) using SID %s...",
        tenant.phone,
        tenant.full_name,
        api_keys.twilio_sid[:5],
        extra={"tenant_id": tenant.tenant_id},
    )
    store.sms_log.insert(
        0,
        SmsLogEntry(
            entry_id=f"sms_{_uuid.uuid4().hex}",
            timestamp=store.clock(),
            recipient_phone=tenant.phone,
            recipient_name=tenant.full_name,
            message=message,
        ),
    )
    return DeliveryResult(success=True, message="SMS sent successfully (simulated).")


def send_email(
    store: EstateDataStore, name: str, email: str, subject: str, body: str
) -> DeliveryResult:
    """Simulate an email and record it in the store's email log."""
    if not email:
        return DeliveryResult(success=False, message="Recipient has no email address.")

    logger.info("Simulated email to %s <%s>: %s", name, email, subject)
    store.email_log.insert(
        0,
        EmailLogEntry(
            entry_id=f"email_{_uuid.uuid4().hex}",
            timestamp=store.clock(),
            recipient_email=email,
            recipient_name=name,
            subject=subject,
            body=body,
        ),
    )
    return DeliveryResult(success=True, message="Email sent via Resend (simulated).")


def _days_between(today: date, value: Any) -> int | None:
    moment = to_datetime(value)
    if moment is None:
        return None
    return (moment.date() - today).days


def scan_reminders(
    store: EstateDataStore,
    today: date,
    lease_reminder_days: Iterable[int] | None = None,
    rent_window_days: int | None = None,
) -> list[Notification]:
    """Raise rent, lease expiry and overdue notifications for ``today``.

    Rent reminders fire on each of the 1..``rent_window_days`` days before a
    tenant's rent due date. Lease reminders fire when the lease ends exactly
    one of ``lease_reminder_days`` days from today. Overdue notices fire
    once per tenant per day. Ids are derived from tenant and offset, so
    running the scan again never duplicates a notification, and ids the
    staff have marked read are not raised again.

    Returns
    -------
    list[Notification]
        Notifications added by this scan.
    """
    if isinstance(today, datetime):
        today = today.date()
    if lease_reminder_days is None:
        lease_reminder_days = store.config.lease_reminder_days
    if rent_window_days is None:
        rent_window_days = store.config.rent_reminder_window_days
    reminder_days = set(lease_reminder_days)
    now = store.clock()

    candidates = []
    for tenant in store.tenants.values():
        prop = store.properties.get(tenant.property_id)
        property_name = prop.name if prop else "Unknown Property"

        days_until_due = _days_between(today, tenant.rent_due_date)
        if days_until_due is not None and 0 < days_until_due <= rent_window_days:
            candidates.append(
                Notification(
                    notification_id=f"rent-due-{tenant.tenant_id}-{days_until_due}",
                    message=f"Rent for {tenant.full_name} is due in {days_until_due} days.",
                    date=now,
                    notification_type=NotificationType.RENT_REMINDER,
                    target_tenant_id=tenant.tenant_id,
                )
            )

        days_until_expiry = _days_between(today, tenant.lease_end_date)
        if days_until_expiry is not None and days_until_expiry >= 0 and days_until_expiry in reminder_days:
            candidates.append(
                Notification(
                    notification_id=f"lease-expiry-{tenant.tenant_id}-{days_until_expiry}",
                    message=(
                        f"Lease for {tenant.full_name} at {property_name} "
                        f"expires in {days_until_expiry} days."
                    ),
                    date=now,
                    notification_type=NotificationType.LEASE_EXPIRY,
                    target_tenant_id=tenant.tenant_id,
                )
            )

        payments = store.get_tenant_payments(tenant.tenant_id)
        if classify_tenant_status(tenant, prop, payments, today) == TenantRentStatus.OVERDUE:
            detail = compute_overdue_detail(tenant, prop, payments, today)
            candidates.append(
                Notification(
                    notification_id=f"overdue-{tenant.tenant_id}-{today.isoformat()}",
                    message=(
                        f"{tenant.full_name} owes {store.config.format_amount(detail.total_due)} "
                        f"for {property_name}."
                    ),
                    date=now,
                    notification_type=NotificationType.OVERDUE_RENT,
                    target_tenant_id=tenant.tenant_id,
                )
            )

    added = [n for n in candidates if store.add_notification(n)]
    if added:
        logger.info("Reminder scan for %s raised %d notifications", today, len(added))
    return added
