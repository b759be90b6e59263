"""Enumeration types for estate entities."""

from enum import Enum


class PropertyStatus(str, Enum):
    VACANT = "Vacant"
    OCCUPIED = "Occupied"
    UNDER_MAINTENANCE = "Under Maintenance"


class PaymentType(str, Enum):
    RENT = "Rent"
    DEPOSIT = "Deposit"
    OTHER = "Other"
    SUBSCRIPTION = "Subscription"


class PaymentStatus(str, Enum):
    PAID = "Paid"
    DEPOSIT = "Deposit"
    UNPAID = "Unpaid"
    PENDING_APPROVAL = "Pending Approval"


class PaymentMethod(str, Enum):
    CASH = "Cash"
    TRANSFER = "Bank Transfer"
    POS = "POS"
    CHEQUE = "Cheque"
    MANUAL = "Manual Entry"
    PAYSTACK = "Paystack (Online)"
    FLUTTERWAVE = "Flutterwave (Online)"


class ObligationType(str, Enum):
    """The two balance tracks a tenant can owe against."""

    RENT = "Rent"
    DEPOSIT = "Deposit"

    @property
    def payment_type(self) -> PaymentType:
        return PaymentType(self.value)


class TenantRentStatus(str, Enum):
    UPCOMING = "Upcoming"
    PAID = "Paid"
    OVERDUE = "Overdue"
    NOT_APPLICABLE = "N/A"


class MaintenanceStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class NotificationType(str, Enum):
    LEASE_EXPIRY = "Lease Expiry Reminder"
    RENT_REMINDER = "Rent Reminder"
    OVERDUE_RENT = "Overdue Rent"
    MAINTENANCE_UPDATE = "Maintenance Update"
    PUSH = "Push Notification"
    SMS = "SMS"
    EMAIL = "Email"
    GLOBAL = "Global Announcement"


class UserStatus(str, Enum):
    ACTIVE = "Active"
    SUSPENDED = "Suspended"
    BANNED = "Banned"


class Permission(str, Enum):
    # Platform owner
    VIEW_PLATFORM_DASHBOARD = "view_platform_dashboard"
    MANAGE_SUBSCRIPTIONS = "manage_subscriptions"

    VIEW_DASHBOARD = "view_dashboard"
    VIEW_PROPERTIES = "view_properties"
    MANAGE_PROPERTIES = "manage_properties"
    VIEW_TENANTS = "view_tenants"
    MANAGE_TENANTS = "manage_tenants"
    VIEW_PAYMENTS = "view_payments"
    MANAGE_PAYMENTS = "manage_payments"
    VIEW_MAINTENANCE = "view_maintenance"
    MANAGE_MAINTENANCE = "manage_maintenance"

    VIEW_REPORTS = "view_reports"
    VIEW_EMAIL_LOG = "view_email_log"
    VIEW_PUSH_LOG = "view_push_log"
    VIEW_SMS_LOG = "view_sms_log"

    VIEW_AGENTS = "view_agents"
    MANAGE_AGENTS = "manage_agents"

    MANAGE_USERS = "manage_users"
    VIEW_AUDIT_LOG = "view_audit_log"

    MANAGE_SETTINGS = "manage_settings"
    MANAGE_ROLES = "manage_roles"
    MANAGE_NOTIFICATIONS = "manage_notifications"
    MANAGE_COMMUNICATIONS = "manage_communications"
    MANAGE_COMMISSIONS = "manage_commissions"

    # Agent scoped
    AGENT_CAN_EDIT_OWN_PROPERTIES = "agent_can_edit_own_properties"
    AGENT_CAN_MANAGE_OWN_TENANTS = "agent_can_manage_own_tenants"
    AGENT_CAN_RECORD_PAYMENTS_FOR_OWN_TENANTS = "agent_can_record_payments_for_own_tenants"
