"""Roles, staff users and the default role catalogue."""

from dataclasses import dataclass, field

from estate_ledger.models.enums import Permission, UserStatus


@dataclass
class Role:
    """Named permission set."""

    role_id: str
    name: str
    permissions: set[Permission] = field(default_factory=set)


@dataclass
class User:
    """Staff account. Property managers are scoped to one department."""

    user_id: str
    name: str
    username: str
    role_id: str
    status: UserStatus = UserStatus.ACTIVE
    department_id: str | None = None


PLATFORM_OWNER = "Platform Owner"
PLATFORM_SUPPORT = "Platform Support"
SUPER_ADMIN = "Super Admin"
PROPERTY_MANAGER = "Property Manager"
ACCOUNTANT = "Accountant"
AGENT = "Agent"


def default_roles() -> list[Role]:
    """Build the built-in roles.

    Super Admin is the business owner: every permission except the
    platform-level ones.
    """
    platform_only = {Permission.VIEW_PLATFORM_DASHBOARD, Permission.MANAGE_SUBSCRIPTIONS}

    return [
        Role(
            role_id="role_platform_owner",
            name=PLATFORM_OWNER,
            permissions={
                Permission.VIEW_PLATFORM_DASHBOARD,
                Permission.MANAGE_USERS,
                Permission.MANAGE_SETTINGS,
                Permission.MANAGE_ROLES,
                Permission.VIEW_AUDIT_LOG,
                Permission.MANAGE_SUBSCRIPTIONS,
                Permission.MANAGE_COMMUNICATIONS,
                Permission.MANAGE_NOTIFICATIONS,
            },
        ),
        Role(
            role_id="role_platform_support",
            name=PLATFORM_SUPPORT,
            permissions={
                Permission.VIEW_PLATFORM_DASHBOARD,
                Permission.MANAGE_USERS,
                Permission.VIEW_AUDIT_LOG,
                Permission.MANAGE_COMMUNICATIONS,
            },
        ),
        Role(
            role_id="role_super_admin",
            name=SUPER_ADMIN,
            permissions=set(Permission) - platform_only,
        ),
        Role(
            role_id="role_manager",
            name=PROPERTY_MANAGER,
            permissions={
                Permission.VIEW_DASHBOARD,
                Permission.VIEW_PROPERTIES,
                Permission.MANAGE_PROPERTIES,
                Permission.VIEW_TENANTS,
                Permission.MANAGE_TENANTS,
                Permission.VIEW_PAYMENTS,
                Permission.MANAGE_PAYMENTS,
                Permission.VIEW_MAINTENANCE,
                Permission.MANAGE_MAINTENANCE,
                Permission.VIEW_AGENTS,
                Permission.MANAGE_AGENTS,
                Permission.VIEW_REPORTS,
                Permission.MANAGE_USERS,
                Permission.VIEW_EMAIL_LOG,
                Permission.VIEW_PUSH_LOG,
                Permission.VIEW_SMS_LOG,
                Permission.VIEW_AUDIT_LOG,
                Permission.MANAGE_NOTIFICATIONS,
                Permission.MANAGE_COMMUNICATIONS,
            },
        ),
        Role(
            role_id="role_accountant",
            name=ACCOUNTANT,
            permissions={
                Permission.VIEW_DASHBOARD,
                Permission.VIEW_PAYMENTS,
                Permission.MANAGE_PAYMENTS,
                Permission.VIEW_REPORTS,
                Permission.MANAGE_COMMISSIONS,
            },
        ),
        Role(
            role_id="role_agent",
            name=AGENT,
            permissions={
                Permission.VIEW_DASHBOARD,
                Permission.VIEW_PROPERTIES,
                Permission.VIEW_TENANTS,
                Permission.AGENT_CAN_RECORD_PAYMENTS_FOR_OWN_TENANTS,
                Permission.MANAGE_NOTIFICATIONS,
            },
        ),
    ]
