"""Estate data store with referential integrity and occupancy tracking."""

from __future__ import annotations

import logging
import uuid as _uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable

from estate_ledger.config import LedgerConfig
from estate_ledger.exceptions import (
    EntityNotFoundError,
    InvalidEntityStateError,
    PermissionDeniedError,
    ReferentialIntegrityError,
    ValidationError,
)
from estate_ledger.ledger.engine import (
    Balance,
    CommissionSummary,
    OverdueDetail,
    aggregate_commission,
    classify_tenant_status,
    compute_balance,
    compute_overdue_detail,
    compute_projected_balance,
    to_amount,
    to_datetime,
)
from estate_ledger.models import (
    Agent,
    AuditLogEntry,
    CommissionPayment,
    Department,
    EmailLogEntry,
    Maintenance,
    MaintenanceStatus,
    Notification,
    ObligationType,
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
    TenantRentStatus,
    User,
)
from estate_ledger.models import access

logger = logging.getLogger(__name__)


@dataclass
class PaymentPreview:
    """Live balance figures shown while a payment is being entered."""

    label: str
    balance: Decimal
    balance_after: Decimal


@dataclass
class StoreSlice:
    """The subset of entities a staff user is allowed to see."""

    properties: list[Property] = field(default_factory=list)
    tenants: list[Tenant] = field(default_factory=list)
    payments: list[Payment] = field(default_factory=list)
    agents: list[Agent] = field(default_factory=list)
    maintenance: list[Maintenance] = field(default_factory=list)
    commission_payments: list[CommissionPayment] = field(default_factory=list)


@dataclass
class EstateDataStore:
    """In-memory application state for one property-management business.

    Entities are held by id with relationship indexes, the way views read
    them. Money questions are answered by the ledger engine over slices of
    this state; the store itself never sums payments.
    """

    # Reference data
    departments: dict[str, Department] = field(default_factory=dict)
    roles: dict[str, Role] = field(default_factory=dict)
    users: dict[str, User] = field(default_factory=dict)
    agents: dict[str, Agent] = field(default_factory=dict)

    # Primary entities
    properties: dict[str, Property] = field(default_factory=dict)
    tenants: dict[str, Tenant] = field(default_factory=dict)

    # Records, append only
    payments: list[Payment] = field(default_factory=list)
    maintenance: list[Maintenance] = field(default_factory=list)
    commission_payments: list[CommissionPayment] = field(default_factory=list)
    audit_log: list[AuditLogEntry] = field(default_factory=list)  # newest first
    notifications: list[Notification] = field(default_factory=list)  # newest first
    sms_log: list[SmsLogEntry] = field(default_factory=list)
    email_log: list[EmailLogEntry] = field(default_factory=list)
    read_notification_ids: set[str] = field(default_factory=set)

    config: LedgerConfig = field(default_factory=LedgerConfig)
    clock: Callable[[], datetime] = field(default=datetime.now, repr=False)

    # Relationship indexes
    _payment_index: dict[str, int] = field(default_factory=dict)
    _tenant_payments: dict[str, list[int]] = field(default_factory=dict)

    @classmethod
    def with_default_roles(cls, **kwargs: Any) -> "EstateDataStore":
        """Create a store pre-populated with the built-in roles."""
        store = cls(**kwargs)
        for role in access.default_roles():
            store.add_role(role)
        return store

    def reindex(self) -> None:
        """Rebuild indexes after bulk-loading ``payments`` and ``notifications``."""
        self._payment_index = {}
        self._tenant_payments = {tenant_id: [] for tenant_id in self.tenants}
        for idx, payment in enumerate(self.payments):
            self._payment_index[payment.payment_id] = idx
            self._tenant_payments.setdefault(payment.tenant_id, []).append(idx)
        self.read_notification_ids.update(n.notification_id for n in self.notifications if n.read)

    # Reference data
    def add_department(self, department: Department) -> None:
        """Add a department to the store."""
        self.departments[department.department_id] = department

    def add_role(self, role: Role) -> None:
        """Add a role to the store."""
        self.roles[role.role_id] = role

    def add_user(self, user: User) -> None:
        """Add a staff user to the store."""
        if user.role_id not in self.roles:
            raise ReferentialIntegrityError(f"Role {user.role_id} not found")
        self.users[user.user_id] = user

    def add_agent(self, agent: Agent) -> None:
        """Add an agent to the store."""
        if agent.department_id not in self.departments:
            raise ReferentialIntegrityError(f"Department {agent.department_id} not found")
        if agent.commission_rate is not None and to_amount(agent.commission_rate) < 0:
            raise ValidationError("Commission rate cannot be negative.")
        self.agents[agent.agent_id] = agent

    def add_property(self, prop: Property, actor: Any = None) -> None:
        """Add a property to the store."""
        if prop.department_id not in self.departments:
            raise ReferentialIntegrityError(f"Department {prop.department_id} not found")
        if prop.agent_id and prop.agent_id not in self.agents:
            raise ReferentialIntegrityError(f"Agent {prop.agent_id} not found")
        if to_amount(prop.rent_amount) < 0 or to_amount(prop.deposit_amount) < 0:
            raise ValidationError("Rent and deposit amounts cannot be negative.")

        self.properties[prop.property_id] = prop
        self.add_audit_log(actor, "CREATED_PROPERTY", f"Added property: {prop.name}", prop.property_id)

    def set_property_status(
        self, property_id: str, status: PropertyStatus, actor: Any = None
    ) -> None:
        """Change a property's occupancy status directly."""
        prop = self._require_property(property_id)
        prop.status = PropertyStatus(status)
        self.add_audit_log(
            actor, "UPDATED_PROPERTY", f"Set {prop.name} to {prop.status.value}", property_id
        )

    # Tenants
    def add_tenant(self, tenant: Tenant, actor: Any = None) -> None:
        """Register a tenant and mark their property Occupied."""
        if tenant.tenant_id in self.tenants:
            raise InvalidEntityStateError(f"Tenant {tenant.tenant_id} already exists")
        prop = self._require_property(tenant.property_id)
        self._validate_lease(tenant)
        if prop.status != PropertyStatus.VACANT:
            raise InvalidEntityStateError(f'Property "{prop.name}" is currently occupied.')

        self.tenants[tenant.tenant_id] = tenant
        self._tenant_payments.setdefault(tenant.tenant_id, [])
        prop.status = PropertyStatus.OCCUPIED

        logger.info(
            "Registered tenant %s in property %s",
            tenant.tenant_id,
            prop.property_id,
            extra={"tenant_id": tenant.tenant_id, "property_id": prop.property_id},
        )
        self.add_audit_log(
            actor, "CREATED_TENANT", f"Registered new tenant: {tenant.full_name}", tenant.tenant_id
        )

    def update_tenant(self, tenant: Tenant, actor: Any = None) -> None:
        """Replace a tenant record, moving occupancy if the property changed."""
        existing = self._require_tenant(tenant.tenant_id)
        new_prop = self._require_property(tenant.property_id)
        self._validate_lease(tenant)

        old_property_id = existing.property_id
        if old_property_id != tenant.property_id:
            if new_prop.status != PropertyStatus.VACANT:
                raise InvalidEntityStateError(f'Property "{new_prop.name}" is currently occupied.')
            old_prop = self.properties.get(old_property_id)
            if old_prop is not None:
                old_prop.status = PropertyStatus.VACANT
            new_prop.status = PropertyStatus.OCCUPIED
            logger.info(
                "Moved tenant %s from %s to %s",
                tenant.tenant_id,
                old_property_id,
                tenant.property_id,
                extra={"tenant_id": tenant.tenant_id, "property_id": tenant.property_id},
            )

        self.tenants[tenant.tenant_id] = tenant
        self.add_audit_log(
            actor, "UPDATED_TENANT", f"Updated tenant: {tenant.full_name}", tenant.tenant_id
        )

    def remove_tenant(self, tenant_id: str, actor: Any = None) -> Tenant:
        """Remove a tenant and vacate their property.

        Their payments stay in the store for the audit trail.
        """
        tenant = self._require_tenant(tenant_id)
        del self.tenants[tenant_id]

        prop = self.properties.get(tenant.property_id)
        if prop is not None:
            prop.status = PropertyStatus.VACANT

        logger.info("Removed tenant %s", tenant_id, extra={"tenant_id": tenant_id})
        self.add_audit_log(actor, "DELETED_TENANT", f"Deleted tenant: {tenant.full_name}", tenant_id)
        return tenant

    # Payments
    def record_payment(
        self, payment: Payment, actor: Any = None, tenant_flow: bool = False
    ) -> Payment:
        """Record a new payment.

        Parameters
        ----------
        payment : Payment
            Payment to record. A blank ``property_id`` defaults to the
            tenant's property and a missing ``agent_id`` to the property's
            agent.
        actor : User | Tenant | None
            Who recorded it, for the audit trail.
        tenant_flow : bool
            Submitted from the tenant portal. The payment is forced to
            Pending Approval, and manual transfers need proof of payment.

        Returns
        -------
        Payment
            The stored payment.
        """
        if payment.payment_id in self._payment_index:
            raise InvalidEntityStateError(f"Payment {payment.payment_id} already exists")
        tenant = self._require_tenant(payment.tenant_id)
        self._validate_amount(payment)
        if (
            tenant_flow
            and payment.payment_method == PaymentMethod.MANUAL
            and not payment.proof_of_payment
        ):
            raise ValidationError("Proof of payment is required for manual transfers.")

        if not payment.property_id:
            payment.property_id = tenant.property_id
        prop = self.properties.get(payment.property_id)
        if payment.agent_id is None and prop is not None:
            payment.agent_id = prop.agent_id
        if payment.date is None:
            payment.date = self.clock()
        if tenant_flow:
            payment.payment_status = PaymentStatus.PENDING_APPROVAL

        idx = len(self.payments)
        self.payments.append(payment)
        self._payment_index[payment.payment_id] = idx
        self._tenant_payments.setdefault(payment.tenant_id, []).append(idx)

        logger.info(
            "Recorded %s payment %s for tenant %s (%s)",
            payment.payment_type.value,
            payment.payment_id,
            payment.tenant_id,
            payment.payment_status.value,
            extra={"payment_id": payment.payment_id, "tenant_id": payment.tenant_id},
        )
        self.add_audit_log(
            actor,
            "CREATED_PAYMENT",
            f"Recorded payment of {self._money(payment.amount_paid)} for {tenant.full_name}",
            payment.payment_id,
        )
        return payment

    def update_payment(self, payment: Payment, actor: Any = None) -> Payment:
        """Replace an existing payment with an edited copy."""
        idx = self._payment_index.get(payment.payment_id)
        if idx is None:
            raise EntityNotFoundError(f"Payment {payment.payment_id} not found")
        tenant = self._require_tenant(payment.tenant_id)
        self._validate_amount(payment)

        previous = self.payments[idx]
        if previous.tenant_id != payment.tenant_id:
            self._tenant_payments[previous.tenant_id].remove(idx)
            self._tenant_payments.setdefault(payment.tenant_id, []).append(idx)
        self.payments[idx] = payment

        self.add_audit_log(
            actor,
            "UPDATED_PAYMENT",
            f"Updated payment of {self._money(payment.amount_paid)} for {tenant.full_name}",
            payment.payment_id,
        )
        return payment

    def approve_payment(self, payment_id: str, actor: Any = None) -> Payment:
        """Move a pending payment to Paid."""
        payment = self._require_pending(payment_id)
        payment.payment_status = PaymentStatus.PAID

        logger.info(
            "Approved payment %s",
            payment_id,
            extra={"payment_id": payment_id, "tenant_id": payment.tenant_id},
        )
        self.add_audit_log(
            actor,
            "APPROVED_PAYMENT",
            f"Approved payment of {self._money(payment.amount_paid)} "
            f"from {self._tenant_name(payment.tenant_id)}",
            payment_id,
        )
        return payment

    def reject_payment(self, payment_id: str, reason: str = "", actor: Any = None) -> Payment:
        """Move a pending payment to Unpaid and note the reason."""
        payment = self._require_pending(payment_id)
        reason = reason.strip() or "No reason provided."
        payment.payment_status = PaymentStatus.UNPAID
        payment.notes = f"{payment.notes or ''}\nRejection Reason: {reason}".strip()

        logger.info(
            "Rejected payment %s: %s",
            payment_id,
            reason,
            extra={"payment_id": payment_id, "tenant_id": payment.tenant_id},
        )
        self.add_audit_log(
            actor,
            "REJECTED_PAYMENT",
            f"Rejected payment of {self._money(payment.amount_paid)} "
            f"from {self._tenant_name(payment.tenant_id)}. Reason: {reason}",
            payment_id,
        )
        return payment

    def mark_receipt_printed(self, payment_id: str) -> None:
        """Flag that a receipt was printed for a payment."""
        self.get_payment(payment_id).receipt_printed = True

    # Ledger
    def tenant_balance(
        self,
        tenant_id: str,
        obligation_type: ObligationType,
        exclude_payment_id: str | None = None,
    ) -> Balance:
        """Balance of one obligation for a tenant."""
        tenant = self._require_tenant(tenant_id)
        return compute_balance(
            tenant,
            self.properties.get(tenant.property_id),
            self.get_tenant_payments(tenant_id),
            obligation_type,
            exclude_payment_id=exclude_payment_id,
        )

    def tenant_status(self, tenant_id: str, as_of: Any) -> TenantRentStatus:
        """Classify a tenant as Upcoming, Paid, Overdue or N/A."""
        tenant = self._require_tenant(tenant_id)
        return classify_tenant_status(
            tenant,
            self.properties.get(tenant.property_id),
            self.get_tenant_payments(tenant_id),
            as_of,
        )

    def tenant_overdue_detail(self, tenant_id: str, as_of: Any) -> OverdueDetail:
        """Amounts a tenant owes and days since the lease started."""
        tenant = self._require_tenant(tenant_id)
        return compute_overdue_detail(
            tenant,
            self.properties.get(tenant.property_id),
            self.get_tenant_payments(tenant_id),
            as_of,
        )

    def preview_payment(
        self,
        tenant_id: str,
        payment_type: PaymentType,
        amount: Any,
        editing_payment_id: str | None = None,
    ) -> PaymentPreview:
        """Balance before and after a payment that is still being typed.

        Deposit payments preview the deposit balance; every other type
        previews rent. When editing, the payment itself is left out of the
        current balance.
        """
        tenant = self.tenants.get(tenant_id)
        if tenant is None or tenant.property_id not in self.properties:
            return PaymentPreview(
                label="Balance",
                balance=Decimal(0),
                balance_after=compute_projected_balance(0, amount),
            )

        if payment_type == PaymentType.DEPOSIT:
            obligation, label = ObligationType.DEPOSIT, "Deposit Balance Due"
        else:
            obligation, label = ObligationType.RENT, "Rent Balance Due"

        balance = self.tenant_balance(tenant_id, obligation, exclude_payment_id=editing_payment_id)
        return PaymentPreview(
            label=label,
            balance=balance.balance,
            balance_after=compute_projected_balance(balance.balance, amount),
        )

    # Commissions
    def set_commission_rate(self, agent_id: str, rate: Any, actor: Any = None) -> None:
        """Set an agent's commission percentage."""
        agent = self._require_agent(agent_id)
        rate = to_amount(rate)
        if rate < 0:
            raise ValidationError("Commission rate cannot be negative.")
        agent.commission_rate = rate
        self.add_audit_log(
            actor, "UPDATED_COMMISSION_RATE", f"Set commission for {agent.name} to {rate}%", agent_id
        )

    def suggest_commission(self, agent_id: str, start: Any, end: Any) -> CommissionSummary:
        """Commission an agent earned on rent collected between two dates."""
        agent = self._require_agent(agent_id)
        return aggregate_commission(agent, self.properties.values(), self.payments, start, end)

    def pay_commission(self, payout: CommissionPayment, actor: Any = None) -> None:
        """Record a commission payout to an agent."""
        agent = self._require_agent(payout.agent_id)
        if to_amount(payout.amount) <= 0:
            raise ValidationError("Amount to pay must be greater than zero.")
        self.commission_payments.append(payout)

        logger.info(
            "Paid commission %s to agent %s",
            payout.amount,
            payout.agent_id,
            extra={"agent_id": payout.agent_id},
        )
        self.add_audit_log(
            actor,
            "PAID_COMMISSION",
            f"Paid commission of {self._money(payout.amount)} to {agent.name}",
            payout.commission_payment_id,
        )

    # Maintenance
    def add_maintenance(self, task: Maintenance, actor: Any = None) -> None:
        """Add a maintenance request."""
        self._require_property(task.property_id)
        if task.tenant_id and task.tenant_id not in self.tenants:
            raise ReferentialIntegrityError(f"Tenant {task.tenant_id} not found")
        if not task.task.strip():
            raise ValidationError("Task description is required.")
        self.maintenance.append(task)
        self.add_audit_log(actor, "CREATED_MAINTENANCE", f"Logged task: {task.task}", task.maintenance_id)

    def update_maintenance_status(
        self,
        maintenance_id: str,
        status: MaintenanceStatus,
        cost: Any = None,
        actor: Any = None,
    ) -> Maintenance:
        """Move a maintenance task along, optionally recording its cost."""
        for task in self.maintenance:
            if task.maintenance_id == maintenance_id:
                break
        else:
            raise EntityNotFoundError(f"Maintenance {maintenance_id} not found")

        task.status = MaintenanceStatus(status)
        if cost is not None:
            task.cost = to_amount(cost)
        self.add_audit_log(
            actor, "UPDATED_MAINTENANCE", f"{task.task}: {task.status.value}", maintenance_id
        )
        return task

    # Audit trail and notifications
    def add_audit_log(
        self, actor: Any, action: str, details: str, target_id: str | None = None
    ) -> AuditLogEntry | None:
        """Record an action taken by a user or tenant.

        Nothing is recorded without an actor.
        """
        if actor is None:
            return None
        if isinstance(actor, Tenant):
            user_id, username = actor.tenant_id, actor.username or actor.full_name
        else:
            user_id, username = actor.user_id, actor.username

        entry = AuditLogEntry(
            entry_id=f"log-{_uuid.uuid4().hex}",
            timestamp=self.clock(),
            user_id=user_id,
            username=username,
            action=action,
            details=details,
            target_id=target_id,
        )
        self.audit_log.insert(0, entry)
        return entry

    def add_notification(self, notification: Notification) -> bool:
        """Add a notification unless its id exists or was already read."""
        if notification.notification_id in self.read_notification_ids:
            return False
        if any(n.notification_id == notification.notification_id for n in self.notifications):
            return False
        self.notifications.insert(0, notification)
        return True

    def mark_notification_read(self, notification_id: str) -> None:
        """Mark a notification read. Its id is never raised again."""
        self.read_notification_ids.add(notification_id)
        for notification in self.notifications:
            if notification.notification_id == notification_id:
                notification.read = True

    def mark_all_notifications_read(self) -> None:
        for notification in self.notifications:
            self.mark_notification_read(notification.notification_id)

    # Access
    def has_permission(self, user: User, permission: Permission) -> bool:
        """Whether the user's role grants ``permission``."""
        role = self.roles.get(user.role_id)
        return role is not None and permission in role.permissions

    def require_permission(self, user: User, permission: Permission) -> None:
        """Raise unless the user's role grants ``permission``."""
        if not self.has_permission(user, permission):
            raise PermissionDeniedError(f"User {user.username} lacks {permission.value}")

    def visible_slice(self, user: User) -> StoreSlice:
        """Entities a staff user may see, scoped by role.

        Super Admins and Accountants see everything, Property Managers see
        their department, Agents see the properties they manage, and
        platform staff see no business data.
        """
        role = self.roles.get(user.role_id)
        role_name = role.name if role else None

        if role_name in (access.PLATFORM_OWNER, access.PLATFORM_SUPPORT):
            return StoreSlice()

        if role_name == access.PROPERTY_MANAGER:
            props = [p for p in self.properties.values() if p.department_id == user.department_id]
            agent_ids = {p.agent_id for p in props}
            return self._slice_for(props, lambda a: a.agent_id in agent_ids)

        if role_name == access.AGENT:
            props = [p for p in self.properties.values() if p.agent_id == user.user_id]
            return self._slice_for(props, lambda a: a.agent_id == user.user_id)

        return StoreSlice(
            properties=list(self.properties.values()),
            tenants=list(self.tenants.values()),
            payments=list(self.payments),
            agents=list(self.agents.values()),
            maintenance=list(self.maintenance),
            commission_payments=list(self.commission_payments),
        )

    # Query methods
    def get_payment(self, payment_id: str) -> Payment:
        """Get a payment by id."""
        idx = self._payment_index.get(payment_id)
        if idx is None:
            raise EntityNotFoundError(f"Payment {payment_id} not found")
        return self.payments[idx]

    def get_tenant_payments(self, tenant_id: str) -> list[Payment]:
        """Get all payments made by a tenant."""
        indices = self._tenant_payments.get(tenant_id, [])
        return [self.payments[i] for i in indices]

    def get_property_tenants(self, property_id: str) -> list[Tenant]:
        """Get tenants assigned to a property."""
        return [t for t in self.tenants.values() if t.property_id == property_id]

    def get_agent_properties(self, agent_id: str) -> list[Property]:
        """Get properties managed by an agent."""
        return [p for p in self.properties.values() if p.agent_id == agent_id]

    def pending_payments(self) -> list[Payment]:
        """Payments waiting for staff approval."""
        return [p for p in self.payments if p.payment_status == PaymentStatus.PENDING_APPROVAL]

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "departments": len(self.departments),
            "agents": len(self.agents),
            "properties": len(self.properties),
            "tenants": len(self.tenants),
            "payments": len(self.payments),
            "pending_payments": len(self.pending_payments()),
            "maintenance": len(self.maintenance),
            "commission_payments": len(self.commission_payments),
            "audit_log": len(self.audit_log),
            "notifications": len(self.notifications),
        }

    # Internals
    def _slice_for(self, props: list[Property], agent_filter: Callable[[Agent], bool]) -> StoreSlice:
        property_ids = {p.property_id for p in props}
        agents = [a for a in self.agents.values() if agent_filter(a)]
        agent_ids = {a.agent_id for a in agents}
        return StoreSlice(
            properties=props,
            tenants=[t for t in self.tenants.values() if t.property_id in property_ids],
            payments=[p for p in self.payments if p.property_id in property_ids],
            agents=agents,
            maintenance=[m for m in self.maintenance if m.property_id in property_ids],
            commission_payments=[c for c in self.commission_payments if c.agent_id in agent_ids],
        )

    def _require_property(self, property_id: str) -> Property:
        prop = self.properties.get(property_id)
        if prop is None:
            raise ReferentialIntegrityError(f"Property {property_id} not found")
        return prop

    def _require_tenant(self, tenant_id: str) -> Tenant:
        tenant = self.tenants.get(tenant_id)
        if tenant is None:
            raise ReferentialIntegrityError(f"Tenant {tenant_id} not found")
        return tenant

    def _require_agent(self, agent_id: str) -> Agent:
        agent = self.agents.get(agent_id)
        if agent is None:
            raise ReferentialIntegrityError(f"Agent {agent_id} not found")
        return agent

    def _require_pending(self, payment_id: str) -> Payment:
        payment = self.get_payment(payment_id)
        if payment.payment_status != PaymentStatus.PENDING_APPROVAL:
            raise InvalidEntityStateError(
                f"Payment {payment_id} is {payment.payment_status.value}, not pending approval"
            )
        return payment

    def _validate_amount(self, payment: Payment) -> None:
        if to_amount(payment.amount_paid) <= 0:
            raise ValidationError("Amount must be a positive number.")

    def _validate_lease(self, tenant: Tenant) -> None:
        start = to_datetime(tenant.lease_start_date)
        end = to_datetime(tenant.lease_end_date)
        if start is None or end is None:
            raise ValidationError("Lease start and end dates are required.")
        if start >= end:
            raise ValidationError("End date must be after start date.")

    def _tenant_name(self, tenant_id: str) -> str:
        tenant = self.tenants.get(tenant_id)
        return tenant.full_name if tenant else "N/A"

    def _money(self, amount: Any) -> str:
        return self.config.format_amount(to_amount(amount))
