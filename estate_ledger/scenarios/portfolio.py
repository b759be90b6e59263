"""Estate portfolio scenario: a populated business with mixed payment behaviour."""

from __future__ import annotations

import logging
import random
from datetime import date, timedelta
from typing import Any

from estate_ledger.config import ScenarioConfig
from estate_ledger.generators import (
    AgentGenerator,
    DepartmentGenerator,
    PaymentBehavior,
    PropertyGenerator,
    TenantGenerator,
)
from estate_ledger.ledger import analytics
from estate_ledger.models import (
    CommissionPayment,
    Maintenance,
    Property,
    PropertyStatus,
    User,
)
from estate_ledger.store.estate import EstateDataStore

logger = logging.getLogger(__name__)


class EstatePortfolioScenario:
    """Generate a property-management business ready for the ledger.

    This scenario creates:
    - Departments with agents (each agent also has a staff login)
    - Properties assigned to agents, some under maintenance
    - Tenants in a share of the properties
    - Payment histories mixing tenants who:
        - Paid rent and deposit in full
        - Paid part of the rent
        - Submitted rent that awaits approval
        - Paid nothing yet
    - Commission payouts for last month's collections
    """

    def __init__(
        self,
        num_properties: int = 20,
        occupancy_rate: float = 0.75,
        num_agents: int = 4,
        paid_in_full_rate: float = 0.55,
        partial_rate: float = 0.20,
        pending_rate: float = 0.10,
        unpaid_rate: float = 0.15,
        maintenance_rate: float = 0.10,
        seed: int | None = None,
        reference_date: date | None = None,
        *,
        config: ScenarioConfig | None = None,
    ) -> None:
        """Initialize the portfolio scenario.

        Parameters
        ----------
        num_properties : int
            Number of properties to generate.
        occupancy_rate : float
            Share of properties with a tenant (0.0 to 1.0).
        num_agents : int
            Number of agents.
        paid_in_full_rate, partial_rate, pending_rate, unpaid_rate : float
            Relative weights of the tenant payment behaviours.
        maintenance_rate : float
            Share of vacant properties put under maintenance.
        seed : int | None
            Random seed for reproducibility.
        reference_date : date | None
            The scenario's "today". Defaults to the current date.
        config : ScenarioConfig | None
            Optional scenario configuration. If provided, overrides
            num_properties, occupancy_rate and num_agents.
        """
        if config is not None:
            num_properties = config.num_properties
            occupancy_rate = config.occupancy_rate
            num_agents = config.num_agents
        self.config = config
        self.num_properties = num_properties
        self.occupancy_rate = occupancy_rate
        self.num_agents = num_agents
        self.behavior_weights = {
            "paid_in_full_rate": paid_in_full_rate,
            "partial_rate": partial_rate,
            "pending_rate": pending_rate,
            "unpaid_rate": unpaid_rate,
        }
        self.maintenance_rate = maintenance_rate
        self.seed = seed
        self.reference_date = reference_date or date.today()

        if seed is not None:
            random.seed(seed)

        self.store = EstateDataStore.with_default_roles()
        self._department_gen = DepartmentGenerator(seed=seed)
        self._agent_gen = AgentGenerator(seed=seed)
        self._property_gen = PropertyGenerator(seed=seed)
        self._tenant_gen = TenantGenerator(seed=seed)
        self._behavior = PaymentBehavior(seed=seed)
        self.behaviors: dict[str, str] = {}

    def generate(self) -> EstateDataStore:
        """Generate all data for the portfolio.

        Returns
        -------
        EstateDataStore
            Store containing all generated data.
        """
        logger.info(
            "Starting estate portfolio scenario: %d properties, %.0f%% occupied",
            self.num_properties,
            self.occupancy_rate * 100,
        )

        admin = User(user_id="user_admin", name="Administrator", username="admin", role_id="role_super_admin")
        self.store.add_user(admin)

        departments = list(self._department_gen.generate_batch(3))
        for department in departments:
            self.store.add_department(department)

        residential = departments[0]
        for agent in self._agent_gen.generate_batch(self.num_agents, residential.department_id):
            self.store.add_agent(agent)
            self.store.add_user(
                User(
                    user_id=agent.agent_id,
                    name=agent.name,
                    username=agent.email.split("@")[0],
                    role_id="role_agent",
                    department_id=agent.department_id,
                )
            )
        agent_ids = list(self.store.agents)

        for _ in range(self.num_properties):
            department = random.choice(departments)
            agent_id = random.choice(agent_ids) if agent_ids else None
            self.store.add_property(self._property_gen.generate(department.department_id, agent_id), admin)

        logger.info(
            "Generated %d departments, %d agents, %d properties",
            len(self.store.departments),
            len(self.store.agents),
            len(self.store.properties),
        )

        properties = list(self.store.properties.values())
        num_occupied = int(len(properties) * self.occupancy_rate)
        for prop in properties[:num_occupied]:
            self._populate_tenant(prop, admin)

        self._add_maintenance(properties[num_occupied:], admin)
        self._pay_commissions(admin)

        logger.info(
            "Generated %d tenants with %d payments (%d pending approval)",
            len(self.store.tenants),
            len(self.store.payments),
            len(self.store.pending_payments()),
        )
        return self.store

    def _populate_tenant(self, prop: Property, admin: User) -> None:
        tenant = self._tenant_gen.generate(prop.property_id, self.reference_date)
        self.store.add_tenant(tenant, admin)

        behavior = self._behavior.choose(**self.behavior_weights)
        self.behaviors[tenant.tenant_id] = behavior

        payments = self._behavior.payments_for(tenant, prop, behavior, self.reference_date)
        for i, payment in enumerate(payments):
            awaiting_approval = behavior == "pending_approval" and i == len(payments) - 1
            if awaiting_approval:
                self.store.record_payment(payment, tenant, tenant_flow=True)
            else:
                self.store.record_payment(payment, admin)

    def _add_maintenance(self, vacant: list[Property], admin: User) -> None:
        """Put a share of vacant properties under maintenance."""
        count = int(len(vacant) * self.maintenance_rate)
        for prop in vacant[:count]:
            self.store.set_property_status(prop.property_id, PropertyStatus.UNDER_MAINTENANCE, admin)
            self.store.add_maintenance(
                Maintenance(
                    maintenance_id=self._property_gen.fake.uuid4(),
                    property_id=prop.property_id,
                    task=random.choice(["Repaint interior", "Fix plumbing", "Replace roofing sheets"]),
                    cost=prop.rent_amount / 20,
                    date=self.reference_date,
                ),
                admin,
            )

    def _pay_commissions(self, admin: User) -> None:
        """Pay each agent the commission on last month's rent collections."""
        period_end = self.reference_date.replace(day=1) - timedelta(days=1)
        period_start = period_end.replace(day=1)
        for agent in self.store.agents.values():
            suggestion = self.store.suggest_commission(agent.agent_id, period_start, period_end)
            if suggestion.commission_earned <= 0:
                continue
            self.store.pay_commission(
                CommissionPayment(
                    commission_payment_id=self._agent_gen.fake.uuid4(),
                    agent_id=agent.agent_id,
                    amount=suggestion.commission_earned,
                    payment_date=self.reference_date,
                    period_start_date=period_start,
                    period_end_date=period_end,
                ),
                admin,
            )

    def export(self, sinks: list[Any]) -> None:
        """Export generated data to sinks.

        Parameters
        ----------
        sinks : list[Any]
            List of sink instances.
        """
        for sink in sinks:
            sink.write_store(self.store)

        logger.info("Exported estate portfolio to %d sinks", len(sinks))

    def get_portfolio_summary(self) -> dict[str, Any]:
        """Get summary statistics for the portfolio.

        Returns
        -------
        dict[str, Any]
            Portfolio summary statistics.
        """
        store = self.store
        if not store.properties:
            return {}

        kpis = analytics.dashboard_kpis(
            store.properties.values(),
            store.tenants.values(),
            store.payments,
            store.agents.values(),
            store.maintenance,
            store.commission_payments,
        )
        rows = analytics.tenant_statuses(
            store.tenants.values(), store.properties.values(), store.payments, self.reference_date
        )

        status_counts: dict[str, int] = {}
        for row in rows:
            status_counts[row.status.value] = status_counts.get(row.status.value, 0) + 1

        return {
            "total_properties": kpis.total_properties,
            "occupied": kpis.total_occupied,
            "vacant": kpis.total_vacant,
            "under_maintenance": kpis.total_under_maintenance,
            "total_tenants": kpis.total_tenants,
            "total_payments_received": float(kpis.total_payments_received),
            "total_unpaid": float(kpis.total_unpaid),
            "total_commission_paid": float(kpis.total_commission_paid),
            "pending_approvals": len(store.pending_payments()),
            "expiring_leases": len(
                analytics.expiring_leases(
                    store.tenants.values(), self.reference_date, config=store.config
                )
            ),
            "tenant_status_distribution": status_counts,
        }
