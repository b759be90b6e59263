"""Pytest configuration and fixtures."""

from datetime import date, datetime
from decimal import Decimal
from typing import Callable

import pytest

from estate_ledger.models import (
    Agent,
    Department,
    Payment,
    PaymentStatus,
    PaymentType,
    Property,
    Tenant,
    User,
)
from estate_ledger.store import EstateDataStore

AS_OF = datetime(2024, 6, 15, 12, 0)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def as_of() -> datetime:
    """Fixed evaluation moment, mid-lease for the sample tenant."""
    return AS_OF


@pytest.fixture
def sample_department() -> Department:
    return Department(department_id="dept-001", name="Residential")


@pytest.fixture
def sample_agent() -> Agent:
    """Agent earning 5% commission."""
    return Agent(
        agent_id="agent-001",
        name="Ada Obi",
        department_id="dept-001",
        phone="08030000001",
        email="ada@example.com",
        commission_rate=Decimal("5"),
    )


@pytest.fixture
def sample_property() -> Property:
    """Property with 100,000 rent and 50,000 deposit."""
    return Property(
        property_id="prop-001",
        name="Luxury Villa",
        department_id="dept-001",
        rent_amount=Decimal("100000"),
        deposit_amount=Decimal("50000"),
        agent_id="agent-001",
    )


@pytest.fixture
def sample_tenant() -> Tenant:
    """Tenant whose lease started at the beginning of 2024."""
    return Tenant(
        tenant_id="ten-001",
        full_name="John Doe",
        property_id="prop-001",
        lease_start_date=date(2024, 1, 1),
        lease_end_date=date(2025, 1, 1),
        rent_due_date=date(2025, 1, 1),
        phone="08031234567",
        email="john@example.com",
        username="johndoe",
    )


@pytest.fixture
def admin() -> User:
    return User(user_id="user-admin", name="Admin", username="admin", role_id="role_super_admin")


@pytest.fixture
def make_payment() -> Callable[..., Payment]:
    """Factory for payments to the sample tenant."""
    counter = iter(range(1, 10_000))

    def _make(
        amount: int | str | Decimal,
        payment_type: PaymentType = PaymentType.RENT,
        status: PaymentStatus = PaymentStatus.PAID,
        tenant_id: str = "ten-001",
        property_id: str = "prop-001",
        when: datetime = datetime(2024, 2, 1, 10, 0),
        payment_id: str | None = None,
    ) -> Payment:
        return Payment(
            payment_id=payment_id or f"pay-{next(counter):03d}",
            tenant_id=tenant_id,
            property_id=property_id,
            payment_type=payment_type,
            payment_status=status,
            amount_paid=Decimal(str(amount)),
            date=when,
        )

    return _make


@pytest.fixture
def store(
    sample_department: Department,
    sample_agent: Agent,
    sample_property: Property,
    sample_tenant: Tenant,
    admin: User,
) -> EstateDataStore:
    """Store with default roles, an admin and one occupied property."""
    store = EstateDataStore.with_default_roles(clock=lambda: AS_OF)
    store.add_user(admin)
    store.add_department(sample_department)
    store.add_agent(sample_agent)
    store.add_property(sample_property)
    store.add_tenant(sample_tenant)
    return store
