"""Tests for Faker-backed estate generators."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from estate_ledger.generators import (
    AgentGenerator,
    DepartmentGenerator,
    PaymentBehavior,
    PaymentGenerator,
    PropertyGenerator,
    TenantGenerator,
)
from estate_ledger.generators.patterns import BEHAVIORS
from estate_ledger.ledger.engine import compute_balance
from estate_ledger.models import (
    ObligationType,
    PaymentStatus,
    PaymentType,
    PropertyStatus,
)

TODAY = date(2024, 6, 15)


class TestDepartmentGenerator:
    def test_batch_cycles_names(self, seed: int) -> None:
        names = [d.name for d in DepartmentGenerator(seed=seed).generate_batch(5)]
        assert names == ["Residential", "Office", "Commercial", "Short Let", "Residential"]

    def test_explicit_name(self, seed: int) -> None:
        assert DepartmentGenerator(seed=seed).generate("Office").name == "Office"


class TestAgentGenerator:
    def test_generate(self, seed: int) -> None:
        agent = AgentGenerator(seed=seed).generate("dept-001")

        assert agent.department_id == "dept-001"
        assert agent.commission_rate in AgentGenerator.COMMISSION_RATES
        assert agent.name

    def test_batch(self, seed: int) -> None:
        agents = list(AgentGenerator(seed=seed).generate_batch(3, "dept-001"))
        assert len({a.agent_id for a in agents}) == 3


class TestPropertyGenerator:
    def test_amounts(self, seed: int) -> None:
        gen = PropertyGenerator(seed=seed)
        for _ in range(20):
            prop = gen.generate("dept-001", "agent-001")
            assert prop.rent_amount >= Decimal("500000")
            assert prop.rent_amount % 50000 == 0
            assert 0 < prop.deposit_amount <= prop.rent_amount
            assert prop.status == PropertyStatus.VACANT
            assert prop.agent_id == "agent-001"

    def test_reproducible(self, seed: int) -> None:
        a = PropertyGenerator(seed=seed).generate("dept-001")
        b = PropertyGenerator(seed=seed).generate("dept-001")
        assert a.property_id == b.property_id
        assert a.name == b.name


class TestTenantGenerator:
    def test_lease_shape(self, seed: int) -> None:
        gen = TenantGenerator(seed=seed)
        for _ in range(20):
            tenant = gen.generate("prop-001", TODAY)
            assert tenant.lease_end_date - tenant.lease_start_date == timedelta(days=365)
            assert tenant.rent_due_date == tenant.lease_end_date
            assert tenant.lease_start_date <= TODAY + timedelta(days=30)
            assert len(tenant.nin) == 11
            assert tenant.guarantor is not None


class TestPaymentGenerator:
    def test_generate(self, seed: int, sample_tenant) -> None:
        payment = PaymentGenerator(seed=seed).generate(
            sample_tenant, PaymentType.RENT, Decimal("1000"), paid_on=date(2024, 2, 1)
        )
        assert payment.tenant_id == "ten-001"
        assert payment.property_id == "prop-001"
        assert payment.date.date() == date(2024, 2, 1)
        assert payment.payment_status == PaymentStatus.PAID


class TestPaymentBehavior:
    """Tests for the tenant payment behaviour mix."""

    def test_choose(self, seed: int) -> None:
        behavior = PaymentBehavior(seed=seed)
        assert behavior.choose() in BEHAVIORS
        assert behavior.choose(1, 0, 0, 0) == "paid_in_full"

    def test_paid_in_full_settles(self, seed: int, sample_tenant, sample_property) -> None:
        behavior = PaymentBehavior(seed=seed)
        for _ in range(10):
            payments = behavior.payments_for(sample_tenant, sample_property, "paid_in_full", TODAY)
            for obligation in ObligationType:
                assert compute_balance(sample_tenant, sample_property, payments, obligation).balance == 0

    def test_partial_leaves_rent(self, seed: int, sample_tenant, sample_property) -> None:
        payments = PaymentBehavior(seed=seed).payments_for(sample_tenant, sample_property, "partial", TODAY)
        rent = compute_balance(sample_tenant, sample_property, payments, ObligationType.RENT)
        assert 0 < rent.balance < sample_property.rent_amount

    def test_unpaid_and_upcoming_pay_nothing(self, seed: int, sample_tenant, sample_property) -> None:
        behavior = PaymentBehavior(seed=seed)
        assert behavior.payments_for(sample_tenant, sample_property, "unpaid", TODAY) == []
        assert behavior.payments_for(sample_tenant, sample_property, "paid_in_full", date(2023, 1, 1)) == []

    @pytest.mark.parametrize("kind", BEHAVIORS)
    def test_payments_not_after_today(self, seed: int, sample_tenant, sample_property, kind: str) -> None:
        payments = PaymentBehavior(seed=seed).payments_for(sample_tenant, sample_property, kind, TODAY)
        assert all(p.date.date() <= TODAY for p in payments)
