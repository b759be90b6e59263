"""Generators for departments, agents, properties, tenants and payments."""

from __future__ import annotations

import random
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Iterator

from estate_ledger.generators.base import BaseGenerator
from estate_ledger.models import (
    Agent,
    Department,
    Guarantor,
    Payment,
    PaymentMethod,
    PaymentStatus,
    PaymentType,
    Property,
    Tenant,
)

LEASE_TERM = timedelta(days=365)


class DepartmentGenerator(BaseGenerator):
    """Generate business departments."""

    NAMES = ["Residential", "Office", "Commercial", "Short Let"]

    def generate(self, name: str | None = None) -> Department:
        return Department(
            department_id=self.fake.uuid4(),
            name=name or random.choice(self.NAMES),
        )

    def generate_batch(self, count: int) -> Iterator[Department]:
        """Yield departments, cycling through the standard names."""
        for i in range(count):
            yield self.generate(self.NAMES[i % len(self.NAMES)])


class AgentGenerator(BaseGenerator):
    """Generate field agents with a commission rate."""

    COMMISSION_RATES = [Decimal("5"), Decimal("7.5"), Decimal("10")]

    def generate(self, department_id: str) -> Agent:
        return Agent(
            agent_id=self.fake.uuid4(),
            name=self.fake.name(),
            department_id=department_id,
            phone=self.fake.phone_number(),
            email=self.fake.email(),
            commission_rate=random.choice(self.COMMISSION_RATES),
        )

    def generate_batch(self, count: int, department_id: str) -> Iterator[Agent]:
        for _ in range(count):
            yield self.generate(department_id)


class PropertyGenerator(BaseGenerator):
    """Generate rentable units."""

    SUFFIXES = ["Court", "Villa", "Heights", "Plaza", "Apartments", "Gardens"]

    # Annual rent, in whole thousands
    RENT_RANGE = (500, 6000)
    DEPOSIT_RATIOS = [Decimal("0.1"), Decimal("0.2"), Decimal("0.5")]

    def generate(self, department_id: str, agent_id: str | None = None) -> Property:
        """Generate a single vacant property.

        Parameters
        ----------
        department_id : str
            Department the property belongs to.
        agent_id : str | None
            Managing agent, if any.

        Returns
        -------
        Property
            Generated property. Rent is a multiple of 50,000.
        """
        rent = Decimal(random.randint(*self.RENT_RANGE) // 50 * 50_000)
        deposit = rent * random.choice(self.DEPOSIT_RATIOS)

        return Property(
            property_id=self.fake.uuid4(),
            name=f"{self.fake.last_name()} {random.choice(self.SUFFIXES)}",
            department_id=department_id,
            rent_amount=rent,
            deposit_amount=deposit.quantize(Decimal("1")),
            agent_id=agent_id,
            unit_number=f"Unit {random.randint(1, 40)}",
            location=self.fake.city(),
            owner=self.fake.name(),
            description=self.fake.sentence(nb_words=8),
        )


class TenantGenerator(BaseGenerator):
    """Generate tenants on one-year leases."""

    def generate(self, property_id: str, reference_date: date | None = None) -> Tenant:
        """Generate a tenant whose lease runs a year from its start.

        Most leases started within the past year. About one in ten starts
        in the coming month, which makes the tenant Upcoming.
        """
        if reference_date is None:
            reference_date = date.today()

        if random.random() < 0.10:
            lease_start = reference_date + timedelta(days=random.randint(1, 30))
        else:
            lease_start = reference_date - timedelta(days=random.randint(0, 330))
        lease_end = lease_start + LEASE_TERM

        return Tenant(
            tenant_id=self.fake.uuid4(),
            full_name=self.fake.name(),
            property_id=property_id,
            lease_start_date=lease_start,
            lease_end_date=lease_end,
            rent_due_date=lease_end,
            phone=self.fake.phone_number(),
            email=self.fake.email(),
            address=self.fake.address().replace("\n", ", "),
            nin=self.fake.numerify("###########"),
            guarantor=Guarantor(
                full_name=self.fake.name(),
                phone=self.fake.phone_number(),
                address=self.fake.address().replace("\n", ", "),
            ),
        )


class PaymentGenerator(BaseGenerator):
    """Generate individual tenant payments."""

    METHODS = [PaymentMethod.TRANSFER, PaymentMethod.CASH, PaymentMethod.POS, PaymentMethod.CHEQUE]
    METHOD_WEIGHTS = [0.60, 0.20, 0.15, 0.05]

    def generate(
        self,
        tenant: Tenant,
        payment_type: PaymentType,
        amount: Decimal,
        status: PaymentStatus = PaymentStatus.PAID,
        paid_on: date | None = None,
    ) -> Payment:
        """Generate one payment for a tenant.

        Parameters
        ----------
        tenant : Tenant
            Paying tenant.
        payment_type : PaymentType
            Rent, Deposit, ...
        amount : Decimal
            Amount paid.
        status : PaymentStatus
            Initial status.
        paid_on : date | None
            Day of the payment. Defaults to a random day between lease
            start and today.

        Returns
        -------
        Payment
            Payment with its property taken from the tenant.
        """
        if paid_on is None:
            span = max(0, (date.today() - tenant.lease_start_date).days)
            paid_on = tenant.lease_start_date + timedelta(days=random.randint(0, span))

        method = random.choices(self.METHODS, weights=self.METHOD_WEIGHTS, k=1)[0]
        paid_at = datetime.combine(paid_on, time(hour=random.randint(8, 17), minute=random.randint(0, 59)))

        return Payment(
            payment_id=self.fake.uuid4(),
            tenant_id=tenant.tenant_id,
            property_id=tenant.property_id,
            payment_type=payment_type,
            payment_status=status,
            amount_paid=amount,
            date=paid_at,
            payment_method=method,
        )
