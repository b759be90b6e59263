"""Behavioral patterns for realistic tenant payment histories."""

import random
from datetime import date, timedelta
from decimal import Decimal

from estate_ledger.generators.estate import PaymentGenerator
from estate_ledger.models import Payment, PaymentStatus, PaymentType, Property, Tenant

BEHAVIORS = ["paid_in_full", "partial", "pending_approval", "unpaid"]


class PaymentBehavior:
    """Simulate how tenants settle their rent and deposit."""

    def __init__(self, seed: int | None = None) -> None:
        if seed is not None:
            random.seed(seed)
        self._payment_gen = PaymentGenerator(seed=seed)

    def choose(
        self,
        paid_in_full_rate: float = 0.55,
        partial_rate: float = 0.20,
        pending_rate: float = 0.10,
        unpaid_rate: float = 0.15,
    ) -> str:
        """Pick a behaviour type with the given weights."""
        return random.choices(
            BEHAVIORS,
            weights=[paid_in_full_rate, partial_rate, pending_rate, unpaid_rate],
            k=1,
        )[0]

    def payments_for(
        self,
        tenant: Tenant,
        prop: Property,
        behavior: str,
        reference_date: date | None = None,
    ) -> list[Payment]:
        """Build a tenant's payment history for a behaviour type.

        Parameters
        ----------
        tenant : Tenant
            Tenant paying.
        prop : Property
            The tenant's property, for rent and deposit amounts.
        behavior : str
            One of ``paid_in_full``, ``partial``, ``pending_approval`` or
            ``unpaid``.
        reference_date : date | None
            Today. Tenants whose lease has not started yet pay nothing.

        Returns
        -------
        list[Payment]
            Payments to record, oldest first. ``pending_approval`` payments
            still carry Paid status; the tenant flow sets them pending.
        """
        if reference_date is None:
            reference_date = date.today()
        start = tenant.lease_start_date
        if start > reference_date or behavior == "unpaid":
            return []

        def on(offset_days: int) -> date:
            return min(reference_date, start + timedelta(days=offset_days))

        deposit = self._payment_gen.generate(
            tenant, PaymentType.DEPOSIT, prop.deposit_amount, PaymentStatus.DEPOSIT, on(0)
        )

        if behavior == "paid_in_full":
            # Rent often arrives in two instalments
            if random.random() < 0.5:
                first = (prop.rent_amount / 2).quantize(Decimal("1"))
                return [
                    deposit,
                    self._payment_gen.generate(tenant, PaymentType.RENT, first, paid_on=on(0)),
                    self._payment_gen.generate(
                        tenant, PaymentType.RENT, prop.rent_amount - first, paid_on=on(30)
                    ),
                ]
            return [deposit, self._payment_gen.generate(tenant, PaymentType.RENT, prop.rent_amount, paid_on=on(0))]

        if behavior == "partial":
            fraction = Decimal(random.choice(["0.25", "0.5", "0.75"]))
            amount = (prop.rent_amount * fraction).quantize(Decimal("1"))
            return [deposit, self._payment_gen.generate(tenant, PaymentType.RENT, amount, paid_on=on(0))]

        # pending_approval
        return [
            deposit,
            self._payment_gen.generate(tenant, PaymentType.RENT, prop.rent_amount, paid_on=reference_date),
        ]
