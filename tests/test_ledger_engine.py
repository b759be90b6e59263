"""Tests for the tenant ledger engine."""

import copy
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from estate_ledger.ledger.engine import (
    ZERO,
    Balance,
    aggregate_commission,
    classify_tenant_status,
    compute_balance,
    compute_overdue_detail,
    compute_projected_balance,
    compute_total_due,
    end_of_day,
    lease_has_started,
    qualifying_payments,
    to_amount,
    to_datetime,
)
from estate_ledger.models import (
    Agent,
    ObligationType,
    PaymentStatus,
    PaymentType,
    Property,
    TenantRentStatus,
)


class TestToAmount:
    """Tests for amount coercion."""

    def test_decimal_passthrough(self) -> None:
        assert to_amount(Decimal("12.50")) == Decimal("12.50")

    def test_int_and_float(self) -> None:
        assert to_amount(100) == Decimal("100")
        assert to_amount(0.1) == Decimal("0.1")

    def test_numeric_string(self) -> None:
        assert to_amount(" 2500 ") == Decimal("2500")

    @pytest.mark.parametrize("junk", [None, "", "abc", float("nan"), float("inf"), True, [1]])
    def test_junk_is_zero(self, junk: object) -> None:
        assert to_amount(junk) == ZERO


class TestToDatetime:
    """Tests for date coercion."""

    def test_date_becomes_midnight(self) -> None:
        assert to_datetime(date(2024, 1, 2)) == datetime(2024, 1, 2)

    def test_iso_string_with_z(self) -> None:
        assert to_datetime("2024-01-02T10:00:00Z") == datetime(2024, 1, 2, 10, 0)

    def test_aware_datetime_normalised_to_utc(self) -> None:
        lagos = timezone(timedelta(hours=1))
        assert to_datetime(datetime(2024, 1, 2, 10, 0, tzinfo=lagos)) == datetime(2024, 1, 2, 9, 0)

    @pytest.mark.parametrize("value", [None, "", "not a date", 12345])
    def test_indeterminate(self, value: object) -> None:
        assert to_datetime(value) is None

    def test_end_of_day(self) -> None:
        end = end_of_day(date(2024, 1, 31))
        assert end.date() == date(2024, 1, 31)
        assert end.hour == 23 and end.minute == 59
        assert end_of_day("junk") is None


class TestComputeBalance:
    """Tests for compute_balance."""

    def test_no_payments_balance_equals_amount(self, sample_tenant, sample_property) -> None:
        rent = compute_balance(sample_tenant, sample_property, [], ObligationType.RENT)
        deposit = compute_balance(sample_tenant, sample_property, None, ObligationType.DEPOSIT)

        assert rent.balance == sample_property.rent_amount
        assert deposit.balance == sample_property.deposit_amount
        assert rent.paid == ZERO

    @pytest.mark.parametrize("status", [PaymentStatus.UNPAID, PaymentStatus.PENDING_APPROVAL])
    def test_non_qualifying_status_ignored(
        self, sample_tenant, sample_property, make_payment, status
    ) -> None:
        payments = [make_payment(40000)]
        before = compute_balance(sample_tenant, sample_property, payments, ObligationType.RENT)
        payments.append(make_payment(30000, status=status))
        after = compute_balance(sample_tenant, sample_property, payments, ObligationType.RENT)

        assert after.paid == before.paid == Decimal("40000")

    def test_deposit_status_counts(self, sample_tenant, sample_property, make_payment) -> None:
        payments = [make_payment(50000, PaymentType.DEPOSIT, PaymentStatus.DEPOSIT)]
        result = compute_balance(sample_tenant, sample_property, payments, ObligationType.DEPOSIT)
        assert result.balance == ZERO

    def test_exclusion_matches_empty_history(
        self, sample_tenant, sample_property, make_payment
    ) -> None:
        payments = [make_payment(40000, payment_id="pay-x")]
        excluded = compute_balance(
            sample_tenant, sample_property, payments, ObligationType.RENT, exclude_payment_id="pay-x"
        )
        empty = compute_balance(sample_tenant, sample_property, [], ObligationType.RENT)
        assert excluded == empty

    def test_other_tenants_and_types_ignored(
        self, sample_tenant, sample_property, make_payment
    ) -> None:
        payments = [
            make_payment(40000, tenant_id="ten-999"),
            make_payment(10000, PaymentType.OTHER),
            make_payment(5000, PaymentType.SUBSCRIPTION),
        ]
        result = compute_balance(sample_tenant, sample_property, payments, ObligationType.RENT)
        assert result.paid == ZERO

    def test_accepts_string_obligation(self, sample_tenant, sample_property) -> None:
        result = compute_balance(sample_tenant, sample_property, [], "Deposit")
        assert result.due == Decimal("50000")

    def test_missing_property_is_zero(self, sample_tenant, make_payment) -> None:
        result = compute_balance(sample_tenant, None, [make_payment(100)], ObligationType.RENT)
        assert result == Balance(due=ZERO, paid=ZERO, balance=ZERO)

    def test_non_numeric_amounts_count_as_zero(self, sample_tenant, make_payment) -> None:
        prop = Property(
            property_id="prop-001",
            name="Broken",
            department_id="dept-001",
            rent_amount="n/a",
            deposit_amount=None,
        )
        payment = make_payment(1)
        payment.amount_paid = "garbage"

        rent = compute_balance(sample_tenant, prop, [payment], ObligationType.RENT)
        assert rent == Balance(due=ZERO, paid=ZERO, balance=ZERO)

    def test_unknown_obligation_rejected(self, sample_tenant, sample_property) -> None:
        with pytest.raises(ValueError):
            compute_balance(sample_tenant, sample_property, [], "Subscription")


class TestProjectedBalance:
    """Tests for compute_projected_balance."""

    @pytest.mark.parametrize(
        "balance, amount, expected",
        [
            (60000, 10000, Decimal("50000")),
            (-20000, 5000, Decimal("-25000")),
            (100, 0, Decimal("100")),
            (Decimal("10.5"), Decimal("0.5"), Decimal("10.0")),
        ],
    )
    def test_subtracts(self, balance, amount, expected) -> None:
        assert compute_projected_balance(balance, amount) == expected

    def test_junk_amount_is_zero(self) -> None:
        assert compute_projected_balance(500, "") == Decimal("500")


class TestClassifyTenantStatus:
    """Tests for classify_tenant_status."""

    def test_paid_when_nothing_owed(self, sample_tenant, sample_property, make_payment, as_of) -> None:
        payments = [
            make_payment(100000),
            make_payment(50000, PaymentType.DEPOSIT, PaymentStatus.DEPOSIT),
        ]
        assert (
            classify_tenant_status(sample_tenant, sample_property, payments, as_of)
            == TenantRentStatus.PAID
        )

    def test_overdue_when_one_naira_owed(
        self, sample_tenant, sample_property, make_payment, as_of
    ) -> None:
        payments = [
            make_payment(99999),
            make_payment(50000, PaymentType.DEPOSIT, PaymentStatus.DEPOSIT),
        ]
        assert (
            classify_tenant_status(sample_tenant, sample_property, payments, as_of)
            == TenantRentStatus.OVERDUE
        )

    def test_upcoming_beats_debt(self, sample_tenant, sample_property) -> None:
        before_lease = datetime(2023, 12, 31, 23, 59)
        assert (
            classify_tenant_status(sample_tenant, sample_property, [], before_lease)
            == TenantRentStatus.UPCOMING
        )

    def test_lease_start_day_counts_as_started(self, sample_tenant, sample_property) -> None:
        assert (
            classify_tenant_status(sample_tenant, sample_property, [], date(2024, 1, 1))
            == TenantRentStatus.OVERDUE
        )

    def test_missing_property(self, sample_tenant, as_of) -> None:
        assert classify_tenant_status(sample_tenant, None, [], as_of) == TenantRentStatus.NOT_APPLICABLE

    def test_indeterminate_lease_start_is_upcoming(self, sample_tenant, sample_property, as_of) -> None:
        sample_tenant.lease_start_date = "not a date"
        assert lease_has_started(sample_tenant, as_of) is False
        assert (
            classify_tenant_status(sample_tenant, sample_property, [], as_of)
            == TenantRentStatus.UPCOMING
        )

    def test_credit_does_not_offset_other_obligation(
        self, sample_tenant, sample_property, make_payment, as_of
    ) -> None:
        payments = [make_payment(200000)]
        rent_due, deposit_due = compute_total_due(sample_tenant, sample_property, payments)

        assert rent_due == ZERO
        assert deposit_due == Decimal("50000")
        assert (
            classify_tenant_status(sample_tenant, sample_property, payments, as_of)
            == TenantRentStatus.OVERDUE
        )


class TestOverdueDetail:
    """Tests for compute_overdue_detail."""

    def test_breakdown(self, sample_tenant, sample_property, make_payment, as_of) -> None:
        detail = compute_overdue_detail(sample_tenant, sample_property, [make_payment(40000)], as_of)

        assert detail.rent_due == Decimal("60000")
        assert detail.deposit_due == Decimal("50000")
        assert detail.total_due == Decimal("110000")
        # 2024-01-01 to 2024-06-15 noon
        assert detail.days_overdue == 166

    def test_days_never_negative(self, sample_tenant, sample_property) -> None:
        detail = compute_overdue_detail(sample_tenant, sample_property, [], datetime(2023, 6, 1))
        assert detail.days_overdue == 0

    def test_indeterminate_dates_give_zero_days(self, sample_tenant, sample_property) -> None:
        detail = compute_overdue_detail(sample_tenant, sample_property, [], "garbage")
        assert detail.days_overdue == 0
        assert detail.total_due == Decimal("150000")


class TestAggregateCommission:
    """Tests for aggregate_commission."""

    def test_counts_all_statuses(self, sample_agent, sample_property, make_payment) -> None:
        payments = [
            make_payment(50000),
            make_payment(30000),
            make_payment(20000, status=PaymentStatus.UNPAID),
        ]
        result = aggregate_commission(
            sample_agent, [sample_property], payments, date(2024, 1, 1), date(2024, 12, 31)
        )
        assert result.total_collected == Decimal("100000")
        assert result.commission_earned == Decimal("5000")

    def test_period_end_is_inclusive_to_end_of_day(
        self, sample_agent, sample_property, make_payment
    ) -> None:
        late = make_payment(10000, when=datetime(2024, 1, 31, 23, 30))
        result = aggregate_commission(
            sample_agent, [sample_property], [late], date(2024, 1, 1), date(2024, 1, 31)
        )
        assert result.total_collected == Decimal("10000")

    def test_excludes_outside_period_and_non_rent(
        self, sample_agent, sample_property, make_payment
    ) -> None:
        payments = [
            make_payment(10000, when=datetime(2023, 12, 31, 23, 59)),
            make_payment(10000, PaymentType.DEPOSIT, PaymentStatus.DEPOSIT),
            make_payment(10000, property_id="prop-other"),
        ]
        result = aggregate_commission(
            sample_agent, [sample_property], payments, date(2024, 1, 1), date(2024, 12, 31)
        )
        assert result.total_collected == ZERO

    def test_only_agents_properties(self, sample_agent, sample_property, make_payment) -> None:
        sample_property.agent_id = "agent-other"
        result = aggregate_commission(
            sample_agent, [sample_property], [make_payment(10000)], date(2024, 1, 1), date(2024, 12, 31)
        )
        assert result.total_collected == ZERO

    def test_missing_rate_earns_nothing(self, sample_property, make_payment) -> None:
        agent = Agent(agent_id="agent-001", name="No Rate", department_id="dept-001")
        result = aggregate_commission(
            agent, [sample_property], [make_payment(10000)], date(2024, 1, 1), date(2024, 12, 31)
        )
        assert result.total_collected == Decimal("10000")
        assert result.commission_earned == ZERO

    def test_no_agent_or_bad_dates(self, sample_agent, sample_property, make_payment) -> None:
        payments = [make_payment(10000)]
        assert aggregate_commission(None, [sample_property], payments, "2024-01-01", "2024-12-31").total_collected == ZERO
        assert aggregate_commission(sample_agent, [sample_property], payments, "bad", "2024-12-31").total_collected == ZERO

    def test_undated_payment_excluded(self, sample_agent, sample_property, make_payment) -> None:
        payment = make_payment(10000)
        payment.date = None
        result = aggregate_commission(
            sample_agent, [sample_property], [payment], date(2024, 1, 1), date(2024, 12, 31)
        )
        assert result.total_collected == ZERO


class TestWorkedExamples:
    """End-to-end ledger examples on one 100,000 rent / 50,000 deposit unit."""

    def test_partial_rent(self, sample_tenant, sample_property, make_payment, as_of) -> None:
        payments = [make_payment(40000)]

        assert compute_balance(sample_tenant, sample_property, payments, "Rent").balance == 60000
        assert compute_balance(sample_tenant, sample_property, payments, "Deposit").balance == 50000
        assert classify_tenant_status(sample_tenant, sample_property, payments, as_of) == "Overdue"

    def test_fully_settled(self, sample_tenant, sample_property, make_payment, as_of) -> None:
        payments = [
            make_payment(100000),
            make_payment(50000, PaymentType.DEPOSIT, PaymentStatus.DEPOSIT),
        ]

        assert compute_balance(sample_tenant, sample_property, payments, "Rent").balance == 0
        assert compute_balance(sample_tenant, sample_property, payments, "Deposit").balance == 0
        assert classify_tenant_status(sample_tenant, sample_property, payments, as_of) == "Paid"

    def test_pending_payment_does_not_count(
        self, sample_tenant, sample_property, make_payment, as_of
    ) -> None:
        payments = [make_payment(100000, status=PaymentStatus.PENDING_APPROVAL)]

        assert compute_balance(sample_tenant, sample_property, payments, "Rent").balance == 100000
        assert classify_tenant_status(sample_tenant, sample_property, payments, as_of) == "Overdue"

    def test_overpayment_is_credit_but_clamped_in_totals(
        self, sample_tenant, sample_property, make_payment, as_of
    ) -> None:
        payments = [make_payment(120000)]

        assert compute_balance(sample_tenant, sample_property, payments, "Rent").balance == -20000
        detail = compute_overdue_detail(sample_tenant, sample_property, payments, as_of)
        assert detail.rent_due == 0
        assert detail.total_due == detail.deposit_due

    def test_qualifying_payments_filter(self, make_payment) -> None:
        payments = [
            make_payment(1),
            make_payment(1, status=PaymentStatus.DEPOSIT),
            make_payment(1, status=PaymentStatus.UNPAID),
            make_payment(1, status=PaymentStatus.PENDING_APPROVAL),
        ]
        assert len(qualifying_payments(payments)) == 2


class TestRepeatability:
    """The engine gives the same answers twice and leaves its inputs alone."""

    def test_repeated_calls_match_and_inputs_unchanged(
        self, sample_agent, sample_tenant, sample_property, make_payment, as_of
    ) -> None:
        payments = [
            make_payment(40000),
            make_payment(50000, PaymentType.DEPOSIT, PaymentStatus.DEPOSIT),
            make_payment(999, status=PaymentStatus.PENDING_APPROVAL),
        ]
        before = (copy.deepcopy(sample_tenant), copy.deepcopy(sample_property), copy.deepcopy(payments))

        def run() -> tuple:
            return (
                compute_balance(sample_tenant, sample_property, payments, ObligationType.RENT),
                compute_balance(sample_tenant, sample_property, payments, ObligationType.DEPOSIT, "pay-001"),
                classify_tenant_status(sample_tenant, sample_property, payments, as_of),
                compute_overdue_detail(sample_tenant, sample_property, payments, as_of),
                aggregate_commission(
                    sample_agent, [sample_property], payments, date(2024, 1, 1), date(2024, 12, 31)
                ),
            )

        assert run() == run()
        assert (sample_tenant, sample_property, payments) == before
