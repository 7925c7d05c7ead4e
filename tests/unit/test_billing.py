"""Unit tests for credit card billing cycle allocation"""

import pytest
from datetime import date
from finance_tracker.domain.billing import (
    allocate_billing_month,
    billing_month_offset,
    card_usage,
    current_bill_amount,
    installment_schedule,
)
from finance_tracker.domain.models import CardPurchase, ReferenceMonth
from finance_tracker.domain.exceptions import InvalidInstallmentCountError


def test_purchase_after_closing_day_starts_next_month():
    """Closing day 10, bought on the 15th in 3 x 100: billed at +1, +2, +3"""
    purchase = CardPurchase(total_amount=300.0, installments=3, purchase_date=date(2024, 3, 15))

    schedule = installment_schedule(purchase, closing_day=10)

    assert [(inst.year, inst.month) for inst in schedule] == [(2024, 4), (2024, 5), (2024, 6)]
    assert all(inst.amount == 100.0 for inst in schedule)
    assert [inst.number for inst in schedule] == [1, 2, 3]
    assert allocate_billing_month(purchase, 10, ReferenceMonth(2024, 3)) == 0.0
    assert allocate_billing_month(purchase, 10, ReferenceMonth(2024, 4)) == 100.0


def test_purchase_on_closing_day_bills_current_cycle():
    """Strict comparison: the closing day itself is still the current cycle"""
    on_closing = CardPurchase(total_amount=50.0, installments=1, purchase_date=date(2024, 5, 10))
    day_after = CardPurchase(total_amount=50.0, installments=1, purchase_date=date(2024, 5, 11))

    assert allocate_billing_month(on_closing, 10, ReferenceMonth(2024, 5)) == 50.0
    assert allocate_billing_month(day_after, 10, ReferenceMonth(2024, 5)) == 0.0
    assert allocate_billing_month(day_after, 10, ReferenceMonth(2024, 6)) == 50.0


@pytest.mark.parametrize("closing_day", [1, 10, 15, 28, 31])
@pytest.mark.parametrize("purchase_day", [1, 10, 16, 28])
def test_single_installment_never_split(closing_day, purchase_day):
    """One installment lands whole in the purchase month, or the next one after closing"""
    purchase = CardPurchase(total_amount=120.0, installments=1, purchase_date=date(2024, 7, purchase_day))

    schedule = installment_schedule(purchase, closing_day)

    expected_month = 8 if purchase_day > closing_day else 7
    assert len(schedule) == 1
    assert (schedule[0].year, schedule[0].month) == (2024, expected_month)
    assert schedule[0].amount == 120.0


@pytest.mark.parametrize("total,installments", [(100.0, 3), (999.99, 7), (0.01, 2), (1234.56, 48)])
def test_installments_sum_to_total(total, installments):
    """Equal float split; nothing dropped even when cents do not divide evenly"""
    purchase = CardPurchase(total_amount=total, installments=installments, purchase_date=date(2024, 1, 20))

    schedule = installment_schedule(purchase, closing_day=5)

    assert len(schedule) == installments
    assert sum(inst.amount for inst in schedule) == pytest.approx(total)


def test_uneven_split_keeps_equal_installments():
    """100 / 3 leaves the remainder drift on every installment, none absorbs it"""
    purchase = CardPurchase(total_amount=100.0, installments=3, purchase_date=date(2024, 1, 1))

    schedule = installment_schedule(purchase, closing_day=10)

    assert schedule[0].amount == schedule[1].amount == schedule[2].amount == 100.0 / 3


def test_schedule_rolls_over_year():
    """December purchase after closing lands in January of the next year"""
    purchase = CardPurchase(total_amount=90.0, installments=3, purchase_date=date(2024, 12, 20))

    schedule = installment_schedule(purchase, closing_day=5)

    assert [(inst.year, inst.month) for inst in schedule] == [(2025, 1), (2025, 2), (2025, 3)]


def test_long_schedule_spans_multiple_years():
    purchase = CardPurchase(total_amount=4800.0, installments=48, purchase_date=date(2024, 11, 1))

    schedule = installment_schedule(purchase, closing_day=5)

    assert (schedule[0].year, schedule[0].month) == (2024, 11)
    assert (schedule[13].year, schedule[13].month) == (2025, 12)
    assert (schedule[-1].year, schedule[-1].month) == (2028, 10)


def test_closing_day_beyond_month_length():
    """Closing day 31 is compared as a nominal day, even in February"""
    purchase = CardPurchase(total_amount=60.0, installments=2, purchase_date=date(2024, 2, 29))

    schedule = installment_schedule(purchase, closing_day=31)

    assert [(inst.year, inst.month) for inst in schedule] == [(2024, 2), (2024, 3)]


@pytest.mark.parametrize("installments", [0, -1])
def test_invalid_installment_count_fails_fast(installments):
    purchase = CardPurchase(total_amount=100.0, installments=installments, purchase_date=date(2024, 1, 1))

    with pytest.raises(InvalidInstallmentCountError):
        installment_schedule(purchase, closing_day=10)

    with pytest.raises(InvalidInstallmentCountError):
        allocate_billing_month(purchase, 10, ReferenceMonth(2024, 1))


def test_billing_month_offset():
    assert billing_month_offset(purchase_day=10, closing_day=10, index=0) == 0
    assert billing_month_offset(purchase_day=11, closing_day=10, index=0) == 1
    assert billing_month_offset(purchase_day=11, closing_day=10, index=2) == 3


def test_current_bill_amount_across_purchases(sample_purchases):
    """Statement totals per month for a card closing on day 10"""
    assert current_bill_amount(sample_purchases, 10, ReferenceMonth(2024, 2)) == 80.0
    assert current_bill_amount(sample_purchases, 10, ReferenceMonth(2024, 3)) == 100.0
    assert current_bill_amount(sample_purchases, 10, ReferenceMonth(2024, 4)) == 200.0
    assert current_bill_amount(sample_purchases, 10, ReferenceMonth(2024, 6)) == 100.0
    assert current_bill_amount(sample_purchases, 10, ReferenceMonth(2024, 7)) == 0.0


def test_current_bill_amount_no_purchases():
    assert current_bill_amount([], 10, ReferenceMonth(2024, 1)) == 0.0


def test_card_usage_within_limit(sample_purchases):
    usage = card_usage(sample_purchases, 10, 1000.0, ReferenceMonth(2024, 4))

    assert usage.current_bill == 200.0
    assert usage.usage_percent == pytest.approx(20.0)
    assert usage.available_credit == 800.0


def test_card_usage_clamped_over_limit(sample_purchases):
    usage = card_usage(sample_purchases, 10, 150.0, ReferenceMonth(2024, 4))

    assert usage.usage_percent == 100.0
    assert usage.available_credit == 0.0


@pytest.mark.parametrize("limit", [0, 0.0, None])
def test_card_usage_without_limit(sample_purchases, limit):
    """Zero or missing limit reports 0% instead of dividing by zero"""
    usage = card_usage(sample_purchases, 10, limit, ReferenceMonth(2024, 4))

    assert usage.current_bill == 200.0
    assert usage.usage_percent == 0.0
    assert usage.available_credit == 0.0
