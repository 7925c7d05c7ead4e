"""Billing cycle allocation for credit card installment purchases"""

from typing import Iterable, List, Optional
from finance_tracker.domain.models import BilledInstallment, CardPurchase, CardUsage, ReferenceMonth
from finance_tracker.domain.exceptions import InvalidInstallmentCountError
from finance_tracker.utils.date_utils import add_months


def billing_month_offset(purchase_day: int, closing_day: int, index: int) -> int:
    """
    Months between the purchase month and the statement carrying installment `index`.

    A purchase made after the closing day posts to the next statement, so every
    installment shifts one month forward. A purchase ON the closing day still
    bills in the current cycle.
    """
    if purchase_day > closing_day:
        return index + 1
    return index


def installment_schedule(purchase: CardPurchase, closing_day: int) -> List[BilledInstallment]:
    """
    Place every installment of a purchase on its monthly statement.

    Requirements:
    - Equal split: each installment is total_amount / installments
    - No remainder redistribution (float drift is left on every installment)
    - Month arithmetic rolls over by index, no calendar dates are built

    Example:
        closing_day=10, purchased 2024-03-15, 3 x 300.00
        → 100.00 on 2024-04, 2024-05, 2024-06

    Raises:
        InvalidInstallmentCountError: installments < 1
    """
    if purchase.installments < 1:
        raise InvalidInstallmentCountError(
            f"Purchase must have at least 1 installment, got {purchase.installments}"
        )

    installment_amount = purchase.total_amount / purchase.installments
    start = purchase.purchase_date

    schedule = []
    for i in range(purchase.installments):
        offset = billing_month_offset(start.day, closing_day, i)
        year, month = add_months(start.year, start.month, offset)
        schedule.append(BilledInstallment(number=i + 1, year=year, month=month, amount=installment_amount))

    return schedule


def allocate_billing_month(purchase: CardPurchase, closing_day: int, reference: ReferenceMonth) -> float:
    """Amount of a single purchase billed on the statement for `reference`"""
    total = 0.0
    for inst in installment_schedule(purchase, closing_day):
        if inst.year == reference.year and inst.month == reference.month:
            total += inst.amount
    return total


def current_bill_amount(
    purchases: Iterable[CardPurchase],
    closing_day: int,
    reference: ReferenceMonth,
) -> float:
    """Statement total for `reference` across all purchases of one card"""
    return sum(
        (allocate_billing_month(purchase, closing_day, reference) for purchase in purchases),
        0.0,
    )


def card_usage(
    purchases: Iterable[CardPurchase],
    closing_day: int,
    limit: Optional[float],
    reference: ReferenceMonth,
) -> CardUsage:
    """
    Current statement total with limit utilization.

    - usage_percent = min(total / limit, 1.0) * 100, 0 when limit is missing or zero
    - available_credit = max(limit - total, 0)
    """
    total = current_bill_amount(purchases, closing_day, reference)
    limit = limit or 0.0

    usage_percent = min(total / limit, 1.0) * 100 if limit > 0 else 0.0
    available_credit = max(limit - total, 0.0)

    return CardUsage(current_bill=total, usage_percent=usage_percent, available_credit=available_credit)
