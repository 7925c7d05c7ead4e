"""Investment projection engine - simple and compound growth with monthly contributions"""

from typing import Iterator, Sequence
from finance_tracker.domain.models import InterestType, ProjectionPoint, ProjectionSummary
from finance_tracker.domain.exceptions import InvalidProjectionError


def monthly_rate(annual_rate_percent: float) -> float:
    """Convert an annual percentage (12 = 12% a year) into a monthly fraction"""
    return annual_rate_percent / 100 / 12


def calculate_compound_interest(
    initial_amount: float,
    monthly_contribution: float,
    annual_rate_percent: float,
    months: int,
) -> float:
    """
    Future value under monthly compounding.

    - Principal: P * (1 + r)^n
    - Contributions (ordinary annuity, end of month): C * ((1 + r)^n - 1) / r
    - Zero rate: the annuity term is the 0/0 limit C * n

    Example:
        1000 initial, 500/month, 12% a year, 12 months
        → 1000 * 1.01^12 + 500 * 12.6825 ≈ 7468.1
    """
    rate = monthly_rate(annual_rate_percent)
    growth = (1 + rate) ** months

    future_value_principal = initial_amount * growth

    if rate == 0:
        future_value_contributions = monthly_contribution * months
    else:
        future_value_contributions = monthly_contribution * ((growth - 1) / rate)

    return future_value_principal + future_value_contributions


def calculate_simple_interest(
    initial_amount: float,
    monthly_contribution: float,
    annual_rate_percent: float,
    months: int,
) -> float:
    """
    Future value under simple (non-compounding) interest.

    Each contribution earns interest for the average number of months it is
    invested, (months + 1) / 2. The `* months / months` in the contribution
    term cancels algebraically; stored projections were computed with it.

    Month 0 has no contributions yet, so the contribution term is 0.
    """
    rate = monthly_rate(annual_rate_percent)

    total_invested = initial_amount + monthly_contribution * months
    interest_on_principal = initial_amount * rate * months

    if months == 0:
        interest_on_contributions = 0.0
    else:
        average_months = (months + 1) / 2
        interest_on_contributions = monthly_contribution * months * rate * average_months / months

    return total_invested + interest_on_principal + interest_on_contributions


def total_with_interest(
    initial_amount: float,
    monthly_contribution: float,
    annual_rate_percent: float,
    months: int,
    method: InterestType,
) -> float:
    """Value after `months` using the chosen accrual method"""
    if InterestType(method) is InterestType.COMPOUND:
        return calculate_compound_interest(initial_amount, monthly_contribution, annual_rate_percent, months)
    return calculate_simple_interest(initial_amount, monthly_contribution, annual_rate_percent, months)


def project_investment(
    initial_amount: float,
    monthly_contribution: float,
    annual_rate_percent: float,
    period_months: int,
    method: InterestType,
) -> float:
    """
    Main entry point: projected final amount after `period_months`.

    Range checks (amounts >= 0, rate 0-100, months 1-600) happen in the API
    schemas; only the period precondition is asserted here.

    Raises:
        InvalidProjectionError: period_months < 1
    """
    if period_months < 1:
        raise InvalidProjectionError(f"Projection period must be at least 1 month, got {period_months}")

    return total_with_interest(initial_amount, monthly_contribution, annual_rate_percent, period_months, method)


def project_investment_series(
    initial_amount: float,
    monthly_contribution: float,
    annual_rate_percent: float,
    period_months: int,
    method: InterestType,
) -> Iterator[ProjectionPoint]:
    """
    Month-by-month projection for charting, months 0..period_months inclusive.

    Lazy; call again to restart.
    """
    if period_months < 1:
        raise InvalidProjectionError(f"Projection period must be at least 1 month, got {period_months}")

    for month in range(period_months + 1):
        value = total_with_interest(initial_amount, monthly_contribution, annual_rate_percent, month, method)
        invested = initial_amount + monthly_contribution * month
        yield ProjectionPoint(
            month=month,
            total_invested=invested,
            total_with_interest=value,
            interest=value - invested,
        )


def summarize_projection(points: Sequence[ProjectionPoint]) -> ProjectionSummary:
    """Final amount, total invested and total interest from the last point of a series"""
    if not points:
        return ProjectionSummary(final_amount=0.0, total_invested=0.0, total_interest=0.0)

    last = points[-1]
    return ProjectionSummary(
        final_amount=last.total_with_interest,
        total_invested=last.total_invested,
        total_interest=last.interest,
    )
