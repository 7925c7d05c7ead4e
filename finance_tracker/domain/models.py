"""Domain models - pure Python dataclasses consumed by the billing and projection engines"""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class InterestType(str, Enum):
    """Accrual method for investment projections"""

    SIMPLE = "SIMPLE"
    COMPOUND = "COMPOUND"


@dataclass
class CardPurchase:
    """Credit card purchase split into equal monthly installments"""

    total_amount: float
    installments: int
    purchase_date: date


@dataclass(frozen=True)
class ReferenceMonth:
    """Calendar month used as a statement bucket (month is 1-12)"""

    year: int
    month: int

    @classmethod
    def from_date(cls, value: date) -> "ReferenceMonth":
        return cls(year=value.year, month=value.month)


@dataclass
class BilledInstallment:
    """Single installment placed on a monthly statement"""

    number: int  # 1-based
    year: int
    month: int
    amount: float


@dataclass
class CardUsage:
    """Current statement total against a card's credit limit"""

    current_bill: float
    usage_percent: float
    available_credit: float


@dataclass
class ProjectionPoint:
    """Investment value at a given month of a simulation"""

    month: int
    total_invested: float
    total_with_interest: float
    interest: float


@dataclass
class ProjectionSummary:
    """Final figures of a projection series"""

    final_amount: float
    total_invested: float
    total_interest: float
