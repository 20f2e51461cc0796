from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class FeedItem:
    """One syndicated blog post extracted from an RSS document."""

    title: str
    link: str
    description: str
    content: str
    categories: Tuple[str, ...]
    published_at: str
    author: str
    image_url: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Feed:
    """Channel metadata plus its items in source order."""

    title: str
    link: str
    description: str
    items: Tuple[FeedItem, ...] = ()


@dataclass(frozen=True, slots=True)
class BlogPost:
    """Presentation record handed to page templates."""

    title: str
    post_link: str
    description: str
    category: str
    category_link: str
    author: str
    date: str
    image_url: str


@dataclass(frozen=True, slots=True)
class PropertyFinancials:
    """Inputs for a multi-year investment analysis. Rates are decimals."""

    purchase_price: float
    annual_rental_income: float
    annual_operating_expenses: float
    down_payment_percent: float
    interest_rate: float
    loan_term_years: int
    annual_debt_service: Optional[float] = None
    appreciation_rate: Optional[float] = None
    rental_growth_rate: Optional[float] = None
    expense_growth_rate: Optional[float] = None
    holding_period: Optional[int] = None
    discount_rate: Optional[float] = None


@dataclass(frozen=True, slots=True)
class ProFormaInputs:
    """Single-year pro forma inputs. Fees and vacancy are fractions (0-1)."""

    purchase_price: float
    monthly_rental_income: float
    monthly_operating_expenses: float
    vacancy_rate: float
    management_fee_percent: float
    maintenance_reserve_percent: float
    property_taxes: float
    insurance: float
    other_expenses: float
    monthly_debt_service: Optional[float] = None


@dataclass(frozen=True, slots=True)
class ProFormaOutputs:
    gross_rental_income: float
    effective_rental_income: float
    total_operating_expenses: float
    noi: float
    cash_flow_before_debt: float
    cash_flow_after_debt: float
    cap_rate: float
    cash_on_cash_return: float
    gross_rent_multiplier: float


@dataclass(frozen=True, slots=True)
class CashFlowProjection:
    year: int
    rental_income: float
    operating_expenses: float
    noi: float
    debt_service: float
    cash_flow: float
    cumulative_cash_flow: float
    property_value: float


@dataclass(frozen=True, slots=True)
class InvestmentMetrics:
    """Aggregate metrics. Percentages are already multiplied by 100."""

    cap_rate: float
    irr: float
    npv: float
    cash_on_cash_return: float
    dscr: float
    break_even_occupancy: float
