"""Input validation applied before values reach the calculator.

Request bodies use the site's camelCase field names; snake_case names are
accepted too.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from .models import ProFormaInputs, PropertyFinancials


class _CalculatorInput(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class PropertyFinancialsInput(_CalculatorInput):
    purchase_price: float = Field(ge=1_000, le=100_000_000)
    annual_rental_income: float = Field(ge=0, le=10_000_000)
    annual_operating_expenses: float = Field(ge=0, le=5_000_000)
    annual_debt_service: Optional[float] = Field(default=None, ge=0)
    down_payment_percent: float = Field(ge=0, le=1)
    interest_rate: float = Field(ge=0, le=0.5)
    loan_term_years: int = Field(ge=1, le=50)
    appreciation_rate: Optional[float] = Field(default=None, ge=-0.5, le=0.5)
    rental_growth_rate: Optional[float] = Field(default=None, ge=-0.5, le=0.5)
    expense_growth_rate: Optional[float] = Field(default=None, ge=-0.5, le=0.5)
    holding_period: Optional[int] = Field(default=None, ge=1, le=50)
    discount_rate: Optional[float] = Field(default=None, ge=0, le=0.5)

    def to_domain(self) -> PropertyFinancials:
        return PropertyFinancials(**self.model_dump())


class ProFormaInput(_CalculatorInput):
    purchase_price: float = Field(ge=1_000, le=100_000_000)
    monthly_rental_income: float = Field(ge=0, le=1_000_000)
    monthly_operating_expenses: float = Field(ge=0, le=500_000)
    monthly_debt_service: Optional[float] = Field(default=None, ge=0, le=500_000)
    vacancy_rate: float = Field(ge=0, le=1)
    management_fee_percent: float = Field(ge=0, le=1)
    maintenance_reserve_percent: float = Field(ge=0, le=1)
    property_taxes: float = Field(ge=0, le=1_000_000)
    insurance: float = Field(ge=0, le=100_000)
    other_expenses: float = Field(ge=0, le=500_000)

    def to_domain(self) -> ProFormaInputs:
        return ProFormaInputs(**self.model_dump())


def format_errors(exc: ValidationError) -> List[Dict[str, str]]:
    """Flatten pydantic errors into ``{"field", "message"}`` pairs."""
    return [
        {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]
