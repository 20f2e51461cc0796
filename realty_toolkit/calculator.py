"""Real-estate investment calculations (pure functions).

Percentages are returned already multiplied by 100 and currency values are
left unrounded. Division-by-zero cases resolve to fixed sentinel values
instead of raising; range checks happen in ``realty_toolkit.schemas``.
"""

from __future__ import annotations

import math
import sys
from typing import List, Optional, Sequence

from .models import (
    CashFlowProjection,
    InvestmentMetrics,
    ProFormaInputs,
    ProFormaOutputs,
    PropertyFinancials,
)

DEFAULT_HOLDING_PERIOD = 10
DEFAULT_DISCOUNT_RATE = 0.08
PRO_FORMA_DOWN_PAYMENT = 0.20

IRR_INITIAL_GUESS = 0.1
IRR_MAX_ITERATIONS = 100
IRR_TOLERANCE = 0.0001
IRR_MIN_RATE = -0.99
IRR_MAX_RATE = 10.0


def calculate_noi(gross_income: float, operating_expenses: float) -> float:
    return gross_income - operating_expenses


def calculate_cap_rate(noi: float, property_value: float) -> float:
    if property_value == 0:
        return 0.0
    return (noi / property_value) * 100


def calculate_cash_on_cash_return(annual_cash_flow: float, cash_invested: float) -> float:
    if cash_invested == 0:
        return 0.0
    return (annual_cash_flow / cash_invested) * 100


def calculate_gross_rent_multiplier(price: float, annual_gross_rent: float) -> float:
    if annual_gross_rent == 0:
        return 0.0
    return price / annual_gross_rent


def calculate_dscr(noi: float, annual_debt_service: float) -> float:
    if annual_debt_service == 0:
        return math.inf
    return noi / annual_debt_service


def calculate_monthly_mortgage_payment(principal: float, annual_rate: float, term_years: float) -> float:
    """Fixed-rate amortized payment: P * r(1+r)^n / ((1+r)^n - 1)."""
    if principal == 0 or term_years == 0:
        return 0.0
    monthly_rate = annual_rate / 12
    payments = term_years * 12
    if monthly_rate == 0:
        return principal / payments
    growth = (1 + monthly_rate) ** payments
    return principal * (monthly_rate * growth) / (growth - 1)


def calculate_remaining_loan_balance(
    principal: float,
    annual_rate: float,
    term_years: float,
    years_paid: float,
) -> float:
    if years_paid >= term_years:
        return 0.0
    monthly_rate = annual_rate / 12
    total_payments = term_years * 12
    payments_made = years_paid * 12
    if monthly_rate == 0:
        return max(0.0, principal * (1 - payments_made / total_payments))
    total_growth = (1 + monthly_rate) ** total_payments
    paid_growth = (1 + monthly_rate) ** payments_made
    balance = principal * ((total_growth - paid_growth) / (total_growth - 1))
    return max(0.0, balance)


def _compound(rate: float, periods: int) -> float:
    """``(1 + rate) ** periods`` saturated to the positive finite float range."""
    try:
        growth = math.pow(1 + rate, periods)
    except OverflowError:
        return sys.float_info.max
    return max(growth, sys.float_info.min)


def calculate_npv(cash_flows: Sequence[float], discount_rate: float, initial_investment: float) -> float:
    """Discount each flow by (1 + rate)^year, years counted from 1."""
    npv = -initial_investment
    for year, cash_flow in enumerate(cash_flows, start=1):
        npv += cash_flow / _compound(discount_rate, year)
    return npv


def calculate_irr(
    cash_flows: Sequence[float],
    initial_investment: float,
    max_iterations: int = IRR_MAX_ITERATIONS,
    tolerance: float = IRR_TOLERANCE,
) -> float:
    """Best-effort IRR (as a percentage) via Newton-Raphson.

    Starts at 10% and clamps the rate to [-99%, 1000%] after every step.
    Sequences with several sign changes may not converge; the last estimate
    is returned once the iteration budget runs out or the derivative
    flattens below ``tolerance``.
    """
    if not cash_flows:
        return 0.0

    rate = IRR_INITIAL_GUESS
    for _ in range(max_iterations):
        npv = -initial_investment
        derivative = 0.0
        for year, cash_flow in enumerate(cash_flows, start=1):
            denominator = _compound(rate, year)
            npv += cash_flow / denominator
            derivative -= year * cash_flow / (denominator * (1 + rate))

        # Long horizons pinned at either clamp can still sum past the float range.
        if not (math.isfinite(npv) and math.isfinite(derivative)):
            break
        if abs(npv) < tolerance:
            return rate * 100
        if abs(derivative) < tolerance:
            break

        rate -= npv / derivative
        rate = min(max(rate, IRR_MIN_RATE), IRR_MAX_RATE)

    return rate * 100


def generate_pro_forma(inputs: ProFormaInputs) -> ProFormaOutputs:
    gross_rental_income = inputs.monthly_rental_income * 12
    effective_rental_income = gross_rental_income * (1 - inputs.vacancy_rate)

    # Fees are charged on collected (post-vacancy) rent.
    management_fee = effective_rental_income * inputs.management_fee_percent
    maintenance_reserve = effective_rental_income * inputs.maintenance_reserve_percent
    total_operating_expenses = (
        management_fee
        + maintenance_reserve
        + inputs.monthly_operating_expenses * 12
        + inputs.property_taxes
        + inputs.insurance
        + inputs.other_expenses
    )

    noi = calculate_noi(effective_rental_income, total_operating_expenses)
    cash_flow_after_debt = noi
    if inputs.monthly_debt_service:
        cash_flow_after_debt = noi - inputs.monthly_debt_service * 12

    down_payment = inputs.purchase_price * PRO_FORMA_DOWN_PAYMENT
    return ProFormaOutputs(
        gross_rental_income=gross_rental_income,
        effective_rental_income=effective_rental_income,
        total_operating_expenses=total_operating_expenses,
        noi=noi,
        cash_flow_before_debt=noi,
        cash_flow_after_debt=cash_flow_after_debt,
        cap_rate=calculate_cap_rate(noi, inputs.purchase_price),
        cash_on_cash_return=calculate_cash_on_cash_return(cash_flow_after_debt, down_payment),
        gross_rent_multiplier=calculate_gross_rent_multiplier(inputs.purchase_price, gross_rental_income),
    )


def _holding_period(financials: PropertyFinancials, holding_period: Optional[int]) -> int:
    if holding_period is not None:
        return holding_period
    if financials.holding_period is not None:
        return financials.holding_period
    return DEFAULT_HOLDING_PERIOD


def _financing(financials: PropertyFinancials) -> tuple[float, float, float]:
    """Return (down payment, loan amount, annual debt service)."""
    down_payment = financials.purchase_price * financials.down_payment_percent
    loan_amount = financials.purchase_price - down_payment
    monthly_payment = calculate_monthly_mortgage_payment(
        loan_amount, financials.interest_rate, financials.loan_term_years
    )
    return down_payment, loan_amount, monthly_payment * 12


def generate_cash_flow_projections(
    financials: PropertyFinancials,
    holding_period: Optional[int] = None,
) -> List[CashFlowProjection]:
    """Year-by-year projection with growth compounding on the running values."""
    years = _holding_period(financials, holding_period)
    down_payment, _, annual_debt_service = _financing(financials)

    rental_income = financials.annual_rental_income
    expenses = financials.annual_operating_expenses
    property_value = financials.purchase_price
    cumulative = -down_payment

    projections: List[CashFlowProjection] = []
    for year in range(1, years + 1):
        if financials.rental_growth_rate:
            rental_income *= 1 + financials.rental_growth_rate
        if financials.expense_growth_rate:
            expenses *= 1 + financials.expense_growth_rate
        if financials.appreciation_rate:
            property_value *= 1 + financials.appreciation_rate

        noi = calculate_noi(rental_income, expenses)
        cash_flow = noi - annual_debt_service
        cumulative += cash_flow
        projections.append(
            CashFlowProjection(
                year=year,
                rental_income=rental_income,
                operating_expenses=expenses,
                noi=noi,
                debt_service=annual_debt_service,
                cash_flow=cash_flow,
                cumulative_cash_flow=cumulative,
                property_value=property_value,
            )
        )
    return projections


def calculate_investment_metrics(
    financials: PropertyFinancials,
    holding_period: Optional[int] = None,
) -> InvestmentMetrics:
    years = _holding_period(financials, holding_period)
    down_payment, loan_amount, annual_debt_service = _financing(financials)

    noi = calculate_noi(financials.annual_rental_income, financials.annual_operating_expenses)
    annual_cash_flow = noi - annual_debt_service

    projections = generate_cash_flow_projections(financials, years)
    cash_flows = [p.cash_flow for p in projections]
    if projections:
        final_value = projections[-1].property_value
        remaining = calculate_remaining_loan_balance(
            loan_amount, financials.interest_rate, financials.loan_term_years, years
        )
        # Sale proceeds land on the final year only.
        cash_flows[-1] += final_value - remaining

    discount_rate = financials.discount_rate
    if discount_rate is None:
        discount_rate = DEFAULT_DISCOUNT_RATE

    if financials.annual_rental_income == 0:
        break_even = math.inf
    else:
        break_even = (financials.annual_operating_expenses + annual_debt_service) / financials.annual_rental_income

    return InvestmentMetrics(
        cap_rate=calculate_cap_rate(noi, financials.purchase_price),
        irr=calculate_irr(cash_flows, down_payment),
        npv=calculate_npv(cash_flows, discount_rate, down_payment),
        cash_on_cash_return=calculate_cash_on_cash_return(annual_cash_flow, down_payment),
        dscr=calculate_dscr(noi, annual_debt_service),
        break_even_occupancy=break_even * 100,
    )
