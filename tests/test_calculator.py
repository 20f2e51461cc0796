import math
import unittest

from realty_toolkit.calculator import (
    calculate_cap_rate,
    calculate_cash_on_cash_return,
    calculate_dscr,
    calculate_gross_rent_multiplier,
    calculate_investment_metrics,
    calculate_irr,
    calculate_monthly_mortgage_payment,
    calculate_noi,
    calculate_npv,
    calculate_remaining_loan_balance,
    generate_cash_flow_projections,
    generate_pro_forma,
)
from realty_toolkit.models import ProFormaInputs, PropertyFinancials


def _financials(**overrides) -> PropertyFinancials:
    values = dict(
        purchase_price=500_000,
        annual_rental_income=48_000,
        annual_operating_expenses=12_000,
        down_payment_percent=0.25,
        interest_rate=0.06,
        loan_term_years=30,
    )
    values.update(overrides)
    return PropertyFinancials(**values)


class TestSimpleMetrics(unittest.TestCase):
    def test_noi(self):
        self.assertEqual(calculate_noi(100_000, 30_000), 70_000)
        self.assertEqual(calculate_noi(0, 10_000), -10_000)

    def test_cap_rate(self):
        self.assertAlmostEqual(calculate_cap_rate(70_000, 1_000_000), 7)
        self.assertAlmostEqual(calculate_cap_rate(-10_000, 1_000_000), -1)
        self.assertEqual(calculate_cap_rate(70_000, 0), 0)

    def test_cash_on_cash(self):
        self.assertAlmostEqual(calculate_cash_on_cash_return(20_000, 100_000), 20)
        self.assertAlmostEqual(calculate_cash_on_cash_return(15_000, 200_000), 7.5)
        self.assertEqual(calculate_cash_on_cash_return(20_000, 0), 0)

    def test_gross_rent_multiplier(self):
        self.assertEqual(calculate_gross_rent_multiplier(1_000_000, 100_000), 10)
        self.assertEqual(calculate_gross_rent_multiplier(1_000_000, 0), 0)

    def test_dscr(self):
        self.assertAlmostEqual(calculate_dscr(70_000, 50_000), 1.4)
        self.assertEqual(calculate_dscr(70_000, 0), math.inf)


class TestAmortization(unittest.TestCase):
    def test_monthly_payment_reference_value(self):
        self.assertAlmostEqual(calculate_monthly_mortgage_payment(400_000, 0.04, 30), 1909.66, delta=0.01)

    def test_zero_rate_is_straight_line(self):
        self.assertAlmostEqual(calculate_monthly_mortgage_payment(400_000, 0, 30), 1111.11, places=2)

    def test_zero_principal_or_term(self):
        self.assertEqual(calculate_monthly_mortgage_payment(0, 0.04, 30), 0)
        self.assertEqual(calculate_monthly_mortgage_payment(400_000, 0.04, 0), 0)

    def test_remaining_balance_boundaries(self):
        self.assertEqual(calculate_remaining_loan_balance(300_000, 0.05, 30, 30), 0)
        self.assertEqual(calculate_remaining_loan_balance(300_000, 0.05, 30, 35), 0)
        self.assertAlmostEqual(calculate_remaining_loan_balance(300_000, 0.05, 30, 0), 300_000)

    def test_remaining_balance_declines(self):
        after_five = calculate_remaining_loan_balance(300_000, 0.05, 30, 5)
        after_ten = calculate_remaining_loan_balance(300_000, 0.05, 30, 10)
        self.assertLess(after_ten, after_five)
        self.assertLess(after_five, 300_000)

    def test_remaining_balance_zero_rate(self):
        self.assertAlmostEqual(calculate_remaining_loan_balance(300_000, 0, 30, 15), 150_000)


class TestDiscounting(unittest.TestCase):
    def test_npv_discounts_by_year(self):
        self.assertAlmostEqual(calculate_npv([0, 121], 0.1, 100), 0)
        self.assertAlmostEqual(calculate_npv([110, 121], 0.1, 0), 200)

    def test_npv_zero_discount(self):
        self.assertEqual(calculate_npv([10_000, 10_000, 10_000], 0, 25_000), 5_000)

    def test_npv_negative(self):
        self.assertLess(calculate_npv([5_000, 5_000, 5_000], 0.1, 20_000), 0)

    def test_irr_zeroes_npv(self):
        flows = [20_000, 25_000, 30_000, 35_000, 40_000]
        irr = calculate_irr(flows, 100_000)
        self.assertGreater(irr, 0)
        self.assertLess(irr, 50)
        self.assertAlmostEqual(calculate_npv(flows, irr / 100, 100_000), 0, delta=0.01)

    def test_irr_simple_case(self):
        self.assertAlmostEqual(calculate_irr([110], 100), 10.0, places=4)

    def test_irr_empty_flows(self):
        self.assertEqual(calculate_irr([], 100_000), 0)

    def test_irr_is_bounded(self):
        irr = calculate_irr([-5_000, 10_000, 10_000], 0)
        self.assertTrue(math.isfinite(irr))
        self.assertGreaterEqual(irr, -99)
        self.assertLessEqual(irr, 1000)

    def test_irr_long_horizon_at_upper_clamp(self):
        irr = calculate_irr([1_000_000] * 400, 1)
        self.assertTrue(math.isfinite(irr))
        self.assertAlmostEqual(irr, 1000)

    def test_irr_long_horizon_at_lower_clamp(self):
        irr = calculate_irr([1.0] * 400, 1_000_000_000)
        self.assertTrue(math.isfinite(irr))
        self.assertAlmostEqual(irr, -99)

    def test_npv_long_horizon_high_rate(self):
        npv = calculate_npv([1_000] * 400, 10, 0)
        self.assertTrue(math.isfinite(npv))
        self.assertAlmostEqual(npv, 100, delta=0.01)


class TestProForma(unittest.TestCase):
    def test_pro_forma_scenario(self):
        result = generate_pro_forma(
            ProFormaInputs(
                purchase_price=500_000,
                monthly_rental_income=3_000,
                monthly_operating_expenses=800,
                vacancy_rate=0.05,
                management_fee_percent=0.08,
                maintenance_reserve_percent=0.05,
                property_taxes=6_000,
                insurance=1_200,
                other_expenses=0,
            )
        )
        self.assertEqual(result.gross_rental_income, 36_000)
        self.assertAlmostEqual(result.effective_rental_income, 34_200)
        # 0.13 * 34,200 + 9,600 + 6,000 + 1,200
        self.assertAlmostEqual(result.total_operating_expenses, 21_246)
        self.assertAlmostEqual(result.noi, 12_954)
        self.assertGreater(result.cap_rate, 0)
        self.assertEqual(result.cash_flow_before_debt, result.noi)
        self.assertEqual(result.cash_flow_after_debt, result.noi)
        self.assertAlmostEqual(result.cash_on_cash_return, 12_954 / 100_000 * 100)
        self.assertAlmostEqual(result.gross_rent_multiplier, 500_000 / 36_000)

    def test_pro_forma_with_debt(self):
        result = generate_pro_forma(
            ProFormaInputs(
                purchase_price=200_000,
                monthly_rental_income=2_000,
                monthly_operating_expenses=0,
                vacancy_rate=0,
                management_fee_percent=0,
                maintenance_reserve_percent=0,
                property_taxes=0,
                insurance=0,
                other_expenses=0,
                monthly_debt_service=1_000,
            )
        )
        self.assertEqual(result.noi, 24_000)
        self.assertEqual(result.cash_flow_after_debt, 12_000)
        self.assertAlmostEqual(result.cash_on_cash_return, 30.0)


class TestProjections(unittest.TestCase):
    def test_rental_growth_is_monotonic(self):
        projections = generate_cash_flow_projections(_financials(rental_growth_rate=0.03), 10)
        self.assertEqual([p.year for p in projections], list(range(1, 11)))
        for earlier, later in zip(projections, projections[1:]):
            self.assertGreater(later.rental_income, earlier.rental_income)

    def test_growth_compounds(self):
        projections = generate_cash_flow_projections(
            _financials(rental_growth_rate=0.1, appreciation_rate=0.1), 2
        )
        self.assertAlmostEqual(projections[1].rental_income, 48_000 * 1.1 * 1.1)
        self.assertAlmostEqual(projections[1].property_value, 500_000 * 1.21)

    def test_missing_rates_hold_constant(self):
        projections = generate_cash_flow_projections(_financials(), 3)
        self.assertEqual({p.rental_income for p in projections}, {48_000})
        self.assertEqual({p.operating_expenses for p in projections}, {12_000})
        self.assertEqual({p.property_value for p in projections}, {500_000})

    def test_debt_service_constant_and_cumulative_from_down_payment(self):
        financials = _financials()
        projections = generate_cash_flow_projections(financials, 3)
        payment = calculate_monthly_mortgage_payment(375_000, 0.06, 30) * 12
        self.assertEqual({p.debt_service for p in projections}, {payment})
        self.assertAlmostEqual(projections[0].cumulative_cash_flow, -125_000 + projections[0].cash_flow)
        self.assertAlmostEqual(
            projections[2].cumulative_cash_flow,
            -125_000 + sum(p.cash_flow for p in projections),
        )

    def test_holding_period_defaults(self):
        self.assertEqual(len(generate_cash_flow_projections(_financials())), 10)
        self.assertEqual(len(generate_cash_flow_projections(_financials(holding_period=4))), 4)


class TestInvestmentMetrics(unittest.TestCase):
    def test_metrics_scenario(self):
        financials = _financials(appreciation_rate=0.03, rental_growth_rate=0.02, expense_growth_rate=0.02)
        metrics = calculate_investment_metrics(financials, 10)
        debt_service = calculate_monthly_mortgage_payment(375_000, 0.06, 30) * 12
        self.assertAlmostEqual(metrics.cap_rate, 36_000 / 500_000 * 100)
        self.assertAlmostEqual(metrics.cash_on_cash_return, (36_000 - debt_service) / 125_000 * 100)
        self.assertAlmostEqual(metrics.dscr, 36_000 / debt_service)
        self.assertAlmostEqual(metrics.break_even_occupancy, (12_000 + debt_service) / 48_000 * 100)

        projections = generate_cash_flow_projections(financials, 10)
        flows = [p.cash_flow for p in projections]
        flows[-1] += projections[-1].property_value - calculate_remaining_loan_balance(375_000, 0.06, 30, 10)
        self.assertAlmostEqual(metrics.npv, calculate_npv(flows, 0.08, 125_000))
        self.assertAlmostEqual(metrics.irr, calculate_irr(flows, 125_000))
        self.assertGreater(metrics.irr, 0)

    def test_explicit_discount_rate_used(self):
        base = calculate_investment_metrics(_financials(), 5)
        cheaper = calculate_investment_metrics(_financials(discount_rate=0.04), 5)
        self.assertGreater(cheaper.npv, base.npv)

    def test_all_cash_purchase(self):
        metrics = calculate_investment_metrics(_financials(down_payment_percent=1.0), 5)
        self.assertEqual(metrics.dscr, math.inf)
        self.assertAlmostEqual(metrics.break_even_occupancy, 25.0)

    def test_zero_rent_does_not_raise(self):
        metrics = calculate_investment_metrics(_financials(annual_rental_income=0), 5)
        self.assertEqual(metrics.break_even_occupancy, math.inf)

    def test_zero_holding_period(self):
        metrics = calculate_investment_metrics(_financials(), 0)
        self.assertEqual(metrics.irr, 0)
        self.assertAlmostEqual(metrics.npv, -125_000)


if __name__ == "__main__":
    unittest.main()
