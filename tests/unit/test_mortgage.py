"""
Тесты для Mortgage калькулятора

Проверяемые инварианты:
1. Σ principal по графику = loan_amount, итоговый остаток 0
2. PMI начисляется только до периода снятия (80% цены)
3. Налоги, страховка и HOA входят в платёж, но не в график
"""

import pytest

from src.calculators.finance.loan import AmortizationRow, PaymentFrequency
from src.calculators.finance.mortgage import (
    DownPaymentType,
    MortgageCalculator,
    down_payment,
    monthly_pmi,
    pmi_removal_period,
    pmi_required,
)
from src.core.domain.validation import ErrorKind

BASELINE = {
    "home_price": 400000,
    "down_payment_percentage": 20,
    "interest_rate": 6,
    "loan_term": 360,
}


class TestMortgageFunctions:
    """Тесты вспомогательных функций"""

    def test_down_payment_percentage(self) -> None:
        """Взнос в процентах"""
        assert down_payment(400000.0, DownPaymentType.PERCENTAGE, percentage=20.0) == (
            80000.0,
            20.0,
        )

    def test_down_payment_amount(self) -> None:
        """Взнос суммой"""
        assert down_payment(400000.0, DownPaymentType.AMOUNT, amount=40000.0) == (40000.0, 10.0)

    def test_pmi_threshold(self) -> None:
        """PMI нужна строго ниже 20%"""
        assert pmi_required(19.99)
        assert not pmi_required(20.0)

    def test_monthly_pmi(self) -> None:
        """0.5% годовых от 360000"""
        assert monthly_pmi(360000.0, 0.5) == 150.0
        assert monthly_pmi(360000.0, 0.0) == 0.0

    def test_removal_period(self) -> None:
        """Первый период с остатком не выше 80% цены"""
        rows = (
            AmortizationRow(period=1, payment=10.0, principal=5.0, interest=5.0, balance=90.0),
            AmortizationRow(period=2, payment=10.0, principal=5.0, interest=5.0, balance=80.0),
            AmortizationRow(period=3, payment=10.0, principal=5.0, interest=5.0, balance=75.0),
        )
        assert pmi_removal_period(100.0, 95.0, rows) == 2
        assert pmi_removal_period(100.0, 80.0, rows) == 0
        assert pmi_removal_period(200.0, 195.0, rows) is None


class TestMortgageCalculator:
    """Тесты MortgageCalculator"""

    def test_baseline(self) -> None:
        """400000, 20% взнос, 6% на 30 лет"""
        outcome = MortgageCalculator().run(BASELINE)
        assert outcome.ok
        result = outcome.result
        assert result.loan_amount == 320000.0
        assert result.down_payment_amount == 80000.0
        assert result.payment.principal_and_interest == 1918.56
        assert result.payment.first_interest == 1600.0
        assert result.total_periods == 360
        assert result.loan_term_years == 30.0
        assert not result.pmi_required
        assert result.pmi_removal_period is None
        assert result.total_pmi == 0.0

    def test_schedule_repays_loan(self) -> None:
        """Σ principal = сумма кредита, остаток 0"""
        result = MortgageCalculator().run(BASELINE).result
        schedule = result.amortization_schedule
        assert schedule[-1].balance == 0.0
        assert schedule[-1].cumulative_principal == pytest.approx(result.loan_amount, abs=0.01)
        assert schedule[-1].cumulative_interest == pytest.approx(result.total_interest, abs=0.01)

    def test_cost_of_ownership(self) -> None:
        """Без доп. расходов: цена + проценты"""
        result = MortgageCalculator().run(BASELINE).result
        assert result.total_cost_of_ownership == pytest.approx(
            400000.0 + result.total_interest, abs=0.01
        )

    def test_escrow_costs(self) -> None:
        """Налог, страховка и HOA в составе платежа"""
        payload = {
            **BASELINE,
            "property_tax_annual": 4800,
            "home_insurance_annual": 1200,
            "hoa_fees": 50,
        }
        result = MortgageCalculator().run(payload).result
        assert result.payment.property_tax == 400.0
        assert result.payment.home_insurance == 100.0
        assert result.payment.hoa_fees == 50.0
        assert result.payment.total == 2468.56

    def test_pmi_removed_at_80_percent(self) -> None:
        """10% взнос: PMI до достижения 80% цены"""
        result = MortgageCalculator().run({**BASELINE, "down_payment_percentage": 10}).result
        assert result.pmi_required
        assert result.payment.pmi == 150.0

        removal = result.pmi_removal_period
        assert removal is not None
        schedule = result.amortization_schedule
        assert schedule[removal - 2].balance > 320000.0
        assert schedule[removal - 1].balance <= 320000.0
        assert schedule[removal - 2].pmi == 150.0
        assert schedule[removal - 1].pmi == 0.0
        assert result.total_pmi == pytest.approx(150.0 * (removal - 1))

    def test_pmi_disabled(self) -> None:
        """pmi_enabled = false"""
        result = MortgageCalculator().run(
            {**BASELINE, "down_payment_percentage": 10, "pmi_enabled": False}
        ).result
        assert not result.pmi_required
        assert result.payment.pmi == 0.0

    def test_down_payment_amount(self) -> None:
        """Взнос суммой"""
        result = MortgageCalculator().run(
            {
                "home_price": 400000,
                "down_payment_type": "amount",
                "down_payment_amount": 100000,
                "interest_rate": 6,
                "loan_term": 360,
            }
        ).result
        assert result.down_payment_percentage == 25.0
        assert result.loan_amount == 300000.0

    def test_zero_rate(self) -> None:
        """Нулевая ставка: равные платежи, без процентов"""
        result = MortgageCalculator().run(
            {
                "home_price": 120000,
                "down_payment_percentage": 0,
                "pmi_enabled": False,
                "interest_rate": 0,
                "loan_term": 120,
            }
        ).result
        assert result.payment.principal_and_interest == 1000.0
        assert result.total_interest == 0.0
        assert result.effective_rate == pytest.approx(0.0, abs=0.01)

    def test_closing_costs_raise_effective_rate(self) -> None:
        """Единовременные расходы увеличивают эффективную ставку"""
        result = MortgageCalculator().run(
            {**BASELINE, "closing_costs": 5000, "origination_fee": 1, "other_fees": 800}
        ).result
        assert result.total_closing_costs == 9000.0
        assert result.effective_rate > 6.17

    def test_biweekly(self) -> None:
        """Раз в две недели: PMI и расходы приводятся к периоду"""
        result = MortgageCalculator().run(
            {**BASELINE, "down_payment_percentage": 10, "payment_frequency": "biweekly"}
        ).result
        assert result.payment_frequency == PaymentFrequency.BIWEEKLY
        assert result.total_periods == 782
        assert result.payment.pmi == pytest.approx(150.0 * 12 * 14 / 365, abs=0.01)

    def test_down_payment_exceeds_price(self) -> None:
        """Взнос больше цены"""
        outcome = MortgageCalculator().run(
            {
                "home_price": 400000,
                "down_payment_type": "amount",
                "down_payment_amount": 500000,
                "interest_rate": 6,
                "loan_term": 360,
            }
        )
        assert outcome.validation.has_error("down_payment_amount", ErrorKind.OUT_OF_RANGE)

    def test_full_down_payment(self) -> None:
        """100% взнос — занимать нечего"""
        outcome = MortgageCalculator().run({**BASELINE, "down_payment_percentage": 100})
        assert outcome.result is None
        assert outcome.validation.has_error(
            "down_payment_percentage", ErrorKind.DOMAIN_PRECONDITION_VIOLATED
        )

    @pytest.mark.parametrize(
        "field_name, value",
        [
            ("home_price", 0),
            ("down_payment_percentage", -5),
            ("interest_rate", 31),
            ("loan_term", 361),
            ("pmi_rate", 6),
            ("hoa_fees", -1),
        ],
    )
    def test_limits(self, field_name: str, value: float) -> None:
        """Границы входов"""
        outcome = MortgageCalculator().run({**BASELINE, field_name: value})
        assert outcome.validation.has_error(field_name, ErrorKind.OUT_OF_RANGE)
