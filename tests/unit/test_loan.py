"""
Тесты для Loan калькулятора

Проверяемые инварианты:
1. Аннуитетный платёж; L / n при нулевой ставке
2. График погашения закрывает остаток ровно в 0
3. Эффективная ставка с комиссиями не ниже APR
"""

import pytest

from src.calculators.finance.loan import (
    LoanCalculator,
    PaymentFrequency,
    amortization_schedule,
    annuity_present_value,
    effective_rate_with_fees,
    periodic_payment,
    total_periods,
)
from src.core.domain.validation import ErrorKind

BASE = {"loan_amount": 10000, "interest_rate": 5, "loan_term": 36}


class TestLoanFunctions:
    """Тесты функций кредита"""

    def test_periodic_payment(self) -> None:
        """Аннуитетный платёж"""
        assert periodic_payment(10000.0, 5.0, 36, 12.0) == pytest.approx(299.71, abs=0.005)

    def test_zero_rate_payment(self) -> None:
        """Нулевая ставка — L / n"""
        assert periodic_payment(12000.0, 0.0, 12, 12.0) == 1000.0

    def test_degenerate_payment(self) -> None:
        """Нулевая сумма или срок — 0"""
        assert periodic_payment(0.0, 5.0, 12, 12.0) == 0.0
        assert periodic_payment(1000.0, 5.0, 0, 12.0) == 0.0

    @pytest.mark.parametrize(
        ("term", "frequency", "expected"),
        [
            (36, 12.0, 36),
            (12, 365.0 / 14.0, 26),
            (12, 365.0 / 7.0, 52),
        ],
    )
    def test_total_periods(self, term: int, frequency: float, expected: int) -> None:
        """Число платежей за срок"""
        assert total_periods(term, frequency) == expected

    def test_schedule_closes_balance(self) -> None:
        """Последний платёж гасит остаток полностью"""
        payment = periodic_payment(10000.0, 5.0, 36, 12.0)
        schedule = amortization_schedule(10000.0, 5.0, 36, 12.0, payment)
        assert len(schedule) == 36
        assert schedule[0].interest == 41.67
        assert schedule[-1].balance == 0.0
        assert sum(row.principal for row in schedule) == pytest.approx(10000.0, abs=0.005)

    def test_annuity_present_value(self) -> None:
        """PV аннуитета обращает платёж"""
        payment = periodic_payment(10000.0, 6.0, 24, 12.0)
        assert annuity_present_value(payment, 0.005, 24) == pytest.approx(10000.0)
        assert annuity_present_value(100.0, 0.0, 12) == 1200.0

    def test_effective_rate_without_fees(self) -> None:
        """Без комиссий эффективная ставка равна APR"""
        payment = periodic_payment(10000.0, 12.0, 12, 12.0)
        assert effective_rate_with_fees(10000.0, payment, 12, 12.0) == pytest.approx(12.6825, abs=1e-4)

    def test_effective_rate_undefined(self) -> None:
        """Некорректные входы — None"""
        assert effective_rate_with_fees(0.0, 100.0, 12, 12.0) is None
        assert effective_rate_with_fees(1000.0, 0.0, 12, 12.0) is None


class TestLoanCalculator:
    """Тесты LoanCalculator"""

    def test_standard_loan(self) -> None:
        """10000 под 5% на 36 месяцев"""
        outcome = LoanCalculator().run(BASE)
        assert outcome.ok
        result = outcome.result
        assert result.periodic_payment == 299.71
        assert result.payment_frequency == PaymentFrequency.MONTHLY
        assert result.total_periods == 36
        assert result.total_interest == pytest.approx(789.5, abs=0.1)
        assert result.total_fees == 0.0
        assert result.nominal_rate == 5.0
        assert result.annual_percentage_rate == 5.12
        assert result.effective_rate == 5.12
        assert len(result.amortization_schedule) == 36

    def test_zero_rate(self) -> None:
        """Беспроцентный кредит"""
        outcome = LoanCalculator().run({"loan_amount": 12000, "interest_rate": 0, "loan_term": 12})
        result = outcome.result
        assert result.periodic_payment == 1000.0
        assert result.total_interest == 0.0
        assert all(row.interest == 0.0 for row in result.amortization_schedule)

    def test_fees_raise_effective_rate(self) -> None:
        """Комиссии повышают эффективную ставку"""
        outcome = LoanCalculator().run({**BASE, "origination_fee": 2, "monthly_fee": 5})
        result = outcome.result
        assert result.total_fees == 200.0 + 5.0 * 36
        assert result.effective_rate > result.annual_percentage_rate

    def test_apr_rate_type(self) -> None:
        """Ставка задана как APR — переводится в номинальную"""
        outcome = LoanCalculator().run(
            {"loan_amount": 10000, "interest_rate": 12.6825, "loan_term": 12, "rate_type": "apr"}
        )
        assert outcome.result.nominal_rate == 12.0

    def test_biweekly(self) -> None:
        """Платежи раз в две недели"""
        outcome = LoanCalculator().run({**BASE, "payment_frequency": "biweekly"})
        result = outcome.result
        assert result.total_periods == 78
        assert result.periodic_payment < 299.71

    def test_validation(self) -> None:
        """Ошибки по всем полям"""
        outcome = LoanCalculator().run(
            {
                "loan_amount": 0,
                "interest_rate": 101,
                "loan_term": 0.5,
                "origination_fee": 25,
                "monthly_fee": -1,
            }
        )
        validation = outcome.validation
        assert validation.fields == (
            "loan_amount",
            "interest_rate",
            "loan_term",
            "origination_fee",
            "monthly_fee",
        )
        assert validation.errors[0].message == "Loan amount must be greater than 0"
        assert validation.has_error("loan_term", ErrorKind.INVALID_FORMAT)

    def test_term_limit(self) -> None:
        """Срок не более 600 месяцев"""
        outcome = LoanCalculator().run({**BASE, "loan_term": 601})
        assert outcome.validation.has_error("loan_term", ErrorKind.OUT_OF_RANGE)
