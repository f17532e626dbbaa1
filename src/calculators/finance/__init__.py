"""
Financial calculators.

Compound growth with periodic contributions, ROI/CAGR, loan and mortgage
amortization, savings goals.
"""

from src.calculators.finance.compound_interest import (
    COMPOUNDING_PERIODS,
    CONTRIBUTIONS_PER_YEAR,
    CompoundingFrequency,
    CompoundInterestCalculator,
    CompoundInterestConfig,
    CompoundInterestInput,
    CompoundInterestResult,
    ContributionFrequency,
    YearlyBreakdown,
    project_balance,
)
from src.calculators.finance.loan import (
    PERIODS_PER_YEAR,
    AmortizationRow,
    LoanCalculator,
    LoanConfig,
    LoanInput,
    LoanResult,
    PaymentFrequency,
    RateType,
    amortization_schedule,
    effective_rate_with_fees,
    periodic_payment,
    total_periods,
)
from src.calculators.finance.mortgage import (
    DownPaymentType,
    MortgageCalculator,
    MortgageConfig,
    MortgageInput,
    MortgageResult,
    MortgageRow,
    PaymentBreakdown,
    down_payment,
    monthly_pmi,
    mortgage_schedule,
    pmi_removal_period,
    pmi_required,
)
from src.calculators.finance.roi import (
    ROICalculator,
    ROICategory,
    ROIConfig,
    ROIInput,
    ROIResult,
    annualized_roi,
    basic_roi,
    categorize_roi,
    target_final_value,
)
from src.calculators.finance.savings_goal import (
    DEPOSITS_PER_YEAR,
    DepositFrequency,
    SavingsGoalCalculator,
    SavingsGoalConfig,
    SavingsGoalInput,
    SavingsGoalMode,
    SavingsGoalResult,
    convert_deposit,
    periods_to_goal,
    required_deposit,
    savings_balance,
)

__all__ = [
    # Compound interest
    "COMPOUNDING_PERIODS",
    "CONTRIBUTIONS_PER_YEAR",
    "CompoundingFrequency",
    "CompoundInterestCalculator",
    "CompoundInterestConfig",
    "CompoundInterestInput",
    "CompoundInterestResult",
    "ContributionFrequency",
    "YearlyBreakdown",
    "project_balance",
    # ROI
    "ROICalculator",
    "ROICategory",
    "ROIConfig",
    "ROIInput",
    "ROIResult",
    "annualized_roi",
    "basic_roi",
    "categorize_roi",
    "target_final_value",
    # Loan
    "PERIODS_PER_YEAR",
    "AmortizationRow",
    "LoanCalculator",
    "LoanConfig",
    "LoanInput",
    "LoanResult",
    "PaymentFrequency",
    "RateType",
    "amortization_schedule",
    "effective_rate_with_fees",
    "periodic_payment",
    "total_periods",
    # Mortgage
    "DownPaymentType",
    "MortgageCalculator",
    "MortgageConfig",
    "MortgageInput",
    "MortgageResult",
    "MortgageRow",
    "PaymentBreakdown",
    "down_payment",
    "monthly_pmi",
    "mortgage_schedule",
    "pmi_removal_period",
    "pmi_required",
    # Savings goal
    "DEPOSITS_PER_YEAR",
    "DepositFrequency",
    "SavingsGoalCalculator",
    "SavingsGoalConfig",
    "SavingsGoalInput",
    "SavingsGoalMode",
    "SavingsGoalResult",
    "convert_deposit",
    "periods_to_goal",
    "required_deposit",
    "savings_balance",
]
