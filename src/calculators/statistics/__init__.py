"""
Statistical calculators.

Central tendency, dispersion, correlation/regression, z-score with normal
distribution probabilities, event probabilities and sample size estimation.
"""

from src.calculators.statistics.correlation import (
    CorrelationCalculator,
    CorrelationConfig,
    CorrelationDirection,
    CorrelationInput,
    CorrelationResult,
    CorrelationStrength,
    RegressionLine,
    SignificanceTest,
    classify_direction,
    classify_strength,
    linear_regression,
    pearson_r,
    significance_test,
)
from src.calculators.statistics.descriptive import (
    CentralTendencyCalculator,
    CentralTendencyConfig,
    CentralTendencyInput,
    CentralTendencyResult,
    DispersionMode,
    ModeResult,
    ModeType,
    Quartiles,
    StandardDeviationCalculator,
    StandardDeviationConfig,
    StandardDeviationInput,
    StandardDeviationResult,
    WeightedMean,
    geometric_mean,
    harmonic_mean,
    mean,
    median,
    mode,
    quartiles,
    standard_deviation,
    variance,
    weighted_mean,
)
from src.calculators.statistics.parsing import (
    ParsedDataset,
    check_dataset,
    is_european_format,
    parse_dataset,
    resolve_dataset,
)
from src.calculators.statistics.probability import (
    EventRelationship,
    Odds,
    ProbabilityCalculator,
    ProbabilityFormula,
    ProbabilityInput,
    ProbabilityMode,
    ProbabilityResult,
    as_fraction,
    conditional,
    intersection,
    odds_for,
    single_event,
    union,
)
from src.calculators.statistics.sample_size import (
    SampleSizeCalculator,
    SampleSizeConfig,
    SampleSizeInput,
    SampleSizeResult,
    z_score_for_confidence,
)
from src.calculators.statistics.zscore import (
    ZScoreCalculator,
    ZScoreConfig,
    ZScoreInput,
    ZScoreInterpretation,
    ZScoreMode,
    ZScoreResult,
    interpret_z_score,
    value_from_z_score,
    z_score,
)

__all__ = [
    # Parsing
    "ParsedDataset",
    "check_dataset",
    "is_european_format",
    "parse_dataset",
    "resolve_dataset",
    # Descriptive — Types
    "DispersionMode",
    "ModeResult",
    "ModeType",
    "Quartiles",
    "WeightedMean",
    # Descriptive — Functions
    "geometric_mean",
    "harmonic_mean",
    "mean",
    "median",
    "mode",
    "quartiles",
    "standard_deviation",
    "variance",
    "weighted_mean",
    # Descriptive — Calculators
    "CentralTendencyCalculator",
    "CentralTendencyConfig",
    "CentralTendencyInput",
    "CentralTendencyResult",
    "StandardDeviationCalculator",
    "StandardDeviationConfig",
    "StandardDeviationInput",
    "StandardDeviationResult",
    # Correlation
    "CorrelationCalculator",
    "CorrelationConfig",
    "CorrelationDirection",
    "CorrelationInput",
    "CorrelationResult",
    "CorrelationStrength",
    "RegressionLine",
    "SignificanceTest",
    "classify_direction",
    "classify_strength",
    "linear_regression",
    "pearson_r",
    "significance_test",
    # Z-score
    "ZScoreCalculator",
    "ZScoreConfig",
    "ZScoreInput",
    "ZScoreInterpretation",
    "ZScoreMode",
    "ZScoreResult",
    "interpret_z_score",
    "value_from_z_score",
    "z_score",
    # Probability
    "EventRelationship",
    "Odds",
    "ProbabilityCalculator",
    "ProbabilityFormula",
    "ProbabilityInput",
    "ProbabilityMode",
    "ProbabilityResult",
    "as_fraction",
    "conditional",
    "intersection",
    "odds_for",
    "single_event",
    "union",
    # Sample size
    "SampleSizeCalculator",
    "SampleSizeConfig",
    "SampleSizeInput",
    "SampleSizeResult",
    "z_score_for_confidence",
]
