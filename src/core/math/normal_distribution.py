"""
Normal Distribution — erf, CDF и обратная функция

Численные аппроксимации стандартного нормального распределения без
внешних зависимостей (детерминированные, O(1)).

ФОРМУЛЫ:
- erf(x) ≈ 1 - (a1·t + a2·t² + a3·t³ + a4·t⁴ + a5·t⁵)·exp(-x²),  t = 1/(1 + p·|x|)
  Abramowitz & Stegun 7.1.26, |ε| ≤ 1.5e-7
- Φ(z) = 0.5 · (1 + erf(z / √2))
- Φ⁻¹ (верхний хвост): t = √(-2·ln α),
  z ≈ t - (c0 + c1·t + c2·t²) / (1 + d1·t + d2·t² + d3·t³)
  Abramowitz & Stegun 26.2.23, |ε| < 4.5e-4

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. erf(0) == 0 точно, поэтому Φ(0) == 0.5 точно
2. erf нечётная: erf(-x) == -erf(x)
3. Φ монотонно неубывающая и лежит в [0, 1]
"""

import math
from typing import Final, NamedTuple

# =============================================================================
# КОЭФФИЦИЕНТЫ A&S 7.1.26
# =============================================================================

ERF_A1: Final[float] = 0.254829592
ERF_A2: Final[float] = -0.284496736
ERF_A3: Final[float] = 1.421413741
ERF_A4: Final[float] = -1.453152027
ERF_A5: Final[float] = 1.061405429
ERF_P: Final[float] = 0.3275911

# =============================================================================
# КОЭФФИЦИЕНТЫ A&S 26.2.23
# =============================================================================

INV_C0: Final[float] = 2.515517
INV_C1: Final[float] = 0.802853
INV_C2: Final[float] = 0.010328
INV_D1: Final[float] = 1.432788
INV_D2: Final[float] = 0.189269
INV_D3: Final[float] = 0.001308

SQRT2: Final[float] = math.sqrt(2.0)


# =============================================================================
# TYPES
# =============================================================================


class TailProbabilities(NamedTuple):
    """P-values для z-score и эквивалентный уровень доверия."""

    left_tailed: float
    right_tailed: float
    two_tailed: float
    confidence_level: float


# =============================================================================
# ERF / CDF
# =============================================================================


def erf(x: float) -> float:
    """
    Функция ошибок Гаусса (полиномиальная аппроксимация A&S 7.1.26).

    Args:
        x: Аргумент

    Returns:
        erf(x) в [-1, 1]

    Examples:
        >>> erf(0.0)
        0.0
        >>> round(erf(1.0), 6)
        0.842701
    """
    if x == 0.0:
        return 0.0

    sign = 1.0 if x > 0 else -1.0
    ax = abs(x)

    t = 1.0 / (1.0 + ERF_P * ax)
    poly = ((((ERF_A5 * t + ERF_A4) * t + ERF_A3) * t + ERF_A2) * t + ERF_A1) * t
    y = 1.0 - poly * math.exp(-ax * ax)

    return sign * y


def normal_cdf(z: float) -> float:
    """
    Функция распределения стандартного нормального закона Φ(z).

    Args:
        z: Z-score

    Returns:
        P(Z <= z) в [0, 1]

    Examples:
        >>> normal_cdf(0.0)
        0.5
    """
    return 0.5 * (1.0 + erf(z / SQRT2))


def tail_probabilities(z: float) -> TailProbabilities:
    """
    P-values для z-score.

    left = Φ(z), right = 1 - left, two = 2·min(left, right),
    confidence = 1 - two.

    Args:
        z: Z-score

    Returns:
        TailProbabilities (не округлённые)
    """
    left = normal_cdf(z)
    right = 1.0 - left
    two = min(1.0, 2.0 * min(left, right))
    return TailProbabilities(
        left_tailed=left,
        right_tailed=right,
        two_tailed=two,
        confidence_level=1.0 - two,
    )


# =============================================================================
# ОБРАТНАЯ ФУНКЦИЯ
# =============================================================================


def inverse_normal_upper(alpha: float) -> float:
    """
    Квантиль z, для которого P(Z > z) = alpha (A&S 26.2.23).

    Args:
        alpha: Вероятность верхнего хвоста в (0, 1)

    Returns:
        z-квантиль (отрицательный при alpha > 0.5)

    Raises:
        ValueError: Если alpha вне (0, 1)

    Examples:
        >>> round(inverse_normal_upper(0.025), 2)
        1.96
    """
    if not 0.0 < alpha < 1.0:
        raise ValueError(f"alpha must be in (0, 1), got {alpha}")

    if alpha > 0.5:
        return -inverse_normal_upper(1.0 - alpha)

    t = math.sqrt(-2.0 * math.log(alpha))
    numerator = INV_C0 + INV_C1 * t + INV_C2 * t * t
    denominator = 1.0 + INV_D1 * t + INV_D2 * t * t + INV_D3 * t * t * t
    return t - numerator / denominator


def z_for_confidence(confidence_pct: float) -> float:
    """
    Двусторонний критический z для уровня доверия в процентах.

    Args:
        confidence_pct: Уровень доверия (например, 95.0)

    Returns:
        z такой, что P(|Z| <= z) = confidence
    """
    alpha = (1.0 - confidence_pct / 100.0) / 2.0
    return inverse_normal_upper(alpha)
