"""
Dataset Parsing — Разбор набора чисел из свободного текста

Разделители: пробелы, запятые, точки с запятой, табуляция, переводы строк.

Поддерживаются два формата чисел:
- US: 1,234.56 (запятая — разделитель тысяч или значений, точка — дробная часть)
- European: 1.234,56 (точка — разделитель тысяч, запятая — дробная часть)

European-формат распознаётся, если:
1. В тексте есть ';', табуляция или перевод строки и встречается "цифра,цифра"; или
2. Текст разделён пробелами и каждый токен — число вида 1,5 / 1.234,56 / 12

Нераспознанные токены возвращаются в invalid_values, не прерывая разбор.
"""

import math
import re
from dataclasses import dataclass
from typing import Final, Sequence

from src.core.domain.validation import ErrorKind, ValidationCollector

# Число без локализации после нормализации
_NUMBER_RE: Final[re.Pattern[str]] = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# Токен в European-формате, разделённый пробелами
_EUROPEAN_TOKEN_RE: Final[re.Pattern[str]] = re.compile(
    r"[+-]?\d{1,3}(?:\.\d{3})*(?:,\d{1,2})?|[+-]?\d+(?:,\d{1,2})?"
)

# Разделитель тысяч в US-формате: 1,234 (но не 1,2345)
_US_THOUSANDS_RE: Final[re.Pattern[str]] = re.compile(r"(\d),(\d{3})(?!\d)")

# Разделитель тысяч в European-формате: 1.234
_EU_THOUSANDS_RE: Final[re.Pattern[str]] = re.compile(r"(\d)\.(\d{3})(?!\d)")

_US_DELIMITERS_RE: Final[re.Pattern[str]] = re.compile(r"[\s,;]+")
_EU_DELIMITERS_RE: Final[re.Pattern[str]] = re.compile(r"[\s;]+")


@dataclass(frozen=True)
class ParsedDataset:
    """Результат разбора текста с данными."""

    values: tuple[float, ...]
    invalid_values: tuple[str, ...]

    @property
    def count(self) -> int:
        """Число распознанных значений."""
        return len(self.values)


def is_european_format(text: str) -> bool:
    """
    Определение European-формата чисел (запятая — дробная часть).

    Examples:
        >>> is_european_format("1,5; 2,5; 3,5")
        True
        >>> is_european_format("1,5 2,25 3")
        True
        >>> is_european_format("1, 2, 3")
        False
        >>> is_european_format("1,234.5 2")
        False
    """
    if re.search(r"[;\t\n]", text) and re.search(r"\d,\d", text):
        return True

    tokens = text.split()
    if len(tokens) < 2 or not any("," in token for token in tokens):
        return False
    return all(_EUROPEAN_TOKEN_RE.fullmatch(token) for token in tokens)


def parse_number(token: str) -> float | None:
    """
    Разбор одного нормализованного токена.

    Returns:
        Конечное число или None, если токен не является числом
    """
    if not _NUMBER_RE.fullmatch(token):
        return None
    value = float(token)
    return value if math.isfinite(value) else None


def parse_dataset(text: str | None) -> ParsedDataset:
    """
    Разбор набора чисел из текста.

    Args:
        text: Текст, введённый пользователем

    Returns:
        ParsedDataset с распознанными и нераспознанными значениями

    Examples:
        >>> parse_dataset("1, 2, 3").values
        (1.0, 2.0, 3.0)
        >>> parse_dataset("1.234,5; 2,5").values
        (1234.5, 2.5)
        >>> parse_dataset("1,234 abc").invalid_values
        ('abc',)
    """
    if text is None or not text.strip():
        return ParsedDataset(values=(), invalid_values=())

    if is_european_format(text):
        normalized = _EU_THOUSANDS_RE.sub(r"\1\2", text)
        # Повтор для групп вида 1.234.567
        normalized = _EU_THOUSANDS_RE.sub(r"\1\2", normalized).replace(",", ".")
        parts = _EU_DELIMITERS_RE.split(normalized)
    else:
        normalized = _US_THOUSANDS_RE.sub(r"\1\2", text)
        normalized = _US_THOUSANDS_RE.sub(r"\1\2", normalized)
        parts = _US_DELIMITERS_RE.split(normalized)

    values: list[float] = []
    invalid: list[str] = []
    for part in (p.strip() for p in parts):
        if not part:
            continue
        number = parse_number(part)
        if number is None:
            invalid.append(part)
        else:
            values.append(number)

    return ParsedDataset(values=tuple(values), invalid_values=tuple(invalid))


# =============================================================================
# ВАЛИДАЦИЯ НАБОРА ДАННЫХ
# =============================================================================

# Сколько нераспознанных токенов показывать в сообщении
MAX_INVALID_SHOWN: Final[int] = 5


def resolve_dataset(dataset: Sequence[float] | None, data_input: str | None) -> ParsedDataset:
    """
    Набор значений из списка чисел или (если список не задан) из текста.
    """
    if dataset:
        return ParsedDataset(values=tuple(float(v) for v in dataset), invalid_values=())
    return parse_dataset(data_input)


def check_dataset(
    collector: ValidationCollector,
    field_name: str,
    dataset: Sequence[float] | None,
    data_input: str | None,
    *,
    min_count: int = 1,
) -> ValidationCollector:
    """
    Проверка набора данных (не более одной ошибки на поле).

    - нет данных → missing-required-field
    - NaN/Inf в списке или нераспознанные токены → invalid-format
    - меньше min_count значений → domain-precondition-violated
    """
    if (dataset is None or len(dataset) == 0) and (data_input is None or not data_input.strip()):
        return collector.add(
            field_name, ErrorKind.MISSING_REQUIRED_FIELD, "Please enter at least one number"
        )

    if dataset is not None and not all(math.isfinite(v) for v in dataset):
        return collector.add(
            field_name, ErrorKind.INVALID_FORMAT, "All values must be finite numbers"
        )

    parsed = resolve_dataset(dataset, data_input)
    if parsed.invalid_values:
        shown = ", ".join(parsed.invalid_values[:MAX_INVALID_SHOWN])
        suffix = "..." if len(parsed.invalid_values) > MAX_INVALID_SHOWN else ""
        return collector.add(
            field_name, ErrorKind.INVALID_FORMAT, f"Invalid values found: {shown}{suffix}"
        )

    if parsed.count < min_count:
        return collector.add(
            field_name,
            ErrorKind.DOMAIN_PRECONDITION_VIOLATED,
            f"At least {min_count} value{'s' if min_count != 1 else ''} required",
        )

    return collector
