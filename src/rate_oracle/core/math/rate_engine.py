"""
RateEngine — Conversion Factor at an Arbitrary Time

Вычисление conversion factor по снапшоту (rate, index, timestamp) в момент at:
- Exact: index * rate^(at - timestamp) / RAY (binary exponentiation)
- Binomial approximation: первые члены биномиального ряда, O(1) умножений
- Linear approximation: простой (некомпаундируемый) процент
- APR: годовая простая ставка (rate - RAY) * SECONDS_PER_YEAR

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. at < timestamp → RateDomainError (прошлое относительно наблюдения не определено)
2. При at == timestamp все три варианта возвращают index без изменений
3. При rate >= RAY и index >= RAY: exact >= binomial >= linear
4. Округление: rpow — half-up на каждом шаге, финальный rescale — floor

ФОРМУЛЫ:
    n = at - timestamp
    r = rate - RAY
    exact    = index * rpow(rate, n) / RAY
    binomial = index * (RAY + n*r + n(n-1)/2 * r^2 + n(n-1)(n-2)/6 * r^3) / RAY
    linear   = index + n*r
"""

from rate_oracle.core.math.fixed_point import (
    RAY,
    SECONDS_PER_YEAR,
    require_uint,
    rmul_down,
    rpow,
)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class RateDomainError(ValueError):
    """
    Запрос conversion factor вне области определения.

    Возникает при at < timestamp (rate^n для отрицательного n не определён)
    или при rate < RAY для приближений (ряд строится только для r >= 0).
    Это ошибка вызывающего кода, локально не восстанавливается.
    """
    pass


# =============================================================================
# HELPERS
# =============================================================================


def elapsed_seconds(timestamp: int, at: int) -> int:
    """
    Длительность at - timestamp с проверкой домена.

    Raises:
        RateDomainError: если at < timestamp
    """
    require_uint(timestamp, "timestamp")
    require_uint(at, "at")
    if at < timestamp:
        raise RateDomainError(
            f"Query time at={at} precedes last observation timestamp={timestamp}"
        )
    return at - timestamp


def _growth_per_second(rate: int) -> int:
    require_uint(rate, "rate")
    if rate < RAY:
        raise RateDomainError(
            f"Approximation requires rate >= RAY, got rate={rate}"
        )
    return rate - RAY


# =============================================================================
# CONVERSION RATE
# =============================================================================


def compound(rate: int, index: int, duration: int) -> int:
    """
    index * rate^duration / RAY (точное компаундирование за duration секунд).

    Examples:
        >>> compound(RAY, 5 * RAY, 1000) == 5 * RAY
        True
        >>> compound(2 * RAY, RAY, 3) == 8 * RAY
        True
    """
    require_uint(index, "index")
    return rmul_down(index, rpow(rate, duration))


def conversion_rate(rate: int, index: int, timestamp: int, at: int) -> int:
    """
    Точный conversion factor в момент at.

    Args:
        rate: Посекундный множитель (RAY-scale)
        index: Накопленный factor на момент timestamp (RAY-scale)
        timestamp: Время наблюдения index (секунды)
        at: Время запроса (секунды, >= timestamp)

    Returns:
        index * rate^(at - timestamp) / RAY

    Raises:
        RateDomainError: если at < timestamp
    """
    return compound(rate, index, elapsed_seconds(timestamp, at))


def conversion_rate_binomial_approx(
    rate: int, index: int, timestamp: int, at: int
) -> int:
    """
    Биномиальное приближение conversion factor (константное число умножений).

    (1 + r)^n ≈ 1 + n*r + n(n-1)/2 * r^2 + n(n-1)(n-2)/6 * r^3

    Все отброшенные члены ряда неотрицательны при r >= 0, поэтому
    приближение систематически занижает точное значение.

    Raises:
        RateDomainError: если at < timestamp или rate < RAY
    """
    n = elapsed_seconds(timestamp, at)
    r = _growth_per_second(rate)
    require_uint(index, "index")

    r_pow2 = rmul_down(r, r)
    r_pow3 = rmul_down(r_pow2, r)

    second_term = n * r
    third_term = n * max(n - 1, 0) * r_pow2 // 2
    fourth_term = n * max(n - 1, 0) * max(n - 2, 0) * r_pow3 // 6

    return rmul_down(index, RAY + second_term + third_term + fourth_term)


def conversion_rate_linear_approx(
    rate: int, index: int, timestamp: int, at: int
) -> int:
    """
    Линейное приближение: index + (rate - RAY) * n.

    Простой процент без компаундирования; самое дешёвое и самое грубое.

    Raises:
        RateDomainError: если at < timestamp или rate < RAY
    """
    n = elapsed_seconds(timestamp, at)
    r = _growth_per_second(rate)
    require_uint(index, "index")
    return index + r * n


# =============================================================================
# APR
# =============================================================================


def apr(rate: int, seconds_per_year: int = SECONDS_PER_YEAR) -> int:
    """
    Годовая простая ставка (RAY-scale): (rate - RAY) * seconds_per_year.

    Только для отображения. При rate < RAY результат отрицательный.

    Examples:
        >>> apr(RAY)
        0
        >>> apr(RAY + 1, seconds_per_year=100)
        100
    """
    require_uint(rate, "rate")
    return (rate - RAY) * seconds_per_year
