"""
Fixed-Point Arithmetic — RAY Primitives

Целочисленная арифметика с фиксированной точкой (scale = 10^27, RAY):
- rmul: умножение с явным округлением (floor / half-up)
- rpow: возведение в степень через binary exponentiation (repeated squaring)
- Проверки ширины полей (uint96 / uint120 / uint40) для wire-формата

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Только int, никаких float (bool отвергается)
2. Промежуточные произведения не усекаются: Python int служит
   double-width intermediate, rescale выполняется один раз на шаг
3. Направление округления задаётся явно в каждой операции
4. Все операции детерминированы и воспроизводимы
"""

from typing import Final

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Fixed-point scale: 1.0 == RAY
RAY: Final[int] = 10**27

# Половина RAY для округления half-up
HALF_RAY: Final[int] = RAY // 2

# Секунд в году (365 дней, без високосных)
SECONDS_PER_YEAR: Final[int] = 365 * 24 * 60 * 60

# Максимум uint256 — верхняя граница любого слова wire-формата
UINT256_MAX: Final[int] = 2**256 - 1


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def require_uint(value: int, name: str = "value") -> int:
    """
    Проверка, что value — неотрицательный int.

    Raises:
        TypeError: если value не int (или bool)
        ValueError: если value < 0
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


def fits_bits(value: int, bits: int) -> bool:
    """
    True если 0 <= value < 2**bits.

    Examples:
        >>> fits_bits(255, 8)
        True
        >>> fits_bits(256, 8)
        False
    """
    return 0 <= value < (1 << bits)


def require_bits(value: int, bits: int, name: str = "value") -> int:
    """
    Проверка ширины поля: value должен помещаться в uint<bits>.

    Raises:
        ValueError: если value вне диапазона [0, 2**bits)
    """
    require_uint(value, name)
    if not fits_bits(value, bits):
        raise ValueError(f"{name}={value} does not fit in uint{bits}")
    return value


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def rmul_down(a: int, b: int) -> int:
    """
    a * b / RAY с округлением вниз (floor).

    Examples:
        >>> rmul_down(RAY, 5)
        5
        >>> rmul_down(3, RAY // 2)
        1
    """
    return (a * b) // RAY


def rmul_half_up(a: int, b: int) -> int:
    """
    a * b / RAY с округлением к ближайшему (half-up).

    Используется внутри rpow: на каждом шаге ошибка ограничена 0.5 ulp
    вместо систематического смещения вниз при floor.

    Examples:
        >>> rmul_half_up(3, RAY // 2)
        2
    """
    return (a * b + HALF_RAY) // RAY


# =============================================================================
# ВОЗВЕДЕНИЕ В СТЕПЕНЬ
# =============================================================================


def rpow(x: int, n: int) -> int:
    """
    x^n в fixed-point домене через binary exponentiation.

    O(log n) умножений; каждое умножение — rmul_half_up.

    Args:
        x: Основание (RAY-scale, >= 0)
        n: Показатель (целое, >= 0)

    Returns:
        x^n в RAY-scale. rpow(x, 0) == RAY, rpow(0, n > 0) == 0.

    Examples:
        >>> rpow(RAY, 10**9) == RAY
        True
        >>> rpow(2 * RAY, 10) == 1024 * RAY
        True
        >>> rpow(0, 0) == RAY
        True
    """
    require_uint(x, "x")
    require_uint(n, "n")

    if x == 0:
        return RAY if n == 0 else 0

    z = x if n % 2 else RAY
    n //= 2
    while n:
        x = rmul_half_up(x, x)
        if n % 2:
            z = rmul_half_up(z, x)
        n //= 2
    return z
