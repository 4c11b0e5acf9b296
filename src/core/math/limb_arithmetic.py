"""
Limb Arithmetic — примитивы машинных слов

Limb — одна «цифра» позиционного представления натурального числа,
беззнаковое машинное слово фиксированной ширины (LIMB_BITS бит).

Python int не ограничен по ширине, поэтому модуль эмулирует семантику
фиксированного слова: каждая операция возвращает результат по модулю 2^W
плюс явный перенос (carry) или старшую половину произведения.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат каждой операции — limb в диапазоне [0, LIMB_MAX]
2. Carry при сложении всегда один бит (0 или 1)
3. x * y + carry (carry <= LIMB_MAX) всегда помещается в два limb
4. Все операции чистые и детерминированные
"""

from typing import Annotated, Final

from pydantic import Field, TypeAdapter, ValidationError

# =============================================================================
# ПАРАМЕТРЫ LIMB
# =============================================================================

# Ширина limb в битах (x86_64 machine word)
LIMB_BITS: Final[int] = 64

# Основание позиционной системы: 2^W
LIMB_BASE: Final[int] = 1 << LIMB_BITS

# Максимальное значение одного limb: 2^W - 1
LIMB_MAX: Final[int] = LIMB_BASE - 1

# Тип limb для pydantic моделей и валидации входов
Limb = Annotated[int, Field(ge=0, le=LIMB_MAX, strict=True)]

_LIMB_ADAPTER: Final[TypeAdapter] = TypeAdapter(Limb)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class LimbDomainViolation(ValueError):
    """
    Значение не является limb: не int или вне диапазона [0, LIMB_MAX].

    Арифметика над limb никогда не бросает исключений, ошибка возможна
    только на границе (конструирование из внешнего значения).
    """


def validate_limb(value: int, name: str = "limb") -> int:
    """
    Валидация значения как limb.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value без изменений

    Raises:
        LimbDomainViolation: Если value не int (bool не допускается)
            или вне [0, LIMB_MAX]

    Examples:
        >>> validate_limb(42)
        42
        >>> validate_limb(-1)
        Traceback (most recent call last):
            ...
        src.core.math.limb_arithmetic.LimbDomainViolation: limb must be an integer in [0, 18446744073709551615], got -1
    """
    # bool — подкласс int, но не limb
    if isinstance(value, bool):
        raise LimbDomainViolation(
            f"{name} must be an integer in [0, {LIMB_MAX}], got {value!r}"
        )

    try:
        return _LIMB_ADAPTER.validate_python(value)
    except ValidationError as e:
        raise LimbDomainViolation(
            f"{name} must be an integer in [0, {LIMB_MAX}], got {value!r}"
        ) from e


# =============================================================================
# СЛОЖЕНИЕ С ПЕРЕНОСОМ
# =============================================================================


def carrying_add(x: int, y: int, carry: bool) -> tuple[int, bool]:
    """
    Сложение двух limb с входящим переносом.

    Единственный примитив переноса: на нём построены и сложение со скаляром,
    и поразрядное сложение последовательностей.

    x + y + carry <= 2 * LIMB_MAX + 1 = 2^(W+1) - 1, поэтому исходящий
    перенос всегда один бит.

    Args:
        x: Первый limb
        y: Второй limb
        carry: Входящий перенос

    Returns:
        (сумма mod 2^W, исходящий перенос)

    Examples:
        >>> carrying_add(1, 2, False)
        (3, False)
        >>> carrying_add(LIMB_MAX, 0, True)
        (0, True)
        >>> carrying_add(LIMB_MAX, LIMB_MAX, True)
        (18446744073709551615, True)
    """
    total = x + y + carry
    return total & LIMB_MAX, total > LIMB_MAX


def overflowing_add(x: int, y: int) -> tuple[int, bool]:
    """
    Сложение двух limb с детекцией переполнения.

    Returns:
        (сумма mod 2^W, было ли переполнение)
    """
    return carrying_add(x, y, False)


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def widening_mul(x: int, y: int) -> tuple[int, int]:
    """
    Расширяющее умножение: полное произведение двойной ширины.

    Args:
        x: Первый limb
        y: Второй limb

    Returns:
        (младший limb, старший limb) произведения

    Examples:
        >>> widening_mul(3, 4)
        (12, 0)
        >>> widening_mul(LIMB_MAX, 2)
        (18446744073709551614, 1)
    """
    return carrying_mul(x, y, 0)


def carrying_mul(x: int, y: int, carry: int) -> tuple[int, int]:
    """
    Умножение с прибавлением переноса: x * y + carry.

    При carry <= LIMB_MAX результат не превышает
    (2^W - 1)^2 + (2^W - 1) = 2^(2W) - 2^W < 2^(2W),
    то есть всегда помещается в два limb.

    Args:
        x: Limb множимого
        y: Limb множителя (скаляр)
        carry: Перенос из предыдущего разряда (limb)

    Returns:
        (младший limb, старший limb = перенос в следующий разряд)
    """
    product = x * y + carry
    return product & LIMB_MAX, product >> LIMB_BITS
