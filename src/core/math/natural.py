"""
Natural — натуральные числа произвольной точности

Неотрицательное целое с двумя формами хранения:
- SMALL: один limb inline, значение в [0, LIMB_MAX], без выделения списка
- LARGE: little-endian список из двух и более limb

Каждая операция диспетчеризуется по паре форм операндов
(SMALL/SMALL, SMALL/LARGE, LARGE/SMALL, LARGE/LARGE).

КАНОНИЧЕСКАЯ ФОРМА:
1. Значение, помещающееся в один limb, всегда хранится как SMALL
2. Старший limb LARGE никогда не равен нулю
3. Следовательно, структурное равенство совпадает с численным

СЕМАНТИКА ЗНАЧЕНИЙ:
Natural неизменяем и хешируем. `a += b` и `a *= b` перепривязывают имя,
как для int. Повторное использование памяти:
- Результат строится в собственной копии более длинного операнда,
  короткий операнд только читается
- x + ZERO и x * ONE возвращают сам объект x без копирования
- natural_sum / natural_product ведут один собственный буфер на всю свёртку

Обе операции тотальны и никогда не бросают исключений.
"""

import logging
from enum import Enum
from typing import Final, Iterable, Sequence

from src.core.math.limb_arithmetic import (
    LIMB_BITS,
    overflowing_add,
    validate_limb,
    widening_mul,
)
from src.core.math.limb_vectors import (
    add_into,
    mul_scalar_into,
    mul_schoolbook,
)

logger = logging.getLogger(__name__)


class ReprKind(str, Enum):
    """Форма хранения Natural."""

    SMALL = "SMALL"
    LARGE = "LARGE"


_SMALL_SMALL: Final = (ReprKind.SMALL, ReprKind.SMALL)
_SMALL_LARGE: Final = (ReprKind.SMALL, ReprKind.LARGE)
_LARGE_SMALL: Final = (ReprKind.LARGE, ReprKind.SMALL)


# =============================================================================
# ПРЕДСТАВЛЕНИЕ
# =============================================================================


class Natural:
    """
    Натуральное число произвольной точности.

    Публичные способы получить значение: from_limb(), ZERO, ONE
    и результаты арифметики. Прямой вызов Natural(...) запрещён,
    внутренний код строит значения через _make().
    """

    __slots__ = ("_kind", "_value", "_limbs")

    def __init__(self, *args: object, **kwargs: object) -> None:
        raise TypeError("Natural cannot be constructed directly, use from_limb()")

    @classmethod
    def _make(
        cls,
        kind: ReprKind,
        value: int = 0,
        limbs: list[int] | None = None,
    ) -> "Natural":
        """Внутренняя фабрика: без валидации и нормализации."""
        self = object.__new__(cls)
        self._kind = kind
        self._value = value
        self._limbs = limbs
        return self

    @classmethod
    def _wrap(cls, limbs: list[int]) -> "Natural":
        """
        Обернуть собственный список limb без копирования.

        Список приводится к канонической форме на месте: старшие нули
        отбрасываются, один limb сворачивается в SMALL.
        """
        while len(limbs) > 1 and limbs[-1] == 0:
            limbs.pop()

        if len(limbs) == 0:
            return cls._make(ReprKind.SMALL, 0)
        if len(limbs) == 1:
            return cls._make(ReprKind.SMALL, limbs[0])
        return cls._make(ReprKind.LARGE, limbs=limbs)

    @classmethod
    def _from_limbs(cls, limbs: Iterable[int]) -> "Natural":
        """
        Построить значение из явной little-endian последовательности.

        Только для тестовых фикстур: публичного конструктора из
        произвольной последовательности нет.
        """
        owned = [validate_limb(limb, f"limbs[{i}]") for i, limb in enumerate(limbs)]
        return cls._wrap(owned)

    # -------------------------------------------------------------------------
    # Инспекция
    # -------------------------------------------------------------------------

    @property
    def kind(self) -> ReprKind:
        return self._kind

    @property
    def is_small(self) -> bool:
        return self._kind is ReprKind.SMALL

    @property
    def limb_count(self) -> int:
        if self._kind is ReprKind.SMALL:
            return 1
        return len(self._limbs)

    def to_limbs(self) -> tuple[int, ...]:
        """Little-endian последовательность limb (SMALL → один элемент)."""
        if self._kind is ReprKind.SMALL:
            return (self._value,)
        return tuple(self._limbs)

    def _limb_view(self) -> Sequence[int]:
        # только для чтения: список LARGE не копируется
        if self._kind is ReprKind.SMALL:
            return (self._value,)
        return self._limbs

    def _owned_limbs(self) -> list[int]:
        """Свежая копия limb, которой вызывающий код владеет единолично."""
        return list(self._limb_view())

    def bit_length(self) -> int:
        """Количество бит, необходимое для записи значения (0 для нуля)."""
        if self._kind is ReprKind.SMALL:
            return self._value.bit_length()
        return (len(self._limbs) - 1) * LIMB_BITS + self._limbs[-1].bit_length()

    def __int__(self) -> int:
        if self._kind is ReprKind.SMALL:
            return self._value
        return sum(limb << (LIMB_BITS * i) for i, limb in enumerate(self._limbs))

    def __bool__(self) -> bool:
        # каноническая LARGE форма всегда ненулевая
        return self._kind is ReprKind.LARGE or self._value != 0

    def _is_small_value(self, value: int) -> bool:
        return self._kind is ReprKind.SMALL and self._value == value

    # -------------------------------------------------------------------------
    # Равенство и отладочное представление
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Natural):
            return NotImplemented
        return self._kind is other._kind and self._limb_view() == other._limb_view()

    def __hash__(self) -> int:
        return hash((self._kind, self.to_limbs()))

    def __repr__(self) -> str:
        if self._kind is ReprKind.SMALL:
            return f"Natural(Small({self._value}))"
        return f"Natural(Large({self._limbs}))"

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> "Natural":
        if not isinstance(other, Natural):
            return NotImplemented
        return add(self, other)

    def __mul__(self, other: object) -> "Natural":
        if not isinstance(other, Natural):
            return NotImplemented
        return mul(self, other)


# =============================================================================
# КОНСТРУИРОВАНИЕ
# =============================================================================

# Аддитивная единица
ZERO: Final[Natural] = Natural._make(ReprKind.SMALL, 0)

# Мультипликативная единица
ONE: Final[Natural] = Natural._make(ReprKind.SMALL, 1)


def from_limb(value: int) -> Natural:
    """
    Natural из одного limb (SMALL форма).

    Args:
        value: Беззнаковое машинное слово в [0, LIMB_MAX]

    Returns:
        SMALL(value)

    Raises:
        LimbDomainViolation: Если value не limb

    Examples:
        >>> from_limb(42)
        Natural(Small(42))
    """
    return Natural._make(ReprKind.SMALL, validate_limb(value, "value"))


# =============================================================================
# СЛОЖЕНИЕ
# =============================================================================


def add(a: Natural, b: Natural) -> Natural:
    """
    Сумма двух натуральных чисел.

    Тотальна, коммутативна, ассоциативна, ZERO — нейтральный элемент.

    - SMALL + SMALL: сложение с детекцией переполнения; при переполнении
      результат LARGE([sum, 1]) (один limb не переполняется больше чем на 1)
    - SMALL + LARGE: сводится к LARGE + SMALL перестановкой операндов
    - LARGE + SMALL: скаляр прибавляется к limbs[0], перенос
      распространяется вверх, выживший перенос становится новым limb 1
    - LARGE + LARGE: аккумулятором становится копия более длинного операнда,
      далее поразрядное сложение с переносом и его распространение

    Examples:
        >>> add(from_limb(LIMB_MAX), from_limb(LIMB_MAX))
        Natural(Large([18446744073709551614, 1]))
    """
    kinds = (a._kind, b._kind)

    if kinds == _SMALL_SMALL:
        total, overflow = overflowing_add(a._value, b._value)
        if overflow:
            logger.debug("small + small overflowed, promoting to large")
            return Natural._make(ReprKind.LARGE, limbs=[total, 1])
        return Natural._make(ReprKind.SMALL, total)

    if kinds == _SMALL_LARGE:
        return add(b, a)

    if kinds == _LARGE_SMALL:
        if b._value == 0:
            return a
        limbs = a._owned_limbs()
        add_into(limbs, (b._value,))
        return Natural._make(ReprKind.LARGE, limbs=limbs)

    # LARGE + LARGE: растёт копия более длинной последовательности
    if len(a._limbs) < len(b._limbs):
        a, b = b, a
    limbs = a._owned_limbs()
    add_into(limbs, b._limbs)
    return Natural._make(ReprKind.LARGE, limbs=limbs)


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def mul(a: Natural, b: Natural) -> Natural:
    """
    Произведение двух натуральных чисел.

    Тотально, коммутативно, ONE — нейтральный элемент, ZERO — поглощающий.

    Быстрые пути проверяются первыми: множитель ZERO → ZERO,
    множитель ONE → другой операнд (тот же объект, без копии).

    - SMALL × SMALL: расширяющее умножение; LARGE([low, high]) при high != 0
    - SMALL × LARGE: сводится к LARGE × SMALL перестановкой операндов
    - LARGE × SMALL: скаляр умножается на каждый limb с цепочкой переносов
    - LARGE × LARGE: умножение «в столбик» с буфером len(a) + len(b)

    Examples:
        >>> mul(from_limb(LIMB_MAX), from_limb(LIMB_MAX))
        Natural(Large([1, 18446744073709551614]))
    """
    if a._is_small_value(0) or b._is_small_value(0):
        return ZERO
    if a._is_small_value(1):
        return b
    if b._is_small_value(1):
        return a

    kinds = (a._kind, b._kind)

    if kinds == _SMALL_SMALL:
        low, high = widening_mul(a._value, b._value)
        if high != 0:
            logger.debug("small * small overflowed, promoting to large")
            return Natural._make(ReprKind.LARGE, limbs=[low, high])
        return Natural._make(ReprKind.SMALL, low)

    if kinds == _SMALL_LARGE:
        return mul(b, a)

    if kinds == _LARGE_SMALL:
        limbs = a._owned_limbs()
        mul_scalar_into(limbs, b._value)
        return Natural._wrap(limbs)

    # LARGE × LARGE
    return Natural._wrap(mul_schoolbook(a._limbs, b._limbs))


# =============================================================================
# СВЁРТКИ
# =============================================================================


def natural_sum(values: Iterable[Natural]) -> Natural:
    """
    Сумма последовательности натуральных чисел.

    Один собственный буфер изменяется на месте на протяжении всей свёртки.
    Результат равен левой свёртке через add(), начиная с ZERO.

    Args:
        values: Слагаемые (любой iterable)

    Returns:
        Сумма; ZERO для пустой последовательности
    """
    acc = [0]
    for value in values:
        add_into(acc, value._limb_view())
    return Natural._wrap(acc)


def natural_product(values: Iterable[Natural]) -> Natural:
    """
    Произведение последовательности натуральных чисел.

    SMALL множители умножаются в собственный буфер на месте, LARGE
    множители проходят через умножение «в столбик». Нулевой множитель
    завершает свёртку сразу.

    Args:
        values: Множители (любой iterable)

    Returns:
        Произведение; ONE для пустой последовательности
    """
    acc = [1]
    for value in values:
        if value._is_small_value(0):
            return ZERO
        if value._kind is ReprKind.SMALL:
            mul_scalar_into(acc, value._value)
        else:
            acc = mul_schoolbook(acc, value._limbs)
            # буфер без старших нулей
            while len(acc) > 1 and acc[-1] == 0:
                acc.pop()
    return Natural._wrap(acc)
