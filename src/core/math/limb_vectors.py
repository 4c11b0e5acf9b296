"""
Limb Vectors — операции над последовательностями limb

Последовательности хранятся little-endian: limbs[0] — младший разряд.
Значение последовательности: Σ limbs[i] * 2^(W·i).

Функции с суффиксом _into изменяют переданный список на месте.
Вызывающий код обязан владеть этим списком единолично (свежая копия
или собственный буфер аккумулятора), иначе изменение будет видно
через другие ссылки.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Перенос между разрядами при сложении всегда один бит
2. Распространение переноса останавливается на первом разряде без переполнения
3. Список растёт не более чем на один limb за сложение
"""

import logging
from typing import Sequence

from src.core.math.limb_arithmetic import carrying_add, carrying_mul

logger = logging.getLogger(__name__)


# =============================================================================
# СЛОЖЕНИЕ
# =============================================================================


def ripple_carry_into(acc: list[int], start: int) -> bool:
    """
    Распространение единичного переноса вверх начиная с разряда start.

    Args:
        acc: Изменяемая последовательность limb
        start: Индекс первого разряда, принимающего перенос

    Returns:
        True если перенос вышел за старший разряд acc
    """
    for i in range(start, len(acc)):
        acc[i], carry = carrying_add(acc[i], 0, True)
        if not carry:
            return False
    return True


def add_shifted_into(acc: list[int], addend: Sequence[int], offset: int = 0) -> bool:
    """
    Прибавление addend, сдвинутого на offset разрядов, к acc на месте.

    Поразрядное сложение с переносом по перекрытию, затем распространение
    оставшегося переноса через старшие разряды acc.

    Args:
        acc: Изменяемая последовательность limb
        addend: Прибавляемая последовательность limb
        offset: Сдвиг addend в разрядах (limb-позициях)

    Returns:
        True если перенос вышел за старший разряд acc

    Raises:
        ValueError: Если addend со сдвигом не помещается в acc
    """
    if offset + len(addend) > len(acc):
        raise ValueError(
            f"addend of {len(addend)} limbs at offset {offset} "
            f"does not fit accumulator of {len(acc)} limbs"
        )

    carry = False
    for i, limb in enumerate(addend, start=offset):
        acc[i], carry = carrying_add(acc[i], limb, carry)

    if carry:
        return ripple_carry_into(acc, offset + len(addend))
    return False


def add_into(acc: list[int], addend: Sequence[int]) -> None:
    """
    acc += addend на месте, acc растёт при необходимости.

    Если addend длиннее acc, acc предварительно дополняется нулями
    (растёт собственный буфер, addend только читается).

    Args:
        acc: Изменяемая последовательность limb (аккумулятор)
        addend: Прибавляемая последовательность limb
    """
    if len(acc) < len(addend):
        acc.extend([0] * (len(addend) - len(acc)))

    if add_shifted_into(acc, addend):
        acc.append(1)
        logger.debug("limb sequence grew to %d limbs on carry", len(acc))


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def mul_scalar_into(acc: list[int], scalar: int) -> None:
    """
    acc *= scalar на месте.

    Каждый разряд умножается расширяюще, старшая половина становится
    переносом в следующий разряд. Ненулевой финальный перенос
    добавляется новым старшим limb.

    Args:
        acc: Изменяемая последовательность limb
        scalar: Множитель (один limb)
    """
    carry = 0
    for i, limb in enumerate(acc):
        acc[i], carry = carrying_mul(limb, scalar, carry)

    if carry:
        acc.append(carry)
        logger.debug("limb sequence grew to %d limbs on scalar product", len(acc))


def mul_scalar(limbs: Sequence[int], scalar: int) -> list[int]:
    """Произведение последовательности на скаляр в новом списке."""
    product = list(limbs)
    mul_scalar_into(product, scalar)
    return product


def mul_schoolbook(a: Sequence[int], b: Sequence[int]) -> list[int]:
    """
    Умножение «в столбик» за O(n·m).

    Для каждого разряда b[j] частичное произведение a * b[j] прибавляется
    к буферу со сдвигом на j разрядов. Буфер имеет размер len(a) + len(b)
    (худший случай), поэтому перенос за его пределы невозможен.
    Нулевые разряды множителя пропускаются.

    Args:
        a: Множимое
        b: Множитель

    Returns:
        Произведение длиной len(a) + len(b); старшие разряды могут быть нулевыми

    Examples:
        >>> mul_schoolbook([2, 1], [3])
        [6, 3, 0]
    """
    product = [0] * (len(a) + len(b))

    for j, limb in enumerate(b):
        if limb == 0:
            continue
        add_shifted_into(product, mul_scalar(a, limb), offset=j)

    return product
