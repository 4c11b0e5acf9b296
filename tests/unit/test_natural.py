"""
Тесты для Natural — представление и конструирование

Проверяет:
1. Константы ZERO / ONE и from_limb
2. Каноническую форму (SMALL для одного limb, без старших нулей)
3. Структурное равенство и хеширование
4. Конверсии (int, bit_length, to_limbs) и отладочное представление
5. Неизменяемость значений при арифметике
"""

import logging

import pytest

from src.core.math import (
    LIMB_MAX,
    ONE,
    ZERO,
    LimbDomainViolation,
    Natural,
    ReprKind,
    add,
    from_limb,
    mul,
)

SMALL_MAX = from_limb(LIMB_MAX)


# =============================================================================
# ТЕСТЫ КОНСТРУИРОВАНИЯ
# =============================================================================


class TestConstruction:
    """Тесты from_limb и констант"""

    def test_constants(self) -> None:
        """ZERO и ONE — SMALL значения 0 и 1"""
        assert ZERO.kind is ReprKind.SMALL
        assert ZERO.to_limbs() == (0,)
        assert ONE.kind is ReprKind.SMALL
        assert ONE.to_limbs() == (1,)

    def test_from_limb_is_small(self) -> None:
        """from_limb всегда даёт SMALL форму"""
        for value in (0, 1, 42, LIMB_MAX):
            n = from_limb(value)
            assert n.is_small
            assert n.limb_count == 1
            assert int(n) == value

    def test_from_limb_matches_constants(self) -> None:
        """from_limb(0) == ZERO, from_limb(1) == ONE"""
        assert from_limb(0) == ZERO
        assert from_limb(1) == ONE

    @pytest.mark.parametrize(
        "args, kwargs",
        [
            ((ReprKind.LARGE,), {"limbs": [5]}),
            ((ReprKind.SMALL, 2**70), {}),
            ((), {}),
        ],
    )
    def test_direct_construction_forbidden(self, args: tuple, kwargs: dict) -> None:
        """Natural(...) напрямую не создаёт значение в обход from_limb"""
        with pytest.raises(TypeError, match="use from_limb"):
            Natural(*args, **kwargs)

    @pytest.mark.parametrize("value", [-1, LIMB_MAX + 1, 1.5, True])
    def test_from_limb_rejects_non_limbs(self, value: object) -> None:
        """Значения вне limb отклоняются на границе"""
        with pytest.raises(LimbDomainViolation):
            from_limb(value)  # type: ignore[arg-type]


class TestCanonicalForm:
    """Тесты канонической формы тестового конструктора"""

    def test_empty_is_zero(self) -> None:
        """Пустая последовательность — ноль"""
        assert Natural._from_limbs([]) == ZERO

    def test_single_limb_is_small(self) -> None:
        """Один limb сворачивается в SMALL"""
        n = Natural._from_limbs([123])
        assert n.is_small
        assert n == from_limb(123)

    def test_trailing_zeros_trimmed(self) -> None:
        """Старшие нулевые limb отбрасываются"""
        assert Natural._from_limbs([LIMB_MAX, 0]) == SMALL_MAX
        assert Natural._from_limbs([1, 2, 0, 0]).to_limbs() == (1, 2)

    def test_multi_limb_is_large(self) -> None:
        """Два и более значащих limb — LARGE"""
        n = Natural._from_limbs([0, 1])
        assert n.kind is ReprKind.LARGE
        assert n.limb_count == 2

    def test_input_is_copied(self) -> None:
        """Изменение исходного списка не влияет на значение"""
        limbs = [1, 2]
        n = Natural._from_limbs(limbs)
        limbs[0] = 99
        assert n.to_limbs() == (1, 2)

    def test_invalid_limb_rejected(self) -> None:
        """Невалидный limb в последовательности отклоняется"""
        with pytest.raises(LimbDomainViolation, match="limbs\\[1\\]"):
            Natural._from_limbs([1, -1])


# =============================================================================
# ТЕСТЫ РАВЕНСТВА И КОНВЕРСИЙ
# =============================================================================


class TestEqualityAndHash:
    """Тесты структурного равенства"""

    def test_equal_values(self) -> None:
        """Одинаковые представления равны"""
        assert Natural._from_limbs([5, 6]) == Natural._from_limbs([5, 6])
        assert from_limb(7) == from_limb(7)

    def test_different_values(self) -> None:
        """Разные значения не равны"""
        assert Natural._from_limbs([5, 6]) != Natural._from_limbs([6, 5])
        assert from_limb(7) != from_limb(8)
        assert SMALL_MAX != Natural._from_limbs([LIMB_MAX, 1])

    def test_not_equal_to_int(self) -> None:
        """Natural не сравнивается с int"""
        assert from_limb(5) != 5

    def test_hashable(self) -> None:
        """Равные значения дают один элемент множества"""
        values = {from_limb(5), from_limb(5), Natural._from_limbs([0, 1]), Natural._from_limbs([0, 1])}
        assert len(values) == 2


class TestConversions:
    """Тесты конверсий"""

    def test_int_of_large(self) -> None:
        """int(LARGE) = Σ limb[i] * 2^(64·i)"""
        assert int(Natural._from_limbs([3, 2, 1])) == 3 + 2 * 2**64 + 2**128

    def test_bit_length(self) -> None:
        """bit_length совпадает с int.bit_length"""
        assert ZERO.bit_length() == 0
        assert SMALL_MAX.bit_length() == 64
        assert Natural._from_limbs([0, 1]).bit_length() == 65
        assert Natural._from_limbs([0, 0, 5]).bit_length() == 131

    def test_bool(self) -> None:
        """Только ноль ложен"""
        assert not ZERO
        assert ONE
        assert Natural._from_limbs([0, 1])

    def test_repr(self) -> None:
        """Отладочное представление показывает форму"""
        assert repr(from_limb(5)) == "Natural(Small(5))"
        assert repr(Natural._from_limbs([0, 1])) == "Natural(Large([0, 1]))"


# =============================================================================
# ТЕСТЫ СЕМАНТИКИ ЗНАЧЕНИЙ
# =============================================================================


class TestValueSemantics:
    """Тесты неизменяемости и повторного использования"""

    def test_operands_unchanged_by_add(self) -> None:
        """Сложение не изменяет операнды"""
        a = Natural._from_limbs([LIMB_MAX, LIMB_MAX])
        b = Natural._from_limbs([1, 0, 3])
        add(a, b)
        assert a.to_limbs() == (LIMB_MAX, LIMB_MAX)
        assert b.to_limbs() == (1, 0, 3)

    def test_operands_unchanged_by_mul(self) -> None:
        """Умножение не изменяет операнды"""
        a = Natural._from_limbs([LIMB_MAX, LIMB_MAX])
        b = from_limb(3)
        mul(a, b)
        assert a.to_limbs() == (LIMB_MAX, LIMB_MAX)
        assert b == from_limb(3)

    def test_compound_assignment_rebinds(self) -> None:
        """+= и *= перепривязывают имя, константы не меняются"""
        x = ZERO
        x += SMALL_MAX
        x += ONE
        assert x == Natural._from_limbs([0, 1])
        assert ZERO == from_limb(0)

        y = ONE
        y *= from_limb(6)
        assert y == from_limb(6)
        assert ONE == from_limb(1)

    def test_identity_fast_paths_reuse_operand(self) -> None:
        """x + ZERO и x * ONE возвращают тот же объект"""
        x = Natural._from_limbs([1, 2, 3])
        assert add(x, ZERO) is x
        assert add(ZERO, x) is x
        assert mul(x, ONE) is x
        assert mul(ONE, x) is x

    def test_operators_reject_int(self) -> None:
        """Операторы принимают только Natural"""
        with pytest.raises(TypeError):
            from_limb(1) + 1  # type: ignore[operator]
        with pytest.raises(TypeError):
            from_limb(1) * 2  # type: ignore[operator]


# =============================================================================
# ТЕСТЫ ЛОГИРОВАНИЯ
# =============================================================================


class TestLogging:
    """Тесты DEBUG записей о смене представления"""

    def test_promotion_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Переход SMALL → LARGE пишется в DEBUG"""
        with caplog.at_level(logging.DEBUG, logger="src.core.math.natural"):
            add(SMALL_MAX, ONE)
        assert "promoting to large" in caplog.text

    def test_growth_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Рост LARGE на limb пишется в DEBUG"""
        with caplog.at_level(logging.DEBUG, logger="src.core.math.limb_vectors"):
            add(Natural._from_limbs([LIMB_MAX, LIMB_MAX]), ONE)
        assert "grew to 3 limbs" in caplog.text
