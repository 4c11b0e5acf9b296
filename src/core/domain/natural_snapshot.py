"""
NaturalSnapshot — отладочный снапшот натурального числа

Immutable Pydantic модель внутреннего представления Natural:
форма хранения, little-endian limb и длина в битах.
Используется тестами и отладочным выводом.
Это отладочный вид, а не формат хранения.
"""

from pydantic import BaseModel, Field, field_validator

from src.core.math.limb_arithmetic import LIMB_BITS, Limb
from src.core.math.natural import Natural, ReprKind


# =============================================================================
# SNAPSHOT MODEL
# =============================================================================


class NaturalSnapshot(BaseModel):
    """
    Снапшот представления Natural.

    Инварианты представления:
    - SMALL: ровно один limb
    - LARGE: два и более limb, старший limb ненулевой
    - bit_length согласован с limbs
    """

    kind: ReprKind = Field(..., description="Форма хранения (SMALL/LARGE)")
    limbs: tuple[Limb, ...] = Field(
        ..., min_length=1, description="Limb в порядке little-endian"
    )
    bit_length: int = Field(..., ge=0, description="Длина значения в битах")

    model_config = {"frozen": True}

    @field_validator("limbs")
    @classmethod
    def validate_limbs_match_kind(cls, v: tuple[int, ...], info) -> tuple[int, ...]:
        """Проверка формы: количество limb и ненулевой старший limb"""
        kind = info.data.get("kind")
        if kind is ReprKind.SMALL and len(v) != 1:
            raise ValueError(f"SMALL natural must have exactly 1 limb, got {len(v)}")
        if kind is ReprKind.LARGE:
            if len(v) < 2:
                raise ValueError(f"LARGE natural must have at least 2 limbs, got {len(v)}")
            if v[-1] == 0:
                raise ValueError("LARGE natural must not have a zero most-significant limb")
        return v

    @field_validator("bit_length")
    @classmethod
    def validate_bit_length_matches_limbs(cls, v: int, info) -> int:
        """Проверка, что bit_length соответствует limbs"""
        if "limbs" in info.data:
            limbs = info.data["limbs"]
            expected = (len(limbs) - 1) * LIMB_BITS + limbs[-1].bit_length()
            if v != expected:
                raise ValueError(f"bit_length {v} does not match limbs (expected {expected})")
        return v

    @classmethod
    def from_natural(cls, value: Natural) -> "NaturalSnapshot":
        """Снапшот текущего представления value."""
        return cls(
            kind=value.kind,
            limbs=value.to_limbs(),
            bit_length=value.bit_length(),
        )
