"""
Core math modules

Натуральные числа произвольной точности и примитивы машинных слов.
"""

# Limb Arithmetic
from src.core.math.limb_arithmetic import (
    # Limb constants
    LIMB_BASE,
    LIMB_BITS,
    LIMB_MAX,
    # Types
    Limb,
    # Exceptions
    LimbDomainViolation,
    # Primitives
    carrying_add,
    carrying_mul,
    overflowing_add,
    validate_limb,
    widening_mul,
)

# Natural
from src.core.math.natural import (
    ONE,
    ZERO,
    Natural,
    ReprKind,
    add,
    from_limb,
    mul,
    natural_product,
    natural_sum,
)

__all__ = [
    # Limb Arithmetic — Constants
    "LIMB_BASE",
    "LIMB_BITS",
    "LIMB_MAX",
    # Limb Arithmetic — Types
    "Limb",
    # Limb Arithmetic — Exceptions
    "LimbDomainViolation",
    # Limb Arithmetic — Primitives
    "carrying_add",
    "carrying_mul",
    "overflowing_add",
    "validate_limb",
    "widening_mul",
    # Natural — Constants
    "ONE",
    "ZERO",
    # Natural — Types
    "Natural",
    "ReprKind",
    # Natural — Functions
    "add",
    "from_limb",
    "mul",
    "natural_product",
    "natural_sum",
]
