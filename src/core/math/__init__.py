"""
Core math modules

Целые произвольной точности (BigInt) и несократимые дроби (Fraction).
"""

# Errors
from src.core.math.errors import (
    InvariantViolation,
    NumberParseError,
    ZeroDivisorViolation,
)

# Block storage
from src.core.math.blocks import (
    BLOCK_BASE,
    BLOCK_BITS,
    BLOCK_MASK,
    BlockVector,
)

# BigInt engine
from src.core.math.bigint import (
    BigInt,
    BlockDivisionResult,
    DivisionResult,
    compare,
    compare_absolute,
    divide,
    divide_by_block,
    gcd,
    to_decimal_string,
)

# Fraction layer
from src.core.math.fraction import (
    Fraction,
    FractionOperation,
    combine,
)

__all__ = [
    # Errors
    "InvariantViolation",
    "NumberParseError",
    "ZeroDivisorViolation",
    # Block storage
    "BLOCK_BASE",
    "BLOCK_BITS",
    "BLOCK_MASK",
    "BlockVector",
    # BigInt — Types
    "BigInt",
    "BlockDivisionResult",
    "DivisionResult",
    # BigInt — Functions
    "compare",
    "compare_absolute",
    "divide",
    "divide_by_block",
    "gcd",
    "to_decimal_string",
    # Fraction — Types
    "Fraction",
    "FractionOperation",
    # Fraction — Functions
    "combine",
]
