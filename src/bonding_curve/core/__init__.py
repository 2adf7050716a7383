"""
Bonding Curve Core
==================

Unified exports for the wad-scaled integer primitives shared by the engine.
All arithmetic is performed on plain non-negative ints at 18 decimals with
fixed truncation rules. Decimal helpers are provided *only* for I/O.
"""

# NOTE:
#   `fixed_point` is exported as a module (fp.mul, fp.pow, ...) because its
#   `pow` would shadow the builtin if star-imported.

# Integer-domain constants
from .constants import (
    WAD_DECIMALS,
    UNIT,
    HALF_UNIT,
    PRICE_EXPONENT,
    SUPPLY_EXPONENT,
    AREA_NUMERATOR,
    AREA_DENOMINATOR,
    REQUIRED_RESERVE_DECIMALS,
    ZERO_ADDRESS,
    WAD_QUANTUM,
)

# Fixed-point arithmetic
from . import fixed_point
from .fixed_point import (
    ceil_div,
    floor_div,
    mul_div,
    mul_div_up,
)

# Decimal formatting helpers (non-core arithmetic)
from .fmt import (
    DEFAULT_DECIMAL_PRECISION,
    fmt_dec,
    wad_to_decimal,
    wad_from_decimal_in,
    wad_from_decimal_out,
    wad,
)

# Value objects
from .datatypes import (
    LedgerSnapshot,
    BuyResult,
    SellResult,
)

# Configuration
from .config import EngineConfig, DEFAULT_ENGINE_CFG, DEFAULT_FEE_RECIPIENT

# Exceptions
from .exc import (
    AmountDomainError,
    InvalidAddressError,
    InvariantViolation,
    SlippageExceededError,
    InsufficientCapacityError,
    TransferFailedError,
    ConfigurationError,
    UnauthorizedError,
    AlreadyBootstrappedError,
    NoExcessError,
)

__all__ = [
    # constants
    "WAD_DECIMALS",
    "UNIT",
    "HALF_UNIT",
    "PRICE_EXPONENT",
    "SUPPLY_EXPONENT",
    "AREA_NUMERATOR",
    "AREA_DENOMINATOR",
    "REQUIRED_RESERVE_DECIMALS",
    "ZERO_ADDRESS",
    "WAD_QUANTUM",
    # fixed point
    "fixed_point",
    "ceil_div",
    "floor_div",
    "mul_div",
    "mul_div_up",
    # formatting
    "DEFAULT_DECIMAL_PRECISION",
    "fmt_dec",
    "wad_to_decimal",
    "wad_from_decimal_in",
    "wad_from_decimal_out",
    "wad",
    # value objects
    "LedgerSnapshot",
    "BuyResult",
    "SellResult",
    # configuration
    "EngineConfig",
    "DEFAULT_ENGINE_CFG",
    "DEFAULT_FEE_RECIPIENT",
    # exceptions
    "AmountDomainError",
    "InvalidAddressError",
    "InvariantViolation",
    "SlippageExceededError",
    "InsufficientCapacityError",
    "TransferFailedError",
    "ConfigurationError",
    "UnauthorizedError",
    "AlreadyBootstrappedError",
    "NoExcessError",
]
