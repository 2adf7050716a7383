"""
Core exception types for bonding_curve.

These are dependency-free and may be imported by all modules. Every guard in
the engine is a hard precondition: a raised exception means no state changed.
"""

__all__ = [
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


class AmountDomainError(Exception):
    """Raised when inputs violate the non-negative domain or basic preconditions."""
    pass


class InvalidAddressError(Exception):
    """Raised when an account argument is empty or the zero address."""
    pass


class InvariantViolation(Exception):
    """Raised when arithmetic or ledger updates would break core invariants."""
    pass


class SlippageExceededError(Exception):
    """Raised when a realised amount falls outside the caller's min-out/max-in bound.

    Attributes
    ----------
    quoted : int
        The amount the trade would realise against the current ledger.
    limit : int
        The caller-supplied bound that was violated.
    what : str
        Which side of the trade was bounded (e.g. "net_out", "reserve_in").
    """

    def __init__(self, quoted, limit, *, what="amount"):
        super().__init__(
            f"Slippage bound violated for {what}: quoted={quoted}, limit={limit}"
        )
        self.quoted = quoted
        self.limit = limit
        self.what = what


class InsufficientCapacityError(Exception):
    """Raised when a redemption exceeds internal supply or modeled reserve.

    Attributes
    ----------
    requested : int
        The requested burn or reserve amount.
    available : int
        The capacity available on the bounding axis.
    what : str
        Which capacity bound was hit ("internal_supply" or "modeled_reserve").
    """

    def __init__(self, requested, available, *, what):
        super().__init__(
            f"Requested {requested} exceeds {what}={available}"
        )
        self.requested = requested
        self.available = available
        self.what = what


class TransferFailedError(Exception):
    """Raised when a token collaborator rejects a transfer, transfer_from or burn."""
    pass


class ConfigurationError(Exception):
    """Raised when configuration values are invalid (fee rate >= base, zero recipient, ...)."""
    pass


class UnauthorizedError(Exception):
    """Raised when a caller without the admin capability invokes an admin operation."""

    def __init__(self, caller, action):
        super().__init__(f"{caller!r} is not allowed to {action}")
        self.caller = caller
        self.action = action


class AlreadyBootstrappedError(Exception):
    """Raised on a second bootstrap attempt."""
    pass


class NoExcessError(Exception):
    """Raised when a skim finds the real reserve balance at or below the book reserve."""

    def __init__(self, real_reserve, internal_reserve):
        super().__init__(
            f"No excess to skim: real={real_reserve}, internal={internal_reserve}"
        )
        self.real_reserve = real_reserve
        self.internal_reserve = internal_reserve
