"""
Admin capability check applied at the engine's call boundary.

Full role administration is an external concern; the engine only needs to
ask whether a caller holds the admin capability.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Set

from .core.constants import ZERO_ADDRESS
from .core.exc import InvalidAddressError, UnauthorizedError


@dataclass
class AccessControl:
    """Set of accounts holding the admin capability."""

    admins: Set[str] = field(default_factory=set)

    @classmethod
    def with_admins(cls, admins: Iterable[str]) -> "AccessControl":
        ac = cls()
        for a in admins:
            ac.grant(a)
        return ac

    def grant(self, account: str) -> None:
        if not account or account == ZERO_ADDRESS:
            raise InvalidAddressError("cannot grant admin to an empty or zero address")
        self.admins.add(account)

    def revoke(self, account: str) -> None:
        self.admins.discard(account)

    def is_admin(self, account: str) -> bool:
        return account in self.admins

    def require_admin(self, caller: str, action: str = "perform admin operation") -> None:
        if not self.is_admin(caller):
            raise UnauthorizedError(caller, action)


__all__ = ["AccessControl"]
