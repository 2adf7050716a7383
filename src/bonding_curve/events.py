"""
Structured domain events emitted by the engine.

Events are plain frozen records handed to an EventSink; indexing and
observability live in whatever consumes the sink. Nothing in the pricing
path reads them back.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol, Type, TypeVar


@dataclass(frozen=True)
class Bought:
    account: str
    reserve_in: int
    gross_out: int
    fee: int
    net_out: int
    bootstrap: bool = False


@dataclass(frozen=True)
class Sold:
    account: str
    gross_in: int
    fee: int
    burn: int
    reserve_out: int


@dataclass(frozen=True)
class FeeConfigUpdated:
    """One admin change; `side` is "buy", "sell" or "recipient"."""
    side: str
    rate: int
    base: int
    recipient: str


@dataclass(frozen=True)
class ExcessSkimmed:
    recipient: str
    amount: int


class EventSink(Protocol):
    def emit(self, event: object) -> None: ...


E = TypeVar("E")


class EventLog:
    """In-memory sink that keeps every event in emission order."""

    def __init__(self) -> None:
        self.events: List[object] = []

    def emit(self, event: object) -> None:
        self.events.append(event)

    def of_type(self, cls: Type[E]) -> List[E]:
        return [e for e in self.events if isinstance(e, cls)]

    def last(self) -> object:
        return self.events[-1] if self.events else None

    def __len__(self) -> int:
        return len(self.events)


__all__ = [
    "Bought",
    "Sold",
    "FeeConfigUpdated",
    "ExcessSkimmed",
    "EventSink",
    "EventLog",
]
