from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

PerformerId = int


class Side(Enum):
    LEFT = "left"
    RIGHT = "right"

    @property
    def short(self) -> str:
        return "L" if self is Side.LEFT else "R"


class Role(Enum):
    """The two slot families of a performer: what it says and what it hears."""

    MOUTH = "mouth"
    EAR = "ear"


SIDES: Tuple[Side, Side] = (Side.LEFT, Side.RIGHT)


@dataclass(frozen=True)
class Connection:
    """Directed link: ``source`` speaks with its ``source_side`` mouth slot and
    ``sink`` hears it with its ``sink_side`` ear slot."""

    source: PerformerId
    source_side: Side
    sink: PerformerId
    sink_side: Side

    def __str__(self) -> str:
        return f"{self.source}:{self.source_side.short} -> {self.sink}:{self.sink_side.short}"


__all__ = [
    "PerformerId",
    "Side",
    "Role",
    "SIDES",
    "Connection",
]
