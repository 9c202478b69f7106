"""Per-performer slot bookkeeping for established connections."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterator, List, Optional, Tuple

from .logging_utils import apply_debug_logging
from .types import SIDES, Connection, PerformerId, Role, Side

logger = logging.getLogger(__name__)


class CapacityError(RuntimeError):
    """Raised when a connection would overwrite an occupied slot or the slot
    accounting of a graph is inconsistent."""


_SLOT_FIELDS: Dict[Tuple[Role, Side], str] = {
    (Role.MOUTH, Side.LEFT): "mouth_left",
    (Role.MOUTH, Side.RIGHT): "mouth_right",
    (Role.EAR, Side.LEFT): "ear_left",
    (Role.EAR, Side.RIGHT): "ear_right",
}


@dataclass
class SlotState:
    """The four single-occupant slots of one performer."""

    mouth_left: Optional[PerformerId] = None
    mouth_right: Optional[PerformerId] = None
    ear_left: Optional[PerformerId] = None
    ear_right: Optional[PerformerId] = None

    def get(self, role: Role, side: Side) -> Optional[PerformerId]:
        return getattr(self, _SLOT_FIELDS[(role, side)])

    def occupy(self, role: Role, side: Side, peer: PerformerId) -> None:
        field_name = _SLOT_FIELDS[(role, side)]
        current = getattr(self, field_name)
        if current is not None:
            raise CapacityError(f"{field_name} slot already holds performer {current}")
        setattr(self, field_name, peer)

    def occupied(self, role: Role) -> int:
        return sum(1 for side in SIDES if self.get(role, side) is not None)

    def holds(self, peer: PerformerId, role: Optional[Role] = None) -> bool:
        roles = (role,) if role is not None else (Role.MOUTH, Role.EAR)
        return any(self.get(r, side) == peer for r in roles for side in SIDES)


_EMPTY = SlotState()


class CapacityGraph:
    """Slot occupancy of every performer taking part in at least one connection.

    Performers without an entry have four empty slots.  ``connect`` is the only
    mutating operation and never overwrites a slot.

    By default a pair of performers may share a single connection: once ``a``
    speaks to ``b``, ``b`` cannot also speak to ``a``.  With
    ``allow_reciprocal=True`` only duplicates in the same direction are
    refused.
    """

    def __init__(self, *, allow_reciprocal: bool = False) -> None:
        self.allow_reciprocal = allow_reciprocal
        self._slots: Dict[PerformerId, SlotState] = {}

    def __repr__(self) -> str:
        # plain attribute access: methods of this class are wrapped by the debug tracer
        mouths = sum(
            1 for state in self._slots.values() for name in ("mouth_left", "mouth_right") if getattr(state, name) is not None
        )
        return (
            f"CapacityGraph(performers={len(self._slots)}, connections={mouths}, "
            f"allow_reciprocal={self.allow_reciprocal})"
        )

    def _state(self, performer: PerformerId) -> SlotState:
        return self._slots.get(performer, _EMPTY)

    def infeasibility(self, candidate: Connection) -> Optional[str]:
        """Return why ``candidate`` cannot be connected, or ``None`` if it can."""

        if candidate.source == candidate.sink:
            return "a performer cannot connect to itself"
        source = self._state(candidate.source)
        sink = self._state(candidate.sink)
        if source.get(Role.MOUTH, candidate.source_side) is not None:
            return f"mouth {candidate.source_side.value} slot of performer {candidate.source} is occupied"
        if sink.get(Role.EAR, candidate.sink_side) is not None:
            return f"ear {candidate.sink_side.value} slot of performer {candidate.sink} is occupied"
        source_role = Role.MOUTH if self.allow_reciprocal else None
        sink_role = Role.EAR if self.allow_reciprocal else None
        if source.holds(candidate.sink, source_role):
            return f"performer {candidate.source} is already connected to performer {candidate.sink}"
        if sink.holds(candidate.source, sink_role):
            return f"performer {candidate.sink} is already connected to performer {candidate.source}"
        return None

    def is_feasible(self, candidate: Connection) -> bool:
        return self.infeasibility(candidate) is None

    def connect(self, candidate: Connection) -> None:
        """Reserve the source's mouth slot and the sink's ear slot for ``candidate``."""

        reason = self.infeasibility(candidate)
        if reason is not None:
            raise CapacityError(f"cannot connect {candidate}: {reason}")
        self._slots.setdefault(candidate.source, SlotState()).occupy(
            Role.MOUTH, candidate.source_side, candidate.sink
        )
        self._slots.setdefault(candidate.sink, SlotState()).occupy(
            Role.EAR, candidate.sink_side, candidate.source
        )

    def connection_count(self) -> int:
        """Number of established connections (occupied mouth slots)."""

        return sum(state.occupied(Role.MOUTH) for state in self._slots.values())

    def ear_count(self) -> int:
        return sum(state.occupied(Role.EAR) for state in self._slots.values())

    def slots(self, performer: PerformerId) -> SlotState:
        return replace(self._state(performer))

    def performer_ids(self) -> List[PerformerId]:
        return sorted(self._slots)

    def peers(self, performer: PerformerId) -> List[PerformerId]:
        state = self._state(performer)
        found = []
        for role in (Role.MOUTH, Role.EAR):
            for side in SIDES:
                peer = state.get(role, side)
                if peer is not None and peer not in found:
                    found.append(peer)
        return found

    def connections(self) -> List[Connection]:
        """Established connections, by ascending source id then source side."""

        result: List[Connection] = []
        for source in sorted(self._slots):
            state = self._slots[source]
            for source_side in SIDES:
                sink = state.get(Role.MOUTH, source_side)
                if sink is None:
                    continue
                sink_state = self._state(sink)
                sink_side = next(side for side in SIDES if sink_state.get(Role.EAR, side) == source)
                result.append(Connection(source, source_side, sink, sink_side))
        return result

    def __iter__(self) -> Iterator[Connection]:
        return iter(self.connections())

    def copy(self) -> "CapacityGraph":
        clone = CapacityGraph(allow_reciprocal=self.allow_reciprocal)
        clone._slots = {pid: replace(state) for pid, state in self._slots.items()}
        return clone


def score_graph(graph: CapacityGraph) -> int:
    """Score a graph by its number of connections.

    Each connection holds exactly one mouth slot and one ear slot, so the two
    tallies must agree; a mismatch means the graph was corrupted.
    """

    mouths = graph.connection_count()
    ears = graph.ear_count()
    if mouths != ears:
        raise CapacityError(f"slot accounting mismatch: {mouths} mouth slot(s) vs {ears} ear slot(s)")
    return mouths


apply_debug_logging(globals(), logger=logger, skip=("SlotState",))


__all__ = ["CapacityError", "SlotState", "CapacityGraph", "score_graph"]
