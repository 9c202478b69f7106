from typing import Iterable, Optional

from .capacity import CapacityGraph
from .types import SIDES, Connection, Role


def format_connection(connection: Connection) -> str:
    return str(connection)


def _slot_str(value: Optional[int]) -> str:
    return "-" if value is None else str(value)


def format_slots(graph: CapacityGraph, performer: int) -> str:
    state = graph.slots(performer)
    mouth = "/".join(_slot_str(state.get(Role.MOUTH, side)) for side in SIDES)
    ear = "/".join(_slot_str(state.get(Role.EAR, side)) for side in SIDES)
    return f"{performer}: mouth L/R={mouth} ear L/R={ear}"


def print_graph(graph: CapacityGraph, score: Optional[int] = None, performers: Iterable[int] = ()) -> str:
    """Render ``graph`` as text: the score, one line per connection, then slots.

    Performers listed in ``performers`` are shown even when they hold no slot.
    """

    lines = []
    if score is not None:
        lines.append(f"score {score}")
    connections = graph.connections()
    lines.append(f"connections ({len(connections)}):")
    lines.extend(f"  {format_connection(c)}" for c in connections)
    ids = sorted(set(graph.performer_ids()) | set(performers))
    if ids:
        lines.append("slots:")
        lines.extend(f"  {format_slots(graph, pid)}" for pid in ids)
    return "\n".join(lines)
