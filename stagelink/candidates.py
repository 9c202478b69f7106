"""Geometric candidate connections between performers."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from .config import AreaConfig, get_area_config
from .geometry import sector_contains, sectors_intersect
from .performer import Performer, hearing_areas, speaking_areas
from .types import SIDES, Connection

logger = logging.getLogger(__name__)


def candidate_connections(
    source: Performer, sink: Performer, config: Optional[AreaConfig] = None
) -> List[Connection]:
    """Return every side pairing over which ``source`` can be heard by ``sink``.

    A pairing ``(source_side, sink_side)`` qualifies when the sink stands in
    the source's speaking sector on ``source_side`` and the source stands in
    the sink's hearing sector on ``sink_side``.  Results are ordered
    left-left, left-right, right-left, right-right.  Slot capacity is not
    considered here.
    """

    if source.id == sink.id:
        return []
    config = config or get_area_config()
    speaking = speaking_areas(source, config)
    hearing = hearing_areas(sink, config)
    found: List[Connection] = []
    for source_side, mouth in zip(SIDES, speaking):
        if not sector_contains(mouth, sink.position):
            continue
        for sink_side, ear in zip(SIDES, hearing):
            if sector_contains(ear, source.position):
                found.append(Connection(source.id, source_side, sink.id, sink_side))
    return found


def connectable(source: Performer, sink: Performer, config: Optional[AreaConfig] = None) -> bool:
    """Coarse audibility check between two performers.

    ``True`` when one of the source's speaking sectors holds the sink and
    overlaps one of the sink's hearing sectors.  Any pair that yields a
    candidate connection is connectable.
    """

    if source.id == sink.id:
        return False
    config = config or get_area_config()
    ears = hearing_areas(sink, config)
    return any(
        sector_contains(mouth, sink.position) and any(sectors_intersect(mouth, ear) for ear in ears)
        for mouth in speaking_areas(source, config)
    )


def all_candidates(performers: Iterable[Performer], config: Optional[AreaConfig] = None) -> List[Connection]:
    """Candidates for every ordered pair of distinct performers.

    Pairs are visited by ascending source id then ascending sink id; this is
    the discovery order used by the optimizer's baseline pass.
    """

    config = config or get_area_config()
    ordered: Sequence[Performer] = sorted(performers, key=lambda p: p.id)
    candidates: List[Connection] = []
    pairs = 0
    for source in ordered:
        for sink in ordered:
            if source.id == sink.id or not connectable(source, sink, config):
                continue
            pairs += 1
            candidates.extend(candidate_connections(source, sink, config))
    logger.info(
        "Found %d candidate connection(s) across %d connectable pair(s) of %d performer(s)",
        len(candidates),
        pairs,
        len(ordered),
    )
    return candidates


__all__ = ["candidate_connections", "connectable", "all_candidates"]
