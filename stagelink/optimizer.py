"""Multi-anchor greedy search for a high-scoring capacity graph.

Picking the best subset of candidate connections is a side-constrained
b-matching problem.  The search below does not solve it exactly: it replays
the candidate list once per anchor performer, each time in an order grown
outward from that anchor, keeps every candidate that is still feasible, and
returns the best graph found.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import breadth_first_order

from .candidates import all_candidates
from .capacity import CapacityGraph, score_graph
from .config import AreaConfig, get_area_config
from .logging_utils import apply_debug_logging
from .performer import Performer
from .types import Connection, PerformerId
from .validate import validate_performers

logger = logging.getLogger(__name__)

ANCHOR = "anchor"
DISCOVERY = "discovery"


@dataclass
class SearchOptions:
    """Optimizer knobs."""

    max_anchors: Optional[int] = None
    workers: int = 1
    include_discovery_pass: bool = True
    allow_reciprocal: bool = False
    area_config: Optional[AreaConfig] = None


@dataclass
class PassResult:
    strategy: str
    anchor: Optional[PerformerId]
    graph: CapacityGraph
    score: int
    applied: int
    skipped: int


@dataclass
class SearchResult:
    best: PassResult
    passes: List[PassResult] = field(default_factory=list)
    candidates: List[Connection] = field(default_factory=list)

    @property
    def graph(self) -> CapacityGraph:
        return self.best.graph

    @property
    def score(self) -> int:
        return self.best.score


@dataclass
class _PassJob:
    strategy: str
    anchor: Optional[PerformerId]
    performers: Tuple[Performer, ...]
    candidates: Tuple[Connection, ...]
    allow_reciprocal: bool


def performer_ranking(
    anchor: PerformerId, performers: Sequence[Performer], candidates: Sequence[Connection]
) -> Dict[PerformerId, int]:
    """Rank performers by how early an anchored construction reaches them.

    The anchor's component of the (undirected) candidate graph comes first in
    breadth-first order.  Everyone else follows by distance from the anchor,
    ties by id.
    """

    index = {p.id: i for i, p in enumerate(performers)}
    if anchor not in index:
        raise KeyError(f"Unknown anchor performer {anchor}")
    n = len(performers)
    rows = np.fromiter((index[c.source] for c in candidates), dtype=np.int64, count=len(candidates))
    cols = np.fromiter((index[c.sink] for c in candidates), dtype=np.int64, count=len(candidates))
    adjacency = csr_matrix((np.ones(len(candidates)), (rows, cols)), shape=(n, n))
    start = index[anchor]
    reached = [int(i) for i in breadth_first_order(adjacency, start, directed=False, return_predecessors=False)]

    xs = np.array([p.position.x for p in performers], dtype=float)
    ys = np.array([p.position.y for p in performers], dtype=float)
    distances = np.hypot(xs - xs[start], ys - ys[start])
    reached_set = set(reached)
    rest = sorted(
        (i for i in range(n) if i not in reached_set),
        key=lambda i: (float(distances[i]), performers[i].id),
    )
    return {performers[i].id: rank for rank, i in enumerate(reached + rest)}


def construction_order(
    anchor: PerformerId, performers: Sequence[Performer], candidates: Sequence[Connection]
) -> List[Connection]:
    """Order ``candidates`` for a construction pass anchored at ``anchor``.

    Candidates touching better-ranked performers come first; the discovery
    position breaks remaining ties.
    """

    ranking = performer_ranking(anchor, performers, candidates)

    def key(item: Tuple[int, Connection]) -> Tuple[int, int, int]:
        position, candidate = item
        ranks = (ranking[candidate.source], ranking[candidate.sink])
        return (min(ranks), max(ranks), position)

    return [candidate for _, candidate in sorted(enumerate(candidates), key=key)]


def build_pass(ordered: Iterable[Connection], *, allow_reciprocal: bool = False) -> Tuple[CapacityGraph, int, int]:
    """Greedily connect ``ordered`` candidates into a fresh graph.

    Returns the graph with the number of applied and skipped candidates.
    """

    graph = CapacityGraph(allow_reciprocal=allow_reciprocal)
    applied = skipped = 0
    for candidate in ordered:
        if graph.is_feasible(candidate):
            graph.connect(candidate)
            applied += 1
        else:
            skipped += 1
    return graph, applied, skipped


def _run_pass(job: _PassJob) -> PassResult:
    if job.strategy == ANCHOR:
        ordered: Sequence[Connection] = construction_order(job.anchor, job.performers, job.candidates)
    else:
        ordered = job.candidates
    graph, applied, skipped = build_pass(ordered, allow_reciprocal=job.allow_reciprocal)
    score = score_graph(graph)
    logger.debug(
        "Pass strategy=%s anchor=%s score=%d applied=%d skipped=%d",
        job.strategy,
        job.anchor,
        score,
        applied,
        skipped,
    )
    return PassResult(
        strategy=job.strategy,
        anchor=job.anchor,
        graph=graph,
        score=score,
        applied=applied,
        skipped=skipped,
    )


def select_best(passes: Sequence[PassResult]) -> PassResult:
    """Return the highest-scoring pass; the earliest one wins a tie."""

    if not passes:
        raise ValueError("select_best requires at least one pass")
    best = passes[0]
    for result in passes[1:]:
        if result.score > best.score:
            best = result
    return best


def search(performers: Iterable[Performer], options: Optional[SearchOptions] = None) -> Optional[SearchResult]:
    """Search for the capacity graph with the most connections.

    One pass runs per anchor, anchors taken by ascending performer id and
    capped at ``options.max_anchors``.  The discovery-order pass, when
    enabled, runs last so it only replaces an anchored result it strictly
    beats.  Returns ``None`` for an empty performer collection.
    """

    options = options or SearchOptions()
    ordered = validate_performers(performers)
    if not ordered:
        logger.info("No performers to evaluate")
        return None

    config = options.area_config or get_area_config()
    candidates = tuple(all_candidates(ordered, config))
    anchors = [p.id for p in ordered]
    if options.max_anchors is not None:
        anchors = anchors[: max(1, int(options.max_anchors))]

    frozen = tuple(ordered)
    jobs = [_PassJob(ANCHOR, anchor, frozen, candidates, options.allow_reciprocal) for anchor in anchors]
    if options.include_discovery_pass:
        jobs.append(_PassJob(DISCOVERY, None, frozen, candidates, options.allow_reciprocal))

    workers = max(1, int(options.workers))
    logger.info(
        "Running %d construction pass(es) over %d candidate(s) with %d worker(s)",
        len(jobs),
        len(candidates),
        workers,
    )
    if workers > 1 and len(jobs) > 1:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            passes = list(executor.map(_run_pass, jobs))
    else:
        passes = [_run_pass(job) for job in jobs]

    best = select_best(passes)
    logger.info(
        "Best pass strategy=%s anchor=%s score=%d",
        best.strategy,
        best.anchor,
        best.score,
    )
    return SearchResult(best=best, passes=passes, candidates=list(candidates))


def evaluate(
    performers: Iterable[Performer], options: Optional[SearchOptions] = None
) -> Optional[Tuple[CapacityGraph, int]]:
    """Return the best ``(graph, score)`` for ``performers``, or ``None`` if empty."""

    result = search(performers, options)
    if result is None:
        return None
    return result.graph, result.score


apply_debug_logging(globals(), logger=logger)


__all__ = [
    "SearchOptions",
    "PassResult",
    "SearchResult",
    "performer_ranking",
    "construction_order",
    "build_pass",
    "select_best",
    "search",
    "evaluate",
]
