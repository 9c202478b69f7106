from .types import Connection, PerformerId, Role, Side, SIDES
from .geometry import (
    InvalidGeometryError,
    Position,
    Sector,
    Vector,
    clockwise_of,
    displacement,
    sector_contains,
    sectors_intersect,
)
from .config import AreaConfig, get_area_config, set_area_config
from .performer import Heading, Performer, hearing_areas, speaking_areas
from .candidates import all_candidates, candidate_connections, connectable
from .capacity import CapacityError, CapacityGraph, SlotState, score_graph
from .validate import ValidationError, validate_performers
from .optimizer import (
    PassResult,
    SearchOptions,
    SearchResult,
    build_pass,
    construction_order,
    evaluate,
    performer_ranking,
    search,
    select_best,
)
from .printer import format_connection, format_slots, print_graph

__all__ = [
    'Connection',
    'PerformerId',
    'Role',
    'Side',
    'SIDES',
    'InvalidGeometryError',
    'Position',
    'Sector',
    'Vector',
    'clockwise_of',
    'displacement',
    'sector_contains',
    'sectors_intersect',
    'AreaConfig',
    'get_area_config',
    'set_area_config',
    'Heading',
    'Performer',
    'hearing_areas',
    'speaking_areas',
    'all_candidates',
    'candidate_connections',
    'connectable',
    'CapacityError',
    'CapacityGraph',
    'SlotState',
    'score_graph',
    'ValidationError',
    'validate_performers',
    'PassResult',
    'SearchOptions',
    'SearchResult',
    'build_pass',
    'construction_order',
    'evaluate',
    'performer_ranking',
    'search',
    'select_best',
    'format_connection',
    'format_slots',
    'print_graph',
]
