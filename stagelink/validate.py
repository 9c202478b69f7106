from typing import Iterable, List

from .performer import Performer


class ValidationError(Exception):
    pass


def validate_performers(performers: Iterable[Performer]) -> List[Performer]:
    """Check a performer collection and return it sorted by id.

    Coordinates and headings are already checked by the geometry types, so
    this only looks at the collection itself.
    """

    seen = {}
    for p in performers:
        if not isinstance(p, Performer):
            raise ValidationError(f'expected Performer instances, got {type(p).__name__}')
        if isinstance(p.id, bool) or not isinstance(p.id, int):
            raise ValidationError(f'performer id must be an integer (got {p.id!r})')
        if p.id in seen:
            if seen[p.id] == p:
                continue
            raise ValidationError(f'performer id {p.id} is used by more than one performer')
        seen[p.id] = p
    return [seen[pid] for pid in sorted(seen)]
