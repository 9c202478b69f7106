import math

from . import AreaConfig, Performer, SearchOptions, print_graph, search

# a semicircle of performers facing the middle of the stage
DEMO_PERFORMERS = [
    Performer.at(1, -6.0, 0.0, 0.1),
    Performer.at(2, -4.2, 4.2, -math.pi / 4),
    Performer.at(3, 0.0, 6.0, -math.pi / 2 + 0.1),
    Performer.at(4, 4.2, 4.2, -3 * math.pi / 4),
    Performer.at(5, 6.0, 0.0, math.pi - 0.1),
]

DEMO_CONFIG = AreaConfig(speaking_radius=12.0, hearing_radius=12.0)


def run():
    result = search(DEMO_PERFORMERS, SearchOptions(area_config=DEMO_CONFIG))
    print(f"Candidates: {len(result.candidates)}")
    for candidate in result.candidates:
        print(f"  {candidate}")
    print("Passes:")
    for entry in result.passes:
        label = entry.anchor if entry.anchor is not None else entry.strategy
        print(f"  {label}: score={entry.score} applied={entry.applied} skipped={entry.skipped}")
    print(print_graph(result.graph, result.score, [p.id for p in DEMO_PERFORMERS]))


if __name__ == "__main__":
    run()
