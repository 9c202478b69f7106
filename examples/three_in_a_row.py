"""Example: three performers in a line, each facing the next one."""

import math

from stagelink import AreaConfig, Performer, SearchOptions, print_graph, search

PERFORMERS = [
    Performer.at(1, 0.0, 0.0, 0.1),
    Performer.at(2, 4.0, 0.0, 0.1),
    Performer.at(3, 8.0, 0.0, 0.1),
]


def main() -> None:
    config = AreaConfig(speaking_radius=5.0, hearing_radius=5.0, hearing_spread=math.pi)
    result = search(PERFORMERS, SearchOptions(area_config=config))
    print("Candidates:")
    for candidate in result.candidates:
        print(f"  {candidate}")
    print(print_graph(result.graph, result.score))


if __name__ == "__main__":
    main()
