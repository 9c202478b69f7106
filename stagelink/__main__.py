import argparse
import logging
import math
import sys
from typing import List, Optional, Sequence

from stagelink import (
    AreaConfig,
    InvalidGeometryError,
    Performer,
    SearchOptions,
    ValidationError,
    get_area_config,
    print_graph,
    search,
)
from stagelink.demo import DEMO_CONFIG, DEMO_PERFORMERS

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _parse_performer(value: str) -> Performer:
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 4:
        raise argparse.ArgumentTypeError(f"expected ID,X,Y,HEADING (got {value!r})")
    try:
        performer_id = int(parts[0])
        x, y, heading = (float(part) for part in parts[1:])
        return Performer.at(performer_id, x, y, heading)
    except (ValueError, InvalidGeometryError) as exc:
        raise argparse.ArgumentTypeError(f"invalid performer {value!r}: {exc}") from exc


def _area_config(args: argparse.Namespace, base: AreaConfig) -> AreaConfig:
    return AreaConfig(
        speaking_radius=args.speaking_radius if args.speaking_radius is not None else base.speaking_radius,
        speaking_spread=(
            math.radians(args.speaking_spread) if args.speaking_spread is not None else base.speaking_spread
        ),
        hearing_radius=args.hearing_radius if args.hearing_radius is not None else base.hearing_radius,
        hearing_spread=(
            math.radians(args.hearing_spread) if args.hearing_spread is not None else base.hearing_spread
        ),
        ear_offset=args.ear_offset if args.ear_offset is not None else base.ear_offset,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Assign audio connections between stage performers")
    parser.add_argument(
        "--performer",
        action="append",
        type=_parse_performer,
        default=[],
        metavar="ID,X,Y,HEADING",
        help="Performer with heading in radians; repeat for each performer",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Evaluate the built-in demo stage instead of --performer entries",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--workers", type=int, default=1, help="Processes used for construction passes")
    parser.add_argument("--max-anchors", type=int, help="Only anchor passes at the first N performers")
    parser.add_argument(
        "--no-discovery-pass",
        action="store_true",
        help="Skip the pass that applies candidates in discovery order",
    )
    parser.add_argument(
        "--allow-reciprocal",
        action="store_true",
        help="Allow two performers to speak to each other at the same time",
    )
    parser.add_argument("--speaking-radius", type=float)
    parser.add_argument("--speaking-spread", type=float, help="Degrees per side")
    parser.add_argument("--hearing-radius", type=float)
    parser.add_argument("--hearing-spread", type=float, help="Degrees per side")
    parser.add_argument("--ear-offset", type=float)
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    performers: List[Performer] = list(DEMO_PERFORMERS) if args.demo else list(args.performer)
    base = DEMO_CONFIG if args.demo else get_area_config()
    try:
        config = _area_config(args, base)
    except InvalidGeometryError as exc:
        parser.error(str(exc))

    options = SearchOptions(
        max_anchors=args.max_anchors,
        workers=args.workers,
        include_discovery_pass=not args.no_discovery_pass,
        allow_reciprocal=args.allow_reciprocal,
        area_config=config,
    )
    logger.info("Evaluating %d performer(s)", len(performers))
    try:
        result = search(performers, options)
    except ValidationError as exc:
        logger.error("Invalid performers: %s", exc)
        raise SystemExit(2)

    if result is None:
        print("No performers given")
        return

    label = result.best.anchor if result.best.anchor is not None else result.best.strategy
    print(f"Selected pass: {label}")
    print(f"Candidates: {len(result.candidates)}")
    print(print_graph(result.graph, result.score, [p.id for p in performers]))


if __name__ == "__main__":
    main(sys.argv[1:])
