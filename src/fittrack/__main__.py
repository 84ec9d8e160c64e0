"""
Command-line entrypoint.

Usage:
    python -m fittrack replay ride.fit --type bike   # replay a FIT file, print summary
    python -m fittrack replay run.fit --save         # ...and store it
    python -m fittrack history --limit 10            # recent stored activities
    python -m fittrack serve                         # tracking API under uvicorn
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from fittrack.config import get_settings
from fittrack.tracking.models import ActivityType

logger = logging.getLogger(__name__)


def _run_replay(path: Path, activity_type: ActivityType, save: bool) -> int:
    from fittrack.analysis.display import format_summary
    from fittrack.sources.fit_source import FitParseError, read_fit_samples
    from fittrack.tracking.replay import replay_samples

    try:
        samples = read_fit_samples(path)
    except FitParseError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("Replaying %d samples from %s", len(samples), path.name)
    stats, track = replay_samples(samples, activity_type)
    print(format_summary(stats, activity_type))

    if save:
        from sqlmodel import Session

        from fittrack.db.engine import get_engine
        from fittrack.db.repository import save_activity

        with Session(get_engine()) as session:
            activity = save_activity(
                session, stats, track, activity_type, user_id=get_settings().user_id
            )
        print(f"Saved as activity {activity.id}")
    return 0


def _run_history(limit: int) -> int:
    from sqlmodel import Session

    from fittrack.analysis.display import format_distance_km, format_duration, format_pace
    from fittrack.db.engine import get_engine
    from fittrack.db.repository import get_recent_activities

    with Session(get_engine()) as session:
        activities = get_recent_activities(session, limit=limit, user_id=get_settings().user_id)

    if not activities:
        print("No activities recorded yet.")
        return 0
    for act in activities:
        print(
            f"{act.id:>4}  {act.recorded_at:%Y-%m-%d %H:%M}  {act.activity_type:<5}"
            f"  {format_distance_km(act.distance_km):>7} km"
            f"  {format_duration(act.duration_sec):>8}"
            f"  {format_pace(act.pace_min_per_km):>9}"
            f"  {act.calories_kcal:>5} kcal"
        )
    return 0


def _run_serve(host: Optional[str], port: Optional[int]) -> int:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "fittrack.api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fittrack", description="GPS activity tracking")
    sub = parser.add_subparsers(dest="command", required=True)

    replay = sub.add_parser("replay", help="Replay a FIT file through the tracking engine")
    replay.add_argument("path", type=Path)
    replay.add_argument(
        "--type",
        dest="activity_type",
        type=ActivityType,
        choices=list(ActivityType),
        metavar="{run,bike,walk}",
        default=ActivityType.RUN,
        help="Activity type (sets the calorie rate)",
    )
    replay.add_argument("--save", action="store_true", help="Store the result in the database")

    history = sub.add_parser("history", help="List recent stored activities")
    history.add_argument("--limit", type=int, default=5)

    serve = sub.add_parser("serve", help="Run the tracking API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "replay":
        return _run_replay(args.path, args.activity_type, args.save)
    if args.command == "history":
        return _run_history(args.limit)
    return _run_serve(args.host, args.port)


if __name__ == "__main__":
    sys.exit(main())
