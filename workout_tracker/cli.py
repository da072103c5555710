from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .storage.codec import WorkoutCodec
from .storage.data_models import WorkoutType
from .storage.export import export_workouts_csv, workouts_to_dataframe
from .storage.local_store import LocalStorage
from .utils.config import TrackerConfig, get_config

logger = logging.getLogger(__name__)


def _codec(config: TrackerConfig) -> WorkoutCodec:
    return WorkoutCodec(LocalStorage(config.storage.data_dir), config.storage.storage_key)


def cmd_serve(args, config: TrackerConfig) -> int:
    from .app import create_app

    host = args.host or config.server.host
    port = args.port or config.server.port
    app = create_app(config)
    print(f"🗺️  Serving workout map on http://{host}:{port}")
    app.run(debug=args.debug or config.server.debug, host=host, port=port)
    return 0


def cmd_list(args, config: TrackerConfig) -> int:
    workouts = _codec(config).load()
    if not workouts:
        print("No workouts stored.")
        return 0
    df = workouts_to_dataframe(workouts)
    print(df.to_string(index=False))
    print(f"\n{len(workouts)} workouts")
    return 0


def cmd_add(args, config: TrackerConfig) -> int:
    from .app import create_headless_tracker

    coords = (args.lat, args.lng)
    tracker = create_headless_tracker(coords=coords, config=config)
    tracker.handle_map_click(coords)
    tracker.form.update(
        workout_type=args.type,
        distance=args.distance,
        duration=args.duration,
        cadence=args.cadence,
        elevation=args.elevation,
    )

    workout = tracker.submit_workout()
    if workout is None:
        print(f"❌ {tracker.notifier.alert_message or 'Workout not recorded'}")
        return 1

    entry = tracker.presenter.list_view.entries[-1]
    summary = ", ".join(f"{d.value} {d.unit}" for d in entry.details)
    print(f"✅ {entry.title}: {summary} (id {workout.id})")
    return 0


def cmd_export(args, config: TrackerConfig) -> int:
    workouts = _codec(config).load()
    export_workouts_csv(workouts, args.path)
    print(f"Wrote {len(workouts)} workouts to {args.path}")
    return 0


def cmd_reset(args, config: TrackerConfig) -> int:
    if not args.yes:
        print("Refusing to delete stored workouts without --yes")
        return 1
    if not _codec(config).clear():
        print("❌ Could not clear stored workouts")
        return 1
    print("🗑️  Stored workouts cleared")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="workout-tracker", description="Map-based log of runs and rides")
    parser.add_argument("--data-dir", help="Directory holding stored workouts (default: from config)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the web app")
    serve.add_argument("--host", help="Bind address")
    serve.add_argument("--port", type=int, help="Port")
    serve.add_argument("--debug", action="store_true", help="Dash debug mode")
    serve.set_defaults(func=cmd_serve)

    lst = sub.add_parser("list", help="Print stored workouts")
    lst.set_defaults(func=cmd_list)

    add = sub.add_parser("add", help="Record a workout at a coordinate")
    add.add_argument("--type", required=True, choices=[t.value for t in WorkoutType])
    add.add_argument("--lat", type=float, required=True, help="Latitude")
    add.add_argument("--lng", type=float, required=True, help="Longitude")
    add.add_argument("--distance", required=True, help="Distance in km")
    add.add_argument("--duration", required=True, help="Duration in minutes")
    add.add_argument("--cadence", default="", help="Steps per minute (running)")
    add.add_argument("--elevation", default="", help="Elevation gain in meters (cycling)")
    add.set_defaults(func=cmd_add)

    export = sub.add_parser("export", help="Write stored workouts to CSV")
    export.add_argument("path", help="Output CSV path")
    export.set_defaults(func=cmd_export)

    reset = sub.add_parser("reset", help="Delete every stored workout")
    reset.add_argument("--yes", action="store_true", help="Confirm deletion")
    reset.set_defaults(func=cmd_reset)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    config = get_config().load_from_env()
    if args.data_dir:
        config.update_storage_settings(data_dir=args.data_dir)

    return args.func(args, config)


if __name__ == "__main__":
    sys.exit(main())
