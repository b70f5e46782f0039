import argparse
import datetime
import json
from typing import Optional

from loguru import logger
from pydantic import ValidationError

from config import YamlConfig
from log_config import setup_logger
from recovery_models import (
    FatigueModel,
    PRProbability,
    Supercompensation,
    UnitConverter,
    VolumeAggregator,
    VolumePredictor,
)
from recovery_models.schemas import MuscleGroup, MuscleStatus, Workout, WorkoutSet
from recovery_service import RecoveryService


def _load_json(path: str):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SystemExit(f"cannot read {path}: {e}")


def load_workouts(path: str) -> list[Workout]:
    """Read a newest-first JSON list of workouts."""
    try:
        return [Workout(**w) for w in _load_json(path)]
    except ValidationError as e:
        raise SystemExit(f"invalid workouts in {path}: {e}")


def load_statuses(path: str) -> list[MuscleStatus]:
    """Read one muscle status object or a list of them."""
    data = _load_json(path)
    if isinstance(data, dict):
        data = [data]
    try:
        return [MuscleStatus(**s) for s in data]
    except ValidationError as e:
        raise SystemExit(f"invalid muscle status in {path}: {e}")


def first_status(path: str) -> MuscleStatus:
    statuses = load_statuses(path)
    if not statuses:
        raise SystemExit(f"no muscle status in {path}")
    return statuses[0]


def _parse_now(value: Optional[str]) -> datetime.datetime:
    if value is None:
        return datetime.datetime.now(datetime.timezone.utc)
    try:
        return datetime.datetime.fromisoformat(value)
    except ValueError as e:
        raise SystemExit(f"invalid --now timestamp {value!r}: {e}")


def _print(data) -> None:
    print(json.dumps(data, indent=2, default=str))


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Muscle recovery model commands")
    parser.add_argument("--settings", default="settings.yaml")
    sub = parser.add_subparsers(dest="cmd", required=True)

    fat = sub.add_parser("fatigue")
    fat.add_argument("--workload", type=float, required=True)
    fat.add_argument("--hours", type=float, required=True)

    sc = sub.add_parser("supercomp")
    sc.add_argument("--status", required=True)
    sc.add_argument("--hours", type=float, required=True)

    pred = sub.add_parser("predict")
    pred.add_argument("--workouts", required=True)
    pred.add_argument("--muscle", choices=[m.value for m in MuscleGroup], required=True)

    pr = sub.add_parser("pr")
    pr.add_argument("--status", required=True)
    pr.add_argument("--workouts", required=True)
    pr.add_argument("--hours", type=float, required=True)

    vol = sub.add_parser("volume")
    vol.add_argument("--sets", required=True)
    vol.add_argument("--type", dest="tracking_type", default=None)

    rep = sub.add_parser("report")
    rep.add_argument("--status", required=True)
    rep.add_argument("--workouts", required=True)
    rep.add_argument("--now", default=None)

    fc = sub.add_parser("forecast")
    fc.add_argument("--status", required=True)
    fc.add_argument("--workouts", required=True)
    fc.add_argument("--now", default=None)
    fc.add_argument("--days", type=int, default=None)

    conv = sub.add_parser("convert")
    conv.add_argument("--distance", type=float, required=True)
    conv.add_argument("--unit", choices=["km", "miles"], required=True)

    args = parser.parse_args(argv)

    try:
        settings = YamlConfig(args.settings).settings()
    except ValueError as e:
        raise SystemExit(f"invalid settings in {args.settings}: {e}")
    setup_logger(settings.log_level, settings.log_file)
    logger.debug(f"Running {args.cmd}")

    if args.cmd == "fatigue":
        _print({"fatigue": FatigueModel.fatigue(args.workload, args.hours)})
    elif args.cmd == "supercomp":
        status = first_status(args.status)
        _print({"supercompensation_score": Supercompensation.score(status, args.hours)})
    elif args.cmd == "predict":
        workouts = load_workouts(args.workouts)
        _print({"predicted_volume": VolumePredictor.predict(workouts, MuscleGroup(args.muscle))})
    elif args.cmd == "pr":
        status = first_status(args.status)
        workouts = load_workouts(args.workouts)
        _print(
            {
                "pr_probability": PRProbability.score(status, workouts, args.hours),
                "factors": PRProbability.factors(status, workouts, args.hours),
            }
        )
    elif args.cmd == "volume":
        sets = [WorkoutSet(**s) for s in _load_json(args.sets)]
        _print({"volume": VolumeAggregator.compute_volume(sets, args.tracking_type)})
    elif args.cmd == "report":
        service = RecoveryService(settings)
        _print(
            service.readiness_reports(
                load_statuses(args.status),
                load_workouts(args.workouts),
                _parse_now(args.now),
            )
        )
    elif args.cmd == "forecast":
        service = RecoveryService(settings)
        workouts = load_workouts(args.workouts)
        now = _parse_now(args.now)
        out = []
        for status in load_statuses(args.status):
            days = service.forecast(status, workouts, now, args.days)
            out.extend(d.model_dump(mode="json") for d in days)
        _print(out)
    elif args.cmd == "convert":
        if args.unit == "km":
            print(f"{args.distance} km = {UnitConverter.km_to_miles(args.distance):.2f} miles")
        else:
            print(f"{args.distance} miles = {UnitConverter.miles_to_km(args.distance):.2f} km")


if __name__ == "__main__":
    main()
