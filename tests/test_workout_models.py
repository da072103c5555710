from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from workout_tracker.metrics import calc_pace, calc_speed, derive_metric
from workout_tracker.storage.data_models import (
    CyclingDetails,
    RunningDetails,
    WorkoutType,
    create_cycling,
    create_running,
    create_workout,
    create_workout_id,
)

from conftest import BASE_TIMESTAMP_MS


def test_running_scenario_pace():
    workout = create_running((51.5, -0.1), 5, 25, 180, timestamp_ms=BASE_TIMESTAMP_MS)
    assert workout.type == WorkoutType.RUNNING
    assert isinstance(workout.details, RunningDetails)
    assert workout.details.pace_min_per_km == 5.0
    assert workout.details.cadence_spm == 180
    assert workout.coords == (51.5, -0.1)


def test_cycling_scenario_speed():
    workout = create_cycling((48.8, 2.3), 20, 60, 300, timestamp_ms=BASE_TIMESTAMP_MS)
    assert workout.type == WorkoutType.CYCLING
    assert isinstance(workout.details, CyclingDetails)
    assert workout.details.speed_km_per_h == 20.0
    assert workout.details.elevation_gain_m == 300


@pytest.mark.parametrize("distance, duration", [(5, 25), (3.7, 19.3), (42.195, 181), (0.4, 1)])
def test_derived_metrics_match_formulas_exactly(distance, duration):
    run = create_running((0, 0), distance, duration, 170)
    ride = create_cycling((0, 0), distance, duration, -12.5)
    assert run.details.pace_min_per_km == duration / distance
    assert ride.details.speed_km_per_h == distance / (duration / 60)


def test_derive_metric_dispatches_on_tag():
    assert derive_metric(WorkoutType.RUNNING, 10, 50) == calc_pace(10, 50) == 5.0
    assert derive_metric("cycling", 30, 90) == calc_speed(30, 90) == 20.0
    with pytest.raises(ValueError):
        derive_metric("swimming", 1, 1)


def test_id_and_timestamp_come_from_the_same_millisecond():
    workout = create_running((1, 2), 1, 5, 160, timestamp_ms=1710417600123)
    assert workout.id == "0417600123"
    assert workout.created_at == datetime(2024, 3, 14, 12, 0, 0, 123000, tzinfo=timezone.utc)


def test_workouts_in_the_same_millisecond_share_an_id():
    first = create_running((1, 2), 5, 25, 180, timestamp_ms=BASE_TIMESTAMP_MS)
    second = create_cycling((3, 4), 20, 60, 100, timestamp_ms=BASE_TIMESTAMP_MS)
    assert first.id == second.id


def test_id_keeps_last_ten_digits():
    assert create_workout_id(12345678901234) == "5678901234"
    assert len(create_workout_id(1710417600000)) == 10


def test_create_workout_picks_variant():
    run = create_workout("running", (0, 0), 5, 30, 175)
    ride = create_workout(WorkoutType.CYCLING, (0, 0), 5, 30, 0)
    assert run.is_running and not run.is_cycling
    assert ride.is_cycling and ride.details.speed_km_per_h == 10.0
    with pytest.raises(ValueError):
        create_workout("rowing", (0, 0), 5, 30, 0)


def test_workouts_are_immutable():
    workout = create_running((0, 0), 5, 25, 180)
    with pytest.raises(FrozenInstanceError):
        workout.distance_km = 10


def test_restored_keeps_payload_and_replaces_timestamp():
    workout = create_cycling((0, 0), 20, 60, 50, timestamp_ms=BASE_TIMESTAMP_MS)
    stamp = datetime(2023, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    restored = workout.restored(stamp, "1234567890")
    assert restored.created_at == stamp
    assert restored.id == "1234567890"
    assert restored.details == workout.details
    assert workout.created_at != stamp
