"""Workout models, persistence codec and key/value storage."""

from .data_models import (
    Workout,
    WorkoutType,
    RunningDetails,
    CyclingDetails,
    create_workout,
    create_running,
    create_cycling,
    create_workout_id
)
from .codec import (
    WorkoutCodec,
    DecodeError,
    DecodeErrorKind,
    encode_workout,
    decode_workout,
    encode_workouts,
    decode_workouts
)
from .local_store import LocalStorage, MemoryStorage
from .export import workouts_to_dataframe, export_workouts_csv

__all__ = [
    # Data models
    "Workout",
    "WorkoutType",
    "RunningDetails",
    "CyclingDetails",
    "create_workout",
    "create_running",
    "create_cycling",
    "create_workout_id",

    # Codec
    "WorkoutCodec",
    "DecodeError",
    "DecodeErrorKind",
    "encode_workout",
    "decode_workout",
    "encode_workouts",
    "decode_workouts",

    # Key/value stores
    "LocalStorage",
    "MemoryStorage",

    # Export
    "workouts_to_dataframe",
    "export_workouts_csv"
]
