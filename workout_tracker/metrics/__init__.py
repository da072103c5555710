"""Derived metric calculations for workouts."""

from .workout_metrics import calc_pace, calc_speed, derive_metric

__all__ = [
    "calc_pace",
    "calc_speed",
    "derive_metric"
]
