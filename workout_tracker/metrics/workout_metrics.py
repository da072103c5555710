"""
Derived workout metrics.
Pace for running and speed for cycling, selected by the workout type tag.
"""
from typing import Callable, Dict


def calc_pace(distance_km: float, duration_min: float) -> float:
    """Minutes needed per kilometer."""
    return duration_min / distance_km


def calc_speed(distance_km: float, duration_min: float) -> float:
    """Kilometers covered per hour."""
    return distance_km / (duration_min / 60)


# Keyed by the type tag as stored ("running" / "cycling")
_DERIVED_METRICS: Dict[str, Callable[[float, float], float]] = {
    "running": calc_pace,
    "cycling": calc_speed,
}


def derive_metric(workout_type, distance_km: float, duration_min: float) -> float:
    """
    Compute the derived metric for a workout type.

    Args:
        workout_type: Type tag, either a WorkoutType member or its string value
        distance_km: Distance covered
        duration_min: Time taken

    Returns:
        Pace (min/km) for running, speed (km/h) for cycling
    """
    tag = getattr(workout_type, "value", workout_type)
    try:
        metric = _DERIVED_METRICS[tag]
    except (KeyError, TypeError):
        raise ValueError(f"No derived metric for workout type: {workout_type!r}")
    return metric(distance_km, duration_min)
