from __future__ import annotations

from typing import List

import pandas as pd

from .data_models import Workout, RunningDetails, CyclingDetails

EXPORT_COLUMNS = [
    "id",
    "type",
    "date",
    "latitude",
    "longitude",
    "distance_km",
    "duration_min",
    "pace_min_per_km",
    "cadence_spm",
    "speed_km_per_h",
    "elevation_gain_m",
]


def workouts_to_dataframe(workouts: List[Workout]) -> pd.DataFrame:
    rows = []
    for w in workouts:
        details = w.details
        row = {
            "id": w.id,
            "type": w.type.value,
            "date": w.created_at,
            "latitude": w.coords[0],
            "longitude": w.coords[1],
            "distance_km": w.distance_km,
            "duration_min": w.duration_min,
            "pace_min_per_km": details.pace_min_per_km if isinstance(details, RunningDetails) else None,
            "cadence_spm": details.cadence_spm if isinstance(details, RunningDetails) else None,
            "speed_km_per_h": details.speed_km_per_h if isinstance(details, CyclingDetails) else None,
            "elevation_gain_m": details.elevation_gain_m if isinstance(details, CyclingDetails) else None,
        }
        rows.append(row)
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_workouts_csv(workouts: List[Workout], path: str) -> None:
    df = workouts_to_dataframe(workouts)
    df.to_csv(path, index=False)
