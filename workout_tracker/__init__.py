"""
Workout Tracker - map-based log of runs and rides.

Record a workout by clicking its location on a map; each workout gets its
derived pace or speed, is listed, and is stored across restarts.
"""

from .main import WorkoutTracker, SessionState, SessionPhase

from .storage.data_models import Workout, WorkoutType, create_workout
from .storage.codec import WorkoutCodec, DecodeError
from .storage.local_store import LocalStorage, MemoryStorage
from .core.validation import WorkoutValidationError
from .utils.config import get_config, reset_config

__version__ = "1.0.0"

__all__ = [
    # Session
    "WorkoutTracker",
    "SessionState",
    "SessionPhase",

    # Domain
    "Workout",
    "WorkoutType",
    "create_workout",
    "WorkoutValidationError",

    # Data management
    "WorkoutCodec",
    "DecodeError",
    "LocalStorage",
    "MemoryStorage",

    # Configuration
    "get_config",
    "reset_config"
]
