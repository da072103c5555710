"""
Main module for the workout tracker.
Session controller: location → map → click → form → workout → render → save.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple
import logging

from .core.geolocation import LocationError, LocationRequest, Position
from .core.interfaces import FormView, Geolocator, MapView, Notifier, WorkoutRenderer
from .core.validation import WorkoutValidationError, validate_form_input
from .storage.codec import WorkoutCodec
from .storage.data_models import Workout, create_workout, current_timestamp_ms
from .utils.config import TrackerConfig, get_config

logger = logging.getLogger(__name__)

Coords = Tuple[float, float]

HOME_POPUP_CLASS = "home-popup"


class SessionPhase(str, Enum):
    UNINITIALIZED = "uninitialized"
    AWAITING_LOCATION = "awaiting_location"
    MAP_READY = "map_ready"
    FORM_OPEN = "form_open"
    CREATING = "creating"


@dataclass
class SessionState:
    """Everything the controller knows about the running session."""
    workouts: List[Workout] = field(default_factory=list)
    phase: SessionPhase = SessionPhase.UNINITIALIZED
    map_view: Optional["MapView"] = None  # set once the map is centered
    pending_coords: Optional[Coords] = None
    zoom_level: int = 13
    position: Optional[Position] = None
    location_request: Optional[LocationRequest] = None
    location_error: Optional[LocationError] = None

    def find_workout(self, workout_id: str) -> Optional[Workout]:
        for workout in self.workouts:
            if workout.id == workout_id:
                return workout
        return None


class WorkoutTracker:
    """
    Session controller that orchestrates storage, location, map, form and rendering.

    The collaborators are passed in; the controller only relies on the calls
    listed in core.interfaces.
    """

    def __init__(self, codec: WorkoutCodec, geolocator: Geolocator, map_view: MapView,
                 form: FormView, presenter: WorkoutRenderer, notifier: Notifier,
                 state: Optional[SessionState] = None,
                 config: Optional[TrackerConfig] = None,
                 clock: Callable[[], int] = current_timestamp_ms):
        self.config = config or get_config()
        self.codec = codec
        self.geolocator = geolocator
        self.map_view = map_view
        self.form = form
        self.presenter = presenter
        self.notifier = notifier
        self.clock = clock
        self.state = state if state is not None else self._fresh_state()

    def _fresh_state(self) -> SessionState:
        return SessionState(zoom_level=self.config.map.zoom_level)

    @property
    def phase(self) -> SessionPhase:
        return self.state.phase

    @property
    def workouts(self) -> List[Workout]:
        return list(self.state.workouts)

    def start(self) -> None:
        """Restore stored workouts and ask for the user's location."""
        if self.state.phase != SessionPhase.UNINITIALIZED:
            logger.warning(f"Session already started (phase: {self.state.phase.value})")
            return

        self.state.workouts = self.codec.load()
        for workout in self.state.workouts:
            self.presenter.render_entry(workout)

        self.state.phase = SessionPhase.AWAITING_LOCATION
        request = self.geolocator.request_position()
        self.state.location_request = request
        request.then(self._load_map, self._location_failed)

    def _load_map(self, position: Position) -> None:
        """Center the map on the user and draw the restored workouts."""
        logger.info(f"Location acquired: {position.coords}")
        self.state.position = position
        self.state.location_error = None
        self.notifier.banner(None)

        self.map_view.set_view(position.coords, self.state.zoom_level)
        self.map_view.add_marker(
            position.coords,
            popup=self.config.map.home_caption,
            popup_class=HOME_POPUP_CLASS,
        )
        self.map_view.on_click(self.handle_map_click)
        self.state.map_view = self.map_view

        for workout in self.state.workouts:
            self.presenter.render_marker(self.map_view, workout)

        self.state.phase = SessionPhase.MAP_READY

    def _location_failed(self, error: LocationError) -> None:
        """No map this session; the user is told why."""
        self.state.location_error = error
        logger.warning(f"Could not get location (code {error.code}): {error.message}")
        self.notifier.banner(
            f"Could not get your location: {error.message}. "
            "Allow location access and reload to add workouts."
        )

    def handle_map_click(self, coords: Coords) -> bool:
        """Remember the clicked coordinate and open the form."""
        if self.state.phase not in (SessionPhase.MAP_READY, SessionPhase.FORM_OPEN):
            logger.debug(f"Ignoring map click in phase {self.state.phase.value}")
            return False

        self.state.pending_coords = (float(coords[0]), float(coords[1]))
        self.form.show()
        self.form.focus('distance')
        self.state.phase = SessionPhase.FORM_OPEN
        return True

    def toggle_type_fields(self) -> None:
        """Swap the cadence and elevation fields. View state only."""
        self.form.toggle_type_fields()

    def submit_workout(self) -> Optional[Workout]:
        """
        Validate the form and record a new workout.

        Returns:
            The new workout, or None when the input was rejected or no form was open
        """
        if self.state.phase != SessionPhase.FORM_OPEN or self.state.pending_coords is None:
            logger.warning(f"Ignoring submit in phase {self.state.phase.value}")
            return None

        try:
            validated = validate_form_input(self.form.read())
        except WorkoutValidationError as e:
            logger.info(f"Rejected workout input ({e.field}): {e}")
            self.notifier.alert(str(e))
            return None

        self.state.phase = SessionPhase.CREATING
        workout = create_workout(
            validated.workout_type,
            self.state.pending_coords,
            validated.distance_km,
            validated.duration_min,
            validated.type_param,
            timestamp_ms=self.clock(),
        )
        self.state.workouts.append(workout)

        self.presenter.render_marker(self.map_view, workout)
        self.presenter.render_entry(workout)

        self.form.clear()
        self.form.hide()
        self.state.pending_coords = None

        self.codec.save(self.state.workouts)
        self.state.phase = SessionPhase.MAP_READY

        logger.info(f"Recorded {workout.type.value} workout {workout.id} at {workout.coords}")
        return workout

    def move_to_workout(self, workout_id: str) -> bool:
        """Pan the map to a workout. Does not change the phase."""
        if self.state.map_view is None:
            logger.debug("Map not ready; cannot pan")
            return False

        workout = self.state.find_workout(workout_id)
        if workout is None:
            logger.debug(f"No workout with id {workout_id}")
            return False

        self.state.map_view.set_view(workout.coords, self.state.zoom_level, animate=True)
        return True

    def reset(self) -> None:
        """Delete every stored workout and start a fresh session."""
        if not self.codec.clear():
            logger.error("Could not clear stored workouts")

        self.presenter.clear()
        self.map_view.clear()
        self.form.clear()
        self.form.hide()
        self.notifier.banner(None)

        self.state = self._fresh_state()
        logger.info("Session reset")
        self.start()
