"""
Interfaces the session controller expects from its collaborators.
"""
from typing import Callable, List, Optional, Protocol, Tuple

from .geolocation import LocationRequest
from .validation import FormInput
from ..storage.data_models import Workout

Coords = Tuple[float, float]


class Geolocator(Protocol):
    def request_position(self) -> LocationRequest: ...


class MapView(Protocol):
    def set_view(self, coords: Coords, zoom: int, animate: bool = False) -> None: ...

    def add_marker(self, coords: Coords, popup: Optional[str] = None,
                   popup_class: Optional[str] = None, workout_id: Optional[str] = None): ...

    def on_click(self, handler: Callable[[Coords], None]) -> None: ...

    def clear(self) -> None: ...


class FormView(Protocol):
    visible: bool

    def show(self) -> None: ...

    def hide(self) -> None: ...

    def focus(self, field: str) -> None: ...

    def toggle_type_fields(self) -> None: ...

    def read(self) -> FormInput: ...

    def clear(self) -> None: ...


class Notifier(Protocol):
    def alert(self, message: str) -> None: ...

    def banner(self, message: Optional[str]) -> None: ...


class WorkoutRenderer(Protocol):
    def render_marker(self, map_view: MapView, workout: Workout) -> None: ...

    def render_entry(self, workout: Workout) -> None: ...

    def clear(self) -> None: ...


class KeyValueStore(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> bool: ...

    def remove_item(self, key: str) -> bool: ...

    def keys(self) -> List[str]: ...
