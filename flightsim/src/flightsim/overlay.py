from collections.abc import Sequence
from enum import Enum, auto

from flightsim.icons import ECO_COLOR
from flightsim.log import log
from flightsim.model.analysis_result import AnalysisResult
from flightsim.model.flight import Flight
from flightsim.model.flight_id import FlightID
from flightsim.model.position import Position
from flightsim.surface import Handle, LineStyle, RenderError, RenderSurface


ROUTE_STYLE = LineStyle("#f59e0b", 2, dash="5, 10")
ECO_ROUTE_STYLE = LineStyle(ECO_COLOR, 3, opacity=0.8)

# Each unit of an eco-route's offset shifts its midpoint this many degrees in latitude and in longitude.
ECO_OFFSET_STEP = 0.5


class SelectionState(Enum):
    NONE = auto()
    SELECTED = auto()
    SELECTED_WITH_ANALYSIS = auto()


def route_points(flight: Flight) -> list[Position]:
    return [flight.origin.position, flight.position, flight.destination.position]


def eco_route_points(flight: Flight) -> list[Position]:
    """
    The eco-route bends away from the straight origin-destination line through a midpoint displaced by an amount
    derived from the flight's identifier, so the same flight always gets the same curve.
    """
    offset = (int(flight.flight_id) % 10 - 5) * ECO_OFFSET_STEP
    origin, destination = flight.origin, flight.destination
    midpoint = Position(
        (origin.longitude + destination.longitude) / 2 + offset,
        (origin.latitude + destination.latitude) / 2 + offset,
    )
    return [origin.position, midpoint, destination.position]


class SelectionOverlay:
    """
    Owns the lines drawn for the selected flight: the planned route through the flight's live position, and, once an
    analysis has come back, the eco-route. There is at most one of each on the surface at any time.

    A line the surface refuses to draw is logged and left out; the next `refresh` tries again.
    """

    def __init__(self, surface: RenderSurface):
        self._surface = surface
        self._flight_id: FlightID | None = None
        self._analysis: AnalysisResult | None = None
        self._route: Handle | None = None
        self._eco_route: Handle | None = None

    @property
    def state(self) -> SelectionState:
        if self._flight_id is None:
            return SelectionState.NONE
        if self._analysis is None:
            return SelectionState.SELECTED
        return SelectionState.SELECTED_WITH_ANALYSIS

    @property
    def flight_id(self) -> FlightID | None:
        return self._flight_id

    @property
    def analysis(self) -> AnalysisResult | None:
        return self._analysis

    @property
    def has_route(self) -> bool:
        return self._route is not None

    @property
    def has_eco_route(self) -> bool:
        return self._eco_route is not None

    def select(self, flight: Flight | None) -> None:
        if flight is None:
            self.clear()
            return
        self.focus(flight.flight_id)
        self.refresh(flight)

    def focus(self, flight_id: FlightID) -> None:
        """
        Move the selection to another flight without drawing anything; the next `refresh` draws its route. Moving to a
        different flight drops the previous flight's analysis and eco-route.
        """
        if flight_id != self._flight_id:
            self._analysis = None
            self._remove_eco_route()
            self._flight_id = flight_id

    def refresh(self, flight: Flight) -> None:
        """
        Redraw the route through the flight's current position. Called on every tick while a flight is selected.
        """
        if flight.flight_id != self._flight_id:
            self.select(flight)
            return

        points = route_points(flight)
        if self._route is None:
            self._route = self._create(points, ROUTE_STYLE)
        else:
            try:
                self._surface.update_line(self._route, points)
            except RenderError as exc:
                log(f"route update rejected for {flight.flight_id}: {exc}")
                self._remove_route()

        if self._analysis is not None and self._eco_route is None:
            self._eco_route = self._create(eco_route_points(flight), ECO_ROUTE_STYLE)

    def apply_analysis(self, flight: Flight, result: AnalysisResult) -> bool:
        """
        Attach an analysis result to the selection and draw the eco-route. Results for any flight other than the
        current selection are discarded; returns whether the result was applied.
        """
        if flight.flight_id != self._flight_id:
            return False
        self._analysis = result
        self.refresh(flight)
        return True

    def clear(self) -> None:
        self._remove_route()
        self._remove_eco_route()
        self._flight_id = None
        self._analysis = None

    def _create(self, points: Sequence[Position], style: LineStyle) -> Handle | None:
        try:
            return self._surface.create_line(points, style)
        except RenderError as exc:
            log(f"line rejected for {self._flight_id}: {exc}")
            return None

    def _remove_route(self) -> None:
        if self._route is not None:
            self._remove_line(self._route)
            self._route = None

    def _remove_eco_route(self) -> None:
        if self._eco_route is not None:
            self._remove_line(self._eco_route)
            self._eco_route = None

    def _remove_line(self, handle: Handle) -> None:
        try:
            self._surface.remove_line(handle)
        except RenderError as exc:
            log(f"failed to remove line {handle}: {exc}")
