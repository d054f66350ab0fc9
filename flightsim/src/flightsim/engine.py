import asyncio

from flightsim import simulation, view
from flightsim.analysis import AnalysisService
from flightsim.log import log
from flightsim.model.analysis_result import AnalysisResult
from flightsim.model.criteria import FilterCriteria
from flightsim.model.flight import Flight
from flightsim.model.flight_id import FlightID
from flightsim.model.operator import operator_codes
from flightsim.overlay import SelectionOverlay, SelectionState
from flightsim.reconciler import Reconciler, ReconcileStats
from flightsim.store import EntityStore
from flightsim.surface import RenderSurface


class Engine:
    """
    The engine ties the fleet to the map. It owns the entity store, the reconciler and the selection overlay, and it is
    the only thing that calls into them. Map clients read the visible set, the selected flight and the current analysis
    from it, and change what they see through `select_flight`, `set_filters`, `set_search_text` and `request_analyze`.
    Every change, and every tick, ends with the visible set being recomputed and pushed to the surface.

    Everything here runs on the event loop thread. Analyses run as tasks on the same loop; a result that arrives after
    the selection has moved on is dropped.
    """

    def __init__(self, store: EntityStore, surface: RenderSurface, analysis_service: AnalysisService):
        self._store = store
        self._reconciler = Reconciler(surface)
        self._overlay = SelectionOverlay(surface)
        self._analysis_service = analysis_service

        self._criteria = FilterCriteria()
        self._search_text = ""
        self._visible: list[Flight] = []

        self._pending_analysis: asyncio.Task[None] | None = None
        self._selection_generation = 0

        self.last_stats = ReconcileStats()
        self.refresh()

    @property
    def store(self) -> EntityStore:
        return self._store

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def search_text(self) -> str:
        return self._search_text

    @property
    def visible(self) -> tuple[Flight, ...]:
        return tuple(self._visible)

    @property
    def selected(self) -> Flight | None:
        return self._store.get(self._overlay.flight_id)

    @property
    def analysis(self) -> AnalysisResult | None:
        return self._overlay.analysis

    @property
    def selection_state(self) -> SelectionState:
        return self._overlay.state

    def tick(self) -> None:
        simulation.tick(self._store)
        self.refresh()

    def refresh(self) -> None:
        """
        Recompute the visible set and reconcile the surface with it. Also redraws the selected flight's route.
        """
        self._visible = view.visible(self._store, self._criteria, self._search_text)
        self.last_stats = self._reconciler.reconcile(self._visible, self._overlay.flight_id)
        selected = self.selected
        if selected is not None:
            self._overlay.refresh(selected)

    def select_flight(self, flight_id: FlightID | str | None) -> None:
        """
        Select a flight, or clear the selection with None. An identifier that doesn't name a flight clears the
        selection too.
        """
        flight = self._store.get(flight_id)
        if flight is None or flight.flight_id != self._overlay.flight_id:
            self._cancel_analysis()
        if flight is None:
            self._overlay.clear()
        else:
            self._overlay.focus(flight.flight_id)
        self.refresh()

    def set_filters(self, criteria: FilterCriteria) -> None:
        if not criteria.in_domain(operator_codes()):
            log(f"ignoring out-of-range filter criteria: {criteria}")
            return
        self._criteria = criteria
        self.refresh()

    def set_search_text(self, text: str) -> None:
        self._search_text = text
        self.refresh()

    def request_analyze(self, flight_id: FlightID | str) -> asyncio.Task[None] | None:
        """
        Start an analysis of the selected flight. Requests for any other flight are ignored. A new request replaces one
        that is still pending. Must be called from within the running event loop.
        """
        flight = self._store.get(flight_id)
        if flight is None or flight.flight_id != self._overlay.flight_id:
            return None

        self._cancel_analysis()
        task = asyncio.get_running_loop().create_task(self._analyze(flight, self._selection_generation))
        task.add_done_callback(_report_failure)
        self._pending_analysis = task
        return task

    async def _analyze(self, flight: Flight, generation: int) -> None:
        result = await self._analysis_service.analyze(flight)
        if generation != self._selection_generation:
            return
        self._pending_analysis = None
        self._overlay.apply_analysis(flight, result)

    def _cancel_analysis(self) -> None:
        self._selection_generation += 1
        if self._pending_analysis is not None:
            self._pending_analysis.cancel()
            self._pending_analysis = None


def _report_failure(task: asyncio.Task[None]) -> None:
    if not task.cancelled() and task.exception() is not None:
        log(f"analysis failed: {task.exception()!r}")
