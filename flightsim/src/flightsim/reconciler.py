"""
Keeps the map surface in step with the visible set of flights.

The reconciler remembers which marker and trail it created for each flight. Each time the visible set is recomputed it
removes the objects of flights that dropped out, creates objects for flights that newly appeared, and moves the rest.
Objects are never torn down and rebuilt just because a flight moved, and a marker's icon is only regenerated when the
flight's highlight state flips, since building icons for hundreds of markers every tick is the expensive part of
drawing the map.
"""

from collections.abc import Sequence
import contextlib
from dataclasses import dataclass

from flightsim.icons import icon_for
from flightsim.log import log, log_once
from flightsim.model.flight import Flight
from flightsim.model.flight_id import FlightID
from flightsim.surface import Handle, LineStyle, RenderError, RenderSurface


TRAIL_WEIGHT = 2
TRAIL_OPACITY = 0.3


@dataclass
class RenderHandle:
    marker: Handle
    trail: Handle
    highlighted: bool


@dataclass
class ReconcileStats:
    created: int = 0
    updated: int = 0
    removed: int = 0
    restyled: int = 0  # icons regenerated because the highlight state changed
    failed: int = 0


class Reconciler:
    def __init__(self, surface: RenderSurface):
        self._surface = surface
        self._handles: dict[FlightID, RenderHandle] = {}

    def __len__(self) -> int:
        return len(self._handles)

    def __contains__(self, flight_id: object) -> bool:
        return flight_id in self._handles

    def handle(self, flight_id: FlightID) -> RenderHandle | None:
        return self._handles.get(flight_id)

    def reconcile(self, flights: Sequence[Flight], selected: FlightID | None = None) -> ReconcileStats:
        """
        Bring the surface in line with `flights`, the current visible set, with `selected` (if any) highlighted. A
        surface error affecting one flight is logged and that flight is skipped until the next call; it never stops the
        rest of the batch.
        """
        stats = ReconcileStats()

        # Removals go first so the number of live objects on the surface never exceeds max(old, new).
        visible_ids = {f.flight_id for f in flights}
        for flight_id in [i for i in self._handles if i not in visible_ids]:
            self._release(flight_id)
            stats.removed += 1

        for flight in flights:
            is_selected = flight.flight_id == selected
            handle = self._handles.get(flight.flight_id)
            try:
                if handle is None:
                    self._create(flight, is_selected)
                    stats.created += 1
                else:
                    if self._update(flight, handle, is_selected):
                        stats.restyled += 1
                    stats.updated += 1
            except RenderError as exc:
                stats.failed += 1
                log_once(f"render:{flight.flight_id}", f"skipping {flight.callsign} ({flight.flight_id}): {exc}")

        return stats

    def release_all(self) -> None:
        for flight_id in list(self._handles):
            self._release(flight_id)

    def _create(self, flight: Flight, is_selected: bool) -> None:
        marker = self._surface.create_marker(flight.position, icon_for(flight, is_selected))
        try:
            trail = self._surface.create_trail(
                list(flight.history),
                LineStyle(flight.operator.color, TRAIL_WEIGHT, opacity=TRAIL_OPACITY, interactive=False),
            )
        except RenderError:
            with contextlib.suppress(RenderError):
                self._surface.remove_marker(marker)
            raise
        self._handles[flight.flight_id] = RenderHandle(marker, trail, is_selected)

    def _update(self, flight: Flight, handle: RenderHandle, is_selected: bool) -> bool:
        """
        Move an existing marker and trail. Returns True if the icon had to be regenerated.
        """
        self._surface.update_marker_position(handle.marker, flight.position)
        self._surface.update_trail(handle.trail, list(flight.history))
        if handle.highlighted == is_selected:
            return False
        self._surface.update_marker_icon(handle.marker, icon_for(flight, is_selected))
        handle.highlighted = is_selected
        return True

    def _release(self, flight_id: FlightID) -> None:
        handle = self._handles.pop(flight_id)
        try:
            self._surface.remove_marker(handle.marker)
        except RenderError as exc:
            log(f"failed to remove marker for {flight_id}: {exc}")
        try:
            self._surface.remove_trail(handle.trail)
        except RenderError as exc:
            log(f"failed to remove trail for {flight_id}: {exc}")
