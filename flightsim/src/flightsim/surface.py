"""
The contract between the engine and whatever draws the map. The reconciler and the selection overlay manager are the
only callers; they hold the handles a surface returns and pass them back to update or remove the objects they refer
to. All calls are synchronous and return nothing of interest beyond the handle. A surface that can't carry out a call,
for instance because a coordinate is out of range, raises RenderError.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from flightsim.icons import Icon
from flightsim.model.position import Position


Handle = int


class RenderError(ValueError):
    """
    Exception raised by a rendering surface that rejects an operation.
    """


@dataclass(frozen=True)
class LineStyle:
    color: str
    weight: int
    opacity: float = 1.0
    dash: str | None = None
    interactive: bool = True


class RenderSurface(ABC):
    @abstractmethod
    def create_marker(self, position: Position, icon: Icon) -> Handle: ...

    @abstractmethod
    def update_marker_position(self, handle: Handle, position: Position) -> None: ...

    @abstractmethod
    def update_marker_icon(self, handle: Handle, icon: Icon) -> None: ...

    @abstractmethod
    def remove_marker(self, handle: Handle) -> None: ...

    @abstractmethod
    def create_trail(self, points: Sequence[Position], style: LineStyle) -> Handle: ...

    @abstractmethod
    def update_trail(self, handle: Handle, points: Sequence[Position]) -> None: ...

    @abstractmethod
    def remove_trail(self, handle: Handle) -> None: ...

    @abstractmethod
    def create_line(self, points: Sequence[Position], style: LineStyle) -> Handle: ...

    @abstractmethod
    def update_line(self, handle: Handle, points: Sequence[Position]) -> None: ...

    @abstractmethod
    def remove_line(self, handle: Handle) -> None: ...
