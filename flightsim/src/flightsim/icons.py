"""
Marker icons. An Icon is a plain description of how a flight's marker should look; `render_html` turns it into the
markup the browser map places inside the marker.
"""

from dataclasses import dataclass

from lxml import html
from lxml.html import builder as E

from flightsim.model.flight import Flight
from flightsim.model.operator import ECO_CODE


ALERT_COLOR = "#ef4444"
ECO_COLOR = "#10b981"

BASE_SIZE = 26
SELECTED_SIZE = 40
SELECTED_Z_INDEX = 1000


@dataclass(frozen=True)
class Icon:
    glyph: str
    color: str
    size: int
    heading: float
    shadow_offset: float
    label: str | None = None
    z_index: int = 0

    @property
    def box_size(self) -> tuple[int, int]:
        return (self.size * 2, self.size * 2)

    @property
    def anchor(self) -> tuple[int, int]:
        return (self.size, self.size)


def marker_color(flight: Flight) -> str:
    """
    Restricted aircraft are always drawn in the alert color and the eco operator in its own green; everything else
    wears its operator's livery color.
    """
    if flight.classification.restricted:
        return ALERT_COLOR
    if flight.operator.code == ECO_CODE:
        return ECO_COLOR
    return flight.operator.color


def icon_for(flight: Flight, selected: bool) -> Icon:
    return Icon(
        glyph=flight.classification.profile.glyph,
        color=marker_color(flight),
        size=SELECTED_SIZE if selected else BASE_SIZE,
        heading=flight.heading,
        # The shadow falls further from the aircraft the higher it flies.
        shadow_offset=max(2.0, flight.altitude / 2000),
        label=flight.callsign if selected else None,
        z_index=SELECTED_Z_INDEX if selected else 0,
    )


def render_html(icon: Icon) -> str:
    glyph_class = {"class": f"fa-solid {icon.glyph}"}
    rotate = f"rotate({icon.heading:g}deg)"

    container = E.DIV(
        {"class": "flight-icon-container"},
        E.DIV(
            {
                "class": "flight-shadow",
                "style": f"transform: translate({icon.shadow_offset:g}px, {icon.shadow_offset:g}px) {rotate}; "
                f"font-size: {icon.size}px;",
            },
            E.I(glyph_class),
        ),
        E.DIV(
            {"class": "flight-icon-wrapper", "style": f"transform: {rotate};"},
            E.I(
                glyph_class,
                style=f"font-size: {icon.size}px; color: {icon.color}; "
                "filter: drop-shadow(0 0 2px rgba(0,0,0,0.5)); display: block;",
            ),
        ),
    )
    if icon.label is not None:
        container.append(
            E.DIV(
                {"class": "flight-label", "style": f"top: {icon.size}px; border: 1px solid {icon.color};"},
                icon.label,
            )
        )
    return html.tostring(container, encoding="unicode")
