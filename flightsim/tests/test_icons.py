from lxml import html

from flightsim.icons import ALERT_COLOR, BASE_SIZE, ECO_COLOR, SELECTED_SIZE, SELECTED_Z_INDEX, icon_for, render_html
from flightsim.model.classification import AircraftClass

from fakes import make_flight


def test_operator_color_by_default():
    icon = icon_for(make_flight(operator="DLH"), selected=False)
    assert icon.color == "#FFAB00"


def test_restricted_class_uses_alert_color():
    icon = icon_for(make_flight(classification=AircraftClass.MIL, operator="RCH"), selected=False)
    assert icon.color == ALERT_COLOR


def test_eco_operator_uses_eco_color():
    assert icon_for(make_flight(operator="ECO"), selected=False).color == ECO_COLOR


def test_selected_icon_is_larger_and_labeled():
    flight = make_flight(callsign="QFA7", operator="QFA")
    plain = icon_for(flight, selected=False)
    selected = icon_for(flight, selected=True)

    assert (plain.size, plain.label, plain.z_index) == (BASE_SIZE, None, 0)
    assert (selected.size, selected.label, selected.z_index) == (SELECTED_SIZE, "QFA7", SELECTED_Z_INDEX)
    assert selected.box_size == (80, 80)
    assert selected.anchor == (40, 40)


def test_shadow_offset_grows_with_altitude():
    assert icon_for(make_flight(altitude=1500), selected=False).shadow_offset == 2
    assert icon_for(make_flight(altitude=36000), selected=False).shadow_offset == 18


def test_render_html():
    flight = make_flight(callsign="BAW123", heading=270)
    root = html.fromstring(render_html(icon_for(flight, selected=True)))

    assert root.get("class") == "flight-icon-container"
    glyphs = root.findall(".//i")
    assert len(glyphs) == 2
    assert all(g.get("class") == "fa-solid fa-plane" for g in glyphs)
    assert "rotate(270deg)" in root.find("div[@class='flight-icon-wrapper']").get("style")
    assert root.find("div[@class='flight-label']").text == "BAW123"


def test_render_html_without_label():
    root = html.fromstring(render_html(icon_for(make_flight(), selected=False)))
    assert root.find("div[@class='flight-label']") is None
