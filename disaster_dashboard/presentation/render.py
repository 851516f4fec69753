"""
Dashboard HTML: a Leaflet map (via folium) plus a side panel of lists.

A DashboardRenderer owns exactly one folium Map for the page it renders.
The map is handed explicitly to the marker and list builders; list entries
recenter it through its generated JS name.
"""
from __future__ import annotations

import html
import json
from typing import List

import folium

from disaster_dashboard.core.contracts import EarthquakeFeature
from disaster_dashboard.core.time import format_epoch_ms
from disaster_dashboard.presentation.view import (
    EMERGENCY_MAPPING_URL,
    DashboardView,
    ListItem,
    magnitude_color,
    marker_radius,
)

PAGE_TITLE = "Realtime Disaster Dashboard"

_PANEL_CSS = """
<style>
  #panel { position: absolute; top: 0; left: 0; bottom: 0; width: 30%; overflow-y: auto;
           padding: 12px; box-sizing: border-box; font-family: sans-serif; font-size: 13px; }
  #panel h2 { font-size: 15px; margin: 14px 0 4px; }
  #panel ul { list-style: none; padding: 0; margin: 0; }
  #panel li { padding: 4px 0; border-bottom: 1px solid #eee; }
  #eq-list li { cursor: pointer; }
  #tsunami-msg.clickable { cursor: pointer; text-decoration: underline; }
  #emergency-btn { margin-top: 14px; background: #b30000; color: #fff; border: 0; padding: 6px 10px; }
</style>
"""


def _e(s: str) -> str:
    return html.escape(s, quote=True)


def _open_js(url: str) -> str:
    return _e(f"window.open({json.dumps(url)}, '_blank')")


def add_quake_marker(m: folium.Map, q: EarthquakeFeature) -> folium.CircleMarker:
    color = magnitude_color(q.magnitude)
    when = format_epoch_ms(q.time_ms)
    popup_html = f"<strong>{_e(q.place)}</strong><br>Mag: {q.magnitude:g}<br>{_e(when)}"
    if q.details_url:
        popup_html += f'<br><a target="_blank" href="{_e(q.details_url)}">details</a>'
    marker = folium.CircleMarker(
        location=[q.latitude, q.longitude],
        radius=marker_radius(q.magnitude),
        color=color,
        fill=True,
        fill_color=color,
        fill_opacity=0.7,
        popup=folium.Popup(popup_html, max_width=300),
    )
    marker.add_to(m)
    return marker


def quake_list_html(m: folium.Map, quakes: List[EarthquakeFeature]) -> str:
    map_var = m.get_name()
    rows = []
    for q in quakes:
        recenter = _e(f"{map_var}.setView([{q.latitude}, {q.longitude}], 6)")
        rows.append(
            f'<li onclick="{recenter}"><strong>M{q.magnitude:.1f}</strong> — {_e(q.place)}'
            f"<br><small>{_e(format_epoch_ms(q.time_ms))}</small></li>"
        )
    return "".join(rows)


def _markup_element(markup: str) -> folium.Element:
    # Element strings are Jinja templates; keep feed text out of the template itself
    el = folium.Element("{{ this.markup }}")
    el.markup = markup
    return el


def list_html(items: List[ListItem]) -> str:
    rows = []
    for it in items:
        if it.href:
            rows.append(f'<li><a target="_blank" href="{_e(it.href)}">{_e(it.text)}</a></li>')
        else:
            rows.append(f"<li>{_e(it.text)}</li>")
    return "".join(rows)


class DashboardRenderer:
    def __init__(self, view: DashboardView):
        self.view = view
        self.figure = folium.Figure(title=PAGE_TITLE)
        self.map = folium.Map(
            location=[20, 0],
            zoom_start=2,
            max_zoom=18,
            tiles="OpenStreetMap",
            width="70%",
            left="30%",
            position="absolute",
        )
        self.map.add_to(self.figure)

    def _panel_html(self) -> str:
        v = self.view
        if v.tsunami.href:
            tsunami = (
                f'<div id="tsunami-msg" class="clickable" onclick="{_open_js(v.tsunami.href)}">'
                f"{_e(v.tsunami.text)}</div>"
            )
        else:
            tsunami = f'<div id="tsunami-msg">{_e(v.tsunami.text)}</div>'

        return (
            '<div id="panel">'
            f"<h1 style=\"font-size:18px\">{_e(PAGE_TITLE)}</h1>"
            "<h2>Earthquakes</h2>"
            f'<div id="eq-count">{_e(v.quake_caption)}</div>'
            f'<ul id="eq-list">{quake_list_html(self.map, v.quakes)}</ul>'
            "<h2>Tsunami</h2>"
            f"{tsunami}"
            "<h2>Volcanoes</h2>"
            f'<ul id="volcano-list">{list_html(v.volcano_items)}</ul>'
            "<h2>Floods</h2>"
            f'<ul id="flood-list">{list_html(v.flood_items)}</ul>'
            f'<button id="emergency-btn" onclick="{_open_js(EMERGENCY_MAPPING_URL)}">'
            "Emergency rapid mapping (EMSR839)</button>"
            "</div>"
        )

    def render(self) -> str:
        for q in self.view.quakes:
            add_quake_marker(self.map, q)
        self.figure.header.add_child(_markup_element(_PANEL_CSS))
        self.figure.html.add_child(_markup_element(self._panel_html()))
        return self.figure.render()
