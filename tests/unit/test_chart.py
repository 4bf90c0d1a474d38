from keen.client.chart import build_chart
from keen.client.derivation import derive_change
from keen.client.selection import ChartMode
from keen.core.series import SeriesPoint

SERIES = (SeriesPoint("2020", 1000000.0), SeriesPoint("2021", 1500000.0))


def test_area_layers():
    spec = build_chart(derive_change(SERIES), "area")
    assert spec.mode is ChartMode.AREA
    assert [layer.kind for layer in spec.layers] == ["area", "line"]
    assert spec.layers[1].style["glow"]


def test_composed_layers():
    spec = build_chart(derive_change(SERIES), ChartMode.COMPOSED)
    assert [layer.kind for layer in spec.layers] == ["bar", "line"]


def test_mode_does_not_change_data():
    points = derive_change(SERIES)
    assert build_chart(points, "area").points == build_chart(points, "composed").points


def test_y_axis_uses_compact_magnitude():
    spec = build_chart(derive_change(SERIES))
    assert [spec.y_tick_formatter(v) for v in (0.0, 500000.0, 1500000.0)] == ["0", "500K", "1.5M"]


def test_tooltip_and_serialization():
    spec = build_chart(derive_change(SERIES), "composed")
    assert spec.tooltip("2021")["change"] == "▲ 50.00%"
    payload = spec.to_dict()
    assert payload["mode"] == "composed"
    assert payload["x_key"] == "year"
    assert payload["data"][0] == {"year": "2020", "value": 1000000.0, "percent_change": None}


def test_empty_chart():
    assert build_chart([]).is_empty
