from liftsim.config import WingType
from liftsim.ui import airfoil_outline, format_flight_time


def test_flight_time_format_drops_empty_hours():
    assert format_flight_time(0.0) == "00:00"
    assert format_flight_time(75.9) == "01:15"
    assert format_flight_time(3725.0) == "01:02:05"


def test_flat_bottom_outline_has_flat_lower_surface():
    outline = airfoil_outline(WingType.FLAT_BOTTOM, 300.0)
    lower = outline[len(outline) // 2:]
    assert all(y == 0.0 for _, y in lower)
    assert min(y for _, y in outline) < 0.0


def test_outline_spans_the_chord():
    for wing_type in WingType:
        xs = [x for x, _ in airfoil_outline(wing_type, 200.0)]
        assert min(xs) == -100.0
        assert abs(max(xs) - 100.0) < 1e-9
