from __future__ import annotations

from pytripmeter.models.fix import PositionFix
from pytripmeter.state.route import RouteTrack


def _fix(lon: float, speed: float) -> PositionFix:
    return PositionFix(latitude=52.0, longitude=lon, reported_speed=speed)


def test_only_moving_fixes_are_appended() -> None:
    route = RouteTrack()

    assert route.append_if_moving(_fix(4.0, 3.0)) is True
    assert route.append_if_moving(_fix(4.0, 0.0)) is False
    assert route.append_if_moving(_fix(4.0, -1.0)) is False
    assert route.append_if_moving(_fix(4.0001, 0.1)) is True

    assert [fix.longitude for fix in route.current_route()] == [4.0, 4.0001]
    assert len(route) == 2


def test_route_keeps_arrival_order() -> None:
    route = RouteTrack()
    fixes = [_fix(4.0 + i * 0.001, 10.0) for i in (3, 1, 2)]
    for fix in fixes:
        route.append_if_moving(fix)

    assert route.current_route() == tuple(fixes)
    assert route.last == fixes[-1]


def test_current_route_is_a_copy_at_call_time() -> None:
    route = RouteTrack()
    route.append_if_moving(_fix(4.0, 10.0))

    view = route.current_route()
    route.append_if_moving(_fix(4.1, 10.0))

    assert len(view) == 1
    assert len(route.current_route()) == 2


def test_reset_clears_the_route() -> None:
    route = RouteTrack()
    route.append_if_moving(_fix(4.0, 10.0))

    route.reset()

    assert route.current_route() == ()
    assert route.last is None
