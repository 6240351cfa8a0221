import pytest

from visit_routes.config import settings
from visit_routes.models.domain import GeoPoint, PointKind
from visit_routes.services.itinerary.scheduler import (
    ItineraryScheduler,
    UnparsableTime,
    format_hhmm,
    parse_hhmm,
    schedule,
)


def _points(count: int) -> list[GeoPoint]:
    return [
        GeoPoint(id=f"D{i}", kind=PointKind.DEMAND, name=f"Demanda {i}", lat=-23.5 - i * 0.01, lng=-46.6)
        for i in range(count)
    ]


def _times(stops):
    return [stop.start_time for stop in stops]


def test_schedule_cascades_duration_and_buffer():
    stops = schedule(_points(3), "08:00", 30, 15)

    assert _times(stops) == ["08:00", "08:45", "09:30"]
    assert all(stop.duration_minutes == 30 for stop in stops)


def test_schedule_start_times_are_cumulative_sums():
    durations = {0: 20, 1: 45, 2: 10, 3: 90, 4: 5}
    stops = schedule(_points(6), "07:30", 30, 12, durations=durations)

    start = parse_hhmm("07:30")
    elapsed = 0
    for index, stop in enumerate(stops):
        assert parse_hhmm(stop.start_time) == start + elapsed
        elapsed += durations.get(index, 30) + 12


def test_schedule_empty_tour():
    assert schedule([], "08:00", 30, 15) == []


def test_times_wrap_past_midnight():
    stops = schedule(_points(2), "23:30", 30, 15)

    assert _times(stops) == ["23:30", "00:15"]


def test_parse_and_format_hhmm():
    assert parse_hhmm("08:05") == 485
    assert format_hhmm(485) == "08:05"
    with pytest.raises(UnparsableTime):
        parse_hhmm("8h30")
    with pytest.raises(UnparsableTime):
        parse_hhmm("25:00")


def test_global_changes_recompute_every_stop():
    scheduler = ItineraryScheduler(_points(3), "08:00", 30, 15, preserve_manual_overrides=False)

    assert _times(scheduler.set_start_time("09:00")) == ["09:00", "09:45", "10:30"]
    assert _times(scheduler.set_travel_buffer(0)) == ["09:00", "09:30", "10:00"]


def test_duration_change_recomputes_downstream_only():
    scheduler = ItineraryScheduler(_points(3), "08:00", 30, 15, preserve_manual_overrides=False)
    scheduler.set_stop_time(0, "07:00")

    stops = scheduler.set_stop_duration(1, 60)

    assert _times(stops) == ["07:00", "08:45", "10:00"]
    assert stops[0].manual is True
    assert stops[1].duration_minutes == 60


def test_manual_time_does_not_cascade():
    scheduler = ItineraryScheduler(_points(3), "08:00", 30, 15)

    stops = scheduler.set_stop_time(1, "09:00")

    assert _times(stops) == ["08:00", "09:00", "09:30"]
    assert stops[1].manual is True


def test_global_change_discards_manual_times_by_default():
    scheduler = ItineraryScheduler(_points(3), "08:00", 30, 15, preserve_manual_overrides=False)
    scheduler.set_stop_time(1, "09:00")

    stops = scheduler.set_travel_buffer(10)

    assert _times(stops) == ["08:00", "08:40", "09:20"]
    assert not any(stop.manual for stop in stops)


def test_global_change_can_preserve_manual_times():
    scheduler = ItineraryScheduler(_points(3), "08:00", 30, 15, preserve_manual_overrides=True)
    scheduler.set_stop_time(1, "09:00")

    stops = scheduler.set_travel_buffer(10)

    assert _times(stops) == ["08:00", "09:00", "09:40"]
    assert stops[1].manual is True


def test_unparsable_input_keeps_previous_value():
    scheduler = ItineraryScheduler(_points(2), "08:00", 30, 15)

    assert _times(scheduler.set_start_time("soon")) == ["08:00", "08:45"]
    assert scheduler.start_time == "08:00"
    assert _times(scheduler.set_stop_time(1, "later")) == ["08:00", "08:45"]


def test_unparsable_initial_start_uses_configured_default():
    scheduler = ItineraryScheduler(_points(1), "not a time", 30, 15)

    assert scheduler.start_time == settings.default_start_time
    assert _times(scheduler.stops) == [settings.default_start_time]


def test_negative_values_are_rejected():
    scheduler = ItineraryScheduler(_points(2), "08:00", 30, 15)

    with pytest.raises(ValueError):
        scheduler.set_travel_buffer(-5)
    with pytest.raises(ValueError):
        scheduler.set_stop_duration(0, -1)


def test_negative_duration_overrides_are_rejected():
    with pytest.raises(ValueError):
        ItineraryScheduler(_points(2), "08:00", 30, 15, durations={0: -120})
    with pytest.raises(ValueError):
        schedule(_points(2), "08:00", -30, 15)


def test_wrapping_past_midnight_is_logged(caplog):
    with caplog.at_level("WARNING", logger="visit_routes.services.itinerary.scheduler"):
        stops = schedule(_points(3), "23:00", 30, 15)

    assert _times(stops) == ["23:00", "23:45", "00:30"]
    assert len([record for record in caplog.records if "past midnight" in record.message]) == 1
