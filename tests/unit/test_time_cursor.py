"""
Unit tests for the time cursor and session bounds

Tests cover:
- MAX computation from wall-clock time
- Clamping into [MIN, MAX] and the derived navigation flags
- Step gating at both bounds
- Rejection of malformed input without state change
- Absolute-time stepping across DST transitions
"""

import pytest
from datetime import datetime, timedelta, timezone

from sunviewer.navigation.bounds import Bounds, latest_snapshot
from sunviewer.navigation.time_cursor import TimeCursor, NavigationState
from sunviewer.navigation.timestamps import InvalidInputError, to_utc


LOCAL = timezone(timedelta(hours=2))


def local(*args):
    return datetime(*args, tzinfo=LOCAL)


@pytest.fixture
def cursor():
    """Cursor for a session started at 2024-06-10 14:45 local"""
    return TimeCursor.initialize(now=local(2024, 6, 10, 14, 45), tz=LOCAL)


class TestLatestSnapshot:
    """Test computation of the MAX bound"""

    def test_before_half_hour_uses_previous_hour(self):
        assert latest_snapshot(local(2024, 6, 10, 14, 15), tz=LOCAL) == local(2024, 6, 10, 13, 0)

    def test_after_half_hour_uses_current_hour(self):
        assert latest_snapshot(local(2024, 6, 10, 14, 45), tz=LOCAL) == local(2024, 6, 10, 14, 0)

    def test_exactly_half_hour_uses_current_hour(self):
        assert latest_snapshot(local(2024, 6, 10, 14, 30), tz=LOCAL) == local(2024, 6, 10, 14, 0)

    def test_just_after_midnight_rolls_back_a_day(self):
        assert latest_snapshot(local(2024, 6, 10, 0, 10), tz=LOCAL) == local(2024, 6, 9, 23, 0)

    def test_seconds_and_microseconds_truncated(self):
        result = latest_snapshot(local(2024, 6, 10, 14, 59, 59, 999999), tz=LOCAL)
        assert result == local(2024, 6, 10, 14, 0)

    def test_custom_settle_minutes(self):
        assert latest_snapshot(local(2024, 6, 10, 14, 15), settle_minutes=10, tz=LOCAL) == \
            local(2024, 6, 10, 14, 0)

    def test_utc_now_converted_to_local(self):
        # 12:45 UTC is 14:45 at UTC+2
        now = datetime(2024, 6, 10, 12, 45, tzinfo=timezone.utc)
        result = latest_snapshot(now, tz=LOCAL)
        assert result == local(2024, 6, 10, 14, 0)
        assert result.utcoffset() == timedelta(hours=2)


class TestBounds:
    """Test the immutable bounds value object"""

    def test_from_now_uses_archive_start(self):
        bounds = Bounds.from_now(local(2024, 6, 10, 14, 45), tz=LOCAL)
        assert bounds.minimum == local(2010, 5, 19, 0, 0)
        assert bounds.maximum == local(2024, 6, 10, 14, 0)

    def test_minimum_after_maximum_rejected(self):
        with pytest.raises(ValueError):
            Bounds(local(2024, 1, 2), local(2024, 1, 1))

    def test_clock_before_archive_start_rejected(self):
        with pytest.raises(ValueError):
            Bounds.from_now(local(2009, 1, 1, 12, 45), tz=LOCAL)

    def test_bounds_are_frozen(self):
        bounds = Bounds(local(2024, 1, 1), local(2024, 1, 2))
        with pytest.raises(AttributeError):
            bounds.maximum = local(2024, 1, 3)

    def test_clamp(self):
        bounds = Bounds(local(2024, 1, 1), local(2024, 1, 2))
        assert bounds.clamp(local(2023, 12, 31)) == bounds.minimum
        assert bounds.clamp(local(2024, 1, 3)) == bounds.maximum
        assert bounds.clamp(local(2024, 1, 1, 12)) == local(2024, 1, 1, 12)

    def test_contains(self):
        bounds = Bounds(local(2024, 1, 1), local(2024, 1, 2))
        assert bounds.minimum in bounds
        assert bounds.maximum in bounds
        assert local(2024, 1, 3) not in bounds

    def test_str(self):
        bounds = Bounds(local(2024, 1, 1), local(2024, 1, 2, 5))
        assert str(bounds) == "[2024-01-01T00:00, 2024-01-02T05:00]"


class TestInitialState:
    """Test cursor state right after initialize()"""

    def test_starts_at_maximum(self, cursor):
        assert cursor.current == cursor.maximum == local(2024, 6, 10, 14, 0)
        assert cursor.minimum == local(2010, 5, 19, 0, 0)

    def test_initial_navigation_state(self, cursor):
        assert cursor.navigation_state == NavigationState(prev_available=True, next_available=False)

    def test_custom_earliest(self):
        cursor = TimeCursor.initialize(
            now=local(2024, 6, 10, 14, 45), earliest="2024-06-10T12:00", tz=LOCAL
        )
        assert cursor.minimum == local(2024, 6, 10, 12, 0)

    def test_get_status(self, cursor):
        status = cursor.get_status()

        assert status['current'] == '2024-06-10T14:00'
        assert status['minimum'] == '2010-05-19T00:00'
        assert status['maximum'] == '2024-06-10T14:00'
        assert status['prev_available'] is True
        assert status['next_available'] is False


class TestSetTo:
    """Test explicit time setting and clamping"""

    def test_inside_range_enables_both_directions(self, cursor):
        state = cursor.set_to("2015-01-01T12:00")

        assert cursor.current == local(2015, 1, 1, 12, 0)
        assert state == NavigationState(prev_available=True, next_available=True)

    def test_below_minimum_snaps_to_minimum(self, cursor):
        state = cursor.set_to(cursor.minimum - timedelta(hours=1))

        assert cursor.current == cursor.minimum
        assert state.prev_available is False
        assert state.next_available is True

    def test_above_maximum_snaps_to_maximum(self, cursor):
        cursor.set_to("2015-01-01T12:00")
        state = cursor.set_to(cursor.maximum + timedelta(hours=1))

        assert cursor.current == cursor.maximum
        assert state.next_available is False
        assert state.prev_available is True

    def test_exactly_minimum_disables_prev(self, cursor):
        state = cursor.set_to("2010-05-19T00:00")
        assert state.prev_available is False

    def test_far_future_clamped(self, cursor):
        cursor.set_to("2999-12-31T23:00")
        assert cursor.current == cursor.maximum

    def test_set_to_current_is_idempotent(self, cursor):
        cursor.set_to("2015-01-01T12:00")
        before = (cursor.current, cursor.prev_available, cursor.next_available)

        cursor.set_to(cursor.current)

        assert (cursor.current, cursor.prev_available, cursor.next_available) == before

    def test_minutes_preserved(self, cursor):
        cursor.set_to("2015-01-01T12:37")
        assert cursor.current.minute == 37

    def test_aware_input_normalized_to_local(self, cursor):
        cursor.set_to(datetime(2015, 1, 1, 10, 0, tzinfo=timezone.utc))

        assert cursor.current == local(2015, 1, 1, 12, 0)
        assert cursor.current.utcoffset() == timedelta(hours=2)

    @pytest.mark.parametrize("raw", [
        "",
        "not a date",
        "2015-13-01T00:00",
        "2015-02-30T00:00",
        "2015-01-01 25:00",
        None,
        12345,
    ])
    def test_malformed_input_rejected_without_change(self, cursor, raw):
        cursor.set_to("2015-01-01T12:00")
        before = (cursor.current, cursor.navigation_state)

        with pytest.raises(InvalidInputError):
            cursor.set_to(raw)

        assert (cursor.current, cursor.navigation_state) == before


class TestStepping:
    """Test hourly steps and their bound gates"""

    def test_step_backward_one_hour(self, cursor):
        state = cursor.step_backward()

        assert cursor.current == local(2024, 6, 10, 13, 0)
        assert state == NavigationState(prev_available=True, next_available=True)

    def test_step_forward_one_hour(self, cursor):
        cursor.set_to("2015-01-01T12:00")
        cursor.step_forward()
        assert cursor.current == local(2015, 1, 1, 13, 0)

    def test_step_forward_at_maximum_is_noop(self, cursor):
        assert cursor.step_forward() is None
        assert cursor.current == cursor.maximum
        assert cursor.next_available is False

    def test_step_backward_at_minimum_is_noop(self, cursor):
        cursor.set_to(cursor.minimum)

        assert cursor.step_backward() is None
        assert cursor.current == cursor.minimum
        assert cursor.prev_available is False

    def test_step_back_from_inside_last_hour_lands_on_minimum(self, cursor):
        cursor.set_to("2010-05-19T00:30")
        state = cursor.step_backward()

        assert cursor.current == cursor.minimum
        assert state.prev_available is False

    def test_step_forward_from_inside_last_hour_lands_on_maximum(self, cursor):
        cursor.set_to("2024-06-10T13:30")
        state = cursor.step_forward()

        assert cursor.current == cursor.maximum
        assert state.next_available is False

    def test_round_trip_returns_to_start(self, cursor):
        cursor.set_to("2015-01-01T12:00")
        start = cursor.current

        for _ in range(24):
            cursor.step_backward()
        for _ in range(24):
            cursor.step_forward()

        assert cursor.current == start

    def test_step_forward_to_maximum_then_stop(self, cursor):
        cursor.set_to("2024-06-10T11:00")

        assert cursor.step_forward() is not None
        assert cursor.step_forward() is not None
        assert cursor.step_forward() is not None
        assert cursor.step_forward() is None
        assert cursor.current == cursor.maximum


class TestDaylightSaving:
    """Test stepping in a zone with DST transitions"""

    @pytest.fixture
    def berlin(self):
        zoneinfo = pytest.importorskip("zoneinfo")
        try:
            return zoneinfo.ZoneInfo("Europe/Berlin")
        except zoneinfo.ZoneInfoNotFoundError:
            pytest.skip("tz database not available")

    def test_spring_forward_steps_one_absolute_hour(self, berlin):
        now = datetime(2021, 6, 1, 12, 45, tzinfo=berlin)
        cursor = TimeCursor.initialize(now=now, tz=berlin)

        # 03:00 CEST is one absolute hour after 01:00 CET
        cursor.set_to("2021-03-28T03:00")
        cursor.step_backward()

        assert cursor.current.hour == 1
        assert cursor.current.utcoffset() == timedelta(hours=1)

    def test_hour_steps_are_absolute(self, berlin):
        now = datetime(2021, 6, 1, 12, 45, tzinfo=berlin)
        cursor = TimeCursor.initialize(now=now, tz=berlin)
        cursor.set_to("2021-03-28T00:00")
        start = cursor.current

        for _ in range(5):
            cursor.step_forward()

        assert to_utc(cursor.current) - to_utc(start) == timedelta(hours=5)
        assert cursor.current.hour == 6  # wall clock skipped 02:00

    def test_fall_back_steps_through_repeated_hour(self, berlin):
        now = datetime(2021, 12, 1, 12, 45, tzinfo=berlin)
        cursor = TimeCursor.initialize(now=now, tz=berlin)

        # 02:00-03:00 occurs twice on 2021-10-31, first CEST then CET
        cursor.set_to("2021-10-31T03:00")
        start = cursor.current

        cursor.step_backward()
        assert cursor.current.hour == 2
        assert cursor.current.utcoffset() == timedelta(hours=1)

        cursor.step_backward()
        assert cursor.current.hour == 2
        assert cursor.current.utcoffset() == timedelta(hours=2)

        assert to_utc(start) - to_utc(cursor.current) == timedelta(hours=2)
