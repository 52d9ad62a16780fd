import pytest

from common.validators import format_clock_time, format_duration_hm
from duty_timeline.exceptions import TimelineConsistencyError
from duty_timeline.models import DayTimeline, DutyStatus, Segment
from factories import make_event


def test_totals_for_drive_and_off_duty(builder, aggregator):
    (timeline,) = builder.build([make_event(1, 120, "DRIVE"), make_event(1, 1320, "OFF_DUTY")])

    totals = aggregator.aggregate(timeline)

    assert totals.formatted == {
        DutyStatus.OFF_DUTY: "22:00",
        DutyStatus.SLEEPER_BERTH: "00:00",
        DutyStatus.DRIVING: "02:00",
        DutyStatus.ON_DUTY_NOT_DRIVING: "00:00",
    }
    assert totals.hours[DutyStatus.DRIVING] == pytest.approx(2.0)
    assert totals.is_complete


def test_totals_include_filler_time(builder, aggregator):
    events = [make_event(1, 45, "STOP"), make_event(1, 30, "SLEEPER")]
    (timeline,) = builder.build(events)

    totals = aggregator.aggregate(timeline)

    assert totals.formatted[DutyStatus.ON_DUTY_NOT_DRIVING] == "00:45"
    assert totals.formatted[DutyStatus.SLEEPER_BERTH] == "00:30"
    assert totals.formatted[DutyStatus.OFF_DUTY] == "22:45"
    assert totals.total_hours == pytest.approx(24)


def test_aggregate_rejects_incomplete_day(aggregator):
    broken = DayTimeline(
        day=1, segments=(Segment(start=0.0, end=10.0, status=DutyStatus.DRIVING),)
    )

    with pytest.raises(TimelineConsistencyError):
        aggregator.aggregate(broken)


def test_aggregate_rejects_gaps(aggregator):
    broken = DayTimeline(
        day=1,
        segments=(
            Segment(start=0.0, end=4.0, status=DutyStatus.DRIVING),
            Segment(start=5.0, end=24.0, status=DutyStatus.OFF_DUTY),
        ),
    )

    with pytest.raises(AssertionError):
        aggregator.aggregate(broken)


def test_summarize_trip(builder, aggregator):
    events = [
        make_event(1, 600, "DRIVE"),
        make_event(2, 300, "DRIVE"),
        make_event(2, 60, "STOP"),
    ]

    summary = aggregator.summarize_trip(builder.build(events))

    assert summary["number_of_days"] == 2
    assert summary["status_formatted"]["driving"] == "15:00"
    assert summary["on_duty_hours"] == pytest.approx(16)
    assert summary["total_hours"] == pytest.approx(48)


@pytest.mark.parametrize(
    "hours, expected",
    [
        (0, "00:00"),
        (0.5, "00:30"),
        (2.25, "02:15"),
        (24, "24:00"),
        (1.9999, "02:00"),
        (10 + 59.6 / 60, "11:00"),
    ],
)
def test_format_clock_time(hours, expected):
    assert format_clock_time(hours) == expected


def test_format_duration_hm():
    assert format_duration_hm(2.5) == "2h 30m"
    assert format_duration_hm(0.999999) == "1h 0m"
