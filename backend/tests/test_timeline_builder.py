import random

import pytest

from factories import make_event
from duty_timeline.exceptions import InputError
from duty_timeline.models import DutyStatus
from duty_timeline.services import TimelineBuilderService


def assert_gapless(timeline):
    segments = timeline.segments
    assert segments[0].start == pytest.approx(0, abs=1e-6)
    assert segments[-1].end == pytest.approx(24, abs=1e-6)
    for previous, current in zip(segments, segments[1:]):
        assert previous.end == pytest.approx(current.start, abs=1e-6)
        assert previous.start <= current.start


def test_single_day_drive_then_off_duty(builder):
    events = [make_event(1, 120, "DRIVE"), make_event(1, 1320, "OFF_DUTY")]

    timelines = builder.build(events)

    assert len(timelines) == 1
    segments = timelines[0].segments
    assert [(s.start, s.end, s.status) for s in segments] == [
        (0.0, 2.0, DutyStatus.DRIVING),
        (2.0, 24.0, DutyStatus.OFF_DUTY),
    ]
    assert not any(segment.is_filler for segment in segments)


def test_day_change_pads_previous_day_with_off_duty(builder):
    events = [
        make_event(1, 60, "ON_DUTY_NOT_DRIVING", description="Pre-trip inspection"),
        make_event(1, 540, "DRIVE", description="Driving to pickup"),
        make_event(2, 60, "DRIVE", description="Driving to delivery"),
    ]

    day_one, day_two = builder.build(events)

    filler = day_one.segments[-1]
    assert (filler.start, filler.end) == (10.0, 24.0)
    assert filler.status == DutyStatus.OFF_DUTY
    assert filler.description == "End of the day"
    assert filler.is_filler
    assert day_two.day == 2
    assert day_two.segments[0].start == 0.0
    assert day_two.segments[0].status == DutyStatus.DRIVING
    assert_gapless(day_one)
    assert_gapless(day_two)


def test_end_of_day_filler_uses_completed_day_location(builder):
    events = [
        make_event(1, 300, "DRIVE", location="Dallas, TX (32.7767, -96.7970)"),
        make_event(2, 120, "DRIVE", location="Austin, TX (30.2672, -97.7431)"),
    ]

    day_one, _ = builder.build(events)

    filler = day_one.segments[-1]
    assert filler.location_name == "Dallas, TX"
    assert filler.latitude == pytest.approx(32.7767)


def test_empty_events_give_empty_output(builder):
    assert builder.build([]) == []


def test_skipped_days_are_backfilled_with_off_duty(builder):
    events = [make_event(1, 120, "DRIVE"), make_event(4, 120, "DRIVE")]

    timelines = builder.build(events)

    assert [timeline.day for timeline in timelines] == [1, 2, 3, 4]
    for idle_day in timelines[1:3]:
        assert len(idle_day.segments) == 1
        segment = idle_day.segments[0]
        assert (segment.start, segment.end) == (0.0, 24.0)
        assert segment.status == DutyStatus.OFF_DUTY


def test_first_event_after_day_one_backfills_leading_days(builder):
    timelines = builder.build([make_event(3, 60, "DRIVE")])

    assert [timeline.day for timeline in timelines] == [1, 2, 3]
    assert timelines[0].segments[0].status == DutyStatus.OFF_DUTY
    assert timelines[2].segments[0].status == DutyStatus.DRIVING


def test_day_summing_to_24h_rolls_over_despite_float_rounding(builder):
    # 5 + 980 + 455 minutes add up to 23.999999999999996h as floats
    events = [
        make_event(1, 5, "STOP"),
        make_event(1, 980, "DRIVE"),
        make_event(1, 455, "OFF_DUTY"),
        make_event(1, 60, "SLEEPER"),
    ]

    day_one, day_two = builder.build(events)

    assert [s.status for s in day_one.segments] == [
        DutyStatus.ON_DUTY_NOT_DRIVING,
        DutyStatus.DRIVING,
        DutyStatus.OFF_DUTY,
    ]
    assert not any(segment.is_filler for segment in day_one.segments)
    first = day_two.segments[0]
    assert first.status == DutyStatus.SLEEPER_BERTH
    assert (first.start, first.end) == (0.0, pytest.approx(1.0))
    assert_gapless(day_one)
    assert_gapless(day_two)


def test_clock_rolls_over_between_events(builder):
    events = [
        make_event(1, 600, "OFF_DUTY"),
        make_event(1, 840, "DRIVE"),
        make_event(1, 60, "STOP"),
    ]

    timelines = builder.build(events)

    assert len(timelines) == 2
    assert timelines[0].segments[-1].end == 24.0
    assert not timelines[0].segments[-1].is_filler
    assert timelines[1].segments[0].status == DutyStatus.ON_DUTY_NOT_DRIVING
    assert (timelines[1].segments[0].start, timelines[1].segments[0].end) == (0.0, 1.0)


def test_event_running_past_midnight_is_clipped_not_split(builder):
    events = [make_event(1, 1200, "OFF_DUTY"), make_event(1, 300, "DRIVE")]

    timelines = builder.build(events)

    assert len(timelines) == 1
    last = timelines[0].segments[-1]
    assert (last.start, last.end) == (20.0, 24.0)
    assert last.status == DutyStatus.DRIVING


def test_overflowing_event_followed_by_next_day(builder):
    events = [make_event(1, 1500, "DRIVE"), make_event(2, 60, "STOP")]

    day_one, day_two = builder.build(events)

    assert [(s.start, s.end) for s in day_one.segments] == [(0.0, 24.0)]
    assert day_two.segments[0].status == DutyStatus.ON_DUTY_NOT_DRIVING


def test_zero_duration_events_keep_clock(builder):
    events = [
        make_event(1, 0, "DRIVE"),
        make_event(1, 60, "OFF_DUTY"),
        make_event(1, 0, "STOP"),
    ]

    (timeline,) = builder.build(events)

    assert [(s.start, s.end) for s in timeline.segments] == [
        (0.0, 0.0),
        (0.0, 1.0),
        (1.0, 1.0),
        (1.0, 24.0),
    ]


def test_negative_duration_is_rejected(builder):
    with pytest.raises(InputError):
        builder.build([make_event(1, 60), make_event(1, -5)])


def test_decreasing_day_is_rejected(builder):
    with pytest.raises(InputError):
        builder.build([make_event(2, 60), make_event(1, 60)])


def test_day_below_one_is_rejected(builder):
    with pytest.raises(InputError):
        builder.build([make_event(0, 60)])


def test_day_beyond_trip_limit_is_rejected(builder):
    with pytest.raises(InputError):
        builder.build([make_event(1, 60), make_event(builder.max_trip_days + 1, 60)])


def test_rollover_beyond_trip_limit_is_rejected():
    limited = TimelineBuilderService(placeholder_location="Unknown Location", max_trip_days=3)
    full_days = [make_event(1, 1440) for _ in range(3)]

    assert len(limited.build(full_days)) == 3
    with pytest.raises(InputError):
        limited.build(full_days + [make_event(1, 60)])


def test_non_finite_duration_is_rejected(builder):
    with pytest.raises(InputError):
        builder.build([make_event(1, float("nan"))])


def test_unknown_halt_type_is_off_duty(builder):
    (timeline,) = builder.build([make_event(1, 90, "FUEL")])

    assert timeline.segments[0].status == DutyStatus.OFF_DUTY


def test_build_is_pure(builder):
    events = [
        make_event(1, 60, "STOP", location="Chicago, IL (41.88, -87.63)"),
        make_event(1, 480, "DRIVE"),
        make_event(2, 600, "SLEEPER"),
    ]
    snapshot = list(events)

    first = builder.build(events)
    second = builder.build(events)

    assert first == second
    assert events == snapshot


def test_build_from_upstream_instructions(builder):
    instructions = [
        {
            "day": 1,
            "duration": 90,
            "halt_type": "DRIVE",
            "current_location": "Denver, CO (39.7392, -104.9903)",
            "description": "Driving to pickup",
        },
        {"day": 1, "duration": 60, "halt_type": "STOP", "description": "Pickup"},
    ]

    (timeline,) = builder.build_from_instructions(instructions)

    first = timeline.segments[0]
    assert first.location_name == "Denver, CO"
    assert first.end == pytest.approx(1.5)
    assert timeline.segments[1].location_name == "Unknown Location"


def test_random_event_sequences_always_cover_full_days(builder, aggregator):
    rng = random.Random(20240611)
    halt_types = ["DRIVE", "STOP", "BREAK", "OFF_DUTY", "SLEEPER", "ON_DUTY_NOT_DRIVING", "X"]

    for _ in range(50):
        day = 1
        events = []
        for _ in range(rng.randint(1, 15)):
            day += rng.choice([0, 0, 0, 1, 2])
            events.append(make_event(day, rng.uniform(0, 700), rng.choice(halt_types)))

        timelines = builder.build(events)

        assert [t.day for t in timelines] == list(range(1, len(timelines) + 1))
        assert len(timelines) >= events[-1].day
        for timeline in timelines:
            assert_gapless(timeline)
            totals = aggregator.aggregate(timeline)
            assert sum(totals.hours.values()) == pytest.approx(24, abs=1e-6)
