import pytest

from duty_timeline.models import DutyStatus
from duty_timeline.services import classify, parse_location


@pytest.mark.parametrize(
    "halt_type, expected",
    [
        ("DRIVE", DutyStatus.DRIVING),
        ("STOP", DutyStatus.ON_DUTY_NOT_DRIVING),
        ("ON_DUTY_NOT_DRIVING", DutyStatus.ON_DUTY_NOT_DRIVING),
        ("BREAK", DutyStatus.OFF_DUTY),
        ("OFF_DUTY", DutyStatus.OFF_DUTY),
        ("SLEEPER", DutyStatus.SLEEPER_BERTH),
        (" drive ", DutyStatus.DRIVING),
    ],
)
def test_classify_known_halt_types(halt_type, expected):
    assert classify(halt_type) == expected


@pytest.mark.parametrize("halt_type", ["FUEL", "", None, "sleeping"])
def test_classify_unknown_halt_types_default_to_off_duty(halt_type):
    assert classify(halt_type) == DutyStatus.OFF_DUTY


def test_parse_location_with_coordinates():
    parsed = parse_location("Springfield, IL (39.7817, -89.6501)")

    assert parsed.name == "Springfield, IL"
    assert parsed.latitude == pytest.approx(39.7817)
    assert parsed.longitude == pytest.approx(-89.6501)
    assert parsed.has_coordinates


def test_parse_location_without_coordinates_keeps_text():
    parsed = parse_location("Rest Area I-80 mile 45")

    assert parsed.name == "Rest Area I-80 mile 45"
    assert parsed.latitude is None
    assert parsed.longitude is None


@pytest.mark.parametrize("text", [None, "", "   "])
def test_parse_location_empty_uses_placeholder(text):
    assert parse_location(text, placeholder="Somewhere").name == "Somewhere"


def test_parse_location_coordinates_only_uses_placeholder_name():
    parsed = parse_location("(40.0, -75.5)", placeholder="Unknown Location")

    assert parsed.name == "Unknown Location"
    assert parsed.has_coordinates


def test_parse_location_out_of_range_coordinates_are_dropped():
    parsed = parse_location("Nowhere (123.0, 45.0)")

    assert parsed.name == "Nowhere"
    assert not parsed.has_coordinates


def test_parse_location_unclosed_parenthesis_is_name_only():
    parsed = parse_location("Depot (12.5, 8.1")

    assert parsed.name == "Depot (12.5, 8.1"
    assert not parsed.has_coordinates
