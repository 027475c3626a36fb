import pytest

from wspcheck.schema.duration import from_human, to_human
from wspcheck.schema.errors import InvalidDuration, SchemaError


@pytest.mark.parametrize("seconds,token", [
    (0, "0s"),
    (10, "10s"),
    (90, "90s"),
    (300, "5m"),
    (3600, "1h"),
    (86400, "1d"),
    (604800, "7d"),
    (31536000, "1y"),
    (63072000, "2y"),
])
def test_to_human_picks_largest_exact_unit(seconds, token):
    assert to_human(seconds) == token


@pytest.mark.parametrize("token,seconds", [
    ("10s", 10),
    ("5m", 300),
    ("2h", 7200),
    ("7d", 604800),
    ("1y", 31536000),
    (" 6H ", 21600),
    ("1D", 86400),
])
def test_from_human(token, seconds):
    assert from_human(token) == seconds


def test_canonical_form_is_lossy():
    assert from_human("3600s") == 3600
    assert to_human(from_human("3600s")) == "1h"
    assert to_human(from_human("60m")) == "1h"


def test_round_trip_on_aligned_values():
    for s in (1, 59, 60, 120, 3600, 86400, 31536000, 3 * 31536000):
        assert from_human(to_human(s)) == s


@pytest.mark.parametrize("bad", ["", "   ", "s", "10", "10w", "abc", "1.5h", "1 0s", "1_0s"])
def test_from_human_rejects(bad):
    with pytest.raises(InvalidDuration):
        from_human(bad)


def test_invalid_duration_is_a_schema_error():
    with pytest.raises(SchemaError):
        from_human("10x")
