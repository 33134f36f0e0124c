## shortopts: value accessor tests

import pytest

from shortopts import OptionParser


def _tracked(*args: str) -> OptionParser:
    """Helper: parser with a few described options, tracked over 'args'."""
    parser = OptionParser("vn:f:b:d:t:x:")
    parser.describe("v", "%s", "Verbose")
    parser.describe("n", "%d", "Number")
    parser.describe("f", "%s", "Filename")
    parser.describe("b", "%b", "Boolean")
    parser.describe("d", "%lf", "Double")
    parser.describe("t", int, "Repeated number")
    parser.track(list(args))
    return parser


def test_scan_typed_values():
    parser = _tracked("-n", "42", "-f", "data.txt", "-b", "yes", "-d", "3.14")
    assert parser.scan_value("n") == 42
    assert parser.scan_value("f") == "data.txt"
    assert parser.scan_value("b") is True
    assert parser.scan_value("d") == pytest.approx(3.14)


def test_string_format_returns_raw_text():
    parser = _tracked("-f", "  two words ")
    assert parser.scan_value("f") == "  two words "


@pytest.mark.parametrize("text", ["true", "yes", "1", "on"])
def test_boolean_true_words(text):
    assert _tracked("-b", text).scan_value("b") is True


@pytest.mark.parametrize("text", ["TRUE", "Yes", "off", "0", "maybe", ""])
def test_boolean_never_misses(text):
    assert _tracked("-b", text).scan_value("b") is False


def test_miss_on_undefined_option():
    assert _tracked("-v").scan_value("z") is None


def test_miss_on_unused_option():
    assert _tracked("-v").scan_value("n") is None


def test_miss_on_flag_even_with_format():
    parser = _tracked("-v")
    assert parser.is_used("v")
    assert parser.scan_value("v") is None


def test_miss_without_format():
    parser = _tracked("-x", "value")
    assert parser.find("x").values == ["value"]
    assert parser.scan_value("x") is None


def test_miss_with_empty_format():
    parser = _tracked("-x", "value")
    parser.describe("x", "", "Empty format")
    assert parser.scan_value("x") is None


@pytest.mark.parametrize("fmt", ["%s", "%d", "%b", "%lf"])
def test_miss_past_the_last_value(fmt):
    parser = _tracked("-t", "1", "-t", "2")
    parser.describe("t", fmt)
    assert parser.scan_value("t", 2) is None
    assert parser.scan_value("t", -1) is None


def test_miss_on_format_mismatch():
    assert _tracked("-n", "abc").scan_value("n") is None


def test_scan_converts_to_requested_type():
    parser = _tracked("-n", "42", "-f", "abc")
    value = parser.scan_value("n", 0, float)
    assert value == 42.0 and isinstance(value, float)
    assert parser.scan_value("n", 0, str) == "42"
    assert parser.scan_value("f", 0, int) is None


def test_length():
    parser = _tracked("-t", "1", "-t", "2", "-v")
    assert parser.length("t") == 2
    assert parser.length("v") == 0
    assert parser.length("n") == 0
    assert parser.length("z") == 0


def test_is_used():
    parser = _tracked("-v")
    assert parser.is_used("v").name == "v"
    assert parser.is_used("n") is None
    assert parser.is_used("z") is None


def test_for_each_yields_scanned_values_in_order():
    parser = _tracked("-t", "1", "-t", "2", "-t", "3")
    assert list(parser.for_each("t")) == [(0, 1), (1, 2), (2, 3)]


def test_for_each_is_restartable():
    parser = _tracked("-t", "5", "-t", "6")
    first = parser.for_each("t")
    assert next(first) == (0, 5)
    assert list(parser.for_each("t")) == [(0, 5), (1, 6)]
    assert list(first) == [(1, 6)]


def test_for_each_stops_at_first_scan_failure():
    parser = _tracked("-t", "1", "-t", "x", "-t", "3")
    assert parser.length("t") == 3
    assert list(parser.for_each("t")) == [(0, 1)]


def test_for_each_on_unused_option_is_empty():
    assert list(_tracked().for_each("t")) == []
