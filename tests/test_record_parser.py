"""Tests for single-line point parsing."""
from __future__ import annotations

import pytest

from pointgroups.loaders import RecordParser
from pointgroups.error_handling import MalformedRecordError


def test_position_and_rgb():
    record = RecordParser().parse("1,2,3,255,0,0")

    assert record.position == (1.0, 2.0, 3.0)
    assert record.rgb == (255, 0, 0)
    assert record.intensity is None


def test_invert_yz_swaps_axes():
    record = RecordParser(invert_yz=True).parse("1,2,3,255,0,0")

    assert record.position == (1.0, 3.0, 2.0)
    assert record.source_position == (1.0, 2.0, 3.0)


def test_scale_and_invert():
    record = RecordParser(scale=2.0, invert_yz=True).parse("1.5,-2,4")

    assert record.position == (3.0, 8.0, -4.0)


def test_position_only_line_has_no_optional_fields():
    record = RecordParser().parse("0.5,0.25,0.125")

    assert record.rgb is None
    assert record.intensity is None


def test_five_fields_is_not_rgb():
    record = RecordParser().parse("1,2,3,10,20")

    assert record.rgb is None


def test_seventh_field_is_intensity():
    record = RecordParser().parse("1,2,3,10,20,30,0.75")

    assert record.rgb == (10, 20, 30)
    assert record.intensity == pytest.approx(0.75)


def test_whitespace_and_custom_delimiter():
    record = RecordParser(delimiter=" ").parse("  1 2 3  ")

    assert record.position == (1.0, 2.0, 3.0)


@pytest.mark.parametrize("line", [
    "1,2",
    "1,two,3",
    "",
    "1,2,nan",
    "1,2,3,256,0,0",
    "1,2,3,1.5,0,0",
    "1,2,3,0,0,0,bright",
])
def test_malformed_lines_raise(line):
    with pytest.raises(MalformedRecordError) as excinfo:
        RecordParser().parse(line)

    assert excinfo.value.line == line
    assert excinfo.value.line_number is None


def test_error_can_be_tagged_with_line_number():
    with pytest.raises(MalformedRecordError) as excinfo:
        RecordParser().parse("1,x,3")

    tagged = excinfo.value.at_line(12)

    assert isinstance(tagged, MalformedRecordError)
    assert tagged.line_number == 12
    assert str(tagged).startswith("line 12:")


def test_disabled_optional_fields_are_not_decoded():
    record = RecordParser(read_rgb=False, read_intensity=False).parse("1,2,3,0.5,0.2,0.1,n/a")

    assert record.position == (1.0, 2.0, 3.0)
    assert record.rgb is None
    assert record.intensity is None


def test_rgb_only_ignores_bad_intensity_field():
    record = RecordParser(read_intensity=False).parse("1,2,3,255,0,0,n/a")

    assert record.rgb == (255, 0, 0)
    assert record.intensity is None
