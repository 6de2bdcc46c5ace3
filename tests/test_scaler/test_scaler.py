"""Tests for ZPL resolution scaling."""

import re
import pytest
from decimal import Decimal
from labelprep.lib.scaler import (
    SCALING_TABLE,
    commands_scale,
    command_parse,
    parameter_scale,
    scaleFactor_calculate,
    stream_tokenize,
)


# Scale factor
@pytest.mark.parametrize(
    "source, target, expected",
    [
        (200, 300, Decimal("1.50")),
        (203, 300, Decimal("1.48")),
        (300, 203, Decimal("0.68")),
        (203, 600, Decimal("2.96")),
        (8, 1, Decimal("0.13")),
        (203, 203, Decimal("1.00")),
    ],
)
def test_scale_factor(source, target, expected):
    assert scaleFactor_calculate(source, target) == expected


@pytest.mark.parametrize(
    "source, target, expected",
    [
        (203, 0, Decimal("0.00")),
        (-200, 300, Decimal("-1.50")),
        (200, -300, Decimal("-1.50")),
        (-8, 1, Decimal("-0.13")),
    ],
)
def test_scale_factor_zero_and_negative(source, target, expected):
    assert scaleFactor_calculate(source, target) == expected


def test_scale_factor_zero_source():
    assert scaleFactor_calculate(0, 300) is None


# Scaling table
def test_scaling_table_contents():
    assert dict(SCALING_TABLE) == {
        "FO": 2, "PW": None, "FT": 2,
        "A0": None, "A1": None, "A2": None, "A3": None, "A4": None,
        "A5": None, "A6": None, "A7": None, "A8": None, "A9": None, "A@": None,
        "LL": None, "LH": None, "GB": None, "FB": None, "BY": None,
        "BQ": 3, "B3": None, "BC": None, "B7": 2,
    }  # fmt: skip


def test_scaling_table_is_read_only():
    with pytest.raises(TypeError):
        SCALING_TABLE["ZZ"] = 1


# Tokenizing and parsing
def test_tokenize_leading_separator():
    assert stream_tokenize("^XA^XZ") == ["", "XA", "XZ"]


def test_parse_empty_token():
    assert command_parse("", Decimal("1.5")) == ""


def test_parse_unknown_command_unchanged():
    assert command_parse("FD10,20", Decimal("1.5")) == "FD10,20"


def test_parse_single_character_token():
    assert command_parse("X", Decimal("1.5")) == "X"


@pytest.mark.parametrize(
    "parameter, expected",
    [
        ("10", "15"),
        ("10.4", "16"),
        ("5", "8"),
        ("-5", "-8"),
        ("0", "0"),
        ("-0.2", "0"),
        ("1e2", "150"),
        (" 10", "15"),
        ("20\n", "30"),
        ("N", "N"),
        ("", ""),
        ("nan", "nan"),
        ("inf", "inf"),
        ("1_000", "1_000"),
        ("1e999999", "1e999999"),
    ],
)
def test_parameter_scale(parameter, expected):
    assert parameter_scale(parameter, Decimal("1.5")) == expected


# Whole streams
def test_unknown_command_passthrough():
    assert commands_scale("^XX1,2,3", 203, 300) == "^XX1,2,3"


def test_known_command_scales_leading_parameters():
    assert commands_scale("^FO10,20,ABC", 200, 300) == "^FO15,30,ABC"


def test_scale_all_parameters():
    assert commands_scale("^GB10.4,2.2,1", 200, 300) == "^GB16,3,2"


def test_font_orientation_left_alone():
    stream = "^A@N,30,30,E:FONT.TTF"
    assert commands_scale(stream, 200, 300) == "^A@N,45,45,E:FONT.TTF"


def test_partial_count_commands():
    assert commands_scale("^BQN,2,10", 200, 300) == "^BQN,3,15"
    assert commands_scale("^B7N,10,5,4", 200, 300) == "^B7N,15,5,4"


def test_fewer_parameters_than_count():
    assert commands_scale("^FO10", 200, 300) == "^FO15"
    assert commands_scale("^FO", 200, 300) == "^FO"


def test_empty_parameter_kept():
    assert commands_scale("^FO,20", 200, 300) == "^FO,30"


def test_empty_tokens_skipped():
    assert commands_scale("^^FO10,10^", 200, 300) == "^FO15,15"


def test_stream_without_leading_separator():
    assert commands_scale("XA^FO10,10", 200, 300) == "^XA^FO15,15"


def test_empty_stream():
    assert commands_scale("", 203, 300) == ""


def test_line_break_after_scaled_number_is_dropped():
    stream = "^XA\n^FO10,20\n^FDHello^FS\n^XZ"
    assert commands_scale(stream, 200, 300) == "^XA\n^FO15,30^FDHello^FS\n^XZ"


def test_zero_target_collapses_geometry():
    assert commands_scale("^FO10,20", 203, 0) == "^FO0,0"


def test_negative_source_flips_geometry():
    assert commands_scale("^FO10,20", -200, 300) == "^FO-15,-30"


def test_zero_source_leaves_stream_unchanged():
    stream = "XA^FO10.5,20^XZ"
    assert commands_scale(stream, 0, 300) == stream


def test_identity_at_equal_resolution():
    stream = (
        "^XA^PW812^LL1218^LH0,0"
        "^FO50,60^A0N,30,30^FDHello^FS"
        "^FO50,120^BY2,3,80^BCN,80,Y,N,N^FD12345^FS"
        "^FO40,300^GB700,3,3^FS^XZ"
    )
    assert commands_scale(stream, 203, 203) == stream


def test_full_label_upscale():
    stream = "^XA^PW400^LL600^FO20,40^A0N,20,20^FDHi^FS^FT10,10,0^XZ"
    expected = "^XA^PW600^LL900^FO30,60^A0N,30,30^FDHi^FS^FT15,15,0^XZ"
    assert commands_scale(stream, 200, 300) == expected


def test_round_trip_within_tolerance():
    original = "^FO100,200^GB333,47,3"
    there = commands_scale(original, 203, 300)
    back = commands_scale(there, 300, 203)

    def numbers(stream: str) -> list[int]:
        return [int(n) for n in re.findall(r"\d+", stream)]

    for before, after in zip(numbers(original), numbers(back)):
        assert abs(before - after) <= 2
