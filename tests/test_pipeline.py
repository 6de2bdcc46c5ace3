"""Tests for the label preparation pipeline."""

from labelprep.lib.pipeline import label_prepare
from labelprep.models.dataModel import TemplateError

TEMPLATE = (
    "^XA"
    "^FO20,40^A0N,20,20^FD<<NAME>>^FS"
    "{{IF <<LOT>>}}^FO20,80^FDLot <<LOT>>^FS{{ENDIF}}"
    "^XZ"
)


def test_render_then_scale():
    result = label_prepare(TEMPLATE, {"<<NAME>>": "Ada", "<<LOT>>": "7"}, 200, 300)
    assert result.success
    assert result.text == (
        "^XA^FO30,60^A0N,30,30^FDAda^FS^FO30,120^FDLot 7^FS^XZ"
    )


def test_dropped_block_never_scaled():
    result = label_prepare(TEMPLATE, {"<<NAME>>": "Ada"}, 200, 300)
    assert result.text == "^XA^FO30,60^A0N,30,30^FDAda^FS^XZ"


def test_placeholder_geometry_is_scaled():
    placeholders = {"<<X>>": "100", "<<Y>>": "50"}
    result = label_prepare("^XA^FO<<X>>,<<Y>>^XZ", placeholders, 200, 300)
    assert result.text == "^XA^FO150,75^XZ"


def test_equal_resolution_keeps_stream():
    result = label_prepare("^XA^FO10,10^FDx^FS^XZ", {}, 203, 203)
    assert result.text == "^XA^FO10,10^FDx^FS^XZ"


def test_render_error_short_circuits():
    result = label_prepare("^XA{{IF X}}^FO10,10", {"X": "1"}, 200, 300)
    assert not result.success
    assert result.error is TemplateError.MISSING_ENDIF


def test_zero_source_resolution_keeps_rendered_text():
    result = label_prepare("^XA^FO10,20^FD<<N>>^FS^XZ", {"<<N>>": "7"}, 0, 300)
    assert result.success
    assert result.text == "^XA^FO10,20^FD7^FS^XZ"


def test_negative_target_resolution_scales():
    result = label_prepare("^XA^FO10,20^XZ", {}, 200, -300)
    assert result.success
    assert result.text == "^XA^FO-15,-30^XZ"
