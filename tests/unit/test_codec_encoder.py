"""Unit tests for boardkit.codec.encoder: field omission, present-zero
preservation, group ordering and decode/encode round trips.
"""
from __future__ import annotations

import json

import pytest

from boardkit.codec.decoder import decode_envelope, decode_widgets
from boardkit.codec.encoder import (
    EnvelopeEncoder,
    encode,
    encode_dict,
    encode_json,
    encode_widgets,
)
from boardkit.model.nodes import (
    AlertValueDefinition,
    ChangeDefinition,
    ChangeRequest,
    GroupDefinition,
    NoteDefinition,
    TimeseriesDefinition,
    TimeseriesRequest,
    Widget,
    WidgetLayout,
    WidgetProcessQuery,
)


# ===========================================================================
# The note example
# ===========================================================================


class TestNoteExample:
    def test_encodes_exactly_type_and_content(self) -> None:
        widget = decode_envelope(b'{"definition":{"type":"note","content":"hi"}}')
        data = json.loads(encode(widget))
        assert data == {"definition": {"type": "note", "content": "hi"}}
        assert set(data["definition"]) == {"type", "content"}

    def test_encode_returns_bytes(self) -> None:
        assert isinstance(encode(Widget(definition=NoteDefinition(content="hi"))), bytes)

    def test_encode_json_text(self) -> None:
        widget = Widget(definition=NoteDefinition(content="hi"))
        assert encode_json(widget) == '{"definition": {"type": "note", "content": "hi"}}'
        assert encode_json(widget, indent=2).startswith("{\n  \"definition\"")

    def test_type_comes_first(self) -> None:
        data = encode_dict(Widget(definition=NoteDefinition(tick_pos="50%", content="x")))
        assert next(iter(data["definition"])) == "type"


# ===========================================================================
# Absent vs present
# ===========================================================================


class TestAbsentVersusPresent:
    def test_absent_fields_omitted(self) -> None:
        data = encode_dict(Widget(definition=AlertValueDefinition(alert_id="1")))
        assert data == {"definition": {"type": "alert_value", "alert_id": "1"}}

    def test_zero_precision_kept(self) -> None:
        data = encode_dict(Widget(definition=AlertValueDefinition(precision=0)))
        assert data["definition"]["precision"] == 0

    def test_false_kept(self) -> None:
        data = encode_dict(Widget(definition=NoteDefinition(show_tick=False)))
        assert data["definition"]["show_tick"] is False

    def test_empty_string_kept(self) -> None:
        data = encode_dict(Widget(definition=NoteDefinition(content="")))
        assert data["definition"]["content"] == ""

    def test_empty_requests_kept(self) -> None:
        data = encode_dict(Widget(definition=ChangeDefinition(requests=())))
        assert data["definition"]["requests"] == []

    def test_zero_id_kept(self) -> None:
        assert encode_dict(Widget(definition=NoteDefinition(), id=0))["id"] == 0

    def test_absent_id_and_layout_omitted(self) -> None:
        assert set(encode_dict(Widget(definition=NoteDefinition()))) == {"definition"}

    def test_zero_layout_coordinates_kept(self) -> None:
        data = encode_dict(Widget(definition=NoteDefinition(), layout=WidgetLayout(x=0.0, y=0.0)))
        assert data["layout"] == {"x": 0.0, "y": 0.0}

    def test_empty_layout_kept_as_object(self) -> None:
        data = encode_dict(Widget(definition=NoteDefinition(), layout=WidgetLayout()))
        assert data["layout"] == {}

    def test_zero_round_trip_through_bytes(self) -> None:
        raw = b'{"definition": {"type": "alert_value", "precision": 0}, "id": 0}'
        data = json.loads(encode(decode_envelope(raw)))
        assert data["definition"]["precision"] == 0
        assert data["id"] == 0
        assert "unit" not in data["definition"]
        assert "layout" not in data

    def test_request_base_fields(self) -> None:
        request = ChangeRequest(metric_query="sum:x{*}", increase_good=False)
        data = encode_dict(Widget(definition=ChangeDefinition(requests=(request,))))
        assert data["definition"]["requests"] == [{"q": "sum:x{*}", "increase_good": False}]

    def test_process_query_filters(self) -> None:
        request = TimeseriesRequest(process_query=WidgetProcessQuery(metric="m", filter_by=()))
        data = encode_dict(Widget(definition=TimeseriesDefinition(requests=(request,))))
        assert data["definition"]["requests"][0]["process_query"] == {"metric": "m", "filter_by": []}


# ===========================================================================
# Groups
# ===========================================================================


class TestGroupEncoding:
    def test_widgets_in_order(self) -> None:
        group = GroupDefinition(
            widgets=(
                Widget(definition=NoteDefinition(content="a")),
                Widget(definition=AlertValueDefinition(alert_id="b")),
                Widget(definition=NoteDefinition(content="c")),
            ),
            layout_type="ordered",
        )
        data = encode_dict(Widget(definition=group, id=9))
        types = [w["definition"]["type"] for w in data["definition"]["widgets"]]
        assert types == ["note", "alert_value", "note"]
        assert data["id"] == 9

    def test_empty_group_keeps_widgets_key(self) -> None:
        data = encode_dict(Widget(definition=GroupDefinition(widgets=())))
        assert data == {"definition": {"type": "group", "widgets": []}}

    def test_nested_envelope_fields(self) -> None:
        inner = Widget(definition=NoteDefinition(content="x"), id=2, layout=WidgetLayout(width=3.0))
        data = encode_dict(Widget(definition=GroupDefinition(widgets=(inner,))))
        assert data["definition"]["widgets"][0] == {
            "definition": {"type": "note", "content": "x"},
            "id": 2,
            "layout": {"width": 3.0},
        }


# ===========================================================================
# Round trips
# ===========================================================================


class TestRoundTrip:
    def test_every_leaf_type(self, leaf_types, make_envelope) -> None:
        for name in leaf_types:
            widget = decode_envelope(make_envelope(name, id=3, layout={"x": 0, "y": 1}))
            assert decode_envelope(encode(widget)) == widget

    def test_wire_form_preserved_for_every_leaf_type(self, leaf_types, make_envelope) -> None:
        for name in leaf_types:
            source = make_envelope(name)
            assert encode_dict(decode_envelope(source)) == source

    def test_nested_group_depth_three(self, nested_group) -> None:
        widget = decode_envelope(nested_group)
        assert decode_envelope(encode(widget)) == widget

    def test_nested_group_wire_form(self, nested_group) -> None:
        assert encode_dict(decode_envelope(nested_group)) == nested_group

    def test_in_memory_round_trip(self) -> None:
        widget = Widget(
            definition=GroupDefinition(
                widgets=(
                    Widget(
                        definition=GroupDefinition(
                            widgets=(
                                Widget(
                                    definition=GroupDefinition(
                                        widgets=(Widget(definition=NoteDefinition(content="deep")),),
                                    )
                                ),
                            ),
                            title="",
                        )
                    ),
                ),
                layout_type="ordered",
            ),
            id=0,
        )
        assert decode_envelope(encode(widget)) == widget

    def test_widget_arrays(self, make_envelope) -> None:
        widgets = decode_widgets([make_envelope("note"), make_envelope("timeseries")])
        assert decode_widgets(encode_widgets(widgets)) == widgets


# ===========================================================================
# EnvelopeEncoder options and programming errors
# ===========================================================================


class _NotADefinition:
    widget_type = "note"


class TestEnvelopeEncoder:
    def test_indent(self) -> None:
        text = EnvelopeEncoder(indent=2).to_json(Widget(definition=NoteDefinition(content="hi")))
        assert "\n" in text

    def test_compact_by_default(self) -> None:
        text = EnvelopeEncoder().to_json(Widget(definition=NoteDefinition(content="hi")))
        assert "\n" not in text

    def test_sort_keys(self) -> None:
        text = EnvelopeEncoder(sort_keys=True).to_json(
            Widget(definition=NoteDefinition(tick_pos="1", content="hi"))
        )
        assert text.index('"content"') < text.index('"tick_pos"') < text.index('"type"')

    def test_non_ascii_preserved(self) -> None:
        raw = EnvelopeEncoder().to_bytes(Widget(definition=NoteDefinition(content="héllo")))
        assert "héllo".encode("utf-8") in raw

    def test_non_finite_layout_rejected(self) -> None:
        widget = Widget(definition=NoteDefinition(), layout=WidgetLayout(x=float("nan")))
        with pytest.raises(ValueError):
            EnvelopeEncoder().to_json(widget)
        with pytest.raises(ValueError):
            EnvelopeEncoder(indent=2).many_to_json([widget])

    def test_unknown_definition_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            encode(Widget(definition=_NotADefinition()))  # type: ignore[arg-type]
