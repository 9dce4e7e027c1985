"""Unit tests for boardkit.model.nodes: widget definitions, envelope
helpers, and immutability.
"""
from __future__ import annotations

import dataclasses

import pytest

from boardkit.model import nodes
from boardkit.model.nodes import (
    WIDGET_TYPES,
    AlertGraphDefinition,
    AlertValueDefinition,
    ChangeDefinition,
    ChangeRequest,
    CheckStatusDefinition,
    DistributionDefinition,
    GroupDefinition,
    NoteDefinition,
    TimeseriesDefinition,
    TimeseriesRequest,
    Widget,
    WidgetApmOrLogQuery,
    WidgetLayout,
    WidgetProcessQuery,
)

_ALL_DEFINITIONS = (
    AlertGraphDefinition,
    AlertValueDefinition,
    ChangeDefinition,
    CheckStatusDefinition,
    DistributionDefinition,
    GroupDefinition,
    NoteDefinition,
    TimeseriesDefinition,
)


def _note(content: str) -> Widget:
    return Widget(definition=NoteDefinition(content=content))


# ===========================================================================
# Discriminators
# ===========================================================================


class TestDiscriminators:
    def test_every_type_has_a_definition(self) -> None:
        assert sorted(cls.widget_type for cls in _ALL_DEFINITIONS) == sorted(WIDGET_TYPES)

    def test_types_are_unique(self) -> None:
        assert len(set(WIDGET_TYPES)) == len(WIDGET_TYPES) == 8

    def test_constants(self) -> None:
        assert nodes.NOTE_WIDGET == "note"
        assert nodes.GROUP_WIDGET == "group"
        assert nodes.CHECK_STATUS_WIDGET == "check_status"

    def test_type_property(self) -> None:
        assert NoteDefinition().type == "note"
        assert GroupDefinition(widgets=()).type == "group"

    def test_widget_type_property(self) -> None:
        assert Widget(definition=TimeseriesDefinition()).widget_type == "timeseries"

    def test_widget_type_is_not_a_field(self) -> None:
        names = {f.name for f in dataclasses.fields(NoteDefinition)}
        assert "widget_type" not in names
        assert "type" not in names


# ===========================================================================
# Defaults and immutability
# ===========================================================================


class TestDefaults:
    def test_leaf_fields_default_to_absent(self) -> None:
        definition = AlertValueDefinition()
        assert all(getattr(definition, f.name) is None for f in dataclasses.fields(definition))

    def test_group_requires_widgets(self) -> None:
        with pytest.raises(TypeError):
            GroupDefinition()  # type: ignore[call-arg]

    def test_empty_group_is_truthy(self) -> None:
        assert GroupDefinition(widgets=())

    def test_envelope_defaults(self) -> None:
        widget = _note("x")
        assert widget.id is None
        assert widget.layout is None


class TestImmutability:
    def test_widget_frozen(self) -> None:
        widget = _note("x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            widget.id = 3  # type: ignore[misc]

    def test_definition_frozen(self) -> None:
        definition = NoteDefinition(content="x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            definition.content = "y"  # type: ignore[misc]

    def test_layout_frozen(self) -> None:
        layout = WidgetLayout(x=1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            layout.x = 2.0  # type: ignore[misc]

    def test_equal_widgets_hash_equal(self) -> None:
        assert hash(_note("x")) == hash(_note("x"))


# ===========================================================================
# Requests
# ===========================================================================


class TestQueryKinds:
    def test_metric_query(self) -> None:
        assert ChangeRequest(metric_query="avg:cpu{*}").query_kinds == ["q"]

    def test_none(self) -> None:
        assert TimeseriesRequest().query_kinds == []

    def test_multiple(self) -> None:
        request = TimeseriesRequest(
            apm_query=WidgetApmOrLogQuery(index="trace-search"),
            process_query=WidgetProcessQuery(metric="m"),
        )
        assert request.query_kinds == ["apm_query", "process_query"]

    def test_empty_metric_query_counts(self) -> None:
        assert ChangeRequest(metric_query="").query_kinds == ["q"]


# ===========================================================================
# Walk
# ===========================================================================


class TestWalk:
    def test_leaf_yields_itself(self) -> None:
        widget = _note("x")
        assert list(widget.walk()) == [(0, widget)]

    def test_parents_before_children_in_order(self) -> None:
        a, b, c = _note("a"), _note("b"), _note("c")
        inner = Widget(definition=GroupDefinition(widgets=(b,)))
        outer = Widget(definition=GroupDefinition(widgets=(a, inner, c)))
        assert list(outer.walk()) == [(0, outer), (1, a), (1, inner), (2, b), (1, c)]

    def test_empty_group(self) -> None:
        group = Widget(definition=GroupDefinition(widgets=()))
        assert [depth for depth, _ in group.walk()] == [0]

    def test_start_depth(self) -> None:
        assert list(_note("x").walk(depth=5))[0][0] == 5
