"""Variant shapes: one decoder/encoder pair per widget definition type.

Each ``VariantShape`` subclass binds a definition dataclass to the code
that builds it from a decoded JSON ``definition`` object and dumps it
back.  Shapes are stateless; the registry holds one instance of each.

Shapes never look at the envelope.  Shapes that contain nested widgets
(only ``group`` today) receive a ``decode_widget`` / ``encode_widget``
callback from the envelope codec so that nested envelopes go through the
same dispatch as top-level ones.

Adding a widget type means adding a definition dataclass, a shape class
here, and an entry in ``BUILTIN_SHAPES``.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

from boardkit.codec import leaves
from boardkit.codec.errors import DecodeError
from boardkit.codec.fields import (
    JsonObject,
    child_path,
    item_path,
    opt_bool,
    opt_int,
    opt_object,
    opt_object_list,
    opt_str,
    opt_str_list,
    put,
    put_list,
    put_object,
    put_object_list,
)
from boardkit.model.nodes import (
    AlertGraphDefinition,
    AlertValueDefinition,
    ChangeDefinition,
    CheckStatusDefinition,
    DistributionDefinition,
    GroupDefinition,
    NoteDefinition,
    TimeseriesDefinition,
)

if TYPE_CHECKING:
    from boardkit.model.nodes import Widget

D = TypeVar("D")

WidgetDecoder = Callable[[object, str], "Widget"]
WidgetEncoder = Callable[["Widget"], dict[str, object]]


class VariantShape(ABC, Generic[D]):
    """Abstract base class for widget definition shapes.

    Subclasses set ``definition_class`` and implement :meth:`decode`
    and :meth:`encode`.  The contract is:

    * ``decode`` raises ``DecodeError`` on the first structurally invalid
      field and never returns a partially built definition.
    * ``encode`` never fails for an instance of ``definition_class`` and
      emits ``type`` first followed by every field that is not ``None``.
    """

    definition_class: ClassVar[type]

    @property
    def name(self) -> str:
        """The discriminator handled by this shape, e.g. ``"note"``."""
        return self.definition_class.widget_type

    @abstractmethod
    def decode(self, payload: JsonObject, path: str, decode_widget: WidgetDecoder) -> D:
        """Build a definition from the decoded ``definition`` object at ``path``."""

    @abstractmethod
    def encode(self, definition: D, encode_widget: WidgetEncoder) -> dict[str, object]:
        """Dump ``definition`` to a JSON-compatible dict."""

    def _header(self) -> dict[str, object]:
        return {"type": self.name}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class AlertGraphShape(VariantShape[AlertGraphDefinition]):
    definition_class = AlertGraphDefinition

    def decode(
        self, payload: JsonObject, path: str, decode_widget: WidgetDecoder
    ) -> AlertGraphDefinition:
        return AlertGraphDefinition(
            alert_id=opt_str(payload, "alert_id", path),
            viz_type=opt_str(payload, "viz_type", path),
            title=opt_str(payload, "title", path),
            title_size=opt_str(payload, "title_size", path),
            title_align=opt_str(payload, "title_align", path),
            time=opt_object(payload, "time", path, leaves.time_from_dict),
        )

    def encode(
        self, definition: AlertGraphDefinition, encode_widget: WidgetEncoder
    ) -> dict[str, object]:
        out = self._header()
        put(out, "alert_id", definition.alert_id)
        put(out, "viz_type", definition.viz_type)
        put(out, "title", definition.title)
        put(out, "title_size", definition.title_size)
        put(out, "title_align", definition.title_align)
        put_object(out, "time", definition.time, leaves.time_to_dict)
        return out


class AlertValueShape(VariantShape[AlertValueDefinition]):
    definition_class = AlertValueDefinition

    def decode(
        self, payload: JsonObject, path: str, decode_widget: WidgetDecoder
    ) -> AlertValueDefinition:
        return AlertValueDefinition(
            alert_id=opt_str(payload, "alert_id", path),
            precision=opt_int(payload, "precision", path),
            unit=opt_str(payload, "unit", path),
            text_align=opt_str(payload, "text_align", path),
            title=opt_str(payload, "title", path),
            title_size=opt_str(payload, "title_size", path),
            title_align=opt_str(payload, "title_align", path),
        )

    def encode(
        self, definition: AlertValueDefinition, encode_widget: WidgetEncoder
    ) -> dict[str, object]:
        out = self._header()
        put(out, "alert_id", definition.alert_id)
        put(out, "precision", definition.precision)
        put(out, "unit", definition.unit)
        put(out, "text_align", definition.text_align)
        put(out, "title", definition.title)
        put(out, "title_size", definition.title_size)
        put(out, "title_align", definition.title_align)
        return out


class ChangeShape(VariantShape[ChangeDefinition]):
    definition_class = ChangeDefinition

    def decode(
        self, payload: JsonObject, path: str, decode_widget: WidgetDecoder
    ) -> ChangeDefinition:
        return ChangeDefinition(
            requests=opt_object_list(payload, "requests", path, leaves.change_request_from_dict),
            title=opt_str(payload, "title", path),
            title_size=opt_str(payload, "title_size", path),
            title_align=opt_str(payload, "title_align", path),
            time=opt_object(payload, "time", path, leaves.time_from_dict),
        )

    def encode(
        self, definition: ChangeDefinition, encode_widget: WidgetEncoder
    ) -> dict[str, object]:
        out = self._header()
        put_object_list(out, "requests", definition.requests, leaves.change_request_to_dict)
        put(out, "title", definition.title)
        put(out, "title_size", definition.title_size)
        put(out, "title_align", definition.title_align)
        put_object(out, "time", definition.time, leaves.time_to_dict)
        return out


class CheckStatusShape(VariantShape[CheckStatusDefinition]):
    definition_class = CheckStatusDefinition

    def decode(
        self, payload: JsonObject, path: str, decode_widget: WidgetDecoder
    ) -> CheckStatusDefinition:
        return CheckStatusDefinition(
            check=opt_str(payload, "check", path),
            grouping=opt_str(payload, "grouping", path),
            group=opt_str(payload, "group", path),
            group_by=opt_str_list(payload, "group_by", path),
            tags=opt_str_list(payload, "tags", path),
            title=opt_str(payload, "title", path),
            title_size=opt_str(payload, "title_size", path),
            title_align=opt_str(payload, "title_align", path),
            time=opt_object(payload, "time", path, leaves.time_from_dict),
        )

    def encode(
        self, definition: CheckStatusDefinition, encode_widget: WidgetEncoder
    ) -> dict[str, object]:
        out = self._header()
        put(out, "check", definition.check)
        put(out, "grouping", definition.grouping)
        put(out, "group", definition.group)
        put_list(out, "group_by", definition.group_by)
        put_list(out, "tags", definition.tags)
        put(out, "title", definition.title)
        put(out, "title_size", definition.title_size)
        put(out, "title_align", definition.title_align)
        put_object(out, "time", definition.time, leaves.time_to_dict)
        return out


class DistributionShape(VariantShape[DistributionDefinition]):
    definition_class = DistributionDefinition

    def decode(
        self, payload: JsonObject, path: str, decode_widget: WidgetDecoder
    ) -> DistributionDefinition:
        return DistributionDefinition(
            requests=opt_object_list(
                payload, "requests", path, leaves.distribution_request_from_dict
            ),
            title=opt_str(payload, "title", path),
            title_size=opt_str(payload, "title_size", path),
            title_align=opt_str(payload, "title_align", path),
            time=opt_object(payload, "time", path, leaves.time_from_dict),
        )

    def encode(
        self, definition: DistributionDefinition, encode_widget: WidgetEncoder
    ) -> dict[str, object]:
        out = self._header()
        put_object_list(
            out, "requests", definition.requests, leaves.distribution_request_to_dict
        )
        put(out, "title", definition.title)
        put(out, "title_size", definition.title_size)
        put(out, "title_align", definition.title_align)
        put_object(out, "time", definition.time, leaves.time_to_dict)
        return out


class GroupShape(VariantShape[GroupDefinition]):
    """The container shape.  Nested widgets are full envelopes."""

    definition_class = GroupDefinition

    def decode(
        self, payload: JsonObject, path: str, decode_widget: WidgetDecoder
    ) -> GroupDefinition:
        widgets_path = child_path(path, "widgets")
        raw = payload.get("widgets")
        if raw is None:
            raise DecodeError("Missing required field 'widgets'", widgets_path)
        if not isinstance(raw, (list, tuple)):
            raise DecodeError("Expected array for 'widgets'", widgets_path)
        # First failing element aborts the group; its path carries the index.
        widgets = tuple(
            decode_widget(item, item_path(widgets_path, i)) for i, item in enumerate(raw)
        )
        return GroupDefinition(
            widgets=widgets,
            layout_type=opt_str(payload, "layout_type", path),
            title=opt_str(payload, "title", path),
        )

    def encode(
        self, definition: GroupDefinition, encode_widget: WidgetEncoder
    ) -> dict[str, object]:
        out = self._header()
        put(out, "layout_type", definition.layout_type)
        out["widgets"] = [encode_widget(w) for w in definition.widgets]
        put(out, "title", definition.title)
        return out


class NoteShape(VariantShape[NoteDefinition]):
    definition_class = NoteDefinition

    def decode(
        self, payload: JsonObject, path: str, decode_widget: WidgetDecoder
    ) -> NoteDefinition:
        return NoteDefinition(
            content=opt_str(payload, "content", path),
            background_color=opt_str(payload, "background_color", path),
            font_size=opt_str(payload, "font_size", path),
            text_align=opt_str(payload, "text_align", path),
            show_tick=opt_bool(payload, "show_tick", path),
            tick_pos=opt_str(payload, "tick_pos", path),
            tick_edge=opt_str(payload, "tick_edge", path),
        )

    def encode(self, definition: NoteDefinition, encode_widget: WidgetEncoder) -> dict[str, object]:
        out = self._header()
        put(out, "content", definition.content)
        put(out, "background_color", definition.background_color)
        put(out, "font_size", definition.font_size)
        put(out, "text_align", definition.text_align)
        put(out, "show_tick", definition.show_tick)
        put(out, "tick_pos", definition.tick_pos)
        put(out, "tick_edge", definition.tick_edge)
        return out


class TimeseriesShape(VariantShape[TimeseriesDefinition]):
    definition_class = TimeseriesDefinition

    def decode(
        self, payload: JsonObject, path: str, decode_widget: WidgetDecoder
    ) -> TimeseriesDefinition:
        return TimeseriesDefinition(
            requests=opt_object_list(
                payload, "requests", path, leaves.timeseries_request_from_dict
            ),
            yaxis=opt_object(payload, "yaxis", path, leaves.axis_from_dict),
            events=opt_object_list(payload, "events", path, leaves.event_from_dict),
            markers=opt_object_list(payload, "markers", path, leaves.marker_from_dict),
            title=opt_str(payload, "title", path),
            title_size=opt_str(payload, "title_size", path),
            title_align=opt_str(payload, "title_align", path),
            show_legend=opt_bool(payload, "show_legend", path),
            legend_size=opt_str(payload, "legend_size", path),
            time=opt_object(payload, "time", path, leaves.time_from_dict),
        )

    def encode(
        self, definition: TimeseriesDefinition, encode_widget: WidgetEncoder
    ) -> dict[str, object]:
        out = self._header()
        put_object_list(
            out, "requests", definition.requests, leaves.timeseries_request_to_dict
        )
        put_object(out, "yaxis", definition.yaxis, leaves.axis_to_dict)
        put_object_list(out, "events", definition.events, leaves.event_to_dict)
        put_object_list(out, "markers", definition.markers, leaves.marker_to_dict)
        put(out, "title", definition.title)
        put(out, "title_size", definition.title_size)
        put(out, "title_align", definition.title_align)
        put(out, "show_legend", definition.show_legend)
        put(out, "legend_size", definition.legend_size)
        put_object(out, "time", definition.time, leaves.time_to_dict)
        return out


BUILTIN_SHAPES: tuple[type[VariantShape], ...] = (
    AlertGraphShape,
    AlertValueShape,
    ChangeShape,
    CheckStatusShape,
    DistributionShape,
    GroupShape,
    NoteShape,
    TimeseriesShape,
)
