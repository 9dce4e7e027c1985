"""Widget model definitions for board dashboards.

Every widget is represented by a ``Widget`` envelope that owns exactly
one definition.  The definition types form a closed union
(``WidgetDefinition``); each definition class declares its wire
discriminator in the ``widget_type`` class attribute, so an in-memory
definition can never disagree with the registry key that decodes it.

All nodes are frozen dataclasses.  Optional fields use ``None`` to mean
"absent from the wire"; a present zero, empty string, ``False`` or empty
tuple is a real value and survives a decode/encode round trip.
"""
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import ClassVar, Final, Union

# ---------------------------------------------------------------------------
# Discriminators
# ---------------------------------------------------------------------------

ALERT_GRAPH_WIDGET: Final[str] = "alert_graph"
ALERT_VALUE_WIDGET: Final[str] = "alert_value"
CHANGE_WIDGET: Final[str] = "change"
CHECK_STATUS_WIDGET: Final[str] = "check_status"
DISTRIBUTION_WIDGET: Final[str] = "distribution"
GROUP_WIDGET: Final[str] = "group"
NOTE_WIDGET: Final[str] = "note"
TIMESERIES_WIDGET: Final[str] = "timeseries"

WIDGET_TYPES: Final[tuple[str, ...]] = (
    ALERT_GRAPH_WIDGET,
    ALERT_VALUE_WIDGET,
    CHANGE_WIDGET,
    CHECK_STATUS_WIDGET,
    DISTRIBUTION_WIDGET,
    GROUP_WIDGET,
    NOTE_WIDGET,
    TIMESERIES_WIDGET,
)


# ---------------------------------------------------------------------------
# Shared leaf shapes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class WidgetLayout:
    """Position and size of a widget on a free-layout dashboard."""

    x: float | None = None
    y: float | None = None
    width: float | None = None
    height: float | None = None


@dataclass(frozen=True, slots=True)
class WidgetTime:
    """Time window override for a widget, e.g. ``live_span="4h"``."""

    live_span: str | None = None


@dataclass(frozen=True, slots=True)
class WidgetAxis:
    """Y-axis controls for a timeseries widget.

    ``min`` and ``max`` are strings on the wire (``"auto"`` is legal).
    """

    label: str | None = None
    scale: str | None = None
    min: str | None = None
    max: str | None = None
    include_zero: bool | None = None


@dataclass(frozen=True, slots=True)
class WidgetEvent:
    """An event overlay query (``q`` on the wire)."""

    query: str | None = None


@dataclass(frozen=True, slots=True)
class WidgetMarker:
    """A horizontal marker line drawn on a timeseries."""

    value: str | None = None
    display_type: str | None = None
    label: str | None = None


@dataclass(frozen=True, slots=True)
class WidgetMetadata:
    """Alias annotation for one expression of a timeseries request."""

    expression: str | None = None
    alias_name: str | None = None


@dataclass(frozen=True, slots=True)
class WidgetRequestStyle:
    """Palette applied to a request."""

    palette: str | None = None


@dataclass(frozen=True, slots=True)
class TimeseriesRequestStyle:
    """Request style for timeseries lines."""

    palette: str | None = None
    line_type: str | None = None
    line_width: str | None = None


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ApmOrLogCompute:
    aggregation: str | None = None
    facet: str | None = None
    interval: int | None = None


@dataclass(frozen=True, slots=True)
class ApmOrLogSearch:
    query: str | None = None


@dataclass(frozen=True, slots=True)
class ApmOrLogSort:
    aggregation: str | None = None
    order: str | None = None
    facet: str | None = None


@dataclass(frozen=True, slots=True)
class ApmOrLogGroupBy:
    facet: str | None = None
    limit: int | None = None
    sort: ApmOrLogSort | None = None


@dataclass(frozen=True, slots=True)
class WidgetApmOrLogQuery:
    """An APM or log analytics query."""

    index: str | None = None
    compute: ApmOrLogCompute | None = None
    search: ApmOrLogSearch | None = None
    group_by: tuple[ApmOrLogGroupBy, ...] | None = None


@dataclass(frozen=True, slots=True)
class WidgetProcessQuery:
    """A live-process query."""

    metric: str | None = None
    search_by: str | None = None
    filter_by: tuple[str, ...] | None = None
    limit: int | None = None


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WidgetRequest:
    """Query fields shared by every request shape.

    A request is expected to populate exactly one of ``metric_query``,
    ``apm_query``, ``log_query`` or ``process_query``.  The codec does not
    enforce this; callers that need the guarantee should check
    ``query_kinds``.
    """

    metric_query: str | None = None
    apm_query: WidgetApmOrLogQuery | None = None
    log_query: WidgetApmOrLogQuery | None = None
    process_query: WidgetProcessQuery | None = None

    @property
    def query_kinds(self) -> list[str]:
        """Names of the query fields that are populated."""
        kinds = []
        if self.metric_query is not None:
            kinds.append("q")
        if self.apm_query is not None:
            kinds.append("apm_query")
        if self.log_query is not None:
            kinds.append("log_query")
        if self.process_query is not None:
            kinds.append("process_query")
        return kinds


@dataclass(frozen=True)
class ChangeRequest(WidgetRequest):
    change_type: str | None = None
    compare_to: str | None = None
    increase_good: bool | None = None
    order_by: str | None = None
    order_dir: str | None = None
    show_present: bool | None = None


@dataclass(frozen=True)
class DistributionRequest(WidgetRequest):
    style: WidgetRequestStyle | None = None


@dataclass(frozen=True)
class TimeseriesRequest(WidgetRequest):
    style: TimeseriesRequestStyle | None = None
    metadata: tuple[WidgetMetadata, ...] | None = None
    display_type: str | None = None


# ---------------------------------------------------------------------------
# Widget definitions
# ---------------------------------------------------------------------------


class _Definition:
    """Mixin giving every definition its wire discriminator as ``type``."""

    __slots__ = ()

    widget_type: ClassVar[str]

    @property
    def type(self) -> str:
        return self.widget_type


@dataclass(frozen=True)
class AlertGraphDefinition(_Definition):
    """Graph of the metric behind a monitor."""

    widget_type: ClassVar[str] = ALERT_GRAPH_WIDGET

    alert_id: str | None = None
    viz_type: str | None = None
    title: str | None = None
    title_size: str | None = None
    title_align: str | None = None
    time: WidgetTime | None = None


@dataclass(frozen=True)
class AlertValueDefinition(_Definition):
    """Current value of the metric behind a monitor."""

    widget_type: ClassVar[str] = ALERT_VALUE_WIDGET

    alert_id: str | None = None
    precision: int | None = None
    unit: str | None = None
    text_align: str | None = None
    title: str | None = None
    title_size: str | None = None
    title_align: str | None = None


@dataclass(frozen=True)
class ChangeDefinition(_Definition):
    widget_type: ClassVar[str] = CHANGE_WIDGET

    requests: tuple[ChangeRequest, ...] | None = None
    title: str | None = None
    title_size: str | None = None
    title_align: str | None = None
    time: WidgetTime | None = None


@dataclass(frozen=True)
class CheckStatusDefinition(_Definition):
    widget_type: ClassVar[str] = CHECK_STATUS_WIDGET

    check: str | None = None
    grouping: str | None = None
    group: str | None = None
    group_by: tuple[str, ...] | None = None
    tags: tuple[str, ...] | None = None
    title: str | None = None
    title_size: str | None = None
    title_align: str | None = None
    time: WidgetTime | None = None


@dataclass(frozen=True)
class DistributionDefinition(_Definition):
    widget_type: ClassVar[str] = DISTRIBUTION_WIDGET

    requests: tuple[DistributionRequest, ...] | None = None
    title: str | None = None
    title_size: str | None = None
    title_align: str | None = None
    time: WidgetTime | None = None


@dataclass(frozen=True)
class GroupDefinition(_Definition):
    """A container widget holding other widgets in display order.

    Parameters
    ----------
    widgets:
        The nested widgets.  Required; an empty tuple is a valid group.
    layout_type:
        Layout of the group body, e.g. ``"ordered"``.
    title:
        Optional group title.
    """

    widget_type: ClassVar[str] = GROUP_WIDGET

    widgets: tuple["Widget", ...]
    layout_type: str | None = None
    title: str | None = None


@dataclass(frozen=True)
class NoteDefinition(_Definition):
    """Free-text note widget."""

    widget_type: ClassVar[str] = NOTE_WIDGET

    content: str | None = None
    background_color: str | None = None
    font_size: str | None = None
    text_align: str | None = None
    show_tick: bool | None = None
    tick_pos: str | None = None
    tick_edge: str | None = None


@dataclass(frozen=True)
class TimeseriesDefinition(_Definition):
    widget_type: ClassVar[str] = TIMESERIES_WIDGET

    requests: tuple[TimeseriesRequest, ...] | None = None
    yaxis: WidgetAxis | None = None
    events: tuple[WidgetEvent, ...] | None = None
    markers: tuple[WidgetMarker, ...] | None = None
    title: str | None = None
    title_size: str | None = None
    title_align: str | None = None
    show_legend: bool | None = None
    legend_size: str | None = None
    time: WidgetTime | None = None


WidgetDefinition = Union[
    AlertGraphDefinition,
    AlertValueDefinition,
    ChangeDefinition,
    CheckStatusDefinition,
    DistributionDefinition,
    GroupDefinition,
    NoteDefinition,
    TimeseriesDefinition,
]


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Widget:
    """A dashboard widget: one definition plus envelope-level metadata.

    Parameters
    ----------
    definition:
        The typed widget definition.
    id:
        Optional server-assigned identifier.
    layout:
        Optional free-layout position.
    """

    definition: WidgetDefinition
    id: int | None = None
    layout: WidgetLayout | None = None

    @property
    def widget_type(self) -> str:
        """The discriminator of the wrapped definition."""
        return self.definition.widget_type

    def walk(self, depth: int = 0) -> Iterator[tuple[int, "Widget"]]:
        """Yield ``(depth, widget)`` for this widget and all nested widgets.

        Widgets are yielded in display order, parents before children.
        """
        yield depth, self
        if isinstance(self.definition, GroupDefinition):
            for child in self.definition.widgets:
                yield from child.walk(depth + 1)
