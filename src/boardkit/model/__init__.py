"""Widget model module.

Exports the ``Widget`` envelope, the eight definition types and the
leaf shapes they are built from.
"""
from __future__ import annotations

from boardkit.model.nodes import (
    ALERT_GRAPH_WIDGET,
    ALERT_VALUE_WIDGET,
    CHANGE_WIDGET,
    CHECK_STATUS_WIDGET,
    DISTRIBUTION_WIDGET,
    GROUP_WIDGET,
    NOTE_WIDGET,
    TIMESERIES_WIDGET,
    WIDGET_TYPES,
    AlertGraphDefinition,
    AlertValueDefinition,
    ApmOrLogCompute,
    ApmOrLogGroupBy,
    ApmOrLogSearch,
    ApmOrLogSort,
    ChangeDefinition,
    ChangeRequest,
    CheckStatusDefinition,
    DistributionDefinition,
    DistributionRequest,
    GroupDefinition,
    NoteDefinition,
    TimeseriesDefinition,
    TimeseriesRequest,
    TimeseriesRequestStyle,
    Widget,
    WidgetApmOrLogQuery,
    WidgetAxis,
    WidgetDefinition,
    WidgetEvent,
    WidgetLayout,
    WidgetMarker,
    WidgetMetadata,
    WidgetProcessQuery,
    WidgetRequest,
    WidgetRequestStyle,
    WidgetTime,
)

__all__ = [
    # Discriminators
    "ALERT_GRAPH_WIDGET",
    "ALERT_VALUE_WIDGET",
    "CHANGE_WIDGET",
    "CHECK_STATUS_WIDGET",
    "DISTRIBUTION_WIDGET",
    "GROUP_WIDGET",
    "NOTE_WIDGET",
    "TIMESERIES_WIDGET",
    "WIDGET_TYPES",
    # Envelope
    "Widget",
    "WidgetLayout",
    # Definitions
    "WidgetDefinition",
    "AlertGraphDefinition",
    "AlertValueDefinition",
    "ChangeDefinition",
    "CheckStatusDefinition",
    "DistributionDefinition",
    "GroupDefinition",
    "NoteDefinition",
    "TimeseriesDefinition",
    # Requests and queries
    "WidgetRequest",
    "ChangeRequest",
    "DistributionRequest",
    "TimeseriesRequest",
    "WidgetApmOrLogQuery",
    "ApmOrLogCompute",
    "ApmOrLogSearch",
    "ApmOrLogGroupBy",
    "ApmOrLogSort",
    "WidgetProcessQuery",
    # Leaf shapes
    "WidgetTime",
    "WidgetAxis",
    "WidgetEvent",
    "WidgetMarker",
    "WidgetMetadata",
    "WidgetRequestStyle",
    "TimeseriesRequestStyle",
]
