"""Converters for the leaf shapes shared by several widget definitions.

These shapes carry no dispatch logic: each has a ``*_from_dict`` builder
with the ``(data, path)`` signature expected by the field readers and a
``*_to_dict`` dumper that omits absent fields.
"""
from __future__ import annotations

from boardkit.codec.fields import (
    JsonObject,
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
    ApmOrLogCompute,
    ApmOrLogGroupBy,
    ApmOrLogSearch,
    ApmOrLogSort,
    ChangeRequest,
    DistributionRequest,
    TimeseriesRequest,
    TimeseriesRequestStyle,
    WidgetApmOrLogQuery,
    WidgetAxis,
    WidgetEvent,
    WidgetMarker,
    WidgetMetadata,
    WidgetProcessQuery,
    WidgetRequest,
    WidgetRequestStyle,
    WidgetTime,
)

# ---------------------------------------------------------------------------
# Time, axis, events, markers, metadata, styles
# ---------------------------------------------------------------------------


def time_from_dict(d: JsonObject, path: str) -> WidgetTime:
    return WidgetTime(live_span=opt_str(d, "live_span", path))


def time_to_dict(t: WidgetTime) -> dict[str, object]:
    out: dict[str, object] = {}
    put(out, "live_span", t.live_span)
    return out


def axis_from_dict(d: JsonObject, path: str) -> WidgetAxis:
    return WidgetAxis(
        label=opt_str(d, "label", path),
        scale=opt_str(d, "scale", path),
        min=opt_str(d, "min", path),
        max=opt_str(d, "max", path),
        include_zero=opt_bool(d, "include_zero", path),
    )


def axis_to_dict(a: WidgetAxis) -> dict[str, object]:
    out: dict[str, object] = {}
    put(out, "label", a.label)
    put(out, "scale", a.scale)
    put(out, "min", a.min)
    put(out, "max", a.max)
    put(out, "include_zero", a.include_zero)
    return out


def event_from_dict(d: JsonObject, path: str) -> WidgetEvent:
    return WidgetEvent(query=opt_str(d, "q", path))


def event_to_dict(e: WidgetEvent) -> dict[str, object]:
    out: dict[str, object] = {}
    put(out, "q", e.query)
    return out


def marker_from_dict(d: JsonObject, path: str) -> WidgetMarker:
    return WidgetMarker(
        value=opt_str(d, "value", path),
        display_type=opt_str(d, "display_type", path),
        label=opt_str(d, "label", path),
    )


def marker_to_dict(m: WidgetMarker) -> dict[str, object]:
    out: dict[str, object] = {}
    put(out, "value", m.value)
    put(out, "display_type", m.display_type)
    put(out, "label", m.label)
    return out


def metadata_from_dict(d: JsonObject, path: str) -> WidgetMetadata:
    return WidgetMetadata(
        expression=opt_str(d, "expression", path),
        alias_name=opt_str(d, "alias_name", path),
    )


def metadata_to_dict(m: WidgetMetadata) -> dict[str, object]:
    out: dict[str, object] = {}
    put(out, "expression", m.expression)
    put(out, "alias_name", m.alias_name)
    return out


def request_style_from_dict(d: JsonObject, path: str) -> WidgetRequestStyle:
    return WidgetRequestStyle(palette=opt_str(d, "palette", path))


def request_style_to_dict(s: WidgetRequestStyle) -> dict[str, object]:
    out: dict[str, object] = {}
    put(out, "palette", s.palette)
    return out


def timeseries_style_from_dict(d: JsonObject, path: str) -> TimeseriesRequestStyle:
    return TimeseriesRequestStyle(
        palette=opt_str(d, "palette", path),
        line_type=opt_str(d, "line_type", path),
        line_width=opt_str(d, "line_width", path),
    )


def timeseries_style_to_dict(s: TimeseriesRequestStyle) -> dict[str, object]:
    out: dict[str, object] = {}
    put(out, "palette", s.palette)
    put(out, "line_type", s.line_type)
    put(out, "line_width", s.line_width)
    return out


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def _compute_from_dict(d: JsonObject, path: str) -> ApmOrLogCompute:
    return ApmOrLogCompute(
        aggregation=opt_str(d, "aggregation", path),
        facet=opt_str(d, "facet", path),
        interval=opt_int(d, "interval", path),
    )


def _compute_to_dict(c: ApmOrLogCompute) -> dict[str, object]:
    out: dict[str, object] = {}
    put(out, "aggregation", c.aggregation)
    put(out, "facet", c.facet)
    put(out, "interval", c.interval)
    return out


def _search_from_dict(d: JsonObject, path: str) -> ApmOrLogSearch:
    return ApmOrLogSearch(query=opt_str(d, "query", path))


def _search_to_dict(s: ApmOrLogSearch) -> dict[str, object]:
    out: dict[str, object] = {}
    put(out, "query", s.query)
    return out


def _sort_from_dict(d: JsonObject, path: str) -> ApmOrLogSort:
    return ApmOrLogSort(
        aggregation=opt_str(d, "aggregation", path),
        order=opt_str(d, "order", path),
        facet=opt_str(d, "facet", path),
    )


def _sort_to_dict(s: ApmOrLogSort) -> dict[str, object]:
    out: dict[str, object] = {}
    put(out, "aggregation", s.aggregation)
    put(out, "order", s.order)
    put(out, "facet", s.facet)
    return out


def _group_by_from_dict(d: JsonObject, path: str) -> ApmOrLogGroupBy:
    return ApmOrLogGroupBy(
        facet=opt_str(d, "facet", path),
        limit=opt_int(d, "limit", path),
        sort=opt_object(d, "sort", path, _sort_from_dict),
    )


def _group_by_to_dict(g: ApmOrLogGroupBy) -> dict[str, object]:
    out: dict[str, object] = {}
    put(out, "facet", g.facet)
    put(out, "limit", g.limit)
    put_object(out, "sort", g.sort, _sort_to_dict)
    return out


def apm_or_log_query_from_dict(d: JsonObject, path: str) -> WidgetApmOrLogQuery:
    return WidgetApmOrLogQuery(
        index=opt_str(d, "index", path),
        compute=opt_object(d, "compute", path, _compute_from_dict),
        search=opt_object(d, "search", path, _search_from_dict),
        group_by=opt_object_list(d, "group_by", path, _group_by_from_dict),
    )


def apm_or_log_query_to_dict(q: WidgetApmOrLogQuery) -> dict[str, object]:
    out: dict[str, object] = {}
    put(out, "index", q.index)
    put_object(out, "compute", q.compute, _compute_to_dict)
    put_object(out, "search", q.search, _search_to_dict)
    put_object_list(out, "group_by", q.group_by, _group_by_to_dict)
    return out


def process_query_from_dict(d: JsonObject, path: str) -> WidgetProcessQuery:
    return WidgetProcessQuery(
        metric=opt_str(d, "metric", path),
        search_by=opt_str(d, "search_by", path),
        filter_by=opt_str_list(d, "filter_by", path),
        limit=opt_int(d, "limit", path),
    )


def process_query_to_dict(q: WidgetProcessQuery) -> dict[str, object]:
    out: dict[str, object] = {}
    put(out, "metric", q.metric)
    put(out, "search_by", q.search_by)
    put_list(out, "filter_by", q.filter_by)
    put(out, "limit", q.limit)
    return out


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


def _query_fields(d: JsonObject, path: str) -> dict[str, object]:
    """Read the ``WidgetRequest`` base fields as constructor keyword arguments."""
    return {
        "metric_query": opt_str(d, "q", path),
        "apm_query": opt_object(d, "apm_query", path, apm_or_log_query_from_dict),
        "log_query": opt_object(d, "log_query", path, apm_or_log_query_from_dict),
        "process_query": opt_object(d, "process_query", path, process_query_from_dict),
    }


def _query_to_dict(r: WidgetRequest) -> dict[str, object]:
    out: dict[str, object] = {}
    put(out, "q", r.metric_query)
    put_object(out, "apm_query", r.apm_query, apm_or_log_query_to_dict)
    put_object(out, "log_query", r.log_query, apm_or_log_query_to_dict)
    put_object(out, "process_query", r.process_query, process_query_to_dict)
    return out


def change_request_from_dict(d: JsonObject, path: str) -> ChangeRequest:
    return ChangeRequest(
        **_query_fields(d, path),
        change_type=opt_str(d, "change_type", path),
        compare_to=opt_str(d, "compare_to", path),
        increase_good=opt_bool(d, "increase_good", path),
        order_by=opt_str(d, "order_by", path),
        order_dir=opt_str(d, "order_dir", path),
        show_present=opt_bool(d, "show_present", path),
    )


def change_request_to_dict(r: ChangeRequest) -> dict[str, object]:
    out = _query_to_dict(r)
    put(out, "change_type", r.change_type)
    put(out, "compare_to", r.compare_to)
    put(out, "increase_good", r.increase_good)
    put(out, "order_by", r.order_by)
    put(out, "order_dir", r.order_dir)
    put(out, "show_present", r.show_present)
    return out


def distribution_request_from_dict(d: JsonObject, path: str) -> DistributionRequest:
    return DistributionRequest(
        **_query_fields(d, path),
        style=opt_object(d, "style", path, request_style_from_dict),
    )


def distribution_request_to_dict(r: DistributionRequest) -> dict[str, object]:
    out = _query_to_dict(r)
    put_object(out, "style", r.style, request_style_to_dict)
    return out


def timeseries_request_from_dict(d: JsonObject, path: str) -> TimeseriesRequest:
    return TimeseriesRequest(
        **_query_fields(d, path),
        style=opt_object(d, "style", path, timeseries_style_from_dict),
        metadata=opt_object_list(d, "metadata", path, metadata_from_dict),
        display_type=opt_str(d, "display_type", path),
    )


def timeseries_request_to_dict(r: TimeseriesRequest) -> dict[str, object]:
    out = _query_to_dict(r)
    put_object(out, "style", r.style, timeseries_style_to_dict)
    put_object_list(out, "metadata", r.metadata, metadata_to_dict)
    put(out, "display_type", r.display_type)
    return out
