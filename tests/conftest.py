"""Shared test fixtures for boardkit.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import copy
from typing import Any

import pytest

_SAMPLE_DEFINITIONS: dict[str, dict[str, Any]] = {
    "alert_graph": {
        "type": "alert_graph",
        "alert_id": "12345",
        "viz_type": "timeseries",
        "title": "CPU alert",
        "title_size": "16",
        "title_align": "left",
        "time": {"live_span": "4h"},
    },
    "alert_value": {
        "type": "alert_value",
        "alert_id": "12345",
        "precision": 0,
        "unit": "auto",
        "text_align": "center",
        "title": "Errors",
    },
    "change": {
        "type": "change",
        "requests": [
            {
                "q": "sum:requests{*}",
                "change_type": "absolute",
                "compare_to": "day_before",
                "increase_good": False,
                "order_by": "change",
                "order_dir": "desc",
                "show_present": True,
            }
        ],
        "title": "Request change",
        "time": {"live_span": "1d"},
    },
    "check_status": {
        "type": "check_status",
        "check": "http.can_connect",
        "grouping": "cluster",
        "group_by": ["env", "host"],
        "tags": [],
        "title": "HTTP",
    },
    "distribution": {
        "type": "distribution",
        "requests": [
            {
                "apm_query": {
                    "index": "trace-search",
                    "compute": {"aggregation": "count", "interval": 60},
                    "search": {"query": "service:web"},
                    "group_by": [
                        {
                            "facet": "resource_name",
                            "limit": 10,
                            "sort": {"aggregation": "count", "order": "desc"},
                        }
                    ],
                },
                "style": {"palette": "dog_classic"},
            }
        ],
        "title": "Latency",
    },
    "note": {
        "type": "note",
        "content": "hello",
        "background_color": "yellow",
        "font_size": "14",
        "text_align": "left",
        "show_tick": False,
        "tick_pos": "50%",
        "tick_edge": "left",
    },
    "timeseries": {
        "type": "timeseries",
        "requests": [
            {
                "q": "avg:system.load.1{*}",
                "style": {"palette": "warm", "line_type": "solid", "line_width": "normal"},
                "metadata": [{"expression": "avg:system.load.1{*}", "alias_name": "load"}],
                "display_type": "line",
            },
            {
                "process_query": {
                    "metric": "process.stat.cpu.total_pct",
                    "search_by": "nginx",
                    "filter_by": ["env:prod"],
                    "limit": 5,
                }
            },
        ],
        "yaxis": {"label": "load", "scale": "linear", "min": "0", "max": "auto", "include_zero": True},
        "events": [{"q": "tags:deploy"}],
        "markers": [{"value": "y = 2", "display_type": "error dashed", "label": "high"}],
        "title": "Load",
        "show_legend": False,
        "legend_size": "0",
        "time": {"live_span": "1h"},
    },
}


def sample_envelope(widget_type: str, **envelope: Any) -> dict[str, Any]:
    """Return a fully populated envelope for ``widget_type`` (not ``group``)."""
    data: dict[str, Any] = {"definition": copy.deepcopy(_SAMPLE_DEFINITIONS[widget_type])}
    data.update(envelope)
    return data


def group_envelope(*widgets: dict[str, Any], **envelope: Any) -> dict[str, Any]:
    """Return a group envelope holding ``widgets`` in order."""
    data: dict[str, Any] = {
        "definition": {
            "type": "group",
            "layout_type": "ordered",
            "widgets": list(widgets),
            "title": "Group",
        }
    }
    data.update(envelope)
    return data


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "boardkit"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def leaf_types() -> list[str]:
    """Every widget type except ``group``."""
    return sorted(_SAMPLE_DEFINITIONS)


@pytest.fixture()
def nested_group() -> dict[str, Any]:
    """A group three levels deep mixing every leaf widget type."""
    innermost = group_envelope(
        sample_envelope("note", id=4),
        sample_envelope("alert_value", id=5),
        id=3,
    )
    middle = group_envelope(
        sample_envelope("timeseries", id=6, layout={"x": 0, "y": 0, "width": 4, "height": 2}),
        innermost,
        sample_envelope("check_status"),
        id=2,
    )
    return group_envelope(
        sample_envelope("alert_graph"),
        middle,
        sample_envelope("change"),
        sample_envelope("distribution", layout={"x": 1.5, "y": 2.0}),
        id=1,
    )


@pytest.fixture()
def make_envelope():
    """Factory fixture wrapping ``sample_envelope``."""
    return sample_envelope


@pytest.fixture()
def make_group():
    """Factory fixture wrapping ``group_envelope``."""
    return group_envelope
