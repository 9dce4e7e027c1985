"""Benchmark: widget decode and encode latency (p50/p95/mean).

Measures per-call latency for decoding and encoding a dashboard group
that nests every widget type three levels deep.
"""
from __future__ import annotations

import json
import sys
import time
from collections.abc import Callable
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import boardkit

_WARMUP: int = 100
_ITERATIONS: int = 3_000

_LEAVES: list[dict[str, object]] = [
    {"definition": {"type": "note", "content": "hello", "show_tick": False}},
    {"definition": {"type": "alert_value", "alert_id": "1", "precision": 0}},
    {"definition": {"type": "alert_graph", "alert_id": "1", "time": {"live_span": "4h"}}},
    {"definition": {"type": "check_status", "check": "http", "tags": ["env:prod"]}},
    {
        "definition": {
            "type": "change",
            "requests": [{"q": "sum:requests{*}", "increase_good": False}],
        }
    },
    {
        "definition": {
            "type": "distribution",
            "requests": [
                {"apm_query": {"index": "trace-search", "compute": {"aggregation": "count"}}}
            ],
        }
    },
    {
        "definition": {
            "type": "timeseries",
            "requests": [{"q": "avg:system.load.1{*}", "display_type": "line"}],
            "yaxis": {"min": "0", "include_zero": True},
            "markers": [{"value": "y = 2", "display_type": "error dashed"}],
        },
        "layout": {"x": 0, "y": 0, "width": 4, "height": 2},
    },
]


def _group(widgets: list[dict[str, object]]) -> dict[str, object]:
    return {"definition": {"type": "group", "layout_type": "ordered", "widgets": widgets}}


_BOARD: bytes = json.dumps(
    _group(_LEAVES + [_group(_LEAVES + [_group(list(_LEAVES))])]), separators=(",", ":")
).encode("utf-8")


def _measure(operation: str, call: Callable[[], object]) -> dict[str, object]:
    for _ in range(_WARMUP):
        call()

    latencies_ms: list[float] = []
    for _ in range(_ITERATIONS):
        t0 = time.perf_counter()
        call()
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": operation,
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p50_ms": round(sorted_lats[int(n * 0.50)], 4),
        "p95_ms": round(sorted_lats[min(int(n * 0.95), n - 1)], 4),
    }
    print(
        f"[bench_latency] {result['operation']}: "
        f"p50={result['p50_ms']:.4f}ms  p95={result['p95_ms']:.4f}ms  "
        f"mean={result['avg_latency_ms']:.4f}ms"
    )
    return result


def bench_decode_latency() -> dict[str, object]:
    """Benchmark decoding of the nested board.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p50_ms, p95_ms.
    """
    return _measure("widget_decode_latency_nested", lambda: boardkit.decode_envelope(_BOARD))


def bench_encode_latency() -> dict[str, object]:
    """Benchmark encoding of the nested board (same result keys as decode)."""
    widget = boardkit.decode_envelope(_BOARD)
    return _measure("widget_encode_latency_nested", lambda: boardkit.encode(widget))


if __name__ == "__main__":
    results = [bench_decode_latency(), bench_encode_latency()]
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "latency_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(results, fh, indent=2)
    print(f"Results saved to {output_path}")
