#!/usr/bin/env python3
"""Example: Quickstart for boardkit

Decode a dashboard group holding mixed widgets, inspect the typed
definitions, and encode it back.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install boardkit
"""
from __future__ import annotations

import boardkit
from boardkit.codec import UnsupportedVariant
from boardkit.model import GroupDefinition, NoteDefinition, TimeseriesDefinition

BOARD_JSON = b"""
{
  "id": 1,
  "definition": {
    "type": "group",
    "layout_type": "ordered",
    "title": "Service health",
    "widgets": [
      {"definition": {"type": "note", "content": "Owned by the web team", "show_tick": false}},
      {
        "definition": {
          "type": "timeseries",
          "requests": [{"q": "avg:system.load.1{service:web}", "display_type": "line"}],
          "yaxis": {"min": "0", "include_zero": true}
        },
        "layout": {"x": 0, "y": 0, "width": 4, "height": 2}
      },
      {"definition": {"type": "alert_value", "alert_id": "42", "precision": 0}}
    ]
  }
}
"""


def main() -> None:
    print(f"boardkit version: {boardkit.__version__}")

    # Step 1: Peek at the discriminator without decoding anything else
    print(f"Top-level type: {boardkit.peek_discriminator(BOARD_JSON)}")

    # Step 2: Decode into typed definitions
    board = boardkit.decode_envelope(BOARD_JSON)
    for depth, widget in board.walk():
        print(f"{'  ' * depth}- {widget.widget_type} (id={widget.id})")

    group = board.definition
    assert isinstance(group, GroupDefinition)
    note, series, value = group.widgets
    if isinstance(note.definition, NoteDefinition):
        print(f"Note says: {note.definition.content!r}")
    if isinstance(series.definition, TimeseriesDefinition):
        request = series.definition.requests[0]
        print(f"Timeseries query kinds: {request.query_kinds}")
    print(f"Alert precision kept as: {value.definition.precision}")

    # Step 3: Encode; absent fields stay absent, zeros are kept
    print(boardkit.encode(board).decode("utf-8"))

    # Step 4: Unknown widget types are rejected with a path
    try:
        boardkit.decode_envelope(b'{"definition": {"type": "heatmap"}}')
    except UnsupportedVariant as exc:
        print(f"Rejected: {exc}")


if __name__ == "__main__":
    main()
