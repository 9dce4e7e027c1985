"""Envelope encoding.

Encoding is driven by the already-typed definition: the registry finds
the shape for the definition's class and the shape dumps it.  Fields
that are ``None`` are omitted; everything else, including zero and
empty values, is written.  Groups encode their nested widgets in order.
"""
from __future__ import annotations

import json
from collections.abc import Iterable

from boardkit.codec.errors import UnsupportedVariant
from boardkit.codec.fields import put_object
from boardkit.codec.registry import DEFAULT_REGISTRY, ShapeRegistry
from boardkit.model.nodes import Widget, WidgetLayout


def _layout_to_dict(layout: WidgetLayout) -> dict[str, object]:
    out: dict[str, object] = {}
    for key in ("x", "y", "width", "height"):
        value = getattr(layout, key)
        if value is not None:
            out[key] = value
    return out


class EnvelopeEncoder:
    """Encodes widgets to JSON-compatible dicts, text and bytes.

    Parameters
    ----------
    registry:
        Shapes used to dump definitions.  Defaults to the built-in registry.
    indent:
        Indentation for text output; ``None`` gives compact JSON.
    sort_keys:
        Whether text output sorts object keys.
    """

    def __init__(
        self,
        registry: ShapeRegistry | None = None,
        indent: int | None = None,
        sort_keys: bool = False,
    ) -> None:
        self._registry = registry if registry is not None else DEFAULT_REGISTRY
        self._indent = indent
        self._sort_keys = sort_keys

    def to_dict(self, widget: Widget) -> dict[str, object]:
        """Encode ``widget`` to a plain dict.

        Raises
        ------
        TypeError
            If the widget holds a definition outside the registry.  This
            is a programming error, never a property of decoded input.
        """
        try:
            shape = self._registry.shape_for(widget.definition)
        except UnsupportedVariant:
            raise TypeError(
                f"Cannot encode widget definition of type {type(widget.definition).__name__}"
            ) from None
        out: dict[str, object] = {"definition": shape.encode(widget.definition, self.to_dict)}
        if widget.id is not None:
            out["id"] = widget.id
        put_object(out, "layout", widget.layout, _layout_to_dict)
        return out

    def to_json(self, widget: Widget) -> str:
        """Encode to JSON text.  Non-finite floats raise ``ValueError``."""
        return json.dumps(
            self.to_dict(widget),
            indent=self._indent,
            sort_keys=self._sort_keys,
            ensure_ascii=False,
            allow_nan=False,
        )

    def to_bytes(self, widget: Widget) -> bytes:
        return self.to_json(widget).encode("utf-8")

    def many_to_json(self, widgets: Iterable[Widget]) -> str:
        return json.dumps(
            [self.to_dict(w) for w in widgets],
            indent=self._indent,
            sort_keys=self._sort_keys,
            ensure_ascii=False,
            allow_nan=False,
        )


def encode(widget: Widget) -> bytes:
    """Encode one widget to compact UTF-8 JSON bytes."""
    return EnvelopeEncoder().to_bytes(widget)


def encode_dict(widget: Widget) -> dict[str, object]:
    """Encode one widget to a JSON-compatible dict."""
    return EnvelopeEncoder().to_dict(widget)


def encode_json(widget: Widget, indent: int | None = None) -> str:
    """Encode one widget to JSON text, optionally indented."""
    return EnvelopeEncoder(indent=indent).to_json(widget)


def encode_widgets(widgets: Iterable[Widget]) -> bytes:
    """Encode a sequence of widgets to a compact JSON array."""
    return EnvelopeEncoder().many_to_json(widgets).encode("utf-8")
