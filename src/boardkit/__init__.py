"""boardkit: typed codec for polymorphic dashboard widgets.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import boardkit

    # Decode a widget envelope; the definition type is picked from
    # definition.type
    widget = boardkit.decode_envelope(b'{"definition": {"type": "note", "content": "hi"}}')
    widget.definition.content
    'hi'

    # Encode it back; absent fields stay absent
    boardkit.encode(widget)
    b'{"definition": {"type": "note", "content": "hi"}}'

    # Discriminator of an in-memory definition
    boardkit.widget_type(widget.definition)
    'note'

    boardkit.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from boardkit.model.nodes import Widget


def decode_envelope(data: Any, max_depth: int | None = None) -> "Widget":
    """Decode one widget envelope into a ``Widget``.

    Parameters
    ----------
    data:
        JSON text as ``bytes`` or ``str``, or an already-parsed mapping.
    max_depth:
        Maximum group nesting; defaults to the codec default.

    Returns
    -------
    Widget
        The decoded widget.

    Raises
    ------
    boardkit.codec.WidgetCodecError
        Any subclass, on the first problem found in the widget tree.
    """
    from boardkit.codec.decoder import EnvelopeDecoder
    from boardkit.config import DEFAULT_MAX_DEPTH

    depth = DEFAULT_MAX_DEPTH if max_depth is None else max_depth
    return EnvelopeDecoder(max_depth=depth).decode(data)


def encode(widget: "Widget") -> bytes:
    """Encode a ``Widget`` to compact UTF-8 JSON bytes."""
    from boardkit.codec.encoder import encode as _encode

    return _encode(widget)


def peek_discriminator(data: Any) -> str:
    """Return the ``definition.type`` of an envelope without decoding it."""
    from boardkit.codec.decoder import peek_discriminator as _peek

    return _peek(data)


def widget_type(definition: object) -> str:
    """Return the discriminator for an in-memory widget definition."""
    from boardkit.codec.registry import widget_type as _widget_type

    return _widget_type(definition)


__all__ = [
    "__version__",
    "decode_envelope",
    "encode",
    "peek_discriminator",
    "widget_type",
]
