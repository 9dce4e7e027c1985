"""Envelope decoding: discriminator peek followed by typed dispatch.

The envelope's ``definition`` slot cannot be typed until its ``type``
field is known.  Decoding therefore runs in two phases per envelope:

1. ``peek_discriminator`` reads only ``definition.type``.
2. The registry resolves that value to a ``VariantShape`` which builds
   the typed definition from the same already-parsed JSON tree.

Groups hand each nested element back to the decoder, so every nested
widget is dispatched independently.  Decoding is all-or-nothing: the
first error anywhere in the tree propagates unchanged, with a JSON path
that pinpoints the failing element (``$.definition.widgets[1]...``).
"""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from boardkit.codec.errors import (
    DepthExceeded,
    MalformedEnvelope,
    MissingDiscriminator,
    UnsupportedVariant,
)
from boardkit.codec.fields import child_path, item_path, opt_float, opt_int, opt_object
from boardkit.codec.registry import DEFAULT_REGISTRY, ShapeRegistry
from boardkit.config import DEFAULT_MAX_DEPTH
from boardkit.model.nodes import Widget, WidgetLayout

logger = logging.getLogger(__name__)

RawInput = bytes | bytearray | str | Mapping[str, Any]


def _reject_constant(name: str) -> Any:
    raise MalformedEnvelope(f"Input is not valid JSON: non-finite number {name}")


def load_json(data: bytes | bytearray | str) -> Any:
    """Parse strict JSON text, raising ``MalformedEnvelope`` on any syntax error.

    ``NaN`` and ``Infinity`` are rejected, as is nesting too deep for the
    parser to follow.
    """
    try:
        return json.loads(data, parse_constant=_reject_constant)
    except RecursionError as exc:
        raise MalformedEnvelope("Input is nested too deeply to parse") from exc
    except UnicodeDecodeError as exc:
        raise MalformedEnvelope(f"Input is not valid UTF-8: {exc.reason}") from exc
    except json.JSONDecodeError as exc:
        raise MalformedEnvelope(f"Input is not valid JSON: {exc.msg}") from exc


def _as_tree(data: RawInput) -> Any:
    if isinstance(data, (bytes, bytearray, str)):
        return load_json(data)
    return data


def _definition_of(envelope: object, path: str) -> Mapping[str, Any]:
    if not isinstance(envelope, Mapping):
        raise MalformedEnvelope("Widget envelope must be a JSON object", path)
    definition = envelope.get("definition")
    if not isinstance(definition, Mapping):
        raise MalformedEnvelope(
            "Widget envelope has no 'definition' object", child_path(path, "definition")
        )
    return definition


def peek_discriminator(data: RawInput, path: str = "$") -> str:
    """Return ``definition.type`` without building the widget.

    Parameters
    ----------
    data:
        JSON text (``bytes`` or ``str``) or an already-parsed envelope.
    path:
        JSON path of ``data`` within a larger document.

    Raises
    ------
    MalformedEnvelope
        If ``data`` is not JSON, not an object, or lacks a ``definition``
        object.
    MissingDiscriminator
        If ``definition.type`` is absent or not a string.
    """
    return _discriminator_of(_as_tree(data), path)


def _discriminator_of(envelope: object, path: str) -> str:
    definition = _definition_of(envelope, path)
    discriminator = definition.get("type")
    if not isinstance(discriminator, str):
        raise MissingDiscriminator(
            "Widget definition has no string 'type'",
            child_path(child_path(path, "definition"), "type"),
        )
    return discriminator


def _layout_from_dict(d: Mapping[str, Any], path: str) -> WidgetLayout:
    return WidgetLayout(
        x=opt_float(d, "x", path),
        y=opt_float(d, "y", path),
        width=opt_float(d, "width", path),
        height=opt_float(d, "height", path),
    )


class EnvelopeDecoder:
    """Decodes widget envelopes against a shape registry.

    Parameters
    ----------
    registry:
        Shapes to dispatch to.  Defaults to the built-in widget registry.
    max_depth:
        Maximum group nesting.  A widget nested deeper raises
        ``DepthExceeded``.
    """

    def __init__(
        self,
        registry: ShapeRegistry | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self._registry = registry if registry is not None else DEFAULT_REGISTRY
        self._max_depth = max_depth

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def decode(self, data: RawInput) -> Widget:
        """Decode one widget envelope from JSON text or a parsed mapping."""
        return self.decode_tree(_as_tree(data))

    def decode_tree(self, tree: object) -> Widget:
        """Decode one envelope from an already-parsed tree.

        Strings are never re-parsed here; a root that is not an object
        raises ``MalformedEnvelope``.
        """
        return self._decode_widget(tree, "$", 0)

    def decode_many(self, data: bytes | bytearray | str | list[Any]) -> list[Widget]:
        """Decode a JSON array of widget envelopes, preserving order."""
        tree = load_json(data) if isinstance(data, (bytes, bytearray, str)) else data
        return self.decode_many_tree(tree)

    def decode_many_tree(self, tree: object) -> list[Widget]:
        """Decode an already-parsed array of envelopes."""
        if not isinstance(tree, list):
            raise MalformedEnvelope("Expected a JSON array of widgets")
        return [self._decode_widget(item, item_path("$", i), 0) for i, item in enumerate(tree)]

    def _decode_widget(self, envelope: object, path: str, depth: int) -> Widget:
        if depth > self._max_depth:
            raise DepthExceeded(self._max_depth, path)

        discriminator = _discriminator_of(envelope, path)
        definition_path = child_path(path, "definition")
        if discriminator not in self._registry:
            raise UnsupportedVariant(discriminator, child_path(definition_path, "type"))
        shape = self._registry.resolve(discriminator)

        def decode_child(child: object, where: str) -> Widget:
            return self._decode_widget(child, where, depth + 1)

        logger.debug("Decoding %s widget at %s", discriminator, path)
        definition = shape.decode(envelope["definition"], definition_path, decode_child)

        return Widget(
            definition=definition,
            id=opt_int(envelope, "id", path),
            layout=opt_object(envelope, "layout", path, _layout_from_dict),
        )


def decode_envelope(data: RawInput, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Widget:
    """Decode one widget envelope with the built-in registry.

    Parameters
    ----------
    data:
        JSON text (``bytes`` or ``str``) or an already-parsed mapping.
    max_depth:
        Maximum group nesting accepted.

    Returns
    -------
    Widget
        The decoded widget with its typed definition.

    Raises
    ------
    MalformedEnvelope, MissingDiscriminator, UnsupportedVariant, DecodeError, DepthExceeded
        On the first problem found anywhere in the widget tree.
    """
    return EnvelopeDecoder(max_depth=max_depth).decode(data)


def decode_widgets(
    data: bytes | bytearray | str | list[Any], *, max_depth: int = DEFAULT_MAX_DEPTH
) -> list[Widget]:
    """Decode a JSON array of widget envelopes with the built-in registry."""
    return EnvelopeDecoder(max_depth=max_depth).decode_many(data)
