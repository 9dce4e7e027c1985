"""Widget serialization to and from JSON and YAML.

``WidgetSerializer`` bundles an ``EnvelopeDecoder`` and an
``EnvelopeEncoder`` configured from one ``CodecConfig``.  The dict form
produced by ``to_dict`` is the wire shape, so it maps directly to both
text formats.

Usage
-----
::

    from boardkit.codec.serializer import WidgetSerializer

    serializer = WidgetSerializer()
    widget = serializer.from_json('{"definition": {"type": "note", "content": "hi"}}')
    yaml_text = serializer.to_yaml(widget)
    assert serializer.from_yaml(yaml_text) == widget
"""
from __future__ import annotations

from typing import Any

import yaml

from boardkit.codec.decoder import EnvelopeDecoder, RawInput
from boardkit.codec.encoder import EnvelopeEncoder
from boardkit.codec.errors import MalformedEnvelope
from boardkit.codec.registry import ShapeRegistry
from boardkit.config import CodecConfig
from boardkit.model.nodes import Widget


class WidgetSerializer:
    """Converts between ``Widget`` objects and dicts, JSON and YAML text.

    Parameters
    ----------
    config:
        Codec settings.  Defaults to ``CodecConfig()``.
    registry:
        Optional custom shape registry shared by decoder and encoder.
    """

    def __init__(
        self,
        config: CodecConfig | None = None,
        registry: ShapeRegistry | None = None,
    ) -> None:
        self._config = config if config is not None else CodecConfig()
        self._decoder = EnvelopeDecoder(registry=registry, max_depth=self._config.max_depth)
        self._encoder = EnvelopeEncoder(
            registry=registry,
            indent=self._config.indent,
            sort_keys=self._config.sort_keys,
        )

    @property
    def config(self) -> CodecConfig:
        return self._config

    # ------------------------------------------------------------------
    # Dict form
    # ------------------------------------------------------------------

    def to_dict(self, widget: Widget) -> dict[str, object]:
        return self._encoder.to_dict(widget)

    def from_dict(self, data: dict[str, Any]) -> Widget:
        return self._decoder.decode_tree(data)

    def widgets_from_list(self, items: list[Any]) -> list[Widget]:
        """Decode an already-parsed list of envelopes."""
        return self._decoder.decode_many_tree(items)

    # ------------------------------------------------------------------
    # JSON helpers
    # ------------------------------------------------------------------

    def to_json(self, widget: Widget) -> str:
        return self._encoder.to_json(widget)

    def from_json(self, text: RawInput) -> Widget:
        return self._decoder.decode(text)

    def widgets_to_json(self, widgets: list[Widget]) -> str:
        return self._encoder.many_to_json(widgets)

    def widgets_from_json(self, text: str | bytes) -> list[Widget]:
        return self._decoder.decode_many(text)

    # ------------------------------------------------------------------
    # YAML helpers
    # ------------------------------------------------------------------

    def to_yaml(self, widget: Widget) -> str:
        """Serialize a widget to YAML, keeping the wire key order."""
        return self._dump_yaml(self.to_dict(widget))

    def widgets_to_yaml(self, widgets: list[Widget]) -> str:
        return self._dump_yaml([self.to_dict(w) for w in widgets])

    def from_yaml(self, text: str) -> Widget:
        """Deserialize a widget from YAML text."""
        return self._decoder.decode_tree(self.load_yaml(text))

    def widgets_from_yaml(self, text: str) -> list[Widget]:
        return self._decoder.decode_many_tree(self.load_yaml(text))

    def _dump_yaml(self, data: object) -> str:
        return yaml.safe_dump(
            data,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=self._config.sort_keys,
        )

    @staticmethod
    def load_yaml(text: str) -> Any:
        """Parse YAML text into a plain tree, raising ``MalformedEnvelope`` on syntax errors."""
        try:
            return yaml.safe_load(text)
        except RecursionError as exc:
            raise MalformedEnvelope("Input is nested too deeply to parse") from exc
        except yaml.YAMLError as exc:
            raise MalformedEnvelope(f"Input is not valid YAML: {exc}") from exc
