"""Widget codec module.

Exports the decode/encode entry points, the shape registry and the
error taxonomy.
"""
from __future__ import annotations

from boardkit.codec.decoder import (
    EnvelopeDecoder,
    decode_envelope,
    decode_widgets,
    peek_discriminator,
)
from boardkit.codec.encoder import (
    EnvelopeEncoder,
    encode,
    encode_dict,
    encode_json,
    encode_widgets,
)
from boardkit.codec.errors import (
    DecodeError,
    DepthExceeded,
    MalformedEnvelope,
    MissingDiscriminator,
    UnsupportedVariant,
    WidgetCodecError,
)
from boardkit.codec.registry import (
    DEFAULT_REGISTRY,
    RegistryFrozenError,
    ShapeAlreadyRegisteredError,
    ShapeRegistry,
    widget_type,
)
from boardkit.codec.serializer import WidgetSerializer
from boardkit.codec.shapes import BUILTIN_SHAPES, VariantShape

__all__ = [
    # Entry points
    "decode_envelope",
    "decode_widgets",
    "peek_discriminator",
    "encode",
    "encode_dict",
    "encode_json",
    "encode_widgets",
    "EnvelopeDecoder",
    "EnvelopeEncoder",
    "WidgetSerializer",
    # Registry
    "DEFAULT_REGISTRY",
    "ShapeRegistry",
    "VariantShape",
    "BUILTIN_SHAPES",
    "widget_type",
    "RegistryFrozenError",
    "ShapeAlreadyRegisteredError",
    # Errors
    "WidgetCodecError",
    "MalformedEnvelope",
    "MissingDiscriminator",
    "UnsupportedVariant",
    "DecodeError",
    "DepthExceeded",
]
