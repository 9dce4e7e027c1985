"""Error types for the widget codec.

Every error records the JSON path at which it was raised (``$`` is the
document root) so that failures inside deeply nested groups point at
the offending element, e.g. ``$.definition.widgets[1].definition.content``.
"""
from __future__ import annotations

import re
from typing import Final

_WIDGET_INDEX: Final[re.Pattern[str]] = re.compile(r"\.widgets\[(\d+)\]")


class WidgetCodecError(Exception):
    """Base class for all decode failures.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    path:
        JSON path of the offending value.
    """

    def __init__(self, message: str, path: str = "$") -> None:
        super().__init__(f"{message} (at {path})")
        self.codec_message = message
        self.path = path

    @property
    def widget_indices(self) -> tuple[int, ...]:
        """Positions of the failing widget within each enclosing group, outermost first."""
        return tuple(int(m) for m in _WIDGET_INDEX.findall(self.path))


class MalformedEnvelope(WidgetCodecError):
    """The input is not JSON, not an object, or has no ``definition`` object."""


class MissingDiscriminator(WidgetCodecError):
    """``definition.type`` is absent or is not a string."""


class UnsupportedVariant(WidgetCodecError):
    """The discriminator does not name a registered widget shape."""

    def __init__(self, value: str, path: str = "$.definition.type") -> None:
        super().__init__(f"Unsupported widget type {value!r}", path)
        self.value = value


class DecodeError(WidgetCodecError):
    """A field has the wrong JSON type for its shape, or a required field is missing."""


class DepthExceeded(WidgetCodecError):
    """Groups are nested deeper than the configured limit."""

    def __init__(self, limit: int, path: str = "$") -> None:
        super().__init__(f"Widget nesting exceeds maximum depth of {limit}", path)
        self.limit = limit
