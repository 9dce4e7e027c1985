"""Shape registry: maps widget discriminators to variant shapes.

The registry is populated once and then frozen.  The module-level
``DEFAULT_REGISTRY`` holds the eight built-in shapes and is frozen at
import time, so it can be shared by any number of concurrent callers
without locking.

Example
-------
Build a custom registry for a subset of widget types::

    from boardkit.codec.registry import ShapeRegistry
    from boardkit.codec.shapes import NoteShape, GroupShape

    registry = ShapeRegistry("notes-only")
    registry.register_shape(NoteShape())
    registry.register_shape(GroupShape())
    registry.freeze()

Or register with the decorator::

    @registry.register("note")
    class MyNoteShape(NoteShape):
        ...
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from boardkit.codec.errors import UnsupportedVariant
from boardkit.codec.shapes import BUILTIN_SHAPES, VariantShape

logger = logging.getLogger(__name__)


class ShapeAlreadyRegisteredError(ValueError):
    """Raised when attempting to register a discriminator that already exists."""

    def __init__(self, name: str, registry_name: str) -> None:
        self.shape_name = name
        self.registry_name = registry_name
        super().__init__(
            f"Widget type {name!r} is already registered in the {registry_name!r} registry."
        )


class RegistryFrozenError(RuntimeError):
    """Raised when registering into a registry after ``freeze()``."""

    def __init__(self, registry_name: str) -> None:
        self.registry_name = registry_name
        super().__init__(
            f"Registry {registry_name!r} is frozen; shapes can only be added "
            "before it is first used."
        )


class ShapeRegistry:
    """Discriminator -> ``VariantShape`` mapping.

    Parameters
    ----------
    name:
        A human-readable name for this registry (used in error messages).
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._shapes: dict[str, VariantShape] = {}
        self._by_class: dict[type, VariantShape] = {}
        self._frozen = False

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, name: str) -> Callable[[type[VariantShape]], type[VariantShape]]:
        """Return a class decorator that registers an instance of the decorated shape.

        Parameters
        ----------
        name:
            The discriminator.  Must equal the shape's
            ``definition_class.widget_type``.

        Raises
        ------
        ShapeAlreadyRegisteredError
            If ``name`` is already in use in this registry.
        RegistryFrozenError
            If the registry has been frozen.
        TypeError
            If the decorated class does not subclass ``VariantShape``.
        ValueError
            If ``name`` disagrees with the shape's own discriminator.
        """

        def decorator(cls: type[VariantShape]) -> type[VariantShape]:
            if not (isinstance(cls, type) and issubclass(cls, VariantShape)):
                raise TypeError(
                    f"Cannot register {cls!r} under {name!r}: "
                    "it must be a subclass of VariantShape."
                )
            shape = cls()
            if shape.name != name:
                raise ValueError(
                    f"Cannot register {cls.__qualname__} under {name!r}: "
                    f"its definition declares widget type {shape.name!r}."
                )
            self.register_shape(shape)
            return cls

        return decorator

    def register_shape(self, shape: VariantShape) -> None:
        """Register a shape instance under its own discriminator.

        Raises
        ------
        ShapeAlreadyRegisteredError
            If the discriminator is already registered.
        RegistryFrozenError
            If the registry has been frozen.
        """
        if self._frozen:
            raise RegistryFrozenError(self._name)
        if shape.name in self._shapes:
            raise ShapeAlreadyRegisteredError(shape.name, self._name)
        self._shapes[shape.name] = shape
        self._by_class[shape.definition_class] = shape
        logger.debug(
            "Registered shape %r -> %s in registry %r",
            shape.name,
            type(shape).__qualname__,
            self._name,
        )

    def freeze(self) -> None:
        """Reject all further registrations."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def name(self) -> str:
        return self._name

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def resolve(self, discriminator: str) -> VariantShape:
        """Return the shape registered for ``discriminator``.

        Raises
        ------
        UnsupportedVariant
            If no shape is registered under ``discriminator``.
        """
        try:
            return self._shapes[discriminator]
        except KeyError:
            raise UnsupportedVariant(discriminator) from None

    def shape_for(self, definition: object) -> VariantShape:
        """Return the shape that encodes ``definition``.

        Lookup is by exact class.  Raises ``UnsupportedVariant`` for an
        object that is not one of the registered definition types.
        """
        try:
            return self._by_class[type(definition)]
        except KeyError:
            raise UnsupportedVariant(type(definition).__name__, "$.definition") from None

    def list_shapes(self) -> list[str]:
        """Return all registered discriminators in alphabetical order."""
        return sorted(self._shapes)

    def __contains__(self, name: object) -> bool:
        return name in self._shapes

    def __len__(self) -> int:
        return len(self._shapes)

    def __iter__(self) -> Iterator[VariantShape]:
        for name in self.list_shapes():
            yield self._shapes[name]

    def __repr__(self) -> str:
        return (
            f"ShapeRegistry(name={self._name!r}, "
            f"frozen={self._frozen}, shapes={self.list_shapes()})"
        )


def _build_default_registry() -> ShapeRegistry:
    registry = ShapeRegistry("widgets")
    for shape_cls in BUILTIN_SHAPES:
        registry.register_shape(shape_cls())
    registry.freeze()
    return registry


DEFAULT_REGISTRY: ShapeRegistry = _build_default_registry()


def widget_type(definition: object) -> str:
    """Return the discriminator for an in-memory widget definition.

    Raises
    ------
    UnsupportedVariant
        If ``definition`` is not one of the built-in definition types.
    """
    return DEFAULT_REGISTRY.shape_for(definition).name
