"""Decorator-based registry for input sources.

Concrete sources register themselves at import time via
``@register_source("console")``.  The engine resolves the configured key to a
class via ``get_source("console")`` and never imports a concrete source.
"""

from __future__ import annotations

_source_registry: dict[str, type] = {}


def register_source(name: str):
    """Class decorator that registers an input source under *name*."""

    def decorator(cls: type) -> type:
        if name in _source_registry:
            raise ValueError(
                f"Duplicate source registration: {name!r} is already "
                f"registered to {_source_registry[name].__name__}"
            )
        _source_registry[name] = cls
        return cls

    return decorator


def get_source(name: str) -> type:
    """Return the source class registered under *name*."""
    try:
        return _source_registry[name]
    except KeyError:
        available = ", ".join(sorted(_source_registry)) or "(none)"
        raise KeyError(
            f"Unknown source {name!r}. Available: {available}"
        ) from None


def list_registered() -> dict[str, str]:
    """Return ``{key: class name}`` for every registered source, sorted."""
    return {k: v.__name__ for k, v in sorted(_source_registry.items())}
